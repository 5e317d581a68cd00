import datetime

import data_to_pdf.template


NOW = datetime.datetime(2024, 5, 17, 9, 30, 15)


#============================================
def test_title_date_and_data_path() -> None:
	"""
	Title, date and dotted data paths are substituted.
	"""
	template = "{{title}} - {{date}} {{data.name}}"
	markup = data_to_pdf.template.interpolate_template(template, {"name": "Bob"}, "Report", NOW)
	assert markup == "Report - 17.05.2024 Bob"
	assert "{{" not in markup


#============================================
def test_datetime_and_bare_fields() -> None:
	"""
	Bare top level fields and the datetime placeholder resolve.
	"""
	template = "<p>{{ datetime }}</p><p>{{name}}</p><p>{{missing}}</p>"
	markup = data_to_pdf.template.interpolate_template(template, {"name": "Bob"}, "T", NOW)
	assert markup == "<p>17.05.2024, 09:30:15</p><p>Bob</p><p></p>"


#============================================
def test_nested_paths_and_indices() -> None:
	"""
	Paths walk into objects and list indices, missing paths become empty.
	"""
	data = {"user": {"address": {"city": "Bonn"}}, "items": [{"name": "first"}, {"name": "second"}]}
	template = "{{data.user.address.city}}|{{data.items.1.name}}|{{data.items.5.name}}|{{data.user.nope}}"
	markup = data_to_pdf.template.interpolate_template(template, data, "T", NOW)
	assert markup == "Bonn|second||"


#============================================
def test_values_are_escaped() -> None:
	"""
	Inserted values are escaped, containers become JSON text.
	"""
	data = {"name": "<b>Bob & Co</b>", "tags": ["a", "b"]}
	markup = data_to_pdf.template.interpolate_template("{{name}} {{tags}}", data, "T", NOW)
	assert markup == "&lt;b&gt;Bob &amp; Co&lt;/b&gt; [&quot;a&quot;, &quot;b&quot;]"


#============================================
def test_reserved_names_win_over_fields() -> None:
	"""
	A data field named like a reserved placeholder does not shadow it.
	"""
	markup = data_to_pdf.template.interpolate_template("{{title}}", {"title": "field"}, "Report", NOW)
	assert markup == "Report"
	markup = data_to_pdf.template.interpolate_template("{{data.title}}", {"title": "field"}, "Report", NOW)
	assert markup == "field"


#============================================
def test_single_pass_substitution() -> None:
	"""
	Values that look like placeholders are not substituted again.
	"""
	data = {"a": "{{b}}", "b": "secret"}
	markup = data_to_pdf.template.interpolate_template("{{a}}", data, "T", NOW)
	assert markup == "{{b}}"


#============================================
def test_table_and_content_placeholders() -> None:
	"""
	Table renders the first array, content renders the whole tree.
	"""
	data = {"meta": {"count": 2}, "rows": [{"id": 1, "name": "x"}, {"id": 2, "extra": "y"}]}
	markup = data_to_pdf.template.interpolate_template("{{table}}", data, "T", NOW)
	assert markup.startswith("<table><thead><tr><th>Id</th><th>Name</th><th>Extra</th></tr></thead>")
	assert "<td>y</td>" in markup
	markup = data_to_pdf.template.interpolate_template("{{content}}", data, "T", NOW)
	assert "<th>Meta</th>" in markup
	assert "<th>Rows</th>" in markup


#============================================
def test_json_placeholder() -> None:
	"""
	The json placeholder pretty prints the data, escaped.
	"""
	markup = data_to_pdf.template.interpolate_template("{{json}}", {"a": "<x>"}, "T", NOW)
	assert markup == '{\n  &quot;a&quot;: &quot;&lt;x&gt;&quot;\n}'
