import data_to_pdf.markup
import data_to_pdf.sniffer


#============================================
def test_sniff_markup() -> None:
	"""
	Angle bracket wrapped input is markup, surrounding whitespace ignored.
	"""
	sniff = data_to_pdf.sniffer.sniff_content("  <table><tr><td>1</td></tr></table>\n")
	assert sniff.kind == data_to_pdf.sniffer.KIND_MARKUP
	assert sniff.text == "<table><tr><td>1</td></tr></table>"


#============================================
def test_sniff_structured() -> None:
	"""
	Parsable JSON objects and arrays are structured input.
	"""
	sniff = data_to_pdf.sniffer.sniff_content('{"name": "Alice"}')
	assert sniff.kind == data_to_pdf.sniffer.KIND_STRUCTURED
	assert sniff.data == {"name": "Alice"}
	sniff = data_to_pdf.sniffer.sniff_content("[1, 2]")
	assert sniff.kind == data_to_pdf.sniffer.KIND_STRUCTURED
	assert sniff.data == [1, 2]


#============================================
def test_sniff_text() -> None:
	"""
	Broken JSON and everything else is plain text.
	"""
	sniff = data_to_pdf.sniffer.sniff_content("{not json")
	assert sniff.kind == data_to_pdf.sniffer.KIND_TEXT
	assert sniff.text == "{not json"
	assert data_to_pdf.sniffer.sniff_content("hello").kind == data_to_pdf.sniffer.KIND_TEXT
	assert data_to_pdf.sniffer.sniff_content("42").kind == data_to_pdf.sniffer.KIND_TEXT
	assert data_to_pdf.sniffer.sniff_content(None).kind == data_to_pdf.sniffer.KIND_TEXT
	assert data_to_pdf.sniffer.sniff_content("<b>open").kind == data_to_pdf.sniffer.KIND_TEXT
	# nesting beyond the parser limit is text, not an error
	assert data_to_pdf.sniffer.sniff_content("[" * 100000 + "]" * 100000).kind == data_to_pdf.sniffer.KIND_TEXT


#============================================
def test_strip_tags() -> None:
	"""
	Tags are removed, blocks become lines, entities are decoded.
	"""
	markup = (
		"<html><head><style>p{color:red}</style><script>var x = 1;</script></head>"
		"<body><h1>Title</h1><p>One &amp; <b>two</b></p><table><tr><td>a</td><td>b</td></tr></table>"
		"line<br>break</body></html>"
	)
	text = data_to_pdf.markup.strip_tags(markup)
	lines = [line for line in text.split("\n") if line]
	assert lines == ["Title", "One & two", "a b", "line", "break"]
	assert "color" not in text
	assert "var x" not in text


#============================================
def test_wrap_in_shell_fragment_and_document() -> None:
	"""
	Fragments get a full document, documents only receive the style sheet.
	"""
	shell = data_to_pdf.markup.wrap_in_shell("<p>x</p>", "A & B")
	assert shell.startswith("<!DOCTYPE html><html>")
	assert "<title>A &amp; B</title>" in shell
	assert "<body><p>x</p></body>" in shell
	document = "<html><head><title>t</title></head><body>y</body></html>"
	shell = data_to_pdf.markup.wrap_in_shell(document)
	assert shell.count("<html>") == 1
	assert "<style>" in shell
	assert shell.index("<style>") < shell.index("</head>")


#============================================
def test_data_to_html() -> None:
	"""
	Data trees render as nested tables and lists.
	"""
	markup = data_to_pdf.markup.data_to_html({"name": "A<B", "tags": ["x", "y"], "ok": True})
	assert "<th>Name</th><td>A&lt;B</td>" in markup
	assert "<ul><li>x</li><li>y</li></ul>" in markup
	assert "<td>Ja</td>" in markup
	assert data_to_pdf.markup.data_to_html("plain") == "<pre>plain</pre>"
