import data_to_pdf.columns
import data_to_pdf.config
import data_to_pdf.payload


#============================================
def _shape(value) -> str:
	"""
	Classify a plain value.
	"""
	return data_to_pdf.payload.classify_shape(data_to_pdf.payload.build_node(value))


#============================================
def test_build_node_round_trip_keeps_order() -> None:
	"""
	Normalized nodes convert back to the same values in the same order.
	"""
	value = {"b": 1, "a": [True, None, "x"], "c": {"d": 2.5}}
	node = data_to_pdf.payload.build_node(value)
	assert [key for key, _child in node.fields] == ["b", "a", "c"]
	assert data_to_pdf.payload.to_plain(node) == value


#============================================
def test_build_node_caps_depth() -> None:
	"""
	Containers below the depth limit collapse into a marker scalar.
	"""
	value = 1
	for _ in range(200):
		value = [value]
	node = data_to_pdf.payload.build_node(value)
	for _ in range(data_to_pdf.config.MAX_DATA_DEPTH):
		assert node.kind == "sequence"
		node = node.items[0]
	assert node.kind == "scalar"
	assert node.value == data_to_pdf.config.DEPTH_LIMIT_TEXT


#============================================
def test_classify_shapes() -> None:
	"""
	Every data shape maps to one layout.
	"""
	assert _shape("text") == data_to_pdf.payload.SHAPE_SCALAR
	assert _shape({"name": "Alice", "score": 42}) == data_to_pdf.payload.SHAPE_SUMMARY
	assert _shape({"name": "Alice", "tags": ["a"]}) == data_to_pdf.payload.SHAPE_REPORT
	assert _shape([{"id": 1}, {"id": 2}]) == data_to_pdf.payload.SHAPE_RECORDS
	assert _shape([1, 2, 3]) == data_to_pdf.payload.SHAPE_SCALARS
	assert _shape([]) == data_to_pdf.payload.SHAPE_EMPTY


#============================================
def test_classify_groups() -> None:
	"""
	Named records with dated sub-lists are groups.
	"""
	groups = [
		{"name": "repo-a", "commits": [{"sha": "abc1234567", "message": "init", "date": "2024-01-01"}]},
		{"name": "repo-b", "commits": [{"sha": "def7654321", "message": "fix", "date": "2024-01-02"}]},
	]
	assert _shape(groups) == data_to_pdf.payload.SHAPE_GROUPS
	mixed = groups + [{"name": "repo-c"}]
	assert _shape(mixed) == data_to_pdf.payload.SHAPE_RECORDS


#============================================
def test_derive_columns_first_row_skips_nested() -> None:
	"""
	First row columns only use scalar fields of the first row.
	"""
	rows = [
		data_to_pdf.payload.build_node({"id": 1, "tags": ["a"], "name": "x"}),
		data_to_pdf.payload.build_node({"id": 2, "extra": "y"}),
	]
	assert data_to_pdf.columns.derive_columns_from_first_row(rows) == ["id", "name"]


#============================================
def test_derive_columns_union_keeps_first_seen_order() -> None:
	"""
	Union columns collect every key across rows.
	"""
	rows = [
		data_to_pdf.payload.build_node({"id": 1, "tags": ["a"]}),
		data_to_pdf.payload.build_node({"extra": "y", "id": 2}),
		data_to_pdf.payload.build_node("scalar row"),
	]
	assert data_to_pdf.columns.derive_columns_union(rows) == ["id", "tags", "extra"]
	assert data_to_pdf.columns.derive_columns_union(rows, scalar_only=True) == ["id", "extra"]


#============================================
def test_build_even_columns() -> None:
	"""
	Evenly divided columns tile the content width.
	"""
	columns = data_to_pdf.columns.build_even_columns(["a", "b", "c"], 40.0, 300.0, 9.0)
	assert [column.x for column in columns] == [40.0, 140.0, 240.0]
	assert all(column.width == 100.0 for column in columns)
	assert all(column.max_chars == 18 for column in columns)
	assert data_to_pdf.columns.build_even_columns([], 40.0, 300.0) == []
