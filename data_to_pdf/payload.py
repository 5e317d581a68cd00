"""
Data tree normalization and shape classification.
"""

# Standard Library
import dataclasses

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config


GROUP_NAME_KEYS = dtp.config.GROUP_NAME_KEYS
GROUP_DATE_KEYS = dtp.config.GROUP_DATE_KEYS
MAX_DATA_DEPTH = dtp.config.MAX_DATA_DEPTH
DEPTH_LIMIT_TEXT = dtp.config.DEPTH_LIMIT_TEXT

SHAPE_SCALAR = "scalar"
SHAPE_SUMMARY = "summary"
SHAPE_REPORT = "report"
SHAPE_RECORDS = "records"
SHAPE_SCALARS = "scalars"
SHAPE_GROUPS = "groups"
SHAPE_EMPTY = "empty"


@dataclasses.dataclass
class DataNode:
	kind: str
	value: object = None
	items: list["DataNode"] = dataclasses.field(default_factory=list)
	fields: list[tuple[str, "DataNode"]] = dataclasses.field(default_factory=list)


#============================================
def build_node(value, depth: int = 0) -> DataNode:
	"""
	Normalize a JSON-like value into a tagged data node.

	Args:
		value: Parsed JSON value.
		depth: Current nesting depth; deeper containers become DEPTH_LIMIT_TEXT.

	Returns:
		DataNode of kind "scalar", "sequence" or "mapping".
	"""
	if isinstance(value, (dict, list, tuple)) and depth >= MAX_DATA_DEPTH:
		return DataNode(kind="scalar", value=DEPTH_LIMIT_TEXT)
	if isinstance(value, dict):
		fields = [(str(key), build_node(child, depth + 1)) for key, child in value.items()]
		return DataNode(kind="mapping", fields=fields)
	if isinstance(value, (list, tuple)):
		return DataNode(kind="sequence", items=[build_node(child, depth + 1) for child in value])
	if value is None or isinstance(value, (str, bool, int, float)):
		return DataNode(kind="scalar", value=value)
	return DataNode(kind="scalar", value=str(value))


#============================================
def to_plain(node: DataNode):
	"""
	Convert a data node back into plain Python values.

	Args:
		node: Data node.

	Returns:
		dict, list or scalar.
	"""
	if node.kind == "mapping":
		return {key: to_plain(child) for key, child in node.fields}
	if node.kind == "sequence":
		return [to_plain(child) for child in node.items]
	return node.value


#============================================
def get_field(node: DataNode, key: str) -> DataNode | None:
	"""
	Look up a field of a mapping node.

	Args:
		node: Data node.
		key: Field name.

	Returns:
		Child node or None.
	"""
	if node.kind != "mapping":
		return None
	for field_key, child in node.fields:
		if field_key == key:
			return child
	return None


#============================================
def find_first_field(node: DataNode, keys: tuple[str, ...]) -> DataNode | None:
	"""
	Return the first present field out of a list of candidate names.

	Args:
		node: Mapping node.
		keys: Candidate field names in priority order.

	Returns:
		Child node or None.
	"""
	for key in keys:
		child = get_field(node, key)
		if child is not None:
			return child
	return None


#============================================
def is_scalar_mapping(node: DataNode) -> bool:
	"""
	Check whether a mapping holds only scalar values.

	Args:
		node: Data node.

	Returns:
		True for a mapping without nested values.
	"""
	return node.kind == "mapping" and all(child.kind == "scalar" for _key, child in node.fields)


#============================================
def find_group_items(node: DataNode) -> DataNode | None:
	"""
	Find the dated sub-list of a group record.

	Args:
		node: Mapping node.

	Returns:
		Sequence node of dated records, or None.
	"""
	if node.kind != "mapping":
		return None
	for _key, child in node.fields:
		if child.kind != "sequence" or not child.items:
			continue
		first = child.items[0]
		if first.kind != "mapping":
			continue
		if find_first_field(first, GROUP_DATE_KEYS) is not None:
			return child
	return None


#============================================
def is_group_node(node: DataNode) -> bool:
	"""
	Check whether a node is a named group carrying dated sub-items.

	Args:
		node: Data node.

	Returns:
		True for a group record.
	"""
	if node.kind != "mapping":
		return False
	name = find_first_field(node, GROUP_NAME_KEYS)
	if name is None or name.kind != "scalar" or not isinstance(name.value, str):
		return False
	return find_group_items(node) is not None


#============================================
def classify_shape(node: DataNode) -> str:
	"""
	Classify a data tree for the layout engine.

	Args:
		node: Data node.

	Returns:
		One of the SHAPE_* names.
	"""
	if node.kind == "scalar":
		return SHAPE_SCALAR
	if node.kind == "mapping":
		if is_scalar_mapping(node):
			return SHAPE_SUMMARY
		return SHAPE_REPORT
	if not node.items:
		return SHAPE_EMPTY
	if any(item.kind == "mapping" for item in node.items):
		if all(is_group_node(item) for item in node.items):
			return SHAPE_GROUPS
		return SHAPE_RECORDS
	return SHAPE_SCALARS
