"""
Include/exclude filtering of field names.
"""

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config


RenderOptions = dtp.config.RenderOptions

MAX_DATA_DEPTH = dtp.config.MAX_DATA_DEPTH
DEPTH_LIMIT_TEXT = dtp.config.DEPTH_LIMIT_TEXT


#============================================
def parse_field_list(value) -> set[str]:
	"""
	Parse a comma separated field list into lowercased names.

	Args:
		value: String like "id, Name" or an iterable of names.

	Returns:
		Set of lowercased field names.
	"""
	if not value:
		return set()
	if isinstance(value, str):
		parts = value.split(",")
	else:
		parts = [str(part) for part in value]
	return {part.strip().lower() for part in parts if part.strip()}


#============================================
def should_include_field(key: str, options: RenderOptions) -> bool:
	"""
	Decide whether a field is kept.

	A non-empty include list acts as an allowlist and overrides the
	exclude list.

	Args:
		key: Field name.
		options: Render options.

	Returns:
		True if the field is kept.
	"""
	name = str(key).lower()
	if options.include_fields:
		return name in options.include_fields
	return name not in options.exclude_fields


#============================================
def filter_fields(data, options: RenderOptions, depth: int = 0):
	"""
	Return a filtered copy of a data tree.

	Containers nested deeper than MAX_DATA_DEPTH are replaced by
	DEPTH_LIMIT_TEXT.

	Args:
		data: Parsed JSON value.
		options: Render options.
		depth: Current nesting depth.

	Returns:
		New tree with rejected mapping keys removed at every level.
	"""
	if isinstance(data, (dict, list)) and depth >= MAX_DATA_DEPTH:
		return DEPTH_LIMIT_TEXT
	if isinstance(data, dict):
		return {
			key: filter_fields(value, options, depth + 1)
			for key, value in data.items()
			if should_include_field(key, options)
		}
	if isinstance(data, list):
		return [filter_fields(value, options, depth + 1) for value in data]
	return data
