"""
Human readable labels and display strings for data values.
"""

# Standard Library
import datetime
import math
import re

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.payload
import data_to_pdf.sanitize


DataNode = dtp.payload.DataNode

BOOLEAN_TRUE_TEXT = dtp.config.BOOLEAN_TRUE_TEXT
BOOLEAN_FALSE_TEXT = dtp.config.BOOLEAN_FALSE_TEXT
PLACEHOLDER_TEXT = dtp.config.PLACEHOLDER_TEXT
ELLIPSIS = dtp.config.ELLIPSIS
CHAR_WIDTH_FACTOR = dtp.config.CHAR_WIDTH_FACTOR
MIN_COLUMN_CHARS = dtp.config.MIN_COLUMN_CHARS
DATE_FORMAT = dtp.config.DATE_FORMAT
DATETIME_FORMAT = dtp.config.DATETIME_FORMAT
MAX_FORMAT_DEPTH = dtp.config.MAX_FORMAT_DEPTH
DEPTH_LIMIT_TEXT = dtp.config.DEPTH_LIMIT_TEXT

CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
SEPARATOR_RUN = re.compile(r"[_\-\s.]+")
DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


#============================================
def format_label(key: str) -> str:
	"""
	Convert a property name to a human readable label.

	"createdAt" and "created_at" both become "Created At", "id" becomes
	"Id". Upper case runs such as "URL" are kept as written.

	Args:
		key: Property name.

	Returns:
		Display label.
	"""
	text = CAMEL_BOUNDARY.sub(r"\1 \2", str(key))
	words = [word for word in SEPARATOR_RUN.split(text) if word]
	if not words:
		return str(key)
	return " ".join(word[:1].upper() + word[1:] for word in words)


#============================================
def format_number(value: int | float) -> str:
	"""
	Format a number without a trailing ".0".

	Args:
		value: Integer or float.

	Returns:
		Display string.
	"""
	if isinstance(value, float):
		if math.isnan(value) or math.isinf(value):
			return PLACEHOLDER_TEXT
		if value.is_integer() and abs(value) < 1e15:
			return str(int(value))
		return repr(value)
	return str(value)


#============================================
def format_scalar(value) -> str:
	"""
	Format a scalar leaf value.

	Args:
		value: None, bool, number or string.

	Returns:
		Display string.
	"""
	if value is None:
		return PLACEHOLDER_TEXT
	if isinstance(value, bool):
		return BOOLEAN_TRUE_TEXT if value else BOOLEAN_FALSE_TEXT
	if isinstance(value, (int, float)):
		return format_number(value)
	text = str(value).strip()
	if not text:
		return PLACEHOLDER_TEXT
	return text


#============================================
def format_value(node: DataNode, depth: int = 0) -> str:
	"""
	Format any data node as a single display string.

	Sequences are joined with ", " (or "; " when they hold records),
	mappings become "Label: value" pairs, nested values are wrapped in
	parentheses.

	Args:
		node: Data node.
		depth: Current nesting depth.

	Returns:
		Display string.
	"""
	if node.kind == "scalar":
		return format_scalar(node.value)
	if depth >= MAX_FORMAT_DEPTH:
		return DEPTH_LIMIT_TEXT
	if node.kind == "sequence":
		if not node.items:
			return PLACEHOLDER_TEXT
		parts = [format_nested(item, depth + 1) for item in node.items]
		separator = "; " if any(item.kind == "mapping" for item in node.items) else ", "
		return separator.join(parts)
	if not node.fields:
		return PLACEHOLDER_TEXT
	parts = []
	for key, child in node.fields:
		parts.append(f"{format_label(key)}: {format_nested(child, depth + 1)}")
	return ", ".join(parts)


#============================================
def format_nested(node: DataNode, depth: int) -> str:
	"""
	Format a node that sits inside another sequence or mapping.

	Args:
		node: Data node.
		depth: Current nesting depth.

	Returns:
		Display string, parenthesized for containers.
	"""
	text = format_value(node, depth)
	if node.kind == "scalar" or text == PLACEHOLDER_TEXT:
		return text
	return f"({text})"


#============================================
def format_date(value) -> str:
	"""
	Format an ISO date string or epoch milliseconds for display.

	Args:
		value: Date value from the data.

	Returns:
		Formatted date, or the raw value as a string when it cannot be parsed.
	"""
	if value is None:
		return PLACEHOLDER_TEXT
	if isinstance(value, bool):
		return format_scalar(value)
	try:
		if isinstance(value, (int, float)):
			moment = datetime.datetime.fromtimestamp(value / 1000.0, tz=datetime.timezone.utc)
			return moment.strftime(DATETIME_FORMAT)
		text = str(value).strip()
		if DATE_ONLY.match(text):
			return datetime.date.fromisoformat(text).strftime(DATE_FORMAT)
		if text.endswith("Z"):
			text = text[:-1] + "+00:00"
		moment = datetime.datetime.fromisoformat(text)
	except (ValueError, OverflowError, OSError):
		return str(value)
	return moment.strftime(DATETIME_FORMAT)


#============================================
def char_width_estimate(font_size: float) -> float:
	"""
	Estimate the average character width for a font size.

	Args:
		font_size: Font size in points.

	Returns:
		Width in points.
	"""
	return font_size * CHAR_WIDTH_FACTOR


#============================================
def compute_max_chars(width: float, font_size: float) -> int:
	"""
	Compute the character budget for a column.

	Args:
		width: Column width in points.
		font_size: Font size in points.

	Returns:
		Maximum number of characters.
	"""
	budget = int(math.floor(width / char_width_estimate(font_size)))
	return max(MIN_COLUMN_CHARS, budget)


#============================================
def truncate_text(text: str, max_chars: int) -> str:
	"""
	Cut a string to a character budget with a two character ellipsis.

	Args:
		text: Input text.
		max_chars: Character budget.

	Returns:
		Text of at most max_chars characters.
	"""
	if len(text) <= max_chars:
		return text
	keep = max(0, max_chars - len(ELLIPSIS))
	return text[:keep] + ELLIPSIS


#============================================
def fit_cell_text(text: str, max_chars: int) -> str:
	"""
	Prepare cell text for a fixed width column.

	Args:
		text: Display text.
		max_chars: Character budget.

	Returns:
		Single line, sanitized and truncated text.
	"""
	line = dtp.sanitize.collapse_whitespace(text)
	return truncate_text(line, max_chars)
