"""
Placeholder interpolation for user supplied markup templates.

Supported placeholders:
	{{title}}            document title
	{{date}}             current date
	{{datetime}}         current date and time
	{{json}}             pretty printed data, escaped
	{{content}}          the whole data tree rendered as markup
	{{table}}            the first array in the data rendered as a table
	{{data.a.b.0.c}}     nested field by dotted path, empty when missing
	{{field}}            top level field, empty when missing

All placeholders are resolved in one scan of the template, so values
inserted for one placeholder are never substituted again.
"""

# Standard Library
import datetime
import json
import re

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.formatting
import data_to_pdf.markup


DATE_FORMAT = dtp.config.DATE_FORMAT
TEMPLATE_DATETIME_FORMAT = dtp.config.TEMPLATE_DATETIME_FORMAT

PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z0-9_$\-]+(?:\.[A-Za-z0-9_$\-]+)*)\s*\}\}")
RESERVED_PLACEHOLDERS = ("title", "date", "datetime", "json", "content", "table")
DATA_PREFIX = "data."
MISSING = object()


#============================================
def resolve_path(data, path: str):
	"""
	Resolve a dot separated path inside a data tree.

	Args:
		data: Parsed JSON value.
		path: Path like "user.address.city" or "items.0.name".

	Returns:
		The value, or MISSING.
	"""
	current = data
	for part in path.split("."):
		if isinstance(current, dict):
			if part not in current:
				return MISSING
			current = current[part]
		elif isinstance(current, list) and part.isdigit():
			index = int(part)
			if index >= len(current):
				return MISSING
			current = current[index]
		else:
			return MISSING
	return current


#============================================
def find_first_array(data) -> list | None:
	"""
	Find the first array in a data tree, depth first in insertion order.

	Args:
		data: Parsed JSON value.

	Returns:
		The array, or None.
	"""
	if isinstance(data, list):
		return data
	if not isinstance(data, dict):
		return None
	for value in data.values():
		found = find_first_array(value)
		if found is not None:
			return found
	return None


#============================================
def format_placeholder_value(value) -> str:
	"""
	Convert a resolved value into escaped markup text.

	Args:
		value: Resolved value or MISSING.

	Returns:
		Markup text.
	"""
	if value is MISSING or value is None:
		return ""
	if isinstance(value, (dict, list)):
		return dtp.markup.escape_html(json.dumps(value, ensure_ascii=False, default=str))
	return dtp.markup.escape_html(dtp.formatting.format_scalar(value))


#============================================
def resolve_reserved(name: str, data, title: str, now: datetime.datetime) -> str:
	"""
	Resolve one of the reserved placeholders.

	Args:
		name: Reserved placeholder name.
		data: Parsed JSON value.
		title: Document title.
		now: Current timestamp.

	Returns:
		Markup text.
	"""
	if name == "title":
		return dtp.markup.escape_html(title)
	if name == "date":
		return now.strftime(DATE_FORMAT)
	if name == "datetime":
		return now.strftime(TEMPLATE_DATETIME_FORMAT)
	if name == "json":
		text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
		return dtp.markup.escape_html(text)
	if name == "content":
		return dtp.markup.data_to_html(data)
	rows = find_first_array(data)
	if rows is None:
		return dtp.markup.data_to_html(data)
	return dtp.markup.render_table_html(rows)


#============================================
def interpolate_template(
	template: str,
	data,
	title: str,
	now: datetime.datetime | None = None,
) -> str:
	"""
	Substitute placeholders in a markup template.

	Reserved names win over data fields of the same name.

	Args:
		template: Markup with {{...}} placeholders.
		data: Parsed JSON value.
		title: Document title.
		now: Timestamp for date placeholders, defaults to now.

	Returns:
		Interpolated markup.
	"""
	if now is None:
		now = datetime.datetime.now()

	def replace(match: re.Match) -> str:
		name = match.group(1)
		if name in RESERVED_PLACEHOLDERS:
			return resolve_reserved(name, data, title, now)
		if name.startswith(DATA_PREFIX):
			return format_placeholder_value(resolve_path(data, name[len(DATA_PREFIX):]))
		if isinstance(data, dict) and "." not in name:
			return format_placeholder_value(data.get(name, MISSING))
		return ""

	return PLACEHOLDER.sub(replace, template or "")
