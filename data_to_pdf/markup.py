"""
Markup rendering of data trees for the external HTML renderers.
"""

# Standard Library
import html
import re

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.columns
import data_to_pdf.config
import data_to_pdf.formatting
import data_to_pdf.payload


DataNode = dtp.payload.DataNode

PLACEHOLDER_TEXT = dtp.config.PLACEHOLDER_TEXT
MAX_FORMAT_DEPTH = dtp.config.MAX_FORMAT_DEPTH

SHELL_STYLE = (
	"body{font-family:Helvetica,Arial,sans-serif;font-size:11px;color:#222;margin:0;}"
	"h1{font-size:20px;color:#1F3864;}"
	"table{border-collapse:collapse;width:100%;margin:6px 0;}"
	"th,td{border:1px solid #B7C3D0;padding:4px 6px;text-align:left;vertical-align:top;}"
	"th{background:#DCE6F2;}"
	"tr:nth-child(even) td{background:#F3F5F8;}"
	"pre{white-space:pre-wrap;word-wrap:break-word;}"
)
SCRIPT_OR_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
BLOCK_BREAK = re.compile(
	r"<br\s*/?>|</(p|div|tr|li|h[1-6]|table|thead|tbody|ul|ol|pre|section|article|header|footer|blockquote)\s*>",
	re.IGNORECASE,
)
ANY_TAG = re.compile(r"<[^>]*>")
INLINE_SPACE = re.compile(r"[ \t\f\v]+")
HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)


#============================================
def escape_html(value) -> str:
	"""
	Escape text for use inside markup.

	Args:
		value: Any value, converted with str().

	Returns:
		Escaped text.
	"""
	return html.escape(str(value), quote=True)


#============================================
def looks_like_markup(text: str) -> bool:
	"""
	Check whether a string is wrapped in angle brackets.

	Args:
		text: Candidate string.

	Returns:
		True for markup.
	"""
	stripped = text.strip()
	return stripped.startswith("<") and stripped.endswith(">")


#============================================
def strip_tags(markup: str) -> str:
	"""
	Reduce markup to plain text.

	Script and style bodies are removed, block level closing tags become
	line breaks, remaining tags become spaces and entities are unescaped.

	Args:
		markup: Markup text.

	Returns:
		Plain text.
	"""
	if not markup:
		return ""
	text = SCRIPT_OR_STYLE.sub(" ", markup)
	text = BLOCK_BREAK.sub("\n", text)
	text = ANY_TAG.sub(" ", text)
	text = html.unescape(text)
	lines = [INLINE_SPACE.sub(" ", line).strip() for line in text.split("\n")]
	return "\n".join(lines).strip()


#============================================
def wrap_in_shell(markup: str, title: str = "") -> str:
	"""
	Wrap markup in a minimal HTML document with a style sheet.

	Complete documents keep their structure and only receive the styles.

	Args:
		markup: Markup fragment or document.
		title: Document title.

	Returns:
		Complete HTML document.
	"""
	style = f"<style>{SHELL_STYLE}</style>"
	if HTML_OPEN.search(markup):
		if HEAD_CLOSE.search(markup):
			return HEAD_CLOSE.sub(lambda match: style + match.group(0), markup, count=1)
		return HTML_OPEN.sub(lambda match: match.group(0) + f"<head>{style}</head>", markup, count=1)
	return (
		"<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
		f"<title>{escape_html(title)}</title>{style}</head>"
		f"<body>{markup}</body></html>"
	)


#============================================
def render_node_html(node: DataNode, depth: int = 0) -> str:
	"""
	Render a data node as markup, nesting tables for nested values.

	Args:
		node: Data node.
		depth: Current nesting depth.

	Returns:
		Markup fragment.
	"""
	if node.kind == "scalar":
		if isinstance(node.value, str) and looks_like_markup(node.value):
			return node.value.strip()
		return escape_html(dtp.formatting.format_scalar(node.value))
	if depth >= MAX_FORMAT_DEPTH:
		return escape_html(dtp.formatting.format_value(node))
	if node.kind == "sequence":
		return render_sequence_html(node, depth)
	if not node.fields:
		return escape_html(PLACEHOLDER_TEXT)
	rows = []
	for key, child in node.fields:
		label = escape_html(dtp.formatting.format_label(key))
		rows.append(f"<tr><th>{label}</th><td>{render_node_html(child, depth + 1)}</td></tr>")
	return f"<table>{''.join(rows)}</table>"


#============================================
def render_sequence_html(node: DataNode, depth: int = 0) -> str:
	"""
	Render a sequence node as a table of records or a bullet list.

	Args:
		node: Sequence node.
		depth: Current nesting depth.

	Returns:
		Markup fragment.
	"""
	if not node.items:
		return escape_html(PLACEHOLDER_TEXT)
	if not any(item.kind == "mapping" for item in node.items):
		items = "".join(f"<li>{render_node_html(item, depth + 1)}</li>" for item in node.items)
		return f"<ul>{items}</ul>"
	names = dtp.columns.derive_columns_union(node.items)
	header = "".join(f"<th>{escape_html(dtp.formatting.format_label(name))}</th>" for name in names)
	body = []
	for row in node.items:
		cells = []
		if row.kind == "mapping":
			for name in names:
				child = dtp.payload.get_field(row, name)
				cells.append("" if child is None else render_node_html(child, depth + 1))
		else:
			cells.append(render_node_html(row, depth + 1))
			cells.extend([""] * (len(names) - 1))
		body.append("<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>")
	return f"<table><thead><tr>{header}</tr></thead><tbody>{''.join(body)}</tbody></table>"


#============================================
def data_to_html(data) -> str:
	"""
	Render a parsed data tree as a markup fragment.

	Args:
		data: Parsed JSON value.

	Returns:
		Markup fragment.
	"""
	node = dtp.payload.build_node(data)
	if node.kind == "scalar" and not (isinstance(node.value, str) and looks_like_markup(node.value)):
		return f"<pre>{escape_html(dtp.formatting.format_scalar(node.value))}</pre>"
	return render_node_html(node)


#============================================
def render_table_html(rows: list) -> str:
	"""
	Render a list of values as a table (records) or list (scalars).

	Args:
		rows: List of parsed JSON values.

	Returns:
		Markup fragment.
	"""
	return render_sequence_html(dtp.payload.build_node(list(rows)))
