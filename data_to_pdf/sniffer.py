"""
Content type detection for raw input strings.
"""

# Standard Library
import dataclasses
import json

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.markup


KIND_MARKUP = "markup"
KIND_STRUCTURED = "structured"
KIND_TEXT = "text"


@dataclasses.dataclass
class ContentSniff:
	kind: str
	text: str
	data: object = None


#============================================
def sniff_content(candidate) -> ContentSniff:
	"""
	Decide whether input is markup, a JSON document or plain text.

	A JSON parse failure, including input nested too deeply for the
	parser, is a normal outcome and classifies as text.

	Args:
		candidate: Raw input; non-strings are converted with str().

	Returns:
		ContentSniff with the parsed tree attached for structured input.
	"""
	text = "" if candidate is None else str(candidate)
	stripped = text.strip()
	if dtp.markup.looks_like_markup(stripped):
		return ContentSniff(kind=KIND_MARKUP, text=stripped)
	if stripped.startswith("{") or stripped.startswith("["):
		try:
			data = json.loads(stripped)
		except (ValueError, RecursionError):
			return ContentSniff(kind=KIND_TEXT, text=text)
		return ContentSniff(kind=KIND_STRUCTURED, text=stripped, data=data)
	return ContentSniff(kind=KIND_TEXT, text=text)
