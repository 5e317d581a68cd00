"""
Text cleanup for the standard PDF fonts.
"""

# Standard Library
import unicodedata


# Standard Type 1 fonts are drawn with WinAnsiEncoding.
TARGET_ENCODING = "cp1252"

PUNCTUATION_REPLACEMENTS = {
	"\u2018": "'",
	"\u2019": "'",
	"\u201a": "'",
	"\u201b": "'",
	"\u2032": "'",
	"\u201c": '"',
	"\u201d": '"',
	"\u201e": '"',
	"\u201f": '"',
	"\u2033": '"',
	"\u00ab": '"',
	"\u00bb": '"',
	"\u2010": "-",
	"\u2011": "-",
	"\u2012": "-",
	"\u2013": "-",
	"\u2014": "-",
	"\u2015": "-",
	"\u2212": "-",
	"\u2026": "...",
	"\u2022": "*",
	"\u00b7": "*",
	"\u2122": "TM",
	"\u00a0": " ",
	"\u2007": " ",
	"\u202f": " ",
	"\t": " ",
	"\r\n": "\n",
	"\r": "\n",
}
DROPPED_CHARACTERS = {
	"\u200b",
	"\u200c",
	"\u200d",
	"\u2060",
	"\ufeff",
	"\u00ad",
}


#============================================
def replace_punctuation(value: str) -> str:
	"""
	Map typographic punctuation and whitespace to plain forms.

	Args:
		value: Input text.

	Returns:
		Text with replacements applied.
	"""
	for old, new in PUNCTUATION_REPLACEMENTS.items():
		value = value.replace(old, new)
	return value


#============================================
def is_encodable(char: str) -> bool:
	"""
	Check whether a character exists in the target font encoding.

	Args:
		char: Single character.

	Returns:
		True if the character can be encoded.
	"""
	try:
		char.encode(TARGET_ENCODING)
	except UnicodeEncodeError:
		return False
	return True


#============================================
def fold_character(char: str) -> str:
	"""
	Fold an unencodable character to its closest encodable form.

	Args:
		char: Single character outside the target encoding.

	Returns:
		Encodable replacement, possibly empty.
	"""
	decomposed = replace_punctuation(unicodedata.normalize("NFKD", char))
	kept = [part for part in decomposed if is_encodable(part) and not unicodedata.combining(part)]
	return "".join(kept)


#============================================
def sanitize_text(value: str) -> str:
	"""
	Strip characters the standard PDF fonts cannot represent.

	Typographic punctuation is mapped to plain ASCII first, then NFC
	composition keeps umlauts intact, and anything still outside the
	target encoding is folded (NFKD) or dropped.

	Args:
		value: Input text.

	Returns:
		Sanitized text.
	"""
	if not value:
		return ""
	text = unicodedata.normalize("NFC", replace_punctuation(str(value)))
	result: list[str] = []
	for char in text:
		if char in DROPPED_CHARACTERS:
			continue
		if char == "\n":
			result.append(char)
			continue
		if unicodedata.category(char) == "Cc":
			continue
		if is_encodable(char):
			result.append(char)
			continue
		result.append(fold_character(char))
	return "".join(result)


#============================================
def collapse_whitespace(value: str) -> str:
	"""
	Sanitize text for a single line and collapse whitespace runs.

	Args:
		value: Input text.

	Returns:
		Single-line text.
	"""
	return " ".join(sanitize_text(value).split())
