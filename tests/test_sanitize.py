import data_to_pdf.sanitize


SAMPLES = [
	"plain ascii",
	"Grüße aus Köln",
	"\u201cquoted\u201d \u2013 dash \u2026 ellipsis",
	"tab\there\r\nwindows line",
	"zero\u200bwidth\ufeff and soft\u00adhyphen",
	"emoji \U0001F600 and \u4e2d\u6587",
	"ligature \ufb01 and superscript \u00b2",
	"bullet \u2022 middle \u00b7 dot",
	"control \x07 bell",
	"",
]


#============================================
def test_sanitize_is_idempotent() -> None:
	"""
	Sanitizing twice gives the same result as sanitizing once.
	"""
	for sample in SAMPLES:
		once = data_to_pdf.sanitize.sanitize_text(sample)
		twice = data_to_pdf.sanitize.sanitize_text(once)
		assert once == twice, sample


#============================================
def test_sanitize_output_is_encodable() -> None:
	"""
	Every character of sanitized text fits the standard font encoding.
	"""
	for sample in SAMPLES:
		text = data_to_pdf.sanitize.sanitize_text(sample)
		text.encode(data_to_pdf.sanitize.TARGET_ENCODING)


#============================================
def test_sanitize_keeps_umlauts_and_maps_punctuation() -> None:
	"""
	Latin-1 letters survive, typographic punctuation becomes ASCII.
	"""
	assert data_to_pdf.sanitize.sanitize_text("Grüße") == "Grüße"
	text = data_to_pdf.sanitize.sanitize_text("\u201cHi\u201d \u2013 ok\u2026")
	assert text == '"Hi" - ok...'


#============================================
def test_sanitize_drops_invisible_and_control_characters() -> None:
	"""
	Zero width characters and control codes are removed, newlines kept.
	"""
	text = data_to_pdf.sanitize.sanitize_text("a\u200bb\x07c\r\nd")
	assert text == "abc\nd"


#============================================
def test_sanitize_folds_decomposable_characters() -> None:
	"""
	Characters outside the encoding fold to their base letters.
	"""
	assert data_to_pdf.sanitize.sanitize_text("\ufb01ne") == "fine"
	assert data_to_pdf.sanitize.sanitize_text("\u010capek") == "Capek"
	assert data_to_pdf.sanitize.sanitize_text("\U0001F600") == ""


#============================================
def test_collapse_whitespace_returns_single_line() -> None:
	"""
	Line breaks and runs of spaces collapse to single spaces.
	"""
	text = data_to_pdf.sanitize.collapse_whitespace("  one\n two\t\tthree  ")
	assert text == "one two three"
