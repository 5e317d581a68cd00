"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes


PAGE_SIZES = {
	"A4": reportlab.lib.pagesizes.A4,
	"Letter": reportlab.lib.pagesizes.letter,
}
DEFAULT_PAGE_FORMAT = "A4"
PAGE_MARGIN = 40.0

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
TITLE_TEXT_SIZE = 18.0
SUBTITLE_TEXT_SIZE = 8.0
SECTION_TEXT_SIZE = 13.0
GROUP_TEXT_SIZE = 12.0
HEADER_TEXT_SIZE = 9.0
CELL_TEXT_SIZE = 9.0
PARAGRAPH_TEXT_SIZE = 12.0
PARAGRAPH_LEADING_EXTRA = 4.0
CHAR_WIDTH_FACTOR = 0.6
MIN_COLUMN_CHARS = 3
ELLIPSIS = ".."

TITLE_HEIGHT = 44.0
SECTION_HEADER_HEIGHT = 28.0
HEADER_ROW_HEIGHT = 20.0
ROW_HEIGHT = 18.0
SUBLIST_LINE_HEIGHT = 14.0
SECTION_GAP = 12.0
CELL_PADDING = 4.0
TEXT_BASELINE_OFFSET = 6.0
SUMMARY_LABEL_WIDTH = 150.0
SUBLIST_INDENT = 16.0
BORDER_THICKNESS = 0.5
GROUP_BAND_HEIGHT = 24.0
GROUP_COUNT_HEIGHT = 16.0
GROUP_COLUMN_WIDTHS = (60.0, 235.0, 120.0, 100.0)
GROUP_ID_LENGTH = 7

COLOR_TEXT = "#222222"
COLOR_MUTED = "#666666"
COLOR_TITLE = "#1F3864"
COLOR_HEADER_FILL = "#DCE6F2"
COLOR_ALT_ROW_FILL = "#F3F5F8"
COLOR_BORDER = "#B7C3D0"
COLOR_GROUP_BAND = "#2F5597"
COLOR_GROUP_TEXT = "#FFFFFF"

DEFAULT_TITLE = "Datenexport"
SUMMARY_TITLE = "Zusammenfassung"
ENTRIES_TITLE = "Einträge"
GENERATED_PREFIX = "Erstellt am"
EMPTY_SECTION_TEXT = "Keine Einträge"
BOOLEAN_TRUE_TEXT = "Ja"
BOOLEAN_FALSE_TEXT = "Nein"
PLACEHOLDER_TEXT = "-"
ENTRY_SINGULAR = "Eintrag"
ENTRY_PLURAL = "Einträge"
GROUP_COLUMN_TITLES = ("ID", "Nachricht", "Autor", "Datum")
DATE_FORMAT = "%d.%m.%Y"
DATETIME_FORMAT = "%d.%m.%Y, %H:%M"
TEMPLATE_DATETIME_FORMAT = "%d.%m.%Y, %H:%M:%S"
MAX_FORMAT_DEPTH = 4
# deeper subtrees are replaced by DEPTH_LIMIT_TEXT before layout
MAX_DATA_DEPTH = 64
DEPTH_LIMIT_TEXT = "[...]"

GROUP_NAME_KEYS = ("name", "title", "repository", "repo", "project", "group", "label")
GROUP_ID_KEYS = ("sha", "id", "hash", "key", "number", "ref")
GROUP_MESSAGE_KEYS = ("message", "description", "title", "summary", "subject", "text")
GROUP_AUTHOR_KEYS = ("author", "owner", "user", "committer", "assignee", "creator")
GROUP_AUTHOR_NAME_KEYS = ("name", "login", "username", "email")
GROUP_DATE_KEYS = (
	"date",
	"timestamp",
	"created_at",
	"createdAt",
	"updated_at",
	"updatedAt",
	"committed_at",
	"time",
)

INPUT_SOURCES = ("previousNode", "manual")
OUTPUT_TYPES = ("binary", "url", "both")
DEFAULT_INPUT_FIELD = "output"
COMMON_INPUT_FIELDS = ("output", "html", "text", "content", "body")
DEFAULT_FILE_NAME = "output.pdf"
EMPTY_MANUAL_MARKUP = "<div></div>"
PDF_MIME_TYPE = "application/pdf"
BINARY_PROPERTY = "pdf"

DEFAULT_STRATEGY_ORDER = ("browser", "wkhtmltopdf", "cloud_api")
BROWSER_TIMEOUT = 30.0
WKHTMLTOPDF_TIMEOUT = 30.0
CLOUD_API_URL = "https://api.html2pdf.app/v1/generate"
CLOUD_API_TIMEOUT = 60.0
CLOUD_API_MARGIN = "10"
UPLOAD_URL = "https://file.io/"
UPLOAD_TIMEOUT = 60.0
HTTP_USER_AGENT = "data-to-pdf/1.0"


@dataclasses.dataclass
class RenderOptions:
	exclude_fields: set[str] = dataclasses.field(default_factory=set)
	include_fields: set[str] = dataclasses.field(default_factory=set)
	title: str = DEFAULT_TITLE
	page_format: str = DEFAULT_PAGE_FORMAT


@dataclasses.dataclass
class ItemParameters:
	input_source: str = "previousNode"
	html_content: str = ""
	input_field: str = DEFAULT_INPUT_FIELD
	file_name: str = DEFAULT_FILE_NAME
	page_format: str = DEFAULT_PAGE_FORMAT
	output_type: str = "binary"
	exclude_fields: set[str] = dataclasses.field(default_factory=set)
	include_fields: set[str] = dataclasses.field(default_factory=set)
	pdf_title: str = DEFAULT_TITLE
	use_template: bool = False
	html_template: str = ""


#============================================
def normalize_page_format(value: str | None) -> str:
	"""
	Normalize a page format name.

	Args:
		value: Page format like "a4" or "LETTER".

	Returns:
		Either "A4" or "Letter".
	"""
	if not value:
		return DEFAULT_PAGE_FORMAT
	for name in PAGE_SIZES:
		if name.lower() == value.strip().lower():
			return name
	return DEFAULT_PAGE_FORMAT


#============================================
def get_page_size(page_format: str) -> tuple[float, float]:
	"""
	Look up the page size for a page format.

	Args:
		page_format: Page format name.

	Returns:
		Tuple of (width, height) in points.
	"""
	return PAGE_SIZES[normalize_page_format(page_format)]
