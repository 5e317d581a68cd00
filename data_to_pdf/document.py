"""
PDF drawing primitives over a ReportLab canvas.
"""

# Standard Library
import dataclasses
import io

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.sanitize


DEFAULT_FONT_REGULAR = dtp.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = dtp.config.DEFAULT_FONT_BOLD
COLOR_TEXT = dtp.config.COLOR_TEXT
COLOR_BORDER = dtp.config.COLOR_BORDER


@dataclasses.dataclass
class DrawOperation:
	kind: str
	page: int
	x: float = 0.0
	y: float = 0.0
	x2: float = 0.0
	y2: float = 0.0
	width: float = 0.0
	height: float = 0.0
	text: str = ""
	size: float = 0.0
	bold: bool = False
	color: str = COLOR_TEXT
	thickness: float = 0.0


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if not value or not value.startswith("#") or len(value) != 7:
		return (0.0, 0.0, 0.0)
	red = int(value[1:3], 16) / 255.0
	green = int(value[3:5], 16) / 255.0
	blue = int(value[5:7], 16) / 255.0
	return (red, green, blue)


#============================================
def map_font_name(bold: bool) -> str:
	"""
	Map a bold flag to a standard font name.

	Args:
		bold: Bold flag.

	Returns:
		ReportLab font name.
	"""
	if bold:
		return DEFAULT_FONT_BOLD
	return DEFAULT_FONT_REGULAR


class PdfDocument:
	"""
	Incremental PDF document with text, line and rectangle primitives.

	Every primitive is recorded as a DrawOperation before it is drawn, so
	the layout of a render pass can be inspected without parsing the PDF.
	"""

	def __init__(self, page_size: tuple[float, float], title: str = "") -> None:
		self.page_width, self.page_height = page_size
		self.page_number = 1
		self.page_drawn = False
		self.operations: list[DrawOperation] = []
		self._buffer = io.BytesIO()
		self._canvas = reportlab.pdfgen.canvas.Canvas(self._buffer, pagesize=page_size)
		if title:
			self._canvas.setTitle(dtp.sanitize.collapse_whitespace(title))

	#============================================
	def text_width(self, text: str, size: float, bold: bool = False) -> float:
		"""
		Measure the rendered width of a string.

		Args:
			text: Text to measure.
			size: Font size in points.
			bold: Bold flag.

		Returns:
			Width in points.
		"""
		font_name = map_font_name(bold)
		return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, size)

	#============================================
	def draw_text(
		self,
		text: str,
		x: float,
		y: float,
		size: float,
		bold: bool = False,
		color: str = COLOR_TEXT,
	) -> None:
		"""
		Draw a single line of text at a baseline position.

		Args:
			text: Text content.
			x: Left x position.
			y: Baseline y position.
			size: Font size in points.
			bold: Bold flag.
			color: Hex fill color.
		"""
		line = dtp.sanitize.sanitize_text(text).replace("\n", " ")
		self.operations.append(
			DrawOperation(
				kind="text",
				page=self.page_number,
				x=x,
				y=y,
				text=line,
				size=size,
				bold=bold,
				color=color,
			)
		)
		if not line:
			return
		self.page_drawn = True
		red, green, blue = parse_hex_color(color)
		self._canvas.setFillColorRGB(red, green, blue)
		self._canvas.setFont(map_font_name(bold), size)
		self._canvas.drawString(x, y, line)

	#============================================
	def draw_line(
		self,
		x1: float,
		y1: float,
		x2: float,
		y2: float,
		thickness: float = 0.5,
		color: str = COLOR_BORDER,
	) -> None:
		"""
		Draw a straight line.

		Args:
			x1: Start x.
			y1: Start y.
			x2: End x.
			y2: End y.
			thickness: Line width in points.
			color: Hex stroke color.
		"""
		self.operations.append(
			DrawOperation(
				kind="line",
				page=self.page_number,
				x=x1,
				y=y1,
				x2=x2,
				y2=y2,
				thickness=thickness,
				color=color,
			)
		)
		self.page_drawn = True
		red, green, blue = parse_hex_color(color)
		self._canvas.setStrokeColorRGB(red, green, blue)
		self._canvas.setLineWidth(thickness)
		self._canvas.line(x1, y1, x2, y2)

	#============================================
	def draw_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
		"""
		Draw a filled rectangle without a border.

		Args:
			x: Lower left x.
			y: Lower left y.
			width: Rectangle width.
			height: Rectangle height.
			color: Hex fill color.
		"""
		self.operations.append(
			DrawOperation(
				kind="rect",
				page=self.page_number,
				x=x,
				y=y,
				width=width,
				height=height,
				color=color,
			)
		)
		self.page_drawn = True
		red, green, blue = parse_hex_color(color)
		self._canvas.setFillColorRGB(red, green, blue)
		self._canvas.rect(x, y, width, height, stroke=0, fill=1)

	#============================================
	def new_page(self) -> None:
		"""
		Finish the current page and start a new one.
		"""
		self._canvas.showPage()
		self.page_number += 1
		self.page_drawn = False
		self.operations.append(DrawOperation(kind="page", page=self.page_number))

	#============================================
	def save(self) -> bytes:
		"""
		Write the document and return its bytes.

		Returns:
			PDF bytes.
		"""
		if self.page_number == 1 and not self.page_drawn:
			# an untouched canvas would be saved without any page
			self._canvas.showPage()
		self._canvas.save()
		return self._buffer.getvalue()
