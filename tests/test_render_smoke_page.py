import datetime
import pathlib

import fitz
import PIL.Image

import data_to_pdf.config
import data_to_pdf.layout


DPI = 100
INK_THRESHOLD = 240
EDGE_RATIO_LIMIT = 0.001


#============================================
def _render_pdf_pages(path: pathlib.Path) -> list[PIL.Image.Image]:
	"""
	Render every page of a PDF to an image.

	Args:
		path: PDF path.

	Returns:
		List of PIL images.
	"""
	document = fitz.open(path)
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	images = []
	for page in document:
		pixmap = page.get_pixmap(matrix=matrix, alpha=False)
		images.append(PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples))
	document.close()
	return images


#============================================
def _count_ink_ratio(gray: PIL.Image.Image, threshold: int) -> float:
	"""
	Compute the ink ratio for a grayscale region.

	Args:
		gray: Grayscale image region.
		threshold: Pixel intensity threshold.

	Returns:
		Ink ratio.
	"""
	pixels = list(gray.getdata())
	if not pixels:
		return 0.0
	ink = sum(1 for value in pixels if value < threshold)
	return ink / len(pixels)


#============================================
def test_rendered_pages_keep_margins_clear(tmp_path: pathlib.Path) -> None:
	"""
	Smoke test a multi page table for ink outside the page margins.
	"""
	rows = [{"id": index, "name": f"row {index}", "note": "lorem ipsum " * 8} for index in range(120)]
	options = data_to_pdf.config.RenderOptions(title="Smoke")
	pdf_bytes = data_to_pdf.layout.render_structured(rows, options, datetime.datetime(2024, 1, 1))
	output_pdf = tmp_path / "smoke.pdf"
	output_pdf.write_bytes(pdf_bytes)

	images = _render_pdf_pages(output_pdf)
	assert len(images) > 1
	scale = DPI / 72.0
	# leave one point of slack for anti-aliased border lines
	margin = int((data_to_pdf.config.PAGE_MARGIN - 1.0) * scale)

	violations = []
	for page_index, image in enumerate(images):
		gray = image.convert("L")
		width, height = gray.size
		body = gray.crop((margin, margin, width - margin, height - margin))
		if _count_ink_ratio(body, INK_THRESHOLD) == 0.0:
			violations.append(f"page {page_index + 1} is blank")
		for edge_name, edge in (
			("left", gray.crop((0, 0, margin, height))),
			("right", gray.crop((width - margin, 0, width, height))),
			("top", gray.crop((0, 0, width, margin))),
			("bottom", gray.crop((0, height - margin, width, height))),
		):
			ratio = _count_ink_ratio(edge, INK_THRESHOLD)
			if ratio > EDGE_RATIO_LIMIT:
				violations.append(f"page {page_index + 1} edge {edge_name} ratio {ratio:.4f}")

	if violations:
		message = "Ink detected outside the page margins:\n"
		message += "\n".join(violations[:10])
		raise AssertionError(message)
