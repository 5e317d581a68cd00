"""
Page layout engine for structured data and plain text.

Everything is placed by direct coordinate arithmetic on a LayoutCursor:
y starts at the top margin of a fresh page and moves down by one unit
(row, header, line) at a time. Before each unit the remaining space is
checked, so a unit is never split across a page boundary.
"""

# Standard Library
import dataclasses
import datetime

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.columns
import data_to_pdf.config
import data_to_pdf.document
import data_to_pdf.formatting
import data_to_pdf.payload
import data_to_pdf.sanitize


DataNode = dtp.payload.DataNode
Column = dtp.columns.Column
PdfDocument = dtp.document.PdfDocument
RenderOptions = dtp.config.RenderOptions

PAGE_MARGIN = dtp.config.PAGE_MARGIN
TITLE_TEXT_SIZE = dtp.config.TITLE_TEXT_SIZE
SUBTITLE_TEXT_SIZE = dtp.config.SUBTITLE_TEXT_SIZE
SECTION_TEXT_SIZE = dtp.config.SECTION_TEXT_SIZE
GROUP_TEXT_SIZE = dtp.config.GROUP_TEXT_SIZE
HEADER_TEXT_SIZE = dtp.config.HEADER_TEXT_SIZE
CELL_TEXT_SIZE = dtp.config.CELL_TEXT_SIZE
PARAGRAPH_TEXT_SIZE = dtp.config.PARAGRAPH_TEXT_SIZE
PARAGRAPH_LEADING_EXTRA = dtp.config.PARAGRAPH_LEADING_EXTRA
TITLE_HEIGHT = dtp.config.TITLE_HEIGHT
SECTION_HEADER_HEIGHT = dtp.config.SECTION_HEADER_HEIGHT
HEADER_ROW_HEIGHT = dtp.config.HEADER_ROW_HEIGHT
ROW_HEIGHT = dtp.config.ROW_HEIGHT
SUBLIST_LINE_HEIGHT = dtp.config.SUBLIST_LINE_HEIGHT
SECTION_GAP = dtp.config.SECTION_GAP
CELL_PADDING = dtp.config.CELL_PADDING
TEXT_BASELINE_OFFSET = dtp.config.TEXT_BASELINE_OFFSET
SUMMARY_LABEL_WIDTH = dtp.config.SUMMARY_LABEL_WIDTH
SUBLIST_INDENT = dtp.config.SUBLIST_INDENT
BORDER_THICKNESS = dtp.config.BORDER_THICKNESS
GROUP_BAND_HEIGHT = dtp.config.GROUP_BAND_HEIGHT
GROUP_COUNT_HEIGHT = dtp.config.GROUP_COUNT_HEIGHT
GROUP_COLUMN_WIDTHS = dtp.config.GROUP_COLUMN_WIDTHS
GROUP_COLUMN_TITLES = dtp.config.GROUP_COLUMN_TITLES
GROUP_ID_LENGTH = dtp.config.GROUP_ID_LENGTH
GROUP_NAME_KEYS = dtp.config.GROUP_NAME_KEYS
GROUP_ID_KEYS = dtp.config.GROUP_ID_KEYS
GROUP_MESSAGE_KEYS = dtp.config.GROUP_MESSAGE_KEYS
GROUP_AUTHOR_KEYS = dtp.config.GROUP_AUTHOR_KEYS
GROUP_AUTHOR_NAME_KEYS = dtp.config.GROUP_AUTHOR_NAME_KEYS
GROUP_DATE_KEYS = dtp.config.GROUP_DATE_KEYS
COLOR_MUTED = dtp.config.COLOR_MUTED
COLOR_TITLE = dtp.config.COLOR_TITLE
COLOR_HEADER_FILL = dtp.config.COLOR_HEADER_FILL
COLOR_ALT_ROW_FILL = dtp.config.COLOR_ALT_ROW_FILL
COLOR_BORDER = dtp.config.COLOR_BORDER
COLOR_GROUP_BAND = dtp.config.COLOR_GROUP_BAND
COLOR_GROUP_TEXT = dtp.config.COLOR_GROUP_TEXT
SUMMARY_TITLE = dtp.config.SUMMARY_TITLE
ENTRIES_TITLE = dtp.config.ENTRIES_TITLE
GENERATED_PREFIX = dtp.config.GENERATED_PREFIX
EMPTY_SECTION_TEXT = dtp.config.EMPTY_SECTION_TEXT
PLACEHOLDER_TEXT = dtp.config.PLACEHOLDER_TEXT
ENTRY_SINGULAR = dtp.config.ENTRY_SINGULAR
ENTRY_PLURAL = dtp.config.ENTRY_PLURAL
DATETIME_FORMAT = dtp.config.DATETIME_FORMAT


@dataclasses.dataclass
class LayoutCursor:
	document: PdfDocument
	y: float
	margin: float
	page_width: float
	page_height: float


#============================================
def create_cursor(document: PdfDocument, margin: float = PAGE_MARGIN) -> LayoutCursor:
	"""
	Create a cursor at the top of the document's current page.

	Args:
		document: Target document.
		margin: Page margin in points.

	Returns:
		LayoutCursor.
	"""
	return LayoutCursor(
		document=document,
		y=document.page_height - margin,
		margin=margin,
		page_width=document.page_width,
		page_height=document.page_height,
	)


#============================================
def content_width(cursor: LayoutCursor) -> float:
	"""
	Width between the left and right margins.

	Args:
		cursor: Layout cursor.

	Returns:
		Width in points.
	"""
	return cursor.page_width - 2.0 * cursor.margin


#============================================
def start_new_page(cursor: LayoutCursor) -> None:
	"""
	Start a new page and reset the cursor to the top margin.

	Args:
		cursor: Layout cursor.
	"""
	cursor.document.new_page()
	cursor.y = cursor.page_height - cursor.margin


#============================================
def ensure_space(cursor: LayoutCursor, height: float) -> bool:
	"""
	Start a new page when the next unit does not fit.

	Args:
		cursor: Layout cursor.
		height: Vertical space the next unit needs.

	Returns:
		True if a new page was started.
	"""
	if cursor.y - height < cursor.margin:
		start_new_page(cursor)
		return True
	return False


#============================================
def row_baseline(cursor: LayoutCursor, height: float) -> float:
	"""
	Baseline for text inside a row that starts at the cursor.

	Args:
		cursor: Layout cursor.
		height: Row height.

	Returns:
		Baseline y.
	"""
	return cursor.y - height + TEXT_BASELINE_OFFSET


#============================================
def draw_title(cursor: LayoutCursor, title: str, generated_at: datetime.datetime) -> None:
	"""
	Draw the document title block.

	Args:
		cursor: Layout cursor.
		title: Display title.
		generated_at: Timestamp shown below the title.
	"""
	ensure_space(cursor, TITLE_HEIGHT)
	document = cursor.document
	left = cursor.margin
	max_chars = dtp.formatting.compute_max_chars(content_width(cursor), TITLE_TEXT_SIZE)
	title_text = dtp.formatting.fit_cell_text(title, max_chars)
	document.draw_text(title_text, left, cursor.y - TITLE_TEXT_SIZE, TITLE_TEXT_SIZE, bold=True, color=COLOR_TITLE)
	stamp = f"{GENERATED_PREFIX}: {generated_at.strftime(DATETIME_FORMAT)}"
	document.draw_text(stamp, left, cursor.y - TITLE_TEXT_SIZE - 14.0, SUBTITLE_TEXT_SIZE, color=COLOR_MUTED)
	rule_y = cursor.y - TITLE_HEIGHT + 4.0
	document.draw_line(left, rule_y, left + content_width(cursor), rule_y, 1.0, COLOR_TITLE)
	cursor.y -= TITLE_HEIGHT


#============================================
def draw_section_header(cursor: LayoutCursor, text: str, keep_with_next: float = ROW_HEIGHT) -> None:
	"""
	Draw a section header.

	Args:
		cursor: Layout cursor.
		text: Header text.
		keep_with_next: Space reserved below the header for the first row.
	"""
	ensure_space(cursor, SECTION_HEADER_HEIGHT + keep_with_next)
	max_chars = dtp.formatting.compute_max_chars(content_width(cursor), SECTION_TEXT_SIZE)
	header = dtp.formatting.fit_cell_text(text, max_chars)
	baseline = cursor.y - SECTION_HEADER_HEIGHT + 10.0
	cursor.document.draw_text(header, cursor.margin, baseline, SECTION_TEXT_SIZE, bold=True, color=COLOR_TITLE)
	cursor.y -= SECTION_HEADER_HEIGHT


#============================================
def draw_placeholder_line(cursor: LayoutCursor, text: str = PLACEHOLDER_TEXT) -> None:
	"""
	Draw a muted single line used for empty sections.

	Args:
		cursor: Layout cursor.
		text: Line text.
	"""
	ensure_space(cursor, ROW_HEIGHT)
	baseline = row_baseline(cursor, ROW_HEIGHT)
	cursor.document.draw_text(text, cursor.margin + CELL_PADDING, baseline, CELL_TEXT_SIZE, color=COLOR_MUTED)
	cursor.y -= ROW_HEIGHT


#============================================
def draw_key_value_row(
	cursor: LayoutCursor,
	index: int,
	label: str,
	value: str,
	label_width: float,
) -> None:
	"""
	Draw one row of a two column key/value table.

	Args:
		cursor: Layout cursor.
		index: Row index for alternating backgrounds.
		label: Formatted label.
		value: Formatted value.
		label_width: Width of the label column.
	"""
	ensure_space(cursor, ROW_HEIGHT)
	document = cursor.document
	left = cursor.margin
	width = content_width(cursor)
	bottom = cursor.y - ROW_HEIGHT
	if index % 2 == 1:
		document.draw_rect(left, bottom, width, ROW_HEIGHT, COLOR_ALT_ROW_FILL)
	baseline = row_baseline(cursor, ROW_HEIGHT)
	label_chars = dtp.formatting.compute_max_chars(label_width - 2.0 * CELL_PADDING, CELL_TEXT_SIZE)
	value_width = width - label_width - 2.0 * CELL_PADDING
	value_chars = dtp.formatting.compute_max_chars(value_width, CELL_TEXT_SIZE)
	label_text = dtp.formatting.fit_cell_text(label, label_chars)
	value_text = dtp.formatting.fit_cell_text(value, value_chars)
	document.draw_text(label_text, left + CELL_PADDING, baseline, CELL_TEXT_SIZE, bold=True)
	document.draw_text(value_text, left + label_width + CELL_PADDING, baseline, CELL_TEXT_SIZE)
	document.draw_line(left, bottom, left + width, bottom, BORDER_THICKNESS, COLOR_BORDER)
	cursor.y = bottom


#============================================
def draw_summary(cursor: LayoutCursor, fields: list[tuple[str, DataNode]], title: str = SUMMARY_TITLE) -> None:
	"""
	Draw scalar fields as a key/value summary section.

	Args:
		cursor: Layout cursor.
		fields: (key, node) pairs in insertion order.
		title: Section header text.
	"""
	draw_section_header(cursor, title)
	if not fields:
		draw_placeholder_line(cursor)
		return
	for index, (key, child) in enumerate(fields):
		label = dtp.formatting.format_label(key)
		value = dtp.formatting.format_value(child)
		draw_key_value_row(cursor, index, label, value, SUMMARY_LABEL_WIDTH)
	cursor.y -= SECTION_GAP


#============================================
def draw_grid_header(cursor: LayoutCursor, columns: list[Column], titles: list[str]) -> None:
	"""
	Draw a tinted table header row.

	Args:
		cursor: Layout cursor.
		columns: Column descriptors.
		titles: Header labels, one per column.
	"""
	document = cursor.document
	left = columns[0].x
	right = columns[-1].x + columns[-1].width
	bottom = cursor.y - HEADER_ROW_HEIGHT
	document.draw_rect(left, bottom, right - left, HEADER_ROW_HEIGHT, COLOR_HEADER_FILL)
	baseline = row_baseline(cursor, HEADER_ROW_HEIGHT)
	for column, title in zip(columns, titles):
		text = dtp.formatting.fit_cell_text(title, column.max_chars)
		document.draw_text(text, column.x + CELL_PADDING, baseline, HEADER_TEXT_SIZE, bold=True)
	document.draw_line(left, bottom, right, bottom, BORDER_THICKNESS, COLOR_BORDER)
	cursor.y = bottom


#============================================
def draw_grid_row(cursor: LayoutCursor, index: int, columns: list[Column], cells: list[str]) -> None:
	"""
	Draw one data row of a table.

	Args:
		cursor: Layout cursor.
		index: Row index for alternating backgrounds.
		columns: Column descriptors.
		cells: Display strings, one per column.
	"""
	document = cursor.document
	left = columns[0].x
	right = columns[-1].x + columns[-1].width
	bottom = cursor.y - ROW_HEIGHT
	if index % 2 == 1:
		document.draw_rect(left, bottom, right - left, ROW_HEIGHT, COLOR_ALT_ROW_FILL)
	baseline = row_baseline(cursor, ROW_HEIGHT)
	for column, cell in zip(columns, cells):
		text = dtp.formatting.fit_cell_text(cell, column.max_chars)
		document.draw_text(text, column.x + CELL_PADDING, baseline, CELL_TEXT_SIZE)
	document.draw_line(left, bottom, right, bottom, BORDER_THICKNESS, COLOR_BORDER)
	cursor.y = bottom


#============================================
def draw_grid_borders(cursor: LayoutCursor, columns: list[Column], top: float) -> None:
	"""
	Close a table segment with left, right and top border lines.

	Args:
		cursor: Layout cursor positioned below the last row.
		columns: Column descriptors.
		top: Top y of the segment on the current page.
	"""
	document = cursor.document
	left = columns[0].x
	right = columns[-1].x + columns[-1].width
	document.draw_line(left, top, left, cursor.y, BORDER_THICKNESS, COLOR_BORDER)
	document.draw_line(right, top, right, cursor.y, BORDER_THICKNESS, COLOR_BORDER)
	document.draw_line(left, top, right, top, BORDER_THICKNESS, COLOR_BORDER)


#============================================
def draw_grid(
	cursor: LayoutCursor,
	columns: list[Column],
	titles: list[str],
	rows: list[list[str]],
) -> None:
	"""
	Draw a paginated table.

	When the rows run past the bottom margin the current segment is
	closed with its borders and the header is repeated on the new page.

	Args:
		cursor: Layout cursor.
		columns: Column descriptors.
		titles: Header labels.
		rows: Cell strings per row.
	"""
	if not columns:
		draw_placeholder_line(cursor)
		return
	ensure_space(cursor, HEADER_ROW_HEIGHT + ROW_HEIGHT)
	segment_top = cursor.y
	draw_grid_header(cursor, columns, titles)
	for index, cells in enumerate(rows):
		if cursor.y - ROW_HEIGHT < cursor.margin:
			draw_grid_borders(cursor, columns, segment_top)
			start_new_page(cursor)
			segment_top = cursor.y
			draw_grid_header(cursor, columns, titles)
		draw_grid_row(cursor, index, columns, cells)
	draw_grid_borders(cursor, columns, segment_top)
	cursor.y -= SECTION_GAP


#============================================
def build_row_cells(row: DataNode, names: list[str]) -> list[str]:
	"""
	Format the cells of one record row.

	Args:
		row: Row node.
		names: Column names.

	Returns:
		Display strings, one per column.
	"""
	if row.kind == "mapping":
		cells = []
		for name in names:
			child = dtp.payload.get_field(row, name)
			cells.append("" if child is None else dtp.formatting.format_value(child))
		return cells
	cells = [""] * len(names)
	if not cells:
		return cells
	if row.kind == "scalar":
		cells[0] = dtp.formatting.format_scalar(row.value)
	else:
		cells[0] = PLACEHOLDER_TEXT
	return cells


#============================================
def draw_records_table(cursor: LayoutCursor, rows: list[DataNode], names: list[str]) -> None:
	"""
	Draw an array of records as a table with evenly divided columns.

	Args:
		cursor: Layout cursor.
		rows: Row nodes.
		names: Column names.
	"""
	if not names:
		# no usable columns, fall back to one formatted line per row
		draw_scalar_list(cursor, rows)
		return
	columns = dtp.columns.build_even_columns(names, cursor.margin, content_width(cursor))
	titles = [dtp.formatting.format_label(name) for name in names]
	cell_rows = [build_row_cells(row, names) for row in rows]
	draw_grid(cursor, columns, titles, cell_rows)


#============================================
def draw_scalar_list(cursor: LayoutCursor, items: list[DataNode]) -> None:
	"""
	Draw a numbered list, one formatted value per row.

	Args:
		cursor: Layout cursor.
		items: Item nodes.
	"""
	if not items:
		draw_placeholder_line(cursor, EMPTY_SECTION_TEXT)
		return
	label_width = 36.0
	for index, item in enumerate(items):
		value = dtp.formatting.format_value(item)
		draw_key_value_row(cursor, index, f"{index + 1}.", value, label_width)
	cursor.y -= SECTION_GAP


#============================================
def draw_sublist(cursor: LayoutCursor, node: DataNode) -> None:
	"""
	Draw the scalar fields of a nested object as an indented list.

	Further nested values are skipped.

	Args:
		cursor: Layout cursor.
		node: Mapping node.
	"""
	fields = [(key, child) for key, child in node.fields if child.kind == "scalar"]
	if not fields:
		draw_placeholder_line(cursor)
		return
	left = cursor.margin + SUBLIST_INDENT
	width = content_width(cursor) - SUBLIST_INDENT
	max_chars = dtp.formatting.compute_max_chars(width, CELL_TEXT_SIZE)
	for key, child in fields:
		ensure_space(cursor, SUBLIST_LINE_HEIGHT)
		line = f"{dtp.formatting.format_label(key)}: {dtp.formatting.format_value(child)}"
		text = dtp.formatting.fit_cell_text(line, max_chars)
		baseline = cursor.y - SUBLIST_LINE_HEIGHT + 4.0
		cursor.document.draw_text(text, left, baseline, CELL_TEXT_SIZE)
		cursor.y -= SUBLIST_LINE_HEIGHT
	cursor.y -= SECTION_GAP


#============================================
def scalar_text(node: DataNode | None) -> str:
	"""
	Display text for an optional node.

	Args:
		node: Data node or None.

	Returns:
		Display string.
	"""
	if node is None:
		return PLACEHOLDER_TEXT
	return dtp.formatting.format_value(node)


#============================================
def build_group_item_cells(item: DataNode) -> list[str]:
	"""
	Extract identifier, message, author and date of a dated sub-item.

	Args:
		item: Sub-item node.

	Returns:
		Four display strings.
	"""
	if item.kind != "mapping":
		return [PLACEHOLDER_TEXT, dtp.formatting.format_value(item), "", ""]
	identifier = scalar_text(dtp.payload.find_first_field(item, GROUP_ID_KEYS))
	identifier = identifier[:GROUP_ID_LENGTH]
	message = scalar_text(dtp.payload.find_first_field(item, GROUP_MESSAGE_KEYS))
	message = message.strip().split("\n")[0]
	author_node = dtp.payload.find_first_field(item, GROUP_AUTHOR_KEYS)
	if author_node is not None and author_node.kind == "mapping":
		author_node = dtp.payload.find_first_field(author_node, GROUP_AUTHOR_NAME_KEYS)
	author = scalar_text(author_node)
	date_node = dtp.payload.find_first_field(item, GROUP_DATE_KEYS)
	if date_node is not None and date_node.kind == "scalar":
		date_text = dtp.formatting.format_date(date_node.value)
	else:
		date_text = scalar_text(date_node)
	return [identifier, message, author, date_text]


#============================================
def format_entry_count(count: int) -> str:
	"""
	Format an entry count line.

	Args:
		count: Number of entries.

	Returns:
		Text like "3 Einträge".
	"""
	if count == 1:
		return f"{count} {ENTRY_SINGULAR}"
	return f"{count} {ENTRY_PLURAL}"


#============================================
def draw_group(cursor: LayoutCursor, group: DataNode) -> None:
	"""
	Draw one named group with its dated sub-items.

	Args:
		cursor: Layout cursor.
		group: Group mapping node.
	"""
	name_node = dtp.payload.find_first_field(group, GROUP_NAME_KEYS)
	items_node = dtp.payload.find_group_items(group)
	items = items_node.items if items_node is not None else []
	ensure_space(cursor, GROUP_BAND_HEIGHT + GROUP_COUNT_HEIGHT + HEADER_ROW_HEIGHT + ROW_HEIGHT)
	document = cursor.document
	left = cursor.margin
	width = content_width(cursor)
	band_bottom = cursor.y - GROUP_BAND_HEIGHT
	document.draw_rect(left, band_bottom, width, GROUP_BAND_HEIGHT, COLOR_GROUP_BAND)
	max_chars = dtp.formatting.compute_max_chars(width - 16.0, GROUP_TEXT_SIZE)
	name_text = dtp.formatting.fit_cell_text(scalar_text(name_node), max_chars)
	document.draw_text(name_text, left + 8.0, band_bottom + 8.0, GROUP_TEXT_SIZE, bold=True, color=COLOR_GROUP_TEXT)
	cursor.y = band_bottom
	count_baseline = cursor.y - GROUP_COUNT_HEIGHT + 5.0
	document.draw_text(format_entry_count(len(items)), left, count_baseline, CELL_TEXT_SIZE, color=COLOR_MUTED)
	cursor.y -= GROUP_COUNT_HEIGHT
	names = ["id", "message", "author", "date"]
	columns = dtp.columns.build_fixed_columns(names, left, list(GROUP_COLUMN_WIDTHS))
	cell_rows = [build_group_item_cells(item) for item in items]
	draw_grid(cursor, columns, list(GROUP_COLUMN_TITLES), cell_rows)


#============================================
def draw_groups(cursor: LayoutCursor, groups: list[DataNode]) -> None:
	"""
	Draw a list of groups, one section per group.

	Args:
		cursor: Layout cursor.
		groups: Group mapping nodes.
	"""
	for group in groups:
		draw_group(cursor, group)


#============================================
def draw_nested_section(cursor: LayoutCursor, key: str, node: DataNode) -> None:
	"""
	Draw a nested array or object of a report as its own section.

	Args:
		cursor: Layout cursor.
		key: Field name of the nested value.
		node: Nested node.
	"""
	draw_section_header(cursor, dtp.formatting.format_label(key), HEADER_ROW_HEIGHT + ROW_HEIGHT)
	if node.kind == "mapping":
		draw_sublist(cursor, node)
		return
	shape = dtp.payload.classify_shape(node)
	if shape == dtp.payload.SHAPE_GROUPS:
		draw_groups(cursor, node.items)
	elif shape == dtp.payload.SHAPE_RECORDS:
		names = dtp.columns.derive_columns_union(node.items, scalar_only=True)
		draw_records_table(cursor, node.items, names)
	elif shape == dtp.payload.SHAPE_SCALARS:
		draw_scalar_list(cursor, node.items)
	else:
		draw_placeholder_line(cursor, EMPTY_SECTION_TEXT)


#============================================
def draw_report(cursor: LayoutCursor, node: DataNode) -> None:
	"""
	Draw a record with nested values: summary first, then one section per nested value.

	Args:
		cursor: Layout cursor.
		node: Mapping node.
	"""
	scalar_fields = [(key, child) for key, child in node.fields if child.kind == "scalar"]
	if scalar_fields:
		draw_summary(cursor, scalar_fields)
	for key, child in node.fields:
		if child.kind == "scalar":
			continue
		draw_nested_section(cursor, key, child)


#============================================
def wrap_text(document: PdfDocument, text: str, size: float, max_width: float) -> list[str]:
	"""
	Greedy word wrap using measured string widths.

	Words wider than a whole line are broken by characters.

	Args:
		document: Document used for text measurement.
		text: Input text, newlines start new paragraphs.
		size: Font size in points.
		max_width: Maximum line width in points.

	Returns:
		Wrapped lines, blank strings for paragraph breaks.
	"""
	lines: list[str] = []
	for paragraph in dtp.sanitize.sanitize_text(text).split("\n"):
		words = paragraph.split()
		if not words:
			if lines and lines[-1] != "":
				lines.append("")
			continue
		current = ""
		for word in words:
			for piece in split_long_word(document, word, size, max_width):
				trial = f"{current} {piece}" if current else piece
				if document.text_width(trial, size) > max_width:
					if current:
						lines.append(current)
					current = piece
				else:
					current = trial
		if current:
			lines.append(current)
	while lines and lines[-1] == "":
		lines.pop()
	return lines


#============================================
def split_long_word(document: PdfDocument, word: str, size: float, max_width: float) -> list[str]:
	"""
	Break a single word into pieces that fit the line width.

	Args:
		document: Document used for text measurement.
		word: Word without whitespace.
		size: Font size in points.
		max_width: Maximum line width in points.

	Returns:
		One or more pieces.
	"""
	if document.text_width(word, size) <= max_width:
		return [word]
	pieces: list[str] = []
	current = ""
	for char in word:
		if current and document.text_width(current + char, size) > max_width:
			pieces.append(current)
			current = char
		else:
			current += char
	if current:
		pieces.append(current)
	return pieces


#============================================
def draw_paragraphs(cursor: LayoutCursor, text: str, size: float = PARAGRAPH_TEXT_SIZE) -> None:
	"""
	Draw wrapped paragraph text line by line.

	Args:
		cursor: Layout cursor.
		text: Input text.
		size: Font size in points.
	"""
	leading = size + PARAGRAPH_LEADING_EXTRA
	lines = wrap_text(cursor.document, text, size, content_width(cursor))
	for line in lines:
		ensure_space(cursor, leading)
		if line:
			cursor.document.draw_text(line, cursor.margin, cursor.y - size, size)
		cursor.y -= leading


#============================================
def layout_structured(
	document: PdfDocument,
	node: DataNode,
	options: RenderOptions,
	generated_at: datetime.datetime | None = None,
) -> LayoutCursor:
	"""
	Lay out a classified data tree onto the document.

	Args:
		document: Target document.
		node: Data tree, already filtered.
		options: Render options.
		generated_at: Timestamp for the title block, defaults to now.

	Returns:
		The cursor after the last drawn unit.
	"""
	if generated_at is None:
		generated_at = datetime.datetime.now()
	cursor = create_cursor(document)
	draw_title(cursor, options.title, generated_at)
	shape = dtp.payload.classify_shape(node)
	if shape == dtp.payload.SHAPE_SUMMARY:
		draw_summary(cursor, node.fields)
	elif shape == dtp.payload.SHAPE_REPORT:
		draw_report(cursor, node)
	elif shape == dtp.payload.SHAPE_RECORDS:
		names = dtp.columns.derive_columns_from_first_row(node.items)
		draw_records_table(cursor, node.items, names)
	elif shape == dtp.payload.SHAPE_GROUPS:
		draw_groups(cursor, node.items)
	elif shape == dtp.payload.SHAPE_SCALARS:
		draw_section_header(cursor, ENTRIES_TITLE)
		draw_scalar_list(cursor, node.items)
	elif shape == dtp.payload.SHAPE_EMPTY:
		draw_placeholder_line(cursor, EMPTY_SECTION_TEXT)
	else:
		draw_paragraphs(cursor, dtp.formatting.format_scalar(node.value))
	return cursor


#============================================
def render_structured(
	data,
	options: RenderOptions,
	generated_at: datetime.datetime | None = None,
) -> bytes:
	"""
	Render a parsed data tree to PDF bytes.

	Args:
		data: Parsed JSON value, already filtered.
		options: Render options.
		generated_at: Timestamp for the title block.

	Returns:
		PDF bytes.
	"""
	page_size = dtp.config.get_page_size(options.page_format)
	document = PdfDocument(page_size, options.title)
	layout_structured(document, dtp.payload.build_node(data), options, generated_at)
	return document.save()


#============================================
def layout_plain_text(document: PdfDocument, text: str) -> LayoutCursor:
	"""
	Lay out unstructured text as wrapped paragraphs.

	Args:
		document: Target document.
		text: Plain text.

	Returns:
		The cursor after the last line.
	"""
	cursor = create_cursor(document)
	draw_paragraphs(cursor, text)
	return cursor


#============================================
def render_plain_text(text: str, options: RenderOptions) -> bytes:
	"""
	Render plain text to PDF bytes.

	Args:
		text: Plain text.
		options: Render options.

	Returns:
		PDF bytes.
	"""
	page_size = dtp.config.get_page_size(options.page_format)
	document = PdfDocument(page_size, options.title)
	layout_plain_text(document, text)
	return document.save()
