"""
Column derivation and width layout for table sections.
"""

# Standard Library
import dataclasses

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.formatting
import data_to_pdf.payload


DataNode = dtp.payload.DataNode

CELL_TEXT_SIZE = dtp.config.CELL_TEXT_SIZE


@dataclasses.dataclass
class Column:
	name: str
	x: float
	width: float
	max_chars: int


#============================================
def derive_columns_from_first_row(rows: list[DataNode]) -> list[str]:
	"""
	Derive table columns from the scalar fields of the first row.

	Nested objects and arrays never become columns.

	Args:
		rows: Row nodes.

	Returns:
		Column names in insertion order.
	"""
	if not rows or rows[0].kind != "mapping":
		return []
	return [key for key, child in rows[0].fields if child.kind == "scalar"]


#============================================
def derive_columns_union(rows: list[DataNode], scalar_only: bool = False) -> list[str]:
	"""
	Derive table columns from the union of keys across all rows.

	Args:
		rows: Row nodes.
		scalar_only: Drop keys whose value is nested in any row.

	Returns:
		Column names in first-seen order.
	"""
	names: list[str] = []
	seen: set[str] = set()
	for row in rows:
		if row.kind != "mapping":
			continue
		for key, _child in row.fields:
			if key not in seen:
				seen.add(key)
				names.append(key)
	if scalar_only:
		nested = {
			key for row in rows if row.kind == "mapping"
			for key, child in row.fields if child.kind != "scalar"
		}
		names = [name for name in names if name not in nested]
	return names


#============================================
def build_even_columns(
	names: list[str],
	left: float,
	total_width: float,
	font_size: float = CELL_TEXT_SIZE,
) -> list[Column]:
	"""
	Split the available width evenly between columns.

	Args:
		names: Column names.
		left: Left edge of the table.
		total_width: Available content width.
		font_size: Cell font size for the character budget.

	Returns:
		Column descriptors.
	"""
	if not names:
		return []
	width = total_width / len(names)
	return build_fixed_columns(names, left, [width] * len(names), font_size)


#============================================
def build_fixed_columns(
	names: list[str],
	left: float,
	widths: list[float],
	font_size: float = CELL_TEXT_SIZE,
) -> list[Column]:
	"""
	Lay out columns with explicit widths.

	Args:
		names: Column names.
		left: Left edge of the table.
		widths: Column widths in points.
		font_size: Cell font size for the character budget.

	Returns:
		Column descriptors.
	"""
	columns: list[Column] = []
	x = left
	for name, width in zip(names, widths):
		max_chars = dtp.formatting.compute_max_chars(width, font_size)
		columns.append(Column(name=name, x=x, width=width, max_chars=max_chars))
		x += width
	return columns
