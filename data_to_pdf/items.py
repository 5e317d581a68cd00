"""
Per item processing: parameter normalization, candidate selection,
rendering, binary attachment and optional upload.
"""

# Standard Library
import dataclasses
import json

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.dispatcher
import data_to_pdf.field_filter
import data_to_pdf.strategies
import data_to_pdf.upload


ItemParameters = dtp.config.ItemParameters
RenderOptions = dtp.config.RenderOptions
UploadError = dtp.upload.UploadError

INPUT_SOURCES = dtp.config.INPUT_SOURCES
OUTPUT_TYPES = dtp.config.OUTPUT_TYPES
DEFAULT_INPUT_FIELD = dtp.config.DEFAULT_INPUT_FIELD
COMMON_INPUT_FIELDS = dtp.config.COMMON_INPUT_FIELDS
DEFAULT_FILE_NAME = dtp.config.DEFAULT_FILE_NAME
DEFAULT_TITLE = dtp.config.DEFAULT_TITLE
EMPTY_MANUAL_MARKUP = dtp.config.EMPTY_MANUAL_MARKUP
PDF_MIME_TYPE = dtp.config.PDF_MIME_TYPE
BINARY_PROPERTY = dtp.config.BINARY_PROPERTY


@dataclasses.dataclass
class BinaryAttachment:
	data: bytes
	mime_type: str
	file_name: str


@dataclasses.dataclass
class OutputItem:
	json: dict
	binary: dict[str, BinaryAttachment] = dataclasses.field(default_factory=dict)


class ItemRenderError(RuntimeError):
	"""
	Raised when an item cannot be turned into a PDF.
	"""

	def __init__(self, index: int) -> None:
		self.index = index
		super().__init__(f"Failed to create PDF for item {index}")


#============================================
def parse_flag(value) -> bool:
	"""
	Interpret a boolean option that may arrive as a string.

	Args:
		value: Bool, string or None.

	Returns:
		Boolean value.
	"""
	if isinstance(value, str):
		return value.strip().lower() in ("1", "true", "yes", "on")
	return bool(value)


#============================================
def build_item_parameters(options: dict | None) -> ItemParameters:
	"""
	Build item parameters from a camelCase option mapping.

	Unknown choices fall back to their defaults.

	Args:
		options: Mapping with keys like "inputSource" and "pageFormat".

	Returns:
		ItemParameters.
	"""
	options = options or {}
	input_source = options.get("inputSource") or "previousNode"
	if input_source not in INPUT_SOURCES:
		input_source = "previousNode"
	output_type = options.get("outputType") or "binary"
	if output_type not in OUTPUT_TYPES:
		output_type = "binary"
	file_name = options.get("fileName", DEFAULT_FILE_NAME)
	params = ItemParameters(
		input_source=input_source,
		html_content=str(options.get("htmlContent") or ""),
		input_field=str(options.get("inputField") or DEFAULT_INPUT_FIELD),
		file_name=str(file_name or ""),
		page_format=dtp.config.normalize_page_format(options.get("pageFormat")),
		output_type=output_type,
		exclude_fields=dtp.field_filter.parse_field_list(options.get("excludeFields")),
		include_fields=dtp.field_filter.parse_field_list(options.get("includeFields")),
		pdf_title=str(options.get("pdfTitle") or DEFAULT_TITLE),
		use_template=parse_flag(options.get("useTemplate")),
		html_template=str(options.get("htmlTemplate") or ""),
	)
	return params


#============================================
def build_render_options(params: ItemParameters) -> RenderOptions:
	"""
	Derive render options from item parameters.

	Args:
		params: Item parameters.

	Returns:
		RenderOptions.
	"""
	return RenderOptions(
		exclude_fields=set(params.exclude_fields),
		include_fields=set(params.include_fields),
		title=params.pdf_title,
		page_format=params.page_format,
	)


#============================================
def is_blank(value) -> bool:
	"""
	Check for a missing or empty field value.
	"""
	if value is None:
		return True
	if isinstance(value, (str, list, dict)):
		return not value
	return False


#============================================
def resolve_candidate(item_json: dict, params: ItemParameters) -> tuple[str, object]:
	"""
	Select the raw input string and template data for one item.

	Args:
		item_json: The item's JSON payload.
		params: Item parameters.

	Returns:
		Tuple of (candidate string, data tree for templates).
	"""
	if params.input_source == "manual":
		candidate = params.html_content if params.html_content.strip() else EMPTY_MANUAL_MARKUP
		return candidate, item_json

	value = item_json.get(params.input_field)
	if isinstance(value, str) and value:
		return value, item_json
	if not is_blank(value):
		return json.dumps(value, ensure_ascii=False, default=str), value

	for field_name in COMMON_INPUT_FIELDS:
		field_value = item_json.get(field_name)
		if isinstance(field_value, str) and field_value:
			return field_value, item_json

	return json.dumps(item_json, ensure_ascii=False, default=str), item_json


#============================================
def resolve_file_name(params: ItemParameters, index: int) -> str:
	"""
	Pick the output file name for an item.

	Args:
		params: Item parameters.
		index: Zero based item index.

	Returns:
		File name.
	"""
	if params.file_name.strip():
		return params.file_name.strip()
	return f"output-{index + 1}.pdf"


#============================================
def process_item(
	index: int,
	item_json: dict,
	params: ItemParameters,
	strategies: list | None = None,
	uploader=None,
	verbose: bool = False,
) -> OutputItem:
	"""
	Render one item and attach or upload the PDF.

	Args:
		index: Zero based item index.
		item_json: The item's JSON payload.
		params: Item parameters.
		strategies: External renderers, defaults to the configured order.
		uploader: Callable (pdf_bytes, file_name) -> url.
		verbose: Print progress.

	Returns:
		OutputItem with the copied JSON plus PDF outputs.
	"""
	if uploader is None:
		uploader = dtp.upload.upload_to_temp_service
	options = build_render_options(params)
	candidate, data = resolve_candidate(item_json, params)
	template = None
	if params.use_template and params.html_template.strip():
		template = params.html_template
	# any failure inside rendering is fatal for this item only
	try:
		result = dtp.dispatcher.render_document(
			candidate,
			options,
			template=template,
			fallback_data=data,
			strategies=strategies,
			verbose=verbose,
		)
	except Exception as error:
		raise ItemRenderError(index) from error
	if not result.pdf_bytes:
		raise ItemRenderError(index)

	file_name = resolve_file_name(params, index)
	if verbose:
		print(f"Item {index}: route={result.route} renderer={result.renderer} bytes={len(result.pdf_bytes)}")
	output = OutputItem(json=dict(item_json))
	if params.output_type in ("binary", "both"):
		output.binary[BINARY_PROPERTY] = BinaryAttachment(
			data=result.pdf_bytes,
			mime_type=PDF_MIME_TYPE,
			file_name=file_name,
		)
	if params.output_type in ("url", "both"):
		try:
			url = uploader(result.pdf_bytes, file_name)
		except UploadError as error:
			output.json["pdfUrlError"] = f"Failed to upload PDF: {error}"
		else:
			output.json["pdfUrl"] = url
			output.json["pdfFileName"] = file_name
	return output


#============================================
def process_items(
	items: list[dict],
	params: ItemParameters,
	strategies: list | None = None,
	uploader=None,
	continue_on_fail: bool = False,
	verbose: bool = False,
) -> list[OutputItem]:
	"""
	Process items strictly in order.

	Args:
		items: Item JSON payloads.
		params: Item parameters shared by every item.
		strategies: External renderers, built once for the batch.
		uploader: Callable (pdf_bytes, file_name) -> url.
		continue_on_fail: Record failures as error items instead of raising.
		verbose: Print progress.

	Returns:
		List of OutputItem, one per input item.
	"""
	if strategies is None:
		strategies = dtp.strategies.build_strategies()
	outputs = []
	for index, item_json in enumerate(items):
		try:
			output = process_item(index, item_json, params, strategies, uploader, verbose)
		except ItemRenderError as error:
			if not continue_on_fail:
				raise
			if verbose:
				print(f"Item {index}: {error}")
			output = OutputItem(json={"error": str(error)})
		outputs.append(output)
	return outputs
