"""
CLI entry points for JSON item files to PDF conversion.
"""

# Standard Library
import argparse
import io
import json
import pathlib
import time

# PIP3 modules
import pypdf

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.items
import data_to_pdf.strategies


ItemParameters = dtp.config.ItemParameters
OutputItem = dtp.items.OutputItem

DEFAULT_STRATEGY_ORDER = dtp.config.DEFAULT_STRATEGY_ORDER
DEFAULT_INPUT_FIELD = dtp.config.DEFAULT_INPUT_FIELD
DEFAULT_PAGE_FORMAT = dtp.config.DEFAULT_PAGE_FORMAT
DEFAULT_TITLE = dtp.config.DEFAULT_TITLE
BINARY_PROPERTY = dtp.config.BINARY_PROPERTY


#============================================
def gather_json_paths(inputs: list[str]) -> list[pathlib.Path]:
	"""
	Gather JSON input paths from files and directories.

	Args:
		inputs: Input paths.

	Returns:
		List of JSON file paths, directories expanded in sorted order.
	"""
	paths: list[pathlib.Path] = []
	for entry in inputs:
		path = pathlib.Path(entry).expanduser().resolve()
		if path.is_dir():
			paths.extend(sorted(path.rglob("*.json")))
			continue
		if path.is_file():
			paths.append(path)
	return paths


#============================================
def load_items(path: pathlib.Path, whole: bool) -> list[dict]:
	"""
	Load items from a JSON file.

	An object is one item and an array is one item per element, unless
	whole is set, in which case the entire document becomes the "output"
	field of a single item.

	Args:
		path: JSON file path.
		whole: Treat the whole document as one item.

	Returns:
		List of item payloads.
	"""
	with path.open("r", encoding="utf-8") as handle:
		data = json.load(handle)
	if whole:
		return [{DEFAULT_INPUT_FIELD: data}]
	if isinstance(data, dict):
		return [data]
	if isinstance(data, list):
		items = []
		for entry in data:
			if isinstance(entry, dict):
				items.append(entry)
			else:
				items.append({DEFAULT_INPUT_FIELD: entry})
		return items
	return [{DEFAULT_INPUT_FIELD: data}]


#============================================
def build_parameters(args: argparse.Namespace, file_name: str) -> ItemParameters:
	"""
	Build item parameters from CLI args.

	Args:
		args: Parsed argparse namespace.
		file_name: Output file name for this input file.

	Returns:
		ItemParameters.
	"""
	options = {
		"inputSource": "previousNode",
		"inputField": args.input_field,
		"fileName": file_name,
		"pageFormat": args.page_format,
		"outputType": args.output_type,
		"excludeFields": args.exclude_fields,
		"includeFields": args.include_fields,
		"pdfTitle": args.title,
	}
	if args.template_path:
		options["useTemplate"] = True
		options["htmlTemplate"] = pathlib.Path(args.template_path).read_text(encoding="utf-8")
	return dtp.items.build_item_parameters(options)


#============================================
def unique_output_path(output_dir: pathlib.Path, file_name: str, used: set[str]) -> pathlib.Path:
	"""
	Return an output path that was not written yet in this run.

	Args:
		output_dir: Output directory.
		file_name: Requested file name.
		used: Names already written, updated in place.

	Returns:
		Output path.
	"""
	name = pathlib.Path(file_name).name
	stem = pathlib.Path(name).stem
	suffix = pathlib.Path(name).suffix or ".pdf"
	candidate = name
	counter = 2
	while candidate in used:
		candidate = f"{stem}-{counter}{suffix}"
		counter += 1
	used.add(candidate)
	return output_dir / candidate


#============================================
def count_pages(pdf_bytes: bytes) -> int:
	"""
	Count pages of a PDF.
	"""
	reader = pypdf.PdfReader(io.BytesIO(pdf_bytes))
	return len(reader.pages)


#============================================
def write_manifest(manifest_path: pathlib.Path, records: list[dict], args: argparse.Namespace) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		records: One record per processed item.
		args: Parsed argparse namespace.
	"""
	data = {
		"items": records,
		"total_items": len(records),
		"failed_items": sum(1 for record in records if "error" in record),
		"settings": {
			"page_format": args.page_format,
			"title": args.title,
			"output_type": args.output_type,
			"input_field": args.input_field,
			"exclude_fields": args.exclude_fields,
			"include_fields": args.include_fields,
			"template": args.template_path,
			"strategies": args.strategies,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def build_record(path: pathlib.Path, index: int, output: OutputItem, output_path: pathlib.Path | None) -> dict:
	"""
	Summarize one output item for the manifest.

	Args:
		path: Input JSON file.
		index: Item index within the file.
		output: Processed item.
		output_path: Written PDF path, if any.

	Returns:
		Manifest record.
	"""
	record = {"input": str(path), "index": index}
	if set(output.json) == {"error"} and not output.binary:
		record["error"] = output.json["error"]
		return record
	attachment = output.binary.get(BINARY_PROPERTY)
	if attachment is not None and output_path is not None:
		record["file"] = str(output_path)
		record["bytes"] = len(attachment.data)
		record["pages"] = count_pages(attachment.data)
	for key in ("pdfUrl", "pdfFileName", "pdfUrlError"):
		if key in output.json:
			record[key] = output.json[key]
	return record


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Convert JSON items (HTML, text or data) to PDF files.")
	parser.add_argument("inputs", nargs="+", help="JSON files or directories.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", required=True, help="Output directory for PDFs.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument(
		"-t", "--output-type", dest="output_type", choices=("binary", "url", "both"), default="binary",
		help="Write files, upload for a temporary link, or both.",
	)
	output_group.add_argument("-f", "--file-name", dest="file_name", default=None, help="PDF file name for every item.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-i", "--input-field", dest="input_field", default=DEFAULT_INPUT_FIELD, help="Item field holding the content.")
	input_group.add_argument("-w", "--whole", dest="whole", action="store_true", help="Treat each file as a single item.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-p", "--page-format", dest="page_format", choices=("A4", "Letter"), default=DEFAULT_PAGE_FORMAT,
		help="Page format.",
	)
	layout_group.add_argument("-T", "--title", dest="title", default=DEFAULT_TITLE, help="Document title.")
	layout_group.add_argument("-x", "--exclude-fields", dest="exclude_fields", default="", help="Comma separated fields to drop.")
	layout_group.add_argument("-I", "--include-fields", dest="include_fields", default="", help="Comma separated fields to keep.")
	layout_group.add_argument("--template", dest="template_path", default=None, help="Markup template file with {{placeholders}}.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument(
		"-s", "--strategies", dest="strategies", default=",".join(DEFAULT_STRATEGY_ORDER),
		help="Comma separated external renderers in priority order.",
	)
	behavior_group.add_argument(
		"-n", "--no-remote", dest="strategies", action="store_const", const="",
		help="Disable external renderers, use the internal layout only.",
	)
	behavior_group.add_argument(
		"-c", "--continue-on-fail", dest="continue_on_fail", action="store_true",
		help="Record failing items in the manifest and keep going.",
	)
	behavior_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Print routing details.")

	parser.set_defaults(
		whole=False,
		continue_on_fail=False,
		verbose=False,
	)

	args = parser.parse_args()
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from JSON items to PDF files.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Data to PDF pipeline")
	print(f"Output directory: {args.output_dir}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")
	print(f"Page format: {args.page_format}")
	print(f"Output type: {args.output_type}")
	print(f"Renderers: {args.strategies or 'none'}")
	if args.template_path:
		print(f"Template: {args.template_path}")

	paths = gather_json_paths(args.inputs)
	print(f"JSON files found: {len(paths)}")

	output_dir = pathlib.Path(args.output_dir)
	output_dir.mkdir(parents=True, exist_ok=True)
	strategies = dtp.strategies.build_strategies(args.strategies.split(","))

	start_time = time.perf_counter()
	records: list[dict] = []
	used_names: set[str] = set()
	for path in paths:
		items = load_items(path, args.whole)
		file_name = args.file_name or f"{path.stem}.pdf"
		params = build_parameters(args, file_name)
		file_start = time.perf_counter()
		outputs = dtp.items.process_items(
			items,
			params,
			strategies=strategies,
			continue_on_fail=args.continue_on_fail,
			verbose=args.verbose,
		)
		for index, output in enumerate(outputs):
			output_path = None
			attachment = output.binary.get(BINARY_PROPERTY)
			if attachment is not None:
				output_path = unique_output_path(output_dir, attachment.file_name, used_names)
				output_path.write_bytes(attachment.data)
			record = build_record(path, index, output, output_path)
			records.append(record)
			if "error" in record:
				print(f"{path.name}[{index}]: {record['error']}")
				continue
			target = record.get("file") or record.get("pdfUrl") or record.get("pdfUrlError", "")
			print(f"{path.name}[{index}]: {target}")
		print(f"{path.name}: {len(outputs)} items in {time.perf_counter() - file_start:.2f}s")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = str(output_dir / "manifest.json")
	write_manifest(pathlib.Path(manifest_path), records, args)

	total_time = time.perf_counter() - start_time
	print(f"Items processed: {len(records)}")
	print(f"Timing: total={total_time:.2f}s")
	print(f"Manifest written: {manifest_path}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)


if __name__ == "__main__":
	main()
