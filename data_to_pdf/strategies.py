"""
External markup to PDF renderers, tried in a configured order.
"""

# Standard Library
import io
import pathlib
import shutil
import subprocess
import tempfile

# PIP3 modules
import pypdf
import pypdf.errors
import requests

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config


DEFAULT_STRATEGY_ORDER = dtp.config.DEFAULT_STRATEGY_ORDER
BROWSER_TIMEOUT = dtp.config.BROWSER_TIMEOUT
WKHTMLTOPDF_TIMEOUT = dtp.config.WKHTMLTOPDF_TIMEOUT
CLOUD_API_URL = dtp.config.CLOUD_API_URL
CLOUD_API_TIMEOUT = dtp.config.CLOUD_API_TIMEOUT
CLOUD_API_MARGIN = dtp.config.CLOUD_API_MARGIN
HTTP_USER_AGENT = dtp.config.HTTP_USER_AGENT

PDF_MAGIC = b"%PDF"


class RenderStrategyError(RuntimeError):
	"""
	Raised when a markup renderer cannot produce a PDF.
	"""


#============================================
def validate_pdf_bytes(data: bytes) -> int:
	"""
	Check that renderer output is a readable PDF.

	Args:
		data: Candidate PDF bytes.

	Returns:
		Number of pages.
	"""
	if not data or not data.startswith(PDF_MAGIC):
		raise RenderStrategyError("output is not a PDF document")
	try:
		reader = pypdf.PdfReader(io.BytesIO(data))
		page_count = len(reader.pages)
	except (pypdf.errors.PyPdfError, ValueError) as error:
		raise RenderStrategyError(f"unreadable PDF output: {error}") from error
	if page_count < 1:
		raise RenderStrategyError("PDF output has no pages")
	return page_count


class BrowserStrategy:
	"""
	Headless Chromium through Playwright.
	"""

	name = "browser"

	def __init__(self, timeout: float = BROWSER_TIMEOUT) -> None:
		self.timeout = timeout

	#============================================
	def render(self, markup: str, page_format: str) -> bytes:
		"""
		Render markup with a headless browser.

		Args:
			markup: HTML document.
			page_format: "A4" or "Letter".

		Returns:
			PDF bytes.
		"""
		# playwright is an optional extra, a missing install fails this strategy only
		try:
			import playwright.sync_api
		except ImportError as error:
			raise RenderStrategyError("playwright is not installed") from error
		timeout_ms = self.timeout * 1000.0
		try:
			with playwright.sync_api.sync_playwright() as context:
				browser = context.chromium.launch(
					headless=True,
					args=["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"],
				)
				try:
					page = browser.new_page()
					page.set_content(markup, wait_until="networkidle", timeout=timeout_ms)
					data = page.pdf(format=page_format, print_background=True)
				finally:
					browser.close()
		except playwright.sync_api.Error as error:
			raise RenderStrategyError(str(error)) from error
		except Exception as error:
			raise RenderStrategyError(f"browser failed: {error}") from error
		return data


class WkhtmltopdfStrategy:
	"""
	The wkhtmltopdf command line tool.
	"""

	name = "wkhtmltopdf"

	def __init__(self, timeout: float = WKHTMLTOPDF_TIMEOUT) -> None:
		self.timeout = timeout

	#============================================
	def render(self, markup: str, page_format: str) -> bytes:
		"""
		Render markup with wkhtmltopdf in a temporary directory.

		Args:
			markup: HTML document.
			page_format: "A4" or "Letter".

		Returns:
			PDF bytes.
		"""
		executable = shutil.which("wkhtmltopdf")
		if executable is None:
			raise RenderStrategyError("wkhtmltopdf not found on PATH")
		page_size = "Letter" if page_format == "Letter" else "A4"
		with tempfile.TemporaryDirectory(prefix="html2pdf_") as temp_dir:
			html_path = pathlib.Path(temp_dir) / "document.html"
			pdf_path = pathlib.Path(temp_dir) / "document.pdf"
			html_path.write_text(markup, encoding="utf-8")
			command = [
				executable,
				"--quiet",
				"--page-size",
				page_size,
				"--enable-local-file-access",
				str(html_path),
				str(pdf_path),
			]
			try:
				result = subprocess.run(
					command,
					capture_output=True,
					timeout=self.timeout,
					check=False,
				)
			except subprocess.TimeoutExpired as error:
				raise RenderStrategyError(f"wkhtmltopdf timed out after {self.timeout:.0f}s") from error
			except OSError as error:
				raise RenderStrategyError(f"wkhtmltopdf failed to start: {error}") from error
			# exit code 1 is also used for page warnings, the output file decides
			if not pdf_path.exists() or pdf_path.stat().st_size == 0:
				message = result.stderr.decode("utf-8", "replace").strip()
				if not message:
					message = f"exit code {result.returncode}"
				raise RenderStrategyError(message)
			return pdf_path.read_bytes()


class CloudApiStrategy:
	"""
	The html2pdf.app HTTP API.
	"""

	name = "cloud_api"

	def __init__(self, url: str = CLOUD_API_URL, timeout: float = CLOUD_API_TIMEOUT) -> None:
		self.url = url
		self.timeout = timeout

	#============================================
	def render(self, markup: str, page_format: str) -> bytes:
		"""
		Post markup to the conversion API as multipart form data.

		Args:
			markup: HTML document.
			page_format: "A4" or "Letter".

		Returns:
			PDF bytes.
		"""
		try:
			body = markup.encode("utf-8")
		except UnicodeEncodeError as error:
			raise RenderStrategyError(f"markup is not encodable: {error}") from error
		files = {"html": ("document.html", body, "text/html")}
		form = {
			"pageSize": "Letter" if page_format == "Letter" else "A4",
			"marginTop": CLOUD_API_MARGIN,
			"marginBottom": CLOUD_API_MARGIN,
			"marginLeft": CLOUD_API_MARGIN,
			"marginRight": CLOUD_API_MARGIN,
		}
		headers = {"User-Agent": HTTP_USER_AGENT}
		try:
			response = requests.post(self.url, files=files, data=form, headers=headers, timeout=self.timeout)
		except requests.RequestException as error:
			raise RenderStrategyError(f"request failed: {error}") from error
		if response.status_code != 200 or not response.content:
			raise RenderStrategyError(
				f"Cloud API failed with status {response.status_code}: {response.text[:200]}"
			)
		if not response.content.startswith(PDF_MAGIC):
			raise RenderStrategyError("API did not return a valid PDF")
		return response.content


STRATEGY_REGISTRY = {
	BrowserStrategy.name: BrowserStrategy,
	WkhtmltopdfStrategy.name: WkhtmltopdfStrategy,
	CloudApiStrategy.name: CloudApiStrategy,
}


#============================================
def build_strategies(names: tuple[str, ...] | list[str] = DEFAULT_STRATEGY_ORDER) -> list:
	"""
	Instantiate renderers from a list of strategy names.

	Args:
		names: Strategy names in priority order.

	Returns:
		List of strategy objects.
	"""
	strategies = []
	for name in names:
		key = name.strip()
		if not key:
			continue
		if key not in STRATEGY_REGISTRY:
			known = ", ".join(sorted(STRATEGY_REGISTRY))
			raise ValueError(f"Unknown render strategy '{key}' (known: {known})")
		strategies.append(STRATEGY_REGISTRY[key]())
	return strategies


#============================================
def render_markup(markup: str, page_format: str, strategies: list, verbose: bool = False) -> bytes:
	"""
	Try each renderer in order and return the first valid PDF.

	Args:
		markup: HTML document.
		page_format: "A4" or "Letter".
		strategies: Strategy objects with a name and a render method.
		verbose: Print each attempt.

	Returns:
		PDF bytes.
	"""
	errors: list[str] = []
	for strategy in strategies:
		try:
			data = strategy.render(markup, page_format)
			validate_pdf_bytes(data)
		except Exception as error:
			# any renderer failure moves on to the next renderer
			errors.append(f"{strategy.name}: {error}")
			if verbose:
				print(f"Renderer {strategy.name} failed: {error}")
			continue
		if verbose:
			print(f"Renderer {strategy.name}: {len(data)} bytes")
		return data
	if not errors:
		raise RenderStrategyError("no markup renderers configured")
	raise RenderStrategyError("; ".join(errors))
