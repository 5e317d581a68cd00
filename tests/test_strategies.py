import sys
import types

import pytest
import requests

import data_to_pdf.config
import data_to_pdf.layout
import data_to_pdf.strategies
import data_to_pdf.upload


#============================================
def _sample_pdf() -> bytes:
	"""
	Build a small valid PDF with the internal engine.
	"""
	options = data_to_pdf.config.RenderOptions()
	return data_to_pdf.layout.render_plain_text("sample", options)


class _FailingStrategy:
	name = "failing"

	def __init__(self) -> None:
		self.calls = 0

	def render(self, markup: str, page_format: str) -> bytes:
		self.calls += 1
		raise data_to_pdf.strategies.RenderStrategyError("unavailable")


class _GarbageStrategy:
	name = "garbage"

	def render(self, markup: str, page_format: str) -> bytes:
		return b"<html>not a pdf</html>"


class _WorkingStrategy:
	name = "working"

	def __init__(self) -> None:
		self.calls = []

	def render(self, markup: str, page_format: str) -> bytes:
		self.calls.append((markup, page_format))
		return _sample_pdf()


class _FakeResponse:

	def __init__(self, status_code: int = 200, content: bytes = b"", payload=None) -> None:
		self.status_code = status_code
		self.content = content
		self.text = content.decode("latin-1")
		self._payload = payload

	def json(self):
		if self._payload is None:
			raise ValueError("no json")
		return self._payload


#============================================
def test_validate_pdf_bytes() -> None:
	"""
	Real PDFs pass, anything else is rejected.
	"""
	assert data_to_pdf.strategies.validate_pdf_bytes(_sample_pdf()) == 1
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError):
		data_to_pdf.strategies.validate_pdf_bytes(b"")
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError):
		data_to_pdf.strategies.validate_pdf_bytes(b"%PDF-1.4 truncated")


#============================================
def test_render_markup_stops_at_first_success() -> None:
	"""
	Strategies run in order until one returns a valid PDF.
	"""
	failing = _FailingStrategy()
	working = _WorkingStrategy()
	later = _WorkingStrategy()
	data = data_to_pdf.strategies.render_markup("<p>x</p>", "Letter", [failing, _GarbageStrategy(), working, later])
	assert data.startswith(b"%PDF")
	assert failing.calls == 1
	assert working.calls == [("<p>x</p>", "Letter")]
	assert later.calls == []


#============================================
def test_render_markup_collects_errors() -> None:
	"""
	When every strategy fails the error names each of them.
	"""
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError) as error:
		data_to_pdf.strategies.render_markup("<p>x</p>", "A4", [_FailingStrategy(), _GarbageStrategy()])
	assert "failing: unavailable" in str(error.value)
	assert "garbage:" in str(error.value)
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError):
		data_to_pdf.strategies.render_markup("<p>x</p>", "A4", [])


#============================================
def test_build_strategies() -> None:
	"""
	Strategy names map to instances in the given order.
	"""
	strategies = data_to_pdf.strategies.build_strategies(["cloud_api", " wkhtmltopdf", ""])
	assert [strategy.name for strategy in strategies] == ["cloud_api", "wkhtmltopdf"]
	default = data_to_pdf.strategies.build_strategies()
	assert [strategy.name for strategy in default] == ["browser", "wkhtmltopdf", "cloud_api"]
	with pytest.raises(ValueError):
		data_to_pdf.strategies.build_strategies(["nope"])


#============================================
def test_wkhtmltopdf_missing_binary(monkeypatch: pytest.MonkeyPatch) -> None:
	"""
	A missing executable is a strategy failure.
	"""
	monkeypatch.setattr(data_to_pdf.strategies.shutil, "which", lambda name: None)
	strategy = data_to_pdf.strategies.WkhtmltopdfStrategy()
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError):
		strategy.render("<p>x</p>", "A4")


#============================================
def test_browser_launch_failure(monkeypatch: pytest.MonkeyPatch) -> None:
	"""
	Any browser launch error is reported as a strategy failure.
	"""
	def broken_sync_playwright():
		raise RuntimeError("no display")

	sync_api = types.ModuleType("playwright.sync_api")
	sync_api.Error = type("Error", (Exception,), {})
	sync_api.sync_playwright = broken_sync_playwright
	package = types.ModuleType("playwright")
	package.sync_api = sync_api
	monkeypatch.setitem(sys.modules, "playwright", package)
	monkeypatch.setitem(sys.modules, "playwright.sync_api", sync_api)
	strategy = data_to_pdf.strategies.BrowserStrategy()
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError, match="no display"):
		strategy.render("<p>x</p>", "A4")


#============================================
def test_cloud_api_responses(monkeypatch: pytest.MonkeyPatch) -> None:
	"""
	The cloud API accepts PDF responses and rejects errors and timeouts.
	"""
	pdf_bytes = _sample_pdf()
	sent = {}

	def fake_post(url, files=None, data=None, headers=None, timeout=None):
		sent["url"] = url
		sent["form"] = data
		return _FakeResponse(200, pdf_bytes)

	monkeypatch.setattr(data_to_pdf.strategies.requests, "post", fake_post)
	strategy = data_to_pdf.strategies.CloudApiStrategy(url="https://example.invalid/generate")
	assert strategy.render("<p>x</p>", "Letter") == pdf_bytes
	assert sent["url"] == "https://example.invalid/generate"
	assert sent["form"]["pageSize"] == "Letter"

	monkeypatch.setattr(
		data_to_pdf.strategies.requests, "post",
		lambda *args, **kwargs: _FakeResponse(500, b"server error"),
	)
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError):
		strategy.render("<p>x</p>", "A4")

	def raise_timeout(*args, **kwargs):
		raise requests.Timeout("timed out")

	monkeypatch.setattr(data_to_pdf.strategies.requests, "post", raise_timeout)
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError):
		strategy.render("<p>x</p>", "A4")
	# lone surrogates cannot be sent
	with pytest.raises(data_to_pdf.strategies.RenderStrategyError, match="not encodable"):
		strategy.render("<p>\ud800</p>", "A4")


#============================================
def test_upload_success_and_failures(monkeypatch: pytest.MonkeyPatch) -> None:
	"""
	Uploads return the link or raise UploadError with a reason.
	"""
	monkeypatch.setattr(
		data_to_pdf.upload.requests, "post",
		lambda *args, **kwargs: _FakeResponse(200, b"{}", {"success": True, "link": "https://file.io/abc"}),
	)
	assert data_to_pdf.upload.upload_to_temp_service(b"%PDF", "a.pdf") == "https://file.io/abc"

	monkeypatch.setattr(
		data_to_pdf.upload.requests, "post",
		lambda *args, **kwargs: _FakeResponse(200, b"{}", {"success": False, "message": "quota"}),
	)
	with pytest.raises(data_to_pdf.upload.UploadError, match="quota"):
		data_to_pdf.upload.upload_to_temp_service(b"%PDF", "a.pdf")

	monkeypatch.setattr(
		data_to_pdf.upload.requests, "post",
		lambda *args, **kwargs: _FakeResponse(502, b"<html>bad gateway</html>"),
	)
	with pytest.raises(data_to_pdf.upload.UploadError, match="Failed to parse upload response"):
		data_to_pdf.upload.upload_to_temp_service(b"%PDF", "a.pdf")

	def raise_connection(*args, **kwargs):
		raise requests.ConnectionError("offline")

	monkeypatch.setattr(data_to_pdf.upload.requests, "post", raise_connection)
	with pytest.raises(data_to_pdf.upload.UploadError, match="offline"):
		data_to_pdf.upload.upload_to_temp_service(b"%PDF", "a.pdf")
