"""
Upload of generated PDFs to temporary file hosting.
"""

# PIP3 modules
import requests

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config


UPLOAD_URL = dtp.config.UPLOAD_URL
UPLOAD_TIMEOUT = dtp.config.UPLOAD_TIMEOUT
PDF_MIME_TYPE = dtp.config.PDF_MIME_TYPE
HTTP_USER_AGENT = dtp.config.HTTP_USER_AGENT


class UploadError(RuntimeError):
	"""
	Raised when the hosting service does not return a link.
	"""


#============================================
def upload_to_temp_service(
	pdf_bytes: bytes,
	file_name: str,
	url: str = UPLOAD_URL,
	timeout: float = UPLOAD_TIMEOUT,
) -> str:
	"""
	Upload a PDF and return its temporary download link.

	Files on the default service expire after the first download or 14 days.

	Args:
		pdf_bytes: PDF content.
		file_name: File name sent with the upload.
		url: Upload endpoint.
		timeout: Request timeout in seconds.

	Returns:
		Download URL.
	"""
	files = {"file": (file_name, pdf_bytes, PDF_MIME_TYPE)}
	headers = {"User-Agent": HTTP_USER_AGENT}
	try:
		response = requests.post(url, files=files, headers=headers, timeout=timeout)
	except requests.RequestException as error:
		raise UploadError(str(error)) from error
	try:
		result = response.json()
	except ValueError as error:
		raise UploadError("Failed to parse upload response") from error
	if not isinstance(result, dict):
		raise UploadError("Failed to parse upload response")
	link = result.get("link")
	if result.get("success") and link:
		return str(link)
	raise UploadError(str(result.get("message") or "Upload failed"))
