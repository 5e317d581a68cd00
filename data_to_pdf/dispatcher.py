"""
Top level render routing.

Routes:
	template    interpolate the template, render it externally, fall back
	            to plain text layout of the stripped markup
	structured  filter fields and lay out with the internal engine only
	markup      render externally, retry once inside a style sheet shell,
	            fall back to plain text layout of the stripped markup
	plain_text  plain text layout
"""

# Standard Library
import dataclasses
import datetime

# local repo modules
import data_to_pdf as dtp
import data_to_pdf.config
import data_to_pdf.field_filter
import data_to_pdf.layout
import data_to_pdf.markup
import data_to_pdf.sniffer
import data_to_pdf.strategies
import data_to_pdf.template


RenderOptions = dtp.config.RenderOptions
RenderStrategyError = dtp.strategies.RenderStrategyError

ROUTE_TEMPLATE = "template"
ROUTE_STRUCTURED = "structured"
ROUTE_MARKUP = "markup"
ROUTE_PLAIN_TEXT = "plain_text"

RENDERER_EXTERNAL = "external"
RENDERER_EXTERNAL_SHELL = "external_shell"
RENDERER_LAYOUT = "layout"


@dataclasses.dataclass
class RenderResult:
	pdf_bytes: bytes
	route: str
	renderer: str


#============================================
def try_external(
	markup: str,
	options: RenderOptions,
	strategies: list,
	verbose: bool,
) -> bytes | None:
	"""
	Run the external renderer chain once.

	Args:
		markup: HTML document.
		options: Render options.
		strategies: Strategy objects in priority order.
		verbose: Print failures.

	Returns:
		PDF bytes, or None when every renderer failed.
	"""
	if not strategies:
		return None
	try:
		return dtp.strategies.render_markup(markup, options.page_format, strategies, verbose=verbose)
	except RenderStrategyError as error:
		if verbose:
			print(f"External rendering failed: {error}")
		return None


#============================================
def render_stripped_markup(markup: str, options: RenderOptions, route: str, verbose: bool) -> RenderResult:
	"""
	Lay out the text content of markup with the internal engine.

	Args:
		markup: HTML document or fragment.
		options: Render options.
		route: Route name for the result.
		verbose: Print the fallback.

	Returns:
		RenderResult.
	"""
	if verbose:
		print("Falling back to plain text layout")
	text = dtp.markup.strip_tags(markup)
	pdf_bytes = dtp.layout.render_plain_text(text, options)
	return RenderResult(pdf_bytes=pdf_bytes, route=route, renderer=RENDERER_LAYOUT)


#============================================
def render_template_route(
	markup: str,
	options: RenderOptions,
	strategies: list,
	verbose: bool,
) -> RenderResult:
	"""
	Render interpolated template markup.

	Args:
		markup: Interpolated template.
		options: Render options.
		strategies: Strategy objects.
		verbose: Print progress.

	Returns:
		RenderResult.
	"""
	pdf_bytes = try_external(markup, options, strategies, verbose)
	if pdf_bytes is not None:
		return RenderResult(pdf_bytes=pdf_bytes, route=ROUTE_TEMPLATE, renderer=RENDERER_EXTERNAL)
	return render_stripped_markup(markup, options, ROUTE_TEMPLATE, verbose)


#============================================
def render_markup_route(
	markup: str,
	options: RenderOptions,
	strategies: list,
	verbose: bool,
) -> RenderResult:
	"""
	Render literal markup input.

	Args:
		markup: Markup input.
		options: Render options.
		strategies: Strategy objects.
		verbose: Print progress.

	Returns:
		RenderResult.
	"""
	pdf_bytes = try_external(markup, options, strategies, verbose)
	if pdf_bytes is not None:
		return RenderResult(pdf_bytes=pdf_bytes, route=ROUTE_MARKUP, renderer=RENDERER_EXTERNAL)
	if strategies:
		if verbose:
			print("Retrying inside a style sheet shell")
		shell = dtp.markup.wrap_in_shell(markup, options.title)
		pdf_bytes = try_external(shell, options, strategies, verbose)
		if pdf_bytes is not None:
			return RenderResult(pdf_bytes=pdf_bytes, route=ROUTE_MARKUP, renderer=RENDERER_EXTERNAL_SHELL)
	return render_stripped_markup(markup, options, ROUTE_MARKUP, verbose)


#============================================
def render_document(
	candidate,
	options: RenderOptions,
	template: str | None = None,
	fallback_data=None,
	strategies: list | None = None,
	verbose: bool = False,
	now: datetime.datetime | None = None,
) -> RenderResult:
	"""
	Turn one input candidate into PDF bytes.

	Args:
		candidate: Raw input string (markup, JSON or text).
		options: Render options.
		template: Optional markup template; selects the template route.
		fallback_data: Data for the template when the candidate is not JSON.
		strategies: External renderers, defaults to the configured order.
		verbose: Print routing decisions.
		now: Timestamp for titles and date placeholders.

	Returns:
		RenderResult.
	"""
	if strategies is None:
		strategies = dtp.strategies.build_strategies()
	sniff = dtp.sniffer.sniff_content(candidate)

	if template:
		if verbose:
			print(f"Route: {ROUTE_TEMPLATE}")
		if sniff.kind == dtp.sniffer.KIND_STRUCTURED:
			data = sniff.data
		elif fallback_data is not None:
			data = fallback_data
		else:
			data = sniff.text
		data = dtp.field_filter.filter_fields(data, options)
		markup = dtp.template.interpolate_template(template, data, options.title, now)
		return render_template_route(markup, options, strategies, verbose)

	if sniff.kind == dtp.sniffer.KIND_STRUCTURED:
		if verbose:
			print(f"Route: {ROUTE_STRUCTURED}")
		data = dtp.field_filter.filter_fields(sniff.data, options)
		pdf_bytes = dtp.layout.render_structured(data, options, now)
		return RenderResult(pdf_bytes=pdf_bytes, route=ROUTE_STRUCTURED, renderer=RENDERER_LAYOUT)

	if sniff.kind == dtp.sniffer.KIND_MARKUP:
		if verbose:
			print(f"Route: {ROUTE_MARKUP}")
		return render_markup_route(sniff.text, options, strategies, verbose)

	if verbose:
		print(f"Route: {ROUTE_PLAIN_TEXT}")
	pdf_bytes = dtp.layout.render_plain_text(sniff.text, options)
	return RenderResult(pdf_bytes=pdf_bytes, route=ROUTE_PLAIN_TEXT, renderer=RENDERER_LAYOUT)
