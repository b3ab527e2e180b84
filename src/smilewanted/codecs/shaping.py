"""
Result shaping by response format tag.

The endpoint tags each bid with a format (formatTypeSw). The tag decides
where the creative goes:

    display (no tag)  -> ad markup as-is
    video_instream    -> ad moved to vast_url
    video_outstream   -> as instream, plus an outstream renderer
    native            -> ad parsed as an OpenRTB native document
"""

from typing import Any, Optional

from ..logging import adapter_logger
from ..models.bid_result import BidResult, Renderer, ResultKind
from ..ortb.native import to_legacy_response, to_ortb_native_request
from .base import ResponseParseError, parse_json

logger = adapter_logger()


def outstream_render(bid: BidResult) -> None:
    """Queue the outstream player initialisation for a video bid."""
    bid.renderer.push({
        "width": bid.width,
        "height": bid.height,
        "vastUrl": bid.vast_url,
        "elId": bid.ad_unit_code,
    })


def new_renderer(bid_id: str, template_url: Optional[str]) -> Renderer:
    """
    Create the outstream renderer for a bid.

    A failure to attach the render routine is logged; the renderer is
    returned regardless so the bid stays playable.
    """
    renderer = Renderer.install(id=bid_id, url=template_url, loaded=False)
    try:
        renderer.set_render(outstream_render)
    except Exception as e:
        logger.warning(
            "Error calling set_render on outstream renderer",
            bid_id=bid_id,
            error=str(e),
        )
    return renderer


def native_template(declaration: Any) -> Optional[dict[str, Any]]:
    """OpenRTB native request for a legacy declaration, used to name response assets."""
    if not isinstance(declaration, dict):
        return None
    return to_ortb_native_request(declaration)


def parse_native_markup(
    markup: Any,
    native_request: Optional[dict[str, Any]],
) -> dict[str, Any]:
    """
    Parse native markup and reshape it to the legacy native result.

    native_request is the OpenRTB native request the markup answers.

    Raises:
        ResponseParseError: markup is missing or not a native document
    """
    if not markup:
        raise ResponseParseError("Native bid without markup")

    document = parse_json(markup, "native markup")
    if isinstance(document, dict) and isinstance(document.get("native"), dict):
        document = document["native"]
    if not isinstance(document, dict):
        raise ResponseParseError("Native markup is not an object")

    return to_legacy_response(document, native_request)


def clean_deal_id(value: Any) -> Optional[str]:
    """Deal id if present and non-empty."""
    if value is None:
        return None
    value = str(value)
    return value or None


def build_meta(advertiser_domains: Any) -> dict[str, Any]:
    """Result metadata; advertiser domains only when given as a list."""
    meta: dict[str, Any] = {}
    if isinstance(advertiser_domains, list):
        meta["advertiserDomains"] = advertiser_domains
    return meta


def shape_result(
    result: BidResult,
    kind: ResultKind,
    native_request: Optional[dict[str, Any]] = None,
    outstream_template_url: Optional[str] = None,
) -> BidResult:
    """
    Apply format-specific shaping to a result built from display fields.

    Raises:
        ResponseParseError: native markup cannot be parsed
    """
    result.media_type = kind.media_type

    if kind.is_video:
        result.vast_url = result.ad
        result.ad = None
        if kind is ResultKind.VIDEO_OUTSTREAM:
            result.renderer = new_renderer(result.request_id, outstream_template_url)
    elif kind is ResultKind.NATIVE:
        result.native = parse_native_markup(result.ad, native_request)
    else:
        # Display: markup passes through untouched
        pass

    return result
