"""
Generic OpenRTB envelope builder.

Builds a protocol-conformant bid request from bid request items and the
batch context. Bidder-specific enrichment is supplied through two hooks:

    imp hook:     (imp, item, context) -> imp
    request hook: (request, items, batch, context) -> request
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..models.batch_context import BatchContext
from ..models.bid_request import BidRequestItem, MediaType
from ..utils.constants import ORTB_VIDEO_PARAMS
from ..utils.id_generator import generate_request_id
from .native import NATIVE_VERSION, serialize_native_request, to_ortb_native_request


@dataclass
class ConversionContext:
    """Per-message values available to both hooks."""
    media_type: MediaType
    currency: str
    bid_requests: list[BidRequestItem] = field(default_factory=list)


ImpHook = Callable[[dict[str, Any], BidRequestItem, ConversionContext], dict[str, Any]]
RequestHook = Callable[
    [dict[str, Any], list[BidRequestItem], BatchContext, ConversionContext],
    dict[str, Any],
]


def _banner_object(item: BidRequestItem) -> Optional[dict[str, Any]]:
    sizes = (item.banner or {}).get("sizes") or []
    if sizes and not isinstance(sizes[0], list):
        sizes = [sizes]
    formats = [{"w": s[0], "h": s[1]} for s in sizes if len(s) == 2]
    if not formats:
        return None
    banner: dict[str, Any] = {"topframe": 0, "format": formats}
    pos = (item.banner or {}).get("pos")
    if pos is not None:
        banner["pos"] = pos
    return banner


def _video_object(item: BidRequestItem) -> dict[str, Any]:
    declaration = item.video or {}
    video = {
        key: copy.deepcopy(declaration[key])
        for key in ORTB_VIDEO_PARAMS
        if key in declaration
    }

    player_size = declaration.get("playerSize")
    if player_size:
        if isinstance(player_size[0], list):
            player_size = player_size[0]
        if len(player_size) == 2:
            video.setdefault("w", player_size[0])
            video.setdefault("h", player_size[1])
    return video


def _native_object(item: BidRequestItem) -> Optional[dict[str, Any]]:
    ortb_native = to_ortb_native_request(item.native)
    if ortb_native is None:
        return None
    return {"request": serialize_native_request(ortb_native), "ver": NATIVE_VERSION}


class OrtbConverter:
    """
    Converts bid request items to an OpenRTB 2.x request.

    Only the media object of the message's partition is built, so an
    item declaring both banner and video travels as pure video.
    """

    def __init__(
        self,
        imp_hook: Optional[ImpHook] = None,
        request_hook: Optional[RequestHook] = None,
    ):
        self.imp_hook = imp_hook
        self.request_hook = request_hook

    def build_imp(self, item: BidRequestItem, context: ConversionContext) -> dict[str, Any]:
        """Build the generic impression for one item."""
        imp: dict[str, Any] = {"id": item.bid_id}

        if context.media_type is MediaType.VIDEO:
            imp["video"] = _video_object(item)
        elif context.media_type is MediaType.NATIVE:
            native = _native_object(item)
            if native is not None:
                imp["native"] = native
        else:
            banner = _banner_object(item)
            if banner is not None:
                imp["banner"] = banner

        imp_ext = copy.deepcopy(item.ortb2_imp.get("ext") or {})
        imp["ext"] = imp_ext
        return imp

    def build_request(
        self,
        imps: list[dict[str, Any]],
        batch: BatchContext,
        context: ConversionContext,
    ) -> dict[str, Any]:
        """Build the generic envelope around the impressions."""
        request = copy.deepcopy(batch.ortb2)
        request["id"] = generate_request_id()
        request["imp"] = imps
        request["cur"] = [context.currency]
        return request

    def to_ortb(
        self,
        items: list[BidRequestItem],
        batch: BatchContext,
        context: ConversionContext,
    ) -> dict[str, Any]:
        """Build the full envelope, running both hooks."""
        imps = []
        for item in items:
            imp = self.build_imp(item, context)
            if self.imp_hook is not None:
                imp = self.imp_hook(imp, item, context)
            imps.append(imp)

        request = self.build_request(imps, batch, context)
        if self.request_hook is not None:
            request = self.request_hook(request, items, batch, context)
        return request
