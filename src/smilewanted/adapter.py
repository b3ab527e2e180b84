"""
SmileWanted bid adapter.

Entry points called by the auction orchestrator. Inputs may be model
objects or the orchestrator's camelCase dicts.

    build_ortb_requests / interpret_ortb_response  -> OpenRTB encoding
    build_requests / interpret_response            -> legacy flat encoding
"""

from typing import Any, Optional, Union

from .codecs.legacy import LegacyCodec
from .codecs.ortb import OrtbCodec
from .config.adapter_config import AdapterConfig
from .logging import LogContext, bidder_logger
from .models.batch_context import BatchContext, GdprConsent
from .models.bid_request import BidRequestItem, MediaType
from .models.bid_result import BidResult
from .models.outbound import OutboundMessage
from .sync.user_sync import UserSync, get_user_syncs
from .utils.constants import BIDDER_ALIASES, BIDDER_CODE, GVL_ID
from .validation import is_bid_request_valid

BidRequestLike = Union[BidRequestItem, dict[str, Any]]
BatchContextLike = Union[BatchContext, dict[str, Any], None]
OutboundLike = Union[OutboundMessage, dict[str, Any], None]


def _to_items(bid_requests: list[BidRequestLike]) -> list[BidRequestItem]:
    return [
        bid if isinstance(bid, BidRequestItem) else BidRequestItem.from_dict(bid)
        for bid in bid_requests or []
    ]


def _to_batch(batch: BatchContextLike) -> BatchContext:
    if isinstance(batch, BatchContext):
        return batch
    return BatchContext.from_dict(batch)


def _to_outbound(request: OutboundLike) -> Optional[OutboundMessage]:
    if request is None or isinstance(request, OutboundMessage):
        return request
    return OutboundMessage(
        url=request.get('url', ''),
        data=request.get('data'),
        method=request.get('method', 'POST'),
    )


def _auction_id(items: list[BidRequestItem], batch: Optional[BatchContext] = None) -> Optional[str]:
    """Auction the batch belongs to, if the orchestrator told us."""
    if batch is not None and batch.auction_id:
        return batch.auction_id
    for item in items:
        if item.auction_id:
            return item.auction_id
    return None


class SmileWantedBidAdapter:
    """Bid adapter for the SmileWanted endpoint."""

    code = BIDDER_CODE
    gvlid = GVL_ID
    aliases = BIDDER_ALIASES
    supported_media_types = [MediaType.BANNER, MediaType.VIDEO, MediaType.NATIVE]

    def __init__(self, config: Optional[AdapterConfig] = None):
        """
        Initialize the adapter.

        Args:
            config: Adapter configuration (uses the global config if not provided)
        """
        self.config = config
        self.ortb_codec = OrtbCodec(config)
        self.legacy_codec = LegacyCodec(config)
        self.logger = bidder_logger(self.code)

    def is_bid_request_valid(self, bid: BidRequestLike) -> bool:
        """Check that a bid request has a zone and, for video, a valid context."""
        valid = is_bid_request_valid(bid)
        if not valid:
            self.logger.debug("Rejected invalid bid request")
        return valid

    def build_ortb_requests(
        self,
        bid_requests: list[BidRequestLike],
        bidder_request: BatchContextLike = None,
    ) -> list[OutboundMessage]:
        """Build OpenRTB requests, one per bid request."""
        items, batch = _to_items(bid_requests), _to_batch(bidder_request)
        with LogContext(auction_id=_auction_id(items, batch)):
            return self.ortb_codec.build_requests(items, batch)

    def interpret_ortb_response(
        self,
        server_response: Any,
        request: OutboundLike,
    ) -> list[BidResult]:
        """Parse an OpenRTB response for the message it answers."""
        message = _to_outbound(request)
        with LogContext(auction_id=_auction_id(message.bid_requests if message else [])):
            return self.ortb_codec.interpret_response(server_response, message)

    def build_requests(
        self,
        bid_requests: list[BidRequestLike],
        bidder_request: BatchContextLike = None,
    ) -> list[OutboundMessage]:
        """Build legacy flat requests, one per bid request."""
        items, batch = _to_items(bid_requests), _to_batch(bidder_request)
        with LogContext(auction_id=_auction_id(items, batch)):
            return self.legacy_codec.build_requests(items, batch)

    def interpret_response(
        self,
        server_response: Any,
        request: OutboundLike,
    ) -> list[BidResult]:
        """Parse a legacy flat response for the message it answers."""
        message = _to_outbound(request)
        with LogContext(auction_id=_auction_id(message.bid_requests if message else [])):
            return self.legacy_codec.interpret_response(server_response, message)

    def get_user_syncs(
        self,
        sync_options: dict[str, Any],
        responses: Any = None,
        gdpr_consent: Union[GdprConsent, dict[str, Any], None] = None,
        usp_consent: Optional[str] = None,
    ) -> list[UserSync]:
        """Return the iframe sync to drop, if iframes are allowed."""
        return get_user_syncs(sync_options, responses, gdpr_consent, usp_consent, self.config)
