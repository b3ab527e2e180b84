"""
OpenRTB codec.

Requests: one OpenRTB 2.x envelope per bid request item, emitted
partition by partition (video, native, banner).

Responses: seatbid/bid structure; each bid carries its creative format
in bid.ext.smilewanted.formatTypeSw.
"""

import copy
from typing import Any, Optional

from ..config.adapter_config import AdapterConfig
from ..floors.floor_resolver import resolve_floor
from ..logging import adapter_logger
from ..models.batch_context import BatchContext
from ..models.bid_request import BidRequestItem, MediaType
from ..models.bid_result import BidResult, ResultKind
from ..models.outbound import OutboundMessage
from ..ortb.converter import ConversionContext, OrtbConverter
from ..ortb.payload import PayloadBuilder, deep_get
from ..ortb.schain import normalize_supply_chain
from ..utils.constants import BIDDER_CODE
from .base import (
    PARTITION_ORDER,
    ResponseParseError,
    WireCodec,
    parse_json,
    partition_bid_requests,
    response_body,
)
from .shaping import build_meta, clean_deal_id, native_template, shape_result

logger = adapter_logger()


class OrtbCodec(WireCodec):
    """Translates bid requests to OpenRTB and OpenRTB responses to bids."""

    def __init__(self, config: Optional[AdapterConfig] = None):
        super().__init__(config)
        self.converter = OrtbConverter(
            imp_hook=self._imp_hook,
            request_hook=self._request_hook,
        )

    # =================================
    # Requests
    # =================================

    def build_requests(
        self,
        items: list[BidRequestItem],
        batch: BatchContext,
    ) -> list[OutboundMessage]:
        """
        Build one outbound message per item.

        Items are not batched together so floor and targeting stay
        specific to each impression.
        """
        currency = self.resolve_currency(batch)
        partitions = partition_bid_requests(items)

        messages = []
        for media_type in PARTITION_ORDER:
            for item in partitions[media_type]:
                context = ConversionContext(
                    media_type=media_type,
                    currency=currency,
                    bid_requests=[item],
                )
                messages.append(OutboundMessage(
                    url=self.config.endpoint_url,
                    data=self.converter.to_ortb([item], batch, context),
                    media_type=media_type,
                    bid_requests=[item],
                ))

        logger.debug(
            "Built OpenRTB requests",
            items=len(items),
            messages=len(messages),
            video=len(partitions[MediaType.VIDEO]),
            native=len(partitions[MediaType.NATIVE]),
            banner=len(partitions[MediaType.BANNER]),
        )
        return messages

    def _imp_hook(
        self,
        imp: dict[str, Any],
        item: BidRequestItem,
        context: ConversionContext,
    ) -> dict[str, Any]:
        """Add floor, bidder params and slot targeting to an impression."""
        builder = PayloadBuilder(imp)

        builder.set("bidfloor", resolve_floor(item, context.media_type, context.currency))
        builder.set("bidfloorcur", context.currency)
        builder.set("ext.bidder", {"zoneId": item.zone_id})
        builder.set("tagid", item.ad_unit_code)
        builder.set("ext.data.pbadslot", item.ad_unit_code)

        if context.media_type is MediaType.BANNER:
            # No banner sizes declared at the media type level: use the item's own
            builder.set(
                "banner.format",
                item.size_objects(),
                when=bool(item.sizes) and not builder.get("banner.format"),
            )
        elif context.media_type is MediaType.VIDEO:
            builder.set("video.ext.context", item.video_context)

        return builder.build()

    def _request_hook(
        self,
        request: dict[str, Any],
        items: list[BidRequestItem],
        batch: BatchContext,
        context: ConversionContext,
    ) -> dict[str, Any]:
        """Add versioning, identity, supply chain and consent to the envelope."""
        item = items[0]
        builder = PayloadBuilder(request)

        builder.set("ext.prebidVersion", self.config.prebid_version)
        builder.set("tmax", item.timeout)
        builder.set("ext.positionType", item.position_type)
        builder.set("user.ext.eids", copy.deepcopy(item.user_id_as_eids) or None)
        builder.set("site.page", batch.page, when=not batch.declared_page)
        builder.set(
            "source.ext.schain",
            normalize_supply_chain(item.schain, self.config.schain_fields),
        )

        consent = batch.gdpr_consent
        if consent is not None:
            builder.set("user.ext.consent", consent.consent_string)
            # gdpr=false is omitted like an absent flag; the endpoint resolves both
            builder.set("regs.ext.gdpr", consent.gdpr_applies, when=bool(consent.gdpr_applies))

        return builder.build()

    # =================================
    # Responses
    # =================================

    def interpret_response(
        self,
        raw_response: Any,
        request: OutboundMessage,
    ) -> list[BidResult]:
        """
        Map an OpenRTB response to bid results.

        Any parse failure yields an empty list for this response.
        """
        try:
            return self._parse_response(raw_response, request)
        except Exception as e:
            logger.error(
                "Error while parsing smilewanted OpenRTB response",
                error=str(e),
                exc_info=True,
            )
            return []

    def _parse_response(
        self,
        raw_response: Any,
        request: Optional[OutboundMessage],
    ) -> list[BidResult]:
        body = parse_json(response_body(raw_response), "response body")
        if not body:
            return []
        if not isinstance(body, dict):
            raise ResponseParseError("Response body is not an object")
        if request is None:
            raise ResponseParseError("Response has no originating request")

        request_data = parse_json(request.data, "request data")
        if not isinstance(request_data, dict):
            raise ResponseParseError("Request data is not an object")
        imps = {
            imp.get("id"): imp
            for imp in request_data.get("imp") or []
            if isinstance(imp, dict)
        }
        if not imps and not request.bid_requests:
            raise ResponseParseError("Response has no originating bid request")

        currency = body.get("cur") or self._request_currency(request_data)

        results = []
        for seatbid in body.get("seatbid") or []:
            for bid in seatbid.get("bid") or []:
                impid = bid.get("impid")
                item = request.find_bid_request(impid)
                imp = imps.get(impid)
                if item is None and imp is None:
                    logger.warning("Dropping bid for unknown impression", impid=impid)
                    continue
                results.append(self._to_result(bid, item, imp or {}, currency))
        return results

    def _request_currency(self, request_data: dict[str, Any]) -> str:
        currencies = request_data.get("cur")
        if currencies:
            return currencies[0]
        return self.config.currency_code

    def _to_result(
        self,
        bid: dict[str, Any],
        item: Optional[BidRequestItem],
        imp: dict[str, Any],
        currency: str,
    ) -> BidResult:
        """
        Map one bid to a result.

        The originating impression supplies the native template; the item,
        when the message still carries it, supplies the ad unit code.
        """
        if bid.get("price") is None:
            raise ResponseParseError(f"Bid for {bid.get('impid')} has no price")

        bidder_ext = deep_get(bid, f"ext.{BIDDER_CODE}") or {}
        kind = ResultKind.from_tag(bidder_ext.get("formatTypeSw"))

        result = BidResult(
            request_id=bid["impid"],
            cpm=float(bid["price"]),
            currency=currency,
            width=bid.get("w"),
            height=bid.get("h"),
            ad=bid.get("adm"),
            creative_id=bid.get("crid"),
            deal_id=clean_deal_id(bid.get("dealid")),
            net_revenue=self.config.net_revenue,
            ttl=bid.get("exp") or self.config.ttl,
            meta=build_meta(bid.get("adomain")),
            ad_unit_code=item.ad_unit_code if item is not None else imp.get("tagid"),
        )

        native_request = None
        if kind is ResultKind.NATIVE:
            native_request = self._native_request(item, imp)

        return shape_result(
            result,
            kind,
            native_request=native_request,
            outstream_template_url=bidder_ext.get("outstreamTemplateUrl"),
        )

    @staticmethod
    def _native_request(
        item: Optional[BidRequestItem],
        imp: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        """Native request sent for the impression, else rebuilt from the item."""
        sent = deep_get(imp, "native.request")
        if sent:
            native_request = parse_json(sent, "native request")
            if isinstance(native_request, dict):
                return native_request
        if item is not None:
            return native_template(item.native)
        return None
