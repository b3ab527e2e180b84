"""
Legacy flat codec.

Requests: one flat JSON payload per bid request item (zoneId, tagId,
sizes, bidfloor, context, videoParams/nativeParams, ...).

Responses: a single flat bid (cpm, ad, width, height, formatTypeSw, ...).
"""

import copy
import json
from typing import Any, Optional

from ..floors.floor_resolver import resolve_floor
from ..logging import adapter_logger
from ..models.batch_context import BatchContext
from ..models.bid_request import BidRequestItem, MediaType
from ..models.bid_result import BidResult, ResultKind
from ..models.outbound import OutboundMessage
from ..ortb.native import image_size
from ..ortb.payload import deep_get
from ..ortb.schain import serialize_supply_chain
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


class LegacyCodec(WireCodec):
    """Translates bid requests to the flat payload and flat responses to bids."""

    def build_requests(
        self,
        items: list[BidRequestItem],
        batch: BatchContext,
    ) -> list[OutboundMessage]:
        """Build one outbound message per item, serialized as JSON."""
        currency = self.resolve_currency(batch)
        partitions = partition_bid_requests(items)

        messages = []
        for media_type in PARTITION_ORDER:
            for item in partitions[media_type]:
                payload = self.build_payload(item, batch, media_type, currency)
                messages.append(OutboundMessage(
                    url=self.config.endpoint_url,
                    data=json.dumps(payload),
                    media_type=media_type,
                    bid_requests=[item],
                ))
        return messages

    def build_payload(
        self,
        item: BidRequestItem,
        batch: BatchContext,
        media_type: MediaType,
        currency: str,
    ) -> dict[str, Any]:
        """Build the flat payload for one item. None values are dropped."""
        payload: dict[str, Any] = {
            "zoneId": item.zone_id,
            "currencyCode": currency,
            "tagId": item.ad_unit_code,
            "sizes": item.size_objects(),
            "transactionId": item.transaction_id,
            "timeout": batch.timeout,
            "bidId": item.bid_id,
            # Undocumented placement hint; forwarded as an opaque string
            "positionType": item.params.get("positionType") or "",
            "prebidVersion": self.config.prebid_version,
            "schain": serialize_supply_chain(item.schain, self.config.schain_fields),
            "bidfloor": resolve_floor(item, media_type, currency),
        }

        if batch.referer_info is not None:
            payload["pageDomain"] = batch.referer_info.page or ""

        if batch.gdpr_consent is not None:
            payload["gdpr_consent"] = batch.gdpr_consent.consent_string
            # An absent gdprApplies is resolved by the endpoint
            payload["gdpr"] = batch.gdpr_consent.gdpr_applies

        payload["eids"] = copy.deepcopy(item.user_id_as_eids)

        if media_type is MediaType.VIDEO:
            payload["context"] = item.video_context
            payload["videoParams"] = copy.deepcopy(item.video)
        elif media_type is MediaType.NATIVE:
            payload["context"] = "native"
            payload["nativeParams"] = copy.deepcopy(item.native)
            size = image_size(deep_get(item.native, "image.sizes"))
            if size:
                payload["width"], payload["height"] = size

        return {key: value for key, value in payload.items() if value is not None}

    def interpret_response(
        self,
        raw_response: Any,
        request: OutboundMessage,
    ) -> list[BidResult]:
        """
        Map a flat response to at most one bid result.

        Any parse failure yields an empty list for this response.
        """
        body = response_body(raw_response)
        if not body:
            return []

        try:
            return [self._parse_response(body, request)]
        except Exception as e:
            logger.error(
                "Error while parsing smilewanted response",
                error=str(e),
                exc_info=True,
            )
            return []

    def _parse_response(self, body: Any, request: Optional[OutboundMessage]) -> BidResult:
        body = parse_json(body, "response body")
        if not isinstance(body, dict):
            raise ResponseParseError("Response body is not an object")
        if request is None:
            raise ResponseParseError("Response has no originating request")

        request_data = parse_json(request.data, "request data")
        if not isinstance(request_data, dict):
            raise ResponseParseError("Request data is not an object")
        if body.get("cpm") is None:
            raise ResponseParseError("Response has no cpm")

        result = BidResult(
            request_id=request_data.get("bidId"),
            cpm=body["cpm"],
            currency=body.get("currency") or request_data.get("currencyCode") or self.config.currency_code,
            width=body.get("width"),
            height=body.get("height"),
            ad=body.get("ad"),
            creative_id=body.get("creativeId"),
            deal_id=clean_deal_id(body.get("dealId")),
            net_revenue=bool(body.get("isNetCpm", self.config.net_revenue)),
            ttl=body.get("ttl") or self.config.ttl,
            meta=build_meta(deep_get(body, "meta.advertiserDomains")),
            ad_unit_code=request_data.get("tagId"),
        )
        return shape_result(
            result,
            ResultKind.from_tag(body.get("formatTypeSw")),
            native_request=native_template(request_data.get("nativeParams")),
            outstream_template_url=body.get("OustreamTemplateUrl"),
        )
