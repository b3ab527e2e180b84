"""Outbound message model."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .bid_request import BidRequestItem, MediaType


@dataclass
class OutboundMessage:
    """
    One request to the endpoint, built from a single media-type partition.

    data is an OpenRTB dict for the structured encoding and a JSON string
    for the legacy flat encoding. bid_requests keeps the items the
    message was built from so responses can be linked back by bid id.
    """

    url: str
    data: Any
    method: str = 'POST'
    media_type: Optional[MediaType] = None
    bid_requests: list[BidRequestItem] = field(default_factory=list)

    def find_bid_request(self, bid_id: Any) -> Optional[BidRequestItem]:
        """Find the originating item for a response's request id."""
        for item in self.bid_requests:
            if item.bid_id == bid_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            'method': self.method,
            'url': self.url,
            'data': self.data,
        }
