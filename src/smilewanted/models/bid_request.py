"""Bid request models handed to the adapter by the auction orchestrator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class MediaType(str, Enum):
    """Media types the endpoint accepts."""
    BANNER = 'banner'
    VIDEO = 'video'
    NATIVE = 'native'


class VideoContext(str, Enum):
    """Video placement context."""
    INSTREAM = 'instream'
    OUTSTREAM = 'outstream'


@dataclass
class BidRequestItem:
    """
    One line item of an auction batch.

    media_types keeps the orchestrator's declaration as-is
    (e.g. {'banner': {'sizes': [[300, 250]]}, 'video': {...}}).
    Several declarations may coexist; media_type picks the one that
    decides which outbound partition the item travels in.
    """

    bid_id: str
    params: dict[str, Any] = field(default_factory=dict)
    ad_unit_code: Optional[str] = None
    sizes: list[list[int]] = field(default_factory=list)  # e.g. [[300, 250], [300, 600]]
    media_types: dict[str, dict[str, Any]] = field(default_factory=dict)
    bidder: str = 'smilewanted'

    # Optional enrichment
    schain: Optional[dict[str, Any]] = None
    user_id_as_eids: Optional[list[dict[str, Any]]] = None  # [{'source': ..., 'uids': [...]}]
    timeout: Optional[int] = None
    ortb2_imp: dict[str, Any] = field(default_factory=dict)
    auction_id: Optional[str] = None

    # Pluggable floor provider: get_floor({'currency', 'mediaType', 'size'}) -> {'floor', 'currency'}
    get_floor: Optional[Callable[[dict[str, Any]], Any]] = None

    @property
    def media_type(self) -> MediaType:
        """
        Authoritative media type for partitioning.

        Priority: video > native > banner
        """
        if self.video is not None:
            return MediaType.VIDEO
        if self.native is not None:
            return MediaType.NATIVE
        return MediaType.BANNER

    @property
    def banner(self) -> Optional[dict[str, Any]]:
        return self.media_types.get('banner')

    @property
    def video(self) -> Optional[dict[str, Any]]:
        return self.media_types.get('video')

    @property
    def native(self) -> Optional[dict[str, Any]]:
        return self.media_types.get('native')

    @property
    def zone_id(self) -> Any:
        return self.params.get('zoneId')

    @property
    def video_context(self) -> Optional[str]:
        """Declared video context (instream/outstream), if any."""
        if self.video is None:
            return None
        return self.video.get('context')

    @property
    def transaction_id(self) -> Optional[str]:
        return (self.ortb2_imp.get('ext') or {}).get('tid')

    @property
    def position_type(self) -> Optional[str]:
        """Opaque placement hint forwarded as-is; no known enum."""
        return self.params.get('positionType') or None

    def size_objects(self) -> list[dict[str, int]]:
        """Declared sizes as [{'w': ..., 'h': ...}]."""
        return [{'w': size[0], 'h': size[1]} for size in self.sizes]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the orchestrator's dict representation."""
        result: dict[str, Any] = {
            'bidId': self.bid_id,
            'bidder': self.bidder,
            'adUnitCode': self.ad_unit_code,
            'sizes': self.sizes,
            'mediaTypes': self.media_types,
            'params': self.params,
        }
        if self.schain is not None:
            result['schain'] = self.schain
        if self.user_id_as_eids is not None:
            result['userIdAsEids'] = self.user_id_as_eids
        if self.timeout is not None:
            result['timeout'] = self.timeout
        if self.ortb2_imp:
            result['ortb2Imp'] = self.ortb2_imp
        if self.auction_id is not None:
            result['auctionId'] = self.auction_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidRequestItem":
        """Create from the orchestrator's dict representation."""
        get_floor = data.get('getFloor')
        return cls(
            bid_id=data.get('bidId', ''),
            params=data.get('params') or {},
            ad_unit_code=data.get('adUnitCode'),
            sizes=data.get('sizes') or [],
            media_types=data.get('mediaTypes') or {},
            bidder=data.get('bidder', 'smilewanted'),
            schain=data.get('schain'),
            user_id_as_eids=data.get('userIdAsEids'),
            timeout=data.get('timeout'),
            ortb2_imp=data.get('ortb2Imp') or {},
            auction_id=data.get('auctionId'),
            get_floor=get_floor if callable(get_floor) else None,
        )
