"""Normalized bid results returned to the auction orchestrator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from ..utils.constants import (
    FORMAT_NATIVE,
    FORMAT_VIDEO_INSTREAM,
    FORMAT_VIDEO_OUTSTREAM,
)
from .bid_request import MediaType


class ResultKind(str, Enum):
    """Creative format announced by the endpoint for one bid."""
    DISPLAY = 'display'
    VIDEO_INSTREAM = FORMAT_VIDEO_INSTREAM
    VIDEO_OUTSTREAM = FORMAT_VIDEO_OUTSTREAM
    NATIVE = FORMAT_NATIVE

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "ResultKind":
        """Map a response format tag; absent or unknown tags are display."""
        if not tag:
            return cls.DISPLAY
        try:
            return cls(tag)
        except ValueError:
            return cls.DISPLAY

    @property
    def media_type(self) -> MediaType:
        if self in (ResultKind.VIDEO_INSTREAM, ResultKind.VIDEO_OUTSTREAM):
            return MediaType.VIDEO
        if self is ResultKind.NATIVE:
            return MediaType.NATIVE
        return MediaType.BANNER

    @property
    def is_video(self) -> bool:
        return self.media_type is MediaType.VIDEO


@dataclass
class Renderer:
    """
    Descriptor for an outstream player.

    The player script at `url` is loaded by the orchestrator; render()
    queues the initialisation call for it.
    """
    id: str
    url: Optional[str]
    loaded: bool = False
    render_fn: Optional[Callable[["BidResult"], None]] = None
    commands: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def install(cls, id: str, url: Optional[str], loaded: bool = False) -> "Renderer":
        return cls(id=id, url=url, loaded=loaded)

    def set_render(self, fn: Callable[["BidResult"], None]) -> None:
        if not callable(fn):
            raise TypeError(f"render function must be callable, got {type(fn).__name__}")
        self.render_fn = fn

    def push(self, command: dict[str, Any]) -> None:
        self.commands.append(command)

    def render(self, bid: "BidResult") -> None:
        if self.render_fn is not None:
            self.render_fn(bid)

    def to_dict(self) -> dict[str, Any]:
        return {'id': self.id, 'url': self.url, 'loaded': self.loaded}


@dataclass
class BidResult:
    """
    One bid parsed from an endpoint response.

    For video results the creative is reachable through vast_url and
    ad is None.
    """

    request_id: Optional[str]
    cpm: float
    currency: str
    width: Optional[int] = None
    height: Optional[int] = None
    ad: Optional[str] = None
    vast_url: Optional[str] = None
    creative_id: Optional[str] = None
    deal_id: Optional[str] = None
    net_revenue: bool = True
    ttl: int = 300
    media_type: MediaType = MediaType.BANNER
    native: Optional[dict[str, Any]] = None
    renderer: Optional[Renderer] = None
    meta: dict[str, Any] = field(default_factory=dict)
    ad_unit_code: Optional[str] = None

    @property
    def advertiser_domains(self) -> Optional[list[str]]:
        return self.meta.get('advertiserDomains')

    def to_dict(self) -> dict[str, Any]:
        """Convert to the orchestrator's bid response shape."""
        result: dict[str, Any] = {
            'requestId': self.request_id,
            'cpm': self.cpm,
            'currency': self.currency,
            'width': self.width,
            'height': self.height,
            'ad': self.ad,
            'creativeId': self.creative_id,
            'netRevenue': self.net_revenue,
            'ttl': self.ttl,
            'mediaType': self.media_type.value,
            'meta': self.meta,
        }
        if self.deal_id:
            result['dealId'] = self.deal_id
        if self.vast_url is not None:
            result['vastUrl'] = self.vast_url
        if self.native is not None:
            result['native'] = self.native
        if self.renderer is not None:
            result['renderer'] = self.renderer.to_dict()
        return result
