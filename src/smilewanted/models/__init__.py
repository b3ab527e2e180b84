"""Adapter models and data types."""

from .batch_context import BatchContext, GdprConsent, RefererInfo
from .bid_request import BidRequestItem, MediaType, VideoContext
from .bid_result import BidResult, Renderer, ResultKind
from .outbound import OutboundMessage

__all__ = [
    "BatchContext",
    "BidRequestItem",
    "BidResult",
    "GdprConsent",
    "MediaType",
    "OutboundMessage",
    "RefererInfo",
    "Renderer",
    "ResultKind",
    "VideoContext",
]
