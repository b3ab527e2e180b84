"""
SmileWanted bid adapter.

Translates normalized bid requests into payloads for the SmileWanted
endpoint (OpenRTB or legacy flat encoding) and parses its responses
back into normalized bid results.
"""

from .adapter import SmileWantedBidAdapter
from .codecs import LegacyCodec, OrtbCodec, WireCodec
from .config import AdapterConfig, get_adapter_config
from .models import (
    BatchContext,
    BidRequestItem,
    BidResult,
    GdprConsent,
    MediaType,
    OutboundMessage,
    RefererInfo,
    Renderer,
    ResultKind,
)

__version__ = '1.0.0'

__all__ = [
    'SmileWantedBidAdapter',
    'OrtbCodec',
    'LegacyCodec',
    'WireCodec',
    'AdapterConfig',
    'get_adapter_config',
    'BatchContext',
    'BidRequestItem',
    'BidResult',
    'GdprConsent',
    'MediaType',
    'OutboundMessage',
    'RefererInfo',
    'Renderer',
    'ResultKind',
]
