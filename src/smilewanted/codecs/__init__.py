"""
Wire codecs.

OrtbCodec and LegacyCodec share the WireCodec interface: build_requests()
for the outbound side and interpret_response() for the inbound side.
"""

from .base import (
    AdapterError,
    ResponseParseError,
    WireCodec,
    partition_bid_requests,
)
from .legacy import LegacyCodec
from .ortb import OrtbCodec

__all__ = [
    'AdapterError',
    'LegacyCodec',
    'OrtbCodec',
    'ResponseParseError',
    'WireCodec',
    'partition_bid_requests',
]
