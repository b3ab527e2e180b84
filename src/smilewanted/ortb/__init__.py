"""
OpenRTB building blocks.

Generic envelope construction, native asset shaping and supply chain
serialization used by the adapter's codecs.
"""

from .converter import ConversionContext, OrtbConverter
from .native import to_legacy_response, to_ortb_native_request
from .payload import PayloadBuilder, deep_get
from .schain import SupplyChainNode, normalize_supply_chain, serialize_supply_chain

__all__ = [
    'ConversionContext',
    'OrtbConverter',
    'PayloadBuilder',
    'SupplyChainNode',
    'deep_get',
    'normalize_supply_chain',
    'serialize_supply_chain',
    'to_legacy_response',
    'to_ortb_native_request',
]
