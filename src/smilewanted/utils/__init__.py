"""Adapter utilities."""

from .constants import (
    BIDDER_ALIASES,
    BIDDER_CODE,
    DEFAULT_CURRENCY,
    ENDPOINT_URL,
    GVL_ID,
    SYNC_URL,
)
from .id_generator import generate_request_id

__all__ = [
    'BIDDER_ALIASES',
    'BIDDER_CODE',
    'DEFAULT_CURRENCY',
    'ENDPOINT_URL',
    'GVL_ID',
    'SYNC_URL',
    'generate_request_id',
]
