"""
Shared codec interface.

A codec turns a batch of bid request items into outbound messages and
turns the endpoint's answer to one message back into bid results. Two
encodings exist (OpenRTB and the legacy flat payload); the orchestrator
picks one by the entry point it calls.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..config.adapter_config import AdapterConfig, get_adapter_config
from ..models.batch_context import BatchContext
from ..models.bid_request import BidRequestItem, MediaType
from ..models.bid_result import BidResult
from ..models.outbound import OutboundMessage

# Order in which partitions are emitted
PARTITION_ORDER: tuple[MediaType, ...] = (
    MediaType.VIDEO,
    MediaType.NATIVE,
    MediaType.BANNER,
)


class AdapterError(Exception):
    """Base exception for adapter errors."""
    pass


class ResponseParseError(AdapterError):
    """Raised when an endpoint response cannot be mapped to bids."""
    pass


def partition_bid_requests(
    items: list[BidRequestItem],
) -> dict[MediaType, list[BidRequestItem]]:
    """
    Group items by authoritative media type (video > native > banner).

    Every item lands in exactly one partition; input order is kept
    within a partition.
    """
    partitions: dict[MediaType, list[BidRequestItem]] = {
        media_type: [] for media_type in PARTITION_ORDER
    }
    for item in items:
        partitions[item.media_type].append(item)
    return partitions


def parse_json(value: Any, what: str) -> Any:
    """Decode a JSON string, passing through already-decoded values."""
    if not isinstance(value, (str, bytes, bytearray)):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError) as e:
        raise ResponseParseError(f"Malformed {what}: {e}") from e


def response_body(raw_response: Any) -> Any:
    """Extract the body of a server response ({'body': ...} or bare)."""
    if isinstance(raw_response, dict) and "body" in raw_response:
        return raw_response["body"]
    return raw_response


class WireCodec(ABC):
    """Encoder/decoder pair for one wire format."""

    def __init__(self, config: Optional[AdapterConfig] = None):
        self._config = config

    @property
    def config(self) -> AdapterConfig:
        return self._config or get_adapter_config()

    def resolve_currency(self, batch: BatchContext) -> str:
        """Explicit batch currency, else configured ad server currency, else default."""
        return batch.currency or self.config.currency_code

    @abstractmethod
    def build_requests(
        self,
        items: list[BidRequestItem],
        batch: BatchContext,
    ) -> list[OutboundMessage]:
        """Translate a batch into outbound messages."""

    @abstractmethod
    def interpret_response(
        self,
        raw_response: Any,
        request: OutboundMessage,
    ) -> list[BidResult]:
        """Map one endpoint response back to bid results. Never raises."""
