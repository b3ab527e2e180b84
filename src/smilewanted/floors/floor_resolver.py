"""
Floor price resolution for one bid request item.

Priority:
1. params.bidfloor (manual bidder-level override, kept for backwards compatibility)
2. item.get_floor() from a floors module, if it answers in settlement currency
3. no floor
"""

import math
from typing import Any, Optional

from ..logging import floors_logger
from ..models.bid_request import BidRequestItem, MediaType

logger = floors_logger()


def _parse_floor(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        floor = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(floor) or math.isinf(floor):
        return None
    return floor


def get_param_floor(item: BidRequestItem) -> Optional[float]:
    """Explicit bidder-parameter floor; zero or missing means none."""
    floor = _parse_floor(item.params.get("bidfloor"))
    if not floor:
        return None
    return floor


def get_module_floor(
    item: BidRequestItem,
    media_type: Optional[MediaType],
    currency: str,
) -> Optional[float]:
    """
    Ask the item's floor provider for a floor.

    The answer is used only if it is a mapping in the settlement currency
    with a numeric floor.
    """
    if item.get_floor is None:
        return None

    try:
        floor_info = item.get_floor({
            "currency": currency,
            "mediaType": (media_type or MediaType.BANNER).value,
            "size": item.size_objects(),
        })
    except Exception as e:
        logger.warning(
            "Floor provider failed",
            bid_id=item.bid_id,
            error=str(e),
        )
        return None

    if not isinstance(floor_info, dict):
        return None
    if floor_info.get("currency") != currency:
        logger.debug(
            "Ignoring floor in foreign currency",
            bid_id=item.bid_id,
            floor_currency=floor_info.get("currency"),
            currency=currency,
        )
        return None

    return _parse_floor(floor_info.get("floor"))


def resolve_floor(
    item: BidRequestItem,
    media_type: Optional[MediaType],
    currency: str,
) -> Optional[float]:
    """
    Resolve the floor to send for an item.

    Args:
        item: Bid request item
        media_type: Partition the item is sent in (defaults to banner)
        currency: Settlement currency

    Returns:
        Floor price, or None when no floor applies
    """
    override = get_param_floor(item)
    if override is not None:
        return override
    return get_module_floor(item, media_type, currency)
