"""Bid request validation, run by the orchestrator before translation."""

from typing import Any, Union

from .models.bid_request import BidRequestItem, VideoContext

VIDEO_CONTEXTS = frozenset(context.value for context in VideoContext)


def is_bid_request_valid(bid: Union[BidRequestItem, dict[str, Any]]) -> bool:
    """
    Check whether a bid request can be sent to the endpoint.

    Requires params.zoneId. Video requests also need a context of
    instream or outstream, declared either in mediaTypes.video or in
    params.video (params win).
    """
    if isinstance(bid, dict):
        bid = BidRequestItem.from_dict(bid)

    if not isinstance(bid.params, dict) or not isinstance(bid.media_types, dict):
        return False
    if not bid.zone_id:
        return False

    if bid.video is not None:
        param_video = bid.params.get("video") or {}
        if not isinstance(bid.video, dict) or not isinstance(param_video, dict):
            return False
        video_params = {**bid.video, **param_video}
        if video_params.get("context") not in VIDEO_CONTEXTS:
            return False

    return True
