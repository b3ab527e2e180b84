"""
Native ad shaping between the legacy asset declaration and OpenRTB Native 1.2.

Legacy declaration (mediaTypes.native):
    {'title': {'required': True, 'len': 80},
     'image': {'required': True, 'sizes': [300, 250]},
     'sponsoredBy': {'required': True}, ...}

OpenRTB native request (imp.native.request, serialized):
    {'ver': '1.2', 'assets': [{'id': 0, 'required': 1, 'title': {'len': 80}}, ...]}

Asset ids are positional, so the same declaration always yields the same
ids and responses can be mapped back to legacy keys by id.
"""

import json
from typing import Any, Optional

from ..logging import adapter_logger

logger = adapter_logger()

NATIVE_VERSION = "1.2"

# OpenRTB Native data asset types keyed by legacy name
NATIVE_DATA_ASSET_TYPES: dict[str, int] = {
    "sponsoredBy": 1,
    "body": 2,
    "rating": 3,
    "likes": 4,
    "downloads": 5,
    "price": 6,
    "salePrice": 7,
    "phone": 8,
    "address": 9,
    "body2": 10,
    "displayUrl": 11,
    "cta": 12,
}
NATIVE_DATA_ASSET_KEYS: dict[int, str] = {v: k for k, v in NATIVE_DATA_ASSET_TYPES.items()}

# OpenRTB Native image types
IMAGE_TYPE_ICON = 1
IMAGE_TYPE_MAIN = 3

# Event tracker event/method codes
TRACKER_EVENT_IMPRESSION = 1
TRACKER_METHOD_IMG = 1
TRACKER_METHOD_JS = 2

# Declaration keys that configure rendering/targeting rather than request an asset
NON_ASSET_KEYS: frozenset[str] = frozenset({
    "sendTargetingKeys",
    "sendId",
    "adTemplate",
    "rendererUrl",
    "type",
    "ortb",
    "clickUrl",
    "privacyIcon",
})


def image_size(sizes: Any) -> Optional[tuple[int, int]]:
    """Accept [w, h] or [[w, h], ...] (first pair wins)."""
    if not isinstance(sizes, list) or not sizes:
        return None
    pair = sizes[0] if isinstance(sizes[0], list) else sizes
    if len(pair) == 2 and all(isinstance(v, int) for v in pair):
        return pair[0], pair[1]
    return None


def _image_asset(key: str, declaration: dict[str, Any]) -> dict[str, Any]:
    img: dict[str, Any] = {
        "type": IMAGE_TYPE_ICON if key == "icon" else IMAGE_TYPE_MAIN,
    }

    ratios = [
        r for r in declaration.get("aspect_ratios") or []
        if isinstance(r, dict) and r.get("ratio_width") and r.get("ratio_height")
    ]
    if ratios:
        first = ratios[0]
        min_width = first.get("min_width") or 0
        img["wmin"] = min_width
        img["hmin"] = first["ratio_height"] * min_width / first["ratio_width"]
        img["ext"] = {
            "aspectratios": [f"{r['ratio_width']}:{r['ratio_height']}" for r in ratios]
        }

    size = image_size(declaration.get("sizes"))
    if size:
        img["w"], img["h"] = size
        img.pop("wmin", None)
        img.pop("hmin", None)
    elif "sizes" in declaration:
        logger.warning("Ignoring malformed native image sizes", asset=key, sizes=declaration["sizes"])

    return img


def to_ortb_native_request(declaration: Any) -> Optional[dict[str, Any]]:
    """
    Convert a legacy native declaration to an OpenRTB Native 1.2 request.

    Returns None if the declaration is not a mapping.
    """
    if not isinstance(declaration, dict):
        logger.error("Native declaration must be an object", declaration=declaration)
        return None

    ortb: dict[str, Any] = {"ver": NATIVE_VERSION, "assets": []}

    for key, asset in declaration.items():
        if key in NON_ASSET_KEYS:
            continue
        if key == "privacyLink":
            ortb["privacy"] = 1
            continue
        if key not in NATIVE_DATA_ASSET_TYPES and key not in ("title", "image", "icon", "ext"):
            logger.debug("Unrecognized native asset", asset=key)
            continue

        asset = asset if isinstance(asset, dict) else {}
        required = asset.get("required")
        ortb_asset: dict[str, Any] = {
            "id": len(ortb["assets"]),
            "required": int(required) if isinstance(required, bool) else 0,
        }

        if key in NATIVE_DATA_ASSET_TYPES:
            ortb_asset["data"] = {"type": NATIVE_DATA_ASSET_TYPES[key]}
            if asset.get("len"):
                ortb_asset["data"]["len"] = asset["len"]
        elif key in ("icon", "image"):
            ortb_asset["img"] = _image_asset(key, asset)
        elif key == "title":
            ortb_asset["title"] = {"len": asset.get("len") or 140}
        else:
            ortb_asset["ext"] = asset
            del ortb_asset["required"]

        ortb["assets"].append(ortb_asset)

    return ortb


def serialize_native_request(ortb_native: dict[str, Any]) -> str:
    """Compact JSON form used in imp.native.request."""
    return json.dumps(ortb_native, separators=(",", ":"))


def to_legacy_response(
    ortb_response: dict[str, Any],
    ortb_request: Optional[dict[str, Any]],
) -> dict[str, Any]:
    """
    Convert an OpenRTB native response to the flat legacy shape.

    Assets are named from the request asset with the same id (image/icon
    by image type, data keys by data type); the response asset's own type
    is used only when the request has no such asset.
    """
    request_assets = {
        asset.get("id"): asset
        for asset in (ortb_request or {}).get("assets", [])
        if isinstance(asset, dict)
    }

    legacy: dict[str, Any] = {}

    link = ortb_response.get("link") or {}
    if link.get("url"):
        legacy["clickUrl"] = link["url"]
    if link.get("clicktrackers"):
        legacy["clickTrackers"] = link["clicktrackers"]
    if ortb_response.get("privacy"):
        legacy["privacyLink"] = ortb_response["privacy"]

    for asset in ortb_response.get("assets") or []:
        if not isinstance(asset, dict):
            continue
        if asset.get("title") is not None:
            text = asset["title"].get("text")
            if text is not None:
                legacy["title"] = text
        elif asset.get("img") is not None:
            img = asset["img"]
            request_img = (request_assets.get(asset.get("id")) or {}).get("img") or {}
            image_type = request_img.get("type", img.get("type"))
            name = "image" if image_type == IMAGE_TYPE_MAIN else "icon"
            legacy[name] = {
                "url": img.get("url"),
                "width": img.get("w"),
                "height": img.get("h"),
            }
        elif asset.get("data") is not None:
            data = asset["data"]
            request_data = (request_assets.get(asset.get("id")) or {}).get("data") or {}
            name = NATIVE_DATA_ASSET_KEYS.get(request_data.get("type", data.get("type")))
            if name:
                legacy[name] = data.get("value")

    impression_trackers = list(ortb_response.get("imptrackers") or [])
    js_trackers = []
    for tracker in ortb_response.get("eventtrackers") or []:
        if tracker.get("event") != TRACKER_EVENT_IMPRESSION:
            continue
        if tracker.get("method") == TRACKER_METHOD_IMG:
            impression_trackers.append(tracker.get("url"))
        elif tracker.get("method") == TRACKER_METHOD_JS:
            js_trackers.append(f'<script async src="{tracker.get("url")}"></script>')
    if ortb_response.get("jstracker"):
        js_trackers.append(ortb_response["jstracker"])

    legacy["impressionTrackers"] = impression_trackers
    if js_trackers:
        legacy["javascriptTrackers"] = "\n".join(js_trackers)

    return legacy
