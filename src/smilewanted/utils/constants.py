"""SmileWanted adapter constants."""

BIDDER_CODE: str = "smilewanted"
BIDDER_ALIASES: list[str] = ["smile", "sw"]
GVL_ID: int = 639

ENDPOINT_URL: str = "https://prebid.smilewanted.com"
SYNC_URL: str = "https://csync.smilewanted.com"

# Settlement currency when no ad server currency is configured
DEFAULT_CURRENCY: str = "EUR"
DEFAULT_TTL: int = 300
DEFAULT_NET_REVENUE: bool = True

PREBID_VERSION: str = "$prebid.version$"

# Field order for serialized supply chain nodes
SCHAIN_FIELDS: list[str] = ["asi", "sid", "hp", "rid", "name", "domain", "ext"]

# Response format tags (bid.ext.smilewanted.formatTypeSw / body.formatTypeSw)
FORMAT_VIDEO_INSTREAM: str = "video_instream"
FORMAT_VIDEO_OUTSTREAM: str = "video_outstream"
FORMAT_NATIVE: str = "native"

# OpenRTB video object fields copied from mediaTypes.video
ORTB_VIDEO_PARAMS: tuple[str, ...] = (
    "mimes",
    "minduration",
    "maxduration",
    "startdelay",
    "maxseq",
    "poddur",
    "protocols",
    "w",
    "h",
    "podid",
    "podseq",
    "rqddurs",
    "placement",
    "plcmt",
    "linearity",
    "skip",
    "skipmin",
    "skipafter",
    "sequence",
    "slotinpod",
    "mincpmpersec",
    "battr",
    "maxextended",
    "minbitrate",
    "maxbitrate",
    "boxingallowed",
    "playbackmethod",
    "playbackend",
    "delivery",
    "pos",
    "api",
    "companiontype",
    "poddedupe",
)
