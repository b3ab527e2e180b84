"""Shared bid request fixtures."""

import copy

import pytest

from src.smilewanted.config import AdapterConfig, reset_adapter_config

CONSENT_STRING = (
    "BOO_ch7OO_ch7AKABBENA2-AAAAZ97_______9______9uz_Gv_r_f__33e8_39v_h_7_u___m_-zzV4-_lvQV1yPA1OrfArgFA"
)

DISPLAY_REQUEST = {
    "adUnitCode": "sw_300x250",
    "bidder": "smilewanted",
    "bidId": "12345",
    "timeout": 1000,
    "sizes": [[300, 250], [300, 200]],
    "mediaTypes": {
        "banner": {
            "sizes": [[300, 250], [300, 200]],
        },
    },
    "params": {
        "zoneId": 1,
    },
    "ortb2Imp": {
        "ext": {
            "tid": "trans_abcd1234",
        },
    },
}

VIDEO_INSTREAM_REQUEST = {
    **DISPLAY_REQUEST,
    "adUnitCode": "sw_instream_video_640x480",
    "sizes": [[640, 480]],
    "params": {"zoneId": 2, "bidfloor": 2.5},
    "mediaTypes": {
        "video": {
            "context": "instream",
            "mimes": ["video/mp4"],
            "minduration": 0,
            "maxduration": 120,
            "protocols": [1, 2, 3, 4, 5, 6, 7, 8],
            "startdelay": 0,
            "placement": 1,
            "skip": 1,
            "skipafter": 10,
            "minbitrate": 10,
            "maxbitrate": 10,
            "delivery": [1],
            "playbackmethod": [2],
            "api": [1, 2],
            "linearity": 1,
            "playerSize": [640, 480],
        },
    },
}

VIDEO_OUTSTREAM_REQUEST = {
    **DISPLAY_REQUEST,
    "adUnitCode": "sw_outstream_video_640x480",
    "sizes": [[640, 480]],
    "params": {"zoneId": 3, "bidfloor": 2.5},
    "mediaTypes": {
        "video": {
            "context": "outstream",
            "placement": 3,
            "playerSize": [640, 480],
        },
    },
}

NATIVE_REQUEST = {
    **DISPLAY_REQUEST,
    "adUnitCode": "sw_native_300x250",
    "sizes": [[300, 250]],
    "params": {"zoneId": 4},
    "mediaTypes": {
        "native": {
            "sendTargetingKeys": False,
            "title": {"required": True, "len": 140},
            "image": {"required": True, "sizes": [300, 250]},
            "icon": {"required": False, "sizes": [50, 50]},
            "sponsoredBy": {"required": True},
            "body": {"required": True},
            "clickUrl": {"required": False},
            "privacyLink": {"required": False},
            "cta": {"required": False},
            "rating": {"required": False},
            "likes": {"required": False},
            "downloads": {"required": False},
            "price": {"required": False},
            "salePrice": {"required": False},
            "phone": {"required": False},
            "address": {"required": False},
            "desc2": {"required": False},
            "displayUrl": {"required": False},
        },
    },
}

SCHAIN = {
    "ver": "1.0",
    "complete": 1,
    "nodes": [
        {
            "asi": "exchange1.com",
            "sid": "1234",
            "hp": 1,
            "rid": "bid-request-1",
            "name": "publisher",
            "domain": "publisher.com",
        },
        {
            "asi": "exchange2.com",
            "sid": "abcd",
            "hp": 1,
            "rid": "bid-request-2",
            "name": "intermediary",
            "domain": "intermediary.com",
        },
    ],
}

BIDDER_REQUEST = {
    "ortb2": {
        "source": {"tid": "tid000"},
        "site": {"mobile": 0, "page": "http://test.com"},
        "device": {"w": 1920, "h": 1080, "dnt": 0, "ua": "Mozilla/5.0"},
    },
}


@pytest.fixture(autouse=True)
def clean_global_config():
    """Keep the global adapter config from leaking between tests."""
    reset_adapter_config()
    yield
    reset_adapter_config()


@pytest.fixture
def config():
    """Adapter config settling in EUR."""
    return AdapterConfig(ad_server_currency="EUR")


@pytest.fixture
def display_request():
    return copy.deepcopy(DISPLAY_REQUEST)


@pytest.fixture
def video_instream_request():
    return copy.deepcopy(VIDEO_INSTREAM_REQUEST)


@pytest.fixture
def video_outstream_request():
    return copy.deepcopy(VIDEO_OUTSTREAM_REQUEST)


@pytest.fixture
def native_request():
    return copy.deepcopy(NATIVE_REQUEST)


@pytest.fixture
def schain():
    return copy.deepcopy(SCHAIN)


@pytest.fixture
def bidder_request():
    return copy.deepcopy(BIDDER_REQUEST)


@pytest.fixture
def consent_string():
    return CONSENT_STRING
