"""Tests for OpenRTB response parsing."""

import copy
import json
from unittest.mock import patch

import pytest

from src.smilewanted.adapter import SmileWantedBidAdapter
from src.smilewanted.models.bid_request import MediaType
from src.smilewanted.models.bid_result import Renderer, ResultKind

NATIVE_MARKUP = json.dumps({
    "link": {"url": "https://www.smilewanted.com", "clicktrackers": ["https://click.example/c"]},
    "assets": [
        {"id": 0, "required": 1, "title": {"text": "Smilewanted title"}},
        {"id": 1, "required": 1, "img": {"url": "https://img.example/main.png", "w": 300, "h": 250}},
        {"id": 2, "required": 0, "img": {"url": "https://img.example/icon.png", "w": 50, "h": 50}},
        {"id": 3, "required": 1, "data": {"type": 1, "value": "Smilewanted sponsor"}},
        {"id": 4, "required": 1, "data": {"type": 2, "value": "Smilewanted Description"}},
    ],
    "imptrackers": ["https://imp.example/i"],
    "privacy": "https://privacy.example",
})


def ortb_response(bid_ext=None, adm="< --- sw script --- >", **bid_fields):
    """Single-bid OpenRTB response answering imp 12345."""
    bid = {
        "id": "d7ab25ca-f837-49ee-883b-f98c27840e4f",
        "impid": "12345",
        "price": 15,
        "adid": "123",
        "adm": adm,
        "adomain": ["test838.com"],
        "cid": "123",
        "crid": "crid4",
        "h": 250,
        "w": 300,
    }
    if bid_ext is not None:
        bid["ext"] = {"smilewanted": bid_ext}
    bid.update(bid_fields)
    return {
        "body": {
            "id": "b0d257b7-4a4e-4bf4-af33-6ac6e17f618a",
            "bidid": "123",
            "cur": "EUR",
            "seatbid": [{"bid": [bid], "seat": "123"}],
        },
    }


@pytest.fixture
def adapter(config):
    return SmileWantedBidAdapter(config)


class TestDisplayResponse:
    """Tests for display bids."""

    def test_display(self, adapter, display_request, bidder_request):
        request = adapter.build_ortb_requests([display_request], bidder_request)[0]

        bids = adapter.interpret_ortb_response(ortb_response(), request)

        assert len(bids) == 1
        bid = bids[0]
        assert bid.request_id == "12345"
        assert bid.cpm == 15.0
        assert bid.ad == "< --- sw script --- >"
        assert bid.width == 300
        assert bid.height == 250
        assert bid.creative_id == "crid4"
        assert bid.currency == "EUR"
        assert bid.net_revenue is True
        assert bid.ttl == 300
        assert bid.media_type == MediaType.BANNER
        assert bid.vast_url is None
        assert bid.renderer is None
        assert bid.advertiser_domains == ["test838.com"]

    def test_to_dict(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        bid = adapter.interpret_ortb_response(ortb_response(dealid="deal-1"), request)[0]

        result = bid.to_dict()

        assert result["requestId"] == "12345"
        assert result["creativeId"] == "crid4"
        assert result["netRevenue"] is True
        assert result["mediaType"] == "banner"
        assert result["dealId"] == "deal-1"
        assert result["meta"] == {"advertiserDomains": ["test838.com"]}
        assert "vastUrl" not in result

    def test_bare_body(self, adapter, display_request):
        """Responses may arrive without the {'body': ...} wrapper."""
        request = adapter.build_ortb_requests([display_request])[0]
        bids = adapter.interpret_ortb_response(ortb_response()["body"], request)
        assert len(bids) == 1

    def test_json_string_body(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        raw = {"body": json.dumps(ortb_response()["body"])}
        bids = adapter.interpret_ortb_response(raw, request)
        assert bids[0].cpm == 15.0

    def test_exp_overrides_ttl(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        bid = adapter.interpret_ortb_response(ortb_response(exp=60), request)[0]
        assert bid.ttl == 60

    def test_currency_falls_back_to_request(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request], {"currency": "USD"})[0]
        response = ortb_response()
        del response["body"]["cur"]

        bid = adapter.interpret_ortb_response(response, request)[0]

        assert bid.currency == "USD"

    def test_unknown_format_tag_is_display(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        bid = adapter.interpret_ortb_response(ortb_response({"formatTypeSw": "rich_media"}), request)[0]
        assert bid.media_type == MediaType.BANNER
        assert bid.ad == "< --- sw script --- >"


class TestVideoResponse:
    """Tests for video bids."""

    def test_instream(self, adapter, video_instream_request, bidder_request):
        request = adapter.build_ortb_requests([video_instream_request], bidder_request)[0]
        response = ortb_response(
            {"formatTypeSw": "video_instream"},
            adm="https://vast.smilewanted.com",
            w=640,
            h=480,
        )

        bid = adapter.interpret_ortb_response(response, request)[0]

        assert bid.media_type == MediaType.VIDEO
        assert bid.vast_url == "https://vast.smilewanted.com"
        assert bid.ad is None
        assert bid.renderer is None
        assert (bid.width, bid.height) == (640, 480)

    def test_outstream(self, adapter, video_outstream_request, bidder_request):
        template = "https://prebid.smilewanted.com/scripts_outstream/infeed.js"
        request = adapter.build_ortb_requests([video_outstream_request], bidder_request)[0]
        response = ortb_response(
            {"formatTypeSw": "video_outstream", "outstreamTemplateUrl": template},
            adm="https://vast.smilewanted.com",
            w=640,
            h=480,
        )

        bid = adapter.interpret_ortb_response(response, request)[0]

        assert bid.media_type == MediaType.VIDEO
        assert bid.vast_url == "https://vast.smilewanted.com"
        assert bid.ad is None
        assert bid.renderer is not None
        assert bid.renderer.url == template
        assert bid.renderer.id == "12345"
        assert bid.renderer.loaded is False

    def test_outstream_render_routine(self, adapter, video_outstream_request):
        request = adapter.build_ortb_requests([video_outstream_request])[0]
        response = ortb_response(
            {"formatTypeSw": "video_outstream"},
            adm="https://vast.smilewanted.com",
            w=640,
            h=480,
        )
        bid = adapter.interpret_ortb_response(response, request)[0]

        bid.renderer.render(bid)

        assert bid.renderer.commands == [{
            "width": 640,
            "height": 480,
            "vastUrl": "https://vast.smilewanted.com",
            "elId": "sw_outstream_video_640x480",
        }]

    def test_outstream_set_render_failure_keeps_bid(self, adapter, video_outstream_request):
        """A renderer that rejects its routine is logged and the bid survives."""
        request = adapter.build_ortb_requests([video_outstream_request])[0]
        response = ortb_response({"formatTypeSw": "video_outstream"}, adm="https://vast.smilewanted.com")

        with patch.object(Renderer, "set_render", side_effect=RuntimeError("boom")):
            bids = adapter.interpret_ortb_response(response, request)

        assert len(bids) == 1
        assert bids[0].renderer is not None
        assert bids[0].renderer.render_fn is None
        assert bids[0].vast_url == "https://vast.smilewanted.com"


class TestNativeResponse:
    """Tests for native bids."""

    def test_native(self, adapter, native_request, bidder_request):
        request = adapter.build_ortb_requests([native_request], bidder_request)[0]
        response = ortb_response({"formatTypeSw": "native"}, adm=NATIVE_MARKUP)

        bid = adapter.interpret_ortb_response(response, request)[0]

        assert bid.media_type == MediaType.NATIVE
        assert bid.native["title"] == "Smilewanted title"
        assert bid.native["image"] == {"url": "https://img.example/main.png", "width": 300, "height": 250}
        assert bid.native["icon"] == {"url": "https://img.example/icon.png", "width": 50, "height": 50}
        assert bid.native["sponsoredBy"] == "Smilewanted sponsor"
        assert bid.native["body"] == "Smilewanted Description"
        assert bid.native["clickUrl"] == "https://www.smilewanted.com"
        assert bid.native["clickTrackers"] == ["https://click.example/c"]
        assert bid.native["impressionTrackers"] == ["https://imp.example/i"]
        assert bid.native["privacyLink"] == "https://privacy.example"

    def test_native_wrapped_markup(self, adapter, native_request):
        request = adapter.build_ortb_requests([native_request])[0]
        markup = json.dumps({"native": json.loads(NATIVE_MARKUP)})

        bid = adapter.interpret_ortb_response(ortb_response({"formatTypeSw": "native"}, adm=markup), request)[0]

        assert bid.native["title"] == "Smilewanted title"

    def test_native_with_non_json_markup(self, adapter, native_request):
        """Unparseable native markup yields no bids."""
        request = adapter.build_ortb_requests([native_request])[0]
        response = ortb_response({"formatTypeSw": "native"})

        assert adapter.interpret_ortb_response(response, request) == []


class TestDictRequests:
    """Tests for responses answering a message the orchestrator passed back as a dict."""

    def test_display(self, adapter, display_request, bidder_request):
        request = adapter.build_ortb_requests([display_request], bidder_request)[0]

        bids = adapter.interpret_ortb_response(ortb_response(), request.to_dict())

        assert len(bids) == 1
        assert bids[0].request_id == "12345"
        assert bids[0].ad_unit_code == "sw_300x250"
        assert bids[0].cpm == 15
        assert bids[0].currency == "EUR"

    def test_serialized_request_data(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0].to_dict()
        request["data"] = json.dumps(request["data"])

        bids = adapter.interpret_ortb_response(ortb_response(), request)

        assert [bid.request_id for bid in bids] == ["12345"]

    def test_unknown_impid_is_dropped(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        response = ortb_response(impid="unknown")

        assert adapter.interpret_ortb_response(response, request.to_dict()) == []

    def test_native_assets_named_from_request(self, adapter, native_request):
        """Data assets without a type in the response take their name from the imp's native request."""
        request = adapter.build_ortb_requests([native_request])[0]
        markup = json.loads(NATIVE_MARKUP)
        for asset in markup["assets"]:
            asset.get("data", {}).pop("type", None)
        response = ortb_response({"formatTypeSw": "native"}, adm=json.dumps(markup))

        bid = adapter.interpret_ortb_response(response, request.to_dict())[0]

        assert bid.media_type == MediaType.NATIVE
        assert bid.native["title"] == "Smilewanted title"
        assert bid.native["sponsoredBy"] == "Smilewanted sponsor"
        assert bid.native["body"] == "Smilewanted Description"


class TestMalformedResponses:
    """Tests for responses that cannot be mapped to bids."""

    def test_empty_body(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        assert adapter.interpret_ortb_response({"body": ""}, request) == []
        assert adapter.interpret_ortb_response({"body": None}, request) == []

    def test_no_bid(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        assert adapter.interpret_ortb_response({"body": {"id": "x", "seatbid": []}}, request) == []

    def test_invalid_json(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        assert adapter.interpret_ortb_response({"body": "{not json"}, request) == []

    def test_unknown_impid_is_dropped(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        response = ortb_response()
        known = copy.deepcopy(response["body"]["seatbid"][0]["bid"][0])
        response["body"]["seatbid"][0]["bid"][0]["impid"] = "unknown"
        response["body"]["seatbid"][0]["bid"].append(known)

        bids = adapter.interpret_ortb_response(response, request)

        assert [bid.request_id for bid in bids] == ["12345"]

    def test_missing_price_rejects_response(self, adapter, display_request):
        request = adapter.build_ortb_requests([display_request])[0]
        response = ortb_response()
        del response["body"]["seatbid"][0]["bid"][0]["price"]

        assert adapter.interpret_ortb_response(response, request) == []

    def test_without_originating_request(self, adapter):
        assert adapter.interpret_ortb_response(ortb_response(), None) == []

    def test_dict_request_with_unparseable_data(self, adapter):
        """Request data that is not an OpenRTB object yields no bids."""
        assert adapter.interpret_ortb_response(ortb_response(), {"data": "invalid Json"}) == []


class TestResultKind:
    """Tests for format tag mapping."""

    @pytest.mark.parametrize("tag,expected", [
        (None, ResultKind.DISPLAY),
        ("", ResultKind.DISPLAY),
        ("video_instream", ResultKind.VIDEO_INSTREAM),
        ("video_outstream", ResultKind.VIDEO_OUTSTREAM),
        ("native", ResultKind.NATIVE),
        ("something_else", ResultKind.DISPLAY),
    ])
    def test_from_tag(self, tag, expected):
        assert ResultKind.from_tag(tag) is expected

    def test_media_types(self):
        assert ResultKind.DISPLAY.media_type == MediaType.BANNER
        assert ResultKind.VIDEO_OUTSTREAM.media_type == MediaType.VIDEO
        assert ResultKind.NATIVE.media_type == MediaType.NATIVE
        assert ResultKind.VIDEO_INSTREAM.is_video is True
        assert ResultKind.NATIVE.is_video is False
