"""Unit tests for rendite.application.services.share_link module."""

import base64
import json

import pytest

from rendite.application.services.share_link import (
    build_share_url,
    decode_share_state,
    encode_share_state,
    parse_share_url,
)
from rendite.core.exceptions import ShareLinkError
from rendite.domain.models.parameters import zero_state


def _token(payload) -> str:
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


class TestEncodeDecode:
    """Token round trips."""

    def test_round_trip(self, demo_params):
        params, level = decode_share_state(encode_share_state(demo_params, "pro"))
        assert params == demo_params
        assert level == "pro"

    def test_payload_layout(self, demo_params):
        """Token is base64 JSON with level and camelCase inputs."""
        payload = json.loads(base64.b64decode(encode_share_state(demo_params)))
        assert payload["level"] == "simple"
        assert payload["inputs"]["acquisition"]["priceProperty"] == 300_000

    def test_results_not_encoded(self, demo_params):
        payload = json.loads(base64.b64decode(encode_share_state(demo_params)))
        assert set(payload) == {"level", "inputs"}


class TestDecodePartial:
    """External payloads are merged onto the zero state and clamped."""

    def test_partial_inputs(self):
        params, _ = decode_share_state(_token({
            "level": "simple",
            "inputs": {"acquisition": {"priceProperty": 250_000}},
        }))
        assert params.acquisition.price_property == 250_000
        assert params.rent_ops == zero_state().rent_ops

    def test_missing_inputs(self):
        params, _ = decode_share_state(_token({"level": "pro"}))
        assert params == zero_state()

    def test_out_of_range_clamped(self):
        params, _ = decode_share_state(_token({
            "inputs": {"rentOps": {"vacancyPct": 90}, "settings": {"horizonYears": 100}},
        }))
        assert params.rent_ops.vacancy_pct == 15
        assert params.settings.horizon_years == 35

    def test_unknown_level_falls_back(self):
        _, level = decode_share_state(_token({"level": "expert", "inputs": {}}))
        assert level == "simple"

    def test_browser_payload_with_extra_keys(self):
        """Payloads from the browser calculator carry a meta section."""
        params, level = decode_share_state(_token({
            "level": "pro",
            "inputs": {
                "acquisition": {"priceProperty": 180_000, "grEStPct": 6.5},
                "financing": {"equityAmount": 20_000, "equityMode": "amount"},
                "meta": {},
            },
        }))
        assert level == "pro"
        assert params.acquisition.gr_est_pct == 6.5
        assert params.financing.equity_amount == 20_000


class TestDecodeErrors:
    """Malformed tokens raise ShareLinkError."""

    def test_not_base64(self):
        with pytest.raises(ShareLinkError):
            decode_share_state("%%%not-base64%%%")

    def test_not_json(self):
        token = base64.b64encode(b"not json").decode("ascii")
        with pytest.raises(ShareLinkError):
            decode_share_state(token)

    def test_not_an_object(self):
        with pytest.raises(ShareLinkError):
            decode_share_state(_token([1, 2, 3]))

    def test_wrong_field_type(self):
        with pytest.raises(ShareLinkError):
            decode_share_state(_token({"inputs": {"acquisition": {"priceProperty": "teuer"}}}))


class TestShareUrl:
    """URL helpers."""

    def test_url_round_trip(self, demo_params):
        url = build_share_url(demo_params, "pro", base_url="https://example.org/rechner")
        assert url.startswith("https://example.org/rechner?i=")
        params, level = parse_share_url(url)
        assert params == demo_params
        assert level == "pro"

    def test_unescaped_plus_survives(self, demo_params):
        """A raw "+" in the query string is read back as a space."""
        token = encode_share_state(demo_params, "simple")
        params, _ = decode_share_state(token.replace("+", " "))
        assert params == demo_params

    def test_missing_parameter(self):
        with pytest.raises(ShareLinkError):
            parse_share_url("https://example.org/rechner?x=1")
