"""Tests for ClaimSet defaulting and claim encoding."""

import json

import pytest

from webpush_vapid.errors import ClaimSerializationError, InvalidEndpointError
from webpush_vapid.vapid.claims import ClaimSet, audience_for, encode_claims

NOW = 1_700_000_000.7


class TestAudience:
    def test_origin_of_endpoint(self):
        assert audience_for("https://example.com/push/123") == "https://example.com"

    def test_port_is_dropped(self):
        assert audience_for("https://example.com:8443/p") == "https://example.com"

    def test_ipv6_host_keeps_brackets(self):
        assert audience_for("https://[::1]/p") == "https://[::1]"

    @pytest.mark.parametrize(
        "endpoint",
        ["not a url", "https://", "/relative/path", "http://[::1"],
    )
    def test_invalid_endpoint(self, endpoint):
        with pytest.raises(InvalidEndpointError):
            audience_for(endpoint)


class TestDefaults:
    def test_defaults_added(self):
        claims = ClaimSet().with_defaults("https://example.com/push/123", now=NOW)
        assert claims == {"aud": "https://example.com", "exp": 1_700_000_000 + 43_200}

    def test_exp_is_integer(self):
        claims = ClaimSet().with_defaults("https://example.com/p", now=NOW)
        assert isinstance(claims["exp"], int)

    def test_custom_expiry(self):
        claims = ClaimSet().with_defaults("https://example.com/p", now=NOW, expiry_s=60)
        assert claims["exp"] == 1_700_000_060

    def test_caller_values_kept_verbatim(self):
        claims = (
            ClaimSet()
            .add_claim("aud", 123)
            .add_claim("exp", "tomorrow")
            .with_defaults("https://example.com/p", now=NOW)
        )
        assert claims["aud"] == 123
        assert claims["exp"] == "tomorrow"

    def test_caller_aud_skips_endpoint_parsing(self):
        claims = ClaimSet({"aud": "https://other"}).with_defaults("not a url", now=NOW)
        assert claims["aud"] == "https://other"

    def test_insertion_order(self):
        claims = (
            ClaimSet()
            .add_claim("sub", "mailto:a@b")
            .add_claim("foo", "bar")
            .with_defaults("https://example.com/p", now=NOW)
        )
        assert list(claims) == ["sub", "foo", "aud", "exp"]

    def test_overwrite(self):
        claims = ClaimSet().add_claim("foo", 1).add_claim("foo", 2)
        assert claims["foo"] == 2
        assert len(claims) == 1

    def test_with_defaults_does_not_mutate(self):
        claims = ClaimSet({"sub": "x"})
        claims.with_defaults("https://example.com/p", now=NOW)
        assert "aud" not in claims


class TestEncoding:
    def test_compact_json(self):
        assert encode_claims({"sub": "mailto:a@b", "n": 1}) == (
            b'{"sub":"mailto:a@b","n":1}'
        )

    def test_nested_values(self):
        data = {"omg": [1, {"x": None}], "ok": True}
        assert json.loads(encode_claims(data)) == data

    @pytest.mark.parametrize("value", [{1, 2}, float("nan"), object()])
    def test_unencodable(self, value):
        with pytest.raises(ClaimSerializationError):
            encode_claims({"bad": value})
