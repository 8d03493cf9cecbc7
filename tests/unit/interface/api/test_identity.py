"""Unit tests for voter identity resolution."""

import pytest
from starlette.requests import Request

from toplist.config import AuthSettings, NetworkSettings
from toplist.domain.service import JWTService
from toplist.interface.api.identity import client_ip, extract_token, resolve_voter
from toplist.interface.error import IdentityResolutionError
from tests.conftest import issue_token

AUTH = AuthSettings(jwt_secret="unit-test-secret-that-is-long-enough")
DIRECT = NetworkSettings(trust_forwarded_for=False)
PROXIED = NetworkSettings(trust_forwarded_for=True)


def make_request(
    headers: dict[str, str] | None = None,
    client: tuple[str, int] | None = ("203.0.113.7", 50123),
) -> Request:
    """Build a bare ASGI request."""
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/votes",
            "headers": raw_headers,
            "client": client,
        }
    )


class TestExtractToken:
    """Tests for extract_token."""

    def test_reads_cookie(self):
        """The auth cookie carries the token."""
        request = make_request({"Cookie": "auth_token=abc"})

        assert extract_token(request, "auth_token") == "abc"

    def test_reads_bearer_header(self):
        """A Bearer Authorization header carries the token."""
        request = make_request({"Authorization": "Bearer abc"})

        assert extract_token(request, "auth_token") == "abc"

    def test_cookie_wins_over_header(self):
        """The cookie is preferred when both are sent."""
        request = make_request(
            {"Cookie": "auth_token=from-cookie", "Authorization": "Bearer from-header"}
        )

        assert extract_token(request, "auth_token") == "from-cookie"

    @pytest.mark.parametrize("value", ["Basic abc", "Bearer ", "abc"])
    def test_other_authorization_schemes_are_ignored(self, value):
        """Only Bearer credentials count."""
        request = make_request({"Authorization": value})

        assert extract_token(request, "auth_token") is None


class TestClientIp:
    """Tests for client_ip."""

    def test_uses_peer_address(self):
        """Without proxy trust the socket peer is the voter."""
        request = make_request({"X-Forwarded-For": "198.51.100.9"})

        assert client_ip(request, DIRECT) == "203.0.113.7"

    def test_uses_hop_appended_by_trusted_proxy(self):
        """The proxy appends the peer it saw; earlier hops are client-sent."""
        request = make_request({"X-Forwarded-For": "10.9.9.9, 198.51.100.9"})

        assert client_ip(request, PROXIED) == "198.51.100.9"

    def test_skips_one_hop_per_additional_proxy(self):
        """With two proxies the client is second from the right."""
        settings = NetworkSettings(trust_forwarded_for=True, trusted_proxy_count=2)
        request = make_request(
            {"X-Forwarded-For": "10.9.9.9, 198.51.100.9, 172.16.0.2"}
        )

        assert client_ip(request, settings) == "198.51.100.9"

    def test_short_header_uses_leftmost_hop(self):
        """Fewer hops than proxies falls back to the first hop."""
        settings = NetworkSettings(trust_forwarded_for=True, trusted_proxy_count=3)
        request = make_request({"X-Forwarded-For": "198.51.100.9"})

        assert client_ip(request, settings) == "198.51.100.9"

    def test_falls_back_to_peer_without_forwarded_header(self):
        """A trusted proxy that sends no header still yields the peer."""
        assert client_ip(make_request(), PROXIED) == "203.0.113.7"

    def test_missing_address_raises(self):
        """Requests without any address cannot be attributed."""
        with pytest.raises(IdentityResolutionError):
            client_ip(make_request(client=None), DIRECT)


class TestResolveVoter:
    """Tests for resolve_voter."""

    def test_anonymous_voter(self):
        """No token yields an anonymous identity."""
        identity = resolve_voter(make_request(), JWTService(AUTH), AUTH, DIRECT)

        assert identity.ip_address == "203.0.113.7"
        assert identity.user_id is None

    def test_authenticated_voter(self):
        """A valid token adds the account id."""
        token = issue_token("user-42", AUTH)

        identity = resolve_voter(
            make_request({"Authorization": f"Bearer {token}"}),
            JWTService(AUTH),
            AUTH,
            DIRECT,
        )

        assert identity.user_id == "user-42"

    def test_invalid_token_is_anonymous(self):
        """A bad token is treated like no token."""
        identity = resolve_voter(
            make_request({"Authorization": "Bearer garbage"}),
            JWTService(AUTH),
            AUTH,
            DIRECT,
        )

        assert identity.user_id is None

    def test_oversized_forwarded_address_is_rejected(self):
        """An address that cannot be stored is a bad request, not a crash."""
        request = make_request({"X-Forwarded-For": "a" * 65})

        with pytest.raises(IdentityResolutionError):
            resolve_voter(request, JWTService(AUTH), AUTH, PROXIED)
