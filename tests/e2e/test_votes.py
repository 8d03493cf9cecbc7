"""End-to-end tests for the vote routes."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from toplist.config import Settings
from toplist.domain.model import Server
from toplist.domain.repository import ServerRepository
from toplist.interface.api.app import create_app
from toplist.persistence.repository.inmemory import InMemoryServerRepository
from tests.conftest import issue_token, make_server
from tests.di import build_test_container


async def _save_server(container, server: Server) -> None:
    async with container() as request_container:
        server_repo = await request_container.get(ServerRepository)
        await server_repo.save(server)


def _bearer(user_id: str) -> dict[str, str]:
    token = issue_token(user_id, Settings().auth)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def container():
    """Test container with in-memory persistence."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client bound to the test container."""
    with TestClient(create_app(container)) as client:
        yield client


@pytest.fixture
def server(client, container) -> Server:
    """A listed server to vote for."""
    server = make_server()
    client.portal.call(_save_server, container, server)
    return server


class TestCastVote:
    """End-to-end tests for POST /votes/{server_id}."""

    def test_first_vote_succeeds(self, client, server):
        """Should record an anonymous vote."""
        # Act
        response = client.post(f"/votes/{server.id}")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["server_id"] == str(server.id)
        assert data["vote_count"] == 1
        assert data["message"] == "Vote recorded successfully!"
        assert data["vote_id"]

    def test_second_vote_is_rate_limited(self, client, server):
        """Should reject a repeat vote with the time until the next one."""
        # Arrange
        client.post(f"/votes/{server.id}")

        # Act
        response = client.post(f"/votes/{server.id}")

        # Assert
        assert response.status_code == 429
        assert 0 < int(response.headers["Retry-After"]) <= 12 * 3600
        detail = response.json()["detail"]
        assert detail["hours_remaining"] == 12
        assert detail["message"] == "You can vote again in 12 hours"
        assert detail["next_vote_at"]

    def test_logging_in_does_not_reset_cooldown(self, client, server):
        """Should block an account voting from an address that just voted."""
        # Arrange
        client.post(f"/votes/{server.id}")

        # Act
        response = client.post(f"/votes/{server.id}", headers=_bearer("user-42"))

        # Assert
        assert response.status_code == 429

    def test_unknown_server_returns_404(self, client):
        """Should refuse votes for servers that do not exist."""
        # Act
        response = client.post(f"/votes/{uuid4()}")

        # Assert
        assert response.status_code == 404

    def test_server_directory_outage_returns_503(self, client, server, monkeypatch):
        """Should report storage outages during the existence check as 503."""
        # Arrange
        async def _unavailable(self, server_id):
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))

        monkeypatch.setattr(InMemoryServerRepository, "find_by_id", _unavailable)

        # Act
        response = client.post(f"/votes/{server.id}")

        # Assert
        assert response.status_code == 503

    def test_malformed_server_id_returns_422(self, client):
        """Should validate the path parameter."""
        response = client.post("/votes/not-a-uuid")

        assert response.status_code == 422


class TestForwardedVoters:
    """End-to-end tests behind a trusted reverse proxy."""

    @pytest.fixture
    def container(self, monkeypatch):
        """Test container that trusts X-Forwarded-For."""
        monkeypatch.setenv("NETWORK__TRUST_FORWARDED_FOR", "true")
        return build_test_container()

    def test_distinct_addresses_vote_independently(self, client, server):
        """Should count votes from different clients separately."""
        # Act
        first = client.post(
            f"/votes/{server.id}", headers={"X-Forwarded-For": "203.0.113.7"}
        )
        second = client.post(
            f"/votes/{server.id}", headers={"X-Forwarded-For": "198.51.100.9"}
        )

        # Assert
        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["vote_count"] == 2

    def test_switching_network_does_not_reset_cooldown(self, client, server):
        """Should block an account that moves to another address."""
        # Arrange
        client.post(
            f"/votes/{server.id}",
            headers={"X-Forwarded-For": "203.0.113.7", **_bearer("user-42")},
        )

        # Act
        response = client.post(
            f"/votes/{server.id}",
            headers={"X-Forwarded-For": "198.51.100.9", **_bearer("user-42")},
        )

        # Assert
        assert response.status_code == 429


    def test_oversized_forwarded_address_returns_400(self, client, server):
        """Should reject addresses that cannot identify a voter."""
        response = client.post(
            f"/votes/{server.id}", headers={"X-Forwarded-For": "a" * 65}
        )

        assert response.status_code == 400


class TestVoteQueries:
    """End-to-end tests for the read-only vote routes."""

    def test_count_starts_at_zero(self, client, server):
        """Should report no votes for a fresh listing."""
        response = client.get(f"/votes/{server.id}/count")

        assert response.status_code == 200
        assert response.json() == {"server_id": str(server.id), "vote_count": 0}

    def test_count_after_vote(self, client, server):
        """Should include accepted votes in the count."""
        # Arrange
        client.post(f"/votes/{server.id}")

        # Act
        response = client.get(f"/votes/{server.id}/count")

        # Assert
        assert response.json()["vote_count"] == 1

    def test_can_vote_before_and_after_voting(self, client, server):
        """Should flip eligibility once the caller has voted."""
        # Act
        before = client.get(f"/votes/{server.id}/can-vote").json()
        client.post(f"/votes/{server.id}")
        after = client.get(f"/votes/{server.id}/can-vote").json()

        # Assert
        assert before["can_vote"] is True
        assert before["hours_remaining"] == 0
        assert before["next_vote_at"] is None
        assert after["can_vote"] is False
        assert after["hours_remaining"] == 12
        assert after["seconds_remaining"] > 0
        assert after["next_vote_at"] is not None

    def test_can_vote_is_read_only(self, client, server):
        """Should not record a vote when only checking."""
        # Act
        client.get(f"/votes/{server.id}/can-vote")
        client.get(f"/votes/{server.id}/can-vote")

        # Assert
        assert client.get(f"/votes/{server.id}/count").json()["vote_count"] == 0

    def test_stats_requires_authentication(self, client, server):
        """Should reject anonymous callers."""
        response = client.get(f"/votes/{server.id}/stats")

        assert response.status_code == 401

    def test_stats_for_authenticated_caller(self, client, server):
        """Should return daily counts for the default window."""
        # Arrange
        client.post(f"/votes/{server.id}")

        # Act
        response = client.get(f"/votes/{server.id}/stats", headers=_bearer("user-42"))

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["server_id"] == str(server.id)
        assert data["total"] == 1
        assert sum(data["votes_by_day"].values()) == 1

    def test_stats_window_is_bounded(self, client, server):
        """Should reject windows longer than ninety days."""
        response = client.get(
            f"/votes/{server.id}/stats?days=91", headers=_bearer("user-42")
        )

        assert response.status_code == 422


class TestHealth:
    """End-to-end tests for the health check."""

    def test_health(self, client):
        """Should report the service as healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
