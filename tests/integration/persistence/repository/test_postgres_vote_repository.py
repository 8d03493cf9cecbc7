"""Integration tests for the PostgreSQL vote ledger.

These tests run against the database configured by DATABASE__URL (the
docker-compose postgres by default) and are skipped when it is not reachable.
Every test uses fresh server IDs, so no cleanup is needed between runs.
"""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from toplist.domain.error import VoteCooldownActiveError
from toplist.domain.model import Server, Vote
from toplist.domain.repository import ServerRepository, VoteRepository
from toplist.domain.service import VoteService
from toplist.domain.value import VoteId, VoterIdentity
from toplist.persistence.tables import metadata
from tests.conftest import make_server, utc
from tests.di import build_test_container

VOTED_AT = utc(2025, 1, 1, 12, 0)


@pytest_asyncio.fixture
async def postgres():
    """APP container with real persistence and the schema in place."""
    container = build_test_container(unmock={"persistence"})
    try:
        engine = await container.get(AsyncEngine)
        async with engine.begin() as connection:
            await connection.run_sync(metadata.create_all)
    except (OSError, SQLAlchemyError) as e:
        await container.close()
        pytest.skip(f"PostgreSQL not available: {e}")

    yield container

    await container.close()


@pytest_asyncio.fixture
async def server(postgres) -> Server:
    """A committed server listing to vote for."""
    server = make_server("Integration", slug=f"integration-{uuid4().hex[:12]}")
    async with postgres() as request_container:
        server_repo = await request_container.get(ServerRepository)
        await server_repo.save(server)
    return server


async def _save_votes(postgres, *votes: Vote) -> None:
    async with postgres() as request_container:
        vote_repo = await request_container.get(VoteRepository)
        for vote in votes:
            await vote_repo.save(vote)


def _vote(server_id, created_at=VOTED_AT, ip_address="203.0.113.7", user_id=None):
    return Vote(
        id=VoteId(uuid4()),
        server_id=server_id,
        ip_address=ip_address,
        user_id=user_id,
        created_at=created_at,
    )


class TestPostgresVoteRepositoryIntegration:
    """Integration tests for PostgresVoteRepository queries."""

    @pytest.mark.asyncio
    async def test_vote_round_trips_with_utc_timestamp(self, postgres, server):
        """A saved vote reads back unchanged, timezone included."""
        # Arrange
        vote = _vote(server.id, user_id="user-42")
        await _save_votes(postgres, vote)

        # Act
        async with postgres() as request_container:
            vote_repo = await request_container.get(VoteRepository)
            found = await vote_repo.find_by_id(vote.id)

        # Assert
        assert found == vote
        assert found.created_at.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_latest_lookups_exclude_vote_at_cutoff(self, postgres, server):
        """A vote exactly at ``since`` no longer counts; one microsecond later it does."""
        # Arrange
        vote = _vote(server.id, user_id="user-42")
        await _save_votes(postgres, vote)
        just_before = VOTED_AT - timedelta(microseconds=1)

        # Act
        async with postgres() as request_container:
            vote_repo = await request_container.get(VoteRepository)
            ip_at_cutoff = await vote_repo.find_latest_by_ip(
                server.id, "203.0.113.7", VOTED_AT
            )
            ip_inside = await vote_repo.find_latest_by_ip(
                server.id, "203.0.113.7", just_before
            )
            user_at_cutoff = await vote_repo.find_latest_by_user(
                server.id, "user-42", VOTED_AT
            )
            user_inside = await vote_repo.find_latest_by_user(
                server.id, "user-42", just_before
            )

        # Assert
        assert ip_at_cutoff is None
        assert ip_inside == vote
        assert user_at_cutoff is None
        assert user_inside == vote

    @pytest.mark.asyncio
    async def test_latest_lookup_returns_newest_match(self, postgres, server):
        """Several matching votes yield the most recent one."""
        # Arrange
        older = _vote(server.id, created_at=VOTED_AT - timedelta(hours=5))
        newer = _vote(server.id, created_at=VOTED_AT - timedelta(hours=1))
        await _save_votes(postgres, newer, older)

        # Act
        async with postgres() as request_container:
            vote_repo = await request_container.get(VoteRepository)
            found = await vote_repo.find_latest_by_ip(
                server.id, "203.0.113.7", VOTED_AT - timedelta(hours=12)
            )

        # Assert
        assert found == newer

    @pytest.mark.asyncio
    async def test_window_query_is_inclusive_and_ordered(self, postgres, server):
        """Votes at the window start are included, oldest first."""
        # Arrange
        since = VOTED_AT - timedelta(days=7)
        at_start = _vote(server.id, created_at=since, ip_address="10.0.0.1")
        latest = _vote(server.id, created_at=VOTED_AT, ip_address="10.0.0.2")
        outside = _vote(
            server.id, created_at=since - timedelta(microseconds=1), ip_address="10.0.0.3"
        )
        await _save_votes(postgres, latest, outside, at_start)

        # Act
        async with postgres() as request_container:
            vote_repo = await request_container.get(VoteRepository)
            votes = await vote_repo.find_by_server_since(server.id, since)
            count = await vote_repo.count_by_server(server.id)

        # Assert
        assert votes == [at_start, latest]
        assert count == 3

    @pytest.mark.asyncio
    async def test_server_round_trip(self, postgres, server):
        """Saved servers can be found by ID and slug."""
        async with postgres() as request_container:
            server_repo = await request_container.get(ServerRepository)
            by_id = await server_repo.find_by_id(server.id)
            by_slug = await server_repo.find_by_slug(server.slug)

        assert by_id == server
        assert by_slug == server


class TestConcurrentSubmissionsIntegration:
    """Racing submissions in separate transactions."""

    @pytest.mark.asyncio
    async def test_same_account_from_two_sessions_commits_one_vote(
        self, postgres, server
    ):
        """Advisory locks let exactly one of two racing requests vote."""

        # Arrange
        async def submit(ip_address: str):
            async with postgres() as request_container:
                vote_service = await request_container.get(VoteService)
                return await vote_service.submit_vote(
                    server.id, VoterIdentity(ip_address=ip_address, user_id="user-42")
                )

        # Act
        results = await asyncio.gather(
            submit("203.0.113.7"),
            submit("198.51.100.9"),
            return_exceptions=True,
        )

        # Assert
        errors = [r for r in results if isinstance(r, VoteCooldownActiveError)]
        assert len(errors) == 1
        assert len(results) - len(errors) == 1

        async with postgres() as request_container:
            vote_repo = await request_container.get(VoteRepository)
            assert await vote_repo.count_by_server(server.id) == 1
