"""Unit tests for InMemoryServerRepository."""

import pytest

from toplist.domain.value import Slug
from toplist.persistence.repository.inmemory import InMemoryServerRepository
from tests.conftest import make_server


class TestInMemoryServerRepository:
    """Tests for InMemoryServerRepository."""

    @pytest.mark.asyncio
    async def test_find_by_slug(self):
        """Servers can be looked up by slug."""
        # Arrange
        repo = InMemoryServerRepository()
        server = await repo.save(make_server("Roat Pkz"))
        await repo.save(make_server("Runewild"))

        # Act
        found = await repo.find_by_slug(Slug("roat-pkz"))

        # Assert
        assert found == server

    @pytest.mark.asyncio
    async def test_save_replaces_existing_listing(self):
        """Saving with a known ID updates the listing."""
        # Arrange
        repo = InMemoryServerRepository()
        server = await repo.save(make_server("Runewild"))
        renamed = server.model_copy(update={"name": "Runewild Reborn"})

        # Act
        await repo.save(renamed)

        # Assert
        assert (await repo.find_by_id(server.id)).name == "Runewild Reborn"
        assert await repo.find_by_slug(Slug("missing")) is None
