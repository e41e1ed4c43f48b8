"""Tests for the in-memory invitation repository."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from portal.domain.value import InvitationStatus
from portal.persistence.repository.inmemory import InMemoryInvitationRepository
from tests.conftest import make_invitation


@pytest.fixture
def repo():
    return InMemoryInvitationRepository()


class TestInMemoryInvitationRepository:
    """The in-memory store enforces the same constraints as the table."""

    @pytest.mark.asyncio
    async def test_one_pending_per_email(self, repo):
        await repo.insert(make_invitation(email="a@example.com"))

        with pytest.raises(IntegrityError):
            await repo.insert(make_invitation(email="a@example.com"))

    @pytest.mark.asyncio
    async def test_non_pending_does_not_block(self, repo):
        await repo.insert(
            make_invitation(email="a@example.com", status=InvitationStatus.CANCELLED)
        )

        await repo.insert(make_invitation(email="a@example.com"))

        assert await repo.exists_pending_for_email(
            make_invitation(email="a@example.com").email
        )

    @pytest.mark.asyncio
    async def test_duplicate_token_rejected(self, repo):
        await repo.insert(make_invitation(email="a@example.com", token="same"))

        with pytest.raises(IntegrityError):
            await repo.insert(make_invitation(email="b@example.com", token="same"))

    @pytest.mark.asyncio
    async def test_expire_stale_only_touches_past_pending(self, repo):
        # Arrange
        now = datetime.now(timezone.utc)
        stale = await repo.insert(
            make_invitation(email="old@example.com", expires_in=timedelta(hours=-1))
        )
        fresh = await repo.insert(make_invitation(email="new@example.com"))

        # Act
        count = await repo.expire_stale(now)

        # Assert
        assert count == 1
        assert (await repo.find_by_id(stale.id)).status == InvitationStatus.EXPIRED
        assert (await repo.find_by_id(fresh.id)).status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_expire_stale_for_one_email(self, repo):
        now = datetime.now(timezone.utc)
        target = await repo.insert(
            make_invitation(email="old@example.com", expires_in=timedelta(hours=-1))
        )
        other = await repo.insert(
            make_invitation(email="other@example.com", expires_in=timedelta(hours=-1))
        )

        count = await repo.expire_stale(now, email=target.email)

        assert count == 1
        assert (await repo.find_by_id(target.id)).status == InvitationStatus.EXPIRED
        assert (await repo.find_by_id(other.id)).status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_find_all_newest_first_with_paging(self, repo):
        first = await repo.insert(make_invitation(email="1@example.com"))
        await asyncio.sleep(0.001)
        second = await repo.insert(make_invitation(email="2@example.com"))

        page = await repo.find_all(status=None, limit=1, offset=0)
        rest = await repo.find_all(status=None, limit=1, offset=1)

        assert [inv.id for inv in page] == [second.id]
        assert [inv.id for inv in rest] == [first.id]

    @pytest.mark.asyncio
    async def test_count_by_status_includes_zeroes(self, repo):
        await repo.insert(make_invitation(email="a@example.com"))

        counts = await repo.count_by_status()

        assert counts[InvitationStatus.PENDING] == 1
        assert counts[InvitationStatus.ACCEPTED] == 0
        assert set(counts) == set(InvitationStatus)
