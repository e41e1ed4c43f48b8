"""In-memory invitation repository for testing."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from portal.domain.model import Invitation
from portal.domain.repository.invitation import InvitationRepository
from portal.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Mirrors the store constraints: unique token, and at most one pending
    invitation per email. ``lock_pending`` uses one asyncio lock per id.
    """

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}
        self._locks: dict[InvitationId, asyncio.Lock] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.invitation_token == token:
                return invitation
        return None

    async def exists_pending_for_email(self, email: EmailAddress) -> bool:
        return any(
            invitation.email == email and invitation.is_pending
            for invitation in self._invitations.values()
        )

    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert an invitation.

        Raises:
            IntegrityError: If a pending invitation exists for the email or
                the token is already used
        """
        if invitation.id in self._invitations:
            raise IntegrityError("Duplicate invitation id", None, Exception())
        if await self.find_by_token(invitation.invitation_token):
            raise IntegrityError("Duplicate invitation token", None, Exception())
        if invitation.is_pending and await self.exists_pending_for_email(
            invitation.email
        ):
            raise IntegrityError("Duplicate pending invitation", None, Exception())

        self._invitations[invitation.id] = invitation
        return invitation

    async def delete(self, invitation_id: InvitationId) -> bool:
        return self._invitations.pop(invitation_id, None) is not None

    def _update_pending(
        self, invitation_id: InvitationId, **values
    ) -> Optional[Invitation]:
        invitation = self._invitations.get(invitation_id)
        if invitation is None or not invitation.is_pending:
            return None
        updated = invitation.model_copy(update=values)
        self._invitations[invitation_id] = updated
        return updated

    async def update_status_if_pending(
        self, invitation_id: InvitationId, status: InvitationStatus, now: datetime
    ) -> Optional[Invitation]:
        return self._update_pending(invitation_id, status=status, updated_at=now)

    async def expire_stale(
        self, now: datetime, email: Optional[EmailAddress] = None
    ) -> int:
        stale = [
            invitation.id
            for invitation in self._invitations.values()
            if invitation.is_pending
            and invitation.expires_at < now
            and (email is None or invitation.email == email)
        ]
        for invitation_id in stale:
            self._update_pending(
                invitation_id, status=InvitationStatus.EXPIRED, updated_at=now
            )
        return len(stale)

    async def update_expiry_if_pending(
        self, invitation_id: InvitationId, expires_at: datetime, now: datetime
    ) -> Optional[Invitation]:
        return self._update_pending(
            invitation_id, expires_at=expires_at, updated_at=now
        )

    async def mark_accepted(
        self, invitation_id: InvitationId, now: datetime
    ) -> Optional[Invitation]:
        return self._update_pending(
            invitation_id,
            status=InvitationStatus.ACCEPTED,
            accepted_at=now,
            updated_at=now,
        )

    @asynccontextmanager
    async def lock_pending(
        self, invitation_id: InvitationId
    ) -> AsyncIterator[Optional[Invitation]]:
        lock = self._locks.setdefault(invitation_id, asyncio.Lock())
        async with lock:
            yield self._invitations.get(invitation_id)

    async def find_all(
        self,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        matches = [
            invitation
            for invitation in self._invitations.values()
            if status is None or invitation.status == status
        ]
        matches.sort(key=lambda inv: inv.created_at, reverse=True)
        return matches[offset : offset + limit]

    async def count_by_status(self) -> dict[InvitationStatus, int]:
        counts = {status: 0 for status in InvitationStatus}
        for invitation in self._invitations.values():
            counts[invitation.status] += 1
        return counts
