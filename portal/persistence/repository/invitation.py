"""PostgreSQL implementation of Invitation repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal.domain.model import Invitation
from portal.domain.repository import InvitationRepository
from portal.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)
from portal.persistence.mappers import invitation_to_dict, row_to_invitation
from portal.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    Transitions are single ``UPDATE ... WHERE status = 'pending' RETURNING``
    statements, so the status check and the write cannot interleave.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        stmt = select(invitations_table).where(
            invitations_table.c.invitation_token == token.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def exists_pending_for_email(self, email: EmailAddress) -> bool:
        """Check for a pending invitation without loading it."""
        stmt = select(invitations_table.c.id).where(
            and_(
                invitations_table.c.email == email.root,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert an invitation inside a savepoint.

        Raises:
            IntegrityError: On the unique pending-email index or a token collision
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(invitations_table).values(**invitation_to_dict(invitation))
            )
        return invitation

    async def delete(self, invitation_id: InvitationId) -> bool:
        result = await self.session.execute(
            delete(invitations_table).where(invitations_table.c.id == invitation_id)
        )
        return result.rowcount > 0

    async def _update_pending(
        self, invitation_id: InvitationId, **values
    ) -> Optional[Invitation]:
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                )
            )
            .values(**values)
            .returning(invitations_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def update_status_if_pending(
        self, invitation_id: InvitationId, status: InvitationStatus, now: datetime
    ) -> Optional[Invitation]:
        return await self._update_pending(
            invitation_id, status=status.value, updated_at=now
        )

    async def expire_stale(
        self, now: datetime, email: Optional[EmailAddress] = None
    ) -> int:
        conditions = [
            invitations_table.c.status == InvitationStatus.PENDING.value,
            invitations_table.c.expires_at < now,
        ]
        if email is not None:
            conditions.append(invitations_table.c.email == email.root)
        stmt = (
            update(invitations_table)
            .where(and_(*conditions))
            .values(status=InvitationStatus.EXPIRED.value, updated_at=now)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def update_expiry_if_pending(
        self, invitation_id: InvitationId, expires_at: datetime, now: datetime
    ) -> Optional[Invitation]:
        return await self._update_pending(
            invitation_id, expires_at=expires_at, updated_at=now
        )

    async def mark_accepted(
        self, invitation_id: InvitationId, now: datetime
    ) -> Optional[Invitation]:
        return await self._update_pending(
            invitation_id,
            status=InvitationStatus.ACCEPTED.value,
            accepted_at=now,
            updated_at=now,
        )

    @asynccontextmanager
    async def lock_pending(
        self, invitation_id: InvitationId
    ) -> AsyncIterator[Optional[Invitation]]:
        """Re-read the invitation with ``SELECT ... FOR UPDATE``.

        The row lock is held until the request transaction ends.
        """
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.id == invitation_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        yield row_to_invitation(dict(row)) if row else None

    async def find_all(
        self,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .order_by(invitations_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )

        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invitation(dict(row)) for row in rows]

    async def count_by_status(self) -> dict[InvitationStatus, int]:
        stmt = select(invitations_table.c.status, func.count()).group_by(
            invitations_table.c.status
        )
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in InvitationStatus}
        for status, count in result.all():
            counts[InvitationStatus(status)] = count
        return counts
