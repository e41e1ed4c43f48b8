"""PostgreSQL implementation of TeamProfile repository."""

from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.domain.model import TeamIdentity
from portal.domain.repository import TeamProfileRepository
from portal.domain.value import EmailAddress, PrincipalId
from portal.persistence.mappers import row_to_team_profile, team_profile_to_dict
from portal.persistence.tables import team_profiles_table


class PostgresTeamProfileRepository(TeamProfileRepository):
    """PostgreSQL implementation of TeamProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[TeamIdentity]:
        stmt = select(team_profiles_table).where(team_profiles_table.c.id == principal_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_team_profile(dict(row)) if row else None

    async def find_by_email(self, email: EmailAddress) -> Optional[TeamIdentity]:
        stmt = select(team_profiles_table).where(
            team_profiles_table.c.email == email.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_team_profile(dict(row)) if row else None

    async def insert(self, profile: TeamIdentity) -> TeamIdentity:
        """Insert a team profile inside a savepoint.

        A constraint violation rolls back only the savepoint, leaving the
        request transaction usable for compensation.
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(team_profiles_table).values(**team_profile_to_dict(profile))
            )
        return profile

    async def delete(self, principal_id: PrincipalId) -> bool:
        result = await self.session.execute(
            delete(team_profiles_table).where(team_profiles_table.c.id == principal_id)
        )
        return result.rowcount > 0
