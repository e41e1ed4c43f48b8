"""Get user profile use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from portal.domain.error import AccessDeniedError
from portal.domain.model import Identity, TeamIdentity
from portal.domain.service import IdentityResolver
from portal.domain.value import PrincipalId


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    principal_id: str  # Caller, from the validated session
    user_id: str | None = None  # Defaults to the caller


class GetUserProfileResponse(BaseModel):
    """The resolved identity, discriminated by ``kind``."""

    user: Identity = Field(discriminator="kind")


class GetUserProfileUseCase:
    """Use case for resolving a principal into its identity."""

    def __init__(self, identity_resolver: IdentityResolver) -> None:
        """Initialize get user profile use case.

        Args:
            identity_resolver: Identity resolver domain service
        """
        self.identity_resolver = identity_resolver

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Resolve the requested principal.

        Callers read their own profile; team admins may read anyone's.

        Raises:
            AccessDeniedError: If a non-admin asks for another principal
            IdentityNotFoundError: If the principal has no identity
            IdentityConflictError: If the principal is in both stores
        """
        caller_id = PrincipalId(UUID(request.principal_id))
        target_id = PrincipalId(UUID(request.user_id)) if request.user_id else caller_id

        if target_id != caller_id:
            caller = await self.identity_resolver.resolve(caller_id)
            if not (isinstance(caller, TeamIdentity) and caller.is_admin):
                raise AccessDeniedError("insufficient_role")

        identity = await self.identity_resolver.resolve(target_id)
        return GetUserProfileResponse(user=identity)
