"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

import logfire

from portal.domain.error import AccessDeniedError
from portal.domain.model import Identity
from portal.domain.service import Deny, Resource, ResourceScope, authorize


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def ensure_authorized(
    identity: Identity, resource_path: str, *scopes: ResourceScope
) -> None:
    """Run the capability policy for an API resource.

    Raises:
        AccessDeniedError: If the policy denies access
    """
    decision = authorize(identity, Resource(path=resource_path, scopes=frozenset(scopes)))
    if isinstance(decision, Deny):
        logfire.warn(
            "Access denied",
            principal_id=str(identity.id),
            resource=resource_path,
            reason=decision.reason.value,
        )
        raise AccessDeniedError(decision.reason.value)
