"""Domain services."""

from .auth_provider import (
    AuthProviderError,
    CodeExchangeError,
    CredentialAdminClient,
    EmailAlreadyRegisteredError,
    SessionClient,
)
from .base import Service
from .capability_policy import (
    Allow,
    Decision,
    Deny,
    DenyReason,
    Resource,
    ResourceScope,
    authorize,
    classify_resource,
)
from .identity_resolver import IdentityResolver
from .invitation_service import InvitationService
from .notifier import InvitationMessage, InvitationNotifier, NotificationError
from .provisioner import AccountProvisioner

__all__ = [
    "AccountProvisioner",
    "Allow",
    "AuthProviderError",
    "CodeExchangeError",
    "CredentialAdminClient",
    "Decision",
    "Deny",
    "DenyReason",
    "EmailAlreadyRegisteredError",
    "IdentityResolver",
    "InvitationMessage",
    "InvitationNotifier",
    "InvitationService",
    "NotificationError",
    "Resource",
    "ResourceScope",
    "Service",
    "SessionClient",
    "authorize",
    "classify_resource",
]
