"""Auth Provider (GoTrue) adapter."""

from .client import (
    GoTrueError,
    GoTrueHttpClient,
    MockCredentialAdminClient,
    MockSessionClient,
    RealCredentialAdminClient,
    RealSessionClient,
)

__all__ = [
    "GoTrueError",
    "GoTrueHttpClient",
    "MockCredentialAdminClient",
    "MockSessionClient",
    "RealCredentialAdminClient",
    "RealSessionClient",
]
