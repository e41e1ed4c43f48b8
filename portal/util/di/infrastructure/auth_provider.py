"""Auth Provider infrastructure providers.

The two credential tiers are provided as separate types: handlers and the
route guard only ever see ``SessionClient``; the service role key is only
reachable through ``CredentialAdminClient``.
"""

from dishka import Scope, provide

from portal.adapter.auth_provider import RealCredentialAdminClient, RealSessionClient
from portal.config import Settings
from portal.domain.service import CredentialAdminClient, SessionClient
from portal.util.di.base import ProviderBase


class AuthProviderProvider(ProviderBase):
    """Auth Provider component base."""

    __mock_component__ = "auth_provider"


class ProdAuthProviderProvider(AuthProviderProvider):
    """Production Auth Provider clients (GoTrue over HTTP)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_session_client(self, settings: Settings) -> SessionClient:
        """Provide the restricted session tier."""
        return RealSessionClient(
            base_url=settings.auth_provider.url,
            anon_key=settings.auth_provider.anon_key,
            timeout=settings.auth_provider.timeout_seconds,
        )

    @provide(scope=Scope.APP)
    def get_credential_admin_client(self, settings: Settings) -> CredentialAdminClient:
        """Provide the privileged admin tier.

        Raises:
            ValueError: If the service role key is not configured
        """
        if not settings.auth_provider.service_role_key:
            raise ValueError("Auth Provider service role key must be configured")

        return RealCredentialAdminClient(
            base_url=settings.auth_provider.url,
            service_role_key=settings.auth_provider.service_role_key,
            timeout=settings.auth_provider.timeout_seconds,
        )
