"""Auth Provider client interfaces.

The Auth Provider owns credentials and sessions. It is reached through two
separately injected tiers so that the privileged key is never available to
code that only needs to check a session.
"""

from abc import ABC, abstractmethod

from portal.domain.error import DomainError
from portal.domain.value import PrincipalId, ProviderSession, ProviderUser


class AuthProviderError(DomainError):
    """The Auth Provider is unreachable or answered unexpectedly."""

    kind = "provider_unavailable"


class CodeExchangeError(AuthProviderError):
    """An authorization code could not be exchanged for a session."""

    kind = "exchange_failed"


class EmailAlreadyRegisteredError(AuthProviderError):
    """The Auth Provider already holds a credential for the email."""

    kind = "duplicate_email"


class SessionClient(ABC):
    """Restricted ("anonymous" key) Auth Provider tier."""

    @abstractmethod
    async def get_user(self, access_token: str) -> ProviderUser | None:
        """Validate a session token.

        Args:
            access_token: Provider access token from cookie or header

        Returns:
            The principal for a valid session, None for an invalid or
            expired one

        Raises:
            AuthProviderError: If the provider cannot be reached
        """
        pass

    @abstractmethod
    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> ProviderSession:
        """Exchange an OAuth or email-confirmation code for a session.

        Raises:
            CodeExchangeError: If the provider rejects the code
            AuthProviderError: If the provider cannot be reached
        """
        pass


class CredentialAdminClient(ABC):
    """Privileged (service-role key) Auth Provider tier."""

    @abstractmethod
    async def create_user(
        self,
        email: str,
        password: str,
        email_confirmed: bool,
        metadata: dict[str, str],
    ) -> PrincipalId:
        """Create a credential.

        Args:
            email: Normalized email
            password: Plain password, hashed by the provider
            email_confirmed: Mark the email as already confirmed
            metadata: User metadata stored alongside the credential

        Returns:
            The new principal id

        Raises:
            EmailAlreadyRegisteredError: If the email already has a credential
            AuthProviderError: On any other provider failure
        """
        pass

    @abstractmethod
    async def delete_user(self, principal_id: PrincipalId) -> None:
        """Delete a credential.

        Raises:
            AuthProviderError: If the credential could not be deleted
        """
        pass

    @abstractmethod
    async def find_user_by_email(self, email: str) -> PrincipalId | None:
        """Look up the credential registered for an email.

        Returns:
            The principal id, or None if no credential has the email

        Raises:
            AuthProviderError: If the provider cannot be reached
        """
        pass
