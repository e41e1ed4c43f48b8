"""Auth Provider clients for a GoTrue-compatible REST API.

The session tier authenticates with the anonymous key, the admin tier with
the service-role key. Each tier is a separate object so that only the
provisioning path can reach the privileged key.
"""

import asyncio
from typing import Any
from uuid import UUID, uuid4

import httpx
import logfire

from portal.adapter.error import ProviderError
from portal.domain.service.auth_provider import (
    AuthProviderError,
    CodeExchangeError,
    CredentialAdminClient,
    EmailAlreadyRegisteredError,
    SessionClient,
)
from portal.domain.value import PrincipalId, ProviderSession, ProviderUser


class GoTrueError(ProviderError):
    """GoTrue answered with an error status."""

    pass


class GoTrueHttpClient:
    """Thin JSON-over-HTTP wrapper around the GoTrue REST API."""

    def __init__(self, base_url: str, api_key: str, timeout: float) -> None:
        """Initialize GoTrue HTTP client.

        Args:
            base_url: Auth Provider root URL (without /auth/v1)
            api_key: Key sent in the ``apikey`` header
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/") + "/auth/v1"
        self.api_key = api_key
        self.timeout = timeout

    async def request(
        self,
        method: str,
        path: str,
        bearer: str | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send a request and decode the JSON body.

        Raises:
            GoTrueError: If GoTrue answers with a non-2xx status
            AuthProviderError: If GoTrue cannot be reached
        """
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {bearer or self.api_key}",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=headers,
                    json=json,
                    params=params,
                )
        except httpx.HTTPError as e:
            logfire.error("Auth Provider HTTP error", path=path, error=str(e))
            raise AuthProviderError(f"Auth Provider unreachable: {e}") from e

        if response.status_code >= 400:
            payload = _decode(response)
            raise GoTrueError(
                str(
                    payload.get("msg")
                    or payload.get("message")
                    or payload.get("error_description")
                    or response.status_code
                ),
                status_code=response.status_code,
                payload=payload,
            )

        return _decode(response)


def _decode(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _provider_user(data: dict[str, Any]) -> ProviderUser:
    return ProviderUser(id=PrincipalId(UUID(data["id"])), email=data.get("email"))


class RealSessionClient(SessionClient):
    """Session tier backed by GoTrue."""

    def __init__(self, base_url: str, anon_key: str, timeout: float = 10.0) -> None:
        """Initialize session client.

        Args:
            base_url: Auth Provider root URL
            anon_key: Restricted anonymous key
            timeout: Request timeout in seconds
        """
        self.http = GoTrueHttpClient(base_url, anon_key, timeout)

    async def get_user(self, access_token: str) -> ProviderUser | None:
        """Validate a session token against ``GET /user``."""
        try:
            data = await self.http.request("GET", "/user", bearer=access_token)
        except GoTrueError as e:
            if e.status_code in (401, 403, 404):
                return None
            logfire.error(
                "Auth Provider session check failed", status_code=e.status_code
            )
            raise AuthProviderError(f"Session check failed: {e}") from e

        return _provider_user(data)

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> ProviderSession:
        """Exchange an authorization code via ``POST /token?grant_type=pkce``.

        Args:
            code: Authorization code from the callback
            code_verifier: PKCE verifier stored when the flow started, if any
        """
        body = {"auth_code": code}
        if code_verifier:
            body["code_verifier"] = code_verifier

        try:
            data = await self.http.request(
                "POST", "/token", json=body, params={"grant_type": "pkce"}
            )
        except GoTrueError as e:
            logfire.warn(
                "Authorization code exchange rejected",
                status_code=e.status_code,
                error=str(e),
            )
            raise CodeExchangeError(f"Code exchange failed: {e}") from e

        try:
            return ProviderSession(
                access_token=data["access_token"],
                refresh_token=data.get("refresh_token"),
                expires_in=data.get("expires_in"),
                user=_provider_user(data["user"]),
            )
        except (KeyError, ValueError) as e:
            raise CodeExchangeError("Malformed session in code exchange") from e


class RealCredentialAdminClient(CredentialAdminClient):
    """Admin tier backed by GoTrue's ``/admin/users`` endpoints."""

    def __init__(
        self, base_url: str, service_role_key: str, timeout: float = 10.0
    ) -> None:
        self.http = GoTrueHttpClient(base_url, service_role_key, timeout)

    async def create_user(
        self,
        email: str,
        password: str,
        email_confirmed: bool,
        metadata: dict[str, str],
    ) -> PrincipalId:
        """Create a credential via ``POST /admin/users``."""
        try:
            data = await self.http.request(
                "POST",
                "/admin/users",
                json={
                    "email": email,
                    "password": password,
                    "email_confirm": email_confirmed,
                    "user_metadata": metadata,
                },
            )
        except GoTrueError as e:
            error_code = str(e.payload.get("error_code", ""))
            if error_code == "email_exists" or "already been registered" in str(e):
                raise EmailAlreadyRegisteredError(
                    f"A credential already exists for {email}"
                ) from e
            logfire.error(
                "Credential creation failed",
                status_code=e.status_code,
                error=str(e),
            )
            raise AuthProviderError(f"Failed to create credential: {e}") from e

        principal_id = PrincipalId(UUID(data["id"]))
        logfire.info("Credential created at Auth Provider", principal_id=str(principal_id))
        return principal_id

    async def delete_user(self, principal_id: PrincipalId) -> None:
        """Delete a credential via ``DELETE /admin/users/{id}``.

        A credential that is already gone counts as deleted.
        """
        try:
            await self.http.request("DELETE", f"/admin/users/{principal_id}")
        except GoTrueError as e:
            if e.status_code == 404:
                logfire.warn("Credential already absent", principal_id=str(principal_id))
                return
            raise AuthProviderError(f"Failed to delete credential: {e}") from e

        logfire.info("Credential deleted at Auth Provider", principal_id=str(principal_id))

    async def find_user_by_email(self, email: str) -> PrincipalId | None:
        """Find a credential via ``GET /admin/users?filter=<email>``.

        The filter is a substring match, so results are narrowed to the
        exact email here.
        """
        try:
            data = await self.http.request(
                "GET", "/admin/users", params={"filter": email, "per_page": "50"}
            )
        except GoTrueError as e:
            raise AuthProviderError(f"Failed to look up credential: {e}") from e

        for user in data.get("users") or []:
            if str(user.get("email", "")).lower() == email.lower():
                return PrincipalId(UUID(user["id"]))
        return None


class MockSessionClient(SessionClient):
    """Mock session tier for testing.

    Access tokens have the form ``mock-session.<principal id>`` (see
    ``token_for``); authorization codes must be registered with ``add_code``.
    """

    TOKEN_PREFIX = "mock-session."

    def __init__(self) -> None:
        self.codes: dict[str, ProviderUser] = {}
        self.unavailable = False

    @classmethod
    def token_for(cls, principal_id: PrincipalId) -> str:
        return f"{cls.TOKEN_PREFIX}{principal_id}"

    def add_code(self, code: str, user: ProviderUser) -> None:
        self.codes[code] = user

    async def get_user(self, access_token: str) -> ProviderUser | None:
        if self.unavailable:
            raise AuthProviderError("Auth Provider unreachable (mock)")
        if not access_token.startswith(self.TOKEN_PREFIX):
            return None
        try:
            principal_id = UUID(access_token[len(self.TOKEN_PREFIX) :])
        except ValueError:
            return None
        return ProviderUser(id=PrincipalId(principal_id))

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> ProviderSession:
        if self.unavailable:
            raise AuthProviderError("Auth Provider unreachable (mock)")
        user = self.codes.pop(code, None)
        if user is None:
            raise CodeExchangeError("Invalid or expired authorization code")
        return ProviderSession(
            access_token=self.token_for(user.id),
            refresh_token="mock-refresh",
            expires_in=3600,
            user=user,
        )


class MockCredentialAdminClient(CredentialAdminClient):
    """Mock admin tier keeping credentials in memory.

    ``fail_create`` and ``fail_delete`` simulate provider outages.
    """

    def __init__(self) -> None:
        self.users: dict[PrincipalId, dict[str, Any]] = {}
        self.fail_create = False
        self.fail_delete = False

    async def create_user(
        self,
        email: str,
        password: str,
        email_confirmed: bool,
        metadata: dict[str, str],
    ) -> PrincipalId:
        # Yield so concurrent acceptances interleave as they would over HTTP
        await asyncio.sleep(0)
        if self.fail_create:
            raise AuthProviderError("Failed to create credential (mock)")
        if any(user["email"] == email for user in self.users.values()):
            raise EmailAlreadyRegisteredError(f"A credential already exists for {email}")

        principal_id = PrincipalId(uuid4())
        self.users[principal_id] = {
            "email": email,
            "password": password,
            "email_confirmed": email_confirmed,
            "metadata": dict(metadata),
        }
        return principal_id

    async def delete_user(self, principal_id: PrincipalId) -> None:
        await asyncio.sleep(0)
        if self.fail_delete:
            raise AuthProviderError("Failed to delete credential (mock)")
        self.users.pop(principal_id, None)

    async def find_user_by_email(self, email: str) -> PrincipalId | None:
        for principal_id, user in self.users.items():
            if user["email"] == email:
                return principal_id
        return None
