"""Session extraction for API handlers."""

from fastapi import Request

from portal.domain.error import NotAuthenticatedError
from portal.domain.service import SessionClient
from portal.domain.value import ProviderUser


def session_token(request: Request, cookie_name: str) -> str | None:
    """Read the provider access token from the bearer header or session cookie."""
    authorization = request.headers.get("authorization")
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return request.cookies.get(cookie_name)


async def authenticate(
    request: Request, session_client: SessionClient, cookie_name: str
) -> ProviderUser:
    """Validate the request's session with the Auth Provider.

    Raises:
        NotAuthenticatedError: If there is no token or the session is invalid
        AuthProviderError: If the Auth Provider cannot be reached
    """
    token = session_token(request, cookie_name)
    if not token:
        raise NotAuthenticatedError()

    user = await session_client.get_user(token)
    if user is None:
        raise NotAuthenticatedError("Session is invalid or expired")
    return user
