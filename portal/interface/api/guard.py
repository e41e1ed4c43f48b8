"""Route guard middleware.

Runs before every request. Only the session is checked here (one Auth
Provider call, no database); role and company checks happen in handlers
once the full identity is resolved.
"""

import logging
from enum import Enum
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from portal.config import Settings
from portal.domain.service import (
    AuthProviderError,
    CodeExchangeError,
    ResourceScope,
    SessionClient,
    classify_resource,
)
from portal.domain.service.capability_policy import matches_prefix
from portal.interface.api.session import session_token

logger = logging.getLogger(__name__)

AUTH_ONLY_ROUTES = ("/login", "/signup")
CALLBACK_ROUTE = "/auth/callback"
TEAM_SIGN_IN = "/"
CLIENT_SIGN_IN = "/client-login"
DEFAULT_AFTER_LOGIN = "/dashboard"

# One-shot parameters consumed by client-side toasts
NOTICE_PARAMS = ("auth_error", "auth_success", "message", "authRequired", "redirectTo")

CODE_VERIFIER_COOKIE = "portal_code_verifier"


class RouteClass(str, Enum):
    PUBLIC = "public"
    TEAM = "team"
    CLIENT = "client"
    AUTH_ONLY = "auth_only"
    CALLBACK = "callback"


def classify_route(path: str) -> RouteClass:
    """Static route classification used by the guard."""
    if path == CALLBACK_ROUTE:
        return RouteClass.CALLBACK
    if any(matches_prefix(path, prefix) for prefix in AUTH_ONLY_ROUTES):
        return RouteClass.AUTH_ONLY

    scopes = classify_resource(path).scopes
    if ResourceScope.CLIENT in scopes:
        return RouteClass.CLIENT
    if ResourceScope.TEAM in scopes:
        return RouteClass.TEAM
    return RouteClass.PUBLIC


def with_params(url: str, **params: str) -> str:
    """Return ``url`` with query parameters set (replacing existing ones)."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k not in params]
    query.extend(params.items())
    return urlunsplit(parts._replace(query=urlencode(query)))


def strip_notice_params(url: str) -> str:
    """Remove one-shot notice parameters once the client has shown them."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query) if k not in NOTICE_PARAMS]
    return urlunsplit(parts._replace(query=urlencode(query)))


def safe_redirect_path(target: str | None, default: str = DEFAULT_AFTER_LOGIN) -> str:
    """Only allow same-site relative paths as redirect targets."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return default
    return target


def classify_callback_error(error: str, description: str | None) -> tuple[str, str]:
    """Map a provider-reported callback error to ``(kind, readable message)``."""
    detail = (description or "").lower()
    if error == "access_denied" and "expired" in detail:
        return "expired_link", "This link has expired. Please request a new one."
    if error == "access_denied":
        return "expired_link", "Access was denied. The link may be invalid or already used."
    if error == "server_error":
        return "server_error", "The authentication server encountered an error."
    return error, description or "Authentication failed."


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Session-only route guard with redirects for pages and the auth callback."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        route = classify_route(request.url.path)
        if route == RouteClass.PUBLIC:
            return await call_next(request)

        container = request.app.state.dishka_container
        settings = await container.get(Settings)
        session_client = await container.get(SessionClient)

        if route == RouteClass.CALLBACK:
            return await self._handle_callback(request, session_client, settings)

        authenticated = await self._is_authenticated(
            request, session_client, settings.auth_provider.session_cookie
        )
        if route in (RouteClass.TEAM, RouteClass.CLIENT) and not authenticated:
            sign_in = TEAM_SIGN_IN if route == RouteClass.TEAM else CLIENT_SIGN_IN
            return_to = request.url.path
            if request.url.query:
                return_to = f"{return_to}?{request.url.query}"
            return RedirectResponse(
                with_params(sign_in, redirectTo=return_to, authRequired="true"),
                status_code=302,
            )

        if route == RouteClass.AUTH_ONLY and authenticated:
            target = safe_redirect_path(request.query_params.get("redirectTo"))
            return RedirectResponse(strip_notice_params(target), status_code=302)

        return await call_next(request)

    async def _is_authenticated(
        self, request: Request, session_client: SessionClient, cookie_name: str
    ) -> bool:
        token = session_token(request, cookie_name)
        if not token:
            return False
        try:
            return await session_client.get_user(token) is not None
        except AuthProviderError as e:
            logger.warning(f"Session check unavailable, treating as signed out: {e}")
            return False

    async def _handle_callback(
        self, request: Request, session_client: SessionClient, settings: Settings
    ) -> Response:
        params = request.query_params

        error = params.get("error")
        if error:
            kind, message = classify_callback_error(
                error, params.get("error_description")
            )
            logger.warning(f"Auth callback error: {error} ({kind})")
            return RedirectResponse(
                with_params("/", auth_error=kind, message=message), status_code=302
            )

        code = params.get("code")
        if not code:
            return RedirectResponse("/", status_code=302)

        target = safe_redirect_path(params.get("next"))
        try:
            session = await session_client.exchange_code_for_session(
                code, request.cookies.get(CODE_VERIFIER_COOKIE)
            )
        except CodeExchangeError as e:
            logger.warning(f"Auth code exchange failed: {e}")
            return RedirectResponse(
                with_params(
                    "/",
                    auth_error="exchange_failed",
                    message="Could not complete sign-in. Please try again.",
                ),
                status_code=302,
            )
        except Exception as e:
            logger.error(f"Unexpected auth callback error: {e}")
            return RedirectResponse(
                with_params(
                    "/",
                    auth_error="callback_error",
                    message="An unexpected error occurred during sign-in.",
                ),
                status_code=302,
            )

        response = RedirectResponse(
            with_params(target, auth_success="email_confirmed"), status_code=302
        )
        response.set_cookie(
            key=settings.auth_provider.session_cookie,
            value=session.access_token,
            max_age=session.expires_in or settings.auth_provider.session_max_age_seconds,
            httponly=True,
            secure=settings.secure_cookies,
            samesite="lax",
        )
        response.delete_cookie(CODE_VERIFIER_COOKIE)
        return response
