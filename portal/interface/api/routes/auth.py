"""Authentication routes.

``GET /auth/callback`` never reaches a handler: the route guard answers it.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request

from portal.application.usecase.auth import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from portal.config import Settings
from portal.domain.service import SessionClient
from portal.interface.api.session import authenticate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/user-profile", response_model=GetUserProfileResponse)
async def get_user_profile(
    http_request: Request,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
    session_client: FromDishka[SessionClient],
    settings: FromDishka[Settings],
    user_id: str | None = Query(default=None, alias="userId"),
) -> GetUserProfileResponse:
    """Resolve a principal into its team or client identity.

    Args:
        http_request: Incoming request carrying the session
        get_user_profile_use_case: Get user profile use case from DI
        session_client: Auth Provider session tier from DI
        settings: Application settings from DI
        user_id: Principal to resolve; defaults to the caller

    Example:
        GET /auth/user-profile?userId=123e4567-e89b-12d3-a456-426614174000

        Response:
        {
            "user": {
                "kind": "client",
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "alice@acme.com",
                "full_name": "Alice",
                "role": "member",
                "company": {"id": "...", "name": "Acme", "status": "active"},
                ...
            }
        }
    """
    user = await authenticate(
        http_request, session_client, settings.auth_provider.session_cookie
    )
    logger.info(f"Resolving user profile for {user_id or user.id}")
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(principal_id=str(user.id), user_id=user_id)
    )
