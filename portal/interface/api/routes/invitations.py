"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status
from pydantic import BaseModel, Field

from portal.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    GetInvitationRequest,
    GetInvitationUseCase,
    InvitationItem,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ManageInvitationRequest,
    ManageInvitationResponse,
    ManageInvitationUseCase,
    PreviewInvitationRequest,
    PreviewInvitationResponse,
    PreviewInvitationUseCase,
)
from portal.config import Settings
from portal.domain.error import InvitationNotPendingError
from portal.domain.service import SessionClient
from portal.domain.value import InvitationAction, InvitationRole
from portal.interface.api.session import authenticate
from portal.interface.error import error_response

router = APIRouter(
    prefix="/invitations", tags=["invitations"], route_class=DishkaRoute
)


class CreateInvitationAPIRequest(BaseModel):
    """API request for creating an invitation."""

    email: str
    full_name: str = Field(min_length=1, max_length=255)
    role: InvitationRole
    company_name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)


class ManageInvitationAPIRequest(BaseModel):
    """API request for resend / extend / cancel."""

    action: InvitationAction


class AcceptInvitationAPIRequest(BaseModel):
    """API request for accepting an invitation."""

    token: str = Field(min_length=1)
    password: str
    confirm_password: str | None = None


# Token routes are registered before /{invitation_id}


@router.get("/accept", response_model=PreviewInvitationResponse)
async def preview_invitation(
    preview_use_case: FromDishka[PreviewInvitationUseCase],
    token: str = Query(min_length=1),
):
    """Validate an invitation token for the acceptance page.

    No session is required. Invitations that are no longer pending answer
    410 here (409 on acceptance).

    Example:
        GET /invitations/accept?token=abc123

        Response:
        {
            "email": "alice@example.com",
            "full_name": "Alice",
            "role": "client",
            "company_name": "Acme",
            "expires_at": "2025-01-22T12:00:00Z"
        }
    """
    try:
        return await preview_use_case.execute(PreviewInvitationRequest(token=token))
    except InvitationNotPendingError as e:
        return error_response(e, status.HTTP_410_GONE)


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationAPIRequest,
    accept_use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Accept an invitation and create the account.

    Args:
        request: Token and the password for the new credential
        accept_use_case: Accept invitation use case from DI

    Returns:
        Summary of the created identity
    """
    return await accept_use_case.execute(
        AcceptInvitationRequest(
            token=request.token,
            password=request.password,
            confirm_password=request.confirm_password,
        )
    )


@router.post(
    "", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    http_request: Request,
    create_use_case: FromDishka[CreateInvitationUseCase],
    session_client: FromDishka[SessionClient],
    settings: FromDishka[Settings],
) -> CreateInvitationResponse:
    """Invite a team member or client contact.

    Requires a team admin or moderator session. The invitation email is
    sent before responding; if delivery fails the invitation is removed
    and 502 is returned.
    """
    user = await authenticate(
        http_request, session_client, settings.auth_provider.session_cookie
    )
    return await create_use_case.execute(
        CreateInvitationRequest(
            principal_id=str(user.id),
            email=request.email,
            full_name=request.full_name,
            role=request.role,
            company_name=request.company_name,
            phone=request.phone,
        )
    )


@router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    http_request: Request,
    list_use_case: FromDishka[ListInvitationsUseCase],
    session_client: FromDishka[SessionClient],
    settings: FromDishka[Settings],
    status_filter: str = Query(default="pending", alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListInvitationsResponse:
    """List invitations with counts per status (admins only).

    ``status`` accepts any invitation status or ``all``.
    """
    user = await authenticate(
        http_request, session_client, settings.auth_provider.session_cookie
    )
    return await list_use_case.execute(
        ListInvitationsRequest(
            principal_id=str(user.id),
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/{invitation_id}", response_model=InvitationItem)
async def get_invitation(
    invitation_id: UUID,
    http_request: Request,
    get_use_case: FromDishka[GetInvitationUseCase],
    session_client: FromDishka[SessionClient],
    settings: FromDishka[Settings],
) -> InvitationItem:
    """Get one invitation (admins and moderators)."""
    user = await authenticate(
        http_request, session_client, settings.auth_provider.session_cookie
    )
    return await get_use_case.execute(
        GetInvitationRequest(principal_id=str(user.id), invitation_id=invitation_id)
    )


@router.patch("/{invitation_id}", response_model=ManageInvitationResponse)
async def manage_invitation(
    invitation_id: UUID,
    request: ManageInvitationAPIRequest,
    http_request: Request,
    manage_use_case: FromDishka[ManageInvitationUseCase],
    session_client: FromDishka[SessionClient],
    settings: FromDishka[Settings],
):
    """Resend, extend or cancel a pending invitation.

    Example:
        PATCH /invitations/6f1c...
        {"action": "extend"}
    """
    user = await authenticate(
        http_request, session_client, settings.auth_provider.session_cookie
    )
    try:
        return await manage_use_case.execute(
            ManageInvitationRequest(
                principal_id=str(user.id),
                invitation_id=invitation_id,
                action=request.action,
            )
        )
    except InvitationNotPendingError as e:
        return error_response(e, status.HTTP_400_BAD_REQUEST)
