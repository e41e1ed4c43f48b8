"""Invitation lifecycle domain service."""

import asyncio
import secrets
from contextlib import suppress
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from portal.config import Settings
from portal.domain.error import (
    AccessDeniedError,
    CompensationFailedError,
    DuplicateEmailError,
    DuplicatePendingInvitationError,
    InvalidTokenError,
    InvitationDeliveryError,
    InvitationExpiredError,
    InvitationNotFoundError,
    InvitationNotPendingError,
    InvitationValidationError,
    WeakPasswordError,
)
from portal.domain.model import (
    Identity,
    Invitation,
    InvitationStats,
    TeamIdentity,
)
from portal.domain.repository import ClientCompanyRepository, InvitationRepository
from portal.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationRole,
    InvitationStatus,
    InvitationToken,
)

from .base import Service
from .identity_resolver import IdentityResolver
from .notifier import InvitationMessage, InvitationNotifier, NotificationError
from .provisioner import AccountProvisioner

MIN_PASSWORD_LENGTH = 8


class InvitationService(Service):
    """Domain service driving the invitation state machine.

    ``pending`` is the only non-terminal status. Expiry is applied lazily
    whenever a stale pending invitation is observed.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        client_company_repository: ClientCompanyRepository,
        identity_resolver: IdentityResolver,
        account_provisioner: AccountProvisioner,
        notifier: InvitationNotifier,
        settings: Settings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            client_company_repository: Client company repository
            identity_resolver: Identity resolver, used for duplicate checks
            account_provisioner: Creates accounts on acceptance
            notifier: Invitation email delivery
            settings: Application settings (validity window, public URL)
        """
        self.invitation_repository = invitation_repository
        self.client_company_repository = client_company_repository
        self.identity_resolver = identity_resolver
        self.account_provisioner = account_provisioner
        self.notifier = notifier
        self.settings = settings

    @property
    def validity(self) -> timedelta:
        return timedelta(days=self.settings.invitations.validity_days)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    async def create(
        self,
        email: EmailAddress,
        full_name: str,
        role: InvitationRole,
        invited_by: Identity,
        company_name: str | None = None,
        phone: str | None = None,
    ) -> Invitation:
        """Create a pending invitation and email the invitee.

        Args:
            email: Invitee email (normalized)
            full_name: Invitee display name
            role: Role the invitee will receive
            invited_by: Identity of the caller
            company_name: Target company, required for client invitations
            phone: Optional invitee phone number

        Returns:
            The created invitation

        Raises:
            AccessDeniedError: If the caller is not a team admin or moderator
            InvitationValidationError: If a client invitation names no company
            DuplicateEmailError: If an identity already exists for the email
            DuplicatePendingInvitationError: If a pending invitation exists
            InvitationDeliveryError: If the email could not be delivered
        """
        with logfire.span(
            "invitation_service.create",
            role=role.value,
            invited_by=str(invited_by.id),
        ):
            if not isinstance(invited_by, TeamIdentity) or not invited_by.can_invite:
                logfire.warn(
                    "Invitation attempted without inviting role",
                    invited_by=str(invited_by.id),
                )
                raise AccessDeniedError("insufficient_role")

            company_name = company_name.strip() if company_name else None
            if role.is_client and not company_name:
                raise InvitationValidationError(
                    "Company name is required for client invitations"
                )

            if await self.identity_resolver.email_in_use(email):
                logfire.warn("Invitee already has an identity", email=str(email))
                raise DuplicateEmailError(str(email))

            # A lapsed invitation that nobody opened still counts as pending
            if await self.invitation_repository.expire_stale(self._now(), email=email):
                logfire.info("Expired lapsed invitation before re-invite", email=str(email))

            if await self.invitation_repository.exists_pending_for_email(email):
                logfire.warn("Pending invitation already exists", email=str(email))
                raise DuplicatePendingInvitationError(str(email))

            client_company_id = None
            if role.is_client and company_name:
                company = await self.client_company_repository.find_by_name(
                    company_name
                )
                client_company_id = company.id if company else None

            now = self._now()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                email=email,
                full_name=full_name,
                role=role,
                company_name=company_name,
                client_company_id=client_company_id,
                phone=phone,
                invited_by=invited_by.id,
                invitation_token=InvitationToken(secrets.token_urlsafe(32)),
                status=InvitationStatus.PENDING,
                expires_at=now + self.validity,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.invitation_repository.insert(invitation)
            except IntegrityError as e:
                logfire.warn(
                    "Concurrent pending invitation detected", email=str(email)
                )
                raise DuplicatePendingInvitationError(str(email)) from e

            try:
                await self.notifier.send_invitation(
                    self._message(saved, invited_by.full_name, saved.expires_at)
                )
            except NotificationError as e:
                logfire.error(
                    "Invitation email failed, removing invitation",
                    invitation_id=str(saved.id),
                    error=str(e),
                )
                await self.invitation_repository.delete(saved.id)
                raise InvitationDeliveryError(str(email)) from e
            except asyncio.CancelledError:
                logfire.warn(
                    "Invitation email cancelled, removing invitation",
                    invitation_id=str(saved.id),
                )
                await self.invitation_repository.delete(saved.id)
                raise

            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                role=role.value,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def validate(self, token: InvitationToken) -> Invitation:
        """Check that a token names a usable invitation.

        Args:
            token: Invitation token from the acceptance link

        Returns:
            The pending, unexpired invitation

        Raises:
            InvalidTokenError: If no invitation has the token
            InvitationNotPendingError: If the invitation is in a terminal status
            InvitationExpiredError: If the invitation is past its expiry
        """
        with logfire.span("invitation_service.validate", token=token.redacted()):
            invitation = await self.invitation_repository.find_by_token(token)
            if not invitation:
                logfire.warn("Invitation token not found", token=token.redacted())
                raise InvalidTokenError()

            if not invitation.is_pending:
                raise InvitationNotPendingError(invitation.status.value)

            if invitation.is_expired(self._now()):
                await self._expire(invitation)
                raise InvitationExpiredError()

            return invitation

    async def accept(
        self,
        token: InvitationToken,
        password: str,
        confirm_password: str | None = None,
    ) -> Identity:
        """Accept an invitation, provisioning the invitee's account.

        Exactly one of several concurrent calls for the same invitation
        succeeds; the others observe a non-pending invitation.

        Args:
            token: Invitation token
            password: Password chosen by the invitee
            confirm_password: Optional confirmation that must match

        Returns:
            The new identity

        Raises:
            WeakPasswordError: If the password is too short or unconfirmed
            InvalidTokenError: If no invitation has the token
            InvitationNotPendingError: If the invitation is no longer pending
            InvitationExpiredError: If the invitation is past its expiry
            DuplicateEmailError: If an identity already exists for the email
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if confirm_password is not None and confirm_password != password:
            raise WeakPasswordError("Passwords do not match")

        with logfire.span("invitation_service.accept", token=token.redacted()):
            invitation = await self.validate(token)

            async with self.invitation_repository.lock_pending(
                invitation.id
            ) as current:
                if current is None or not current.is_pending:
                    status = current.status.value if current else "deleted"
                    logfire.warn(
                        "Invitation no longer pending at acceptance",
                        invitation_id=str(invitation.id),
                        status=status,
                    )
                    raise InvitationNotPendingError(status)

                if current.is_expired(self._now()):
                    await self._expire(current)
                    raise InvitationExpiredError()

                if await self.identity_resolver.email_in_use(current.email):
                    logfire.warn(
                        "Invitee already has an identity",
                        invitation_id=str(current.id),
                    )
                    raise DuplicateEmailError(str(current.email))

                identity = await self.account_provisioner.provision(current, password)

                try:
                    accepted = await self.invitation_repository.mark_accepted(
                        current.id, self._now()
                    )
                except asyncio.CancelledError:
                    logfire.warn(
                        "Acceptance cancelled after provisioning, rolling back",
                        invitation_id=str(current.id),
                        principal_id=str(identity.id),
                    )
                    with suppress(CompensationFailedError):
                        await self.account_provisioner.deprovision(
                            identity.id, current
                        )
                    raise
                if accepted is None:
                    logfire.error(
                        "Lost acceptance race after provisioning, rolling back",
                        invitation_id=str(current.id),
                        principal_id=str(identity.id),
                    )
                    await self.account_provisioner.deprovision(identity.id, current)
                    raise InvitationNotPendingError(InvitationStatus.ACCEPTED.value)

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                principal_id=str(identity.id),
                kind=identity.kind,
            )
            return identity

    async def resend(self, invitation_id: InvitationId, resent_by: Identity) -> Invitation:
        """Re-send the invitation email with a fresh expiry.

        Delivery happens before anything is written; a failed send leaves
        the invitation untouched.

        Raises:
            InvitationNotFoundError: If the invitation does not exist
            InvitationNotPendingError: If the invitation is not pending
            InvitationDeliveryError: If the email could not be delivered
        """
        with logfire.span(
            "invitation_service.resend", invitation_id=str(invitation_id)
        ):
            invitation = await self._get_pending(invitation_id)
            now = self._now()
            new_expires_at = now + self.validity

            try:
                await self.notifier.send_invitation(
                    self._message(invitation, resent_by.full_name, new_expires_at)
                )
            except NotificationError as e:
                logfire.error(
                    "Invitation resend failed",
                    invitation_id=str(invitation_id),
                    error=str(e),
                )
                raise InvitationDeliveryError(str(invitation.email)) from e

            updated = await self.invitation_repository.update_expiry_if_pending(
                invitation_id, new_expires_at, now
            )
            if updated is None:
                raise InvitationNotPendingError(await self._current_status(invitation_id))

            logfire.info(
                "Invitation resent",
                invitation_id=str(invitation_id),
                expires_at=new_expires_at.isoformat(),
            )
            return updated

    async def extend(self, invitation_id: InvitationId) -> Invitation:
        """Push a pending invitation's expiry out by the validity window.

        Raises:
            InvitationNotFoundError: If the invitation does not exist
            InvitationNotPendingError: If the invitation is not pending
        """
        with logfire.span(
            "invitation_service.extend", invitation_id=str(invitation_id)
        ):
            await self._get_pending(invitation_id)
            now = self._now()

            updated = await self.invitation_repository.update_expiry_if_pending(
                invitation_id, now + self.validity, now
            )
            if updated is None:
                raise InvitationNotPendingError(await self._current_status(invitation_id))

            logfire.info(
                "Invitation extended",
                invitation_id=str(invitation_id),
                expires_at=updated.expires_at.isoformat(),
            )
            return updated

    async def cancel(self, invitation_id: InvitationId) -> Invitation:
        """Cancel a pending invitation. No email is sent.

        Raises:
            InvitationNotFoundError: If the invitation does not exist
            InvitationNotPendingError: If the invitation is not pending
        """
        with logfire.span(
            "invitation_service.cancel", invitation_id=str(invitation_id)
        ):
            await self._get_pending(invitation_id)

            updated = await self.invitation_repository.update_status_if_pending(
                invitation_id, InvitationStatus.CANCELLED, self._now()
            )
            if updated is None:
                raise InvitationNotPendingError(await self._current_status(invitation_id))

            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))
            return updated

    async def get(self, invitation_id: InvitationId) -> Invitation:
        """Get an invitation by id, applying lazy expiry.

        Raises:
            InvitationNotFoundError: If the invitation does not exist
        """
        with logfire.span("invitation_service.get", invitation_id=str(invitation_id)):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if not invitation:
                raise InvitationNotFoundError(str(invitation_id))

            if invitation.is_pending and invitation.is_expired(self._now()):
                return await self._expire(invitation)
            return invitation

    async def list_invitations(
        self,
        status: InvitationStatus | None = InvitationStatus.PENDING,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Invitation], InvitationStats]:
        """List invitations, newest first, with per-status counts.

        Args:
            status: Status filter, None lists every status
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Tuple of (invitations, stats)
        """
        with logfire.span(
            "invitation_service.list_invitations",
            status=status.value if status else "all",
            limit=limit,
            offset=offset,
        ):
            expired = await self.invitation_repository.expire_stale(self._now())
            if expired:
                logfire.info("Stale invitations expired", count=expired)

            invitations = await self.invitation_repository.find_all(
                status, limit, offset
            )
            counts = await self.invitation_repository.count_by_status()
            return invitations, InvitationStats.from_counts(counts)

    async def _get_pending(self, invitation_id: InvitationId) -> Invitation:
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if not invitation:
            raise InvitationNotFoundError(str(invitation_id))
        if not invitation.is_pending:
            logfire.warn(
                "Invitation is not pending",
                invitation_id=str(invitation_id),
                status=invitation.status.value,
            )
            raise InvitationNotPendingError(invitation.status.value)
        return invitation

    async def _current_status(self, invitation_id: InvitationId) -> str:
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        return invitation.status.value if invitation else "deleted"

    async def _expire(self, invitation: Invitation) -> Invitation:
        updated = await self.invitation_repository.update_status_if_pending(
            invitation.id, InvitationStatus.EXPIRED, self._now()
        )
        logfire.info(
            "Invitation expired",
            invitation_id=str(invitation.id),
            expires_at=invitation.expires_at.isoformat(),
        )
        return updated or invitation.model_copy(
            update={"status": InvitationStatus.EXPIRED}
        )

    def _message(
        self, invitation: Invitation, inviter_name: str, expires_at: datetime
    ) -> InvitationMessage:
        return InvitationMessage(
            to=str(invitation.email),
            inviter_name=inviter_name or "Admin",
            invitee_name=invitation.full_name,
            role=invitation.role.value,
            company_name=invitation.company_name
            or self.settings.invitations.default_company_name,
            accept_url=self.settings.acceptance_url(invitation.invitation_token.root),
            expires_at=expires_at,
        )
