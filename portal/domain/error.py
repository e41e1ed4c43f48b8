"""Domain layer errors.

Every error carries a stable, machine-readable ``kind`` that the interface
layer returns alongside the human-readable message.
"""


class DomainError(Exception):
    """Base domain error."""

    kind: str = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error."""

    kind = "validation_error"


class InvitationValidationError(ValidationError):
    """Raised when invitation input is malformed (e.g. client role without company)."""


class WeakPasswordError(ValidationError):
    """Raised when an acceptance password is too short or unconfirmed."""

    kind = "weak_password"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvitationNotFoundError(NotFoundError):
    """Raised when no invitation has the given id."""

    def __init__(self, invitation_id: str):
        super().__init__("Invitation", invitation_id)


class IdentityNotFoundError(NotFoundError):
    """Principal is authenticated at the provider but has no application identity."""

    def __init__(self, principal_id: str):
        super().__init__("User profile", principal_id)


class CompanyNotFoundError(NotFoundError):
    """Raised when a client invitation's company cannot be found."""

    kind = "company_not_found"

    def __init__(self, company: str):
        super().__init__("Client company", company)


class InvalidTokenError(DomainError):
    """Raised when an invitation token matches no invitation."""

    kind = "invalid_token"

    def __init__(self) -> None:
        super().__init__("Invalid invitation token")


class InvitationNotPendingError(DomainError):
    """Raised when an operation requires a pending invitation."""

    kind = "not_pending"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Invitation is no longer pending (status: {status})")


class InvitationExpiredError(DomainError):
    """Raised when a pending invitation is observed past its expiry."""

    kind = "expired"

    def __init__(self) -> None:
        super().__init__("Invitation has expired, please request a new one")


class DuplicateEmailError(DomainError):
    """Raised when an identity already exists for an email."""

    kind = "duplicate_email"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A user with email {email} already exists")


class DuplicatePendingInvitationError(DomainError):
    """Raised when a pending invitation already exists for an email."""

    kind = "duplicate_pending_invitation"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A pending invitation already exists for {email}")


class IdentityConflictError(DomainError):
    """Principal id is present in both the team and client stores.

    Indicates upstream data corruption, never a user error.
    """

    kind = "identity_conflict"

    def __init__(self, principal_id: str):
        self.principal_id = principal_id
        super().__init__(
            f"Principal {principal_id} resolves to both a team and a client identity"
        )


class NotAuthenticatedError(DomainError):
    """Raised when a request carries no valid session."""

    kind = "unauthenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AccessDeniedError(DomainError):
    """Raised when the capability policy denies access.

    The message never reveals whether the resource exists.
    """

    kind = "access_denied"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("Access denied")


class InvitationDeliveryError(DomainError):
    """Raised when the invitation email could not be delivered."""

    kind = "delivery_failed"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Failed to deliver invitation email to {email}")


class ProvisioningFailedError(DomainError):
    """Raised when the identity row could not be created (credential rolled back)."""

    kind = "provisioning_failed"


class CompensationFailedError(ProvisioningFailedError):
    """Raised when rolling back a created credential also failed.

    Requires manual operator intervention.
    """

    kind = "compensation_failed"
