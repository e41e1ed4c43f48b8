"""Invitation email adapter."""

from .resend import MockInvitationNotifier, RealResendNotifier, ResendError

__all__ = ["MockInvitationNotifier", "RealResendNotifier", "ResendError"]
