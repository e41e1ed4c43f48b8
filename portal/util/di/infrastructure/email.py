"""Email infrastructure providers."""

from dishka import Scope, provide

from portal.adapter.email import RealResendNotifier
from portal.config import Settings
from portal.domain.service import InvitationNotifier
from portal.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider using Resend."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_invitation_notifier(self, settings: Settings) -> InvitationNotifier:
        """Provide invitation notifier."""
        return RealResendNotifier(
            api_url=settings.email.resend_api_url,
            api_key=settings.email.resend_api_key,
            from_address=settings.email.from_address,
            timeout=settings.email.timeout_seconds,
        )
