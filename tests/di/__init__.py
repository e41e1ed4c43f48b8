"""Mock providers for testing."""

from .auth_provider import MockAuthProviderProvider
from .email import MockEmailProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockAuthProviderProvider",
    "MockEmailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
