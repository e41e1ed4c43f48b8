"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider answered with an error status.

    Attributes:
        status_code: HTTP status returned by the provider
        payload: Decoded JSON error body, empty if undecodable
    """

    def __init__(self, message: str, status_code: int, payload: dict | None = None):
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message)
