"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class PlatformError(ProviderError):
    """Managed platform call failed."""

    pass


class PaymentProviderError(ProviderError):
    """Payment provider call failed."""

    pass


class WebhookSignatureError(AdapterError):
    """Webhook payload could not be authenticated."""

    pass
