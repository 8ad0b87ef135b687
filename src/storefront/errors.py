"""Errors raised by the storefront client.

None of these are fatal: callers show ``message`` to the shopper and carry on.
"""


class StorefrontError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class CheckoutValidationError(StorefrontError):
    """A checkout field is missing or invalid. Raised before any network call."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class FeedbackValidationError(StorefrontError):
    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class ApiError(StorefrontError):
    """The backend rejected a request, or could not be reached.

    ``status_code`` is None for network failures.
    """

    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None
