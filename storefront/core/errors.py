from typing import Optional


class StorefrontError(Exception):
    """Base class for every error the storefront raises on purpose."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(StorefrontError):
    """Request data failed validation before reaching the store."""


class InvalidIdentifier(ValidationError):
    def __init__(self, field: str, value: object):
        super().__init__(
            f"Invalid {field}",
            f"{field} must be a 24 character hex string, got {value!r}",
        )
        self.field = field


class NotFound(StorefrontError):
    pass


class StoreError(StorefrontError):
    """The document store failed; ``detail`` keeps the driver message."""


class LimitExceeded(ValidationError):
    def __init__(self, field: str, limit: int):
        super().__init__(f"Invalid {field}", f"{field} would exceed {limit}")
        self.field = field
        self.limit = limit
