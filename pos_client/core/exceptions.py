"""
Exception hierarchy for the point-of-sale client.

- ApiError: anything that went wrong talking to the backend
- ClientValidationError: form data rejected before any request is made
- DomainRuleError: cart and variant rules enforced on the client
"""

from typing import Any, Optional


class PosClientError(Exception):
    """Base exception for the point-of-sale client."""

    pass


class ApiError(PosClientError):
    """Exception raised when a backend API call fails."""

    pass


class ApiTransportError(ApiError):
    """The request never produced an HTTP response (connection refused, timeout, ...)."""

    pass


class ApiHTTPError(ApiError):
    """
    The backend answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code
        payload: Decoded JSON error body, or None when the body was not JSON
        message: Server-provided message when present, else the status text
    """

    def __init__(self, message: str, status_code: int, payload: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self):
        return f"HTTP {self.status_code}: {self.message}"


class ClientValidationError(PosClientError):
    """
    Form data failed schema validation on the client.

    Raised before any network call; `errors` holds one entry per failing field
    in the form {"field": ..., "message": ...}.
    """

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc):
        """Build from a pydantic ValidationError."""
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return cls(summary or "Invalid data", errors)


class DomainRuleError(PosClientError):
    """A client-side business rule rejected the operation."""

    pass


class StockExceededError(DomainRuleError):
    """Requested quantity is above the available stock."""

    def __init__(self, stock: int, message: Optional[str] = None):
        super().__init__(message or f"Cannot add more. Only {stock} in stock")
        self.stock = stock


class InvalidQuantityError(DomainRuleError):
    """Cart quantities must be at least 1."""

    pass


class NoVariantError(DomainRuleError):
    """The product has no variant that could be sold."""

    pass


class EmptyCartError(DomainRuleError):
    """A sale cannot be submitted without line items."""

    pass


class DuplicateOptionError(DomainRuleError):
    """The option value already exists on that variant axis."""

    pass


class ImageLimitError(DomainRuleError):
    """Products carry at most three images."""

    pass
