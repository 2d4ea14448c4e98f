"""
Storefront Exception Hierarchy

Every error the API returns maps to one error kind and one HTTP status.
The error kind is the stable ``error_code`` clients switch on.
"""
from typing import Optional, Dict, Any


class StorefrontError(Exception):
    """
    Base exception for all API-visible errors.

    Subclasses fix the error code and HTTP status; callers supply a
    human-readable message and optional structured details.
    """

    status_code: int = 400

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API error response format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class UnauthenticatedError(StorefrontError):
    """
    Bearer token missing or rejected.

    Examples:
    - No Authorization header
    - Scheme is not Bearer
    - Empty token
    """

    status_code = 401

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("unauthenticated", message, details)


class NotFoundError(StorefrontError):
    """Unknown resource id or unknown route."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("not_found", message, details)


class InvalidRequestError(StorefrontError):
    """
    Malformed or semantically invalid input.

    Examples:
    - Body is not valid JSON
    - Referenced order, customer, product or card does not exist
    - Unsupported payment method type
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("invalid_request", message, details)


class EmptyItemsError(StorefrontError):
    """Order submitted without line items."""

    def __init__(self, message: str = "Order must contain at least one item",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__("empty_items", message, details)


class InvalidAmountError(StorefrontError):
    """
    Monetary amount rejected.

    Examples:
    - Payment amount <= 0
    - Refund amount exceeds remaining refundable amount
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("invalid_amount", message, details)


class InvalidCurrencyError(StorefrontError):
    """Currency code not in the supported set."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("invalid_currency", message, details)


class InvalidTransitionError(StorefrontError):
    """
    Requested status change is not in the entity's transition table.

    Examples:
    - Refunding a pending payment
    - Shipping a cancelled order
    """

    status_code = 409

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("invalid_transition", message, details)


class CollaboratorUnavailableError(StorefrontError):
    """
    A downstream collaborator (card vault, payment processor) failed.

    Surfaced as 500 and never retried inside the service.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("internal", message, details)
