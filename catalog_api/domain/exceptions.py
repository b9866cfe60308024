"""Domain exceptions.

All catalog-level errors. Services raise these; the API layer maps them
onto the ``{success: false, message}`` failure envelope.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors should inherit from this class to allow
    catching them at the API boundary.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """Raised when request parameters or product fields are invalid.

    Not retryable; the message describes what to fix.
    """

    def __init__(self, field: str, reason: str, value: Any = None) -> None:
        """Initialize validation error.

        Args:
            field: Name of the offending field.
            reason: Why the value was rejected.
            value: The rejected value.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason, "value": value},
        )
        self.field = field


class QueryError(CatalogError):
    """Raised when the product store is unreachable, times out, or rejects a query.

    The message is a generic summary; the underlying cause is logged and
    chained, never exposed to the caller.
    """

    def __init__(
        self,
        message: str = "An error occurred while fetching products",
        operation: str | None = None,
    ) -> None:
        """Initialize query error.

        Args:
            message: Caller-facing summary.
            operation: Store operation that failed (e.g. "count", "find").
        """
        super().__init__(message, details={"operation": operation})
        self.operation = operation


class ProductNotFoundError(CatalogError):
    """Raised when a product does not exist."""

    def __init__(self, product_id: str) -> None:
        """Initialize product not found error.

        Args:
            product_id: ID that was looked up.
        """
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )
        self.product_id = product_id
