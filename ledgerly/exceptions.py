"""Custom exceptions for the Ledgerly application."""


class LedgerlyError(Exception):
    """Base exception for Ledgerly."""

    pass


class NotFoundError(LedgerlyError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with id {resource_id} not found")


class ValidationError(LedgerlyError):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidStateError(LedgerlyError):
    """Raised when an item's status does not allow the requested operation."""

    def __init__(self, item_id: int, status: str, operation: str, message: str | None = None):
        self.item_id = item_id
        self.status = status
        self.operation = operation
        super().__init__(
            message or f"Cannot {operation} item {item_id} while it is {status}"
        )
