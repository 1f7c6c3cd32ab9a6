"""Domain error codes for the tickets module."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tickets.domain.models import IssuanceResult


class ErrorCode(Enum):
    """Domain error codes."""

    ENCODING_FAILED = "ENCODING_FAILED"
    PURCHASE_NOT_COMPLETED = "PURCHASE_NOT_COMPLETED"
    PURCHASE_NOT_FOUND = "PURCHASE_NOT_FOUND"
    INVALID_TICKET_KEY = "INVALID_TICKET_KEY"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EncodingError(DomainError):
    """Raised when identity fields cannot be encoded into a payload."""

    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.ENCODING_FAILED,
            message=f"Cannot encode {field_name}: {reason}",
        )
        self.field_name = field_name


class NotCompletedError(DomainError):
    """Raised when issuance is requested for a purchase that is not completed."""

    def __init__(self, purchase_id: str, status: str) -> None:
        super().__init__(
            code=ErrorCode.PURCHASE_NOT_COMPLETED,
            message="Purchase is not completed",
        )
        self.purchase_id = purchase_id
        self.status = status


class PurchaseNotFoundError(DomainError):
    """Raised when a purchase cannot be resolved."""

    def __init__(self, purchase_id: str) -> None:
        super().__init__(
            code=ErrorCode.PURCHASE_NOT_FOUND,
            message="Purchase not found",
        )
        self.purchase_id = purchase_id


class InvalidTicketKeyError(DomainError):
    """Raised when a submitted ticket key is blank."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_KEY,
            message="A ticket identifier is required",
        )


class StoreUnavailableError(DomainError):
    """Raised when the persistence layer cannot be reached."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Ticket store is unavailable",
        )
        self.operation = operation


class IssuanceInterruptedError(StoreUnavailableError):
    """Raised when the store fails partway through issuing a purchase.

    `result` holds the tickets already written and a failure entry for the
    line item whose write failed. `pending` lists eligible line items that
    were not attempted.
    """

    def __init__(self, result: "IssuanceResult", line_item_id: str, pending: list[str]) -> None:
        super().__init__("upsert")
        self.result = result
        self.line_item_id = line_item_id
        self.pending = pending
