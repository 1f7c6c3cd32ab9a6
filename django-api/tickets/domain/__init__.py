from tickets.domain.models import (
    IssuanceResult,
    Purchase,
    PurchaseLineItem,
    ReportRow,
    Ticket,
    ValidationResult,
)
from tickets.domain.value_objects import (
    COMPLETED,
    RenderRequest,
    TicketStatus,
    ValidationOutcome,
    ValidityWindow,
)

__all__ = [
    "Purchase",
    "PurchaseLineItem",
    "Ticket",
    "ReportRow",
    "ValidationResult",
    "IssuanceResult",
    "COMPLETED",
    "RenderRequest",
    "TicketStatus",
    "ValidationOutcome",
    "ValidityWindow",
]
