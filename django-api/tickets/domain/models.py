"""Domain models representing purchases and issued tickets.

Purchases and line items are supplied by the purchase subsystem and are
read-only here. Django ORM models are in tickets/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

from tickets.domain.value_objects import COMPLETED, TicketStatus, ValidationOutcome


@dataclass(frozen=True)
class PurchaseLineItem:
    """A purchased line item; `eligible` marks digitally-fulfilled items."""

    id: str
    product_id: str
    name: str
    eligible: bool


@dataclass(frozen=True)
class Purchase:
    """Domain representation of a Purchase."""

    id: str
    holder_name: str
    holder_id: str
    status: str
    completed_at: datetime | None = None
    line_items: tuple[PurchaseLineItem, ...] = ()

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED

    def line_item(self, line_item_id: str) -> PurchaseLineItem | None:
        for item in self.line_items:
            if item.id == line_item_id:
                return item
        return None


@dataclass(frozen=True)
class Ticket:
    """Admission credential minted for one eligible line item."""

    line_item_id: str
    purchase_id: str
    payload: str
    render_url: str
    issued_at: datetime
    expires_at: datetime

    def status_at(self, now: datetime) -> TicketStatus:
        """Active up to and including `expires_at`."""
        if now <= self.expires_at:
            return TicketStatus.ACTIVE
        return TicketStatus.EXPIRED


@dataclass(frozen=True)
class ReportRow:
    """A ticket joined with its purchase for listings."""

    purchase_id: str
    holder_name: str
    product_name: str | None
    line_item_id: str
    expires_at: datetime
    render_url: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a presented key.

    Ticket fields are None for UNKNOWN. Names are None when the purchase can
    no longer be resolved.
    """

    outcome: ValidationOutcome
    line_item_id: str | None = None
    purchase_id: str | None = None
    holder_name: str | None = None
    product_name: str | None = None
    expires_at: datetime | None = None

    @property
    def is_valid(self) -> bool:
        return self.outcome is ValidationOutcome.ACTIVE

    @classmethod
    def unknown(cls) -> "ValidationResult":
        return cls(outcome=ValidationOutcome.UNKNOWN)


@dataclass
class IssuanceResult:
    """Tickets minted for a purchase with per-line-item failure tracking.

    Attributes:
        purchase_id: The purchase issuance ran for.
        tickets: Minted or re-issued tickets, in line-item order.
        failures: Maps line_item_id -> error message for items that could not be issued.
    """

    purchase_id: str
    tickets: list[Ticket] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def has_failures(self) -> bool:
        return len(self.failures) > 0

    def __iter__(self) -> Iterator[Ticket]:
        return iter(self.tickets)

    def __len__(self) -> int:
        return len(self.tickets)
