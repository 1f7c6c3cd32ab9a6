"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

COMPLETED = "completed"


class TicketStatus(Enum):
    """Derived status of a stored ticket."""

    ACTIVE = "active"
    EXPIRED = "expired"


class ValidationOutcome(Enum):
    """Classification of a presented ticket key."""

    ACTIVE = "active"
    EXPIRED = "expired"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ValidityWindow:
    """Non-negative number of days a ticket stays valid after issuance."""

    days: int = 30

    def __post_init__(self) -> None:
        if self.days < 0:
            raise ValueError("Validity window cannot be negative")

    def expires_at(self, issued_at: datetime) -> datetime:
        return issued_at + timedelta(days=self.days)


@dataclass(frozen=True)
class RenderRequest:
    """Request descriptor for the external code-rendering service."""

    url: str
    data: str
    size: str

    def __str__(self) -> str:
        return self.url
