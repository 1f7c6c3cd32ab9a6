"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. A missing record is
reported as None, never as an exception.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from tickets.domain import COMPLETED, Purchase, Ticket


class TicketStore(ABC):
    """Interface for ticket persistence operations.

    Concurrent upserts to the same line item must be linearized.
    """

    @abstractmethod
    def upsert(self, ticket: Ticket) -> None:
        """Insert or replace the ticket for `ticket.line_item_id`."""
        ...

    @abstractmethod
    def get(self, line_item_id: str) -> Ticket | None:
        """Return the ticket for a line item, or None if not found."""
        ...

    @abstractmethod
    def find_by_payload(self, payload: str) -> Ticket | None:
        """Return the ticket with exactly this payload, or None if not found."""
        ...

    @abstractmethod
    def list_all(self) -> list[Ticket]:
        """Return every stored ticket. Order is not guaranteed."""
        ...

    @abstractmethod
    def list_for_purchase(self, purchase_id: str) -> list[Ticket]:
        """Return all tickets minted for a purchase."""
        ...

    @abstractmethod
    def list_for_purchases(self, purchase_ids: Iterable[str]) -> list[Ticket]:
        """Return all tickets minted for any of the given purchases."""
        ...


class PurchaseDirectory(ABC):
    """Read-only view of the purchase subsystem."""

    @abstractmethod
    def get_purchase(self, purchase_id: str) -> Purchase | None:
        """Return a purchase with its line items, or None if not found."""
        ...

    @abstractmethod
    def get_purchases(self, purchase_ids: Iterable[str]) -> list[Purchase]:
        """Return the purchases that exist among the given ids, in directory order."""
        ...

    @abstractmethod
    def list_purchases(self) -> list[Purchase]:
        """Return all purchases, oldest first."""
        ...

    @abstractmethod
    def list_purchases_for_holder(self, holder_id: str, status: str = COMPLETED) -> list[Purchase]:
        """Return a holder's purchases in the given status, oldest first."""
        ...
