"""In-process store implementations, used for tests and local wiring."""

import threading
from collections.abc import Iterable

from tickets.domain import COMPLETED, Purchase, Ticket
from tickets.stores.interfaces import PurchaseDirectory, TicketStore


class InMemoryTicketStore(TicketStore):
    """Dict-backed ticket store with payload and purchase indices."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_line_item: dict[str, Ticket] = {}
        self._by_payload: dict[str, str] = {}
        self._by_purchase: dict[str, set[str]] = {}

    def upsert(self, ticket: Ticket) -> None:
        with self._lock:
            previous = self._by_line_item.get(ticket.line_item_id)
            if previous is not None:
                self._by_payload.pop(previous.payload, None)
                self._by_purchase.get(previous.purchase_id, set()).discard(previous.line_item_id)
            self._by_line_item[ticket.line_item_id] = ticket
            self._by_payload[ticket.payload] = ticket.line_item_id
            self._by_purchase.setdefault(ticket.purchase_id, set()).add(ticket.line_item_id)

    def get(self, line_item_id: str) -> Ticket | None:
        return self._by_line_item.get(line_item_id)

    def find_by_payload(self, payload: str) -> Ticket | None:
        with self._lock:
            line_item_id = self._by_payload.get(payload)
            if line_item_id is None:
                return None
            return self._by_line_item.get(line_item_id)

    def list_all(self) -> list[Ticket]:
        with self._lock:
            return list(self._by_line_item.values())

    def list_for_purchase(self, purchase_id: str) -> list[Ticket]:
        with self._lock:
            ids = self._by_purchase.get(purchase_id, set())
            return [self._by_line_item[line_item_id] for line_item_id in sorted(ids)]

    def list_for_purchases(self, purchase_ids: Iterable[str]) -> list[Ticket]:
        with self._lock:
            return [
                self._by_line_item[line_item_id]
                for purchase_id in dict.fromkeys(purchase_ids)
                for line_item_id in sorted(self._by_purchase.get(purchase_id, set()))
            ]


class InMemoryPurchaseDirectory(PurchaseDirectory):
    """Purchase directory over a fixed collection, kept in insertion order."""

    def __init__(self, purchases: list[Purchase] | None = None) -> None:
        self._purchases: dict[str, Purchase] = {}
        for purchase in purchases or []:
            self.add(purchase)

    def add(self, purchase: Purchase) -> None:
        self._purchases[purchase.id] = purchase

    def get_purchase(self, purchase_id: str) -> Purchase | None:
        return self._purchases.get(purchase_id)

    def get_purchases(self, purchase_ids: Iterable[str]) -> list[Purchase]:
        wanted = set(purchase_ids)
        return [purchase for purchase in self._purchases.values() if purchase.id in wanted]

    def list_purchases(self) -> list[Purchase]:
        return list(self._purchases.values())

    def list_purchases_for_holder(self, holder_id: str, status: str = COMPLETED) -> list[Purchase]:
        return [
            purchase
            for purchase in self._purchases.values()
            if purchase.holder_id == holder_id and purchase.status == status
        ]
