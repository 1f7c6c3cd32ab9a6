"""Ticket listings for audit and holder self-service."""

from collections import defaultdict

from tickets.domain import Purchase, ReportRow, Ticket
from tickets.stores.interfaces import PurchaseDirectory, TicketStore


class TicketReporter:
    """Joins stored tickets with their purchases.

    Rows are grouped by purchase in directory order, then by line item order
    within the purchase. Tickets whose purchase cannot be resolved are left out.
    A ticket whose line item is no longer on its purchase has no product name.
    """

    def __init__(self, store: TicketStore, directory: PurchaseDirectory) -> None:
        self._store = store
        self._directory = directory

    def list_all_tickets(self) -> list[ReportRow]:
        by_purchase = self._group(self._store.list_all())
        if not by_purchase:
            return []
        return self._join(self._directory.get_purchases(list(by_purchase)), by_purchase)

    def list_tickets_for_holder(self, holder_id: str) -> list[ReportRow]:
        purchases = self._directory.list_purchases_for_holder(holder_id)
        if not purchases:
            return []
        by_purchase = self._group(self._store.list_for_purchases([purchase.id for purchase in purchases]))
        return self._join(purchases, by_purchase)

    def list_tickets_for_purchase(self, purchase_id: str) -> list[Ticket]:
        """Return a purchase's tickets in line item order, for receipt display."""
        tickets = self._store.list_for_purchase(purchase_id)
        purchase = self._directory.get_purchase(purchase_id)
        if purchase is None:
            return tickets
        return self._in_line_item_order(purchase, tickets)

    @staticmethod
    def _group(tickets: list[Ticket]) -> dict[str, list[Ticket]]:
        by_purchase: dict[str, list[Ticket]] = defaultdict(list)
        for ticket in tickets:
            by_purchase[ticket.purchase_id].append(ticket)
        return by_purchase

    def _join(self, purchases: list[Purchase], by_purchase: dict[str, list[Ticket]]) -> list[ReportRow]:
        rows: list[ReportRow] = []
        for purchase in purchases:
            rows.extend(self._rows_for(purchase, by_purchase.get(purchase.id, [])))
        return rows

    def _rows_for(self, purchase: Purchase, tickets: list[Ticket]) -> list[ReportRow]:
        rows = []
        for ticket in self._in_line_item_order(purchase, tickets):
            item = purchase.line_item(ticket.line_item_id)
            rows.append(
                ReportRow(
                    purchase_id=purchase.id,
                    holder_name=purchase.holder_name,
                    product_name=item.name if item else None,
                    line_item_id=ticket.line_item_id,
                    expires_at=ticket.expires_at,
                    render_url=ticket.render_url,
                )
            )
        return rows

    @staticmethod
    def _in_line_item_order(purchase: Purchase, tickets: list[Ticket]) -> list[Ticket]:
        positions = {item.id: index for index, item in enumerate(purchase.line_items)}
        return sorted(tickets, key=lambda t: (positions.get(t.line_item_id, len(positions)), t.line_item_id))
