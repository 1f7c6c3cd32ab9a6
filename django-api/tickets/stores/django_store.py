"""Django ORM implementations of the ticket store and purchase directory."""

from collections.abc import Callable, Iterable
from functools import wraps
from typing import ParamSpec, TypeVar

import structlog
from django.db import DatabaseError, transaction

from tickets.domain import COMPLETED, Purchase, PurchaseLineItem, Ticket
from tickets.domain.errors import StoreUnavailableError
from tickets.models import PurchaseRecord, TicketRecord
from tickets.stores.interfaces import PurchaseDirectory, TicketStore

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _store_operation(func: Callable[P, R]) -> Callable[P, R]:
    """Translate database failures into StoreUnavailableError."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error("ticket_store_unavailable", operation=func.__name__, error=str(exc))
            raise StoreUnavailableError(func.__name__) from exc

    return wrapper


def _to_ticket(record: TicketRecord) -> Ticket:
    return Ticket(
        line_item_id=record.line_item_id,
        purchase_id=record.purchase_id,
        payload=record.payload,
        render_url=record.render_url,
        issued_at=record.issued_at,
        expires_at=record.expires_at,
    )


def _to_purchase(record: PurchaseRecord) -> Purchase:
    return Purchase(
        id=record.id,
        holder_name=record.holder_name,
        holder_id=record.holder_id,
        status=record.status,
        completed_at=record.completed_at,
        line_items=tuple(
            PurchaseLineItem(
                id=item.id,
                product_id=item.product_id,
                name=item.name,
                eligible=item.is_virtual,
            )
            for item in record.line_items.all()
        ),
    )


class DjangoTicketStore(TicketStore):
    """Database-backed ticket store using Django ORM."""

    @_store_operation
    def upsert(self, ticket: Ticket) -> None:
        with transaction.atomic():
            TicketRecord.objects.update_or_create(
                line_item_id=ticket.line_item_id,
                defaults={
                    "purchase_id": ticket.purchase_id,
                    "payload": ticket.payload,
                    "render_url": ticket.render_url,
                    "issued_at": ticket.issued_at,
                    "expires_at": ticket.expires_at,
                },
            )

    @_store_operation
    def get(self, line_item_id: str) -> Ticket | None:
        record = TicketRecord.objects.filter(line_item_id=line_item_id).first()
        return _to_ticket(record) if record else None

    @_store_operation
    def find_by_payload(self, payload: str) -> Ticket | None:
        record = TicketRecord.objects.filter(payload=payload).first()
        return _to_ticket(record) if record else None

    @_store_operation
    def list_all(self) -> list[Ticket]:
        return [_to_ticket(record) for record in TicketRecord.objects.all()]

    @_store_operation
    def list_for_purchase(self, purchase_id: str) -> list[Ticket]:
        return [_to_ticket(record) for record in TicketRecord.objects.filter(purchase_id=purchase_id)]

    @_store_operation
    def list_for_purchases(self, purchase_ids: Iterable[str]) -> list[Ticket]:
        records = TicketRecord.objects.filter(purchase_id__in=list(purchase_ids))
        return [_to_ticket(record) for record in records]


class DjangoPurchaseDirectory(PurchaseDirectory):
    """Reads purchases from the purchase subsystem's tables."""

    @_store_operation
    def get_purchase(self, purchase_id: str) -> Purchase | None:
        record = PurchaseRecord.objects.prefetch_related("line_items").filter(id=purchase_id).first()
        return _to_purchase(record) if record else None

    @_store_operation
    def get_purchases(self, purchase_ids: Iterable[str]) -> list[Purchase]:
        records = PurchaseRecord.objects.prefetch_related("line_items").filter(id__in=list(purchase_ids))
        return [_to_purchase(record) for record in records]

    @_store_operation
    def list_purchases(self) -> list[Purchase]:
        return [_to_purchase(record) for record in PurchaseRecord.objects.prefetch_related("line_items")]

    @_store_operation
    def list_purchases_for_holder(self, holder_id: str, status: str = COMPLETED) -> list[Purchase]:
        records = PurchaseRecord.objects.prefetch_related("line_items").filter(holder_id=holder_id, status=status)
        return [_to_purchase(record) for record in records]
