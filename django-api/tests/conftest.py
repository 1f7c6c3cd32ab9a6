"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from tickets.domain import Purchase, PurchaseLineItem
from tickets.services import PayloadEncoder, TicketIssuer, TicketReporter, TicketValidator
from tickets.stores.memory_store import InMemoryPurchaseDirectory, InMemoryTicketStore

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_purchase(
    purchase_id: str = "P1",
    holder_name: str = "Jane Doe",
    holder_id: str = "42",
    status: str = "completed",
    items: tuple[tuple[str, str, bool], ...] = (("L1", "Concert Pass", True),),
) -> Purchase:
    return Purchase(
        id=purchase_id,
        holder_name=holder_name,
        holder_id=holder_id,
        status=status,
        completed_at=NOW if status == "completed" else None,
        line_items=tuple(
            PurchaseLineItem(id=item_id, product_id=f"prod-{item_id}", name=name, eligible=eligible)
            for item_id, name, eligible in items
        ),
    )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def directory() -> InMemoryPurchaseDirectory:
    return InMemoryPurchaseDirectory()


@pytest.fixture
def encoder() -> PayloadEncoder:
    return PayloadEncoder()


@pytest.fixture
def issuer(store, encoder, clock) -> TicketIssuer:
    return TicketIssuer(store=store, encoder=encoder, clock=clock)


@pytest.fixture
def validator(store, directory, clock) -> TicketValidator:
    return TicketValidator(store=store, directory=directory, clock=clock)


@pytest.fixture
def reporter(store, directory) -> TicketReporter:
    return TicketReporter(store=store, directory=directory)


@pytest.fixture
def purchase_factory():
    return make_purchase
