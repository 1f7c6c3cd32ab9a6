"""Integration tests for the tickets HTTP API.

Run with: pytest tests/test_api.py -v
"""

from datetime import timedelta
from unittest.mock import Mock, patch

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from tickets.domain.errors import StoreUnavailableError
from tickets.models import PurchaseLineItemRecord, PurchaseRecord, TicketRecord


@pytest.fixture
def holder(django_user_model):
    return django_user_model.objects.create_user(username="jane", password="secret")


@pytest.fixture
def staff_client(api_client: APIClient, admin_user) -> APIClient:
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def holder_client(holder) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=holder)
    return client


def _create_purchase(purchase_id, holder_id, first_name="Jane", last_name="Doe", status="completed", items=()):
    purchase = PurchaseRecord.objects.create(
        id=purchase_id,
        holder_id=holder_id,
        holder_first_name=first_name,
        holder_last_name=last_name,
        status=status,
        completed_at=timezone.now() if status == "completed" else None,
    )
    for position, (item_id, name, is_virtual) in enumerate(items):
        PurchaseLineItemRecord.objects.create(
            id=item_id,
            purchase=purchase,
            product_id=f"prod-{item_id}",
            name=name,
            is_virtual=is_virtual,
            position=position,
        )
    return purchase


@pytest.fixture
def purchases(holder):
    _create_purchase("P1", str(holder.pk), items=[("L1", "Concert Pass", True)])
    _create_purchase("P2", "someone-else", "John", "Roe", items=[("L2", "Festival Pass", True), ("L3", "Shirt", False)])
    _create_purchase("P3", str(holder.pk), status="processing", items=[("L4", "Workshop", True)])


@pytest.mark.django_db
class TestPurchaseComplete:
    """Tests for POST /api/purchases/{id}/complete"""

    def test_issues_tickets_for_eligible_items(self, staff_client, purchases):
        response = staff_client.post("/api/purchases/P2/complete")

        assert response.status_code == 200
        body = response.json()
        assert [t["line_item_id"] for t in body["tickets"]] == ["L2"]
        assert body["tickets"][0]["payload"] == "P2|John Roe|L2"
        assert body["failures"] == {}
        assert list(TicketRecord.objects.values_list("line_item_id", flat=True)) == ["L2"]

    def test_repeated_completion_is_idempotent(self, staff_client, purchases):
        staff_client.post("/api/purchases/P1/complete")
        staff_client.post("/api/purchases/P1/complete")
        assert TicketRecord.objects.filter(purchase_id="P1").count() == 1

    def test_not_completed_purchase_conflicts(self, staff_client, purchases):
        response = staff_client.post("/api/purchases/P3/complete")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "PURCHASE_NOT_COMPLETED"
        assert not TicketRecord.objects.exists()

    def test_unknown_purchase_not_found(self, staff_client, purchases):
        response = staff_client.post("/api/purchases/nope/complete")
        assert response.status_code == 404

    def test_requires_staff(self, holder_client, purchases):
        assert holder_client.post("/api/purchases/P1/complete").status_code == 403

    def test_interrupted_issuance_reports_each_line_item(self, staff_client, purchases):
        _create_purchase("P4", "someone-else", items=[("L7", "Day 1", True), ("L8", "Day 2", True), ("L9", "Day 3", True)])
        upsert = Mock(side_effect=[None, StoreUnavailableError("upsert")])

        with patch("tickets.stores.django_store.DjangoTicketStore.upsert", upsert):
            response = staff_client.post("/api/purchases/P4/complete")

        assert response.status_code == 503
        assert response.json() == {
            "error": {
                "code": "STORE_UNAVAILABLE",
                "message": "Ticket store is unavailable",
                "issued": ["L7"],
                "failures": {"L8": "Ticket store is unavailable"},
                "pending": ["L9"],
            }
        }
        assert upsert.call_count == 2


@pytest.mark.django_db
class TestTicketValidate:
    """Tests for POST /api/tickets/validate"""

    @pytest.fixture(autouse=True)
    def issued(self, staff_client, purchases):
        staff_client.post("/api/purchases/P1/complete")
        staff_client.post("/api/purchases/P2/complete")

    def test_active_by_line_item_id(self, staff_client):
        response = staff_client.post("/api/tickets/validate", {"ticket_id": "L1"}, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "active"
        assert body["valid"] is True
        assert body["holder_name"] == "Jane Doe"
        assert body["product_name"] == "Concert Pass"
        assert body["purchase_id"] == "P1"

    def test_active_by_scanned_payload(self, staff_client):
        response = staff_client.post("/api/tickets/validate", {"ticket_id": " P2|John Roe|L2 "}, format="json")

        body = response.json()
        assert body["status"] == "active"
        assert body["line_item_id"] == "L2"
        assert body["holder_name"] == "John Roe"

    def test_expired_ticket(self, staff_client):
        TicketRecord.objects.filter(line_item_id="L1").update(expires_at=timezone.now() - timedelta(days=1))

        body = staff_client.post("/api/tickets/validate", {"ticket_id": "L1"}, format="json").json()

        assert body["status"] == "expired"
        assert body["valid"] is False

    @pytest.mark.parametrize("ticket_id", ["L3", "garbage", "", "X" * 600, "ab\x00c"])
    def test_unknown_keys(self, staff_client, ticket_id):
        response = staff_client.post("/api/tickets/validate", {"ticket_id": ticket_id}, format="json")

        assert response.status_code == 200
        assert response.json() == {
            "status": "unknown",
            "valid": False,
            "line_item_id": None,
            "purchase_id": None,
            "holder_name": None,
            "product_name": None,
            "expires_at": None,
        }

    @pytest.mark.parametrize("body", [{}, {"ticket_id": ["L1"]}])
    def test_missing_ticket_id_is_bad_request(self, staff_client, body):
        response = staff_client.post("/api/tickets/validate", body, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TICKET_KEY"

    def test_store_unavailable(self, staff_client):
        with patch("tickets.services.ticket_validator.TicketValidator.validate", side_effect=StoreUnavailableError("get")):
            response = staff_client.post("/api/tickets/validate", {"ticket_id": "L1"}, format="json")

        assert response.status_code == 503
        assert response.json() == {
            "error": {"code": "STORE_UNAVAILABLE", "message": "Ticket store is unavailable"}
        }

    def test_requires_staff(self, holder_client):
        response = holder_client.post("/api/tickets/validate", {"ticket_id": "L1"}, format="json")
        assert response.status_code == 403


@pytest.mark.django_db
class TestTicketListings:
    """Tests for GET /api/tickets, /api/tickets/mine and /api/purchases/{id}/tickets"""

    @pytest.fixture(autouse=True)
    def issued(self, staff_client, purchases):
        staff_client.post("/api/purchases/P1/complete")
        staff_client.post("/api/purchases/P2/complete")

    def test_audit_listing(self, staff_client):
        response = staff_client.get("/api/tickets")

        assert response.status_code == 200
        assert [(r["purchase_id"], r["holder_name"], r["product_name"], r["line_item_id"]) for r in response.json()] == [
            ("P1", "Jane Doe", "Concert Pass", "L1"),
            ("P2", "John Roe", "Festival Pass", "L2"),
        ]

    def test_audit_listing_requires_staff(self, holder_client):
        assert holder_client.get("/api/tickets").status_code == 403

    def test_holder_sees_own_tickets(self, holder_client):
        response = holder_client.get("/api/tickets/mine")

        assert response.status_code == 200
        assert [r["line_item_id"] for r in response.json()] == ["L1"]

    def test_holder_without_tickets(self, django_user_model):
        client = APIClient()
        client.force_authenticate(user=django_user_model.objects.create_user(username="bob", password="x"))

        response = client.get("/api/tickets/mine")

        assert response.status_code == 200
        assert response.json() == []

    def test_anonymous_cannot_list_own_tickets(self):
        assert APIClient().get("/api/tickets/mine").status_code == 403

    def test_receipt_lists_render_urls(self, holder_client):
        response = holder_client.get("/api/purchases/P1/tickets")

        assert response.status_code == 200
        [ticket] = response.json()
        assert ticket["render_url"] == (
            "https://api.qrserver.com/v1/create-qr-code/?data=P1%7CJane+Doe%7CL1&size=150x150"
        )

    def test_receipt_hidden_from_other_holders(self, holder_client):
        assert holder_client.get("/api/purchases/P2/tickets").status_code == 404

    def test_staff_can_view_any_receipt(self, staff_client):
        response = staff_client.get("/api/purchases/P2/tickets")
        assert [t["line_item_id"] for t in response.json()] == ["L2"]
