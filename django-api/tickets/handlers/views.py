"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tickets.domain.errors import (
    DomainError,
    InvalidTicketKeyError,
    IssuanceInterruptedError,
    PurchaseNotFoundError,
)
from tickets.handlers.errors import error_response
from tickets.handlers.serializers import (
    IssuanceResultSerializer,
    ReportRowSerializer,
    TicketSerializer,
    ValidateTicketSerializer,
    ValidationResultSerializer,
)
from tickets.services import wiring


class TicketValidateView(APIView):
    """Handler for POST /api/tickets/validate"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request) -> Response:
        form = ValidateTicketSerializer(data=request.data)
        try:
            if form.is_valid():
                key = form.validated_data["ticket_id"]
            elif isinstance(request.data.get("ticket_id"), str):
                # Present but unusable (e.g. NUL characters) is still a key.
                key = request.data["ticket_id"]
            else:
                raise InvalidTicketKeyError()
            result = wiring.build_validator().validate(key.strip())
        except DomainError as exc:
            return error_response(exc)
        return Response(ValidationResultSerializer(result).data)


class TicketListView(APIView):
    """Handler for GET /api/tickets"""

    permission_classes = [IsAdminUser]

    def get(self, request: Request) -> Response:
        try:
            rows = wiring.build_reporter().list_all_tickets()
        except DomainError as exc:
            return error_response(exc)
        return Response(ReportRowSerializer(rows, many=True).data)


class HolderTicketListView(APIView):
    """Handler for GET /api/tickets/mine"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        try:
            rows = wiring.build_reporter().list_tickets_for_holder(str(request.user.pk))
        except DomainError as exc:
            return error_response(exc)
        return Response(ReportRowSerializer(rows, many=True).data)


class PurchaseTicketListView(APIView):
    """Handler for GET /api/purchases/{purchase_id}/tickets"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, purchase_id: str) -> Response:
        try:
            purchase = wiring.build_directory().get_purchase(purchase_id)
            # Holders only see their own receipts.
            if purchase is None or not (request.user.is_staff or purchase.holder_id == str(request.user.pk)):
                raise PurchaseNotFoundError(purchase_id)
            tickets = wiring.build_reporter().list_tickets_for_purchase(purchase_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(TicketSerializer(tickets, many=True).data)


class PurchaseCompleteView(APIView):
    """Handler for POST /api/purchases/{purchase_id}/complete"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, purchase_id: str) -> Response:
        try:
            purchase = wiring.build_directory().get_purchase(purchase_id)
            if purchase is None:
                raise PurchaseNotFoundError(purchase_id)
            result = wiring.build_issuer().issue_for_purchase(purchase)
        except IssuanceInterruptedError as exc:
            return error_response(
                exc,
                issued=[ticket.line_item_id for ticket in exc.result.tickets],
                failures=exc.result.failures,
                pending=exc.pending,
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(IssuanceResultSerializer(result).data)
