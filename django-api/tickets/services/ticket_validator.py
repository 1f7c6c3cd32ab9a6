"""Staff-facing ticket validation."""

from collections.abc import Callable
from datetime import datetime

import structlog
from django.utils import timezone

from tickets.domain import Ticket, TicketStatus, ValidationOutcome, ValidationResult
from tickets.services.payload_encoder import MAX_PAYLOAD_LENGTH
from tickets.stores.interfaces import PurchaseDirectory, TicketStore

logger = structlog.get_logger(__name__)


class TicketValidator:
    """Classifies a presented key as active, expired or unknown.

    Validation is read-only: validating the same ticket repeatedly always
    yields the same verdict for the same instant.
    """

    def __init__(
        self,
        store: TicketStore,
        directory: PurchaseDirectory,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._directory = directory
        self._clock = clock

    def validate(self, key: str) -> ValidationResult:
        """Validate a line item id or a raw scanned payload.

        Raises:
            StoreUnavailableError: If the store cannot be read.
        """
        ticket = self._lookup(key)
        if ticket is None:
            logger.info("ticket_validated", outcome=ValidationOutcome.UNKNOWN.value)
            return ValidationResult.unknown()

        if ticket.status_at(self._clock()) is TicketStatus.ACTIVE:
            outcome = ValidationOutcome.ACTIVE
        else:
            outcome = ValidationOutcome.EXPIRED

        holder_name = product_name = None
        purchase = self._directory.get_purchase(ticket.purchase_id)
        if purchase is not None:
            holder_name = purchase.holder_name
            item = purchase.line_item(ticket.line_item_id)
            product_name = item.name if item else None

        logger.info(
            "ticket_validated",
            outcome=outcome.value,
            line_item_id=ticket.line_item_id,
            purchase_id=ticket.purchase_id,
        )
        return ValidationResult(
            outcome=outcome,
            line_item_id=ticket.line_item_id,
            purchase_id=ticket.purchase_id,
            holder_name=holder_name,
            product_name=product_name,
            expires_at=ticket.expires_at,
        )

    def _lookup(self, key: str) -> Ticket | None:
        # Encoded payloads and their line item ids never exceed this length or hold a NUL.
        if not key or len(key) > MAX_PAYLOAD_LENGTH or "\x00" in key:
            return None
        return self._store.get(key) or self._store.find_by_payload(key)
