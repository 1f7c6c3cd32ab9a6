"""Ticket issuance for completed purchases."""

from collections.abc import Callable
from datetime import datetime

import structlog
from django.utils import timezone

from tickets.domain import IssuanceResult, Purchase, Ticket, ValidityWindow
from tickets.domain.errors import (
    EncodingError,
    IssuanceInterruptedError,
    NotCompletedError,
    StoreUnavailableError,
)
from tickets.services.payload_encoder import PayloadEncoder
from tickets.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)


class TicketIssuer:
    """Mints one ticket per eligible line item of a completed purchase."""

    def __init__(
        self,
        store: TicketStore,
        encoder: PayloadEncoder | None = None,
        clock: Callable[[], datetime] = timezone.now,
        validity: ValidityWindow | None = None,
    ) -> None:
        self._store = store
        self._encoder = encoder or PayloadEncoder()
        self._clock = clock
        self._validity = validity or ValidityWindow()

    def issue_for_purchase(self, purchase: Purchase) -> IssuanceResult:
        """Mint or re-issue tickets for every eligible line item.

        Re-running for the same purchase overwrites each ticket under its
        line item id, so no duplicates are created. An encoding failure is
        recorded against its line item and does not stop the others.

        Raises:
            NotCompletedError: If the purchase is not completed. Nothing is written.
            IssuanceInterruptedError: If a store write fails. Carries the tickets
                written so far, the failing line item and the ones not attempted.
        """
        if not purchase.is_completed:
            raise NotCompletedError(purchase.id, purchase.status)

        log = logger.bind(purchase_id=purchase.id)
        result = IssuanceResult(purchase_id=purchase.id)
        eligible = [item for item in purchase.line_items if item.eligible]
        if len(eligible) < len(purchase.line_items):
            log.debug("ticket_skipped_ineligible", count=len(purchase.line_items) - len(eligible))

        for position, item in enumerate(eligible):
            try:
                payload = self._encoder.encode(purchase.id, purchase.holder_name, item.id)
            except EncodingError as exc:
                log.warning("ticket_encoding_failed", line_item_id=item.id, error=exc.message)
                result.failures[item.id] = exc.message
                continue

            issued_at = self._clock()
            ticket = Ticket(
                line_item_id=item.id,
                purchase_id=purchase.id,
                payload=payload,
                render_url=self._encoder.render_request(payload).url,
                issued_at=issued_at,
                expires_at=self._validity.expires_at(issued_at),
            )
            try:
                self._store.upsert(ticket)
            except StoreUnavailableError as exc:
                pending = [later.id for later in eligible[position + 1 :]]
                result.failures[item.id] = exc.message
                log.error(
                    "ticket_issuance_interrupted",
                    line_item_id=item.id,
                    issued=[t.line_item_id for t in result.tickets],
                    pending=pending,
                )
                raise IssuanceInterruptedError(result, item.id, pending) from exc
            result.tickets.append(ticket)
            log.info("ticket_issued", line_item_id=item.id, render_url=ticket.render_url)

        return result
