"""Re-run ticket issuance for one or more purchases.

Issuance is idempotent, so running this for a purchase that already has
tickets overwrites them under the same line item ids.

Usage:
    python manage.py issue_tickets <purchase_id> [<purchase_id> ...]
"""

import typing as t

from django.core.management.base import BaseCommand, CommandError

from tickets.domain.errors import DomainError, IssuanceInterruptedError
from tickets.services import wiring


class Command(BaseCommand):
    help = "Issue (or re-issue) tickets for completed purchases."

    def add_arguments(self, parser: t.Any) -> None:
        """Add CLI arguments."""
        parser.add_argument("purchase_ids", nargs="+", help="Purchase identifiers.")

    def handle(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Issue tickets for each purchase, reporting per line item failures."""
        purchase_ids: list[str] = kwargs["purchase_ids"]
        directory = wiring.build_directory()
        issuer = wiring.build_issuer()
        failed = False

        for purchase_id in purchase_ids:
            purchase = directory.get_purchase(purchase_id)
            if purchase is None:
                self.stderr.write(self.style.ERROR(f"{purchase_id}: purchase not found"))
                failed = True
                continue
            try:
                result = issuer.issue_for_purchase(purchase)
            except IssuanceInterruptedError as exc:
                result = exc.result
                pending = ", ".join(exc.pending) or "none"
                self.stderr.write(self.style.ERROR(f"{purchase_id}: {exc.message}; not attempted: {pending}"))
                failed = True
            except DomainError as exc:
                self.stderr.write(self.style.ERROR(f"{purchase_id}: {exc.message}"))
                failed = True
                continue

            self.stdout.write(self.style.SUCCESS(f"{purchase_id}: issued {len(result)} ticket(s)"))
            for line_item_id, message in result.failures.items():
                self.stderr.write(self.style.WARNING(f"{purchase_id}/{line_item_id}: {message}"))
                failed = True

        if failed:
            raise CommandError("Issuance finished with errors")
