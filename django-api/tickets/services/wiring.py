"""Default service instances built from Django settings."""

from django.conf import settings

from tickets.domain import ValidityWindow
from tickets.services.payload_encoder import PayloadEncoder
from tickets.services.ticket_issuer import TicketIssuer
from tickets.services.ticket_reporter import TicketReporter
from tickets.services.ticket_validator import TicketValidator
from tickets.stores.django_store import DjangoPurchaseDirectory, DjangoTicketStore


def build_encoder() -> PayloadEncoder:
    return PayloadEncoder(
        render_base_url=settings.TICKET_RENDER_BASE_URL,
        render_size=settings.TICKET_RENDER_SIZE,
    )


def build_issuer() -> TicketIssuer:
    return TicketIssuer(
        store=DjangoTicketStore(),
        encoder=build_encoder(),
        validity=ValidityWindow(days=settings.TICKET_VALIDITY_DAYS),
    )


def build_validator() -> TicketValidator:
    return TicketValidator(store=DjangoTicketStore(), directory=DjangoPurchaseDirectory())


def build_reporter() -> TicketReporter:
    return TicketReporter(store=DjangoTicketStore(), directory=DjangoPurchaseDirectory())


def build_directory() -> DjangoPurchaseDirectory:
    return DjangoPurchaseDirectory()
