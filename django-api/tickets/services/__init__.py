from tickets.services.payload_encoder import PayloadEncoder
from tickets.services.ticket_issuer import TicketIssuer
from tickets.services.ticket_reporter import TicketReporter
from tickets.services.ticket_validator import TicketValidator

__all__ = [
    "PayloadEncoder",
    "TicketIssuer",
    "TicketReporter",
    "TicketValidator",
]
