from tickets.handlers.views import (
    HolderTicketListView,
    PurchaseCompleteView,
    PurchaseTicketListView,
    TicketListView,
    TicketValidateView,
)

__all__ = [
    "HolderTicketListView",
    "PurchaseCompleteView",
    "PurchaseTicketListView",
    "TicketListView",
    "TicketValidateView",
]
