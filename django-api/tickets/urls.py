from django.urls import path

from tickets.handlers import (
    HolderTicketListView,
    PurchaseCompleteView,
    PurchaseTicketListView,
    TicketListView,
    TicketValidateView,
)

urlpatterns = [
    path("tickets", TicketListView.as_view(), name="ticket-list"),
    path("tickets/mine", HolderTicketListView.as_view(), name="ticket-mine"),
    path("tickets/validate", TicketValidateView.as_view(), name="ticket-validate"),
    path(
        "purchases/<str:purchase_id>/tickets",
        PurchaseTicketListView.as_view(),
        name="purchase-tickets",
    ),
    path(
        "purchases/<str:purchase_id>/complete",
        PurchaseCompleteView.as_view(),
        name="purchase-complete",
    ),
]
