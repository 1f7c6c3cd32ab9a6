"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
PurchaseRecord and PurchaseLineItemRecord are owned by the purchase subsystem;
tickets only read them.
"""

from django.db import models


class PurchaseRecord(models.Model):
    """Persistence model for purchases."""

    id = models.CharField(primary_key=True, max_length=64)
    holder_id = models.CharField(max_length=64, db_index=True)
    holder_first_name = models.CharField(max_length=150)
    holder_last_name = models.CharField(max_length=150, blank=True)
    status = models.CharField(max_length=32, default="pending")
    completed_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["holder_id", "status"], name="purchase_holder_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Purchase {self.id}"

    @property
    def holder_name(self) -> str:
        return f"{self.holder_first_name} {self.holder_last_name}".strip()


class PurchaseLineItemRecord(models.Model):
    """Persistence model for purchase line items."""

    id = models.CharField(primary_key=True, max_length=64)
    purchase = models.ForeignKey(
        PurchaseRecord, on_delete=models.CASCADE, related_name="line_items"
    )
    product_id = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    is_virtual = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return self.name


class TicketRecord(models.Model):
    """Persistence model for issued tickets, one per eligible line item."""

    line_item_id = models.CharField(primary_key=True, max_length=64)
    purchase_id = models.CharField(max_length=64, db_index=True)
    payload = models.CharField(max_length=512, db_index=True)
    render_url = models.URLField(max_length=1024)
    issued_at = models.DateTimeField()
    expires_at = models.DateTimeField()

    class Meta:
        ordering = ["purchase_id", "line_item_id"]

    def __str__(self) -> str:
        return f"Ticket {self.line_item_id}"
