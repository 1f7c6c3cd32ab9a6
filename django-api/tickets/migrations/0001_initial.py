import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PurchaseRecord",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("holder_id", models.CharField(db_index=True, max_length=64)),
                ("holder_first_name", models.CharField(max_length=150)),
                ("holder_last_name", models.CharField(blank=True, max_length=150)),
                ("status", models.CharField(default="pending", max_length=32)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["holder_id", "status"], name="purchase_holder_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TicketRecord",
            fields=[
                ("line_item_id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("purchase_id", models.CharField(db_index=True, max_length=64)),
                ("payload", models.CharField(db_index=True, max_length=512)),
                ("render_url", models.URLField(max_length=1024)),
                ("issued_at", models.DateTimeField()),
                ("expires_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["purchase_id", "line_item_id"],
            },
        ),
        migrations.CreateModel(
            name="PurchaseLineItemRecord",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("product_id", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("is_virtual", models.BooleanField(default=False)),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "purchase",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="tickets.purchaserecord",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
    ]
