"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class ValidateTicketSerializer(serializers.Serializer):
    """Input for a validation submission."""

    ticket_id = serializers.CharField(allow_blank=True)


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    line_item_id = serializers.CharField()
    purchase_id = serializers.CharField()
    payload = serializers.CharField()
    render_url = serializers.CharField()
    issued_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField()


class ReportRowSerializer(serializers.Serializer):
    """Serializer for ReportRow domain model."""

    purchase_id = serializers.CharField()
    holder_name = serializers.CharField()
    product_name = serializers.CharField(allow_null=True)
    line_item_id = serializers.CharField()
    expires_at = serializers.DateTimeField()
    render_url = serializers.CharField()


class ValidationResultSerializer(serializers.Serializer):
    """Serializer for ValidationResult domain model."""

    status = serializers.CharField(source="outcome.value")
    valid = serializers.BooleanField(source="is_valid")
    line_item_id = serializers.CharField(allow_null=True)
    purchase_id = serializers.CharField(allow_null=True)
    holder_name = serializers.CharField(allow_null=True)
    product_name = serializers.CharField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)


class IssuanceResultSerializer(serializers.Serializer):
    """Serializer for IssuanceResult domain model."""

    purchase_id = serializers.CharField()
    tickets = TicketSerializer(many=True)
    failures = serializers.DictField(child=serializers.CharField())
