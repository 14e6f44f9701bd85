"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AcceptOrderSerializer(serializers.Serializer):
    estimated_date = serializers.DateField()


class RejectOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, default="", allow_blank=True)


class AdvanceStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=30)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Line item with the package it refers to."""

    product = serializers.CharField(source="package.description", read_only=True)
    color = serializers.CharField(source="package.color", read_only=True)
    subtotal = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "package_id",
            "product",
            "color",
            "quantity",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Order row for the dashboard lists."""

    customer_name = serializers.CharField(read_only=True)
    fulfillment_status_display = serializers.CharField(
        source="get_fulfillment_status_display", read_only=True
    )
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "number",
            "customer_name",
            "total_amount",
            "delivery_kind",
            "payment_method",
            "payment_status",
            "fulfillment_status",
            "fulfillment_status_display",
            "item_count",
            "created_at",
            "estimated_delivery_date",
            "delivered_at",
        ]
        read_only_fields = fields

    def get_item_count(self, obj: Order) -> int:
        return sum(item.quantity for item in obj.items.all())


class OrderSerializer(OrderListSerializer):
    """Order detail with items, history and the next states on offer."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)
    allowed_transitions = serializers.ListField(
        child=serializers.CharField(), read_only=True
    )

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + [
            "shipping_fee",
            "reseller_notes",
            "items",
            "status_history",
            "allowed_transitions",
        ]
        read_only_fields = fields


class OrderDecisionSerializer(serializers.Serializer):
    """Renders ``OrderDecisionResult``."""

    message = serializers.CharField()
    order = OrderSerializer()
