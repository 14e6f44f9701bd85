"""Catalog and inventory DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import InventoryItem, Package
from modules.products.stock_status import stock_status

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AddInventoryItemSerializer(serializers.Serializer):
    package_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=0)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class AdjustStockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=0)


class UpdateInventoryItemSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    status = serializers.CharField(max_length=50, required=False, allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class PackageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Package
        fields = ["id", "description", "color", "price"]
        read_only_fields = fields


class InventoryItemSerializer(serializers.ModelSerializer):
    """Inventory row with package colour and computed stock status."""

    color = serializers.CharField(read_only=True)
    stock_status = serializers.SerializerMethodField()

    class Meta:
        model = InventoryItem
        fields = [
            "id",
            "package_id",
            "product",
            "quantity",
            "status",
            "price",
            "color",
            "stock_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_stock_status(self, obj: InventoryItem) -> dict:
        view = stock_status(obj.status, obj.quantity)
        return {"display": view.display, "severity": view.severity.value}
