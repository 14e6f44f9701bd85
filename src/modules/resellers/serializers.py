"""Reseller DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.resellers.models import Reseller


class ResellerSerializer(serializers.ModelSerializer):
    """Read serializer for the reseller profile."""

    first_name = serializers.CharField(source="user.first_name", read_only=True)
    last_name = serializers.CharField(source="user.last_name", read_only=True)
    email = serializers.CharField(source="user.email", read_only=True)

    class Meta:
        model = Reseller
        fields = [
            "id",
            "store_name",
            "first_name",
            "last_name",
            "email",
            "shipping_fee",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UpdateShippingFeeSerializer(serializers.Serializer):
    shipping_fee = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0
    )


class RecentSaleSerializer(serializers.Serializer):
    order_number = serializers.CharField()
    customer_name = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class MonthlyRevenueSerializer(serializers.Serializer):
    month = serializers.CharField()
    total = serializers.IntegerField()


class DashboardSummarySerializer(serializers.Serializer):
    """Renders ``DashboardSummaryDTO``."""

    total_units = serializers.IntegerField()
    product_count = serializers.IntegerField()
    low_stock_items = serializers.IntegerField()
    customer_count = serializers.IntegerField()
    order_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    recent_sales = RecentSaleSerializer(many=True)
    monthly_revenue = MonthlyRevenueSerializer(many=True)
