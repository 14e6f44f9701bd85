"""Customer DRF serializers (read-only)."""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    email = serializers.CharField(source="user.email", read_only=True)

    class Meta:
        model = Customer
        fields = ["id", "user_id", "name", "email", "created_at"]
        read_only_fields = fields
