import django_filters
from django.db.models import F, Q

from modules.orders.constants import (
    COMPLETED_STATES,
    PENDING_STATES,
    TERMINAL_STATES,
)
from modules.orders.models import Order


class OrderStage:
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    choices = [
        (PENDING, "Pedidos"),
        (IN_PROGRESS, "Em andamento"),
        (COMPLETED, "Finalizados"),
    ]


class OrderFilter(django_filters.FilterSet):
    stage = django_filters.ChoiceFilter(
        choices=OrderStage.choices, method="filter_stage"
    )
    status = django_filters.CharFilter(
        field_name="fulfillment_status", lookup_expr="iexact"
    )
    delivery_kind = django_filters.CharFilter(
        field_name="delivery_kind", lookup_expr="iexact"
    )
    start_date = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__gte"
    )
    end_date = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__lte"
    )
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Order
        fields = ["stage", "status", "delivery_kind", "start_date", "end_date"]

    def filter_stage(self, queryset, name, value):
        if value == OrderStage.PENDING:
            return queryset.filter(fulfillment_status__in=PENDING_STATES).order_by(
                "-created_at"
            )
        if value == OrderStage.IN_PROGRESS:
            return queryset.exclude(
                fulfillment_status__in=PENDING_STATES | TERMINAL_STATES
            ).order_by("-created_at")
        if value == OrderStage.COMPLETED:
            return queryset.filter(fulfillment_status__in=COMPLETED_STATES).order_by(
                F("delivered_at").desc(nulls_last=True)
            )
        return queryset

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(number__icontains=value)
            | Q(customer__first_name__icontains=value)
            | Q(customer__last_name__icontains=value)
        )
