from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import (
            OrderAccepted,
            OrderRejected,
            OrderStatusChanged,
        )
        from modules.orders.handlers import (
            order_accepted_handler,
            order_rejected_handler,
            order_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderAccepted, order_accepted_handler)
        event_bus.subscribe(OrderRejected, order_rejected_handler)
        event_bus.subscribe(OrderStatusChanged, order_status_changed_handler)
