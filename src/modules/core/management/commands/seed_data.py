from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from modules.orders.constants import (
    COMPLETED_STATES,
    DeliveryKind,
    FulfillmentStatus,
    PaymentStatus,
)
from modules.orders.models import Order, OrderItem
from modules.products.models import InventoryItem, Package
from modules.products.stock_status import label_for_quantity
from modules.resellers.models import Reseller

CATALOG = [
    ("Esfera X", "#1E88E5", Decimal("12.90")),
    ("Esfera Y", "#43A047", Decimal("14.90")),
    ("Kit Festa", "#E53935", Decimal("39.90")),
    ("Pacote Mini", "#FDD835", Decimal("7.50")),
    ("Pacote Max", "#8E24AA", Decimal("59.00")),
    ("Refil Colorido", "", Decimal("4.90")),
]

BUYERS = [
    ("ana", "Ana", "Souza"),
    ("bruno", "Bruno", "Lima"),
    ("carla", "Carla", "Mendes"),
    ("daniel", "Daniel", "Costa"),
]

ORDER_STATUSES = [
    FulfillmentStatus.AWAITING_ACCEPTANCE,
    FulfillmentStatus.AWAITING_PREPARATION,
    FulfillmentStatus.PREPARING,
    FulfillmentStatus.READY_FOR_PICKUP,
    FulfillmentStatus.ACCEPTED,
    FulfillmentStatus.IN_TRANSIT,
    FulfillmentStatus.DELIVERED,
    FulfillmentStatus.PICKED_UP,
    FulfillmentStatus.CANCELLED,
]

PICKUP_ONLY = {
    FulfillmentStatus.PREPARING,
    FulfillmentStatus.READY_FOR_PICKUP,
    FulfillmentStatus.PICKED_UP,
}
DELIVERY_ONLY = {
    FulfillmentStatus.ACCEPTED,
    FulfillmentStatus.IN_TRANSIT,
    FulfillmentStatus.DELIVERED,
}


class Command(BaseCommand):
    help = "Seed database with a reseller, its catalog, inventory and orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=24)

    @transaction.atomic
    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        reseller = self._seed_reseller()
        buyers = self._seed_buyers()
        packages = self._seed_packages()
        items = self._seed_inventory(reseller, packages)
        orders_created = self._seed_orders(reseller, buyers, packages, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"reseller={reseller.user.username}, "
                f"buyers={len(buyers)}, "
                f"packages={len(packages)}, "
                f"inventory={len(items)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_reseller(self) -> Reseller:
        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")

        user, created = User.objects.get_or_create(
            username="revendedor",
            defaults={"first_name": "Rita", "last_name": "Revenda"},
        )
        if created:
            user.set_password("revenda123")
            user.save()

        reseller, _ = Reseller.objects.get_or_create(
            user=user,
            defaults={"store_name": "Revenda da Rita", "shipping_fee": Decimal("8.00")},
        )
        return reseller

    def _seed_buyers(self) -> list:
        User = get_user_model()
        buyers = []
        for username, first_name, last_name in BUYERS:
            user, created = User.objects.get_or_create(
                username=username,
                defaults={"first_name": first_name, "last_name": last_name},
            )
            if created:
                user.set_unusable_password()
                user.save()
            buyers.append(user)
        return buyers

    def _seed_packages(self) -> list[Package]:
        self.stdout.write("Creating packages...")
        packages: list[Package] = []
        for description, color, price in CATALOG:
            package, _ = Package.objects.get_or_create(
                description=description,
                defaults={"color": color, "price": price},
            )
            packages.append(package)
        return packages

    def _seed_inventory(
        self, reseller: Reseller, packages: list[Package]
    ) -> list[InventoryItem]:
        self.stdout.write("Creating inventory...")
        items: list[InventoryItem] = []
        # The last package stays out of the inventory on purpose.
        for package in packages[:-1]:
            quantity = random.choice([0, 5, 15, 40, 120])
            item, _ = InventoryItem.objects.get_or_create(
                reseller=reseller,
                product=package.description,
                defaults={
                    "package": package,
                    "quantity": quantity,
                    "status": label_for_quantity(quantity),
                    "price": package.price + Decimal("2.00"),
                },
            )
            items.append(item)
        return items

    def _seed_orders(
        self,
        reseller: Reseller,
        buyers: list,
        packages: list[Package],
        count: int,
    ) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.filter(reseller=reseller).exists():
            self.stdout.write(self.style.WARNING("Orders already seeded, skipping."))
            return 0

        now = timezone.now()
        for i in range(count):
            status = ORDER_STATUSES[i % len(ORDER_STATUSES)]
            if status in PICKUP_ONLY:
                kind = DeliveryKind.PICKUP
            elif status in DELIVERY_ONLY:
                kind = DeliveryKind.DELIVERY
            else:
                kind = random.choice([DeliveryKind.PICKUP, DeliveryKind.DELIVERY])

            created_at = now - timedelta(days=random.randint(1, 200))
            order = Order.objects.create(
                number=f"{1001 + i}",
                reseller=reseller,
                customer=random.choice(buyers),
                shipping_fee=(
                    Decimal("0.00") if kind == DeliveryKind.PICKUP else reseller.shipping_fee
                ),
                payment_method=random.choice(["pix", "cartao", "dinheiro"]),
                delivery_kind=kind,
                payment_status=(
                    PaymentStatus.PAID
                    if status in COMPLETED_STATES
                    else PaymentStatus.PENDING
                ),
                fulfillment_status=status,
                delivered_at=(
                    created_at + timedelta(days=2) if status in COMPLETED_STATES else None
                ),
            )

            total = order.shipping_fee
            for package in random.sample(packages, k=random.randint(1, 3)):
                item = OrderItem.objects.create(
                    order=order,
                    package=package,
                    quantity=random.randint(1, 6),
                    unit_price=package.price,
                )
                total += item.subtotal

            Order.objects.filter(id=order.id).update(
                created_at=created_at, total_amount=total
            )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count
