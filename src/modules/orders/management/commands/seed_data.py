from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.catalog.models import Category, Product
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

MENU = {
    "Lanches": [
        ("X-Burger", Decimal("25.90")),
        ("X-Salada", Decimal("27.90")),
        ("Misto Quente", Decimal("14.50")),
    ],
    "Acompanhamentos": [
        ("Batata Frita", Decimal("12.00")),
        ("Onion Rings", Decimal("15.00")),
    ],
    "Bebidas": [
        ("Refrigerante", Decimal("6.50")),
        ("Suco de Laranja", Decimal("8.35")),
        ("Agua", Decimal("4.00")),
    ],
    "Sobremesas": [
        ("Sorvete", Decimal("9.90")),
        ("Pudim", Decimal("9.00")),
    ],
}

# Statuses a seeded order can be left in, with their weights.
STATUS_WEIGHTS = [
    (OrderStatus.SENT, 0.20),
    (OrderStatus.RECEIVED, 0.15),
    (OrderStatus.IN_PREPARATION, 0.25),
    (OrderStatus.READY, 0.15),
    (OrderStatus.FINISHED, 0.25),
]

SEED_TAX_IDS = ["39053344705", "98765432100", "74125896300", None]


class Command(BaseCommand):
    help = "Seed the database with a sample menu and orders in every stage."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=30)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        products = self._seed_menu()
        orders_created = self._seed_orders(products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={len(products)}, orders={orders_created}"
            )
        )

    def _seed_menu(self) -> list[Product]:
        self.stdout.write("Creating menu...")
        products: list[Product] = []
        for category_name, entries in MENU.items():
            category, _ = Category.objects.get_or_create(name=category_name)
            for name, price in entries:
                product, _ = Product.objects.get_or_create(
                    name=name,
                    defaults={"price": price, "category": category},
                )
                products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating menu... Done!"))
        return products

    def _seed_orders(self, products: list[Product], count: int) -> int:
        self.stdout.write("Creating orders...")
        statuses = [s for s, _ in STATUS_WEIGHTS]
        weights = [w for _, w in STATUS_WEIGHTS]
        now = timezone.now()
        created = 0

        for i in range(count):
            title = f"Pedido {i + 1:03d}"
            if Order.objects.filter(title=title).exists():
                continue

            status = random.choices(statuses, weights=weights, k=1)[0]
            received_at = None
            if status != OrderStatus.SENT:
                received_at = now - timedelta(minutes=random.randint(1, 45))

            order = Order.objects.create(
                title=title,
                status=status,
                client_tax_id=random.choice(SEED_TAX_IDS),
                received_at=received_at,
            )

            total = Decimal("0.00")
            for product in random.sample(products, k=random.randint(1, 3)):
                item = OrderItem.objects.create(
                    order=order,
                    product=product,
                    quantity=random.randint(1, 3),
                    unit_price=product.price,
                )
                total += item.subtotal

            Order.objects.filter(id=order.id).update(total_amount=total)
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
