"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderLine, OrderStatus, PaymentMethod
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw.get("user_id") == user_id
        ]

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        self._file.upsert(self._to_raw(order), key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_method": order.payment_method.value,
            "shipping_address": order.shipping_address.to_raw(),
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "created_at": order.created_at.isoformat(),
            "lines": [
                {
                    "product_id": line.product_id,
                    "title": line.title,
                    "description": line.description,
                    "size": line.size,
                    "color": line.color,
                    "quantity": line.quantity.value,
                    "price": str(line.price.amount),
                    "images": list(line.images),
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        lines = [
            OrderLine(
                product_id=i["product_id"],
                title=i["title"],
                description=i["description"],
                size=i["size"],
                color=i["color"],
                quantity=Quantity(i["quantity"]),
                price=Money(Decimal(i["price"]), currency),
                images=tuple(i.get("images", [])),
            )
            for i in raw["lines"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw.get("user_id"),
            lines=lines,
            total_amount=Money(Decimal(raw["total_amount"]), currency),
            payment_method=PaymentMethod(raw["payment_method"]),
            shipping_address=ShippingAddress.from_raw(raw["shipping_address"]),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
