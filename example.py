"""Example: filtered notifications between in-process objects."""

import logging
from typing import Protocol, runtime_checkable

from notifycenter import capabilities, default_registry

logging.basicConfig(level=logging.INFO)


@runtime_checkable
class OrderObserver(Protocol):
    def order_updated(self, order_id: str, status: str) -> None: ...


class OrderView:
    def __init__(self, name: str) -> None:
        self.name = name

    def order_updated(self, order_id: str, status: str) -> None:
        print(f"{self.name}: order {order_id} is now {status}")


@capabilities("cart.changed")
class CartBadge:
    def cart_changed(self, count: int) -> None:
        print(f"badge: {count} item(s)")


def main() -> None:
    registry = default_registry()

    detail = OrderView("detail-42")
    overview = OrderView("overview")
    badge = CartBadge()

    registry.subscribe(detail, OrderObserver, filter="42")
    registry.subscribe(overview, OrderObserver)
    registry.subscribe(badge, "cart.changed")

    # Reaches detail-42 and overview.
    registry.publish(OrderObserver, "42", lambda o: o.order_updated("42", "shipped"))
    # Reaches overview only.
    registry.publish(OrderObserver, "7", lambda o: o.order_updated("7", "paid"))
    registry.publish("cart.changed", action=lambda o: o.cart_changed(3))

    registry.unsubscribe(detail, OrderObserver)
    print(registry.stats())


if __name__ == "__main__":
    main()
