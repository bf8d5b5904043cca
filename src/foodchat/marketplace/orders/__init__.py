"""Orders and their fulfillment lifecycle.

:class:`~.book.OrderBook` lives in ``orders.book``; it depends on the chat
message models, which in turn depend on the order models exported here.
"""

from .models import CheckoutDetails, Order, OrderStatus

__all__ = ["CheckoutDetails", "Order", "OrderStatus"]
