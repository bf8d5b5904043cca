"""Plain-text rendering of the chat transcript, carts and catalogs."""

import sys
from collections.abc import Sequence
from typing import TextIO

from .marketplace.cart import Cart
from .marketplace.catalog import CatalogStore
from .marketplace.messaging import (
    ChatMessage,
    NewOrderPayload,
    OrderUpdatePayload,
    RecommendationPayload,
    SpecialOfferPayload,
)
from .marketplace.orders.models import OrderStatus
from .marketplace.shared.models import CatalogEntry, FoodCategory, Seller, SpecialOffer

STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.ACCEPTED: "Accepted",
    OrderStatus.REJECTED: "Rejected",
    OrderStatus.ON_PROCESS: "On Process",
    OrderStatus.DRIVER_ON_WAY: "Driver On Way",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.BUSY: "Busy",
}

CATEGORY_LABELS: dict[FoodCategory, str] = {
    FoodCategory.PADANG: "Padang",
    FoodCategory.KOREAN: "Korean",
    FoodCategory.FASTFOOD: "Fast Food",
    FoodCategory.HEALTHY: "Healthy",
    FoodCategory.WARTEG: "Warteg",
    FoodCategory.DESSERT: "Dessert",
    FoodCategory.DRINKS: "Drinks",
}


def rupiah(amount: int) -> str:
    """Format an amount of Rupiah, e.g. ``Rp 15,000``."""
    return f"Rp {amount:,}"


def format_entry(index: int, entry: CatalogEntry) -> str:
    """One numbered line of a recommendation list."""
    item = entry.item
    flags = ""
    if item.best_seller:
        flags += " [best seller]"
    if item.recommended:
        flags += " [recommended]"
    return (
        f"  {index}. {item.name} ({entry.seller.name}) | {rupiah(item.price)} | "
        f"rating {item.rating:.1f} | {item.prep_minutes} min{flags}"
    )


def format_entries(entries: Sequence[CatalogEntry]) -> str:
    """A numbered recommendation list."""
    return "\n".join(format_entry(i, entry) for i, entry in enumerate(entries, 1))


def format_offer(offer: SpecialOffer) -> str:
    """A special offer card."""
    return (
        f"  [{offer.id}] {offer.title}: {offer.description}\n"
        f"    {rupiah(offer.original_price)} -> {rupiah(offer.offer_price)} "
        f"(save {offer.discount_percent}%, {rupiah(offer.savings)} off)"
    )


def format_seller(seller: Seller) -> str:
    """A one-line seller summary with its status and wait estimate."""
    status = "busy" if seller.busy else "open"
    return (
        f"{seller.id} {seller.name} ({CATEGORY_LABELS[seller.category]}) "
        f"rating {seller.rating:.1f}, {seller.distance_km:.1f} km, {status}, "
        f"~{seller.estimated_wait_time()} min"
    )


def render_message(message: ChatMessage) -> str:
    """Render one chat message as transcript text."""
    header = f"[{message.sender_name}]"
    payload = message.payload

    if isinstance(payload, RecommendationPayload):
        return f"{header} {message.body}\n{format_entries(payload.entries)}"
    if isinstance(payload, SpecialOfferPayload):
        return f"{header} {payload.offer.title}\n{format_offer(payload.offer)}"
    if isinstance(payload, OrderUpdatePayload):
        label = STATUS_LABELS[payload.status]
        if payload.status == OrderStatus.COMPLETED:
            return f"{header} Order {payload.order_id} -> {label}. Delivered!"
        return (
            f"{header} Order {payload.order_id} -> {label} "
            f"(est. {payload.estimated_minutes} min)"
        )
    if isinstance(payload, NewOrderPayload):
        order = payload.order
        return (
            f"{header} sent order {order.id} to {order.seller.name} "
            f"({rupiah(order.subtotal)})"
        )
    return f"{header} {message.body}"


def render_cart(cart: Cart) -> str:
    """The cart contents with line totals and the grand total."""
    if cart.is_empty:
        return "Your cart is empty."
    lines = ["Cart:"]
    for line in cart.items:
        entry = line.entry
        lines.append(
            f"  {line.quantity} x {entry.item.name} ({entry.item.id} @ {entry.seller.id}) "
            f"= {rupiah(line.total)}"
        )
    lines.append(f"  Total: {rupiah(cart.total())} ({cart.count()} items)")
    return "\n".join(lines)


def render_catalog(catalog: CatalogStore) -> str:
    """Every seller with its menu and static offers."""
    blocks: list[str] = []
    for seller in catalog.sellers:
        lines = [format_seller(seller)]
        for item in seller.menu:
            lines.append(
                f"  {item.id:<7} {item.name:<24} {rupiah(item.price):>10}  "
                f"{', '.join(sorted(item.tags))}"
            )
        for offer in catalog.offers_for(seller.id):
            lines.append(format_offer(offer))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


class TranscriptPrinter:
    """Bus subscriber that prints every message as it is published."""

    def __init__(self, stream: TextIO | None = None):
        """Print to ``stream``, or stdout when not given."""
        self.stream = stream or sys.stdout

    def __call__(self, message: ChatMessage) -> None:
        print(render_message(message), file=self.stream, flush=True)
