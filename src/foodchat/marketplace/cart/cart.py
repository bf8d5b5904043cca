"""Cart aggregation keyed by (item id, seller id)."""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..shared.models import CatalogEntry, Seller


class CartItem(BaseModel):
    """One cart line: a catalog entry and a positive quantity."""

    model_config = ConfigDict(validate_assignment=True)

    entry: CatalogEntry
    quantity: int = Field(default=1, ge=1)

    @computed_field  # type: ignore[misc]
    @property
    def total(self) -> int:
        """Line total: unit price times quantity."""
        return self.entry.price * self.quantity

    @property
    def key(self) -> tuple[str, str]:
        """The ``(item id, seller id)`` pair of this line."""
        return self.entry.key


class Cart(BaseModel):
    """The buyer's cart. Holds at most one line per (item, seller) pair."""

    lines: dict[tuple[str, str], CartItem] = Field(default_factory=dict)

    @property
    def items(self) -> list[CartItem]:
        """Snapshot of the cart lines in the order they were first added."""
        return [line.model_copy() for line in self.lines.values()]

    @property
    def is_empty(self) -> bool:
        """True when the cart has no lines."""
        return not self.lines

    def add(self, entry: CatalogEntry, quantity: int = 1) -> CartItem:
        """Add ``quantity`` of ``entry``, merging into an existing line.

        Raises:
            ValueError: If ``quantity`` is not positive.

        """
        if quantity < 1:
            raise ValueError(f"quantity must be positive, got {quantity}")

        line = self.lines.get(entry.key)
        if line is None:
            line = CartItem(entry=entry, quantity=quantity)
            self.lines[entry.key] = line
        else:
            line.quantity += quantity
        return line

    def remove(self, item_id: str, seller_id: str) -> None:
        """Drop a line. Removing an absent line does nothing."""
        self.lines.pop((item_id, seller_id), None)

    def set_quantity(self, item_id: str, seller_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes it. Absent lines are ignored."""
        if quantity <= 0:
            self.remove(item_id, seller_id)
            return
        line = self.lines.get((item_id, seller_id))
        if line is not None:
            line.quantity = quantity

    def total(self) -> int:
        """Sum of all line totals."""
        return sum(line.total for line in self.lines.values())

    def count(self) -> int:
        """Number of units across all lines."""
        return sum(line.quantity for line in self.lines.values())

    def dominant_seller(self) -> Seller | None:
        """The seller with the most units in the cart.

        Ties go to the seller encountered first. None when the cart is empty.
        """
        quantities: dict[str, int] = {}
        sellers: dict[str, Seller] = {}
        for line in self.lines.values():
            seller = line.entry.seller
            sellers.setdefault(seller.id, seller)
            quantities[seller.id] = quantities.get(seller.id, 0) + line.quantity

        best_id: str | None = None
        for seller_id, quantity in quantities.items():
            if best_id is None or quantity > quantities[best_id]:
                best_id = seller_id
        return sellers[best_id] if best_id is not None else None

    def clear(self) -> None:
        """Empty the cart."""
        self.lines.clear()
