"""Order models and the fulfillment status state machine."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from ..cart.cart import CartItem
from ..shared.models import Seller


class OrderStatus(str, Enum):
    """Fulfillment status of an order.

    PENDING -> ACCEPTED | REJECTED -> ON_PROCESS -> DRIVER_ON_WAY -> COMPLETED.
    BUSY can be entered from any active status and delays the order without
    ending it. REJECTED and COMPLETED are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ON_PROCESS = "on_process"
    DRIVER_ON_WAY = "driver_on_way"
    COMPLETED = "completed"
    BUSY = "busy"

    @property
    def is_terminal(self) -> bool:
        """Whether the order is finished for good."""
        return self in (OrderStatus.REJECTED, OrderStatus.COMPLETED)


class CheckoutDetails(BaseModel):
    """Delivery details entered by the buyer at checkout."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""
    phone: str = ""
    address: str = ""
    notes: str = ""

    def missing_fields(self) -> list[str]:
        """Required fields that were left blank."""
        return [
            field
            for field in ("name", "phone", "address")
            if not getattr(self, field)
        ]


class Order(BaseModel):
    """An order placed with a single seller.

    Only ``status`` and ``estimated_minutes`` change after creation, and only
    through :class:`~foodchat.marketplace.orders.book.OrderBook`.
    """

    id: str = Field(description="Unique order id")
    customer_name: str
    phone: str
    address: str
    notes: str = ""
    items: list[CartItem] = Field(description="Snapshot of the cart at checkout")
    subtotal: int = Field(ge=0)
    seller: Seller
    created_at: AwareDatetime = Field(default_factory=lambda: datetime.now(UTC))
    status: OrderStatus = OrderStatus.PENDING
    estimated_minutes: int = Field(ge=0)

    @property
    def is_active(self) -> bool:
        """True until the order is rejected or completed."""
        return not self.status.is_terminal
