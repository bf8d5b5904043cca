"""Chat messages exchanged over the event bus."""

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.type_adapter import TypeAdapter

from .orders.models import Order, OrderStatus
from .shared.models import CatalogEntry, SpecialOffer

SenderRole = Literal["buyer", "seller", "system"]


class TextPayload(BaseModel):
    """Plain chat text; the content is the message body."""

    type: Literal["text"] = "text"


class RecommendationPayload(BaseModel):
    """A ranked list of catalog entries."""

    type: Literal["recommendation"] = "recommendation"
    entries: list[CatalogEntry] = Field(description="Entries in ranked order")


class SpecialOfferPayload(BaseModel):
    """A single special offer."""

    type: Literal["special_offer"] = "special_offer"
    offer: SpecialOffer


class OrderUpdatePayload(BaseModel):
    """An order changed status."""

    type: Literal["order_update"] = "order_update"
    order_id: str
    seller_id: str
    status: OrderStatus
    estimated_minutes: int


class NewOrderPayload(BaseModel):
    """A freshly placed order, addressed to its seller."""

    type: Literal["new_order"] = "new_order"
    order: Order

    @property
    def seller_id(self) -> str:
        """The seller the order is addressed to."""
        return self.order.seller.id


# Payload is a union type of the payload types
Payload = Annotated[
    TextPayload
    | RecommendationPayload
    | SpecialOfferPayload
    | OrderUpdatePayload
    | NewOrderPayload,
    Field(discriminator="type"),
]

# Type adapter for Payload for serialization/deserialization
PayloadAdapter: TypeAdapter[Payload] = TypeAdapter(Payload)


class ChatMessage(BaseModel):
    """One message on the bus. Messages are never modified after creation."""

    model_config = ConfigDict(frozen=True)

    sender_name: str = Field(description="Display name of the sender")
    sender_role: SenderRole = Field(description="buyer, seller or system")
    body: str = Field(default="", description="Human readable text")
    payload: Payload = Field(default_factory=TextPayload)
    created_at: AwareDatetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def type(self) -> str:
        """The payload discriminator, e.g. ``"text"``."""
        return self.payload.type

    @classmethod
    def text(cls, sender_name: str, sender_role: SenderRole, body: str):
        """Create a plain text message."""
        return cls(sender_name=sender_name, sender_role=sender_role, body=body)

    @classmethod
    def system(cls, body: str):
        """Create a system notice."""
        return cls(sender_name="System", sender_role="system", body=body)
