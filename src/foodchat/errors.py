"""Exception types shared across the FoodChat package."""


class FoodChatError(Exception):
    """Base class for all FoodChat errors."""


class CatalogError(FoodChatError):
    """The catalog definition is invalid and cannot be loaded."""


class CheckoutError(FoodChatError, ValueError):
    """Checkout was refused; the cart is left untouched."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        """Initialize with a human readable message and the offending fields."""
        super().__init__(message)
        self.missing_fields = missing_fields or []
