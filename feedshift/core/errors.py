"""Hard-failure exception types for the core engine.

Per-field problems never raise; they are folded into validation outcomes.
These exceptions cover caller mistakes only.
"""


class FeedshiftError(Exception):
    """Base class for engine errors."""


class UnknownFieldError(FeedshiftError, KeyError):
    def __init__(self, attribute: str) -> None:
        super().__init__(attribute)
        self.attribute = attribute

    def __str__(self) -> str:
        return f"Unknown feed attribute: {self.attribute}"


class InvalidOverrideError(FeedshiftError, ValueError):
    pass


class ShopNotFoundError(FeedshiftError, LookupError):
    def __init__(self, shop_id: str) -> None:
        super().__init__(f"Shop not found: {shop_id}")
        self.shop_id = shop_id


class ProductNotFoundError(FeedshiftError, LookupError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


__all__ = [
    "FeedshiftError",
    "InvalidOverrideError",
    "ProductNotFoundError",
    "ShopNotFoundError",
    "UnknownFieldError",
]
