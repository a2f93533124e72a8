"""Storage boundary for the reprocessing workflow.

``ProductStore`` is the collaborator the orchestrator reads products and shop
settings from and writes snapshots back to. ``InMemoryProductStore`` backs
the CLI and the tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from ..catalog import ProductFlags, ProductOverride, ShopSettings, parse_overrides
from ..errors import ShopNotFoundError
from ..values import clean_text


@dataclass
class ProductRecord:
    id: str
    shop_id: str
    raw: dict[str, Any] | None = None
    overrides: dict[str, ProductOverride] = field(default_factory=dict)
    flags: ProductFlags = field(default_factory=ProductFlags)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ProductRecord:
        product_id = clean_text(payload.get("id"))
        shop_id = clean_text(payload.get("shop_id") or payload.get("shopId"))
        if product_id is None or shop_id is None:
            raise ValueError("Product records require id and shop_id.")
        raw = payload.get("raw")
        return cls(
            id=product_id,
            shop_id=shop_id,
            raw=dict(raw) if isinstance(raw, Mapping) else None,
            overrides=parse_overrides(payload.get("overrides")),
            flags=ProductFlags.from_dict(payload.get("flags")),
        )


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    resolved: dict[str, Any]
    is_valid: bool
    errors: dict[str, list[str]] = field(default_factory=dict)
    warnings: dict[str, list[str]] = field(default_factory=dict)
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "resolved": dict(self.resolved),
            "isValid": self.is_valid,
            "errors": {key: list(value) for key, value in self.errors.items()},
            "warnings": {key: list(value) for key, value in self.warnings.items()},
            "processedAt": self.processed_at.isoformat(),
        }


class ProductStore(Protocol):
    def load_shop(self, shop_id: str) -> ShopSettings: ...

    def list_products(self, shop_id: str) -> list[ProductRecord]: ...

    def get_product(self, product_id: str) -> ProductRecord | None: ...

    def save_overrides(self, product_id: str, overrides: dict[str, ProductOverride]) -> None: ...

    def save_snapshot(self, product_id: str, snapshot: ProductSnapshot) -> None: ...


@dataclass
class InMemoryProductStore:
    shops: dict[str, ShopSettings] = field(default_factory=dict)
    products: dict[str, ProductRecord] = field(default_factory=dict)
    snapshots: dict[str, ProductSnapshot] = field(default_factory=dict)
    shop_loads: int = 0
    snapshot_writes: int = 0

    def add_shop(self, shop: ShopSettings) -> None:
        self.shops[shop.shop_id] = shop

    def add_product(self, record: ProductRecord) -> None:
        self.products[record.id] = record

    def load_shop(self, shop_id: str) -> ShopSettings:
        self.shop_loads += 1
        shop = self.shops.get(shop_id)
        if shop is None:
            raise ShopNotFoundError(shop_id)
        return shop

    def list_products(self, shop_id: str) -> list[ProductRecord]:
        return [record for record in self.products.values() if record.shop_id == shop_id]

    def get_product(self, product_id: str) -> ProductRecord | None:
        return self.products.get(product_id)

    def save_overrides(self, product_id: str, overrides: dict[str, ProductOverride]) -> None:
        record = self.products.get(product_id)
        if record is not None:
            record.overrides = dict(overrides)

    def save_snapshot(self, product_id: str, snapshot: ProductSnapshot) -> None:
        self.snapshots[product_id] = snapshot
        self.snapshot_writes += 1

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> InMemoryProductStore:
        store = cls()
        for shop_payload in payload.get("shops") or []:
            store.add_shop(ShopSettings.from_dict(shop_payload))
        for product_payload in payload.get("products") or []:
            store.add_product(ProductRecord.from_dict(product_payload))
        return store


__all__ = [
    "InMemoryProductStore",
    "ProductRecord",
    "ProductSnapshot",
    "ProductStore",
]
