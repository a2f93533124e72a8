from __future__ import annotations

from typing import Any

from feedshift.core.catalog import ProductFlags, ProductOverride, ShopSettings
from feedshift.core.reprocess import InMemoryProductStore, ProductRecord


def build_item(**overrides: Any) -> dict[str, Any]:
    """A simple (non-variant) WooCommerce-shaped catalog item."""
    item: dict[str, Any] = {
        "id": 101,
        "parent_id": 0,
        "type": "simple",
        "name": "Trail Running Shoe",
        "description": "<p>Waterproof <strong>trail</strong> shoe.</p>",
        "short_description": "Trail shoe",
        "permalink": "https://shop.example.com/product/trail-shoe",
        "sku": "TRAIL-101",
        "global_unique_id": "012345678905",
        "regular_price": "79.99",
        "price": "79.99",
        "sale_price": "",
        "stock_status": "instock",
        "stock_quantity": 25,
        "weight": "1.2",
        "dimensions": {"length": "30", "width": "12", "height": "10"},
        "categories": [
            {"id": 7, "name": "Shoes", "parent": 3},
            {"id": 3, "name": "Apparel & Accessories", "parent": 0},
        ],
        "images": [
            {"src": "https://cdn.example.com/shoe-1.jpg"},
            {"src": "https://cdn.example.com/shoe-2.jpg"},
        ],
        "attributes": [
            {"name": "Material", "options": ["Leather"]},
            {"name": "pa_color", "options": ["Black", "Blue"]},
        ],
        "meta_data": [
            {"key": "_custom_price", "value": "64.5"},
            {"key": "_blank", "value": "  "},
        ],
        "related_ids": [205, 206, 205],
        "upsell_ids": [],
    }
    item.update(overrides)
    return item


def build_variation_item(**overrides: Any) -> dict[str, Any]:
    item = build_item(
        id=102,
        parent_id=101,
        type="variation",
        name="Trail Running Shoe - Trail Running Shoe - Black, 42",
        attributes=[
            {"name": "Color", "option": "Black"},
            {"name": "Size", "option": "42"},
        ],
    )
    item.update(overrides)
    return item


def build_shop(**overrides: Any) -> ShopSettings:
    values: dict[str, Any] = {
        "shop_id": "shop-1",
        "shop_name": "Trail Outfitters",
        "seller_name": None,
        "seller_url": None,
        "store_url": "https://shop.example.com",
        "seller_privacy_policy": "https://shop.example.com/privacy",
        "seller_tos": "https://shop.example.com/terms",
        "return_policy": "https://shop.example.com/returns",
        "return_window": 30,
        "currency": "USD",
        "dimension_unit": "cm",
        "weight_unit": "kg",
        "field_mappings": {},
    }
    values.update(overrides)
    return ShopSettings(**values)


def literal(value: Any) -> ProductOverride:
    return ProductOverride.literal(value)


def mapping(path: str | None) -> ProductOverride:
    return ProductOverride.mapping(path)


def complete_overrides() -> dict[str, ProductOverride]:
    """Literal values for the required attributes the default table leaves unmapped."""
    return {"material": literal("Leather")}


def build_store(
    *,
    shop: ShopSettings | None = None,
    products: int = 3,
    **record_overrides: Any,
) -> InMemoryProductStore:
    store = InMemoryProductStore()
    shop = shop or build_shop()
    store.add_shop(shop)
    for index in range(products):
        product_id = f"p-{index + 1}"
        store.add_product(
            ProductRecord(
                id=product_id,
                shop_id=shop.shop_id,
                raw=build_item(id=1000 + index),
                overrides=dict(record_overrides.get("overrides") or complete_overrides()),
                flags=record_overrides.get("flags") or ProductFlags(),
            )
        )
    return store


def valid_entry(**overrides: Any) -> dict[str, Any]:
    """A resolved feed entry that passes validation with no errors."""
    entry: dict[str, Any] = {
        "enable_search": "true",
        "enable_checkout": "false",
        "id": "SKU12345",
        "gtin": "012345678905",
        "title": "Men's Trail Running Shoes Black",
        "description": "Waterproof trail shoe with cushioned sole.",
        "link": "https://example.com/product/SKU12345",
        "condition": "new",
        "product_category": "Apparel & Accessories > Shoes",
        "brand": "Acme",
        "material": "Leather",
        "weight": "1.5 lb",
        "image_link": "https://example.com/image1.jpg",
        "price": "79.99 USD",
        "availability": "in_stock",
        "inventory_quantity": 25,
        "item_group_id": "SHOE123GROUP",
        "seller_name": "Example Store",
        "seller_url": "https://example.com/store",
        "return_policy": "https://example.com/returns",
        "return_window": 30,
    }
    entry.update(overrides)
    return {key: value for key, value in entry.items() if value is not None}
