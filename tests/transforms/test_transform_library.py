from feedshift.core.transforms import TransformRegistry, get_transform, list_transforms
from feedshift.core.transforms.availability import default_to_new, default_to_zero, map_stock_status
from feedshift.core.transforms.catalog_data import (
    build_shipping_string,
    extract_additional_images,
    extract_brand,
    extract_custom_variant,
    extract_custom_variant_option,
    extract_gtin,
)
from feedshift.core.transforms.identifiers import format_related_ids, generate_group_id, generate_offer_id
from feedshift.core.transforms.measurements import add_unit, add_weight_unit, format_dimensions
from feedshift.core.transforms.pricing import (
    calculate_popularity_score,
    format_price_with_currency,
    format_sale_date_range,
)
from feedshift.core.transforms.text import build_category_path, clean_variation_title, format_q_and_a, strip_html
from tests.helpers._feed_builders import build_item, build_shop, build_variation_item


def test_default_transforms_are_registered() -> None:
    names = list_transforms()

    assert len(names) == 23
    assert "map_stock_status" in names
    assert get_transform("stripHtml") is strip_html
    assert get_transform("no_such_transform") is None


def test_custom_registry_normalises_names() -> None:
    registry = TransformRegistry()
    registry.register("shoutTitle", lambda value, item, shop: str(value).upper())

    assert "shout_title" in registry
    assert "shoutTitle" in registry
    assert registry.get("shout_title")("hi", {}, None) == "HI"
    assert registry.names() == ["shout_title"]


def test_strip_html_removes_tags_and_entities() -> None:
    item = build_item()

    assert strip_html(item["description"], item) == "Waterproof trail shoe."
    assert strip_html("Salt &amp; Pepper", item) == "Salt & Pepper"
    assert strip_html(None, item) == ""


def test_clean_variation_title_only_touches_variations() -> None:
    variation = build_variation_item()

    assert clean_variation_title(variation["name"], variation) == "Trail Running Shoe - Black, 42"
    assert clean_variation_title("A - A - B", build_item()) == "A - A - B"
    assert clean_variation_title("Plain", variation) == "Plain"


def test_build_category_path_picks_deepest_chain() -> None:
    item = build_item()

    assert build_category_path(item["categories"], item) == "Apparel & Accessories > Shoes"
    assert build_category_path([], item) == ""


def test_build_category_path_is_bounded_on_cycles() -> None:
    cyclic = [
        {"id": 1, "name": "A", "parent": 2},
        {"id": 2, "name": "B", "parent": 1},
    ]

    path = build_category_path(cyclic, {})

    assert len(path.split(" > ")) == 10


def test_identifier_transforms() -> None:
    shop = build_shop()
    item = build_item()

    assert generate_group_id(0, item, shop) == "shop-1-101"
    assert generate_group_id(101, build_variation_item(), shop) == "shop-1-101"
    assert generate_group_id(None, item, None) == "101"
    assert generate_offer_id("TRAIL-101", item, shop) == "TRAIL-101-shop-1-79.99"
    assert format_related_ids([205, 206, 205], item) == "205,206"
    assert format_related_ids([], item) is None


def test_price_transforms() -> None:
    shop = build_shop()
    item = build_item(
        sale_price="59.99",
        date_on_sale_from="2025-07-01T00:00:00",
        date_on_sale_to="2025-07-15T23:59:59",
    )

    assert format_price_with_currency("79.9", item, shop) == "79.90 USD"
    assert format_price_with_currency(5, item, shop) == "5.00 USD"
    assert format_price_with_currency("79.9", item, None) == "79.90"
    assert format_price_with_currency("n/a", item, shop) is None
    assert format_sale_date_range(None, item, shop) == "2025-07-01 / 2025-07-15"
    assert format_sale_date_range(None, build_item(), shop) is None


def test_popularity_score_is_log_scaled_and_capped() -> None:
    assert calculate_popularity_score(99, {}) == 2.0
    assert calculate_popularity_score(10**7, {}) == 5.0
    assert calculate_popularity_score(0, {}) is None


def test_measurement_transforms_need_units_and_all_axes() -> None:
    shop = build_shop()
    item = build_item()

    assert format_dimensions(item["dimensions"], item, shop) == "30x12x10 cm"
    assert format_dimensions({"length": "30", "width": "12"}, item, shop) is None
    assert add_unit("30", item, shop) == "30 cm"
    assert add_unit("30", build_item(dimensions={"length": "30", "width": "12", "height": "0"}), shop) is None
    assert add_unit("30", item, build_shop(dimension_unit=None)) is None
    assert add_weight_unit("1.2", item, shop) == "1.2 kg"
    assert add_weight_unit("1.2", item, None) is None


def test_catalog_data_transforms() -> None:
    item = build_item()

    assert extract_additional_images(item["images"], item) == ["https://cdn.example.com/shoe-2.jpg"]
    assert extract_additional_images(item["images"][:1], item) == []
    assert extract_gtin([{"key": "_upc", "value": "036000291452"}], item) == "036000291452"
    assert extract_gtin(" 012345678905 ", item) == "012345678905"
    assert extract_brand([{"name": "Acme"}], item) == "Acme"
    assert extract_brand(None, {"attributes": [{"name": "Brand", "options": ["Trailco"]}]}) == "Trailco"
    assert extract_custom_variant([{"name": "Wood_Type", "options": ["Oak", "Ash"]}], item) == "Wood_Type"
    assert extract_custom_variant_option([{"name": "Wood_Type", "options": ["Oak", "Ash"]}], item) == "Oak"
    assert (
        build_shipping_string(
            [{"country": "US", "region": "CA", "service_class": "Overnight", "price": "16.00 USD"}],
            item,
        )
        == "US:CA:Overnight:16.00 USD"
    )


def test_availability_and_defaults() -> None:
    assert map_stock_status("instock", {}) == "in_stock"
    assert map_stock_status("outofstock", {}) == "out_of_stock"
    assert map_stock_status("onbackorder", {}) == "preorder"
    assert map_stock_status("discontinued", {}) == "in_stock"
    assert map_stock_status(None, {}) == "in_stock"
    assert default_to_new(None, {}) == "new"
    assert default_to_new("used", {}) == "used"
    assert default_to_zero(None, {}) == 0
    assert default_to_zero(4, {}) == 4


def test_format_q_and_a() -> None:
    assert format_q_and_a([{"q": "Waterproof?", "a": "Yes"}], {}) == "Q: Waterproof?\nA: Yes"
    assert format_q_and_a(None, {}) is None
