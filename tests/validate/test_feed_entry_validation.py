from feedshift.core import process_product
from feedshift.core.catalog import ProductContext, ProductFlags
from feedshift.core.validate import (
    ValidationOptions,
    summarize_outcomes,
    validate_feed_entries,
    validate_feed_entry,
)
from tests.helpers._feed_builders import build_item, build_shop, valid_entry


def test_complete_entry_is_valid_with_recommended_warnings() -> None:
    outcome = validate_feed_entry(valid_entry())

    assert outcome.valid is True
    assert outcome.errors == []
    assert [issue.message for issue in outcome.warnings_for("color")] == ["color is recommended but missing"]


def test_missing_required_field_yields_exactly_one_error() -> None:
    outcome = validate_feed_entry(valid_entry(price=None))

    assert outcome.valid is False
    assert [issue.message for issue in outcome.errors_for("price")] == ["price is required"]
    assert len(outcome.errors) == 1


def test_blank_required_value_counts_as_missing() -> None:
    outcome = validate_feed_entry(valid_entry(title="   "))

    assert [issue.code for issue in outcome.errors_for("title")] == ["missing_required"]


def test_missing_recommended_field_yields_one_warning_only() -> None:
    outcome = validate_feed_entry(valid_entry())

    assert len(outcome.warnings_for("size")) == 1
    assert outcome.errors_for("size") == []
    assert outcome.valid is True


def test_availability_date_requires_preorder() -> None:
    outcome = validate_feed_entry({"availability": "in_stock", "availability_date": "2030-01-01"})

    errors = outcome.errors_for("availability_date")
    assert [issue.code for issue in errors] == ["availability_date_not_preorder"]
    assert outcome.valid is False


def test_sale_price_must_not_exceed_price() -> None:
    outcome = validate_feed_entry({"price": "50.00 USD", "sale_price": "60.00 USD"})

    errors = outcome.errors_for("sale_price")
    assert [issue.code for issue in errors] == ["sale_price_exceeds_price"]
    assert "must not exceed price" in errors[0].message


def test_sale_price_in_other_currency_is_not_compared() -> None:
    outcome = validate_feed_entry(valid_entry(price="50.00 USD", sale_price="60.00 EUR"))

    assert outcome.errors_for("sale_price") == []


def test_checkout_requires_seller_policies() -> None:
    outcome = validate_feed_entry(valid_entry(enable_checkout="true"))

    assert [issue.message for issue in outcome.errors_for("seller_privacy_policy")] == [
        "seller_privacy_policy is required: Required if enable_checkout is true"
    ]
    assert len(outcome.errors_for("seller_tos")) == 1

    complete = valid_entry(
        enable_checkout="true",
        seller_privacy_policy="https://example.com/privacy",
        seller_tos="https://example.com/terms",
    )
    assert validate_feed_entry(complete).valid is True


def test_checkout_flag_in_context_also_requires_policies() -> None:
    context = ProductContext(flags=ProductFlags(checkout_enabled=True))

    outcome = validate_feed_entry(valid_entry(), context=context)

    assert len(outcome.errors_for("seller_tos")) == 1


def test_checkout_without_search_is_rejected() -> None:
    entry = valid_entry(
        enable_search="false",
        enable_checkout="true",
        seller_privacy_policy="https://example.com/privacy",
        seller_tos="https://example.com/terms",
    )

    outcome = validate_feed_entry(entry)

    assert [issue.code for issue in outcome.errors_for("enable_checkout")] == ["checkout_without_search"]


def test_mpn_required_only_without_gtin() -> None:
    without_gtin = validate_feed_entry(valid_entry(gtin=None))

    assert len(without_gtin.errors_for("mpn")) == 1
    assert len(without_gtin.warnings_for("gtin")) == 1
    assert validate_feed_entry(valid_entry(gtin=None, mpn="GPT5")).valid is True
    assert validate_feed_entry(valid_entry()).errors_for("mpn") == []


def test_preorder_requires_availability_date() -> None:
    outcome = validate_feed_entry(valid_entry(availability="preorder"))

    assert [issue.code for issue in outcome.errors_for("availability_date")] == ["missing_conditional"]
    assert validate_feed_entry(valid_entry(availability="preorder", availability_date="2030-01-01")).valid


def test_item_group_id_required_for_variants() -> None:
    entry = valid_entry(item_group_id=None)

    assert validate_feed_entry(entry).valid is True
    assert validate_feed_entry(entry, context=ProductContext(is_variant=True)).valid is False
    assert validate_feed_entry(entry, context=ProductContext(product_type="variable")).valid is False


def test_format_errors_block_even_for_optional_fields() -> None:
    outcome = validate_feed_entry(valid_entry(age_group="senior"))

    assert [issue.code for issue in outcome.errors_for("age_group")] == ["invalid_format"]
    assert outcome.valid is False

    relaxed = validate_feed_entry(
        valid_entry(age_group="senior"),
        options=ValidationOptions(validate_optional=False),
    )
    assert relaxed.valid is True


def test_http_urls_are_advisory_only() -> None:
    outcome = validate_feed_entry(valid_entry(link="http://example.com/product/SKU12345"))

    assert outcome.valid is True
    assert [issue.code for issue in outcome.warnings_for("link")] == ["advisory"]


def test_strict_mode_promotes_warnings() -> None:
    outcome = validate_feed_entry(valid_entry(), options=ValidationOptions(strict=True))

    assert outcome.valid is False
    assert any(issue.field == "color" for issue in outcome.errors)


def test_skip_fields() -> None:
    options = ValidationOptions(skip_fields=frozenset({"price", "sale_price"}))

    outcome = validate_feed_entry(valid_entry(price=None, sale_price="999.00 USD"), options=options)

    assert outcome.valid is True


def test_snapshot_groups_messages_by_attribute() -> None:
    snapshot = validate_feed_entry(valid_entry(price=None)).to_snapshot()

    assert snapshot["isValid"] is False
    assert snapshot["errors"] == {"price": ["price is required"]}
    assert "color" in snapshot["warnings"]


def test_batch_validation_and_summary() -> None:
    entries = [valid_entry(), valid_entry(price=None), valid_entry(price=None, link=None)]
    options = ValidationOptions(skip_fields=frozenset({"color", "size", "size_system", "gender"}))

    outcomes = validate_feed_entries(entries, options=options)
    summary = summarize_outcomes(outcomes)

    assert set(outcomes) == {0, 1, 2}
    assert summary["invalid"] == 2
    assert summary["total_errors"] == 3
    assert summary["common_errors"][0] == {"error": "price is required", "count": 2}


def test_resolved_product_with_required_values_validates_cleanly() -> None:
    result = process_product(
        build_item(),
        shop=build_shop(),
        overrides={"material": {"type": "static", "value": "Leather"}},
    )

    assert result.outcome.errors == []
    assert result.outcome.valid is True
    assert result.eligible is True
    assert result.to_dict()["sources"]["material"] == "static"


def test_search_disabled_product_is_valid_but_not_eligible() -> None:
    result = process_product(
        build_item(),
        shop=build_shop(),
        overrides={"material": {"type": "static", "value": "Leather"}},
        flags={"enable_search": False},
    )

    assert result.outcome.valid is True
    assert result.eligible is False
    assert result.resolved.get("enable_search") == "false"
