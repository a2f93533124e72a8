"""Command-line frontend for the Feedshift core engine."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from feedshift.config import get_settings
from feedshift.core import (
    InMemoryProductStore,
    ProductContext,
    ProductFlags,
    ReprocessOrchestrator,
    check_literal_overrides,
    config_from_env,
    list_fields,
    process_product,
    validate_feed_entry,
    validate_literal,
)
from feedshift.core.errors import InvalidOverrideError
from feedshift.core.spec import CATEGORY_CONFIG
from feedshift.logging import snapshot_to_loggable

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


def _json_dump(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _cmd_fields(args: argparse.Namespace) -> int:
    _json_dump(list_fields(args.category))
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    item = _read_json(args.item)
    shop = _read_json(args.shop) if args.shop else None
    overrides = _read_json(args.overrides) if args.overrides else None
    if get_settings().check_literal_overrides:
        rejected = check_literal_overrides(overrides)
        if rejected:
            raise InvalidOverrideError(f"Rejected literal overrides: {json.dumps(rejected, ensure_ascii=False)}")
    flags = ProductFlags(search_enabled=args.search, checkout_enabled=args.checkout)
    result = process_product(item, shop=shop, overrides=overrides, flags=flags, strict=args.strict)
    _json_dump(result.to_dict())
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    entry = _read_json(args.input)
    flags = ProductFlags(checkout_enabled=args.checkout)
    if args.item:
        context = ProductContext.from_item(_read_json(args.item), flags)
    else:
        context = ProductContext(flags=flags)
    outcome = validate_feed_entry(
        entry,
        context=context,
        strict=args.strict,
        skip_fields=args.skip or (),
    )
    payload = outcome.to_dict()
    if args.report:
        Path(args.report).write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    _json_dump(payload)
    return 0 if outcome.valid else 1


def _cmd_check_literal(args: argparse.Namespace) -> int:
    check = validate_literal(args.attribute, args.value)
    _json_dump(check.to_dict())
    return 0 if check.is_valid else 1


def _cmd_reprocess(args: argparse.Namespace) -> int:
    store = InMemoryProductStore.from_dict(_read_json(args.store))
    orchestrator = ReprocessOrchestrator(
        store,
        config=config_from_env(strict=args.strict or None, max_workers=args.workers),
        summarize=snapshot_to_loggable,
    )
    report = orchestrator.reprocess_shop(args.shop_id, clear_overrides_for=args.clear_field or ())
    payload = {
        "report": report.to_dict(),
        "snapshots": [
            store.snapshots[record.id].to_dict()
            for record in store.list_products(args.shop_id)
            if record.id in store.snapshots
        ],
    }
    if args.out:
        Path(args.out).write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    _json_dump(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="feedshift", description="Feedshift feed field engine CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fields_cmd = subparsers.add_parser("fields", help="List feed attribute specifications")
    fields_cmd.add_argument("--category", default=None, choices=[category.value for category in CATEGORY_CONFIG])
    fields_cmd.set_defaults(func=_cmd_fields)

    resolve_cmd = subparsers.add_parser("resolve", help="Resolve and validate one raw catalog item")
    resolve_cmd.add_argument("--item", required=True, help="Raw catalog item JSON path")
    resolve_cmd.add_argument("--shop", default="", help="Shop settings JSON path")
    resolve_cmd.add_argument("--overrides", default="", help="Per-product overrides JSON path")
    resolve_cmd.add_argument("--search", action=argparse.BooleanOptionalAction, default=True)
    resolve_cmd.add_argument("--checkout", action="store_true")
    resolve_cmd.add_argument("--strict", action="store_true")
    resolve_cmd.set_defaults(func=_cmd_resolve)

    validate_cmd = subparsers.add_parser("validate", help="Validate an already resolved feed entry")
    validate_cmd.add_argument("input", help="Feed entry JSON path")
    validate_cmd.add_argument("--item", default="", help="Raw catalog item used for conditional rules")
    validate_cmd.add_argument("--checkout", action="store_true")
    validate_cmd.add_argument("--skip", action="append", default=None, metavar="ATTRIBUTE")
    validate_cmd.add_argument("--strict", action="store_true")
    validate_cmd.add_argument("--report", default="")
    validate_cmd.set_defaults(func=_cmd_validate)

    literal_cmd = subparsers.add_parser("check-literal", help="Check a literal override value for one attribute")
    literal_cmd.add_argument("attribute")
    literal_cmd.add_argument("value")
    literal_cmd.set_defaults(func=_cmd_check_literal)

    reprocess_cmd = subparsers.add_parser("reprocess", help="Reprocess every product of a shop from a store file")
    reprocess_cmd.add_argument("store", help="Store JSON path with shops and products")
    reprocess_cmd.add_argument("--shop-id", required=True)
    reprocess_cmd.add_argument("--clear-field", action="append", default=None, metavar="ATTRIBUTE")
    reprocess_cmd.add_argument("--workers", type=int, default=None)
    reprocess_cmd.add_argument("--strict", action="store_true")
    reprocess_cmd.add_argument("--out", default="")
    reprocess_cmd.set_defaults(func=_cmd_reprocess)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except Exception as exc:
        _json_dump({"error": str(exc)})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
