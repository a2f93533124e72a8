"""Reprocessing Orchestrator.

Re-runs resolution and validation after an upstream change and persists one
snapshot per product. Bulk paths load the shop once and reuse a single
``FieldResolver`` for every product of that shop.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import json
import logging
import threading
from typing import Any

from ..catalog import ProductContext, ProductFlags
from ..config import CoreConfig
from ..errors import ProductNotFoundError
from ..resolve import FieldResolver
from ..transforms import TRANSFORMS, TransformRegistry
from ..validate import ValidationOptions, validate_feed_entry
from ..values import is_empty
from .storage import ProductRecord, ProductSnapshot, ProductStore

logger = logging.getLogger(__name__)

_CANCELLED = object()


@dataclass
class ReprocessReport:
    shop_id: str
    touched: int = 0
    skipped: int = 0
    overrides_cleared: int = 0
    invalid: int = 0
    skipped_ids: list[str] = field(default_factory=list)
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "shopId": self.shop_id,
            "touched": self.touched,
            "skipped": self.skipped,
            "overridesCleared": self.overrides_cleared,
            "invalid": self.invalid,
            "skippedIds": list(self.skipped_ids),
            "cancelled": self.cancelled,
        }


def is_feed_eligible(snapshot: ProductSnapshot | None, flags: ProductFlags) -> bool:
    """A product is published when its snapshot is valid and search is on."""
    return snapshot is not None and snapshot.is_valid and flags.search_enabled


class ReprocessOrchestrator:
    def __init__(
        self,
        store: ProductStore,
        *,
        config: CoreConfig | None = None,
        cancel_event: threading.Event | None = None,
        transforms: TransformRegistry = TRANSFORMS,
        summarize: Callable[[ProductSnapshot], Any] | None = None,
    ) -> None:
        self.store = store
        self.config = config or CoreConfig()
        self.cancel_event = cancel_event
        self.summarize = summarize
        self.transforms = transforms
        self._write_lock = threading.Lock()

    def reprocess_product(self, product_id: str) -> ProductSnapshot | None:
        """Reprocess one product; ``None`` when it has no raw catalog snapshot."""
        record = self.store.get_product(product_id)
        if record is None:
            raise ProductNotFoundError(product_id)

        resolver = self._build_resolver(record.shop_id)
        return self._process(resolver, record)

    def reprocess_shop(self, shop_id: str, *, clear_overrides_for: Iterable[str] = ()) -> ReprocessReport:
        """Reprocess every product of a shop, optionally clearing overrides first."""
        resolver = self._build_resolver(shop_id)
        products = self.store.list_products(shop_id)
        report = ReprocessReport(shop_id=shop_id)

        attributes = tuple(clear_overrides_for)
        if attributes:
            for record in products:
                if self._clear_overrides(record, attributes):
                    report.overrides_cleared += 1

        logger.info("Reprocessing %d product(s) for shop %s.", len(products), shop_id)
        self._run(resolver, products, report)
        self._log_report("Reprocessed shop", report)
        return report

    def clear_overrides_for_field(self, shop_id: str, attribute: str) -> ReprocessReport:
        """Drop one attribute's override everywhere; only affected products are reprocessed."""
        resolver = self._build_resolver(shop_id)
        report = ReprocessReport(shop_id=shop_id)

        affected: list[ProductRecord] = []
        for record in self.store.list_products(shop_id):
            if self._clear_overrides(record, (attribute,)):
                affected.append(record)
        report.overrides_cleared = len(affected)

        self._run(resolver, affected, report)
        self._log_report(f"Cleared {attribute} overrides", report)
        return report

    def count_overrides_for_field(self, shop_id: str, attribute: str) -> int:
        return sum(1 for record in self.store.list_products(shop_id) if attribute in record.overrides)

    def _build_resolver(self, shop_id: str) -> FieldResolver:
        shop = self.store.load_shop(shop_id)
        return FieldResolver(shop, transforms=self.transforms)

    def _clear_overrides(self, record: ProductRecord, attributes: Sequence[str]) -> bool:
        remaining = {key: value for key, value in record.overrides.items() if key not in attributes}
        if len(remaining) == len(record.overrides):
            return False
        self.store.save_overrides(record.id, remaining)
        record.overrides = remaining
        return True

    def _run(self, resolver: FieldResolver, products: Sequence[ProductRecord], report: ReprocessReport) -> None:
        if self.config.max_workers <= 1:
            results = []
            for record in products:
                if self._is_cancelled():
                    report.cancelled = True
                    break
                results.append((record, self._process(resolver, record)))
        else:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = [
                    (record, executor.submit(self._process_unless_cancelled, resolver, record))
                    for record in products
                ]
                results = [(record, future.result()) for record, future in futures]

        for record, snapshot in results:
            if snapshot is _CANCELLED:
                report.cancelled = True
                continue
            if snapshot is None:
                report.skipped += 1
                report.skipped_ids.append(record.id)
                continue
            report.touched += 1
            if not snapshot.is_valid:
                report.invalid += 1

    def _process_unless_cancelled(self, resolver: FieldResolver, record: ProductRecord) -> Any:
        if self._is_cancelled():
            return _CANCELLED
        return self._process(resolver, record)

    def _process(self, resolver: FieldResolver, record: ProductRecord) -> ProductSnapshot | None:
        if is_empty(record.raw):
            logger.warning("Skipping product %s: no raw catalog snapshot to extract from.", record.id)
            return None

        resolved = resolver.resolve_all(record.raw, record.overrides, record.flags)
        context = ProductContext.from_item(record.raw, record.flags)
        outcome = validate_feed_entry(
            resolved.values,
            context=context,
            options=ValidationOptions(strict=self.config.strict),
        )
        grouped = outcome.to_snapshot()
        snapshot = ProductSnapshot(
            product_id=record.id,
            resolved=resolved.to_dict(),
            is_valid=outcome.valid,
            errors=grouped["errors"],
            warnings=grouped["warnings"],
        )

        with self._write_lock:
            self.store.save_snapshot(record.id, snapshot)

        if self.summarize is not None and logger.isEnabledFor(logging.DEBUG):
            summary = self.summarize(snapshot)
            if summary is not None:
                self._log_summary(summary)
        return snapshot

    def _log_summary(self, summary: Any) -> None:
        logger.debug(
            "Reprocessed product summary:\n%s",
            json.dumps(summary, ensure_ascii=False, indent=2, default=str),
        )

    def _is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _log_report(self, action: str, report: ReprocessReport) -> None:
        logger.info(
            "%s for shop %s: touched=%d skipped=%d cleared=%d invalid=%d%s",
            action,
            report.shop_id,
            report.touched,
            report.skipped,
            report.overrides_cleared,
            report.invalid,
            " (cancelled)" if report.cancelled else "",
        )


__all__ = ["ReprocessOrchestrator", "ReprocessReport", "is_feed_eligible"]
