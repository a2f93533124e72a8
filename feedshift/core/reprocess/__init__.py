"""Reprocessing Orchestrator and its storage boundary."""

from .orchestrator import ReprocessOrchestrator, ReprocessReport, is_feed_eligible
from .storage import InMemoryProductStore, ProductRecord, ProductSnapshot, ProductStore

__all__ = [
    "InMemoryProductStore",
    "ProductRecord",
    "ProductSnapshot",
    "ProductStore",
    "ReprocessOrchestrator",
    "ReprocessReport",
    "is_feed_eligible",
]
