"""Log payload helpers for reprocessed product snapshots."""

from .snapshot_payloads import snapshot_to_loggable

__all__ = ["snapshot_to_loggable"]
