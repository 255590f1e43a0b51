"""Ingestion utilities for machine price spreadsheets."""

import logging
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger("ingestion")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@dataclass
class IngestionMetrics:
    """Track statistics for one spreadsheet upload and comparison run."""

    rows_read: int = 0
    blank_rows_skipped: int = 0
    extra: Dict[str, int] = field(default_factory=dict)

    def add_rows(self, count: int) -> None:
        self.rows_read += count
        logger.debug("Added %s spreadsheet rows; total=%s", count, self.rows_read)

    def add_blank_rows(self, count: int) -> None:
        self.blank_rows_skipped += count
        logger.debug("Skipped %s blank rows; total=%s", count, self.blank_rows_skipped)

    def increment_extra(self, key: str, count: int = 1) -> None:
        self.extra[key] = self.extra.get(key, 0) + count
        logger.debug("Incremented %s metric by %s; total=%s", key, count, self.extra[key])


__all__ = ["IngestionMetrics", "logger"]
