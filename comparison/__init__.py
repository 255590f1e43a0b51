"""Grouping and normalization of injection molding machine comparisons."""

import logging

logger = logging.getLogger("comparison")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

from .grouping import (  # noqa: E402
    build_views,
    classify_product_type,
    compare_machines,
    compare_machines_entire,
)

__all__ = [
    "build_views",
    "classify_product_type",
    "compare_machines",
    "compare_machines_entire",
    "logger",
]
