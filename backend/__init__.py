"""FastAPI backend for sharing machine comparisons."""

import logging

logger = logging.getLogger("backend")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
