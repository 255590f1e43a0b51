"""DuckDB persistence for shared comparison results."""

import uuid
from urllib.parse import parse_qs, urlsplit

import duckdb
from pydantic import ValidationError

from backend import logger
from backend.models.machine import ComparisonResult

TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS comparison_results (
        share_id VARCHAR PRIMARY KEY,
        data JSON NOT NULL,
        created_at TIMESTAMP DEFAULT current_timestamp
    )
"""


class ShareStoreError(Exception):
    """Raised when a comparison cannot be written to or read from the store."""


class ShareNotFoundError(ShareStoreError):
    """Raised when no comparison exists for a share identifier."""


def ensure_schema(connection: duckdb.DuckDBPyConnection) -> None:
    connection.execute(TABLE_DDL)


def save_comparison(connection: duckdb.DuckDBPyConnection, result: ComparisonResult) -> str:
    """Persist ``result`` under a fresh share identifier and return it."""
    share_id = str(uuid.uuid4())
    try:
        ensure_schema(connection)
        connection.execute(
            "INSERT INTO comparison_results (share_id, data) VALUES (?, ?)",
            [share_id, result.model_dump_json()],
        )
    except duckdb.Error as exc:
        raise ShareStoreError(f"Failed to save comparison results: {exc}") from exc

    logger.info("Saved comparison results as share %s", share_id)
    return share_id


def load_comparison(connection: duckdb.DuckDBPyConnection, share_id: str) -> ComparisonResult:
    """Fetch the comparison stored under ``share_id``."""
    try:
        ensure_schema(connection)
        row = connection.execute(
            "SELECT data FROM comparison_results WHERE share_id = ?",
            [share_id],
        ).fetchone()
    except duckdb.Error as exc:
        raise ShareStoreError(f"Failed to load share {share_id}: {exc}") from exc

    if row is None:
        raise ShareNotFoundError(f"No comparison results for share {share_id}")

    try:
        return ComparisonResult.model_validate_json(row[0])
    except ValidationError as exc:
        raise ShareStoreError(f"Stored share {share_id} is not a valid comparison") from exc


def build_share_url(origin: str, share_id: str) -> str:
    return f"{origin.rstrip('/')}/share/{share_id}"


def share_id_from_link(link: str) -> str:
    """Share identifier from a share URL, a ``?share_id=`` link, or a bare id."""
    parsed = urlsplit(link.strip())
    query_id = parse_qs(parsed.query).get("share_id")
    if query_id:
        return query_id[0].strip()
    return parsed.path.rstrip("/").rsplit("/", 1)[-1]
