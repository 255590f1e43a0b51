"""Database connections for the share store."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
import os

import duckdb

from backend.db.share_store import ShareStoreError

DB_ENV_VAR = "MACHINE_COMPARISON_DB_PATH"
DEFAULT_DB_PATH = Path("data/machine_comparison.duckdb")


def get_db_path() -> Path:
    """Resolve the DuckDB path, honouring the environment override."""
    env_override = os.environ.get(DB_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser()
    return DEFAULT_DB_PATH.expanduser()


def open_connection() -> duckdb.DuckDBPyConnection:
    """Open the share database, creating its directory on first use."""
    db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(db_path))


@contextmanager
def share_connection() -> Iterator[duckdb.DuckDBPyConnection]:
    """Yield a share database connection, closing it afterwards.

    Raises:
        ShareStoreError: The database file cannot be opened.
    """
    try:
        connection = open_connection()
    except (OSError, duckdb.Error) as exc:
        raise ShareStoreError(f"Could not open share database at {get_db_path()}: {exc}") from exc

    try:
        yield connection
    finally:
        connection.close()
