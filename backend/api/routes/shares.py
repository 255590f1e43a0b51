"""Read-only access to shared comparison results."""

from html import escape

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse

from backend import logger
from backend.db.deps import share_connection
from backend.db.share_store import ShareNotFoundError, ShareStoreError, load_comparison
from backend.models.machine import ComparisonGroup, ComparisonResult
from comparison.table_view import comparison_html

router = APIRouter()

PAGE_TITLE = "Machine Price Comparison Results"
PAGE_STYLE = """
    body { font-family: sans-serif; margin: 2rem; }
    table.comparison { border-collapse: collapse; margin-bottom: 2rem; }
    table.comparison th, table.comparison td {
        border: 1px solid #ccc; padding: 0.5rem; vertical-align: top; white-space: pre-line;
    }
"""


def _fetch(share_id: str) -> ComparisonResult:
    try:
        with share_connection() as connection:
            return load_comparison(connection, share_id)
    except ShareNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Could not find the shared comparison results",
        ) from exc
    except ShareStoreError as exc:
        logger.exception("Error fetching shared data %s", share_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while loading the comparison results",
        ) from exc


def _page(body: str) -> str:
    return (
        f"<!DOCTYPE html><html><head><meta charset=\"utf-8\"><title>{PAGE_TITLE}</title>"
        f"<style>{PAGE_STYLE}</style></head><body>{body}</body></html>"
    )


def _section(label: str, groups: list[ComparisonGroup]) -> str:
    heading = f"<h2>{label} ({len(groups)})</h2>"
    if not groups:
        return f"{heading}<p>No {label.lower()} machines found in the shared data.</p>"
    return heading + comparison_html(groups)


@router.get("/{share_id}/data", response_model=ComparisonResult)
def get_shared_comparison(share_id: str) -> ComparisonResult:
    """Return the representative comparison saved under ``share_id``."""
    return _fetch(share_id)


@router.get("/{share_id}", response_class=HTMLResponse)
def render_shared_comparison(share_id: str) -> HTMLResponse:
    """Render the shared comparison read-only; this is the page share links open."""
    try:
        result = _fetch(share_id)
    except HTTPException as exc:
        body = f"<h1>Error</h1><p>{escape(str(exc.detail))}</p>"
        return HTMLResponse(_page(body), status_code=exc.status_code)

    body = (
        f"<h1>{PAGE_TITLE}</h1>"
        "<p>Shared comparison of hydraulic and electric machines</p>"
        + _section("Hydraulic", result.hydraulic)
        + _section("Electric", result.electric)
    )
    return HTMLResponse(_page(body))
