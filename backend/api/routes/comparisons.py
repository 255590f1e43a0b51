"""Upload a machine workbook and build its comparison views."""

import os

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from backend import logger
from backend.db.deps import share_connection
from backend.db.share_store import ShareStoreError, build_share_url, save_comparison
from backend.models.machine import ComparisonResult
from backend.models.share import ComparisonResponse
from comparison import build_views
from ingestion import IngestionMetrics
from ingestion.excel_loader import WorkbookError, load_machines

ORIGIN_ENV_VAR = "PUBLIC_ORIGIN"

router = APIRouter()


def get_public_origin(request: Request) -> str:
    """Origin used in share links; falls back to the request's own base URL."""
    return os.environ.get(ORIGIN_ENV_VAR) or str(request.base_url)


def _save_share(result: ComparisonResult) -> str:
    with share_connection() as connection:
        return save_comparison(connection, result)


@router.post("", response_model=ComparisonResponse)
def create_comparison(request: Request, file: UploadFile = File(...)) -> ComparisonResponse:
    """Compare every machine in the uploaded workbook and persist a share link.

    A workbook that cannot be read fails the request. Failing to save the share
    does not: both views are still returned, without a share link.
    """

    payload = file.file.read()
    metrics = IngestionMetrics()
    try:
        machines = load_machines(payload, metrics)
    except WorkbookError as exc:
        logger.warning("Rejected upload %s: %s", file.filename, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    views = build_views(machines, metrics)
    logger.info("Processed %s: %s machines, metrics=%s", file.filename, len(machines), metrics)
    response = ComparisonResponse(
        representative=views.representative,
        entire=views.entire,
        machine_count=views.machine_count,
    )

    try:
        share_id = _save_share(views.representative)
    except ShareStoreError:
        logger.exception("Error saving comparison results for %s", file.filename)
        response.share_error = "Failed to generate share link"
        return response

    response.share_id = share_id
    response.share_url = build_share_url(get_public_origin(request), share_id)
    return response
