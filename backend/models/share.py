"""Schemas returned by the upload and share endpoints."""

from pydantic import BaseModel

from backend.models.machine import ComparisonResult


class ComparisonResponse(BaseModel):
    """Result of an upload: both views plus the share link when it was saved."""

    representative: ComparisonResult
    entire: ComparisonResult
    machine_count: int
    share_id: str | None = None
    share_url: str | None = None
    share_error: str | None = None
