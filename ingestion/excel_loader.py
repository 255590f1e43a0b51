"""Excel ingestion for machine specification and price sheets."""

import io
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pandas as pd

from backend.models.machine import MachineRecord
from comparison.normalizer import get_row_value

from . import IngestionMetrics, logger

DATA_SHEET = "Data"

# Accepted header spellings per field, most specific first.
COLUMN_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "manufacturer": ("Manufacturer",),
    "model_series": ("Model Series",),
    "model_name": ("Model Name",),
    "product_type": ("Product Type",),
    "clamping_force": ("Clamping force (US Ton)", "Clamping Force (US Ton)", "Clamping Force"),
    "screw_type": ("Screw Type",),
    "screw_diameter": ("Screw Diameter",),
    "tie_bar_distance": ("Tie-bar Distance", "Tie-Bar Distance", "Tiebar Distance"),
    "screw_stroke": ("Screw Stroke",),
    "shot_size": ("Shot size", "Shot Size"),
    "option_price": ("Option Price",),
    "freight": ("Freight",),
    "list_price": ("List Price",),
    "sales_price": ("Sales Price",),
    "customer": ("Customer",),
    "checked_time": ("Checked Time",),
    "sales_type": ("Sales Type",),
    "performance": ("Performance",),
    "injection_unit": ("Injection Unit",),
}


class WorkbookError(Exception):
    """Raised when the uploaded workbook cannot be used at all."""


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return value is None or bool(pd.isna(value))


def read_data_sheet(
    source: Path | bytes, metrics: IngestionMetrics | None = None
) -> List[Dict[str, Any]]:
    """Read the "Data" sheet into row dicts keyed by the original headers.

    Blank cells are left out of each row and fully blank rows are skipped.

    Raises:
        WorkbookError: The file is not a readable workbook or lacks a "Data" sheet.
    """

    handle = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        workbook = pd.ExcelFile(handle)
    except Exception as exc:  # noqa: BLE001 - parser raises many unrelated types
        raise WorkbookError(f"Cannot read Excel file: {exc}") from exc

    with workbook:
        if DATA_SHEET not in workbook.sheet_names:
            raise WorkbookError(f"Could not find '{DATA_SHEET}' sheet in the Excel file")
        frame = workbook.parse(DATA_SHEET, dtype=object)

    rows: List[Dict[str, Any]] = []
    blank_rows = 0
    for record in frame.to_dict(orient="records"):
        row = {str(key): value for key, value in record.items() if not _is_blank(value)}
        if row:
            rows.append(row)
        else:
            blank_rows += 1

    logger.info("Read %s rows from sheet %s", len(rows), DATA_SHEET)
    if metrics:
        metrics.add_rows(len(rows))
        metrics.add_blank_rows(blank_rows)
    return rows


def row_to_machine(row: Dict[str, Any]) -> MachineRecord:
    """Map one raw row onto a MachineRecord using the header synonyms."""

    return MachineRecord(
        **{name: get_row_value(row, *synonyms) for name, synonyms in COLUMN_SYNONYMS.items()}
    )


def load_machines(
    source: Path | bytes, metrics: IngestionMetrics | None = None
) -> List[MachineRecord]:
    """Load every machine from a workbook path or uploaded bytes."""

    machines = [row_to_machine(row) for row in read_data_sheet(source, metrics)]
    logger.info("Loaded %s machines", len(machines))
    return machines
