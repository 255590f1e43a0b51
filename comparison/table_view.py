"""Tabular layout of comparison groups for the frontends."""

from collections.abc import Sequence
from typing import Any

import pandas as pd

from backend.models.machine import ComparisonGroup, MachineRecord, ReferenceSpecs

from .normalizer import parse_number

EMPTY_CELL = "—"
REFERENCE_COLUMN = "Reference Specs"
MANUFACTURER_SUFFIX = " (manufacturer)"


def format_currency(value: Any) -> str:
    """Format a price as whole US dollars; unparseable text is returned as-is."""

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        amount = float(value)
    else:
        text = str(value)
        parsed = parse_number(text)
        if parsed is None:
            return text
        amount = parsed
    return f"-${abs(amount):,.0f}" if amount < 0 else f"${amount:,.0f}"


def manufacturer_columns(groups: Sequence[ComparisonGroup]) -> list[str]:
    """All manufacturers across ``groups`` in first-seen order."""

    columns: dict[str, None] = {}
    for group in groups:
        for manufacturer in group.manufacturers:
            columns.setdefault(manufacturer, None)
    return list(columns)


def describe_reference(specs: ReferenceSpecs) -> str:
    lines = [
        f"Clamping Force: {specs.clamping_force} US Ton",
        f"Shot Size: {specs.shot_size}",
        f"Screw Type: {specs.screw_type}",
    ]
    if specs.performance:
        lines.append(f"Performance: {specs.performance}")
    return "\n".join(lines)


def describe_machine(machine: MachineRecord) -> str:
    lines = [
        machine.model_name,
        f"Clamping Force: {machine.clamping_force} US Ton",
        f"Shot Size: {machine.shot_size}",
        f"Screw Type: {machine.screw_type or EMPTY_CELL}",
        f"Tie-bar Distance: {machine.tie_bar_distance or EMPTY_CELL}",
    ]
    if machine.injection_unit:
        lines.append(f"Injection Unit: {machine.injection_unit}")
    lines.append(f"Sales Type: {machine.sales_type or EMPTY_CELL}")
    for label, price in (
        ("List Price", machine.list_price),
        ("Option Price", machine.option_price),
        ("Freight", machine.freight),
        ("Sales Price", machine.sales_price),
    ):
        if price:
            lines.append(f"{label}: {format_currency(price)}")
    if machine.customer:
        lines.append(f"Customer: {machine.customer}")
    lines.append(f"Checked: {machine.checked_time or EMPTY_CELL}")
    return "\n".join(lines)


def column_label(manufacturer: str) -> str:
    """Column header for a manufacturer; never the reference column's header."""

    if manufacturer == REFERENCE_COLUMN:
        return f"{manufacturer}{MANUFACTURER_SUFFIX}"
    return manufacturer


def comparison_table(groups: Sequence[ComparisonGroup]) -> pd.DataFrame:
    """One row per model slot: the reference block on a group's first row only."""

    columns = manufacturer_columns(groups)
    references: list[str] = []
    cells: list[list[str]] = []
    for group in groups:
        depth = max([len(group.manufacturers.get(name, [])) for name in columns] + [1])
        for index in range(depth):
            references.append(describe_reference(group.reference_specs) if index == 0 else "")
            row = []
            for name in columns:
                machines = group.manufacturers.get(name, [])
                row.append(describe_machine(machines[index]) if index < len(machines) else EMPTY_CELL)
            cells.append(row)

    reference = pd.DataFrame({REFERENCE_COLUMN: references})
    models = pd.DataFrame(cells, columns=[column_label(name) for name in columns])
    return pd.concat([reference, models], axis=1)


def comparison_html(groups: Sequence[ComparisonGroup]) -> str:
    """Read-only HTML table of ``groups``; cell line breaks survive via CSS."""

    return comparison_table(groups).to_html(index=False, escape=True, classes="comparison", border=0)
