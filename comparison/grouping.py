"""Grouping engine producing the representative and entire comparison views."""

from collections.abc import Iterable, Sequence
from datetime import datetime

from backend.models.machine import (
    ComparisonGroup,
    ComparisonResult,
    ComparisonViews,
    MachineRecord,
)
from ingestion import IngestionMetrics

from . import logger
from .bucketing import GroupKey, build_key, reference_specs_for

UNKNOWN_MANUFACTURER = "Unknown"
HYDRAULIC = "hydraulic"
ELECTRIC = "electric"


def classify_product_type(product_type: str) -> str | None:
    """Route a product type to ``"hydraulic"`` or ``"electric"``.

    Text mentioning both, or neither, is unclassified.
    """

    value = (product_type or "").lower()
    is_hydraulic = HYDRAULIC in value
    is_electric = ELECTRIC in value
    if is_hydraulic == is_electric:
        return None
    return HYDRAULIC if is_hydraulic else ELECTRIC


def group_machines(machines: Iterable[MachineRecord]) -> list[ComparisonGroup]:
    """Partition machines by bucketed key, then by manufacturer.

    Groups come back in creation order. A group's reference specs come from the
    first machine that created it and are never recomputed.
    """

    groups: dict[GroupKey, ComparisonGroup] = {}
    for machine in machines:
        key = build_key(machine)
        group = groups.get(key)
        if group is None:
            group = ComparisonGroup(reference_specs=reference_specs_for(machine))
            groups[key] = group

        manufacturer = (machine.manufacturer or "").strip() or UNKNOWN_MANUFACTURER
        group.manufacturers.setdefault(manufacturer, []).append(machine)

    return list(groups.values())


def parse_checked_time(checked_time: str) -> datetime:
    """Parse ``"MM.YYYY"``; anything else sorts as the earliest instant."""

    parts = (checked_time or "").strip().split(".")
    if len(parts) != 2:
        return datetime.min
    month, year = parts
    if not (month.isdigit() and year.isdigit()):
        return datetime.min
    try:
        return datetime(int(year), int(month), 1)
    except ValueError:
        return datetime.min


def latest_checked(machines: Sequence[MachineRecord]) -> MachineRecord:
    """Most recently checked machine; ties keep the earliest one in input order."""

    latest = machines[0]
    latest_time = parse_checked_time(latest.checked_time)
    for machine in machines[1:]:
        checked = parse_checked_time(machine.checked_time)
        if checked > latest_time:
            latest, latest_time = machine, checked
    return latest


def deduplicate_groups(groups: Iterable[ComparisonGroup]) -> list[ComparisonGroup]:
    """Keep one machine per manufacturer per group: the latest checked one."""

    deduplicated: list[ComparisonGroup] = []
    for group in groups:
        manufacturers = {
            name: [latest_checked(machines)] if len(machines) > 1 else list(machines)
            for name, machines in group.manufacturers.items()
        }
        deduplicated.append(
            ComparisonGroup(reference_specs=group.reference_specs, manufacturers=manufacturers)
        )
    return deduplicated


def order_groups(groups: Iterable[ComparisonGroup]) -> list[ComparisonGroup]:
    """Sort by clamping force then shot size; equal pairs keep creation order."""

    return sorted(
        groups,
        key=lambda group: (group.reference_specs.clamping_force, group.reference_specs.shot_size),
    )


def split_by_product_type(
    machines: Iterable[MachineRecord], metrics: IngestionMetrics | None = None
) -> tuple[list[MachineRecord], list[MachineRecord]]:
    hydraulic: list[MachineRecord] = []
    electric: list[MachineRecord] = []
    dropped = 0
    for machine in machines:
        product_class = classify_product_type(machine.product_type)
        if product_class == HYDRAULIC:
            hydraulic.append(machine)
        elif product_class == ELECTRIC:
            electric.append(machine)
        else:
            dropped += 1

    if dropped:
        logger.info("Dropped %s machines without a hydraulic/electric product type", dropped)
    if metrics:
        metrics.increment_extra("hydraulic_machines", len(hydraulic))
        metrics.increment_extra("electric_machines", len(electric))
        metrics.increment_extra("unclassified_machines", dropped)
    return hydraulic, electric


def _build_result(
    machines: Iterable[MachineRecord],
    representative: bool,
    metrics: IngestionMetrics | None = None,
) -> ComparisonResult:
    hydraulic, electric = split_by_product_type(machines, metrics)

    views = []
    for subset in (hydraulic, electric):
        groups = group_machines(subset)
        if representative:
            groups = deduplicate_groups(groups)
        views.append(order_groups(groups))

    if metrics:
        metrics.increment_extra("groups_built", len(views[0]) + len(views[1]))
    logger.debug(
        "Built %s hydraulic and %s electric groups (representative=%s)",
        len(views[0]),
        len(views[1]),
        representative,
    )
    return ComparisonResult(hydraulic=views[0], electric=views[1])


def compare_machines(
    machines: Iterable[MachineRecord], metrics: IngestionMetrics | None = None
) -> ComparisonResult:
    """Representative view: one latest-checked machine per manufacturer per group."""

    return _build_result(machines, representative=True, metrics=metrics)


def compare_machines_entire(
    machines: Iterable[MachineRecord], metrics: IngestionMetrics | None = None
) -> ComparisonResult:
    """Entire view: every classified machine, unfiltered."""

    return _build_result(machines, representative=False, metrics=metrics)


def build_views(
    machines: Sequence[MachineRecord], metrics: IngestionMetrics | None = None
) -> ComparisonViews:
    representative = compare_machines(machines, metrics)
    entire = compare_machines_entire(machines)
    logger.info(
        "Compared %s machines into %s hydraulic and %s electric groups",
        len(machines),
        len(entire.hydraulic),
        len(entire.electric),
    )
    return ComparisonViews(
        representative=representative,
        entire=entire,
        machine_count=len(machines),
    )
