"""Equivalence keys and reference specs derived from a single machine."""

import math
from typing import NamedTuple

from backend.models.machine import MachineRecord, ReferenceSpecs

from .normalizer import to_number

FORCE_BUCKET_SIZE = 50
SHOT_BUCKET_SIZE = 10

STANDARD = "standard"
HIGH = "high"
MULTI = "multi"


class GroupKey(NamedTuple):
    """Composite grouping key.

    A tuple keeps the components apart, so no separator can ever collide with
    text inside the screw type.
    """

    force_bucket: int
    screw_type: str
    shot_bucket: int
    performance: str


def round_to_bucket(value: float, size: int) -> int:
    """Round half up to the nearest multiple of ``size`` (``425 -> 450`` for 50)."""

    return math.floor(value / size + 0.5) * size


def performance_tier(performance: str) -> str:
    value = (performance or "").strip().lower()
    if value == HIGH:
        return HIGH
    if MULTI in value:
        return MULTI
    return STANDARD


def shot_size_value(machine: MachineRecord) -> float:
    """Numeric shot size; multi machines quoting ``"50/30"`` use the first figure."""

    raw = machine.shot_size or ""
    if performance_tier(machine.performance) == MULTI and "/" in raw:
        raw = raw.split("/", 1)[0]
    return to_number(raw)


def force_bucket(machine: MachineRecord) -> int:
    return round_to_bucket(to_number(machine.clamping_force), FORCE_BUCKET_SIZE)


def shot_bucket(machine: MachineRecord) -> int:
    return round_to_bucket(shot_size_value(machine), SHOT_BUCKET_SIZE)


def build_key(machine: MachineRecord) -> GroupKey:
    return GroupKey(
        force_bucket=force_bucket(machine),
        screw_type=(machine.screw_type or "").strip().lower(),
        shot_bucket=shot_bucket(machine),
        performance=performance_tier(machine.performance),
    )


def reference_specs_for(machine: MachineRecord) -> ReferenceSpecs:
    """Reference specs taken from the first machine placed into a group.

    High-tier groups are tagged ``"High"``; multi-tier groups keep the first
    machine's own performance text (e.g. ``"Multi/2K"``); standard groups
    carry no tag.
    """

    tier = performance_tier(machine.performance)
    if tier == HIGH:
        tag = "High"
    elif tier == MULTI:
        tag = machine.performance.strip()
    else:
        tag = None

    return ReferenceSpecs(
        clamping_force=force_bucket(machine),
        shot_size=shot_bucket(machine),
        screw_type=machine.screw_type or "",
        performance=tag,
    )
