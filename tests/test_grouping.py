from datetime import datetime

import pytest

from backend.models.machine import MachineRecord
from comparison import build_views, classify_product_type, compare_machines, compare_machines_entire
from comparison.bucketing import build_key
from comparison.grouping import (
    deduplicate_groups,
    group_machines,
    latest_checked,
    order_groups,
    parse_checked_time,
)
from ingestion import IngestionMetrics


def machine(**fields) -> MachineRecord:
    defaults = {
        "manufacturer": "A",
        "product_type": "Hydraulic",
        "clamping_force": "410",
        "shot_size": "48",
        "screw_type": "Standard",
    }
    defaults.update(fields)
    return MachineRecord(**defaults)


def test_representative_and_entire_scenario():
    older = machine(model_name="A-410", checked_time="01.2023")
    newer = machine(model_name="A-415", clamping_force="415", shot_size="52", checked_time="06.2023")

    representative = compare_machines([older, newer])
    entire = compare_machines_entire([older, newer])

    assert len(representative.hydraulic) == 1
    group = representative.hydraulic[0]
    assert group.manufacturers == {"A": [newer]}
    assert group.reference_specs.clamping_force == 400
    assert group.reference_specs.shot_size == 50

    assert len(entire.hydraulic) == 1
    assert entire.hydraulic[0].manufacturers == {"A": [older, newer]}
    assert representative.electric == entire.electric == []


@pytest.mark.parametrize(
    "product_type, expected",
    [
        ("Electric Servo", "electric"),
        ("HYDRAULIC", "hydraulic"),
        ("Hybrid", None),
        ("", None),
        ("Hydraulic/Electric hybrid", None),
    ],
)
def test_classify_product_type(product_type, expected):
    assert classify_product_type(product_type) == expected


def test_unclassified_machines_are_dropped():
    servo = machine(product_type="Electric Servo")
    hybrid = machine(product_type="Hybrid")
    metrics = IngestionMetrics()

    result = compare_machines([servo, hybrid], metrics)

    assert result.hydraulic == []
    assert [m for g in result.electric for ms in g.manufacturers.values() for m in ms] == [servo]
    assert metrics.extra["unclassified_machines"] == 1
    assert metrics.extra["electric_machines"] == 1


def test_grouping_is_a_partition():
    machines = [
        machine(manufacturer="A", clamping_force="100", shot_size="20"),
        machine(manufacturer="B", clamping_force="110", shot_size="22"),
        machine(manufacturer="A", clamping_force="300", shot_size="20"),
        machine(manufacturer="C", clamping_force="100", shot_size="20", performance="High"),
        machine(manufacturer="B", clamping_force="100", shot_size="20", screw_type="Barrier"),
    ]
    groups = group_machines(machines)

    placed = [m for g in groups for ms in g.manufacturers.values() for m in ms]
    assert sorted(placed, key=machines.index) == machines
    keys = [build_key(next(iter(g.manufacturers.values()))[0]) for g in groups]
    assert len(keys) == len(set(keys)) == 4


def test_reference_specs_come_from_first_machine():
    groups = group_machines(
        [
            machine(manufacturer="A", screw_type="Barrier"),
            machine(manufacturer="B", screw_type="BARRIER"),
        ]
    )
    assert len(groups) == 1
    assert groups[0].reference_specs.screw_type == "Barrier"
    assert list(groups[0].manufacturers) == ["A", "B"]


def test_blank_manufacturer_goes_to_unknown():
    groups = group_machines([machine(manufacturer=""), machine(manufacturer="  ")])
    assert list(groups[0].manufacturers) == ["Unknown"]
    assert len(groups[0].manufacturers["Unknown"]) == 2


def test_manufacturer_named_like_reference_field_is_kept():
    groups = group_machines([machine(manufacturer="reference_specs")])
    assert "reference_specs" in groups[0].manufacturers
    assert groups[0].reference_specs.clamping_force == 400


def test_grouping_is_idempotent():
    machines = [machine(manufacturer=name, clamping_force=force) for name, force in
                [("A", "100"), ("B", "520"), ("A", "110"), ("C", "500")]]
    assert group_machines(machines) == group_machines(machines)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("06.2023", datetime(2023, 6, 1)),
        ("1.2024", datetime(2024, 1, 1)),
        ("13.2023", datetime.min),
        ("2023-06", datetime.min),
        ("06.2023.1", datetime.min),
        ("", datetime.min),
    ],
)
def test_parse_checked_time(text, expected):
    assert parse_checked_time(text) == expected


def test_latest_checked_prefers_newest_then_first_seen():
    unparsable = machine(model_name="x", checked_time="soon")
    first = machine(model_name="first", checked_time="03.2022")
    second = machine(model_name="second", checked_time="03.2022")
    assert latest_checked([unparsable, first, second]) is first


def test_deduplication_keeps_one_latest_per_manufacturer():
    machines = [
        machine(manufacturer="A", checked_time="01.2022"),
        machine(manufacturer="A", checked_time="12.2022"),
        machine(manufacturer="A", checked_time="bad"),
        machine(manufacturer="B", checked_time="05.2021"),
    ]
    groups = group_machines(machines)
    deduplicated = deduplicate_groups(groups)

    assert len(deduplicated) == len(groups)
    group = deduplicated[0]
    assert group.reference_specs == groups[0].reference_specs
    assert list(group.manufacturers) == ["A", "B"]
    assert all(len(records) == 1 for records in group.manufacturers.values())
    assert group.manufacturers["A"][0].checked_time == "12.2022"
    # Deduplication leaves the entire grouping untouched.
    assert len(groups[0].manufacturers["A"]) == 3


def test_order_groups_by_force_then_shot_with_stable_ties():
    machines = [
        machine(clamping_force="500", shot_size="30"),
        machine(clamping_force="100", shot_size="80"),
        machine(clamping_force="100", shot_size="20", screw_type="Barrier"),
        machine(clamping_force="100", shot_size="20", performance="High"),
        machine(clamping_force="100", shot_size="20"),
    ]
    ordered = order_groups(group_machines(machines))

    specs = [(g.reference_specs.clamping_force, g.reference_specs.shot_size) for g in ordered]
    assert specs == sorted(specs)
    assert [g.reference_specs.screw_type for g in ordered[:3]] == ["Barrier", "Standard", "Standard"]
    assert ordered[1].reference_specs.performance == "High"
    assert ordered[2].reference_specs.performance is None


def test_build_views_counts_machines():
    machines = [machine(), machine(product_type="Electric", manufacturer="B"), machine(product_type="")]
    views = build_views(machines)
    assert views.machine_count == 3
    assert len(views.representative.hydraulic) == 1
    assert len(views.entire.electric) == 1
