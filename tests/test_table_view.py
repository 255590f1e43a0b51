import pytest

from backend.models.machine import MachineRecord
from comparison import compare_machines_entire
from comparison.table_view import (
    EMPTY_CELL,
    MANUFACTURER_SUFFIX,
    REFERENCE_COLUMN,
    comparison_html,
    comparison_table,
    format_currency,
    manufacturer_columns,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("120000", "$120,000"),
        ("$98,500.40", "$98,500"),
        (1250, "$1,250"),
        ("Call", "Call"),
        ("--5", "--5"),
        ("TBD - see quote", "TBD - see quote"),
        ("", ""),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_comparison_table_layout():
    machines = [
        MachineRecord(manufacturer="A", product_type="Hydraulic", clamping_force="410", shot_size="48",
                      model_name="A1", sales_price="100000"),
        MachineRecord(manufacturer="A", product_type="Hydraulic", clamping_force="405", shot_size="50",
                      model_name="A2"),
        MachineRecord(manufacturer="B", product_type="Hydraulic", clamping_force="400", shot_size="50",
                      model_name="B1"),
        MachineRecord(manufacturer="C", product_type="Hydraulic", clamping_force="800", shot_size="90",
                      model_name="C1"),
    ]
    groups = compare_machines_entire(machines).hydraulic

    assert manufacturer_columns(groups) == ["A", "B", "C"]
    table = comparison_table(groups)

    assert list(table.columns) == [REFERENCE_COLUMN, "A", "B", "C"]
    assert len(table) == 3
    assert table.loc[0, REFERENCE_COLUMN].startswith("Clamping Force: 400 US Ton")
    assert table.loc[1, REFERENCE_COLUMN] == ""
    assert table.loc[0, "A"].startswith("A1")
    assert "Sales Price: $100,000" in table.loc[0, "A"]
    assert table.loc[1, "A"].startswith("A2")
    assert table.loc[1, "B"] == EMPTY_CELL
    assert table.loc[0, "C"] == EMPTY_CELL
    assert table.loc[2, "C"].startswith("C1")


def test_comparison_table_empty():
    table = comparison_table([])
    assert list(table.columns) == [REFERENCE_COLUMN]
    assert table.empty


def test_manufacturer_named_like_reference_column_keeps_reference_block():
    machines = [
        MachineRecord(manufacturer=REFERENCE_COLUMN, product_type="Hydraulic", clamping_force="410",
                      shot_size="48", model_name="RS-1"),
    ]
    table = comparison_table(compare_machines_entire(machines).hydraulic)

    renamed = f"{REFERENCE_COLUMN}{MANUFACTURER_SUFFIX}"
    assert list(table.columns) == [REFERENCE_COLUMN, renamed]
    assert table.loc[0, REFERENCE_COLUMN].startswith("Clamping Force: 400 US Ton")
    assert table.loc[0, renamed].startswith("RS-1")


def test_comparison_html_escapes_cells():
    machines = [
        MachineRecord(manufacturer="<b>Acme</b>", product_type="Electric", clamping_force="100",
                      shot_size="20", model_name="E-100"),
    ]
    html = comparison_html(compare_machines_entire(machines).electric)

    assert "&lt;b&gt;Acme&lt;/b&gt;" in html
    assert "<b>Acme</b>" not in html
    assert "E-100" in html
