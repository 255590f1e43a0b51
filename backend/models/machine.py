"""Pydantic schemas for machines, comparison groups and result views."""

from pydantic import BaseModel, ConfigDict, Field


class MachineRecord(BaseModel):
    """One spreadsheet row describing an injection molding machine.

    Every field is kept as text exactly as ingested; numeric coercion happens
    only when building comparison keys.
    """

    model_config = ConfigDict(frozen=True)

    manufacturer: str = ""
    model_series: str = ""
    model_name: str = ""
    product_type: str = ""
    clamping_force: str = ""
    screw_type: str = ""
    screw_diameter: str = ""
    tie_bar_distance: str = ""
    screw_stroke: str = ""
    shot_size: str = ""
    option_price: str = ""
    freight: str = ""
    list_price: str = ""
    sales_price: str = ""
    customer: str = ""
    checked_time: str = ""
    sales_type: str = ""
    performance: str = ""
    injection_unit: str = ""


class ReferenceSpecs(BaseModel):
    """Bucketed specification shared by every machine in a group."""

    clamping_force: int
    shot_size: int
    screw_type: str
    performance: str | None = None


class ComparisonGroup(BaseModel):
    """Machines sharing one bucketed specification, keyed by manufacturer."""

    reference_specs: ReferenceSpecs
    manufacturers: dict[str, list[MachineRecord]] = Field(default_factory=dict)


class ComparisonResult(BaseModel):
    hydraulic: list[ComparisonGroup] = Field(default_factory=list)
    electric: list[ComparisonGroup] = Field(default_factory=list)


class ComparisonViews(BaseModel):
    """Representative and entire renderings of the same upload."""

    representative: ComparisonResult
    entire: ComparisonResult
    machine_count: int
