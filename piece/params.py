# MIT License
"""Input models for the PIECE port electrification engine.

All inputs are defined using [`pydantic.BaseModel`](https://docs.pydantic.dev/)
to provide type checking, validation and JSON serialisation.  Two groups
of models live here:

* the assumption tables (equipment, chargers, fleet operations, grid
  components and economic values) that describe the techno‑economic
  reference data, and
* the calculation request (port, terminals, berths, vessel calls and
  port services) that describes one baseline/scenario pair.

Validation happens once, at the request boundary.  The calculation
modules assume that every count, throughput and duration they receive is
non‑negative.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EquipmentCategory(str, Enum):
    """Energy source of an equipment type.

    ``grid_powered`` equipment is electric in both baseline and scenario
    (cranes on cable reels or busbars, reefer plugs).  ``battery_powered``
    equipment is convertible: diesel today, battery‑electric after
    electrification.
    """

    GRID_POWERED = "grid_powered"
    BATTERY_POWERED = "battery_powered"


TerminalType = Literal["container", "cruise", "roro"]
EquipmentType = Literal["quayside", "yard", "horizontal"]


# ---------------------------------------------------------------------------
# Assumption tables
# ---------------------------------------------------------------------------

class EquipmentSpec(BaseModel):
    """Techno‑economic parameters of one terminal equipment type."""

    model_config = ConfigDict(frozen=True)

    equipment_key: str
    display_name: str = ""
    equipment_category: EquipmentCategory = EquipmentCategory.BATTERY_POWERED
    equipment_type: EquipmentType = "yard"
    capex_usd: float = Field(0.0, ge=0, description="CAPEX per electric unit (USD)")
    annual_opex_usd: float = Field(0.0, ge=0, description="Annual maintenance per electric unit (USD/yr)")
    peak_power_kw: float = Field(0.0, ge=0, description="Peak electrical demand per unit (kW)")
    kwh_per_teu: float = Field(0.0, ge=0, description="Electric energy intensity (kWh/TEU)")
    liters_per_teu: float = Field(0.0, ge=0, description="Diesel intensity (L/TEU)")
    teu_ratio: float = Field(
        1.0,
        ge=0,
        description="Throughput ratio; 0 means the unit count is itself a throughput unit (capacity-based devices)",
    )
    moves_per_hour: Optional[float] = Field(None, ge=0, description="Handling capacity per unit (moves/h)")
    lifespan_years: float = Field(15.0, ge=0)


class ChargerSpec(BaseModel):
    """Charging infrastructure (EVSE) shared by battery‑powered equipment."""

    model_config = ConfigDict(frozen=True)

    evse_key: str
    equipment_key: str
    display_name: str = ""
    power_kw: float = Field(0.0, ge=0)
    units_per_charger: float = Field(1.0, description="How many equipment units share one charger")
    capex_usd: float = Field(0.0, ge=0)
    annual_opex_usd: float = Field(0.0, ge=0)


class FleetOpsSpec(BaseModel):
    """Shore power, DC charging and service‑boat parameters of a vessel segment.

    Two pseudo‑segments (``tug_70bp`` and ``pilot_boat``) reuse the same
    structure to carry the fuel rate, operating hours and charging berth
    costs of port service boats.
    """

    model_config = ConfigDict(frozen=True)

    vessel_segment_key: str
    display_name: str = ""
    ops_power_mw: float = Field(0.0, ge=0, description="Onshore power supply rating (MW)")
    transformer_capex_usd: float = Field(0.0, ge=0)
    converter_capex_usd: float = Field(0.0, ge=0)
    civil_works_capex_usd: float = Field(0.0, ge=0)
    annual_opex_usd: float = Field(0.0, ge=0)
    dc_power_mw: float = Field(0.0, ge=0, description="DC charger rating for electric vessels (MW)")
    dc_capex_usd: float = Field(0.0, ge=0)
    dc_annual_opex_usd: float = Field(0.0, ge=0)
    tugs_per_call: float = Field(0.0, ge=0)
    pilots_per_call: float = Field(0.0, ge=0)
    fuel_rate_l_per_hour: float = Field(0.0, ge=0, description="Service boat fuel burn while operating (L/h)")
    avg_hours_per_call: float = Field(0.0, ge=0, description="Service boat operating hours per assisted call")

    @property
    def ops_capex_usd(self) -> float:
        return self.transformer_capex_usd + self.converter_capex_usd + self.civil_works_capex_usd


class GridComponentSpec(BaseModel):
    """Cost of one grid component tier (substation per MW, cable per metre)."""

    model_config = ConfigDict(frozen=True)

    component_key: str
    display_name: str = ""
    cost_per_mw: Optional[float] = Field(None, ge=0)
    cost_per_meter: Optional[float] = Field(None, ge=0)
    voltage_kv: float = Field(0.0, ge=0)
    simultaneity_factor: Optional[float] = Field(None, ge=0, le=1)


class EconomicAssumption(BaseModel):
    model_config = ConfigDict(frozen=True)

    assumption_key: str
    display_name: str = ""
    value: float
    unit: str = ""


class AssumptionTables(BaseModel):
    """A fully resolved snapshot of every assumption table.

    Loading the tables and merging profile‑specific overrides happens
    outside the engine; the engine only reads this snapshot.
    """

    model_config = ConfigDict(frozen=True)

    equipment: List[EquipmentSpec] = Field(default_factory=list)
    evse: List[ChargerSpec] = Field(default_factory=list)
    fleet_ops: List[FleetOpsSpec] = Field(default_factory=list)
    grid: List[GridComponentSpec] = Field(default_factory=list)
    economic: List[EconomicAssumption] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Calculation request
# ---------------------------------------------------------------------------

class PortConfig(BaseModel):
    name: str = ""
    location: str = ""
    size_key: Literal["", "small_feeder", "regional", "hub", "mega_hub"] = ""


class BaselineEquipmentEntry(BaseModel):
    """Existing fleet of one equipment type.

    Both counts may be non‑zero at the same time, e.g. a terminal running
    65 diesel and 1 electric terminal tractor.
    """

    existing_diesel: int = Field(0, ge=0)
    existing_electric: int = Field(0, ge=0)


class ScenarioEquipmentEntry(BaseModel):
    num_to_convert: int = Field(0, ge=0, description="Diesel units converted to electric")
    num_to_add: int = Field(0, ge=0, description="New electric units")


class VesselCall(BaseModel):
    """Current traffic of one vessel segment at a berth."""

    vessel_segment_key: str
    annual_calls: float = Field(0.0, ge=0)
    avg_berth_hours: float = Field(0.0, ge=0)


class BerthDefinition(BaseModel):
    """Physical berth.

    ``max_vessel_segment_key`` is the design vessel: it drives OPS/DC
    sizing and CAPEX regardless of today's traffic mix in
    ``vessel_calls``.
    """

    id: str = Field(..., min_length=1)
    berth_number: int = Field(1, ge=1)
    berth_name: str = ""
    max_vessel_segment_key: str = Field(..., min_length=1)
    ops_existing: bool = False
    dc_existing: bool = False
    vessel_calls: List[VesselCall] = Field(default_factory=list)


class BerthScenario(BaseModel):
    berth_id: str
    ops_enabled: bool = False
    dc_enabled: bool = False


class TerminalConfig(BaseModel):
    """Baseline and scenario definition of one terminal."""

    id: str = Field(..., min_length=1)
    name: str = ""
    terminal_type: TerminalType = "container"
    annual_teu: float = Field(0.0, ge=0, description="Annual throughput (TEU, passengers or CEU)")
    berths: List[BerthDefinition] = Field(default_factory=list)
    baseline_equipment: Dict[str, BaselineEquipmentEntry] = Field(default_factory=dict)
    scenario_equipment: Dict[str, ScenarioEquipmentEntry] = Field(default_factory=dict)
    berth_scenarios: List[BerthScenario] = Field(default_factory=list)
    charger_overrides: Dict[str, int] = Field(default_factory=dict)
    cable_length_m: float = Field(500.0, ge=0, description="Total cable run from grid connection (m)")

    @field_validator("charger_overrides")
    def overrides_non_negative(cls, v):
        for key, value in v.items():
            if value < 0:
                raise ValueError(f"charger_overrides.{key} must be non-negative")
        return v

    @field_validator("berths")
    def unique_berth_ids(cls, v):
        ids = [b.id for b in v]
        if len(ids) != len(set(ids)):
            raise ValueError("berth ids must be unique within a terminal")
        return v


class PortServicesBaseline(BaseModel):
    tugs_diesel: int = Field(0, ge=0)
    tugs_electric: int = Field(0, ge=0)
    pilot_boats_diesel: int = Field(0, ge=0)
    pilot_boats_electric: int = Field(0, ge=0)
    tug_avg_hours_per_call: Optional[float] = Field(None, ge=0)
    pilot_avg_hours_per_call: Optional[float] = Field(None, ge=0)


class PortServicesScenario(BaseModel):
    tugs_to_convert: int = Field(0, ge=0)
    tugs_to_add: int = Field(0, ge=0)
    pilot_boats_to_convert: int = Field(0, ge=0)
    pilot_boats_to_add: int = Field(0, ge=0)


class CalculationRequest(BaseModel):
    """A complete baseline/scenario calculation request for one port.

    The request groups the port identity, the ordered terminal
    configurations, optional port‑wide services and optional economic
    overrides.  This makes it straightforward to serialise and replay a
    calculation from a JSON file.
    """

    port: PortConfig = Field(default_factory=PortConfig)
    terminals: List[TerminalConfig]
    port_services_baseline: Optional[PortServicesBaseline] = None
    port_services_scenario: Optional[PortServicesScenario] = None
    economic_overrides: Dict[str, float] = Field(default_factory=dict)

    @field_validator("terminals")
    def at_least_one_terminal(cls, v):
        if not v:
            raise ValueError("at least one terminal is required")
        return v
