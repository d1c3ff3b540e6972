# MIT License
"""Result records produced by the engine.

Results are plain pydantic models: the contract between the engine, the
export helpers and whatever presents the numbers.  Every record is built
once by a pure function and never modified afterwards.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel

from .params import PortConfig


# --- Equipment -------------------------------------------------------------

class EquipmentLineItem(BaseModel):
    equipment_key: str
    display_name: str
    equipment_category: str
    equipment_type: str
    handling_basis: str
    diesel_units: int
    electric_units: int
    capex_eligible_units: int
    diesel_handling: float
    electric_handling: float
    kwh_per_teu: float
    liters_per_teu: float
    teu_ratio: float
    annual_kwh: float
    annual_diesel_liters: float
    annual_co2_tons: float
    annual_fuel_cost_usd: float
    annual_energy_cost_usd: float
    annual_maintenance_usd: float
    annual_total_opex_usd: float
    unit_capex_usd: float
    total_capex_usd: float
    lifespan_years: float


class EquipmentTotals(BaseModel):
    total_diesel_liters: float = 0.0
    total_kwh: float = 0.0
    total_co2_tons: float = 0.0
    total_opex_usd: float = 0.0
    total_capex_usd: float = 0.0


class EquipmentResult(BaseModel):
    line_items: List[EquipmentLineItem]
    totals: EquipmentTotals


# --- Chargers --------------------------------------------------------------

class ChargerLineItem(BaseModel):
    evse_key: str
    display_name: str
    equipment_key: str
    equipment_count: int
    units_per_charger: float
    chargers_required: int
    chargers_override: Optional[int] = None
    chargers_final: int
    power_kw: float
    total_power_kw: float
    capex_usd: float
    total_capex_usd: float
    annual_opex_usd: float
    total_annual_opex_usd: float


class ChargerTotals(BaseModel):
    total_chargers: int = 0
    total_power_kw: float = 0.0
    total_capex_usd: float = 0.0
    total_annual_opex_usd: float = 0.0


class ChargerResult(BaseModel):
    line_items: List[ChargerLineItem]
    totals: ChargerTotals


# --- Berths ----------------------------------------------------------------

class VesselCallLineItem(BaseModel):
    vessel_segment_key: str
    vessel_segment_name: str
    annual_calls: float
    avg_berth_hours: float
    annual_berth_hours: float
    ops_power_mw: float
    shore_power_mwh: float
    baseline_fuel_kg: float
    baseline_shore_power_kwh: float
    baseline_co2_tons: float
    scenario_fuel_kg: float
    scenario_shore_power_kwh: float
    scenario_co2_tons: float
    scenario_energy_cost_usd: float


class BerthLineItem(BaseModel):
    berth_id: str
    berth_name: str
    berth_number: int
    max_vessel_segment_key: str
    max_vessel_segment_name: str
    ops_existing: bool
    dc_existing: bool
    ops_enabled: bool
    dc_enabled: bool
    total_annual_calls: float
    total_annual_berth_hours: float
    vessel_calls: List[VesselCallLineItem]
    ops_power_mw: float
    ops_transformer_capex_usd: float
    ops_converter_capex_usd: float
    ops_civil_works_capex_usd: float
    ops_total_capex_usd: float
    ops_annual_opex_usd: float
    dc_power_mw: float
    dc_capex_usd: float
    dc_annual_opex_usd: float
    baseline_fuel_kg: float
    baseline_shore_power_kwh: float
    baseline_co2_tons: float
    scenario_fuel_kg: float
    scenario_shore_power_kwh: float
    scenario_co2_tons: float
    scenario_energy_cost_usd: float


class BerthTotals(BaseModel):
    total_ops_capex_usd: float = 0.0
    total_ops_opex_usd: float = 0.0
    total_ops_peak_mw: float = 0.0
    total_dc_capex_usd: float = 0.0
    total_dc_opex_usd: float = 0.0
    total_dc_peak_mw: float = 0.0
    baseline_fuel_kg: float = 0.0
    baseline_shore_power_kwh: float = 0.0
    baseline_co2_tons: float = 0.0
    scenario_fuel_kg: float = 0.0
    scenario_shore_power_kwh: float = 0.0
    scenario_co2_tons: float = 0.0
    scenario_energy_cost_usd: float = 0.0


class BerthResult(BaseModel):
    line_items: List[BerthLineItem]
    totals: BerthTotals


# --- Grid ------------------------------------------------------------------

class GridResult(BaseModel):
    total_equipment_peak_mw: float
    total_ops_peak_mw: float
    total_evse_peak_mw: float
    gross_peak_demand_mw: float
    active_demand_groups: int
    simultaneity_factor: float
    net_peak_demand_mw: float
    transformer_rating_mw: float
    substation_type: str
    substation_cost_per_mw: float
    substation_material_capex_usd: float
    civil_works_capex_usd: float
    substation_capex_usd: float
    cable_length_m: float
    cable_type: str
    cable_cost_per_meter: float
    cable_capex_usd: float
    grid_opex_usd: float
    grid_consumption_kwh: float
    total_grid_capex_usd: float


# --- Port services ---------------------------------------------------------

class PortServicesResult(BaseModel):
    total_tug_trips: float
    total_tug_hours: float
    total_pilot_trips: float
    total_pilot_hours: float
    min_tugs_required: int
    min_pilots_required: int
    max_tugs_per_call: int
    max_pilots_per_call: int
    baseline_tugs_diesel: int
    baseline_tugs_electric: int
    baseline_pilots_diesel: int
    baseline_pilots_electric: int
    baseline_tug_fuel_liters: float
    baseline_tug_energy_kwh: float
    baseline_pilot_fuel_liters: float
    baseline_pilot_energy_kwh: float
    baseline_co2_tons: float
    baseline_fuel_cost_usd: float
    baseline_energy_cost_usd: float
    baseline_ops_maintenance_usd: float
    baseline_total_opex_usd: float
    scenario_tugs_diesel: int
    scenario_tugs_electric: int
    scenario_pilots_diesel: int
    scenario_pilots_electric: int
    scenario_tug_fuel_liters: float
    scenario_tug_energy_kwh: float
    scenario_pilot_fuel_liters: float
    scenario_pilot_energy_kwh: float
    scenario_co2_tons: float
    scenario_fuel_cost_usd: float
    scenario_energy_cost_usd: float
    scenario_ops_maintenance_usd: float
    scenario_total_opex_usd: float
    tug_ops_capex_usd: float
    pilot_ops_capex_usd: float
    total_ops_capex_usd: float

    @property
    def baseline_diesel_liters(self) -> float:
        return self.baseline_tug_fuel_liters + self.baseline_pilot_fuel_liters

    @property
    def scenario_diesel_liters(self) -> float:
        return self.scenario_tug_fuel_liters + self.scenario_pilot_fuel_liters

    @property
    def baseline_kwh(self) -> float:
        return self.baseline_tug_energy_kwh + self.baseline_pilot_energy_kwh

    @property
    def scenario_kwh(self) -> float:
        return self.scenario_tug_energy_kwh + self.scenario_pilot_energy_kwh


# --- Terminal and port -----------------------------------------------------

class TerminalResult(BaseModel):
    terminal_id: str
    terminal_name: str
    terminal_type: str
    annual_throughput: float
    baseline_equipment: EquipmentResult
    scenario_equipment: EquipmentResult
    chargers: ChargerResult
    baseline_chargers: ChargerResult
    berths: BerthResult
    grid: GridResult
    baseline_grid: GridResult
    total_baseline_diesel_liters: float
    total_scenario_diesel_liters: float
    total_baseline_kwh: float
    total_scenario_kwh: float
    total_baseline_co2_tons: float
    total_scenario_co2_tons: float
    total_baseline_opex_usd: float
    total_scenario_opex_usd: float
    total_capex_usd: float
    annual_opex_savings_usd: float
    annual_co2_savings_tons: float


class PortTotals(BaseModel):
    baseline_diesel_liters: float
    baseline_kwh: float
    baseline_co2_tons: float
    baseline_opex_usd: float
    scenario_diesel_liters: float
    scenario_kwh: float
    scenario_co2_tons: float
    scenario_opex_usd: float
    equipment_capex_usd: float
    charger_capex_usd: float
    ops_capex_usd: float
    dc_capex_usd: float
    grid_capex_usd: float
    port_services_capex_usd: float
    total_capex_usd: float
    diesel_liters_saved: float
    co2_tons_saved: float
    co2_reduction_percent: float
    annual_opex_savings_usd: float
    simple_payback_years: Optional[float] = None
    npv_usd: float
    irr: Optional[float] = None


class PortResult(BaseModel):
    port: PortConfig
    terminals: List[TerminalResult]
    port_services: Optional[PortServicesResult] = None
    totals: PortTotals
    economic_assumptions_used: Dict[str, float]
