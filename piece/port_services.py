# MIT License
"""Port service boats: tugs and pilot boats.

Service demand follows the vessel traffic of the whole port.  Every
vessel call needs a segment‑specific number of tugs and pilot boats; the
resulting trips and operating hours are shared by the service fleet in
proportion to its diesel and electric boats.  Diesel boats burn fuel at a
fixed hourly rate, electric boats recharge alongside from a dedicated OPS
charging berth.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .assumptions import SERVICE_SEGMENT_PILOT, SERVICE_SEGMENT_TUG, Economics, SpecIndex
from .params import FleetOpsSpec, PortServicesBaseline, PortServicesScenario
from .resolve import ResolvedBerth, apply_conversion
from .results import PortServicesResult
from .utils import kg_to_tonnes

logger = logging.getLogger(__name__)

# 60 % utilisation ceiling of a service boat.
AVAILABLE_HOURS_PER_BOAT = 365 * 24 * 0.6
DEFAULT_HOURS_PER_CALL = 4.0


class ServiceDemand(BaseModel):
    model_config = ConfigDict(frozen=True)

    trips: float = 0.0
    max_per_call: int = 0


class FleetEnergy(BaseModel):
    model_config = ConfigDict(frozen=True)

    fuel_liters: float = 0.0
    energy_kwh: float = 0.0


def service_demand(berths: Iterable[ResolvedBerth], index: SpecIndex) -> Tuple[ServiceDemand, ServiceDemand]:
    """Annual tug and pilot trips over all vessel calls of the port."""
    tug_trips = pilot_trips = 0.0
    tug_max = pilot_max = 0.0
    for berth in berths:
        for call in berth.vessel_calls:
            row = index.fleet_ops(call.vessel_segment_key)
            if row is None:
                logger.debug("no fleet ops row for segment %s, no service demand", call.vessel_segment_key)
                continue
            tug_trips += call.annual_calls * row.tugs_per_call
            pilot_trips += call.annual_calls * row.pilots_per_call
            if call.annual_calls > 0:
                tug_max = max(tug_max, row.tugs_per_call)
                pilot_max = max(pilot_max, row.pilots_per_call)
    return (
        ServiceDemand(trips=tug_trips, max_per_call=int(math.ceil(tug_max))),
        ServiceDemand(trips=pilot_trips, max_per_call=int(math.ceil(pilot_max))),
    )


def hours_per_call(override: Optional[float], row: Optional[FleetOpsSpec]) -> float:
    if override is not None:
        return override
    if row is not None and row.avg_hours_per_call > 0:
        return row.avg_hours_per_call
    return DEFAULT_HOURS_PER_CALL


def min_fleet(hours: float, max_per_call: int) -> int:
    return max(int(math.ceil(hours / AVAILABLE_HOURS_PER_BOAT)), max_per_call)


def fleet_energy(hours: float, diesel: int, electric: int, row: Optional[FleetOpsSpec], econ: Economics) -> FleetEnergy:
    """Split operating hours by fleet share into fuel and electricity.

    A fleet with no boats consumes nothing.
    """
    total = diesel + electric
    if total <= 0 or row is None:
        return FleetEnergy()
    diesel_hours = hours * diesel / total
    electric_hours = hours * electric / total
    liters = diesel_hours * row.fuel_rate_l_per_hour
    kwh = electric_hours * row.fuel_rate_l_per_hour * econ.electric_kwh_per_diesel_liter
    return FleetEnergy(fuel_liters=liters, energy_kwh=kwh)


def calculate_port_services(
    baseline: PortServicesBaseline,
    scenario: Optional[PortServicesScenario],
    berths: Iterable[ResolvedBerth],
    index: SpecIndex,
    econ: Economics,
) -> PortServicesResult:
    """Compute tug and pilot boat demand, energy and cost for the port.

    Parameters
    ----------
    baseline:
        Existing tug and pilot boat fleets, with optional hours per call.
    scenario:
        Boats to convert or add.  ``None`` keeps the baseline fleet.
    berths:
        Every berth of every terminal; their vessel calls drive demand.
    index:
        Assumption tables.  The ``tug_70bp`` and ``pilot_boat`` rows give
        fuel rate, hours per call and charging berth cost.
    econ:
        Resolved economic values.

    Returns
    -------
    PortServicesResult
    """
    scenario = scenario or PortServicesScenario()
    tug_row = index.fleet_ops(SERVICE_SEGMENT_TUG)
    pilot_row = index.fleet_ops(SERVICE_SEGMENT_PILOT)

    tug_demand, pilot_demand = service_demand(berths, index)
    tug_hours = tug_demand.trips * hours_per_call(baseline.tug_avg_hours_per_call, tug_row)
    pilot_hours = pilot_demand.trips * hours_per_call(baseline.pilot_avg_hours_per_call, pilot_row)

    s_tugs_d, s_tugs_e, tugs_new = apply_conversion(
        baseline.tugs_diesel, baseline.tugs_electric, scenario.tugs_to_convert, scenario.tugs_to_add
    )
    s_pilots_d, s_pilots_e, pilots_new = apply_conversion(
        baseline.pilot_boats_diesel,
        baseline.pilot_boats_electric,
        scenario.pilot_boats_to_convert,
        scenario.pilot_boats_to_add,
    )

    b_tug = fleet_energy(tug_hours, baseline.tugs_diesel, baseline.tugs_electric, tug_row, econ)
    b_pilot = fleet_energy(pilot_hours, baseline.pilot_boats_diesel, baseline.pilot_boats_electric, pilot_row, econ)
    s_tug = fleet_energy(tug_hours, s_tugs_d, s_tugs_e, tug_row, econ)
    s_pilot = fleet_energy(pilot_hours, s_pilots_d, s_pilots_e, pilot_row, econ)

    tug_opex = tug_row.annual_opex_usd if tug_row else 0.0
    pilot_opex = pilot_row.annual_opex_usd if pilot_row else 0.0

    def summarise(tug: FleetEnergy, pilot: FleetEnergy, tugs_e: int, pilots_e: int):
        liters = tug.fuel_liters + pilot.fuel_liters
        kwh = tug.energy_kwh + pilot.energy_kwh
        co2 = kg_to_tonnes(liters * econ.diesel_ef_wtw + kwh * econ.grid_ef)
        fuel_cost = liters * econ.diesel_price
        energy_cost = kwh * econ.electricity_price
        maintenance = tugs_e * tug_opex + pilots_e * pilot_opex
        return co2, fuel_cost, energy_cost, maintenance, fuel_cost + energy_cost + maintenance

    b_co2, b_fuel, b_energy, b_maint, b_opex = summarise(
        b_tug, b_pilot, baseline.tugs_electric, baseline.pilot_boats_electric
    )
    s_co2, s_fuel, s_energy, s_maint, s_opex = summarise(s_tug, s_pilot, s_tugs_e, s_pilots_e)

    tug_capex = tugs_new * tug_row.ops_capex_usd if tug_row else 0.0
    pilot_capex = pilots_new * pilot_row.ops_capex_usd if pilot_row else 0.0

    result = PortServicesResult(
        total_tug_trips=tug_demand.trips,
        total_tug_hours=tug_hours,
        total_pilot_trips=pilot_demand.trips,
        total_pilot_hours=pilot_hours,
        min_tugs_required=min_fleet(tug_hours, tug_demand.max_per_call),
        min_pilots_required=min_fleet(pilot_hours, pilot_demand.max_per_call),
        max_tugs_per_call=tug_demand.max_per_call,
        max_pilots_per_call=pilot_demand.max_per_call,
        baseline_tugs_diesel=baseline.tugs_diesel,
        baseline_tugs_electric=baseline.tugs_electric,
        baseline_pilots_diesel=baseline.pilot_boats_diesel,
        baseline_pilots_electric=baseline.pilot_boats_electric,
        baseline_tug_fuel_liters=b_tug.fuel_liters,
        baseline_tug_energy_kwh=b_tug.energy_kwh,
        baseline_pilot_fuel_liters=b_pilot.fuel_liters,
        baseline_pilot_energy_kwh=b_pilot.energy_kwh,
        baseline_co2_tons=b_co2,
        baseline_fuel_cost_usd=b_fuel,
        baseline_energy_cost_usd=b_energy,
        baseline_ops_maintenance_usd=b_maint,
        baseline_total_opex_usd=b_opex,
        scenario_tugs_diesel=s_tugs_d,
        scenario_tugs_electric=s_tugs_e,
        scenario_pilots_diesel=s_pilots_d,
        scenario_pilots_electric=s_pilots_e,
        scenario_tug_fuel_liters=s_tug.fuel_liters,
        scenario_tug_energy_kwh=s_tug.energy_kwh,
        scenario_pilot_fuel_liters=s_pilot.fuel_liters,
        scenario_pilot_energy_kwh=s_pilot.energy_kwh,
        scenario_co2_tons=s_co2,
        scenario_fuel_cost_usd=s_fuel,
        scenario_energy_cost_usd=s_energy,
        scenario_ops_maintenance_usd=s_maint,
        scenario_total_opex_usd=s_opex,
        tug_ops_capex_usd=tug_capex,
        pilot_ops_capex_usd=pilot_capex,
        total_ops_capex_usd=tug_capex + pilot_capex,
    )
    logger.info(
        "port services: %.0f tug h, %.0f pilot h, CO2 %.1f -> %.1f t",
        tug_hours,
        pilot_hours,
        b_co2,
        s_co2,
    )
    return result
