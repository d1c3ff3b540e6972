# MIT License
"""Berth shore power (OPS), DC charging and at‑berth emissions.

Infrastructure is sized from the berth's *design* vessel segment, the
largest vessel it can serve, independent of today's traffic.  Energy and
emissions follow the *current* traffic given as vessel calls:

    shore_power_mwh = ops_power_mw(segment) × avg_berth_hours × annual_calls

At a berth without shore power the vessel runs its auxiliary engines on
heavy fuel oil; where OPS is in service, already in the baseline or
enabled in the scenario, the same energy comes from the grid.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from .assumptions import Economics, SpecIndex
from .resolve import ResolvedBerth
from .results import BerthLineItem, BerthResult, BerthTotals, VesselCallLineItem
from .simultaneity import BERTH_GROUP_FACTOR
from .utils import kg_to_tonnes, mwh_to_kwh

logger = logging.getLogger(__name__)


def _at_berth(mwh: float, ops_active: bool, econ: Economics) -> Tuple[float, float, float, float]:
    """Fuel (kg), shore power (kWh), CO2 (t) and grid cost of a call's hotel load."""
    if not ops_active:
        return mwh * econ.aux_engine_kg_fuel_per_mwh, 0.0, mwh * econ.aux_engine_t_per_mwh, 0.0
    kwh = mwh_to_kwh(mwh)
    return 0.0, kwh, kg_to_tonnes(kwh * econ.grid_ef), kwh * econ.electricity_price


def calculate_vessel_call(
    call, baseline_ops: bool, scenario_ops: bool, index: SpecIndex, econ: Economics
) -> VesselCallLineItem:
    row = index.fleet_ops(call.vessel_segment_key)
    if row is None:
        logger.debug("no fleet ops row for segment %s, zero shore power", call.vessel_segment_key)
    ops_power_mw = row.ops_power_mw if row else 0.0
    berth_hours = call.annual_calls * call.avg_berth_hours
    mwh = ops_power_mw * berth_hours

    baseline_fuel_kg, baseline_kwh, baseline_co2, _ = _at_berth(mwh, baseline_ops, econ)
    scenario_fuel_kg, kwh, scenario_co2, scenario_cost = _at_berth(mwh, scenario_ops, econ)

    return VesselCallLineItem(
        vessel_segment_key=call.vessel_segment_key,
        vessel_segment_name=(row.display_name if row and row.display_name else call.vessel_segment_key),
        annual_calls=call.annual_calls,
        avg_berth_hours=call.avg_berth_hours,
        annual_berth_hours=berth_hours,
        ops_power_mw=ops_power_mw,
        shore_power_mwh=mwh,
        baseline_fuel_kg=baseline_fuel_kg,
        baseline_shore_power_kwh=baseline_kwh,
        baseline_co2_tons=baseline_co2,
        scenario_fuel_kg=scenario_fuel_kg,
        scenario_shore_power_kwh=kwh,
        scenario_co2_tons=scenario_co2,
        scenario_energy_cost_usd=scenario_cost,
    )


def calculate_berth(berth: ResolvedBerth, index: SpecIndex, econ: Economics) -> BerthLineItem:
    """Compute infrastructure and emissions of a single berth."""
    design = index.fleet_ops(berth.max_vessel_segment_key)
    if design is None:
        logger.debug("no fleet ops row for design segment %s of berth %s", berth.max_vessel_segment_key, berth.id)

    new_ops = berth.ops_enabled and not berth.ops_existing
    new_dc = berth.dc_enabled and not berth.dc_existing
    transformer = design.transformer_capex_usd if design and new_ops else 0.0
    converter = design.converter_capex_usd if design and new_ops else 0.0
    civil = design.civil_works_capex_usd if design and new_ops else 0.0

    calls = [calculate_vessel_call(c, berth.ops_existing, berth.ops_enabled, index, econ) for c in berth.vessel_calls]

    return BerthLineItem(
        berth_id=berth.id,
        berth_name=berth.berth_name,
        berth_number=berth.berth_number,
        max_vessel_segment_key=berth.max_vessel_segment_key,
        max_vessel_segment_name=(design.display_name if design and design.display_name else berth.max_vessel_segment_key),
        ops_existing=berth.ops_existing,
        dc_existing=berth.dc_existing,
        ops_enabled=berth.ops_enabled,
        dc_enabled=berth.dc_enabled,
        total_annual_calls=sum(c.annual_calls for c in calls),
        total_annual_berth_hours=sum(c.annual_berth_hours for c in calls),
        vessel_calls=calls,
        ops_power_mw=design.ops_power_mw if design else 0.0,
        ops_transformer_capex_usd=transformer,
        ops_converter_capex_usd=converter,
        ops_civil_works_capex_usd=civil,
        ops_total_capex_usd=transformer + converter + civil,
        ops_annual_opex_usd=design.annual_opex_usd if design and berth.ops_enabled else 0.0,
        dc_power_mw=design.dc_power_mw if design else 0.0,
        dc_capex_usd=design.dc_capex_usd if design and new_dc else 0.0,
        dc_annual_opex_usd=design.dc_annual_opex_usd if design and berth.dc_enabled else 0.0,
        baseline_fuel_kg=sum(c.baseline_fuel_kg for c in calls),
        baseline_shore_power_kwh=sum(c.baseline_shore_power_kwh for c in calls),
        baseline_co2_tons=sum(c.baseline_co2_tons for c in calls),
        scenario_fuel_kg=sum(c.scenario_fuel_kg for c in calls),
        scenario_shore_power_kwh=sum(c.scenario_shore_power_kwh for c in calls),
        scenario_co2_tons=sum(c.scenario_co2_tons for c in calls),
        scenario_energy_cost_usd=sum(c.scenario_energy_cost_usd for c in calls),
    )


def ops_peak_mw(ratings: Iterable[float]) -> float:
    """Coincident OPS peak of berths with active shore power.

    Berths are grouped by their OPS rating; a group of two or more berths
    at the same rating is de‑rated, a single berth is not.
    """
    groups: Dict[float, int] = defaultdict(int)
    for mw in ratings:
        if mw > 0:
            groups[mw] += 1
    total = 0.0
    for mw, n in groups.items():
        factor = BERTH_GROUP_FACTOR if n > 1 else 1.0
        total += mw * n * factor
    return total


def active_ops_ratings(items: Iterable[BerthLineItem], existing_only: bool = False) -> List[float]:
    if existing_only:
        return [b.ops_power_mw for b in items if b.ops_existing]
    return [b.ops_power_mw for b in items if b.ops_enabled]


def dc_peak_mw(items: Iterable[BerthLineItem], existing_only: bool = False) -> float:
    if existing_only:
        return sum(b.dc_power_mw for b in items if b.dc_existing)
    return sum(b.dc_power_mw for b in items if b.dc_enabled)


def calculate_berths(berths: Iterable[ResolvedBerth], index: SpecIndex, econ: Economics) -> BerthResult:
    """Compute every berth of a terminal and the terminal‑level berth totals.

    Parameters
    ----------
    berths:
        Berth definitions merged with their scenario OPS/DC toggles.
    index:
        Assumption tables; the fleet ops table provides OPS/DC ratings and
        costs per vessel segment.
    econ:
        Resolved economic values.

    Returns
    -------
    BerthResult
        Per‑berth line items (with nested vessel call items) and totals.
    """
    items = [calculate_berth(b, index, econ) for b in berths]
    totals = BerthTotals(
        total_ops_capex_usd=sum(b.ops_total_capex_usd for b in items),
        total_ops_opex_usd=sum(b.ops_annual_opex_usd for b in items),
        total_ops_peak_mw=ops_peak_mw(active_ops_ratings(items)),
        total_dc_capex_usd=sum(b.dc_capex_usd for b in items),
        total_dc_opex_usd=sum(b.dc_annual_opex_usd for b in items),
        total_dc_peak_mw=dc_peak_mw(items),
        baseline_fuel_kg=sum(b.baseline_fuel_kg for b in items),
        baseline_shore_power_kwh=sum(b.baseline_shore_power_kwh for b in items),
        baseline_co2_tons=sum(b.baseline_co2_tons for b in items),
        scenario_fuel_kg=sum(b.scenario_fuel_kg for b in items),
        scenario_shore_power_kwh=sum(b.scenario_shore_power_kwh for b in items),
        scenario_co2_tons=sum(b.scenario_co2_tons for b in items),
        scenario_energy_cost_usd=sum(b.scenario_energy_cost_usd for b in items),
    )
    return BerthResult(line_items=items, totals=totals)


def existing_berth_opex(items: Iterable[BerthLineItem], index: SpecIndex) -> float:
    """Maintenance of OPS/DC infrastructure already in place in the baseline."""
    total = 0.0
    for b in items:
        design = index.fleet_ops(b.max_vessel_segment_key)
        if design is None:
            continue
        if b.ops_existing:
            total += design.annual_opex_usd
        if b.dc_existing:
            total += design.dc_annual_opex_usd
    return total
