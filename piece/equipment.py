# MIT License
"""Terminal equipment energy, emissions and cost model.

For every equipment type with at least one unit the annual throughput is
split between the diesel and the electric part of the fleet, then turned
into diesel litres, kWh, CO₂ and cost.  Three handling bases exist:

* capacity‑based devices (``teu_ratio == 0``, e.g. reefer plugs) where
  each unit already denotes one throughput unit,
* rated equipment with a known ``moves_per_hour``, where electric units
  are served first and diesel units cover what is left,
* everything else, where throughput is split by unit‑count share.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Tuple

from .assumptions import Economics, SpecIndex
from .params import EquipmentCategory, EquipmentSpec
from .resolve import EquipmentCounts
from .results import EquipmentLineItem, EquipmentResult, EquipmentTotals
from .simultaneity import coincidence_factor
from .utils import kg_to_tonnes, kw_to_mw

logger = logging.getLogger(__name__)

HOURS_PER_YEAR = 8760


class HandlingBasis(str, Enum):
    CAPACITY_BASED = "capacity_based"
    RATED_CAPACITY = "rated_capacity"
    PROPORTIONAL = "proportional"


def handling_basis(spec: EquipmentSpec) -> HandlingBasis:
    if spec.teu_ratio == 0:
        return HandlingBasis.CAPACITY_BASED
    if spec.moves_per_hour:
        return HandlingBasis.RATED_CAPACITY
    return HandlingBasis.PROPORTIONAL


def capacity_per_unit(spec: EquipmentSpec, econ: Economics) -> float:
    """Annual throughput one unit can handle (TEU/yr)."""
    return (spec.moves_per_hour or 0.0) * HOURS_PER_YEAR * econ.utilization_factor * econ.teu_per_move


def split_handling(
    spec: EquipmentSpec,
    diesel_units: int,
    electric_units: int,
    annual_throughput: float,
    econ: Economics,
) -> Tuple[HandlingBasis, float, float]:
    """Split throughput between the diesel and electric units of one type.

    Returns
    -------
    tuple
        ``(basis, diesel_handling, electric_handling)``.
    """
    basis = handling_basis(spec)
    if basis is HandlingBasis.CAPACITY_BASED:
        return basis, float(diesel_units), float(electric_units)
    if basis is HandlingBasis.RATED_CAPACITY:
        cap = capacity_per_unit(spec, econ)
        electric = min(electric_units * cap, annual_throughput)
        diesel = min(diesel_units * cap, annual_throughput - electric)
        return basis, max(diesel, 0.0), max(electric, 0.0)
    total = diesel_units + electric_units
    if total <= 0:
        return basis, 0.0, 0.0
    return basis, annual_throughput * diesel_units / total, annual_throughput * electric_units / total


def maintenance_cost(spec: EquipmentSpec, diesel_units: int, electric_units: int, econ: Economics) -> float:
    """Annual maintenance for a mixed fleet.

    The table OPEX is the electric rate; diesel units cost
    ``opex / (1 - maintenance_saving)``.
    """
    saving = econ.maintenance_saving
    diesel_rate = spec.annual_opex_usd / (1.0 - saving) if saving < 1.0 else spec.annual_opex_usd
    return electric_units * spec.annual_opex_usd + diesel_units * diesel_rate


def equipment_totals(items: List[EquipmentLineItem]) -> EquipmentTotals:
    return EquipmentTotals(
        total_diesel_liters=sum(i.annual_diesel_liters for i in items),
        total_kwh=sum(i.annual_kwh for i in items),
        total_co2_tons=sum(i.annual_co2_tons for i in items),
        total_opex_usd=sum(i.annual_total_opex_usd for i in items),
        total_capex_usd=sum(i.total_capex_usd for i in items),
    )


def calculate_equipment(
    counts: EquipmentCounts,
    annual_throughput: float,
    index: SpecIndex,
    econ: Economics,
) -> EquipmentResult:
    """Compute line items and totals for one fleet (baseline or scenario).

    Parameters
    ----------
    counts:
        Diesel, electric and CAPEX‑eligible units per equipment key.
        Baseline fleets carry no CAPEX‑eligible units.
    annual_throughput:
        Terminal throughput (TEU, passengers or CEU per year).
    index:
        Assumption tables.  Keys missing from the equipment table are
        skipped.
    econ:
        Resolved economic values.

    Returns
    -------
    EquipmentResult
        One line item per equipment type with units, plus totals.
    """
    items: List[EquipmentLineItem] = []
    for key in counts.keys():
        diesel_units = counts.diesel.get(key, 0)
        electric_units = counts.electric.get(key, 0)
        if diesel_units + electric_units <= 0:
            continue
        spec = index.equipment(key)
        if spec is None:
            logger.debug("no equipment spec for %s, skipped", key)
            continue

        basis, diesel_handling, electric_handling = split_handling(
            spec, diesel_units, electric_units, annual_throughput, econ
        )
        liters = spec.liters_per_teu * diesel_handling
        kwh = spec.kwh_per_teu * electric_handling
        co2_t = kg_to_tonnes(liters * econ.diesel_ef_wtw + kwh * econ.grid_ef)

        fuel_cost = liters * econ.diesel_price
        energy_cost = kwh * econ.electricity_price
        maintenance = maintenance_cost(spec, diesel_units, electric_units, econ)
        opex = fuel_cost + energy_cost + maintenance

        eligible = min(counts.capex_eligible.get(key, 0), electric_units)
        if spec.equipment_category is EquipmentCategory.BATTERY_POWERED:
            unit_capex = spec.capex_usd
        else:
            unit_capex = 0.0
        capex = unit_capex * eligible

        items.append(
            EquipmentLineItem(
                equipment_key=key,
                display_name=spec.display_name or key,
                equipment_category=spec.equipment_category.value,
                equipment_type=spec.equipment_type,
                handling_basis=basis.value,
                diesel_units=diesel_units,
                electric_units=electric_units,
                capex_eligible_units=eligible,
                diesel_handling=diesel_handling,
                electric_handling=electric_handling,
                kwh_per_teu=spec.kwh_per_teu,
                liters_per_teu=spec.liters_per_teu,
                teu_ratio=spec.teu_ratio,
                annual_kwh=kwh,
                annual_diesel_liters=liters,
                annual_co2_tons=co2_t,
                annual_fuel_cost_usd=fuel_cost,
                annual_energy_cost_usd=energy_cost,
                annual_maintenance_usd=maintenance,
                annual_total_opex_usd=opex,
                unit_capex_usd=unit_capex,
                total_capex_usd=capex,
                lifespan_years=spec.lifespan_years,
            )
        )
    return EquipmentResult(line_items=items, totals=equipment_totals(items))


def equipment_peak_mw(counts: EquipmentCounts, index: SpecIndex) -> float:
    """Coincident peak demand of grid‑powered equipment (MW).

    Battery‑powered units draw from the grid through their chargers and
    are counted there.
    """
    peak_kw = 0.0
    for key, n in counts.electric.items():
        if n <= 0:
            continue
        spec = index.equipment(key)
        if spec is None or spec.equipment_category is not EquipmentCategory.GRID_POWERED:
            continue
        peak_kw += spec.peak_power_kw * n * coincidence_factor(n, spec.equipment_type)
    return kw_to_mw(peak_kw)


def convertible_counts(counts: EquipmentCounts, index: SpecIndex) -> dict:
    """Electric units of battery‑powered types, the input of charger sizing."""
    out = {}
    for key, n in counts.electric.items():
        spec = index.equipment(key)
        if spec is not None and spec.equipment_category is EquipmentCategory.BATTERY_POWERED and n > 0:
            out[key] = n
    return out
