# MIT License
"""Grid connection sizing: peak demand, substation, cabling and grid OPEX.

Three demand groups feed the connection: grid‑powered equipment, the
berth side (OPS and DC charging for vessels) and equipment chargers.
When at least two groups draw power a diversity factor is applied to the
gross peak.  The transformer is rated with headroom for growth and a
safety margin; substation and cable tiers follow the net peak.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from .assumptions import SpecIndex
from .results import GridResult
from .simultaneity import DEFAULT_DIVERSITY_FACTOR

logger = logging.getLogger(__name__)

GROWTH_FACTOR = 1.2
SAFETY_MARGIN = 1.2
CIVIL_WORKS_SHARE = 0.25
SELF_CONSUMPTION_SHARE = 0.07

# (upper bound of net peak in MW, component key, fallback rate)
SUBSTATION_TIERS = (
    (10.0, "substation_11kv", 200_000.0),
    (30.0, "substation_33kv", 230_000.0),
    (float("inf"), "substation_110kv", 240_000.0),
)
CABLE_TIERS = (
    (20.0, "cable_11kv_3core", 90.0),
    (float("inf"), "cable_33kv_3x1core", 150.0),
)


def diversity_factor(group_peaks_mw, index: Optional[SpecIndex] = None) -> Tuple[float, int]:
    """Between‑groups diversity factor and the number of active groups."""
    active = sum(1 for p in group_peaks_mw if p > 0)
    if active < 2:
        return 1.0, active
    row = index.simultaneity_row() if index is not None else None
    if row is not None and row.simultaneity_factor is not None:
        return row.simultaneity_factor, active
    return DEFAULT_DIVERSITY_FACTOR, active


def _tier(tiers, net_peak_mw: float, index: SpecIndex, attr: str) -> Tuple[str, float]:
    _, key, fallback = next((t for t in tiers if net_peak_mw <= t[0]), tiers[-1])
    row = index.grid(key)
    rate = getattr(row, attr) if row is not None else None
    if rate is None:
        logger.debug("grid component %s missing, using %s", key, fallback)
        rate = fallback
    return key, rate


def substation_tier(net_peak_mw: float, index: SpecIndex) -> Tuple[str, float]:
    return _tier(SUBSTATION_TIERS, net_peak_mw, index, "cost_per_mw")


def cable_tier(net_peak_mw: float, index: SpecIndex) -> Tuple[str, float]:
    return _tier(CABLE_TIERS, net_peak_mw, index, "cost_per_meter")


def grid_opex_usd(transformer_rating_mw: float) -> float:
    """Annual grid OPEX: ``(2 × rating + 200) / 1000`` million USD."""
    return (2.0 * transformer_rating_mw + 200.0) / 1000.0 * 1_000_000.0


def size_grid(
    equipment_peak_mw: float,
    ops_peak_mw: float,
    evse_peak_mw: float,
    cable_length_m: float,
    annual_kwh: float,
    index: SpecIndex,
) -> GridResult:
    """Size the grid connection of one terminal.

    Parameters
    ----------
    equipment_peak_mw:
        Coincident peak of grid‑powered equipment.
    ops_peak_mw:
        Berth‑side peak, shore power plus DC vessel charging.
    evse_peak_mw:
        Installed charger power; no coincidence de‑rating.
    cable_length_m:
        Cable run from the grid connection point.
    annual_kwh:
        Electricity handled per year, used for the informational
        self‑consumption figure.
    index:
        Assumption tables; grid component rows give tier rates and the
        diversity factor.

    Returns
    -------
    GridResult
        A terminal without any demand builds nothing and has zero CAPEX;
        its grid OPEX is the fixed base charge ``grid_opex_usd(0)``, so the
        baseline and scenario grids differ only by the incremental cost.
    """
    gross = equipment_peak_mw + ops_peak_mw + evse_peak_mw
    factor, active = diversity_factor((equipment_peak_mw, ops_peak_mw, evse_peak_mw), index)
    net = gross * factor
    rating = net * GROWTH_FACTOR * SAFETY_MARGIN

    substation_type, cost_per_mw = substation_tier(net, index)
    cable_type, cost_per_meter = cable_tier(net, index)
    if net > 0:
        material = cost_per_mw * rating
        civil = CIVIL_WORKS_SHARE * material
        cable = cost_per_meter * cable_length_m
    else:
        material = civil = cable = 0.0
    opex = grid_opex_usd(rating)

    return GridResult(
        total_equipment_peak_mw=equipment_peak_mw,
        total_ops_peak_mw=ops_peak_mw,
        total_evse_peak_mw=evse_peak_mw,
        gross_peak_demand_mw=gross,
        active_demand_groups=active,
        simultaneity_factor=factor,
        net_peak_demand_mw=net,
        transformer_rating_mw=rating,
        substation_type=substation_type,
        substation_cost_per_mw=cost_per_mw,
        substation_material_capex_usd=material,
        civil_works_capex_usd=civil,
        substation_capex_usd=material + civil,
        cable_length_m=cable_length_m,
        cable_type=cable_type,
        cable_cost_per_meter=cost_per_meter,
        cable_capex_usd=cable,
        grid_opex_usd=opex,
        grid_consumption_kwh=SELF_CONSUMPTION_SHARE * annual_kwh,
        total_grid_capex_usd=material + civil + cable,
    )
