# MIT License
"""Charging infrastructure (EVSE) sizing for battery‑powered equipment.

Several units share one charger (``units_per_charger``), so the number of
chargers is a ceiling division of the electric fleet.  A manual override
replaces the computed number; power, CAPEX and OPEX scale linearly with
the final charger count.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Mapping, Optional

from .params import ChargerSpec
from .results import ChargerLineItem, ChargerResult, ChargerTotals


def chargers_required(equipment_count: int, units_per_charger: float) -> int:
    ratio = units_per_charger if units_per_charger > 0 else 1.0
    return int(math.ceil(equipment_count / ratio))


def size_chargers(
    equipment_counts: Mapping[str, int],
    chargers: Iterable[ChargerSpec],
    overrides: Optional[Mapping[str, int]] = None,
) -> ChargerResult:
    """Size chargers for the given electric equipment counts.

    Parameters
    ----------
    equipment_counts:
        Electric units per equipment key.  Only battery‑powered equipment
        should be passed in.
    chargers:
        Charger table rows; a row whose equipment has no units is skipped.
    overrides:
        Optional manual charger counts keyed by ``evse_key``.

    Returns
    -------
    ChargerResult
        Line items and totals.
    """
    overrides = overrides or {}
    items: List[ChargerLineItem] = []
    for evse in chargers:
        count = equipment_counts.get(evse.equipment_key, 0)
        if count <= 0:
            continue
        required = chargers_required(count, evse.units_per_charger)
        override = overrides.get(evse.evse_key)
        final = override if override is not None else required
        items.append(
            ChargerLineItem(
                evse_key=evse.evse_key,
                display_name=evse.display_name or evse.evse_key,
                equipment_key=evse.equipment_key,
                equipment_count=count,
                units_per_charger=evse.units_per_charger,
                chargers_required=required,
                chargers_override=override,
                chargers_final=final,
                power_kw=evse.power_kw,
                total_power_kw=evse.power_kw * final,
                capex_usd=evse.capex_usd,
                total_capex_usd=evse.capex_usd * final,
                annual_opex_usd=evse.annual_opex_usd,
                total_annual_opex_usd=evse.annual_opex_usd * final,
            )
        )
    totals = ChargerTotals(
        total_chargers=sum(i.chargers_final for i in items),
        total_power_kw=sum(i.total_power_kw for i in items),
        total_capex_usd=sum(i.total_capex_usd for i in items),
        total_annual_opex_usd=sum(i.total_annual_opex_usd for i in items),
    )
    return ChargerResult(line_items=items, totals=totals)
