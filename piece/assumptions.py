# MIT License
"""Economic defaults and key‑indexed access to the assumption tables.

The engine reads economic values through a single resolved
:class:`Economics` record and table rows through a :class:`SpecIndex`.
Both are built once per calculation so that no formula has to deal with
missing keys or optional overrides.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .params import (
    AssumptionTables,
    ChargerSpec,
    EconomicAssumption,
    EquipmentSpec,
    FleetOpsSpec,
    GridComponentSpec,
)

logger = logging.getLogger(__name__)

# Fallback value for every economic key the engine reads.
ECONOMIC_DEFAULTS: Dict[str, float] = {
    "diesel_price": 1.23,  # USD/L
    "electricity_price": 0.12,  # USD/kWh
    "diesel_ef_wtw": 3.28564,  # kg CO2e/L, well-to-wheel
    "grid_ef": 0.0,  # kg CO2e/kWh
    "maintenance_saving": 0.25,  # fraction saved by electric units
    "utilization_factor": 0.85,
    "teu_per_move": 1.7,
    "engine_efficiency": 0.45,
    "hfo_ef_wtw": 3.6567,  # kg CO2e/kg HFO, well-to-wheel
    "hfo_energy_density": 11.1667,  # kWh/kg (40.2 MJ/kg)
    "diesel_energy_density": 9.7,  # kWh/L
    "motor_efficiency": 0.95,
    "discount_rate": 0.08,
    "analysis_years": 20.0,
}

SERVICE_SEGMENT_TUG = "tug_70bp"
SERVICE_SEGMENT_PILOT = "pilot_boat"


class Economics(BaseModel):
    """Economic values used by one calculation, fully materialised."""

    model_config = ConfigDict(frozen=True)

    diesel_price: float
    electricity_price: float
    diesel_ef_wtw: float
    grid_ef: float
    maintenance_saving: float
    utilization_factor: float
    teu_per_move: float
    engine_efficiency: float
    hfo_ef_wtw: float
    hfo_energy_density: float
    diesel_energy_density: float
    motor_efficiency: float
    discount_rate: float
    analysis_years: float
    values: Dict[str, float]

    @property
    def aux_engine_t_per_mwh(self) -> float:
        """CO2e emitted per MWh of auxiliary power generated on board (t/MWh).

        One kg of HFO yields ``hfo_energy_density * engine_efficiency`` kWh
        of electrical output, so kg CO2e per kWh equals tonnes per MWh.
        """
        useful_kwh_per_kg = self.hfo_energy_density * self.engine_efficiency
        if useful_kwh_per_kg <= 0:
            return 0.0
        return self.hfo_ef_wtw / useful_kwh_per_kg

    @property
    def aux_engine_kg_fuel_per_mwh(self) -> float:
        useful_kwh_per_kg = self.hfo_energy_density * self.engine_efficiency
        if useful_kwh_per_kg <= 0:
            return 0.0
        return 1000.0 / useful_kwh_per_kg

    @property
    def electric_kwh_per_diesel_liter(self) -> float:
        """Electric energy doing the same work as one litre of diesel."""
        if self.motor_efficiency <= 0:
            return 0.0
        return self.diesel_energy_density * self.engine_efficiency / self.motor_efficiency


def resolve_economics(
    rows: Iterable[EconomicAssumption],
    overrides: Optional[Mapping[str, float]] = None,
) -> Economics:
    """Merge table rows, request overrides and documented defaults.

    Parameters
    ----------
    rows:
        Economic assumption rows from the assumption tables.
    overrides:
        Optional per‑key values taking precedence over the table.

    Returns
    -------
    Economics
        Resolved values.  ``values`` holds every key that was used
        (table keys, override keys and defaults) and is echoed in the
        port result.
    """
    overrides = dict(overrides or {})
    values: Dict[str, float] = {}
    for row in rows:
        values[row.assumption_key] = float(overrides.get(row.assumption_key, row.value))
    for key, value in overrides.items():
        values.setdefault(key, float(value))
    for key, default in ECONOMIC_DEFAULTS.items():
        if key not in values:
            logger.debug("economic assumption %s missing, using default %s", key, default)
            values[key] = default
    typed = {key: values[key] for key in ECONOMIC_DEFAULTS}
    return Economics(values=values, **typed)


class SpecIndex:
    """Key‑indexed, read‑only view over :class:`AssumptionTables`.

    Every getter returns ``None`` for an unknown key so that callers can
    skip the row and contribute zero.
    """

    def __init__(self, tables: AssumptionTables):
        self.tables = tables
        self._equipment = {e.equipment_key: e for e in tables.equipment}
        self._fleet_ops = {f.vessel_segment_key: f for f in tables.fleet_ops}
        self._grid = {g.component_key: g for g in tables.grid}

    @property
    def chargers(self) -> Iterable[ChargerSpec]:
        return self.tables.evse

    def equipment(self, key: str) -> Optional[EquipmentSpec]:
        return self._equipment.get(key)

    def fleet_ops(self, segment_key: str) -> Optional[FleetOpsSpec]:
        return self._fleet_ops.get(segment_key)

    def grid(self, component_key: str) -> Optional[GridComponentSpec]:
        return self._grid.get(component_key)

    def simultaneity_row(self) -> Optional[GridComponentSpec]:
        for row in self.tables.grid:
            if "simultaneity" in row.component_key:
                return row
        return None
