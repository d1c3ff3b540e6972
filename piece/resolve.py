# MIT License
"""Turn a validated terminal configuration into concrete unit counts.

The request describes the scenario as *changes* (units to convert, units
to add, berth toggles).  The calculation modules work on absolute diesel
and electric counts, so this module applies the changes once, including
the conversion cap, before any formula runs.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .params import BerthDefinition, BerthScenario, TerminalConfig, VesselCall


class EquipmentCounts(BaseModel):
    """Absolute fleet per equipment key.

    ``capex_eligible`` holds converted plus newly added units only; units
    that already existed as electric never attract CAPEX.
    """

    model_config = ConfigDict(frozen=True)

    diesel: Dict[str, int] = Field(default_factory=dict)
    electric: Dict[str, int] = Field(default_factory=dict)
    capex_eligible: Dict[str, int] = Field(default_factory=dict)

    def keys(self) -> List[str]:
        ordered = list(self.diesel)
        ordered += [k for k in self.electric if k not in self.diesel]
        return ordered


class ResolvedBerth(BaseModel):
    """Berth definition merged with its scenario toggles."""

    model_config = ConfigDict(frozen=True)

    id: str
    berth_number: int
    berth_name: str
    max_vessel_segment_key: str
    ops_existing: bool
    dc_existing: bool
    ops_enabled: bool
    dc_enabled: bool
    vessel_calls: Tuple[VesselCall, ...] = ()


class ResolvedTerminal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    terminal_type: str
    annual_teu: float
    baseline: EquipmentCounts
    scenario: EquipmentCounts
    berths: Tuple[ResolvedBerth, ...] = ()
    charger_overrides: Dict[str, int] = Field(default_factory=dict)
    cable_length_m: float = 500.0


def apply_conversion(existing_diesel: int, existing_electric: int, to_convert: int, to_add: int) -> Tuple[int, int, int]:
    """Apply a convert/add change to one fleet.

    Returns
    -------
    tuple
        ``(diesel, electric, capex_eligible)`` after the change.  The
        number of converted units never exceeds ``existing_diesel``.
    """
    converted = min(to_convert, existing_diesel)
    diesel = existing_diesel - converted
    electric = existing_electric + converted + to_add
    return diesel, electric, converted + to_add


def baseline_counts(terminal: TerminalConfig) -> EquipmentCounts:
    diesel = {k: e.existing_diesel for k, e in terminal.baseline_equipment.items()}
    electric = {k: e.existing_electric for k, e in terminal.baseline_equipment.items()}
    return EquipmentCounts(diesel=diesel, electric=electric, capex_eligible={})


def scenario_counts(terminal: TerminalConfig) -> EquipmentCounts:
    diesel: Dict[str, int] = {}
    electric: Dict[str, int] = {}
    eligible: Dict[str, int] = {}
    keys = list(terminal.baseline_equipment)
    keys += [k for k in terminal.scenario_equipment if k not in terminal.baseline_equipment]
    for key in keys:
        base = terminal.baseline_equipment.get(key)
        change = terminal.scenario_equipment.get(key)
        d, e, c = apply_conversion(
            base.existing_diesel if base else 0,
            base.existing_electric if base else 0,
            change.num_to_convert if change else 0,
            change.num_to_add if change else 0,
        )
        diesel[key], electric[key], eligible[key] = d, e, c
    return EquipmentCounts(diesel=diesel, electric=electric, capex_eligible=eligible)


def merge_berths(berths: List[BerthDefinition], scenarios: List[BerthScenario]) -> Tuple[ResolvedBerth, ...]:
    """Pair each berth with its scenario toggles.

    A berth without a scenario entry keeps whatever OPS/DC
    infrastructure it already has.
    """
    by_id = {s.berth_id: s for s in scenarios}
    merged = []
    for b in berths:
        s = by_id.get(b.id)
        merged.append(
            ResolvedBerth(
                id=b.id,
                berth_number=b.berth_number,
                berth_name=b.berth_name,
                max_vessel_segment_key=b.max_vessel_segment_key,
                ops_existing=b.ops_existing,
                dc_existing=b.dc_existing,
                ops_enabled=s.ops_enabled if s else b.ops_existing,
                dc_enabled=s.dc_enabled if s else b.dc_existing,
                vessel_calls=tuple(b.vessel_calls),
            )
        )
    return tuple(merged)


def resolve_terminal(terminal: TerminalConfig) -> ResolvedTerminal:
    return ResolvedTerminal(
        id=terminal.id,
        name=terminal.name,
        terminal_type=terminal.terminal_type,
        annual_teu=terminal.annual_teu,
        baseline=baseline_counts(terminal),
        scenario=scenario_counts(terminal),
        berths=merge_berths(terminal.berths, terminal.berth_scenarios),
        charger_overrides=dict(terminal.charger_overrides),
        cable_length_m=terminal.cable_length_m,
    )
