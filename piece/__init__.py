"""Core package for the PIECE port electrification calculator.

This package compares a port's baseline configuration (diesel terminal
equipment, vessels running auxiliary engines at berth, diesel service
boats) against an electrified scenario and reports CAPEX, annual OPEX,
energy, CO₂ and payback.

Each submodule exposes pure functions that accept validated pydantic
models and return pydantic result records.  The high‑level
`calculate_port` helper in `aggregate.py` composes them into a full port
result; `export.py` flattens that result into pandas DataFrames.
"""

from .params import (
    AssumptionTables,
    BerthDefinition,
    BerthScenario,
    CalculationRequest,
    ChargerSpec,
    EquipmentCategory,
    EquipmentSpec,
    FleetOpsSpec,
    GridComponentSpec,
    PortServicesBaseline,
    PortServicesScenario,
    TerminalConfig,
    VesselCall,
)
from .aggregate import calculate_port, calculate_terminal
from .defaults import default_tables
from .results import PortResult, TerminalResult
from .export import terminal_frames, write_csvs
from .utils import calculation_fingerprint

__all__ = [
    "AssumptionTables",
    "BerthDefinition",
    "BerthScenario",
    "CalculationRequest",
    "ChargerSpec",
    "EquipmentCategory",
    "EquipmentSpec",
    "FleetOpsSpec",
    "GridComponentSpec",
    "PortServicesBaseline",
    "PortServicesScenario",
    "TerminalConfig",
    "VesselCall",
    "calculate_port",
    "calculate_terminal",
    "default_tables",
    "PortResult",
    "TerminalResult",
    "terminal_frames",
    "write_csvs",
    "calculation_fingerprint",
]
