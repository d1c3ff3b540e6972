# MIT License
"""Tabular export of a port result.

Line items are flattened into pandas DataFrames, one row per item with a
``terminal_id`` column, so that they can be written to CSV or inspected
interactively.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .results import PortResult

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "terminal_id",
    "terminal_name",
    "terminal_type",
    "annual_throughput",
    "total_baseline_diesel_liters",
    "total_scenario_diesel_liters",
    "total_baseline_kwh",
    "total_scenario_kwh",
    "total_baseline_co2_tons",
    "total_scenario_co2_tons",
    "total_baseline_opex_usd",
    "total_scenario_opex_usd",
    "total_capex_usd",
    "annual_opex_savings_usd",
    "annual_co2_savings_tons",
]


def _frame(rows: List[dict]) -> pd.DataFrame:
    return pd.DataFrame.from_records(rows) if rows else pd.DataFrame()


def terminal_frames(result: PortResult) -> Dict[str, pd.DataFrame]:
    """Flatten a port result into DataFrames.

    Parameters
    ----------
    result:
        Output of :func:`piece.calculate_port`.

    Returns
    -------
    dict
        ``equipment`` (baseline and scenario line items, tagged by a
        ``case`` column), ``chargers``, ``berths``, ``vessel_calls``,
        ``grid`` and ``summary`` (one row per terminal).
    """
    equipment, chargers, berths, calls, grid, summary = [], [], [], [], [], []
    for t in result.terminals:
        for case, eq in (("baseline", t.baseline_equipment), ("scenario", t.scenario_equipment)):
            for item in eq.line_items:
                equipment.append({"terminal_id": t.terminal_id, "case": case, **item.model_dump()})
        for item in t.chargers.line_items:
            chargers.append({"terminal_id": t.terminal_id, **item.model_dump()})
        for berth in t.berths.line_items:
            row = berth.model_dump(exclude={"vessel_calls"})
            berths.append({"terminal_id": t.terminal_id, **row})
            for call in berth.vessel_calls:
                calls.append({"terminal_id": t.terminal_id, "berth_id": berth.berth_id, **call.model_dump()})
        for case, g in (("baseline", t.baseline_grid), ("scenario", t.grid)):
            grid.append({"terminal_id": t.terminal_id, "case": case, **g.model_dump()})
        data = t.model_dump(include=set(SUMMARY_COLUMNS) - {"terminal_id"})
        summary.append({"terminal_id": t.terminal_id, **data})

    frames = {
        "equipment": _frame(equipment),
        "chargers": _frame(chargers),
        "berths": _frame(berths),
        "vessel_calls": _frame(calls),
        "grid": _frame(grid),
        "summary": pd.DataFrame(summary, columns=SUMMARY_COLUMNS),
    }
    return frames


def port_totals_frame(result: PortResult) -> pd.DataFrame:
    """Port totals as a two‑column ``metric``/``value`` table."""
    totals = result.totals.model_dump()
    return pd.DataFrame({"metric": list(totals), "value": list(totals.values())})


def write_csvs(result: PortResult, out_dir) -> Dict[str, Path]:
    """Write every export table to ``out_dir`` as ``<name>.csv``.

    Returns the written paths keyed by table name.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    frames = terminal_frames(result)
    frames["port_totals"] = port_totals_frame(result)
    paths = {}
    for name, df in frames.items():
        path = out / f"{name}.csv"
        df.to_csv(path, index=False)
        logger.info("Wrote %s (%d rows)", path, len(df))
        paths[name] = path
    return paths
