# MIT License
"""Terminal and port aggregation.

:func:`calculate_terminal` runs the equipment, charger, berth and grid
models for one terminal and reduces them into baseline/scenario totals.
:func:`calculate_port` does the same across terminals, adds port service
boats and derives the headline economics.  Every level is a pure
reduction over the result records of the level below.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional

from .assumptions import Economics, SpecIndex, resolve_economics
from .berths import active_ops_ratings, calculate_berths, dc_peak_mw, existing_berth_opex, ops_peak_mw
from .chargers import size_chargers
from .defaults import default_tables
from .economics import co2_reduction_percent, irr, lifecycle_cashflows, npv, simple_payback
from .equipment import calculate_equipment, convertible_counts, equipment_peak_mw
from .grid import size_grid
from .params import AssumptionTables, CalculationRequest, PortServicesBaseline
from .port_services import calculate_port_services
from .resolve import ResolvedTerminal, resolve_terminal
from .results import PortResult, PortServicesResult, PortTotals, TerminalResult
from .utils import kw_to_mw

logger = logging.getLogger(__name__)


def calculate_terminal(terminal: ResolvedTerminal, index: SpecIndex, econ: Economics) -> TerminalResult:
    """Compute baseline and scenario of one terminal.

    The scenario grid is sized on the scenario peaks.  A baseline grid is
    sized the same way on the baseline configuration (grid equipment,
    existing OPS/DC berths and the chargers existing electric units
    need) so that only the incremental grid OPEX counts as a cost of
    electrification.

    Parameters
    ----------
    terminal:
        Resolved terminal configuration.
    index:
        Assumption tables.
    econ:
        Resolved economic values.

    Returns
    -------
    TerminalResult
    """
    teu = terminal.annual_teu
    baseline_eq = calculate_equipment(terminal.baseline, teu, index, econ)
    scenario_eq = calculate_equipment(terminal.scenario, teu, index, econ)
    chargers = size_chargers(
        convertible_counts(terminal.scenario, index), index.chargers, terminal.charger_overrides
    )
    baseline_chargers = size_chargers(convertible_counts(terminal.baseline, index), index.chargers)
    berths = calculate_berths(terminal.berths, index, econ)

    shore_kwh = berths.totals.scenario_shore_power_kwh
    baseline_shore_kwh = berths.totals.baseline_shore_power_kwh
    grid = size_grid(
        equipment_peak_mw(terminal.scenario, index),
        berths.totals.total_ops_peak_mw + berths.totals.total_dc_peak_mw,
        kw_to_mw(chargers.totals.total_power_kw),
        terminal.cable_length_m,
        scenario_eq.totals.total_kwh + shore_kwh,
        index,
    )
    existing_berth_peak = ops_peak_mw(active_ops_ratings(berths.line_items, existing_only=True)) + dc_peak_mw(
        berths.line_items, existing_only=True
    )
    baseline_grid = size_grid(
        equipment_peak_mw(terminal.baseline, index),
        existing_berth_peak,
        kw_to_mw(baseline_chargers.totals.total_power_kw),
        terminal.cable_length_m,
        baseline_eq.totals.total_kwh + baseline_shore_kwh,
        index,
    )

    baseline_opex = (
        baseline_eq.totals.total_opex_usd
        + baseline_chargers.totals.total_annual_opex_usd
        + existing_berth_opex(berths.line_items, index)
        + baseline_grid.grid_opex_usd
    )
    # vessel energy at berth is paid by the vessel operator
    scenario_opex = (
        scenario_eq.totals.total_opex_usd
        + chargers.totals.total_annual_opex_usd
        + berths.totals.total_ops_opex_usd
        + berths.totals.total_dc_opex_usd
        + grid.grid_opex_usd
    )
    total_capex = (
        scenario_eq.totals.total_capex_usd
        + chargers.totals.total_capex_usd
        + berths.totals.total_ops_capex_usd
        + berths.totals.total_dc_capex_usd
        + grid.total_grid_capex_usd
    )
    baseline_co2 = baseline_eq.totals.total_co2_tons + berths.totals.baseline_co2_tons
    scenario_co2 = scenario_eq.totals.total_co2_tons + berths.totals.scenario_co2_tons

    result = TerminalResult(
        terminal_id=terminal.id,
        terminal_name=terminal.name,
        terminal_type=terminal.terminal_type,
        annual_throughput=teu,
        baseline_equipment=baseline_eq,
        scenario_equipment=scenario_eq,
        chargers=chargers,
        baseline_chargers=baseline_chargers,
        berths=berths,
        grid=grid,
        baseline_grid=baseline_grid,
        total_baseline_diesel_liters=baseline_eq.totals.total_diesel_liters,
        total_scenario_diesel_liters=scenario_eq.totals.total_diesel_liters,
        total_baseline_kwh=baseline_eq.totals.total_kwh + baseline_shore_kwh,
        total_scenario_kwh=scenario_eq.totals.total_kwh + shore_kwh,
        total_baseline_co2_tons=baseline_co2,
        total_scenario_co2_tons=scenario_co2,
        total_baseline_opex_usd=baseline_opex,
        total_scenario_opex_usd=scenario_opex,
        total_capex_usd=total_capex,
        annual_opex_savings_usd=baseline_opex - scenario_opex,
        annual_co2_savings_tons=baseline_co2 - scenario_co2,
    )
    logger.info(
        "terminal %s: CAPEX %.0f USD, OPEX savings %.0f USD/yr, CO2 savings %.1f t/yr",
        terminal.id,
        total_capex,
        result.annual_opex_savings_usd,
        result.annual_co2_savings_tons,
    )
    return result


def port_totals(
    terminals: List[TerminalResult],
    services: Optional[PortServicesResult],
    econ: Economics,
) -> PortTotals:
    """Reduce terminal results and port services into port totals."""
    baseline_diesel = sum(t.total_baseline_diesel_liters for t in terminals)
    scenario_diesel = sum(t.total_scenario_diesel_liters for t in terminals)
    baseline_kwh = sum(t.total_baseline_kwh for t in terminals)
    scenario_kwh = sum(t.total_scenario_kwh for t in terminals)
    baseline_co2 = sum(t.total_baseline_co2_tons for t in terminals)
    scenario_co2 = sum(t.total_scenario_co2_tons for t in terminals)
    baseline_opex = sum(t.total_baseline_opex_usd for t in terminals)
    scenario_opex = sum(t.total_scenario_opex_usd for t in terminals)
    services_capex = 0.0
    if services is not None:
        baseline_diesel += services.baseline_diesel_liters
        scenario_diesel += services.scenario_diesel_liters
        baseline_kwh += services.baseline_kwh
        scenario_kwh += services.scenario_kwh
        baseline_co2 += services.baseline_co2_tons
        scenario_co2 += services.scenario_co2_tons
        baseline_opex += services.baseline_total_opex_usd
        scenario_opex += services.scenario_total_opex_usd
        services_capex = services.total_ops_capex_usd

    equipment_capex = sum(t.scenario_equipment.totals.total_capex_usd for t in terminals)
    charger_capex = sum(t.chargers.totals.total_capex_usd for t in terminals)
    ops_capex = sum(t.berths.totals.total_ops_capex_usd for t in terminals)
    dc_capex = sum(t.berths.totals.total_dc_capex_usd for t in terminals)
    grid_capex = sum(t.grid.total_grid_capex_usd for t in terminals)
    total_capex = equipment_capex + charger_capex + ops_capex + dc_capex + grid_capex + services_capex

    savings = baseline_opex - scenario_opex
    flows = lifecycle_cashflows(total_capex, savings, int(econ.analysis_years))
    rate_of_return = irr(flows) if total_capex > 0 else float("nan")

    return PortTotals(
        baseline_diesel_liters=baseline_diesel,
        baseline_kwh=baseline_kwh,
        baseline_co2_tons=baseline_co2,
        baseline_opex_usd=baseline_opex,
        scenario_diesel_liters=scenario_diesel,
        scenario_kwh=scenario_kwh,
        scenario_co2_tons=scenario_co2,
        scenario_opex_usd=scenario_opex,
        equipment_capex_usd=equipment_capex,
        charger_capex_usd=charger_capex,
        ops_capex_usd=ops_capex,
        dc_capex_usd=dc_capex,
        grid_capex_usd=grid_capex,
        port_services_capex_usd=services_capex,
        total_capex_usd=total_capex,
        diesel_liters_saved=baseline_diesel - scenario_diesel,
        co2_tons_saved=baseline_co2 - scenario_co2,
        co2_reduction_percent=co2_reduction_percent(baseline_co2, scenario_co2),
        annual_opex_savings_usd=savings,
        simple_payback_years=simple_payback(total_capex, savings),
        npv_usd=npv(flows, econ.discount_rate),
        irr=None if math.isnan(rate_of_return) else rate_of_return,
    )


def calculate_port(request: CalculationRequest, tables: Optional[AssumptionTables] = None) -> PortResult:
    """Run a complete baseline/scenario calculation for a port.

    Parameters
    ----------
    request:
        Validated calculation request.
    tables:
        Assumption snapshot.  Defaults to
        :func:`piece.defaults.default_tables`.

    Returns
    -------
    PortResult
        Per‑terminal results, optional port services, port totals and the
        economic values that were used.
    """
    if tables is None:
        tables = default_tables()
    econ = resolve_economics(tables.economic, request.economic_overrides)
    index = SpecIndex(tables)

    resolved = [resolve_terminal(t) for t in request.terminals]
    terminals = [calculate_terminal(r, index, econ) for r in resolved]

    services = None
    if request.port_services_baseline is not None or request.port_services_scenario is not None:
        services = calculate_port_services(
            request.port_services_baseline or PortServicesBaseline(),
            request.port_services_scenario,
            [b for r in resolved for b in r.berths],
            index,
            econ,
        )

    totals = port_totals(terminals, services, econ)
    logger.info(
        "port %s: %d terminal(s), CAPEX %.0f USD, CO2 reduction %.1f %%",
        request.port.name or "<unnamed>",
        len(terminals),
        totals.total_capex_usd,
        totals.co2_reduction_percent,
    )
    return PortResult(
        port=request.port,
        terminals=terminals,
        port_services=services,
        totals=totals,
        economic_assumptions_used=dict(econ.values),
    )
