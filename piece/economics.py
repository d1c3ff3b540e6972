# MIT License
"""Economic metrics for an electrification scenario.

Simple payback and CO₂ reduction are the headline figures of a port
result.  Net present value and internal rate of return are computed over
a flat lifecycle: the total CAPEX is spent in year 0 and the annual OPEX
savings recur for every year of the analysis period.
"""
from __future__ import annotations

from typing import Iterable, List, Optional


def simple_payback(total_capex: float, annual_savings: float) -> Optional[float]:
    """Years needed for the OPEX savings to repay the CAPEX.

    Returns ``None`` when there are no positive savings.
    """
    if annual_savings <= 0:
        return None
    return total_capex / annual_savings


def co2_reduction_percent(baseline_co2: float, scenario_co2: float) -> float:
    """CO₂ saved as a percentage of the baseline; 0 for a zero baseline."""
    if baseline_co2 <= 0:
        return 0.0
    return (baseline_co2 - scenario_co2) / baseline_co2 * 100.0


def lifecycle_cashflows(total_capex: float, annual_savings: float, years: int) -> List[float]:
    """Cashflows from year 0 (investment) to the end of the analysis period."""
    return [-total_capex] + [annual_savings] * max(int(years), 0)


def npv(cashflows: Iterable[float], discount_rate: float) -> float:
    """Compute the net present value of a series of cashflows.

    Parameters
    ----------
    cashflows:
        Iterable of annual cashflows where the first element is the
        cashflow in year 0 (undiscounted).
    discount_rate:
        Discount rate as a decimal (e.g. 0.08 for 8%).

    Returns
    -------
    float
        Net present value of the cashflows.
    """
    return sum(cf / ((1.0 + discount_rate) ** i) for i, cf in enumerate(cashflows))


def irr(cashflows: Iterable[float]) -> float:
    """Approximate the internal rate of return of a series of cashflows.

    A bisection search is used to find the rate that yields an NPV close
    to zero.

    Returns
    -------
    float
        Approximate IRR as a decimal.  Returns ``float('nan')`` if the
        NPV does not change sign in the interval [-0.9, 1.0].
    """
    flows = list(cashflows)
    lo, hi = -0.9, 1.0
    f_lo, f_hi = npv(flows, lo), npv(flows, hi)
    if f_lo * f_hi > 0:
        return float("nan")
    for _ in range(100):
        mid = (lo + hi) / 2.0
        f_mid = npv(flows, mid)
        if abs(f_mid) < 1e-6 or (hi - lo) < 1e-9:
            return mid
        if (f_mid > 0) == (f_lo > 0):
            lo, f_lo = mid, f_mid
        else:
            hi = mid
    return (lo + hi) / 2.0
