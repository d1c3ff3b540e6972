# MIT License
"""Coincidence (simultaneity) factors for grid peak demand.

Several units of the same equipment type rarely draw their peak power at
the same instant.  The de‑rating is a step function of the unit count,
stored as an immutable sequence of ``(threshold, factor)`` pairs sorted by
threshold and evaluated by :func:`lookup_factor`.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

StepTable = Tuple[Tuple[int, float], ...]

# Ceiling factor 0.9 at two units, used by most equipment types.
GENERAL_COINCIDENCE: StepTable = (
    (2, 0.9),
    (3, 0.7826086956521739),
    (4, 0.6923076923076923),
    (5, 0.6206896551724138),
    (6, 0.5625),
    (8, 0.4736842105263158),
    (10, 0.4090909090909091),
    (12, 0.36),
    (16, 0.2903225806451613),
    (20, 0.2432432432432433),
    (25, 0.202247191011236),
    (30, 0.1730769230769231),
    (40, 0.1343283582089552),
    (50, 0.1097560975609756),
)

# Ceiling factor 0.5: quayside cranes peak during short hoist cycles that
# seldom coincide.
LOW_COINCIDENCE: StepTable = (
    (2, 0.5),
    (3, 0.4347826086956522),
    (4, 0.3846153846153846),
    (5, 0.3448275862068966),
    (6, 0.3125),
    (8, 0.2631578947368421),
    (10, 0.2272727272727273),
    (12, 0.2),
    (16, 0.1612903225806452),
    (20, 0.1351351351351351),
    (25, 0.1123595505617978),
    (30, 0.09615384615384615),
    (40, 0.07462686567164178),
    (50, 0.06097560975609757),
)

LOW_COINCIDENCE_EQUIPMENT_TYPE = "quayside"

# Between demand groups (equipment, berths, chargers) and within a group
# of berths sharing the same OPS rating.
DEFAULT_DIVERSITY_FACTOR = 0.8
BERTH_GROUP_FACTOR = 0.8


def lookup_factor(table: Sequence[Tuple[int, float]], count: float) -> float:
    """Floor‑match ``count`` against a step table.

    Parameters
    ----------
    table:
        ``(threshold, factor)`` pairs sorted by threshold.
    count:
        Number of units.

    Returns
    -------
    float
        1.0 for ``count <= 1`` (or an empty table); otherwise the factor of
        the largest threshold not above ``count``.  Counts beyond the last
        threshold keep the last factor.
    """
    if count <= 1 or not table:
        return 1.0
    thresholds = np.array([t for t, _ in table], dtype=float)
    idx = int(np.searchsorted(thresholds, count, side="right")) - 1
    if idx < 0:
        return 1.0
    return float(table[idx][1])


def table_for(equipment_type: Optional[str]) -> StepTable:
    if equipment_type == LOW_COINCIDENCE_EQUIPMENT_TYPE:
        return LOW_COINCIDENCE
    return GENERAL_COINCIDENCE


def coincidence_factor(count: float, equipment_type: Optional[str] = None) -> float:
    return lookup_factor(table_for(equipment_type), count)
