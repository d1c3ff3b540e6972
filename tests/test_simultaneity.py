"""Tests for the coincidence step tables and the floor-match lookup."""

import math

from piece.simultaneity import (
    GENERAL_COINCIDENCE,
    LOW_COINCIDENCE,
    coincidence_factor,
    lookup_factor,
    table_for,
)


def test_single_unit_is_not_derated():
    assert lookup_factor(GENERAL_COINCIDENCE, 1) == 1.0
    assert lookup_factor(GENERAL_COINCIDENCE, 0) == 1.0
    assert lookup_factor(LOW_COINCIDENCE, 1) == 1.0


def test_exact_threshold_match():
    # 16 units hit the 16-unit entry of the general table exactly
    assert lookup_factor(GENERAL_COINCIDENCE, 16) == 0.2903225806451613
    assert coincidence_factor(16) == 0.2903225806451613


def test_floor_match_between_thresholds():
    # 7 units fall back to the 6-unit entry, 17 to the 16-unit entry
    assert lookup_factor(GENERAL_COINCIDENCE, 7) == lookup_factor(GENERAL_COINCIDENCE, 6)
    assert lookup_factor(GENERAL_COINCIDENCE, 17) == 0.2903225806451613


def test_beyond_table_clamps_to_last_entry():
    assert lookup_factor(GENERAL_COINCIDENCE, 1000) == GENERAL_COINCIDENCE[-1][1]
    assert lookup_factor(LOW_COINCIDENCE, 51) == LOW_COINCIDENCE[-1][1]


def test_factor_non_increasing_with_count():
    for table in (GENERAL_COINCIDENCE, LOW_COINCIDENCE):
        factors = [lookup_factor(table, n) for n in range(0, 120)]
        assert all(a >= b for a, b in zip(factors, factors[1:]))


def test_tables_sorted_by_threshold():
    for table in (GENERAL_COINCIDENCE, LOW_COINCIDENCE):
        thresholds = [t for t, _ in table]
        assert thresholds == sorted(thresholds)


def test_ceilings():
    assert math.isclose(GENERAL_COINCIDENCE[0][1], 0.9)
    assert math.isclose(LOW_COINCIDENCE[0][1], 0.5)


def test_quayside_equipment_uses_low_table():
    assert table_for("quayside") is LOW_COINCIDENCE
    assert table_for("yard") is GENERAL_COINCIDENCE
    assert table_for(None) is GENERAL_COINCIDENCE
    assert coincidence_factor(2, "quayside") == 0.5
    assert coincidence_factor(2, "horizontal") == 0.9
