"""Tests for charger (EVSE) sizing."""

import math

from piece.chargers import chargers_required, size_chargers
from piece.params import ChargerSpec

EVSE_TT = ChargerSpec(
    evse_key="evse_tt",
    equipment_key="tt",
    power_kw=440,
    units_per_charger=15,
    capex_usd=210_000,
    annual_opex_usd=4_200,
)


def test_chargers_required_is_ceiling_division():
    assert chargers_required(15, 15) == 1
    assert chargers_required(16, 15) == 2
    assert chargers_required(1, 9) == 1
    assert chargers_required(45, 15) == 3


def test_non_positive_ratio_means_one_charger_per_unit():
    assert chargers_required(7, 0) == 7


def test_totals_scale_with_final_count():
    result = size_chargers({"tt": 16}, [EVSE_TT])
    item = result.line_items[0]
    assert item.chargers_required == 2
    assert item.chargers_override is None
    assert item.chargers_final == 2
    assert math.isclose(item.total_power_kw, 880)
    assert math.isclose(item.total_capex_usd, 420_000)
    assert math.isclose(item.total_annual_opex_usd, 8_400)
    assert result.totals.total_chargers == 2
    assert math.isclose(result.totals.total_power_kw, 880)


def test_override_replaces_required():
    result = size_chargers({"tt": 16}, [EVSE_TT], {"evse_tt": 5})
    item = result.line_items[0]
    assert item.chargers_required == 2
    assert item.chargers_final == 5
    assert math.isclose(item.total_power_kw, 5 * 440)
    assert math.isclose(result.totals.total_capex_usd, 5 * 210_000)


def test_equipment_without_units_gets_no_charger():
    result = size_chargers({"tt": 0, "agv": 4}, [EVSE_TT])
    assert result.line_items == []
    assert result.totals.total_chargers == 0


def test_reference_chargers(tables):
    result = size_chargers({"tt": 30, "rs": 10}, tables.evse)
    by_key = {i.evse_key: i for i in result.line_items}
    assert by_key["evse_tt"].chargers_final == 2
    assert by_key["evse_rs"].chargers_final == 2
    for item in result.line_items:
        assert math.isclose(item.total_power_kw, item.power_kw * item.chargers_final)
