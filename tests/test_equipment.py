"""Tests for the equipment energy, emissions and cost model."""

import math

import pytest

from piece.assumptions import SpecIndex
from piece.equipment import (
    HandlingBasis,
    calculate_equipment,
    capacity_per_unit,
    convertible_counts,
    equipment_peak_mw,
    maintenance_cost,
)
from piece.params import AssumptionTables, EquipmentCategory, EquipmentSpec
from piece.resolve import EquipmentCounts


def _index(*specs):
    return SpecIndex(AssumptionTables(equipment=list(specs)))


def test_proportional_fallback_all_diesel(econ):
    spec = EquipmentSpec(equipment_key="tt", liters_per_teu=2.2)
    counts = EquipmentCounts(diesel={"tt": 10}, electric={"tt": 0})
    result = calculate_equipment(counts, 100_000, _index(spec), econ)
    item = result.line_items[0]
    assert item.handling_basis == HandlingBasis.PROPORTIONAL.value
    assert math.isclose(item.diesel_handling, 100_000)
    assert math.isclose(item.annual_diesel_liters, 220_000)
    # 220,000 L × 3.28564 kg/L
    assert math.isclose(item.annual_co2_tons, 722.8408)
    assert math.isclose(item.annual_fuel_cost_usd, 270_600)
    assert math.isclose(result.totals.total_diesel_liters, 220_000)


def test_proportional_split_by_unit_share(econ):
    spec = EquipmentSpec(equipment_key="tt", liters_per_teu=2.0, kwh_per_teu=3.0)
    counts = EquipmentCounts(diesel={"tt": 3}, electric={"tt": 1})
    item = calculate_equipment(counts, 100_000, _index(spec), econ).line_items[0]
    assert math.isclose(item.diesel_handling, 75_000)
    assert math.isclose(item.electric_handling, 25_000)
    assert math.isclose(item.annual_kwh, 75_000)
    assert math.isclose(item.annual_diesel_liters, 150_000)


def test_rated_capacity_serves_electric_first(econ):
    spec = EquipmentSpec(equipment_key="rtg", moves_per_hour=10, liters_per_teu=1.0, kwh_per_teu=1.0)
    # 10 moves/h × 8760 h × 0.85 × 1.7 TEU/move
    cap = capacity_per_unit(spec, econ)
    assert math.isclose(cap, 126_582)
    counts = EquipmentCounts(diesel={"rtg": 3}, electric={"rtg": 1})
    item = calculate_equipment(counts, 200_000, _index(spec), econ).line_items[0]
    assert item.handling_basis == HandlingBasis.RATED_CAPACITY.value
    assert math.isclose(item.electric_handling, 126_582)
    assert math.isclose(item.diesel_handling, 200_000 - 126_582)


def test_rated_capacity_never_exceeds_throughput(econ):
    spec = EquipmentSpec(equipment_key="rtg", moves_per_hour=10, liters_per_teu=1.0)
    counts = EquipmentCounts(diesel={"rtg": 2}, electric={"rtg": 5})
    item = calculate_equipment(counts, 100_000, _index(spec), econ).line_items[0]
    assert math.isclose(item.electric_handling, 100_000)
    assert item.diesel_handling == 0.0


def test_capacity_based_units_are_throughput(econ):
    spec = EquipmentSpec(
        equipment_key="reefer",
        equipment_category=EquipmentCategory.GRID_POWERED,
        teu_ratio=0.0,
        kwh_per_teu=24_090,
    )
    counts = EquipmentCounts(diesel={}, electric={"reefer": 100})
    item = calculate_equipment(counts, 1_000_000, _index(spec), econ).line_items[0]
    assert item.handling_basis == HandlingBasis.CAPACITY_BASED.value
    assert item.electric_handling == 100
    assert math.isclose(item.annual_kwh, 2_409_000)


def test_maintenance_inflates_diesel_rate(econ):
    spec = EquipmentSpec(equipment_key="ech", annual_opex_usd=7_500)
    # diesel rate 7,500 / (1 - 0.25) = 10,000
    assert math.isclose(maintenance_cost(spec, 2, 1, econ), 27_500)


def test_capex_only_for_eligible_battery_units(econ):
    battery = EquipmentSpec(equipment_key="tt", capex_usd=100.0)
    grid = EquipmentSpec(equipment_key="sts", capex_usd=1_000.0, equipment_category=EquipmentCategory.GRID_POWERED)
    counts = EquipmentCounts(
        diesel={"tt": 0, "sts": 0},
        electric={"tt": 5, "sts": 4},
        capex_eligible={"tt": 3, "sts": 4},
    )
    result = calculate_equipment(counts, 10_000, _index(battery, grid), econ)
    by_key = {i.equipment_key: i for i in result.line_items}
    assert by_key["tt"].total_capex_usd == 300.0
    assert by_key["sts"].total_capex_usd == 0.0
    assert result.totals.total_capex_usd == 300.0


def test_capex_eligible_capped_at_electric_units(econ):
    spec = EquipmentSpec(equipment_key="tt", capex_usd=100.0)
    counts = EquipmentCounts(diesel={"tt": 0}, electric={"tt": 4}, capex_eligible={"tt": 10})
    item = calculate_equipment(counts, 10_000, _index(spec), econ).line_items[0]
    assert item.capex_eligible_units == 4
    assert item.total_capex_usd == 400.0


def test_unknown_equipment_is_skipped(econ):
    counts = EquipmentCounts(diesel={"hovercraft": 3}, electric={})
    result = calculate_equipment(counts, 10_000, _index(), econ)
    assert result.line_items == []
    assert result.totals.total_opex_usd == 0.0


def test_zero_count_types_have_no_line_item(econ):
    spec = EquipmentSpec(equipment_key="tt", liters_per_teu=2.2)
    counts = EquipmentCounts(diesel={"tt": 0}, electric={"tt": 0})
    assert calculate_equipment(counts, 10_000, _index(spec), econ).line_items == []


def test_outputs_non_negative_with_reference_tables(index, econ):
    keys = [e.equipment_key for e in index.tables.equipment]
    counts = EquipmentCounts(
        diesel={k: 3 for k in keys},
        electric={k: 2 for k in keys},
        capex_eligible={k: 2 for k in keys},
    )
    result = calculate_equipment(counts, 250_000, index, econ)
    assert len(result.line_items) == len(keys)
    for item in result.line_items:
        for value in (
            item.annual_kwh,
            item.annual_diesel_liters,
            item.annual_co2_tons,
            item.annual_total_opex_usd,
            item.total_capex_usd,
        ):
            assert value >= 0
        assert item.total_capex_usd <= item.unit_capex_usd * 2


def test_equipment_peak_grid_powered_only():
    yard = EquipmentSpec(
        equipment_key="rmg", equipment_category=EquipmentCategory.GRID_POWERED, equipment_type="yard", peak_power_kw=1000
    )
    quay = EquipmentSpec(
        equipment_key="sts", equipment_category=EquipmentCategory.GRID_POWERED, equipment_type="quayside", peak_power_kw=1000
    )
    battery = EquipmentSpec(equipment_key="tt", peak_power_kw=440)
    index = _index(yard, quay, battery)
    counts = EquipmentCounts(electric={"rmg": 16, "sts": 2, "tt": 30})
    # 16 × 1000 kW × 0.29032... + 2 × 1000 kW × 0.5
    expected = (16 * 1000 * 0.2903225806451613 + 2 * 1000 * 0.5) / 1000
    assert equipment_peak_mw(counts, index) == pytest.approx(expected)


def test_convertible_counts_keeps_battery_electric_units(index):
    counts = EquipmentCounts(diesel={"tt": 5}, electric={"tt": 3, "sts": 2, "agv": 0})
    assert convertible_counts(counts, index) == {"tt": 3}
