"""Tests for the tug and pilot boat model."""

import math

import pytest

from piece.assumptions import SpecIndex
from piece.params import AssumptionTables, FleetOpsSpec, PortServicesBaseline, PortServicesScenario, VesselCall
from piece.port_services import AVAILABLE_HOURS_PER_BOAT, calculate_port_services
from piece.resolve import ResolvedBerth

TUG = FleetOpsSpec(
    vessel_segment_key="tug_70bp",
    transformer_capex_usd=250_000,
    converter_capex_usd=200_000,
    civil_works_capex_usd=100_000,
    annual_opex_usd=10_000,
    fuel_rate_l_per_hour=150,
    avg_hours_per_call=3,
)
PILOT = FleetOpsSpec(
    vessel_segment_key="pilot_boat",
    transformer_capex_usd=80_000,
    converter_capex_usd=60_000,
    civil_works_capex_usd=40_000,
    annual_opex_usd=3_000,
    fuel_rate_l_per_hour=40,
    avg_hours_per_call=2,
)
VESSEL = FleetOpsSpec(vessel_segment_key="container_6_10k", tugs_per_call=2, pilots_per_call=1)


def _index(tug=TUG):
    return SpecIndex(AssumptionTables(fleet_ops=[VESSEL, tug, PILOT]))


def _berths(calls=500):
    return [
        ResolvedBerth(
            id="b1",
            berth_number=1,
            berth_name="",
            max_vessel_segment_key="container_6_10k",
            ops_existing=False,
            dc_existing=False,
            ops_enabled=False,
            dc_enabled=False,
            vessel_calls=(VesselCall(vessel_segment_key="container_6_10k", annual_calls=calls, avg_berth_hours=24),),
        )
    ]


def test_available_hours():
    assert math.isclose(AVAILABLE_HOURS_PER_BOAT, 5256)


def test_demand_and_minimum_fleet(econ):
    baseline = PortServicesBaseline(tugs_diesel=2, pilot_boats_diesel=1)
    result = calculate_port_services(baseline, None, _berths(), _index(), econ)
    assert math.isclose(result.total_tug_trips, 1_000)
    assert math.isclose(result.total_tug_hours, 3_000)
    assert math.isclose(result.total_pilot_trips, 500)
    assert math.isclose(result.total_pilot_hours, 1_000)
    # hours need one tug, but a single call needs two
    assert result.max_tugs_per_call == 2
    assert result.min_tugs_required == 2
    assert result.min_pilots_required == 1


def test_minimum_fleet_driven_by_hours(econ):
    baseline = PortServicesBaseline(tugs_diesel=4)
    result = calculate_port_services(baseline, None, _berths(calls=2_000), _index(), econ)
    # 12,000 h / 5,256 h per boat
    assert result.min_tugs_required == 3


def test_all_diesel_baseline(econ):
    baseline = PortServicesBaseline(tugs_diesel=2, pilot_boats_diesel=1)
    result = calculate_port_services(baseline, None, _berths(), _index(), econ)
    assert math.isclose(result.baseline_tug_fuel_liters, 450_000)
    assert math.isclose(result.baseline_pilot_fuel_liters, 40_000)
    assert result.baseline_kwh == 0.0
    assert result.baseline_co2_tons == pytest.approx(490_000 * 3.28564 / 1000)
    # no scenario: unchanged fleet
    assert result.scenario_co2_tons == result.baseline_co2_tons
    assert result.total_ops_capex_usd == 0.0


def test_conversion_splits_hours_by_fleet_share(econ):
    baseline = PortServicesBaseline(tugs_diesel=2, pilot_boats_diesel=1)
    scenario = PortServicesScenario(tugs_to_convert=1)
    result = calculate_port_services(baseline, scenario, _berths(), _index(), econ)
    assert result.scenario_tugs_diesel == 1
    assert result.scenario_tugs_electric == 1
    assert math.isclose(result.scenario_tug_fuel_liters, 225_000)
    # electric half: 1,500 h × 150 L/h of work-equivalent energy
    assert result.scenario_tug_energy_kwh == pytest.approx(225_000 * 9.7 * 0.45 / 0.95)
    assert math.isclose(result.tug_ops_capex_usd, 550_000)
    assert math.isclose(result.scenario_ops_maintenance_usd, 10_000)
    assert result.scenario_co2_tons < result.baseline_co2_tons


def test_conversion_capped_at_diesel_fleet(econ):
    baseline = PortServicesBaseline(tugs_diesel=2)
    scenario = PortServicesScenario(tugs_to_convert=5, pilot_boats_to_add=1)
    result = calculate_port_services(baseline, scenario, _berths(), _index(), econ)
    assert result.scenario_tugs_diesel == 0
    assert result.scenario_tugs_electric == 2
    assert math.isclose(result.tug_ops_capex_usd, 2 * 550_000)
    assert math.isclose(result.pilot_ops_capex_usd, 180_000)
    assert math.isclose(result.total_ops_capex_usd, 1_280_000)


def test_hours_per_call_override(econ):
    baseline = PortServicesBaseline(tugs_diesel=1, tug_avg_hours_per_call=1.0)
    result = calculate_port_services(baseline, None, _berths(), _index(), econ)
    assert math.isclose(result.total_tug_hours, 1_000)


def test_default_hours_per_call(econ):
    tug = TUG.model_copy(update={"avg_hours_per_call": 0.0})
    result = calculate_port_services(PortServicesBaseline(tugs_diesel=1), None, _berths(), _index(tug), econ)
    assert math.isclose(result.total_tug_hours, 4_000)


def test_empty_fleet_consumes_nothing(econ):
    result = calculate_port_services(PortServicesBaseline(), None, _berths(), _index(), econ)
    assert result.total_tug_hours > 0
    assert result.baseline_diesel_liters == 0.0
    assert result.baseline_total_opex_usd == 0.0
