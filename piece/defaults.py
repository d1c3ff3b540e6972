# MIT License
"""Reference assumption tables.

These values reproduce the reference data set the calculator ships with:
equipment intensities and costs, charger ratios, shore power ratings by
vessel segment, grid component rates and the economic defaults.  A
deployment normally loads its own snapshot; :func:`default_tables` is the
fallback used by the command line runner and the tests.
"""
from __future__ import annotations

from .assumptions import ECONOMIC_DEFAULTS
from .params import (
    AssumptionTables,
    ChargerSpec,
    EconomicAssumption,
    EquipmentCategory,
    EquipmentSpec,
    FleetOpsSpec,
    GridComponentSpec,
)

GRID = EquipmentCategory.GRID_POWERED
BATTERY = EquipmentCategory.BATTERY_POWERED

# key, name, category, type, capex, opex, peak kW, kWh/TEU, L/TEU, moves/h, lifespan
EQUIPMENT_ROWS = (
    ("mhc", "Mobile Harbor Crane", GRID, "quayside", 6_875_000, 137_500, 750, 5.5, 1.6, 25, 25),
    ("sts", "Ship-to-Shore Crane", GRID, "quayside", 12_300_000, 246_000, 1100, 9.3, 0.0, 30, 25),
    ("rmg", "Rail Mounted Gantry", GRID, "yard", 2_520_000, 75_600, 400, 2.7, 0.0, 22, 25),
    ("rtg", "Rubber Tired Gantry", GRID, "yard", 2_970_000, 89_100, 300, 2.8, 1.3, 20, 20),
    ("asc", "Automated Stacking Crane", GRID, "yard", 4_000_000, 120_000, 330, 2.5, 0.0, 20, 25),
    ("agv", "Automated Guided Vehicle", BATTERY, "horizontal", 750_000, 22_500, 200, 2.5, 0.9, None, 12),
    ("tt", "Terminal Tractor", BATTERY, "horizontal", 165_000, 8_250, 440, 2.2, 2.2, None, 10),
    ("ech", "Empty Container Handler", BATTERY, "yard", 150_000, 7_500, 220, 1.8, 1.2, None, 12),
    ("rs", "Reach Stacker", BATTERY, "yard", 150_000, 7_500, 840, 2.8, 1.5, None, 12),
    ("sc", "Straddle Carrier", BATTERY, "yard", 400_000, 20_000, 360, 3.5, 1.9, None, 15),
)

# Reefer plugs: one unit is one plug, 5 kW at 55 % duty all year.
REEFER = EquipmentSpec(
    equipment_key="reefer",
    display_name="Reefer Connection",
    equipment_category=GRID,
    equipment_type="yard",
    capex_usd=0.0,
    annual_opex_usd=50.0,
    peak_power_kw=5.0,
    kwh_per_teu=5.0 * 8760 * 0.55,
    liters_per_teu=0.0,
    teu_ratio=0.0,
    lifespan_years=15,
)

# evse key, equipment, name, kW, units per charger, capex, opex
EVSE_ROWS = (
    ("evse_agv", "agv", "AGV charger", 200, 15, 110_000, 2_200),
    ("evse_tt", "tt", "Terminal tractor charger", 440, 15, 210_000, 4_200),
    ("evse_ech", "ech", "ECH charger", 220, 5, 120_000, 2_400),
    ("evse_rs", "rs", "Reach stacker charger", 840, 9, 400_000, 8_000),
    ("evse_sc", "sc", "Straddle carrier charger", 360, 9, 180_000, 3_600),
)

# segment, name, OPS MW, transformer, converter, civil, tugs/call, pilots/call
VESSEL_ROWS = (
    ("container_0_3k", "Container 0-3K TEU", 2.0, 350_000, 280_000, 124_000, 1, 1),
    ("container_3_6k", "Container 3-6K TEU", 5.0, 603_000, 483_000, 214_000, 2, 1),
    ("container_6_10k", "Container 6-10K TEU", 6.0, 688_000, 550_000, 244_000, 2, 1),
    ("container_10k_plus", "Container 10K+ TEU", 7.5, 815_000, 652_000, 288_000, 3, 1),
    ("cruise_0_25k", "Cruise 0-25K GT", 4.6, 570_000, 456_000, 201_000, 1, 1),
    ("cruise_25_100k", "Cruise 25-100K GT", 12.0, 1_195_000, 956_000, 423_000, 2, 1),
    ("cruise_100_175k", "Cruise 100-175K GT", 20.0, 1_871_000, 1_497_000, 662_000, 2, 1),
    ("cruise_175k_plus", "Cruise 175K+ GT", 26.0, 2_378_000, 1_902_000, 842_000, 3, 1),
    ("roro_0_4k", "RoRo 0-4K CEU", 2.0, 350_000, 280_000, 124_000, 1, 1),
    ("roro_4_7k", "RoRo 4-7K CEU", 4.0, 519_000, 415_000, 184_000, 2, 1),
    ("roro_7k_plus", "RoRo 7K+ CEU", 6.5, 730_000, 584_000, 259_000, 2, 1),
)
OPS_ANNUAL_OPEX_USD = 10_000.0
DC_POWER_MW = 2.0
DC_CAPEX_USD = 500_000.0
DC_ANNUAL_OPEX_USD = 10_000.0

SERVICE_ROWS = (
    FleetOpsSpec(
        vessel_segment_key="tug_70bp",
        display_name="Harbour tug (70 t bollard pull)",
        transformer_capex_usd=250_000,
        converter_capex_usd=200_000,
        civil_works_capex_usd=100_000,
        annual_opex_usd=10_000,
        fuel_rate_l_per_hour=150.0,
        avg_hours_per_call=3.0,
    ),
    FleetOpsSpec(
        vessel_segment_key="pilot_boat",
        display_name="Pilot boat",
        transformer_capex_usd=80_000,
        converter_capex_usd=60_000,
        civil_works_capex_usd=40_000,
        annual_opex_usd=3_000,
        fuel_rate_l_per_hour=40.0,
        avg_hours_per_call=2.0,
    ),
)

GRID_ROWS = (
    GridComponentSpec(component_key="substation_11kv", display_name="Substation 11 kV", cost_per_mw=200_000, voltage_kv=11),
    GridComponentSpec(component_key="substation_33kv", display_name="Substation 33 kV", cost_per_mw=230_000, voltage_kv=33),
    GridComponentSpec(component_key="substation_110kv", display_name="Substation 110 kV", cost_per_mw=240_000, voltage_kv=110),
    GridComponentSpec(component_key="cable_11kv_3core", display_name="Cable 11 kV 3-core", cost_per_meter=90, voltage_kv=11),
    GridComponentSpec(component_key="cable_33kv_3x1core", display_name="Cable 33 kV 3x1-core", cost_per_meter=150, voltage_kv=33),
    GridComponentSpec(component_key="simultaneity_factor", display_name="Simultaneity between demand groups", simultaneity_factor=0.8),
)

ECONOMIC_UNITS = {
    "diesel_price": "USD/L",
    "electricity_price": "USD/kWh",
    "diesel_ef_wtw": "kg CO2e/L",
    "grid_ef": "kg CO2e/kWh",
    "hfo_ef_wtw": "kg CO2e/kg",
    "hfo_energy_density": "kWh/kg",
    "diesel_energy_density": "kWh/L",
    "analysis_years": "years",
}


def default_equipment():
    rows = [
        EquipmentSpec(
            equipment_key=key,
            display_name=name,
            equipment_category=category,
            equipment_type=etype,
            capex_usd=capex,
            annual_opex_usd=opex,
            peak_power_kw=peak,
            kwh_per_teu=kwh,
            liters_per_teu=liters,
            moves_per_hour=mph,
            lifespan_years=life,
        )
        for key, name, category, etype, capex, opex, peak, kwh, liters, mph, life in EQUIPMENT_ROWS
    ]
    rows.append(REEFER)
    return rows


def default_fleet_ops():
    rows = [
        FleetOpsSpec(
            vessel_segment_key=key,
            display_name=name,
            ops_power_mw=mw,
            transformer_capex_usd=transformer,
            converter_capex_usd=converter,
            civil_works_capex_usd=civil,
            annual_opex_usd=OPS_ANNUAL_OPEX_USD,
            dc_power_mw=DC_POWER_MW,
            dc_capex_usd=DC_CAPEX_USD,
            dc_annual_opex_usd=DC_ANNUAL_OPEX_USD,
            tugs_per_call=tugs,
            pilots_per_call=pilots,
        )
        for key, name, mw, transformer, converter, civil, tugs, pilots in VESSEL_ROWS
    ]
    return rows + list(SERVICE_ROWS)


def default_tables() -> AssumptionTables:
    """Return the reference assumption snapshot."""
    return AssumptionTables(
        equipment=default_equipment(),
        evse=[
            ChargerSpec(
                evse_key=key,
                equipment_key=equipment,
                display_name=name,
                power_kw=kw,
                units_per_charger=ratio,
                capex_usd=capex,
                annual_opex_usd=opex,
            )
            for key, equipment, name, kw, ratio, capex, opex in EVSE_ROWS
        ],
        fleet_ops=default_fleet_ops(),
        grid=list(GRID_ROWS),
        economic=[
            EconomicAssumption(assumption_key=key, value=value, unit=ECONOMIC_UNITS.get(key, ""))
            for key, value in ECONOMIC_DEFAULTS.items()
        ],
    )
