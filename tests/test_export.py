"""Tests for the tabular export helpers.

These tests verify that the DataFrames and CSV files produced from a port
result are well-formed.
"""

import json

import pandas as pd

from piece import CalculationRequest, calculate_port, terminal_frames, write_csvs
from piece.export import SUMMARY_COLUMNS
from piece.results import PortResult

REQUEST = {
    "port": {"name": "Export port"},
    "terminals": [
        {
            "id": "t1",
            "annual_teu": 50_000,
            "baseline_equipment": {"tt": {"existing_diesel": 10}, "sts": {"existing_electric": 2}},
            "scenario_equipment": {"tt": {"num_to_convert": 5}},
            "berths": [
                {
                    "id": "b1",
                    "max_vessel_segment_key": "container_0_3k",
                    "vessel_calls": [
                        {"vessel_segment_key": "container_0_3k", "annual_calls": 200, "avg_berth_hours": 6},
                        {"vessel_segment_key": "container_3_6k", "annual_calls": 20, "avg_berth_hours": 12},
                    ],
                }
            ],
            "berth_scenarios": [{"berth_id": "b1", "ops_enabled": True}],
        }
    ],
}


def _result(tables):
    return calculate_port(CalculationRequest.model_validate(REQUEST), tables)


def test_terminal_frames(tables):
    frames = terminal_frames(_result(tables))
    assert set(frames) == {"equipment", "chargers", "berths", "vessel_calls", "grid", "summary"}
    # tt and sts in baseline and scenario
    assert len(frames["equipment"]) == 4
    assert set(frames["equipment"]["case"]) == {"baseline", "scenario"}
    assert len(frames["vessel_calls"]) == 2
    assert "vessel_calls" not in frames["berths"].columns
    assert list(frames["summary"].columns) == SUMMARY_COLUMNS
    assert len(frames["grid"]) == 2


def test_write_csvs(tables, tmp_path):
    paths = write_csvs(_result(tables), tmp_path / "out")
    for name in ("equipment", "chargers", "berths", "vessel_calls", "grid", "summary", "port_totals"):
        assert paths[name].exists()
    summary = pd.read_csv(paths["summary"])
    assert summary.loc[0, "terminal_id"] == "t1"
    first_line = paths["port_totals"].read_text().splitlines()[0]
    assert first_line == "metric,value"


def test_result_json_roundtrip(tables):
    result = _result(tables)
    data = json.loads(result.model_dump_json())
    assert PortResult.model_validate(data) == result
