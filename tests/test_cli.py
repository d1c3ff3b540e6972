"""Tests for the command line runner."""

import importlib.util
import json
import logging
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run_calculation.py"

REQUEST = {
    "port": {"name": "CLI port"},
    "terminals": [
        {
            "id": "t1",
            "annual_teu": 80_000,
            "baseline_equipment": {"rs": {"existing_diesel": 4}},
            "scenario_equipment": {"rs": {"num_to_convert": 4}},
        }
    ],
}


@pytest.fixture
def cli():
    spec = importlib.util.spec_from_file_location("run_calculation", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module
    # drop the handlers the runner attached
    logger = logging.getLogger("piece")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_run_writes_artifacts(cli, tmp_path):
    request_path = tmp_path / "request.json"
    request_path.write_text(json.dumps(REQUEST), encoding="utf-8")
    out_dir = tmp_path / "run"
    assert cli.main(["--request", str(request_path), "--out-dir", str(out_dir)]) == 0
    result = json.loads((out_dir / "result.json").read_text(encoding="utf-8"))
    assert result["terminals"][0]["terminal_id"] == "t1"
    assert (out_dir / "summary.csv").exists()
    assert (out_dir / "run.log").exists()
    metadata = json.loads((out_dir / "metadata.json").read_text(encoding="utf-8"))
    assert len(metadata["fingerprint"]) == 64


def test_invalid_request_exits_with_2(cli, tmp_path):
    request_path = tmp_path / "request.json"
    request_path.write_text(json.dumps({"terminals": []}), encoding="utf-8")
    assert cli.main(["--request", str(request_path), "--out-dir", str(tmp_path / "run")]) == 2


def test_missing_file_exits_with_2(cli, tmp_path):
    assert cli.main(["--request", str(tmp_path / "nope.json"), "--out-dir", str(tmp_path / "run")]) == 2


def test_reconfiguring_closes_previous_log_file(cli, tmp_path):
    first_dir, second_dir = tmp_path / "a", tmp_path / "b"
    first_dir.mkdir()
    second_dir.mkdir()
    cli.configure_logging(first_dir)
    first = [h for h in cli.logger.handlers if isinstance(h, logging.FileHandler)]
    cli.configure_logging(second_dir)
    assert len(first) == 1
    assert first[0].stream is None
    assert len(cli.logger.handlers) == 2
