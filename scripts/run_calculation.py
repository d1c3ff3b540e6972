"""Run one port electrification calculation from JSON files.

Run `python scripts/run_calculation.py --request request.json` from the
project root.  The result is written as `result.json` together with one
CSV per line-item table and a `run.log` into the output directory.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from piece import AssumptionTables, CalculationRequest, calculate_port, calculation_fingerprint, default_tables, write_csvs

logger = logging.getLogger("piece")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare a port baseline against an electrified scenario.")
    parser.add_argument("--request", required=True, help="Calculation request JSON path.")
    parser.add_argument("--assumptions", help="Optional assumption tables JSON path (defaults to the reference tables).")
    parser.add_argument("--out-dir", default="outputs/run", help="Output directory path.")
    parser.add_argument("--verbose", action="store_true", help="Log skipped rows and defaults at DEBUG level.")
    return parser.parse_args(argv)


def configure_logging(out_dir: Path, verbose: bool = False) -> Path:
    # write to run.log and also stream to stdout
    log_path = out_dir / "run.log"
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(formatter)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    return log_path


def _load_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def run(request_path: Path, assumptions_path, out_dir: Path) -> dict:
    """Validate inputs, calculate and write every artifact.

    Returns the run metadata that is also written to ``metadata.json``.
    """
    request = CalculationRequest.model_validate(_load_json(request_path))
    if assumptions_path:
        tables = AssumptionTables.model_validate(_load_json(Path(assumptions_path)))
    else:
        tables = default_tables()
    fingerprint = calculation_fingerprint(request, tables)
    logger.info("Starting calculation: port=%s terminals=%d", request.port.name or "<unnamed>", len(request.terminals))

    result = calculate_port(request, tables)

    result_path = out_dir / "result.json"
    result_path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Wrote result to %s", result_path)
    csv_paths = write_csvs(result, out_dir)

    metadata = {
        "fingerprint": fingerprint,
        "timestamp_utc": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
        "request": str(request_path.as_posix()),
        "assumptions": str(assumptions_path) if assumptions_path else None,
        "outputs": {
            "result_json": str(result_path.as_posix()),
            "csv": {name: str(p.as_posix()) for name, p in csv_paths.items()},
        },
    }
    metadata_path = out_dir / "metadata.json"
    metadata_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
    logger.info("Wrote metadata to %s", metadata_path)

    totals = result.totals
    logger.info("Total CAPEX: %.0f USD", totals.total_capex_usd)
    logger.info("Annual OPEX savings: %.0f USD", totals.annual_opex_savings_usd)
    logger.info("CO2 reduction: %.1f %%", totals.co2_reduction_percent)
    if totals.simple_payback_years is None:
        logger.info("Simple payback: n/a (no OPEX savings)")
    else:
        logger.info("Simple payback: %.1f years", totals.simple_payback_years)
    return metadata


def main(argv=None) -> int:
    args = parse_args(argv)
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    configure_logging(out_dir, args.verbose)
    try:
        run(Path(args.request), args.assumptions, out_dir)
    except ValidationError as exc:
        logger.error("Invalid input: %s", exc)
        return 2
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read input: %s", exc)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
