# MIT License
from __future__ import annotations
import hashlib, json
from typing import Optional

from .params import AssumptionTables, CalculationRequest


def calculation_fingerprint(request: CalculationRequest, tables: Optional[AssumptionTables] = None) -> str:
    """Compute a stable hash for a calculation's inputs.

    Serialises the request and the assumption snapshot to JSON (with
    sorted keys) and computes a SHA256 hash.  A stored result whose
    fingerprint differs from the current inputs is stale.

    Parameters
    ----------
    request:
        Validated calculation request.
    tables:
        Assumption tables used for the calculation, if any.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    payload = {"request": request.model_dump(mode="json", exclude_none=True)}
    if tables is not None:
        payload["tables"] = tables.model_dump(mode="json", exclude_none=True)
    # ensure deterministic key ordering
    data = json.dumps(payload, sort_keys=True).encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def kg_to_tonnes(kg: float) -> float:
    """Convert kilograms to metric tonnes."""
    return kg / 1000.0


def mwh_to_kwh(mwh: float) -> float:
    return mwh * 1000.0


def kw_to_mw(kw: float) -> float:
    return kw / 1000.0
