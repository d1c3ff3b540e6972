"""Tests for the calculation fingerprint and unit conversions."""

import math

from piece.params import CalculationRequest, TerminalConfig
from piece.utils import calculation_fingerprint, kg_to_tonnes, kw_to_mw, mwh_to_kwh


def _request(teu=1000.0):
    return CalculationRequest(terminals=[TerminalConfig(id="t1", annual_teu=teu)])


def test_fingerprint_is_stable(tables):
    a = calculation_fingerprint(_request(), tables)
    b = calculation_fingerprint(_request(), tables)
    assert a == b
    assert len(a) == 64


def test_fingerprint_changes_with_inputs(tables):
    base = calculation_fingerprint(_request(), tables)
    assert calculation_fingerprint(_request(teu=2000.0), tables) != base
    assert calculation_fingerprint(_request()) != base
    changed = tables.model_copy(update={"evse": []})
    assert calculation_fingerprint(_request(), changed) != base


def test_unit_conversions():
    assert math.isclose(kg_to_tonnes(2500), 2.5)
    assert math.isclose(mwh_to_kwh(1.5), 1500)
    assert math.isclose(kw_to_mw(880), 0.88)
