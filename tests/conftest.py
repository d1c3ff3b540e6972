"""Shared fixtures for the engine tests."""

import pytest

from piece.assumptions import SpecIndex, resolve_economics
from piece.defaults import default_tables


@pytest.fixture
def tables():
    return default_tables()


@pytest.fixture
def index(tables):
    return SpecIndex(tables)


@pytest.fixture
def econ():
    # documented defaults only
    return resolve_economics([])
