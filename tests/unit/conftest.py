"""
Unit test fixtures and configuration.

Fixtures specific to unit tests (fast, isolated tests).
"""

from datetime import date

import pytest

from swatnc.core.constants import VARIABLE_GROUPS
from swatnc.data.stations import Station, VariableSeries


@pytest.fixture
def pcp_spec():
    return VARIABLE_GROUPS['pcp'][0]


@pytest.fixture
def make_station():
    """Build an in-memory ``Station`` without touching the filesystem."""
    def _make(name='s.pcp', lat=10.0, lon=20.0, values=(1.0,), start=date(2000, 1, 1), elev=100.0):
        return Station(
            name=name,
            latitude=lat,
            longitude=lon,
            elevation=elev,
            start_date=start,
            values=tuple(values),
        )
    return _make


@pytest.fixture
def make_series(pcp_spec):
    """Wrap stations into a ``VariableSeries`` (precipitation by default)."""
    def _make(*stations, spec=None):
        return VariableSeries(spec=spec or pcp_spec, stations=tuple(stations))
    return _make
