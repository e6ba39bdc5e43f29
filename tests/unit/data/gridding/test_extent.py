"""Tests for grid extent resolution."""

import logging

import pytest

from swatnc.core.exceptions import GridPreconditionError
from swatnc.data.gridding import GlobalExtent, resolve_extent, station_bounds

pytestmark = [pytest.mark.unit, pytest.mark.quick]


class TestStationBounds:

    def test_covers_every_variable(self, make_station, make_series):
        pcp = make_series(make_station(lat=10.0, lon=20.0), make_station(lat=12.0, lon=18.0))
        wnd = make_series(make_station(lat=-5.0, lon=30.0))
        assert station_bounds([pcp, wnd]) == GlobalExtent(-5.0, 12.0, 18.0, 30.0)

    def test_empty(self, make_series):
        assert station_bounds([make_series()]) is None


class TestResolveExtent:

    def test_station_bounds_buffered_by_resolution(self, make_station, make_series):
        series = [make_series(make_station(lat=10.0, lon=20.0))]
        assert resolve_extent(series, 1.0) == GlobalExtent(9.0, 11.0, 19.0, 21.0)

    def test_external_box_used_verbatim(self, make_station, make_series):
        series = [make_series(make_station(lat=10.0, lon=20.0))]
        extent = resolve_extent(series, 1.0, external=(-120.0, -110.0, 45.0, 50.0))
        assert extent == GlobalExtent(min_lat=45.0, max_lat=50.0, min_lon=-120.0, max_lon=-110.0)

    def test_external_box_without_stations(self):
        extent = resolve_extent([], 0.25, external=(0.0, 1.0, 2.0, 3.0))
        assert extent == GlobalExtent(2.0, 3.0, 0.0, 1.0)

    def test_no_reference_fails(self, make_series):
        with pytest.raises(GridPreconditionError) as exc_info:
            resolve_extent([make_series()], 0.25)
        assert exc_info.value.precondition == 'spatial_reference'

    def test_global_fallback_when_enabled(self):
        extent = resolve_extent([], 0.25, allow_global_fallback=True)
        assert extent == GlobalExtent(-90.0, 90.0, -180.0, 180.0)

    def test_inverted_external_box_fails(self):
        with pytest.raises(GridPreconditionError) as exc_info:
            resolve_extent([], 0.25, external=(10.0, 0.0, 0.0, 10.0))
        assert exc_info.value.precondition == 'extent_order'

    def test_resolved_extent_logged(self, make_station, make_series, caplog):
        series = [make_series(make_station(lat=10.0, lon=20.0))]
        with caplog.at_level(logging.INFO, logger='swatnc'):
            resolve_extent(series, 1.0)
        assert "Resolved grid extent: Lat [9.0, 11.0], Lon [19.0, 21.0]" in caplog.text


class TestGlobalExtent:

    def test_from_lon_lat_bounds_order(self):
        extent = GlobalExtent.from_lon_lat_bounds((1, 2, 3, 4))
        assert (extent.min_lon, extent.max_lon, extent.min_lat, extent.max_lat) == (1.0, 2.0, 3.0, 4.0)

    def test_is_ordered(self):
        assert GlobalExtent(0.0, 0.0, 0.0, 0.0).is_ordered
        assert not GlobalExtent(1.0, 0.0, 0.0, 1.0).is_ordered
