# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Nearest-cell rasterization of station series onto a regular lat/lon grid.

There is no interpolation. Each station writes into the single cell nearest
to it. When several stations land in the same cell on the same day, the
first one in discovery order wins; later stations only fill cells that
still hold the missing-value sentinel.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from swatnc.core.constants import GridConstants
from swatnc.core.exceptions import require

from ..stations.models import Station, VariableSeries
from .extent import GlobalExtent
from .timeline import Timeline

logger = logging.getLogger(__name__)


def round_half_away_from_zero(x: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def axis_length(lower: float, upper: float, resolution: float) -> int:
    """Number of grid points from ``lower`` to ``upper`` inclusive."""
    return int(math.floor((upper - lower) / resolution + GridConstants.FLOOR_TOLERANCE)) + 1


@dataclass(frozen=True)
class GridAxes:
    """Coordinate axes of the output grid."""
    lat: np.ndarray
    lon: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.lat), len(self.lon)


@dataclass(frozen=True)
class _Placement:
    """A station resolved to its cell and its position on the timeline."""
    name: str
    lat_idx: int
    lon_idx: int
    offset: int
    values: np.ndarray


class GridRasterizer:
    """Rasterize variables onto the grid defined by an extent and resolution.

    Args:
        extent: Final grid extent
        resolution: Cell size in degrees
        timeline: Shared time axis
        missing_value: Sentinel for cells without a station value
    """

    def __init__(
        self,
        extent: GlobalExtent,
        resolution: float,
        timeline: Timeline,
        missing_value: float = GridConstants.MISSING_VALUE,
    ):
        require(resolution > 0, f"Resolution must be positive, got {resolution}")
        self.extent = extent
        self.resolution = resolution
        self.timeline = timeline
        self.missing_value = GridConstants.DATA_DTYPE(missing_value)

        self.n_lat = axis_length(extent.min_lat, extent.max_lat, resolution)
        self.n_lon = axis_length(extent.min_lon, extent.max_lon, resolution)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.n_lat, self.n_lon

    @property
    def axes(self) -> GridAxes:
        lat = self.extent.min_lat + np.arange(self.n_lat, dtype=np.float64) * self.resolution
        lon = self.extent.min_lon + np.arange(self.n_lon, dtype=np.float64) * self.resolution
        return GridAxes(lat=lat, lon=lon)

    def cell_index(self, latitude: float, longitude: float) -> Optional[Tuple[int, int]]:
        """Nearest cell for a coordinate, or ``None`` if it lies off the grid."""
        lat_idx = round_half_away_from_zero((latitude - self.extent.min_lat) / self.resolution)
        lon_idx = round_half_away_from_zero((longitude - self.extent.min_lon) / self.resolution)
        if 0 <= lat_idx < self.n_lat and 0 <= lon_idx < self.n_lon:
            return lat_idx, lon_idx
        return None

    def _placements(self, series: VariableSeries) -> List[_Placement]:
        placements = []
        for station in series.stations:
            cell = self.cell_index(station.latitude, station.longitude)
            if cell is None:
                logger.debug(
                    f"{series.name}: station {station.name} at "
                    f"({station.latitude}, {station.longitude}) is outside the grid"
                )
                continue
            placements.append(self._place(station, cell))
        return placements

    def _place(self, station: Station, cell: Tuple[int, int]) -> _Placement:
        return _Placement(
            name=station.name,
            lat_idx=cell[0],
            lon_idx=cell[1],
            offset=self.timeline.offset_of(station),
            values=np.asarray(station.values, dtype=GridConstants.DATA_DTYPE),
        )

    def _slice_from(self, placements: List[_Placement], step: int) -> np.ndarray:
        grid = np.full(self.shape, self.missing_value, dtype=GridConstants.DATA_DTYPE)
        for p in placements:
            local = step - p.offset
            if local < 0 or local >= len(p.values):
                continue
            # First wins
            if grid[p.lat_idx, p.lon_idx] == self.missing_value:
                grid[p.lat_idx, p.lon_idx] = p.values[local]
        return grid

    def slice_at(self, series: VariableSeries, step: int) -> np.ndarray:
        """Grid of one variable on one day, shape ``(n_lat, n_lon)``."""
        return self._slice_from(self._placements(series), step)

    def rasterize(self, series: VariableSeries) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield ``(step, grid)`` for every step of the timeline, in order.

        Each grid is a fresh array; callers may hand it to a sink and drop it.
        """
        placements = self._placements(series)
        if len(placements) < len(series.stations):
            logger.info(
                f"{series.name}: {len(series.stations) - len(placements)} "
                "stations fall outside the grid and are ignored"
            )
        for step in range(self.timeline.step_count):
            yield step, self._slice_from(placements, step)
