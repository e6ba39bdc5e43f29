# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Spatial extent resolution.

The grid extent is either the external boundary box, used verbatim, or the
bounding box of every parsed station (all variables) grown by one cell on
each side so that a single station does not collapse to a 1x1 grid.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from swatnc.core.constants import GridConstants
from swatnc.core.exceptions import GridPreconditionError

from ..stations.models import Station, VariableSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlobalExtent:
    """Grid extent in degrees."""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @classmethod
    def from_lon_lat_bounds(cls, bounds: Tuple[float, float, float, float]) -> 'GlobalExtent':
        """Build from a boundary reader's ``(minLon, maxLon, minLat, maxLat)``."""
        min_lon, max_lon, min_lat, max_lat = (float(b) for b in bounds)
        return cls(min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon)

    @property
    def is_ordered(self) -> bool:
        return self.min_lat <= self.max_lat and self.min_lon <= self.max_lon

    def buffered(self, distance: float) -> 'GlobalExtent':
        return GlobalExtent(
            min_lat=self.min_lat - distance,
            max_lat=self.max_lat + distance,
            min_lon=self.min_lon - distance,
            max_lon=self.max_lon + distance,
        )

    def __str__(self) -> str:
        return (f"Lat [{self.min_lat}, {self.max_lat}], "
                f"Lon [{self.min_lon}, {self.max_lon}]")


def _all_stations(series: Iterable[VariableSeries]) -> Iterable[Station]:
    for var in series:
        yield from var.stations


def station_bounds(series: Iterable[VariableSeries]) -> Optional[GlobalExtent]:
    """Bounding box of every station of every variable, or ``None`` if empty."""
    lats = []
    lons = []
    for station in _all_stations(series):
        lats.append(station.latitude)
        lons.append(station.longitude)

    if not lats:
        return None
    return GlobalExtent(min_lat=min(lats), max_lat=max(lats), min_lon=min(lons), max_lon=max(lons))


def resolve_extent(
    series: Iterable[VariableSeries],
    resolution: float,
    external: Optional[Tuple[float, float, float, float]] = None,
    allow_global_fallback: bool = False,
) -> GlobalExtent:
    """Resolve the final grid extent.

    Args:
        series: All parsed variables
        resolution: Cell size in degrees, used as the buffer
        external: Optional ``(minLon, maxLon, minLat, maxLat)`` from a
            boundary file; when given it is the final extent
        allow_global_fallback: With no stations and no external box, use the
            whole globe instead of failing

    Returns:
        The final ``GlobalExtent``

    Raises:
        GridPreconditionError: ``spatial_reference`` when there is nothing to
            grid against, ``extent_order`` when the result is inverted
    """
    series = list(series)
    from_stations = station_bounds(series)

    if external is not None:
        extent = GlobalExtent.from_lon_lat_bounds(external)
        if from_stations is not None:
            logger.info(f"Station bounds (diagnostic only, boundary box in use): {from_stations}")
    elif from_stations is not None:
        logger.info(f"No boundary provided. Adding buffer of {resolution} degrees.")
        extent = from_stations.buffered(resolution)
    elif allow_global_fallback:
        logger.warning("Could not determine bounds from stations. Using whole-globe extent.")
        min_lat, max_lat, min_lon, max_lon = GridConstants.GLOBAL_EXTENT
        extent = GlobalExtent(min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon)
    else:
        raise GridPreconditionError(
            'spatial_reference',
            "No stations were parsed and no boundary extent was supplied",
        )

    if not extent.is_ordered:
        raise GridPreconditionError('extent_order', f"Final extent is inverted: {extent}")

    logger.info(f"Resolved grid extent: {extent}")
    return extent
