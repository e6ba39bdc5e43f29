# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Bounding extent of a boundary polygon file."""

import logging
from pathlib import Path
from typing import Tuple

from swatnc.core.exceptions import GeospatialError

logger = logging.getLogger(__name__)


def read_boundary_extent(shape_path: Path) -> Tuple[float, float, float, float]:
    """
    Extract the bounding extent of a vector file.

    Reads the file with geopandas, reprojects to EPSG:4326 when it carries a
    different CRS, and returns the extent in converter order.

    Args:
        shape_path: Path to a shapefile (or any format geopandas reads).

    Returns:
        ``(minLon, maxLon, minLat, maxLat)`` in degrees.

    Raises:
        GeospatialError: If the file does not exist, cannot be read, or
            holds no geometries.
    """
    import geopandas as gpd

    path = Path(shape_path)
    if not path.exists():
        raise GeospatialError(f"Shapefile not found: {shape_path}")

    logger.info(f"Reading shapefile: {path}")
    try:
        gdf = gpd.read_file(path)
        if gdf.crs and gdf.crs.to_epsg() != 4326:
            gdf = gdf.to_crs(epsg=4326)
    except Exception as e:  # noqa: BLE001 - fiona/pyogrio/pyproj raise many types
        raise GeospatialError(f"Failed to read shapefile {path}: {e}") from e

    if gdf.empty:
        raise GeospatialError(f"Shapefile {path} contains no features")

    lon_min, lat_min, lon_max, lat_max = (float(v) for v in gdf.total_bounds)
    logger.info(f"Bounds from shapefile: Lon [{lon_min}, {lon_max}], Lat [{lat_min}, {lat_max}]")
    return lon_min, lon_max, lat_min, lat_max
