# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Fixed vocabulary for SWAT weather conversion.

Centralizes the variable names, units, file extensions and output constants
so the parser, rasterizer, registry and sink all agree on them.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class VariableSpec:
    """One gridded output variable and the column it is read from.

    Attributes:
        name: Output variable name (e.g. ``'pcp'``, ``'tmax'``)
        unit: Physical unit written to the ``units`` attribute
        long_name: Human-readable description
        column_index: Zero-based value column after ``year`` and ``day``
    """
    name: str
    unit: str
    long_name: str
    column_index: int = 0


class GridConstants:
    """Constants shared by the rasterizer and the NetCDF sink."""

    MISSING_VALUE = np.float32(-9999.0)
    """Sentinel for cells no station maps to. Exactly representable in float32."""

    DATA_DTYPE = np.float32
    """Storage type of gridded slices."""

    FLOOR_TOLERANCE = 1e-9
    """Cells of slack when flooring the axis span, absorbs 0.3/0.1 style error."""

    DEFAULT_RESOLUTION = 0.25
    """Default cell size in degrees."""

    GLOBAL_EXTENT = (-90.0, 90.0, -180.0, 180.0)
    """Whole-globe fallback as (min_lat, max_lat, min_lon, max_lon)."""

    DEFAULT_STOP_DATE = '2500-12-31'
    """Stop date used when none is configured."""


class WeatherFiles:
    """SWAT TxtInOut weather file conventions."""

    HEADER_LINES = 2
    """Free-text lines preceding the metadata line."""

    METADATA_MIN_TOKENS = 5
    """Metadata line must carry at least this many tokens (lat/lon/elev at 2-4)."""

    STATION_MANIFEST = 'weather-sta.cli'
    WEATHER_GENERATOR = 'weather-wgn.cli'
    FILE_CIO = 'file.cio'
    REGISTRY_FILE = 'netcdf.ncw'

    NULL_REFERENCE = 'null'
    """Placeholder used in manifests for an absent file."""


# Group name -> variables read from each file of that group, in write order.
# Temperature files carry two value columns.
VARIABLE_GROUPS: Dict[str, Tuple[VariableSpec, ...]] = {
    'pcp': (VariableSpec('pcp', 'mm', 'daily precipitation'),),
    'hmd': (VariableSpec('hmd', 'fraction', 'relative humidity'),),
    'slr': (VariableSpec('slr', 'MJ/m2', 'daily solar radiation'),),
    'wnd': (VariableSpec('wnd', 'm/s', 'mean wind speed'),),
    'tmp': (
        VariableSpec('tmax', 'degC', 'daily maximum air temperature', column_index=0),
        VariableSpec('tmin', 'degC', 'daily minimum air temperature', column_index=1),
    ),
    'pet': (VariableSpec('pet', 'mm', 'potential evapotranspiration'),),
}

# File extension -> variable group. '.tem' and '.tmp' are mutually exclusive,
# see data.stations.discovery.
EXTENSION_GROUPS: Dict[str, str] = {
    '.pcp': 'pcp',
    '.slr': 'slr',
    '.hmd': 'hmd',
    '.wnd': 'wnd',
    '.pet': 'pet',
    '.tmp': 'tmp',
    '.tem': 'tmp',
}

# Group processing order; also the order variables appear in the output file.
GROUP_ORDER: Tuple[str, ...] = ('pcp', 'hmd', 'slr', 'wnd', 'tmp', 'pet')

# Availability columns of the station registry, in file order.
REGISTRY_FLAG_COLUMNS: Tuple[str, ...] = ('pcp', 'tmin', 'tmax', 'slr', 'hmd', 'wnd', 'pet')

REGISTRY_PLACEHOLDER_FLAG = 1.0
DEFAULT_STATION_GROUP = 'default'


__all__ = [
    'VariableSpec',
    'GridConstants',
    'WeatherFiles',
    'VARIABLE_GROUPS',
    'EXTENSION_GROUPS',
    'GROUP_ORDER',
    'REGISTRY_FLAG_COLUMNS',
    'REGISTRY_PLACEHOLDER_FLAG',
    'DEFAULT_STATION_GROUP',
]
