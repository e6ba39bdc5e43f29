# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Station layer: parsing SWAT weather files into immutable station records.
"""

from .discovery import discover_station_files, load_weather_data
from .models import Station, StationMetadata, VariableSeries
from .parser import day_of_year_to_date, parse_station_file, read_station_metadata

__all__ = [
    'Station',
    'StationMetadata',
    'VariableSeries',
    'day_of_year_to_date',
    'discover_station_files',
    'load_weather_data',
    'parse_station_file',
    'read_station_metadata',
]
