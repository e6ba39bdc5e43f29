# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Gridding engine: extent, timeline, rasterizer and output sinks.
"""

from .cf_conventions import CF_STANDARD_NAMES, build_global_attrs
from .extent import GlobalExtent, resolve_extent, station_bounds
from .rasterizer import GridAxes, GridRasterizer, round_half_away_from_zero
from .sink import GridSink, NetCDFGridSink
from .timeline import Timeline, align_timeline, days_between

__all__ = [
    'CF_STANDARD_NAMES',
    'build_global_attrs',
    'GlobalExtent',
    'resolve_extent',
    'station_bounds',
    'GridAxes',
    'GridRasterizer',
    'round_half_away_from_zero',
    'GridSink',
    'NetCDFGridSink',
    'Timeline',
    'align_timeline',
    'days_between',
]
