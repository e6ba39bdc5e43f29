# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
SWAT Weather Station File Parser

Reads SWAT TxtInOut weather files (.pcp, .tmp/.tem, .slr, .hmd, .wnd, .pet)
into immutable ``Station`` records.

File layout::

    <title line>                      ignored
    <column header line>              ignored
    <name> <id> <lat> <lon> <elev>    metadata, >= 5 tokens
    <year> <jday> <v0> [<v1> ...]     one row per day

Data rows may be separated by whitespace or commas. A file that cannot be
read, or whose metadata line is malformed, yields no station; bad data rows
are skipped.
"""

import calendar
import logging
import math
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Tuple

from swatnc.core.constants import VariableSpec, WeatherFiles
from swatnc.core.exceptions import StationParseError

from .models import Station, StationMetadata

logger = logging.getLogger(__name__)


def day_of_year_to_date(year: int, day_of_year: int) -> date:
    """Convert a (year, day-of-year) pair to a calendar date.

    Day 1 is January 1st. Leap years follow the proleptic Gregorian rules.

    Raises:
        ValueError: If ``day_of_year`` falls outside the year.
    """
    first = date(year, 1, 1)
    days_in_year = 366 if calendar.isleap(year) else 365
    if not 1 <= day_of_year <= days_in_year:
        raise ValueError(f"Day of year {day_of_year} outside year {year}")
    return first + timedelta(days=day_of_year - 1)


def parse_metadata_line(line: str) -> StationMetadata:
    """Parse the third line of a station file.

    Raises:
        StationParseError: If fewer than five tokens are present or the
            coordinates are not finite numbers.
    """
    parts = line.split()
    if len(parts) < WeatherFiles.METADATA_MIN_TOKENS:
        raise StationParseError(
            '<metadata>',
            f"expected at least {WeatherFiles.METADATA_MIN_TOKENS} columns, got {len(parts)}",
        )
    try:
        meta = StationMetadata(
            latitude=float(parts[2]),
            longitude=float(parts[3]),
            elevation=float(parts[4]),
        )
    except ValueError as e:
        raise StationParseError('<metadata>', f"non-numeric coordinates: {e}") from e

    # float() accepts 'nan' and 'inf'; neither can be placed on the grid
    if not (math.isfinite(meta.latitude) and math.isfinite(meta.longitude)):
        raise StationParseError('<metadata>', f"non-finite coordinates: {parts[2]} {parts[3]}")
    return meta


def _parse_data_row(line: str, column_index: int) -> Optional[Tuple[date, Optional[float]]]:
    """Parse one data row.

    Returns:
        ``None`` if the year/day tokens do not parse, otherwise the row date
        and the selected value (``None`` when the value token is absent).
    """
    tokens = line.replace(',', ' ').split()
    if len(tokens) < 2:
        return None
    try:
        row_date = day_of_year_to_date(int(tokens[0]), int(tokens[1]))
    except ValueError:
        return None

    value_pos = 2 + column_index
    if value_pos >= len(tokens):
        return row_date, None
    try:
        return row_date, float(tokens[value_pos])
    except ValueError:
        return row_date, None


def _read_lines(path: Path) -> List[str]:
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read().splitlines()
    except OSError as e:
        raise StationParseError(path, f"cannot read file: {e}") from e


def read_station_metadata(path: Path) -> Optional[StationMetadata]:
    """Read only the coordinates of a station file.

    Used by the station registry when a manifest refers to a file whose
    variable was not loaded.

    Returns:
        The metadata, or ``None`` if the file is unreadable or malformed.
    """
    path = Path(path)
    try:
        lines = _read_lines(path)
        if len(lines) <= WeatherFiles.HEADER_LINES:
            raise StationParseError(path, "missing metadata line")
        return parse_metadata_line(lines[WeatherFiles.HEADER_LINES])
    except StationParseError as e:
        logger.debug(f"No metadata from {path.name}: {e.reason}")
        return None


def _parse_station(path: Path, column_index: int) -> Station:
    lines = _read_lines(path)
    if len(lines) < WeatherFiles.HEADER_LINES:
        raise StationParseError(path, "file too short")
    if len(lines) == WeatherFiles.HEADER_LINES:
        raise StationParseError(path, "missing metadata line")

    try:
        meta = parse_metadata_line(lines[WeatherFiles.HEADER_LINES])
    except StationParseError as e:
        raise StationParseError(path, f"invalid metadata: {e.reason}") from e

    start_date: Optional[date] = None
    values: List[float] = []
    skipped = 0

    for line in lines[WeatherFiles.HEADER_LINES + 1:]:
        if not line.strip():
            continue
        row = _parse_data_row(line, column_index)
        if row is None:
            skipped += 1
            continue
        row_date, value = row
        if start_date is None:
            start_date = row_date
        if value is not None:
            values.append(value)

    if skipped:
        logger.debug(f"{path.name}: skipped {skipped} unparseable data rows")

    if start_date is None or not values:
        raise StationParseError(path, "no valid data rows")

    return Station(
        name=path.name,
        latitude=meta.latitude,
        longitude=meta.longitude,
        elevation=meta.elevation,
        start_date=start_date,
        values=tuple(values),
    )


def parse_station_file(path: Path, spec: VariableSpec) -> Optional[Station]:
    """Parse one station file for one variable.

    Args:
        path: Station file
        spec: Variable to extract; ``spec.column_index`` selects the value
            column after ``year`` and ``day``

    Returns:
        The parsed ``Station``, or ``None`` if the file had to be dropped.
        Dropped files are logged at WARNING level.
    """
    path = Path(path)
    try:
        return _parse_station(path, spec.column_index)
    except StationParseError as e:
        logger.warning(f"Dropping {path.name} for {spec.name}: {e.reason}")
        return None
