# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
In-memory station records.

Stations are immutable once parsed; everything downstream (extent, timeline,
rasterizer, registry) is a pure function of a list of ``VariableSeries``.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator, Tuple

from swatnc.core.constants import VariableSpec


@dataclass(frozen=True)
class StationMetadata:
    """Coordinates read from the metadata line of a station file."""
    latitude: float
    longitude: float
    elevation: float


@dataclass(frozen=True)
class Station:
    """One gauge's daily series for one variable.

    Attributes:
        name: Source file name, the join key with the station manifest
        latitude: Degrees north
        longitude: Degrees east
        elevation: Metres, advisory only
        start_date: Date of ``values[0]``
        values: Daily values without gaps
    """
    name: str
    latitude: float
    longitude: float
    elevation: float
    start_date: date
    values: Tuple[float, ...]

    def __post_init__(self):
        if not self.values:
            raise ValueError(f"Station {self.name} has no values")

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=len(self.values) - 1)

    @property
    def metadata(self) -> StationMetadata:
        return StationMetadata(self.latitude, self.longitude, self.elevation)


@dataclass(frozen=True)
class VariableSeries:
    """All stations contributing to one output variable.

    ``stations`` is ordered by discovery; the rasterizer's first-wins rule
    depends on this order.
    """
    spec: VariableSpec
    stations: Tuple[Station, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def unit(self) -> str:
        return self.spec.unit

    def __len__(self) -> int:
        return len(self.stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self.stations)
