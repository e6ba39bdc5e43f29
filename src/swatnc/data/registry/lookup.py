# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Coordinate lookup by station file name.

Two sources answer the same question, "where is the station behind this
file?": the stations already parsed in memory, and the file itself. They are
composed in a chain; the first source that answers wins.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Sequence

from swatnc.core.constants import WeatherFiles

from ..stations.models import StationMetadata, VariableSeries
from ..stations.parser import read_station_metadata

logger = logging.getLogger(__name__)


class CoordinateLookup(Protocol):
    def lookup(self, reference: str) -> Optional[StationMetadata]: ...


class InMemoryCoordinateLookup:
    """Answer from parsed stations, matching ``Station.name`` exactly.

    When the same file was parsed for several variables the first
    occurrence is used; the metadata line is the same for all of them.
    """

    def __init__(self, series: Iterable[VariableSeries]):
        self._index: Dict[str, StationMetadata] = {}
        for var in series:
            for station in var.stations:
                self._index.setdefault(station.name, station.metadata)

    def lookup(self, reference: str) -> Optional[StationMetadata]:
        return self._index.get(reference)

    def __len__(self) -> int:
        return len(self._index)


class StationFileCoordinateLookup:
    """Answer by reading the metadata line of ``<directory>/<reference>``."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def lookup(self, reference: str) -> Optional[StationMetadata]:
        path = self.directory / reference
        if not path.is_file():
            return None
        return read_station_metadata(path)


class ChainedCoordinateLookup:
    """Try each lookup in turn.

    ``resolve`` exhausts every reference against one source before moving to
    the next, so in-memory data always beats re-reading a file.
    """

    def __init__(self, *lookups: CoordinateLookup):
        self.lookups = lookups

    def lookup(self, reference: str) -> Optional[StationMetadata]:
        return self.resolve([reference])

    def resolve(self, references: Sequence[str]) -> Optional[StationMetadata]:
        refs = [r for r in references if r and r.lower() != WeatherFiles.NULL_REFERENCE]
        for source in self.lookups:
            for ref in refs:
                meta = source.lookup(ref)
                if meta is not None:
                    return meta
        return None
