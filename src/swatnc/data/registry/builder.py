# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Station registry builder.

Produces one row per physical station (not per variable) with its group,
coordinates, elevation and per-variable availability flags, and writes it
as the fixed-width ``netcdf.ncw`` file that SWAT+ reads next to the gridded
climate file.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from swatnc.core.constants import (
    DEFAULT_STATION_GROUP,
    REGISTRY_FLAG_COLUMNS,
    REGISTRY_PLACEHOLDER_FLAG,
    WeatherFiles,
)
from swatnc.core.exceptions import FileOperationError

from ..stations.models import VariableSeries
from .lookup import ChainedCoordinateLookup, InMemoryCoordinateLookup, StationFileCoordinateLookup
from .manifest import ManifestEntry, read_station_manifest

logger = logging.getLogger(__name__)

_DERIVED_NAME_WIDTH = 13


@dataclass(frozen=True)
class RegistryEntry:
    name: str
    group: str
    latitude: float
    longitude: float
    elevation: float
    flags: Dict[str, Optional[float]] = field(default_factory=dict)


@dataclass
class StationRegistry:
    """Ordered registry rows plus where they came from (``manifest``/``derived``)."""
    entries: List[RegistryEntry]
    source: str

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def names(self) -> List[str]:
        return [e.name for e in self.entries]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per station; flag columns hold ``None`` for unavailable data."""
        rows = []
        for e in self.entries:
            row = {
                'name': e.name,
                'wgn': e.group,
                'latitude': e.latitude,
                'longitude': e.longitude,
                'elevation': e.elevation,
            }
            row.update({col: e.flags.get(col) for col in REGISTRY_FLAG_COLUMNS})
            rows.append(row)
        columns = ['name', 'wgn', 'latitude', 'longitude', 'elevation', *REGISTRY_FLAG_COLUMNS]
        return pd.DataFrame(rows, columns=columns)


class StationRegistryBuilder:
    """Build the station registry from parsed series and an optional manifest.

    Args:
        series: All parsed variables
        txtinout_dir: Directory holding the station files, used to re-read
            metadata for manifest entries that were not parsed
    """

    def __init__(self, series: Sequence[VariableSeries], txtinout_dir: Path):
        self.series = list(series)
        self.txtinout_dir = Path(txtinout_dir)
        self.lookup = ChainedCoordinateLookup(
            InMemoryCoordinateLookup(self.series),
            StationFileCoordinateLookup(self.txtinout_dir),
        )

    def availability_flags(self) -> Dict[str, Optional[float]]:
        """PET is flagged only when PET stations were loaded; the rest use a placeholder."""
        has_pet = any(var.name == 'pet' and len(var) > 0 for var in self.series)
        flags: Dict[str, Optional[float]] = {col: REGISTRY_PLACEHOLDER_FLAG for col in REGISTRY_FLAG_COLUMNS}
        flags['pet'] = REGISTRY_PLACEHOLDER_FLAG if has_pet else None
        return flags

    def build(self, manifest_path: Optional[Path] = None) -> StationRegistry:
        """Build from the manifest if it exists, otherwise from parsed stations."""
        if manifest_path is not None and Path(manifest_path).is_file():
            logger.info(f"Reading station list from {manifest_path}")
            return self.from_manifest(read_station_manifest(manifest_path))

        missing = Path(manifest_path).name if manifest_path is not None else WeatherFiles.STATION_MANIFEST
        logger.warning(
            f"{missing} not found. "
            "Generating station list from loaded data (group will be default)."
        )
        return self.from_stations()

    def from_manifest(self, manifest: Sequence[ManifestEntry]) -> StationRegistry:
        flags = self.availability_flags()
        entries = []
        for row in manifest:
            meta = self.lookup.resolve(row.file_refs)
            if meta is None:
                logger.warning(f"Dropping manifest station {row.name}: no coordinates for {list(row.file_refs)}")
                continue
            entries.append(RegistryEntry(
                name=row.name,
                group=row.group,
                latitude=meta.latitude,
                longitude=meta.longitude,
                elevation=meta.elevation,
                flags=dict(flags),
            ))
        return StationRegistry(entries=entries, source='manifest')

    def from_stations(self) -> StationRegistry:
        flags = self.availability_flags()
        seen = set()
        entries = []
        for var in self.series:
            for station in var.stations:
                if station.name in seen:
                    continue
                seen.add(station.name)
                entries.append(RegistryEntry(
                    name=station.name,
                    group=DEFAULT_STATION_GROUP,
                    latitude=station.latitude,
                    longitude=station.longitude,
                    elevation=station.elevation,
                    flags=dict(flags),
                ))
        return StationRegistry(entries=entries, source='derived')


def _format_flag(value: Optional[float]) -> str:
    if value is None or pd.isna(value):
        return WeatherFiles.NULL_REFERENCE
    return f"{value:.1f}"


def format_registry(registry: StationRegistry, timestamp: Optional[datetime] = None) -> str:
    """Render the registry in the fixed-width ``netcdf.ncw`` layout."""
    timestamp = timestamp or datetime.now()
    lines = [
        f"{WeatherFiles.REGISTRY_FILE}: written by swatnc converter "
        f"{timestamp.strftime('%d/%m/%Y - %H:%M:%S')}",
        "name                 wgn        latitude     longitude     elevation"
        "        pcp       tmin       tmax        slr        hmd       wnd        pet     ",
    ]

    df = registry.to_dataframe()
    for row in df.itertuples(index=False):
        name = row.name if registry.source == 'manifest' else row.name[:_DERIVED_NAME_WIDTH]
        flag_cells = ''.join(
            f"{_format_flag(getattr(row, col)):>11}" for col in REGISTRY_FLAG_COLUMNS[:-1]
        )
        lines.append(
            f"{name:<14}{row.wgn:>10}"
            f"{row.latitude:>16.3f}{row.longitude:>14.3f}{row.elevation:>14.3f}"
            f"{flag_cells}{_format_flag(row.pet):>10}"
        )
    return "\n".join(lines) + "\n"


def write_registry_file(registry: StationRegistry, path: Path) -> Path:
    """Write the registry to ``path``.

    Raises:
        FileOperationError: If the file cannot be written.
    """
    path = Path(path)
    logger.info(f"Creating station list file: {path}")
    try:
        path.write_text(format_registry(registry), encoding='utf-8')
    except OSError as e:
        raise FileOperationError(f"Cannot write station list {path}: {e}") from e
    return path
