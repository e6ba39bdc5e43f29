# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Reader for the SWAT+ station manifest (``weather-sta.cli``)."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from swatnc.core.constants import WeatherFiles
from swatnc.core.exceptions import FileOperationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    """One manifest row: station name, weather-generator group, file refs."""
    name: str
    group: str
    file_refs: Tuple[str, ...]


def read_station_manifest(path: Path) -> List[ManifestEntry]:
    """Read a station manifest.

    The first two lines are a title and a column header. Each following row
    is ``name group file_ref [file_ref ...]``; extra columns are kept as
    additional references and ``null`` entries are filtered at lookup time.

    Raises:
        FileOperationError: If the manifest cannot be read.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise FileOperationError(f"Cannot read station manifest {path}: {e}") from e

    entries: List[ManifestEntry] = []
    for line_no, raw in enumerate(lines[WeatherFiles.HEADER_LINES:], start=WeatherFiles.HEADER_LINES + 1):
        parts = raw.split()
        if not parts:
            continue
        if len(parts) < 2:
            logger.warning(f"Skipping malformed manifest row at {path.name}:{line_no}: {raw!r}")
            continue
        entries.append(ManifestEntry(name=parts[0], group=parts[1], file_refs=tuple(parts[2:])))

    logger.info(f"Read {len(entries)} stations from {path.name}")
    return entries
