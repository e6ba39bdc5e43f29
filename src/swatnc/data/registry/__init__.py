# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Station registry: merged per-station metadata for the ``netcdf.ncw`` file.
"""

from .builder import (
    RegistryEntry,
    StationRegistry,
    StationRegistryBuilder,
    format_registry,
    write_registry_file,
)
from .lookup import (
    ChainedCoordinateLookup,
    CoordinateLookup,
    InMemoryCoordinateLookup,
    StationFileCoordinateLookup,
)
from .manifest import ManifestEntry, read_station_manifest

__all__ = [
    'RegistryEntry',
    'StationRegistry',
    'StationRegistryBuilder',
    'format_registry',
    'write_registry_file',
    'ChainedCoordinateLookup',
    'CoordinateLookup',
    'InMemoryCoordinateLookup',
    'StationFileCoordinateLookup',
    'ManifestEntry',
    'read_station_manifest',
]
