# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Configuration model for the SWAT NetCDF converter.

A single frozen pydantic model. Fields accept either their Python name or
the upper-case alias used in YAML files and environment variables
(``climate_resolution`` / ``CLIMATE_RESOLUTION``).
"""

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swatnc.core.constants import GridConstants, WeatherFiles

# Standard ConfigDict for all config models
FROZEN_CONFIG = ConfigDict(extra='allow', populate_by_name=True, frozen=True)


class ConverterConfig(BaseModel):
    """Settings for one TxtInOut → NetCDF conversion run"""
    model_config = FROZEN_CONFIG

    # Required
    region: str = Field(alias='REGION')
    txtinout_dir: Path = Field(alias='TXTINOUT_DIR')
    converted_dir: Path = Field(alias='CONVERTED_DIR')

    # Grid
    climate_resolution: float = Field(default=GridConstants.DEFAULT_RESOLUTION, alias='CLIMATE_RESOLUTION')
    shape_path: Optional[Path] = Field(default=None, alias='SHAPE_PATH')
    global_extent_fallback: bool = Field(default=False, alias='GLOBAL_EXTENT_FALLBACK')

    # Time axis
    stop_date: date = Field(default=date.fromisoformat(GridConstants.DEFAULT_STOP_DATE), alias='STOP_DATE')
    truncate_at_stop_date: bool = Field(default=False, alias='TRUNCATE_AT_STOP_DATE')

    # Inputs and staging
    station_manifest: str = Field(default=WeatherFiles.STATION_MANIFEST, alias='STATION_MANIFEST')
    stage_project_files: bool = Field(default=True, alias='STAGE_PROJECT_FILES')
    parse_workers: int = Field(default=1, alias='PARSE_WORKERS')

    # Presentation
    log_to_file: bool = Field(default=True, alias='LOG_TO_FILE')
    show_progress: bool = Field(default=True, alias='SHOW_PROGRESS')

    @field_validator('region')
    @classmethod
    def validate_region(cls, v):
        """Region names become file names; reject empty and path-like values."""
        v = v.strip()
        if not v:
            raise ValueError("REGION must not be empty")
        if '/' in v or '\\' in v:
            raise ValueError(f"REGION must not contain path separators, got '{v}'")
        return v

    @field_validator('climate_resolution')
    @classmethod
    def validate_resolution(cls, v):
        """Ensure the grid resolution is positive."""
        if v <= 0:
            raise ValueError(f"CLIMATE_RESOLUTION must be positive, got {v}")
        return v

    @field_validator('parse_workers')
    @classmethod
    def validate_workers(cls, v):
        if v < 1:
            raise ValueError(f"PARSE_WORKERS must be at least 1, got {v}")
        return v

    @field_validator('shape_path', mode='before')
    @classmethod
    def normalize_shape_path(cls, v):
        """Treat empty strings as 'no shapefile'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    @property
    def output_path(self) -> Path:
        """Gridded NetCDF written by the run."""
        return self.converted_dir / f"{self.region}.nc4"

    @property
    def registry_path(self) -> Path:
        """Station registry companion file."""
        return self.converted_dir / WeatherFiles.REGISTRY_FILE

    @property
    def manifest_path(self) -> Path:
        return self.txtinout_dir / self.station_manifest

    def to_dict(self) -> Dict[str, Any]:
        """Flat, alias-keyed representation (mirrors the YAML layout)."""
        return self.model_dump(by_alias=True, mode='json')
