# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
TxtInOut staging.

Prepares the converted SWAT+ project directory: copies every ancillary
input that is not a weather file, and rewrites ``file.cio`` so the weather
entries point at the gridded NetCDF file and the ``netcdf.ncw`` station list.
"""

import logging
import shutil
from pathlib import Path
from typing import List

from swatnc.core.constants import WeatherFiles
from swatnc.core.exceptions import FileOperationError

logger = logging.getLogger(__name__)

# Weather inputs replaced by the NetCDF file; never copied
WEATHER_EXTENSIONS = ('.cli', '.tmp', '.wnd', '.slr', '.hmd', '.pcp', '.tem')

# file.cio keys rewritten to point at <region>.nc4
WEATHER_PATH_KEYS = ('pcp_path', 'tmp_path', 'slr_path', 'hmd_path', 'wnd_path', 'pet_path')

CLIMATE_LINE = (
    "climate           netcdf.ncw        weather-wgn.cli   null              null"
    "              null              null              null              null              null"
)


class TxtInOutStager:
    """Stage a SWAT+ TxtInOut directory for NetCDF weather input.

    Args:
        txtinout_dir: Original SWAT+ TxtInOut directory
        converted_dir: Output directory of the conversion
        region: Region name; the NetCDF file is ``<region>.nc4``
    """

    def __init__(self, txtinout_dir: Path, converted_dir: Path, region: str):
        self.txtinout_dir = Path(txtinout_dir)
        self.converted_dir = Path(converted_dir)
        self.region = region

    @property
    def file_cio(self) -> Path:
        return self.txtinout_dir / WeatherFiles.FILE_CIO

    def prepare_output_dir(self) -> None:
        try:
            created = not self.converted_dir.exists()
            self.converted_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Cannot create output directory {self.converted_dir}: {e}") from e
        if created:
            logger.info(f"Created output directory {self.converted_dir}")

    def stage(self) -> bool:
        """Copy ancillary files and rewrite file.cio.

        Returns:
            ``False`` if the input has no file.cio and nothing was staged.
        """
        self.prepare_output_dir()

        if not self.file_cio.is_file():
            logger.info(f"{WeatherFiles.FILE_CIO} not found. Skipping file copy and update.")
            return False

        copied = self.copy_ancillary_files()
        logger.info(f"Copied {len(copied)} project files to {self.converted_dir}")
        self.update_file_cio()
        return True

    def _is_ancillary(self, path: Path) -> bool:
        name = path.name
        if name.endswith('.txt') or name == WeatherFiles.STATION_MANIFEST:
            return False
        # Outputs of the conversion itself
        if name in (f"{self.region}.nc4", WeatherFiles.REGISTRY_FILE):
            return False
        return not name.endswith(WEATHER_EXTENSIONS)

    def copy_ancillary_files(self) -> List[Path]:
        copied = []
        for src in sorted(self.txtinout_dir.iterdir()):
            if not src.is_file() or not self._is_ancillary(src):
                continue
            copied.append(self._copy(src))

        # The weather generator is a .cli file but SWAT+ still needs it
        wgn = self.txtinout_dir / WeatherFiles.WEATHER_GENERATOR
        if wgn.is_file():
            copied.append(self._copy(wgn))
        return copied

    def _copy(self, src: Path) -> Path:
        dst = self.converted_dir / src.name
        try:
            shutil.copy2(src, dst)
        except OSError as e:
            raise FileOperationError(f"Copy failed for {src.name}: {e}") from e
        logger.debug(f"Copied {src.name}")
        return dst

    def rewrite_file_cio(self, content: str) -> str:
        """Return the rewritten file.cio text; the original title line is replaced."""
        out = [f"{WeatherFiles.FILE_CIO}: written by swatnc converter"]
        nc_name = f"{self.region}.nc4"

        for line in content.splitlines()[1:]:
            stripped = line.lstrip()
            key = next((k for k in WEATHER_PATH_KEYS if stripped.startswith(k)), None)
            if key is not None:
                out.append(f"{key:<18}{nc_name}   ")
            elif stripped.startswith('climate'):
                out.append(CLIMATE_LINE)
            else:
                out.append(line)
        return "\n".join(out) + "\n"

    def update_file_cio(self) -> Path:
        target = self.converted_dir / WeatherFiles.FILE_CIO
        try:
            content = self.file_cio.read_text(encoding='utf-8', errors='replace')
            target.write_text(self.rewrite_file_cio(content), encoding='utf-8')
        except OSError as e:
            raise FileOperationError(f"Cannot update {WeatherFiles.FILE_CIO}: {e}") from e
        logger.info(f"Updated {target}")
        return target
