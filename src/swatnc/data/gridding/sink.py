# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Output sinks for gridded slices.

The converter only needs a sink that can declare the three dimensions,
write the coordinate arrays, create one variable per weather variable and
accept 2-D slices in time order. ``NetCDFGridSink`` implements that on top
of netCDF4; tests can substitute any object with the same methods.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Sequence

import netCDF4
import numpy as np

from swatnc.core.constants import GridConstants
from swatnc.core.exceptions import FileOperationError, require

from .cf_conventions import CF_STANDARD_NAMES

logger = logging.getLogger(__name__)


class GridSink(Protocol):
    """Interface the converter writes through."""

    def declare_dimensions(self, n_time: int, n_lat: int, n_lon: int) -> None: ...

    def write_coordinates(
        self, lat: np.ndarray, lon: np.ndarray, time: Sequence[int], time_units: str
    ) -> None: ...

    def create_variable(self, name: str, unit: str, missing_value: float,
                        attrs: Optional[Dict[str, str]] = None) -> None: ...

    def write_slice(self, name: str, step: int, grid: np.ndarray) -> None: ...

    def close(self) -> None: ...


class NetCDFGridSink:
    """Write the grid-time cube to a NetCDF4 file.

    Parameters
    ----------
    path : Path
        Output file; replaced if it exists.
    global_attrs : dict, optional
        Global attributes set when the file is opened.
    compress : bool
        zlib-compress data variables (default ``True``).
    """

    def __init__(
        self,
        path: Path,
        global_attrs: Optional[Dict[str, str]] = None,
        compress: bool = True,
    ) -> None:
        self.path = Path(path)
        self.global_attrs = global_attrs or {}
        self.compress = compress
        self._ds: Optional[netCDF4.Dataset] = None
        self._shape = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> 'NetCDFGridSink':
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._ds = netCDF4.Dataset(str(self.path), 'w', format='NETCDF4')
        except (OSError, RuntimeError) as e:
            raise FileOperationError(f"Cannot create NetCDF file {self.path}: {e}") from e

        if self.global_attrs:
            self._ds.setncatts(self.global_attrs)
        logger.info(f"Creating NetCDF file: {self.path}")
        return self

    def close(self) -> None:
        if self._ds is not None:
            self._ds.close()
            self._ds = None

    def __enter__(self) -> 'NetCDFGridSink':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def dataset(self) -> netCDF4.Dataset:
        if self._ds is None:
            raise FileOperationError(f"NetCDF sink for {self.path} is not open")
        return self._ds

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def declare_dimensions(self, n_time: int, n_lat: int, n_lon: int) -> None:
        ds = self.dataset
        ds.createDimension('time', n_time)
        ds.createDimension('lat', n_lat)
        ds.createDimension('lon', n_lon)
        self._shape = (n_time, n_lat, n_lon)

    def write_coordinates(
        self, lat: np.ndarray, lon: np.ndarray, time: Sequence[int], time_units: str
    ) -> None:
        ds = self.dataset

        lat_var = ds.createVariable('lat', 'f8', ('lat',))
        lat_var.setncatts(CF_STANDARD_NAMES['lat'])
        lat_var[:] = lat

        lon_var = ds.createVariable('lon', 'f8', ('lon',))
        lon_var.setncatts(CF_STANDARD_NAMES['lon'])
        lon_var[:] = lon

        time_var = ds.createVariable('time', 'i4', ('time',))
        time_var.setncatts(CF_STANDARD_NAMES['time'])
        time_var.units = time_units
        time_var[:] = np.asarray(time, dtype=np.int32)

    def create_variable(self, name: str, unit: str, missing_value: float,
                        attrs: Optional[Dict[str, str]] = None) -> None:
        ds = self.dataset
        fill = GridConstants.DATA_DTYPE(missing_value)
        var = ds.createVariable(
            name, 'f4', ('time', 'lat', 'lon'),
            zlib=self.compress, fill_value=fill,
        )
        for key, value in CF_STANDARD_NAMES.get(name, {}).items():
            var.setncattr(key, value)
        if attrs:
            var.setncatts(attrs)
        var.units = unit
        var.missing_value = fill

    def write_slice(self, name: str, step: int, grid: np.ndarray) -> None:
        require(self._shape is not None, "Dimensions must be declared before writing slices",
                FileOperationError)
        require(grid.shape == self._shape[1:],
                f"Slice shape {grid.shape} does not match grid {self._shape[1:]}",
                FileOperationError)
        self.dataset.variables[name][step, :, :] = grid
