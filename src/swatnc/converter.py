# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
SWAT TxtInOut to NetCDF conversion.

Runs the phases of one conversion in order, with a full barrier between
them:

1. Create the output directory
2. Read the optional boundary extent
3. Discover and parse every station file
4. Resolve the grid extent and the shared timeline
5. Rasterize each variable into ``<converted_dir>/<region>.nc4``
6. Write the ``netcdf.ncw`` station registry
7. Stage the project files (ancillary files, rewritten ``file.cio``)

A failed run leaves no ``file.cio`` pointing at a missing NetCDF file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from swatnc.core.config import ConverterConfig
from swatnc.core.constants import GridConstants
from swatnc.core.exceptions import FileOperationError, swatnc_error_handler
from swatnc.data.gridding import (
    GlobalExtent,
    GridRasterizer,
    GridSink,
    NetCDFGridSink,
    Timeline,
    align_timeline,
    build_global_attrs,
    resolve_extent,
)
from swatnc.data.registry import StationRegistry, StationRegistryBuilder, write_registry_file
from swatnc.data.stations import VariableSeries, discover_station_files, load_weather_data
from swatnc.geospatial import read_boundary_extent
from swatnc.project import LoggingManager, TxtInOutStager, log_run_summary

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """What a finished run produced."""
    output_path: Path
    registry_path: Path
    extent: GlobalExtent
    timeline: Timeline
    grid_shape: Tuple[int, int]
    station_counts: Dict[str, int] = field(default_factory=dict)
    registry_source: str = 'derived'
    staged: bool = False

    @property
    def variables(self) -> List[str]:
        """Variables written to the NetCDF file."""
        return [name for name, count in self.station_counts.items() if count > 0]


class SWATNetCDFConverter:
    """Convert a SWAT TxtInOut weather directory to a gridded NetCDF file.

    Args:
        config: Validated run configuration
        logging_manager: Optional manager whose logger receives the run
            summary; without one the module logger is used
    """

    def __init__(self, config: ConverterConfig, logging_manager: Optional[LoggingManager] = None):
        self.config = config
        self.logging_manager = logging_manager
        self.stager = TxtInOutStager(config.txtinout_dir, config.converted_dir, config.region)

    def run(self) -> ConversionResult:
        """Run every phase and return the result.

        Raises:
            GridPreconditionError: Nothing to grid, no dates, empty or
                inverted grid
            GeospatialError: The boundary file cannot be read
            FileOperationError: An output file cannot be written
        """
        cfg = self.config
        logger.info(f"Converting {cfg.txtinout_dir} -> {cfg.output_path}")

        self.stager.prepare_output_dir()
        external = self._boundary_extent()
        series = self._load_series()

        extent = resolve_extent(
            series,
            cfg.climate_resolution,
            external=external,
            allow_global_fallback=cfg.global_extent_fallback,
        )
        timeline = align_timeline(
            series,
            stop_date=cfg.stop_date,
            truncate_at_stop_date=cfg.truncate_at_stop_date,
        )
        rasterizer = GridRasterizer(extent, cfg.climate_resolution, timeline)

        station_counts = {var.name: len(var) for var in series}
        self._log_summary(station_counts, extent, timeline, rasterizer.shape)

        self.write_netcdf(series, rasterizer)
        registry = self.build_registry(series)
        staged = self._stage()

        logger.info(f"Conversion complete: {cfg.output_path}")
        return ConversionResult(
            output_path=cfg.output_path,
            registry_path=cfg.registry_path,
            extent=extent,
            timeline=timeline,
            grid_shape=rasterizer.shape,
            station_counts=station_counts,
            registry_source=registry.source,
            staged=staged,
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _stage(self) -> bool:
        if not self.config.stage_project_files:
            return False
        return self.stager.stage()

    def _boundary_extent(self) -> Optional[Tuple[float, float, float, float]]:
        if self.config.shape_path is None:
            return None
        return read_boundary_extent(self.config.shape_path)

    def _load_series(self) -> List[VariableSeries]:
        files = discover_station_files(self.config.txtinout_dir)
        if files:
            counts = ", ".join(f"{group}={len(paths)}" for group, paths in files.items())
            logger.info(f"Found station files: {counts}")
        else:
            logger.warning(f"No weather station files found in {self.config.txtinout_dir}")
        return load_weather_data(
            files,
            workers=self.config.parse_workers,
            show_progress=self.config.show_progress,
        )

    def _log_summary(self, station_counts, extent, timeline, grid_shape) -> None:
        if self.logging_manager is not None:
            self.logging_manager.log_run_summary(station_counts, extent, timeline, grid_shape)
        else:
            log_run_summary(logger, station_counts, extent, timeline, grid_shape)

    def _global_attrs(self, timeline: Timeline) -> Dict[str, str]:
        cfg = self.config
        return build_global_attrs(
            region=cfg.region,
            title=f'{cfg.region} gridded SWAT+ climate',
            history=f'Converted from SWAT weather station files in {cfg.txtinout_dir}',
            extra={
                'climate_resolution': str(cfg.climate_resolution),
                'epoch': timeline.epoch.isoformat(),
                'stop_date': cfg.stop_date.isoformat(),
                'truncate_at_stop_date': str(cfg.truncate_at_stop_date).lower(),
            },
        )

    def write_netcdf(self, series: List[VariableSeries], rasterizer: GridRasterizer) -> Path:
        """Rasterize every non-empty variable into the output file.

        A partially written file is removed before the error propagates.
        """
        path = self.config.output_path
        sink = NetCDFGridSink(path, global_attrs=self._global_attrs(rasterizer.timeline))
        try:
            with swatnc_error_handler(f"writing {path.name}", logger, error_type=FileOperationError):
                with sink:
                    self.write_to_sink(sink, series, rasterizer)
        except Exception:
            self._remove_partial(path)
            raise
        return path

    @staticmethod
    def write_to_sink(sink: GridSink, series: List[VariableSeries], rasterizer: GridRasterizer) -> None:
        """Write dimensions, coordinates and every slice through ``sink``."""
        timeline = rasterizer.timeline
        axes = rasterizer.axes
        n_lat, n_lon = rasterizer.shape

        sink.declare_dimensions(timeline.step_count, n_lat, n_lon)
        sink.write_coordinates(axes.lat, axes.lon, range(timeline.step_count), timeline.time_units)

        for var in series:
            if len(var) == 0:
                logger.warning(f"No stations loaded for {var.name}; variable not written")
                continue
            sink.create_variable(
                var.name,
                var.unit,
                GridConstants.MISSING_VALUE,
                attrs={'long_name': var.spec.long_name},
            )
            logger.info(f"Writing {var.name} ({len(var)} stations)")
            for step, grid in rasterizer.rasterize(var):
                sink.write_slice(var.name, step, grid)

    def build_registry(self, series: List[VariableSeries]) -> StationRegistry:
        builder = StationRegistryBuilder(series, self.config.txtinout_dir)
        registry = builder.build(self.config.manifest_path)
        write_registry_file(registry, self.config.registry_path)
        logger.info(f"Station list has {len(registry)} stations ({registry.source})")
        return registry

    @staticmethod
    def _remove_partial(path: Path) -> None:
        if path.exists():
            logger.warning(f"Removing partial output {path}")
            try:
                path.unlink()
            except OSError as e:
                logger.error(f"Could not remove partial output {path}: {e}")
