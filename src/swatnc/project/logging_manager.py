# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Logging setup for conversion runs.

Modules log through ``logging.getLogger(__name__)``; this manager attaches
the handlers to the ``swatnc`` package logger once per run: a console
handler and, optionally, a timestamped log file under
``<converted_dir>/_logs/``.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Optional, Tuple

if TYPE_CHECKING:
    from swatnc.core.config import ConverterConfig
    from swatnc.data.gridding import GlobalExtent, Timeline

PACKAGE_LOGGER = 'swatnc'
CONSOLE_FORMAT = '%(asctime)s | %(levelname)-7s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-7s | %(name)s | %(message)s'
DATE_FORMAT = '%H:%M:%S'


class LoggingManager:
    """Configure the package logger for one run.

    Args:
        config: Run configuration (region, output directory, log_to_file)
        debug_mode: Log DEBUG to the console instead of INFO
    """

    def __init__(self, config: 'ConverterConfig', debug_mode: bool = False):
        self.config = config
        self.debug_mode = debug_mode
        self.log_file: Optional[Path] = None
        self.logger = self.setup_logging()

    def setup_logging(self) -> logging.Logger:
        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.setLevel(logging.DEBUG)
        # Re-running in one process must not duplicate output
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = False

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.DEBUG if self.debug_mode else logging.INFO)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
        logger.addHandler(console)

        if self.config.log_to_file:
            log_dir = self.config.converted_dir / '_logs'
            log_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            self.log_file = log_dir / f"swatnc_{self.config.region}_{stamp}.log"
            file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            logger.addHandler(file_handler)

        return logger

    def log_run_summary(
        self,
        station_counts: Mapping[str, int],
        extent: 'GlobalExtent',
        timeline: 'Timeline',
        grid_shape: Tuple[int, int],
    ) -> None:
        log_run_summary(self.logger, station_counts, extent, timeline, grid_shape)

    def close(self) -> None:
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True


def log_run_summary(
    logger: logging.Logger,
    station_counts: Mapping[str, int],
    extent: 'GlobalExtent',
    timeline: 'Timeline',
    grid_shape: Tuple[int, int],
) -> None:
    """Log what the run is about to rasterize.

    Written before any slice is produced so a later failure can be
    diagnosed from the log alone.
    """
    logger.info("Stations parsed per variable:")
    for name, count in station_counts.items():
        logger.info(f"  {name:<6} {count}")
    logger.info(f"Final Grid Bounds: {extent}")
    logger.info(f"Grid: {grid_shape[0]}x{grid_shape[1]}, Time steps: {timeline.step_count}")
    logger.info(f"Start Date: {timeline.epoch.isoformat()}, End Date: {timeline.end_date.isoformat()}")
