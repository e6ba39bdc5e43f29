# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Convert command handler.

Builds the configuration from ``--config`` and the command-line options,
checks the input paths, sets up logging and runs the converter. Errors
propagate to ``main()``, which maps them to exit codes.
"""

from argparse import Namespace
from pathlib import Path

from swatnc.converter import ConversionResult, SWATNetCDFConverter
from swatnc.core.config import ConverterConfig, load_config
from swatnc.project import LoggingManager

from ..argument_parser import CLIParser


class ConvertCommands:
    """Handlers for the conversion command."""

    @staticmethod
    def load(args: Namespace) -> ConverterConfig:
        """Merge ``--config`` (if any) with the options given on the command line."""
        config_path = getattr(args, 'config', None)
        return load_config(
            Path(config_path) if config_path else None,
            overrides=CLIParser.config_overrides(args),
        )

    @staticmethod
    def validate_inputs(config: ConverterConfig) -> None:
        """
        Raises:
            FileNotFoundError: If the TxtInOut directory or shapefile is missing
        """
        if not config.txtinout_dir.is_dir():
            raise FileNotFoundError(f"TxtInOut directory not found: {config.txtinout_dir}")
        if config.shape_path is not None and not config.shape_path.exists():
            raise FileNotFoundError(f"Shapefile not found: {config.shape_path}")

    @staticmethod
    def convert(args: Namespace) -> int:
        """Run one conversion. Returns 0 on success."""
        config = ConvertCommands.load(args)
        ConvertCommands.validate_inputs(config)

        logging_manager = LoggingManager(config, debug_mode=getattr(args, 'debug', False))
        try:
            result = SWATNetCDFConverter(config, logging_manager).run()
            ConvertCommands.report(result)
        finally:
            logging_manager.close()
        return 0

    @staticmethod
    def report(result: ConversionResult) -> None:
        n_lat, n_lon = result.grid_shape
        print(f"✅ Wrote {result.output_path}")
        print(f"   Variables: {', '.join(result.variables) or 'none'}")
        print(f"   Grid: {n_lat} x {n_lon}, {result.timeline.step_count} days from {result.timeline.epoch}")
        print(f"   Station list: {result.registry_path} ({result.registry_source})")
