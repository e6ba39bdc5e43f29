# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
swatnc CLI Argument Parser.

One command: convert a SWAT TxtInOut directory into a gridded NetCDF file.
Options map onto ``ConverterConfig`` fields; the camelCase spellings of the
legacy converter (``--txtInOutDir``, ``--climateResolution``, ...) are
accepted as aliases.

Options not given on the command line are absent from the namespace, so a
YAML file passed with ``--config`` is only overridden by what the user
actually typed.
"""

import argparse
from datetime import date
from typing import Any, Dict, List, Optional

try:
    from swatnc.swatnc_version import __version__
except ImportError:
    __version__ = "0+unknown"

# Namespace entries that are not configuration fields
NON_CONFIG_ARGS = ('config', 'debug', 'func')


def parse_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date for argparse."""
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not a number: '{value}'") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive, got {number}")
    return number


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not an integer: '{value}'") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1, got {number}")
    return number


class CLIParser:
    """
    Argument parser for the ``swatnc`` command.

    Attributes:
        parser: The configured ``argparse.ArgumentParser``
    """

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        # SUPPRESS keeps unset options out of the namespace
        parser = argparse.ArgumentParser(
            prog='swatnc',
            description='Convert SWAT+ TxtInOut weather station files to a gridded NetCDF climate file',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            argument_default=argparse.SUPPRESS,
            epilog="""
Examples:
  swatnc --region bow --txtinout-dir ./TxtInOut --converted-dir ./out
  swatnc --region bow --txtInOutDir ./TxtInOut --convertedDir ./out --climateResolution 0.1
  swatnc --config convert.yaml --workers 4
"""
        )

        parser.add_argument('--version', action='version',
                            version=f'swatnc {__version__}')

        inputs = parser.add_argument_group('inputs')
        inputs.add_argument('--region', type=str,
                            help='Region name; output file is <converted-dir>/<region>.nc4')
        inputs.add_argument('--txtinout-dir', '--txtInOutDir', dest='txtinout_dir', type=str,
                            help='SWAT+ TxtInOut directory holding the weather station files')
        inputs.add_argument('--converted-dir', '--convertedDir', dest='converted_dir', type=str,
                            help='Output directory')
        inputs.add_argument('--shape-path', '--shapePath', dest='shape_path', type=str,
                            help='Boundary shapefile; its bounds become the grid extent')
        inputs.add_argument('--config', type=str,
                            help='YAML configuration file (command-line options take precedence)')

        grid = parser.add_argument_group('grid')
        grid.add_argument('--climate-resolution', '--climateResolution', dest='climate_resolution',
                          type=positive_float,
                          help='Grid cell size in degrees (default: 0.25)')
        grid.add_argument('--stop-date', '--stopDate', dest='stop_date', type=parse_date,
                          help='Stop date YYYY-MM-DD (default: 2500-12-31)')
        grid.add_argument('--truncate-at-stop-date', dest='truncate_at_stop_date', action='store_true',
                          help='End the time axis at the stop date')
        grid.add_argument('--global-fallback', dest='global_extent_fallback', action='store_true',
                          help='Grid the whole globe when no station or boundary gives an extent')

        run = parser.add_argument_group('run')
        run.add_argument('--workers', dest='parse_workers', type=positive_int,
                         help='Threads used to parse station files (default: 1)')
        run.add_argument('--no-progress', dest='show_progress', action='store_false',
                         help='Disable progress bars')
        run.add_argument('--no-log-file', dest='log_to_file', action='store_false',
                         help='Do not write a log file under <converted-dir>/_logs')
        run.add_argument('--debug', action='store_true',
                         help='Enable debug output')

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: List of argument strings (for testing). If None, uses sys.argv.

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    @staticmethod
    def config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
        """Configuration fields given on the command line."""
        return {k: v for k, v in vars(args).items() if k not in NON_CONFIG_ARGS}
