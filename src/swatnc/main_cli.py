# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
swatnc Command-Line Interface entry point.

Provides the main() function behind the ``swatnc`` console script. Handles
argument parsing, runs the conversion and maps failures to exit codes:

- 0: conversion finished
- 1: converter, configuration or input error
- 130: interrupted by the user
"""


def main(argv=None):
    """
    Main entry point for the swatnc CLI.

    Args:
        argv: Argument list (for testing). If None, uses sys.argv.
    """
    import sys

    from swatnc.core.exceptions import SWATNCError

    # Windows consoles default to cp1252, which cannot encode the status glyphs
    if sys.platform == "win32":
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding="utf-8", errors="replace")

    from swatnc.cli.argument_parser import CLIParser
    from swatnc.cli.commands import ConvertCommands

    try:
        parser = CLIParser()
        args = parser.parse_args(argv)
        return ConvertCommands.convert(args)

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        return 130
    except (SWATNCError, FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:  # noqa: BLE001 - top-level fallback
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    import sys
    sys.exit(main())
