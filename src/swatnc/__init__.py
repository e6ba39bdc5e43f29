# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

# src/swatnc/__init__.py
try:
    from .swatnc_version import __version__
except ImportError:
    try:
        from importlib.metadata import version, PackageNotFoundError
        __version__ = version("swatnc")
    except (ImportError, PackageNotFoundError):
        __version__ = "0.0.0"

from .converter import ConversionResult, SWATNetCDFConverter

__all__ = ["SWATNetCDFConverter", "ConversionResult", "__version__"]
