# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Command-line interface for swatnc."""

from .argument_parser import CLIParser

__all__ = ['CLIParser']
