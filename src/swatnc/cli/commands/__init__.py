# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Command handlers for the swatnc CLI."""

from .convert_commands import ConvertCommands

__all__ = ['ConvertCommands']
