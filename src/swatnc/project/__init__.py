# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Project-level glue: logging and TxtInOut staging."""

from .logging_manager import LoggingManager, log_run_summary
from .txtinout import TxtInOutStager

__all__ = ['LoggingManager', 'TxtInOutStager', 'log_run_summary']
