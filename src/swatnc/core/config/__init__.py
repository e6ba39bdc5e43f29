# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""Configuration model and loader for the converter."""

from .loader import load_config
from .models import FROZEN_CONFIG, ConverterConfig

__all__ = ['ConverterConfig', 'FROZEN_CONFIG', 'load_config']
