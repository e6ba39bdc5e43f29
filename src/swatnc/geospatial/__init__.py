# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

from .boundary import read_boundary_extent

__all__ = ['read_boundary_extent']
