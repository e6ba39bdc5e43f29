# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
CF-1.8 convention helpers for the gridded climate file.

Provides the CF attributes of every SWAT weather variable and coordinate,
and a builder for the global attributes of the output file.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

import swatnc

# ---------------------------------------------------------------------------
# CF standard-name mapping
# ---------------------------------------------------------------------------
# Units are the SWAT units written by the converter, which are not always
# the CF canonical units (e.g. degC, MJ/m2). Consumers read ``units``.

CF_STANDARD_NAMES: Dict[str, Dict[str, str]] = {
    # --- Weather variables ---
    'pcp':  {'standard_name': 'precipitation_amount',
             'long_name': 'daily precipitation'},
    'tmax': {'standard_name': 'air_temperature',
             'long_name': 'daily maximum air temperature',
             'cell_methods': 'time: maximum'},
    'tmin': {'standard_name': 'air_temperature',
             'long_name': 'daily minimum air temperature',
             'cell_methods': 'time: minimum'},
    'slr':  {'standard_name': 'surface_downwelling_shortwave_flux_in_air',
             'long_name': 'daily solar radiation'},
    'hmd':  {'standard_name': 'relative_humidity',
             'long_name': 'relative humidity'},
    'wnd':  {'standard_name': 'wind_speed',
             'long_name': 'mean wind speed'},
    'pet':  {'standard_name': 'water_potential_evaporation_amount',
             'long_name': 'potential evapotranspiration'},

    # --- Coordinates ---
    'lat':  {'standard_name': 'latitude',
             'units': 'degrees_north',
             'long_name': 'latitude'},
    'lon':  {'standard_name': 'longitude',
             'units': 'degrees_east',
             'long_name': 'longitude'},
    'time': {'standard_name': 'time',
             'long_name': 'time',
             'calendar': 'proleptic_gregorian'},
}


# ---------------------------------------------------------------------------
# Global attribute builder
# ---------------------------------------------------------------------------

def build_global_attrs(
    region: str,
    title: str,
    history: Optional[str] = None,
    extra: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Build CF-1.8 global attributes for the gridded climate file.

    Args:
        region: Region identifier of the run.
        title: Human-readable title for the dataset.
        history: Optional processing history string.
        extra: Additional attributes (resolution, epoch, ...) merged last.

    Returns:
        Dict of global attributes ready to write with netCDF4.
    """
    now = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
    version = getattr(swatnc, '__version__', 'dev')

    attrs: Dict[str, str] = {
        'Conventions': 'CF-1.8',
        'title': title,
        'source_software': f'swatnc v{version}',
        'creation_date': now,
        'region': region,
    }
    if history:
        attrs['history'] = history
    if extra:
        attrs.update(extra)
    return attrs
