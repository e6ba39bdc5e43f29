# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Global daily timeline.

Every station is placed on one shared axis that starts at the earliest
station start date (the epoch). Offsets are plain calendar-day differences.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from swatnc.core.exceptions import GridPreconditionError

from ..stations.models import Station, VariableSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Timeline:
    """Epoch and number of daily steps of the output time axis."""
    epoch: date
    step_count: int

    def offset_of(self, station: Station) -> int:
        """Day index of ``station.start_date`` on this axis."""
        return days_between(self.epoch, station.start_date)

    def date_at(self, step: int) -> date:
        return self.epoch + timedelta(days=step)

    @property
    def end_date(self) -> date:
        return self.date_at(self.step_count - 1)

    @property
    def time_units(self) -> str:
        """CF units string for the time coordinate."""
        return f"days since {self.epoch.isoformat()} 00:00:00"


def days_between(start: date, end: date) -> int:
    return (end - start).days


def align_timeline(
    series: Iterable[VariableSeries],
    stop_date: Optional[date] = None,
    truncate_at_stop_date: bool = False,
) -> Timeline:
    """Compute the shared timeline of all stations.

    Args:
        series: All parsed variables
        stop_date: Configured stop date. Recorded only, unless
            ``truncate_at_stop_date`` is set
        truncate_at_stop_date: Cap the axis so it ends on ``stop_date``

    Returns:
        ``Timeline`` whose epoch is the minimum start date and whose step count
        covers the longest ``offset + len(values)``

    Raises:
        GridPreconditionError: ``start_dates`` if there are no stations,
            ``step_count`` if the axis would be empty
    """
    stations = [s for var in series for s in var.stations]
    if not stations:
        raise GridPreconditionError('start_dates', "No station has a valid start date")

    epoch = min(s.start_date for s in stations)
    step_count = max(days_between(epoch, s.start_date) + len(s.values) for s in stations)

    if stop_date is not None:
        available = days_between(epoch, stop_date) + 1
        if truncate_at_stop_date:
            if available < step_count:
                logger.info(f"Truncating time axis at stop date {stop_date}: {step_count} -> {max(available, 0)} steps")
            step_count = min(step_count, available)
        elif available < step_count:
            logger.warning(
                f"Stop date {stop_date} precedes the last station value; "
                "it is not applied (TRUNCATE_AT_STOP_DATE is off)"
            )

    if step_count < 1:
        raise GridPreconditionError('step_count', f"Timeline from {epoch} has no steps")

    return Timeline(epoch=epoch, step_count=step_count)
