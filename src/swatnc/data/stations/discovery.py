# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Station file discovery and loading.

Discovery groups the weather files of a TxtInOut directory by variable and
fixes their order (sorted by file name), so the rasterizer's first-wins rule
does not depend on how the platform lists directories. Loading parses every
file for every variable of its group and returns one ``VariableSeries`` per
variable.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from swatnc.core.constants import EXTENSION_GROUPS, GROUP_ORDER, VARIABLE_GROUPS, VariableSpec

from .models import Station, VariableSeries
from .parser import parse_station_file

logger = logging.getLogger(__name__)


def discover_station_files(txtinout_dir: Path) -> Dict[str, List[Path]]:
    """Group the weather files of a directory by variable group.

    If any ``.tem`` file exists, ``.tem`` files supply temperature and every
    ``.tmp`` file is ignored; otherwise ``.tmp`` files are used.

    Args:
        txtinout_dir: Directory to scan (not recursive)

    Returns:
        Mapping of group name (``'pcp'``, ``'tmp'``, ...) to files sorted by
        name. Groups without files are omitted.
    """
    txtinout_dir = Path(txtinout_dir)
    files = sorted(
        (p for p in txtinout_dir.iterdir() if p.is_file()),
        key=lambda p: p.name,
    )

    use_tem = any(p.suffix == '.tem' for p in files)
    if use_tem:
        logger.info("Found .tem files. Using .tem for temperature and ignoring .tmp files.")

    groups: Dict[str, List[Path]] = {}
    for path in files:
        ext = path.suffix
        if ext not in EXTENSION_GROUPS:
            continue
        if ext == '.tmp' and use_tem:
            continue
        if ext == '.tem' and not use_tem:
            continue
        groups.setdefault(EXTENSION_GROUPS[ext], []).append(path)

    return groups


def _parse_task(task: Tuple[Path, VariableSpec]) -> Optional[Station]:
    path, spec = task
    return parse_station_file(path, spec)


def load_weather_data(
    files_by_group: Dict[str, Sequence[Path]],
    workers: int = 1,
    show_progress: bool = False,
) -> List[VariableSeries]:
    """Parse station files into one ``VariableSeries`` per variable.

    The order of files within each group is kept as given; ``executor.map``
    returns results in submission order, so the outcome is identical for any
    worker count.

    Args:
        files_by_group: Output of :func:`discover_station_files` (or any
            explicitly ordered mapping of the same shape)
        workers: Number of parser threads
        show_progress: Show a tqdm progress bar per group

    Returns:
        Series in output order (``pcp, hmd, slr, wnd, tmax, tmin, pet``) for
        every group that has files. A series may be empty if every file of
        its group was dropped.
    """
    series: List[VariableSeries] = []

    for group in GROUP_ORDER:
        paths = list(files_by_group.get(group, ()))
        if not paths:
            logger.debug(f"No files for {group}, skipping")
            continue

        specs = VARIABLE_GROUPS[group]
        # File-major order: every column of a file before the next file
        tasks = [(path, spec) for path in paths for spec in specs]

        results = _run_tasks(tasks, workers, show_progress, desc=f"Parsing {group}")

        by_variable: Dict[str, List[Station]] = {spec.name: [] for spec in specs}
        for (_, spec), station in zip(tasks, results):
            if station is not None:
                by_variable[spec.name].append(station)

        for spec in specs:
            stations = by_variable[spec.name]
            logger.info(f"Parsed {len(stations)}/{len(paths)} {spec.name} stations")
            series.append(VariableSeries(spec=spec, stations=tuple(stations)))

    return series


def _run_tasks(
    tasks: List[Tuple[Path, VariableSpec]],
    workers: int,
    show_progress: bool,
    desc: str,
) -> List[Optional[Station]]:
    if workers <= 1:
        iterator: Iterable[Optional[Station]] = map(_parse_task, tasks)
        return list(tqdm(iterator, total=len(tasks), desc=desc, disable=not show_progress))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        iterator = executor.map(_parse_task, tasks)
        return list(tqdm(iterator, total=len(tasks), desc=desc, disable=not show_progress))
