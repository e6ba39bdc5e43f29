"""
Root conftest.py - fixtures shared across all tests.

Most tests need small SWAT TxtInOut directories on disk. ``write_station``
writes one weather station file; ``txtinout_dir`` builds a complete
directory with precipitation and temperature stations, a ``file.cio`` and a
weather-generator file.
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Sequence, Union

import pytest

from swatnc.core.config import ConverterConfig

Row = Union[float, Sequence[float]]


def _station_text(
    name: str,
    lat: float,
    lon: float,
    values: Sequence[Row],
    start: date,
    elev: float,
    sep: str,
) -> str:
    lines = [
        f"{name}: written by test fixture",
        "nbyr     tstep       lat       lon      elev",
        f"{name} 1 {lat} {lon} {elev}",
    ]
    for i, value in enumerate(values):
        day = start + timedelta(days=i)
        cols = value if isinstance(value, (list, tuple)) else [value]
        tokens = [str(day.year), str(day.timetuple().tm_yday)] + [str(v) for v in cols]
        lines.append(sep.join(tokens))
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_station() -> Callable[..., Path]:
    """Return a function writing one station file and returning its path.

    Usage: ``write_station(directory, 'a.pcp', lat, lon, [1.0, 2.0])``.
    Temperature rows are given as ``(tmax, tmin)`` tuples.
    """
    def _write(
        directory: Path,
        filename: str,
        lat: float,
        lon: float,
        values: Sequence[Row],
        start: date = date(2000, 1, 1),
        elev: float = 100.0,
        sep: str = ' ',
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(_station_text(filename, lat, lon, values, start, elev, sep))
        return path

    return _write


FILE_CIO = """file.cio: written by SWAT+ editor v2.3
simulation        time.sim          print.prt         object.prt        object.cnt        null
climate           weather-sta.cli   weather-wgn.cli   null              pcp.cli           tmp.cli           slr.cli           hmd.cli           wnd.cli           null
connect           hru.con           null              rout_unit.con     null              aqu.con           null
pcp_path          null
tmp_path          null
slr_path          null
hmd_path          null
wnd_path          null
"""


@pytest.fixture
def txtinout_dir(tmp_path, write_station) -> Path:
    """A TxtInOut directory with two precipitation and one temperature station.

    - ``a.pcp`` at (10.0, 20.0): 1, 2, 3 from 2000-01-01
    - ``b.pcp`` at (10.5, 20.5): 4, 5 from 2000-01-02
    - ``s1.tmp`` at (10.0, 20.0): (30, 10), (31, 11), (32, 12) from 2000-01-01
    """
    d = tmp_path / 'TxtInOut'
    write_station(d, 'a.pcp', 10.0, 20.0, [1.0, 2.0, 3.0])
    write_station(d, 'b.pcp', 10.5, 20.5, [4.0, 5.0], start=date(2000, 1, 2))
    write_station(d, 's1.tmp', 10.0, 20.0, [(30.0, 10.0), (31.0, 11.0), (32.0, 12.0)])
    (d / 'file.cio').write_text(FILE_CIO)
    (d / 'weather-wgn.cli').write_text("weather-wgn.cli: test\n")
    (d / 'hru.con').write_text("hru.con: test\n")
    (d / 'pcp.cli').write_text("pcp.cli: test\na.pcp\nb.pcp\n")
    return d


@pytest.fixture
def converter_config(tmp_path, txtinout_dir) -> ConverterConfig:
    """Configuration for converting ``txtinout_dir`` at 0.5 degrees."""
    return ConverterConfig(
        region='testregion',
        txtinout_dir=txtinout_dir,
        converted_dir=tmp_path / 'converted',
        climate_resolution=0.5,
        log_to_file=False,
        show_progress=False,
    )
