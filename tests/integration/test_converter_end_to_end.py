"""End-to-end conversion of a small TxtInOut directory."""

import logging
from datetime import date

import numpy as np
import pytest

from swatnc import SWATNetCDFConverter
from swatnc.core.exceptions import FileOperationError, GridPreconditionError
from swatnc.data.gridding import GlobalExtent
from swatnc.main_cli import main

netCDF4 = pytest.importorskip('netCDF4')

pytestmark = [pytest.mark.integration, pytest.mark.requires_netcdf]

MISSING = np.float32(-9999.0)


class TestConversion:
    """Grid for the ``txtinout_dir`` fixture at 0.5 degrees.

    Station bounds are lat [10, 10.5], lon [20, 20.5]; with the one-cell
    buffer the grid spans [9.5, 11.0] x [19.5, 21.0], 4 x 4 cells. ``a.pcp``
    and ``s1.tmp`` sit in cell (1, 1), ``b.pcp`` in cell (2, 2).
    """

    @pytest.fixture
    def result(self, converter_config):
        return SWATNetCDFConverter(converter_config).run()

    def test_result(self, result, converter_config):
        assert result.output_path == converter_config.converted_dir / 'testregion.nc4'
        assert result.extent == GlobalExtent(9.5, 11.0, 19.5, 21.0)
        assert result.grid_shape == (4, 4)
        assert result.timeline.epoch == date(2000, 1, 1)
        assert result.timeline.step_count == 3
        assert result.station_counts == {'pcp': 2, 'tmax': 1, 'tmin': 1}
        assert result.variables == ['pcp', 'tmax', 'tmin']
        assert result.staged is True

    def test_netcdf_content(self, result):
        with netCDF4.Dataset(str(result.output_path)) as ds:
            ds.set_auto_mask(False)
            assert set(ds.variables) == {'time', 'lat', 'lon', 'pcp', 'tmax', 'tmin'}
            np.testing.assert_allclose(ds['lat'][:], [9.5, 10.0, 10.5, 11.0])
            np.testing.assert_allclose(ds['lon'][:], [19.5, 20.0, 20.5, 21.0])
            np.testing.assert_array_equal(ds['time'][:], [0, 1, 2])
            assert ds['time'].units == "days since 2000-01-01 00:00:00"

            pcp = ds['pcp'][:]
            assert list(pcp[:, 1, 1]) == [1.0, 2.0, 3.0]
            assert list(pcp[:, 2, 2]) == [MISSING, 4.0, 5.0]
            assert pcp[0, 0, 0] == MISSING

            assert list(ds['tmax'][:, 1, 1]) == [30.0, 31.0, 32.0]
            assert list(ds['tmin'][:, 1, 1]) == [10.0, 11.0, 12.0]
            assert ds['tmax'].units == 'degC'

    def test_global_attributes(self, result):
        with netCDF4.Dataset(str(result.output_path)) as ds:
            assert ds.Conventions == 'CF-1.8'
            assert ds.region == 'testregion'
            assert ds.epoch == '2000-01-01'
            assert ds.stop_date == '2500-12-31'
            assert ds.climate_resolution == '0.5'

    def test_registry_written(self, result):
        lines = result.registry_path.read_text().splitlines()
        assert result.registry_source == 'derived'
        assert [line.split()[0] for line in lines[2:]] == ['a.pcp', 'b.pcp', 's1.tmp']
        assert all(line.split()[-1] == 'null' for line in lines[2:])

    def test_project_files_staged(self, result, converter_config):
        out = converter_config.converted_dir
        assert (out / 'hru.con').is_file()
        assert (out / 'weather-wgn.cli').is_file()
        assert not (out / 'a.pcp').exists()
        assert 'testregion.nc4' in (out / 'file.cio').read_text()


class TestConversionOptions:

    def test_manifest_registry(self, converter_config, txtinout_dir):
        (txtinout_dir / 'weather-sta.cli').write_text(
            "weather-sta.cli: test\n"
            "name wgn pcp tmp slr hmd wnd wnd_dir atmo_dep\n"
            "gauge_1 wgn_7 a.pcp s1.tmp null null null null null\n"
        )
        result = SWATNetCDFConverter(converter_config).run()
        lines = result.registry_path.read_text().splitlines()
        assert result.registry_source == 'manifest'
        assert lines[2].split()[:3] == ['gauge_1', 'wgn_7', '10.000']

    def test_truncate_at_stop_date(self, converter_config):
        cfg = converter_config.model_copy(update={
            'stop_date': date(2000, 1, 2),
            'truncate_at_stop_date': True,
        })
        result = SWATNetCDFConverter(cfg).run()
        assert result.timeline.step_count == 2
        with netCDF4.Dataset(str(result.output_path)) as ds:
            assert len(ds.dimensions['time']) == 2

    def test_no_staging(self, converter_config):
        cfg = converter_config.model_copy(update={'stage_project_files': False})
        result = SWATNetCDFConverter(cfg).run()
        assert result.staged is False
        assert not (cfg.converted_dir / 'file.cio').exists()
        assert result.output_path.is_file()

    def test_parallel_parsing_same_output(self, converter_config, tmp_path):
        serial = SWATNetCDFConverter(converter_config).run()
        with netCDF4.Dataset(str(serial.output_path)) as ds:
            expected = ds['pcp'][:].copy()

        cfg = converter_config.model_copy(update={
            'parse_workers': 3,
            'converted_dir': tmp_path / 'parallel',
        })
        threaded = SWATNetCDFConverter(cfg).run()
        with netCDF4.Dataset(str(threaded.output_path)) as ds:
            np.testing.assert_array_equal(ds['pcp'][:], expected)

    @pytest.mark.parametrize("lat, lon", [(float('nan'), 20.0), (10.0, float('inf'))])
    def test_non_finite_station_dropped(self, converter_config, txtinout_dir, write_station, lat, lon):
        write_station(txtinout_dir, 'zz.pcp', lat, lon, [9.0, 9.0, 9.0])
        result = SWATNetCDFConverter(converter_config).run()
        assert result.station_counts['pcp'] == 2
        assert result.extent == GlobalExtent(9.5, 11.0, 19.5, 21.0)
        with netCDF4.Dataset(str(result.output_path)) as ds:
            ds.set_auto_mask(False)
            assert not np.any(ds['pcp'][:] == 9.0)


class TestConversionFailures:

    def test_empty_directory(self, tmp_path, converter_config):
        empty = tmp_path / 'empty'
        empty.mkdir()
        cfg = converter_config.model_copy(update={'txtinout_dir': empty})
        with pytest.raises(GridPreconditionError) as exc_info:
            SWATNetCDFConverter(cfg).run()
        assert exc_info.value.precondition == 'spatial_reference'
        assert not cfg.output_path.exists()

    def test_global_fallback_still_needs_dates(self, tmp_path, converter_config):
        empty = tmp_path / 'empty'
        empty.mkdir()
        cfg = converter_config.model_copy(update={'txtinout_dir': empty, 'global_extent_fallback': True})
        with pytest.raises(GridPreconditionError) as exc_info:
            SWATNetCDFConverter(cfg).run()
        assert exc_info.value.precondition == 'start_dates'

    def test_partial_output_removed(self, converter_config, monkeypatch):
        def failing_write(sink, series, rasterizer):
            sink.declare_dimensions(1, 1, 1)
            raise OSError("disk full")

        monkeypatch.setattr(SWATNetCDFConverter, 'write_to_sink', staticmethod(failing_write))
        with pytest.raises(FileOperationError) as exc_info:
            SWATNetCDFConverter(converter_config).run()
        assert isinstance(exc_info.value.__cause__, OSError)
        assert not converter_config.output_path.exists()

    def test_extent_logged_before_timeline_failure(self, converter_config, caplog):
        cfg = converter_config.model_copy(update={
            'stop_date': date(1999, 1, 1),
            'truncate_at_stop_date': True,
        })
        with caplog.at_level(logging.INFO, logger='swatnc'):
            with pytest.raises(GridPreconditionError) as exc_info:
                SWATNetCDFConverter(cfg).run()
        assert exc_info.value.precondition == 'step_count'
        assert "Lat [9.5, 11.0], Lon [19.5, 21.0]" in caplog.text

    def test_failed_run_leaves_no_file_cio(self, converter_config):
        cfg = converter_config.model_copy(update={
            'stop_date': date(1999, 1, 1),
            'truncate_at_stop_date': True,
        })
        with pytest.raises(GridPreconditionError):
            SWATNetCDFConverter(cfg).run()
        assert cfg.converted_dir.is_dir()
        assert not (cfg.converted_dir / 'file.cio').exists()
        assert not cfg.output_path.exists()

    def test_failed_write_leaves_no_file_cio(self, converter_config, monkeypatch):
        def failing_write(sink, series, rasterizer):
            raise OSError("disk full")

        monkeypatch.setattr(SWATNetCDFConverter, 'write_to_sink', staticmethod(failing_write))
        with pytest.raises(FileOperationError):
            SWATNetCDFConverter(converter_config).run()
        assert not (converter_config.converted_dir / 'file.cio').exists()
        assert not (converter_config.converted_dir / 'hru.con').exists()


class TestCommandLine:

    def test_main_success(self, txtinout_dir, tmp_path, capsys):
        out = tmp_path / 'cli_out'
        code = main([
            '--region', 'cli',
            '--txtInOutDir', str(txtinout_dir),
            '--convertedDir', str(out),
            '--climateResolution', '0.5',
            '--no-progress',
        ])
        assert code == 0
        assert (out / 'cli.nc4').is_file()
        assert (out / 'netcdf.ncw').is_file()
        assert list((out / '_logs').glob('swatnc_cli_*.log'))
        assert "cli.nc4" in capsys.readouterr().out
