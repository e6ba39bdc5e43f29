"""Tests for TxtInOut staging and file.cio rewriting."""

import pytest

from swatnc.project import TxtInOutStager

pytestmark = [pytest.mark.unit, pytest.mark.quick]


@pytest.fixture
def stager(txtinout_dir, tmp_path):
    return TxtInOutStager(txtinout_dir, tmp_path / 'converted', 'bow')


class TestStage:

    def test_copies_ancillary_files_only(self, stager, txtinout_dir):
        (txtinout_dir / 'notes.txt').write_text("notes")
        (txtinout_dir / 'weather-sta.cli').write_text("manifest")

        assert stager.stage() is True

        staged = sorted(p.name for p in stager.converted_dir.iterdir())
        assert staged == ['file.cio', 'hru.con', 'weather-wgn.cli']

    def test_does_not_overwrite_conversion_outputs(self, stager, txtinout_dir):
        (txtinout_dir / 'bow.nc4').write_text("stale grid")
        (txtinout_dir / 'netcdf.ncw').write_text("stale registry")
        stager.prepare_output_dir()
        (stager.converted_dir / 'bow.nc4').write_text("fresh grid")

        assert stager.stage() is True

        assert (stager.converted_dir / 'bow.nc4').read_text() == "fresh grid"
        assert not (stager.converted_dir / 'netcdf.ncw').exists()

    def test_without_file_cio(self, tmp_path, write_station):
        src = tmp_path / 'in'
        write_station(src, 'a.pcp', 0.0, 0.0, [1.0])
        stager = TxtInOutStager(src, tmp_path / 'out', 'bow')

        assert stager.stage() is False
        assert stager.converted_dir.is_dir()
        assert list(stager.converted_dir.iterdir()) == []

    def test_prepare_output_dir_is_idempotent(self, stager):
        stager.prepare_output_dir()
        stager.prepare_output_dir()
        assert stager.converted_dir.is_dir()


class TestRewriteFileCio:

    def test_rewritten_file(self, stager):
        stager.stage()
        lines = (stager.converted_dir / 'file.cio').read_text().splitlines()

        assert lines[0] == "file.cio: written by swatnc converter"
        assert lines[1].startswith("simulation")
        assert lines[2].split()[:3] == ['climate', 'netcdf.ncw', 'weather-wgn.cli']
        assert lines[3].startswith("connect")
        for line, key in zip(lines[4:], ('pcp_path', 'tmp_path', 'slr_path', 'hmd_path', 'wnd_path')):
            assert line.split() == [key, 'bow.nc4']
            assert line.index('bow.nc4') == 18

    def test_original_title_dropped(self, stager):
        out = stager.rewrite_file_cio("old title\nsomething else\n")
        assert "old title" not in out
        assert out.splitlines()[1] == "something else"

    def test_pet_path(self, stager):
        out = stager.rewrite_file_cio("title\n  pet_path  null\n")
        assert out.splitlines()[1].split() == ['pet_path', 'bow.nc4']

    def test_source_file_untouched(self, stager, txtinout_dir):
        before = (txtinout_dir / 'file.cio').read_text()
        stager.stage()
        assert (txtinout_dir / 'file.cio').read_text() == before
