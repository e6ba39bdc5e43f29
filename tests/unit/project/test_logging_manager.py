"""Tests for LoggingManager."""

import logging
from datetime import date

import pytest

from swatnc.core.config import ConverterConfig
from swatnc.data.gridding import GlobalExtent, Timeline
from swatnc.project import LoggingManager, log_run_summary

pytestmark = [pytest.mark.unit, pytest.mark.quick]


@pytest.fixture
def config(tmp_path):
    return ConverterConfig(region='bow', txtinout_dir=tmp_path / 'in', converted_dir=tmp_path / 'out')


@pytest.fixture
def manager_factory():
    managers = []

    def _make(cfg, **kwargs):
        manager = LoggingManager(cfg, **kwargs)
        managers.append(manager)
        return manager

    yield _make
    for manager in managers:
        manager.close()


class TestLoggingManager:

    def test_log_file_created(self, config, manager_factory):
        manager = manager_factory(config)
        manager.logger.info("hello")
        assert manager.log_file.parent == config.converted_dir / '_logs'
        assert manager.log_file.name.startswith('swatnc_bow_')
        for handler in manager.logger.handlers:
            handler.flush()
        assert "hello" in manager.log_file.read_text()

    def test_no_log_file(self, config, manager_factory):
        manager = manager_factory(config.model_copy(update={'log_to_file': False}))
        assert manager.log_file is None
        assert len(manager.logger.handlers) == 1

    def test_debug_mode_console_level(self, config, manager_factory):
        manager = manager_factory(config.model_copy(update={'log_to_file': False}), debug_mode=True)
        assert manager.logger.handlers[0].level == logging.DEBUG

    def test_handlers_not_duplicated(self, config, manager_factory):
        cfg = config.model_copy(update={'log_to_file': False})
        manager_factory(cfg)
        manager = manager_factory(cfg)
        assert len(manager.logger.handlers) == 1

    def test_close_restores_propagation(self, config):
        manager = LoggingManager(config.model_copy(update={'log_to_file': False}))
        assert manager.logger.propagate is False
        manager.close()
        assert manager.logger.handlers == []
        assert manager.logger.propagate is True


def test_run_summary(caplog):
    logger = logging.getLogger('swatnc.test_summary')
    with caplog.at_level(logging.INFO, logger='swatnc.test_summary'):
        log_run_summary(
            logger,
            {'pcp': 2, 'tmax': 1},
            GlobalExtent(9.0, 11.0, 19.0, 21.0),
            Timeline(epoch=date(2000, 1, 1), step_count=3),
            (3, 3),
        )
    assert "pcp    2" in caplog.text
    assert "Final Grid Bounds: Lat [9.0, 11.0], Lon [19.0, 21.0]" in caplog.text
    assert "Time steps: 3" in caplog.text
    assert "End Date: 2000-01-03" in caplog.text
