"""Tests for configuration loading and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from config import DEFAULT_DATA_DIR, TutorConfig, load_config
from logging_config import setup_logging


class TestTutorConfig:
    def test_defaults(self):
        config = TutorConfig()
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.total_days == 21
        assert config.log_level == "WARNING"
        assert config.log_file is None
        assert config.countdown_interval == 1.0

    def test_log_level_normalized(self):
        assert TutorConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            TutorConfig(log_level="LOUD")

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            TutorConfig(countdown_interval=0)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == TutorConfig()

    def test_reads_json(self, tmp_path):
        path = tmp_path / "tutor.json"
        path.write_text('{"total_days": 30, "log_level": "info"}', encoding="utf-8")
        config = load_config(path)
        assert config.total_days == 30
        assert config.log_level == "INFO"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tutor.json"
        path.write_text('{"total_days": 0}', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_console_handler_only(self):
        setup_logging(logging.INFO)
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "tutor.log"
        setup_logging("DEBUG", log_file)
        logging.getLogger("tests").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_repeat_calls_do_not_duplicate(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1
