"""Tests for argument parsing, settings and logging setup."""

import logging
from pathlib import Path

import pytest

from kanpad import __version__
from kanpad.__main__ import build_settings, main, parse_args
from kanpad.config import Settings
from kanpad.logging import LOGGER_NAME, setup_logging


@pytest.fixture
def clean_logger():
    """Remove handlers added to the kanpad logger by a test."""
    logger = logging.getLogger(LOGGER_NAME)
    before = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers[:]:
        if handler not in before:
            handler.close()
            logger.removeHandler(handler)
    logger.setLevel(level)


class TestParseArgs:
    """Tests for command line parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.data_root is None
        assert args.verbose == 0
        assert not args.generate
        assert not args.seed

    def test_flags(self, tmp_path: Path):
        args = parse_args(["--data-root", str(tmp_path), "-vv", "--seed"])
        assert args.data_root == tmp_path
        assert args.verbose == 2
        assert args.seed

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestSettings:
    """Tests for Settings and CLI overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("KANPAD_DATA_ROOT", raising=False)
        settings = Settings()
        assert settings.data_root == Path(".kanpad")
        assert settings.verbose == 0
        assert settings.log_file is None

    def test_environment(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("KANPAD_DATA_ROOT", str(tmp_path))
        assert Settings().data_root == tmp_path

    def test_cli_overrides_environment(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("KANPAD_DATA_ROOT", "/somewhere/else")
        settings = build_settings(parse_args(["--data-root", str(tmp_path)]))
        assert settings.data_root == tmp_path


class TestMain:
    """Tests for the non-interactive commands."""

    def test_generate(self, tmp_path: Path):
        data_root = tmp_path / ".kanpad"
        with pytest.raises(SystemExit) as exc_info:
            main(["--data-root", str(data_root), "--generate"])
        assert exc_info.value.code == 0
        assert (data_root / "kanpad.yml").exists()

    def test_seed(self, tmp_path: Path):
        data_root = tmp_path / ".kanpad"
        with pytest.raises(SystemExit) as exc_info:
            main(["--data-root", str(data_root), "--seed"])
        assert exc_info.value.code == 0
        assert (data_root / "labels.yaml").exists()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_off_by_default(self, clean_logger):
        count = len(clean_logger.handlers)
        setup_logging()
        assert len(clean_logger.handlers) == count

    def test_log_file(self, clean_logger, tmp_path: Path):
        log_file = tmp_path / "logs" / "kanpad.log"
        setup_logging(verbose=0, log_file=log_file)

        logging.getLogger("kanpad.test").info("hello file")
        for handler in clean_logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "kanpad starting" in content
        assert "hello file" in content

    def test_debug_level(self, clean_logger):
        setup_logging(verbose=2)
        assert clean_logger.level == logging.DEBUG
