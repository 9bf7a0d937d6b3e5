"""Tests for configuration, identity and logging setup.

**Feature: trading-journal**
"""

import logging
import tempfile
from pathlib import Path

import pytest
from rich.logging import RichHandler

from tradejournal.auth import SESSION_FILE, ProfileAuth
from tradejournal.config import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    ENV_HOME,
    get_config_dir,
    get_db_path,
    load_config,
    write_default_config,
)
from tradejournal.errors import JournalError
from tradejournal.log import setup_logging


@pytest.fixture
def config_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestConfig:
    """
    **Feature: trading-journal, Property 21: Configuration Defaults**

    *For any* config file, missing keys fall back to the defaults.
    """

    def test_defaults_without_file(self, config_dir):
        assert load_config(config_dir) == DEFAULT_CONFIG

    def test_partial_override(self, config_dir):
        (config_dir / CONFIG_FILE).write_text('[display]\ncurrency = "€"\n')
        config = load_config(config_dir)

        assert config["display"]["currency"] == "€"
        assert config["store"]["db_name"] == "journal.db"

    def test_malformed_file(self, config_dir):
        (config_dir / CONFIG_FILE).write_text("this is not toml\n")
        with pytest.raises(JournalError):
            load_config(config_dir)

    def test_write_default_config(self, config_dir):
        path = write_default_config(config_dir / "sub")
        assert path.exists()
        assert load_config(config_dir / "sub") == DEFAULT_CONFIG

    def test_env_home(self, config_dir, monkeypatch):
        monkeypatch.setenv(ENV_HOME, str(config_dir))
        assert get_config_dir() == config_dir
        assert get_config_dir(Path("/elsewhere")) == Path("/elsewhere")

    def test_db_path(self, config_dir):
        assert get_db_path(DEFAULT_CONFIG, config_dir) == config_dir / "journal.db"


class TestProfileAuth:
    """
    **Feature: trading-journal, Property 22: Sign In and Out**
    """

    def test_sign_in_out(self, config_dir):
        auth = ProfileAuth(config_dir)
        assert auth.current_user() is None

        user = auth.sign_in(" alice ", "alice@example.com")
        assert user.id == "alice"
        assert ProfileAuth(config_dir).current_user() == user

        auth.sign_out()
        auth.sign_out()
        assert auth.current_user() is None

    def test_blank_user(self, config_dir):
        with pytest.raises(ValueError):
            ProfileAuth(config_dir).sign_in("  ")

    def test_corrupt_session(self, config_dir):
        (config_dir / SESSION_FILE).write_text("{not json")
        assert ProfileAuth(config_dir).current_user() is None


class TestLogging:
    def test_single_handler(self):
        logger = setup_logging("info")
        setup_logging("debug")

        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
