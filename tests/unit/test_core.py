"""
Unit tests for settings, logging setup and the exception hierarchy.
"""

import importlib
import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest

from nbrecon.core import exceptions
from nbrecon.core.logging_config import setup_logging
from nbrecon.core.settings import EnvSettings


class TestEnvSettings:
    """Test environment-based settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("NETBOX_URL", raising=False)
        monkeypatch.delenv("NETBOX_TOKEN", raising=False)

        s = EnvSettings(_env_file=None)

        assert s.netbox_url == ""
        assert s.netbox_verify_ssl is True
        assert s.netbox_timeout == 30.0
        assert s.log_level == "INFO"
        assert s.netbox_configured is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NETBOX_URL", "https://netbox.lab")
        monkeypatch.setenv("NETBOX_TOKEN", "abc")
        monkeypatch.setenv("NETBOX_VERIFY_SSL", "false")

        s = EnvSettings(_env_file=None)

        assert s.netbox_url == "https://netbox.lab"
        assert s.netbox_verify_ssl is False
        assert s.netbox_configured is True

    def test_fixture(self, test_settings):
        assert test_settings.netbox_configured


class TestLogging:
    """Test setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_verbose_forces_debug(self):
        setup_logging(verbose=True)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_level_from_settings(self):
        with patch("nbrecon.core.logging_config.settings") as mock_settings:
            mock_settings.log_level = "warning"
            mock_settings.log_format = "%(message)s"
            mock_settings.log_file_enabled = False

            setup_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path):
        with patch("nbrecon.core.logging_config.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_format = "%(message)s"
            mock_settings.log_file_enabled = True
            mock_settings.log_file_path = str(tmp_path / "logs" / "nbrecon.log")
            mock_settings.log_file_max_size_mb = 1
            mock_settings.log_file_backup_count = 2

            setup_logging()

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert (tmp_path / "logs").is_dir()
        handlers[0].close()


class TestExceptions:
    """Test the error taxonomy."""

    @pytest.mark.parametrize(
        "cls",
        [
            exceptions.ConfigError,
            exceptions.InvalidStateError,
            exceptions.NotFound,
            exceptions.Ambiguous,
            exceptions.RemoteError,
            exceptions.RemoteNotFound,
            exceptions.RemoteRejected,
            exceptions.RemoteUnavailable,
        ],
    )
    def test_single_root(self, cls):
        assert issubclass(cls, exceptions.NetBoxSyncError)

    def test_validation_error_lists_all(self):
        err = exceptions.ValidationError(["a: bad", "b: worse"])

        assert err.errors == ["a: bad", "b: worse"]
        assert "  - a: bad" in str(err)
        assert "  - b: worse" in str(err)

    def test_remote_error_fields(self):
        err = exceptions.RemoteRejected("nope", status_code=409, method="PUT", path="/x/1/", detail={"a": 1})

        assert (err.status_code, err.method, err.path, err.detail) == (409, "PUT", "/x/1/", {"a": 1})


class TestPackageImports:
    """Every public module imports cleanly."""

    @pytest.mark.parametrize(
        "module",
        [
            "nbrecon",
            "nbrecon.core",
            "nbrecon.schemas",
            "nbrecon.sync",
            "nbrecon.sync.models",
            "nbrecon.tools",
            "nbrecon.resources",
            "nbrecon.cli",
        ],
    )
    def test_import(self, module):
        assert importlib.import_module(module) is not None

    def test_local_state_explicit_is_a_set(self):
        from nbrecon.sync.models import LocalState

        state = LocalState(kind="vlan_group", explicit=["name", "name"])

        assert state.explicit == {"name"}
