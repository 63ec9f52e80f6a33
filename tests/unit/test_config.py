"""
Tests for environment configuration loading and validation.
"""

import os

import pytest

from opstore.config import (
    BackendType,
    ConfigValidator,
    EnvironmentLoader,
    LogLevel,
    StoreConfig,
)
from opstore.exceptions import ConfigurationError

ENV_VARS = [
    "OPSTORE_BACKEND",
    "OPSTORE_DB_PATH",
    "OPSTORE_POOL_SIZE",
    "MAX_FAIL_NUM",
    "MAX_REQUEST_RECORD_NUM",
    "DEFAULT_COOKIES",
    "DEFAULT_API_KEYS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep load_dotenv away from any developer .env file
    monkeypatch.chdir(tmp_path)
    yield
    # values loaded from .env bypass monkeypatch
    for name in ENV_VARS:
        os.environ.pop(name, None)


class TestEnvironmentLoader:
    """Tests for EnvironmentLoader."""

    def test_defaults(self):
        config = EnvironmentLoader.load_config()
        assert config.backend == BackendType.SQLITE
        assert config.max_fail_num == 3
        assert config.max_request_record_num == 1000
        assert config.default_cookies == []
        assert config.log_level == LogLevel.INFO

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPSTORE_BACKEND", "memory")
        monkeypatch.setenv("MAX_FAIL_NUM", "5")
        monkeypatch.setenv("MAX_REQUEST_RECORD_NUM", "200")
        monkeypatch.setenv("DEFAULT_COOKIES", "a=1, b=2 ,")
        monkeypatch.setenv("DEFAULT_API_KEYS", "sk-1,sk-2")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = EnvironmentLoader.load_config()
        assert config.backend == BackendType.MEMORY
        assert config.max_fail_num == 5
        assert config.max_request_record_num == 200
        assert config.default_cookies == ["a=1", "b=2"]
        assert config.default_api_keys == ["sk-1", "sk-2"]
        assert config.log_level == LogLevel.DEBUG

    def test_unknown_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert EnvironmentLoader.load_config().log_level == LogLevel.INFO

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("OPSTORE_BACKEND", "postgres")
        with pytest.raises(ConfigurationError) as exc_info:
            EnvironmentLoader.load_config()
        assert exc_info.value.error_code == "CONFIG_UNKNOWN_BACKEND"

    def test_non_integer(self, monkeypatch):
        monkeypatch.setenv("MAX_FAIL_NUM", "three")
        with pytest.raises(ConfigurationError):
            EnvironmentLoader.load_config()

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("MAX_REQUEST_RECORD_NUM=42\n")
        assert EnvironmentLoader.load_config().max_request_record_num == 42

    def test_validated_config_raises(self, monkeypatch):
        monkeypatch.setenv("MAX_FAIL_NUM", "0")
        with pytest.raises(ConfigurationError):
            EnvironmentLoader.load_validated_config()


class TestConfigValidator:
    """Tests for ConfigValidator."""

    def test_valid_config(self):
        assert ConfigValidator.validate_config(StoreConfig()) == []

    def test_reports_every_problem(self):
        config = StoreConfig(
            db_path="",
            pool_size=0,
            max_fail_num=0,
            max_request_record_num=0,
            default_api_keys=["sk-1", "sk-1"],
        )
        errors = ConfigValidator.validate_config(config)
        assert len(errors) == 5

    def test_memory_backend_ignores_sqlite_settings(self):
        config = StoreConfig(backend=BackendType.MEMORY, db_path="", pool_size=0)
        assert ConfigValidator.validate_config(config) == []
