"""Tests for the configuration module."""

import configparser
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from goldenrasp.config import (
    AppConfig,
    DataConfig,
    LoggingConfig,
    ValidationConfig,
    _expand_env_vars,
    get_config_path,
    get_config_paths,
    load_config,
    reset_config,
    resolve_csv_path,
    resolve_id_file,
    save_default_config,
)


@pytest.fixture(autouse=True)
def clean_config() -> Iterator[None]:
    """Start and finish every test without a cached config."""
    reset_config()
    yield
    reset_config()


class TestConfigModels:
    """Tests for configuration models."""

    def test_data_config_defaults(self) -> None:
        """Test DataConfig has correct defaults."""
        cfg = DataConfig()
        assert cfg.csv_file == "movielist.csv"
        assert cfg.separator == ";"
        assert cfg.winner_value == "yes"
        assert cfg.id_file is None

    def test_validation_config_defaults(self) -> None:
        """Test ValidationConfig has correct defaults."""
        cfg = ValidationConfig()
        assert cfg.min_year == 1900
        assert cfg.max_year is None
        assert cfg.min_text_length == 2
        assert cfg.max_text_length == 255

    def test_logging_config_defaults(self) -> None:
        """Test LoggingConfig has correct defaults."""
        cfg = LoggingConfig()
        assert cfg.level == "WARNING"
        assert cfg.file is None

    def test_app_config_defaults(self) -> None:
        """Test AppConfig has correct defaults."""
        cfg = AppConfig()
        assert isinstance(cfg.data, DataConfig)
        assert isinstance(cfg.validation, ValidationConfig)
        assert isinstance(cfg.logging, LoggingConfig)


class TestEnvVarExpansion:
    """Tests for environment variable expansion."""

    def test_expand_simple_var(self) -> None:
        """Test expanding ${VAR} syntax."""
        os.environ["TEST_VAR"] = "test_value"
        try:
            result = _expand_env_vars("prefix_${TEST_VAR}_suffix")
            assert result == "prefix_test_value_suffix"
        finally:
            del os.environ["TEST_VAR"]

    def test_expand_dollar_var(self) -> None:
        """Test expanding $VAR syntax."""
        os.environ["TEST_VAR"] = "test_value"
        try:
            result = _expand_env_vars("prefix_$TEST_VAR")
            assert result == "prefix_test_value"
        finally:
            del os.environ["TEST_VAR"]

    def test_expand_missing_var(self) -> None:
        """Test expanding missing variable returns empty string."""
        result = _expand_env_vars("${NONEXISTENT_VAR_12345}")
        assert result == ""

    def test_expand_nested(self) -> None:
        """Test expanding variables in dicts and lists."""
        os.environ["TEST_VAR"] = "test_value"
        try:
            result = _expand_env_vars({"key": ["${TEST_VAR}", "static"]})
            assert result == {"key": ["test_value", "static"]}
        finally:
            del os.environ["TEST_VAR"]


class TestConfigLoading:
    """Tests for configuration loading."""

    def test_load_nonexistent_file(self) -> None:
        """Test loading returns defaults when no config file exists."""
        cfg = load_config(Path("/nonexistent/goldenrasp.ini"))
        assert isinstance(cfg, AppConfig)
        assert cfg.data.csv_file == "movielist.csv"
        assert get_config_path() is None

    def test_load_yaml_config(self) -> None:
        """Test loading configuration from YAML file."""
        config_content = """
data:
  csv_file: awards.csv
  winner_value: "Y"

validation:
  min_year: 1980
  max_year: 2030

logging:
  level: DEBUG
"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False, encoding="utf-8"
        ) as f:
            f.write(config_content)
            temp_path = Path(f.name)

        try:
            cfg = load_config(temp_path)
            assert cfg.data.csv_file == "awards.csv"
            assert cfg.data.winner_value == "Y"
            assert cfg.data.separator == ";"
            assert cfg.validation.min_year == 1980
            assert cfg.validation.max_year == 2030
            assert cfg.logging.level == "DEBUG"
            assert get_config_path() == temp_path
        finally:
            temp_path.unlink()

    def test_load_ini_config(self) -> None:
        """Test loading configuration from INI file."""
        config_content = """
[data]
csv_file = ${GOLDENRASP_TEST_DIR}/movies.csv
separator = ,
winner_value = true
id_file = ids.json

[validation]
min_year = 1950
max_text_length = 100
min_text_length = not-a-number

[logging]
level = INFO
file = goldenrasp.log
"""
        os.environ["GOLDENRASP_TEST_DIR"] = "/data"
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".ini", delete=False, encoding="utf-8"
        ) as f:
            f.write(config_content)
            temp_path = Path(f.name)

        try:
            cfg = load_config(temp_path)
            assert cfg.data.csv_file == "/data/movies.csv"
            assert cfg.data.separator == ","
            assert cfg.data.winner_value == "true"
            assert cfg.data.id_file == "ids.json"
            assert cfg.validation.min_year == 1950
            assert cfg.validation.max_text_length == 100
            # Invalid numbers keep the default
            assert cfg.validation.min_text_length == 2
            assert cfg.logging.level == "INFO"
            assert cfg.logging.file == "goldenrasp.log"
        finally:
            del os.environ["GOLDENRASP_TEST_DIR"]
            temp_path.unlink()

    def test_load_ini_partial_config(self) -> None:
        """Test loading partial INI config uses defaults for missing values."""
        config_content = """
[validation]
min_year = 1990
"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".ini", delete=False, encoding="utf-8"
        ) as f:
            f.write(config_content)
            temp_path = Path(f.name)

        try:
            cfg = load_config(temp_path)
            assert cfg.validation.min_year == 1990
            assert cfg.validation.max_year is None
            assert cfg.data.separator == ";"
            assert cfg.logging.level == "WARNING"
        finally:
            temp_path.unlink()


class TestDataPaths:
    """Tests for resolving data file paths."""

    def test_relative_paths_follow_config_file(self, tmp_path: Path) -> None:
        """Test relative paths resolve against the config file's directory."""
        config_path = tmp_path / "goldenrasp.ini"
        config_path.write_text("[data]\ncsv_file = data/movies.csv\n", encoding="utf-8")

        cfg = load_config(config_path)

        assert resolve_csv_path(cfg) == tmp_path / "data" / "movies.csv"
        assert resolve_id_file(cfg) == tmp_path / "goldenrasp.ids.json"

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        """Test absolute paths are used as-is."""
        cfg = AppConfig(
            data=DataConfig(
                csv_file=str(tmp_path / "movies.csv"), id_file=str(tmp_path / "ids.json")
            )
        )
        assert resolve_csv_path(cfg) == tmp_path / "movies.csv"
        assert resolve_id_file(cfg) == tmp_path / "ids.json"


class TestConfigPaths:
    """Tests for configuration path handling."""

    def test_get_config_paths_includes_cwd(self) -> None:
        """Test that config paths include current directory."""
        paths = get_config_paths()
        cwd = Path.cwd()
        assert any(p.parent == cwd for p in paths)

    def test_get_config_paths_includes_home(self) -> None:
        """Test that config paths include the home config directory."""
        paths = get_config_paths()
        assert Path.home() / ".goldenrasp" / "goldenrasp.ini" in paths


class TestDefaultConfig:
    """Tests for default config generation."""

    def test_save_default_config(self, tmp_path: Path) -> None:
        """Test saving default INI config creates a loadable file."""
        config_path = tmp_path / "goldenrasp.ini"
        result_path = save_default_config(config_path)

        assert result_path == config_path

        parser = configparser.ConfigParser(interpolation=None)
        parser.read(config_path, encoding="utf-8")
        assert parser.has_section("data")
        assert parser.has_section("validation")
        assert parser.has_section("logging")

        cfg = load_config(config_path)
        assert cfg == AppConfig()

    def test_save_default_config_with_csv(self, tmp_path: Path) -> None:
        """Test the CSV path is written to the file."""
        config_path = tmp_path / "goldenrasp.ini"
        save_default_config(config_path, csv_file="awards.csv")

        cfg = load_config(config_path)
        assert cfg.data.csv_file == "awards.csv"
