"""Configuration management for goldenrasp."""

from __future__ import annotations

import configparser
import os
import re
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

CONFIG_DIR_NAME = ".goldenrasp"
INI_FILE_NAME = "goldenrasp.ini"
ID_FILE_NAME = "goldenrasp.ids.json"


class DataConfig(BaseModel):
    """Movie data file configuration."""

    csv_file: str = "movielist.csv"
    separator: str = ";"
    winner_value: str = "yes"
    id_file: str | None = None  # Defaults to goldenrasp.ids.json next to the config


class ValidationConfig(BaseModel):
    """Bounds for validating user-entered movies."""

    min_year: int = 1900
    max_year: int | None = None  # None = current year
    min_text_length: int = 2
    max_text_length: int = 255


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: str | None = None


class AppConfig(BaseModel):
    """Application configuration."""

    data: DataConfig = Field(default_factory=DataConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Global config instance
_config: AppConfig | None = None
_config_path: Path | None = None  # Track where config was loaded from


def get_exe_directory() -> Path:
    """Get the directory containing the executable (or the working directory).

    Handles both normal Python execution and PyInstaller bundles.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    return Path.cwd()


def get_config_paths() -> list[Path]:
    """Get list of config file paths to search, in priority order.

    Search order:
    1. Exe directory
    2. Current working directory
    3. User home directory (~/.goldenrasp/)
    4. Legacy YAML files in the working and home directories

    Returns:
        List of paths to check for config files.
    """
    paths = []

    exe_dir = get_exe_directory()
    home_dir = Path.home() / CONFIG_DIR_NAME
    cwd = Path.cwd()

    paths.append(exe_dir / INI_FILE_NAME)
    if cwd != exe_dir:
        paths.append(cwd / INI_FILE_NAME)
    paths.append(home_dir / INI_FILE_NAME)

    paths.append(cwd / "config.yaml")
    paths.append(cwd / "config.yml")
    paths.append(home_dir / "config.yaml")
    paths.append(home_dir / "config.yml")

    return paths


def find_config_file() -> Path | None:
    """Find the first existing config file.

    Returns:
        Path to config file if found, None otherwise.
    """
    for path in get_config_paths():
        if path.exists():
            return path
    return None


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand ${VAR} and $VAR environment variables in config values."""
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")

        def replace(match: re.Match[str]) -> str:
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, "")

        return pattern.sub(replace, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def _read_int(parser: configparser.ConfigParser, section: str, key: str) -> int | None:
    """Read an integer option, returning None when absent or invalid."""
    if not parser.has_option(section, key):
        return None
    try:
        return int(parser.get(section, key))
    except ValueError:
        return None  # Keep default


def _load_ini_config(path: Path) -> dict[str, Any]:
    """Load configuration from INI file.

    Args:
        path: Path to INI config file.

    Returns:
        Dictionary structure matching AppConfig schema.
    """
    # Interpolation off so "%" and "$" survive for env expansion
    parser = configparser.ConfigParser(interpolation=None)
    parser.read(path, encoding="utf-8")

    config: dict[str, Any] = {}

    if parser.has_section("data"):
        data: dict[str, Any] = {}
        for key in ("csv_file", "winner_value", "id_file"):
            value = parser.get("data", key, fallback="").strip()
            if value:
                data[key] = value
        separator = parser.get("data", "separator", fallback="")
        if separator:
            data["separator"] = separator
        if data:
            config["data"] = data

    if parser.has_section("validation"):
        validation: dict[str, Any] = {}
        for key in ("min_year", "max_year", "min_text_length", "max_text_length"):
            value = _read_int(parser, "validation", key)
            if value is not None:
                validation[key] = value
        if validation:
            config["validation"] = validation

    if parser.has_section("logging"):
        logging_cfg: dict[str, Any] = {}
        level = parser.get("logging", "level", fallback="").strip()
        if level:
            logging_cfg["level"] = level
        log_file = parser.get("logging", "file", fallback="").strip()
        if log_file:
            logging_cfg["file"] = log_file
        if logging_cfg:
            config["logging"] = logging_cfg

    return config


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from file.

    Supports both INI (.ini/.cfg) and YAML (.yaml/.yml) formats.
    Environment variables are expanded in all values.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration.
    """
    global _config, _config_path

    if path is None:
        path = find_config_file()

    if path is None or not path.exists():
        _config = AppConfig()
        _config_path = None
        return _config

    if path.suffix in (".ini", ".cfg"):
        raw_config = _load_ini_config(path)
    else:
        raw_config = _load_yaml_config(path)

    expanded_config = _expand_env_vars(raw_config)

    _config = AppConfig.model_validate(expanded_config)
    _config_path = path
    return _config


def get_config_path() -> Path | None:
    """Get the path to the currently loaded config file, or None if using defaults."""
    return _config_path


def get_config() -> AppConfig:
    """Get the current configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the cached configuration.

    Useful for testing or when config file changes.
    """
    global _config, _config_path
    _config = None
    _config_path = None


def _base_directory() -> Path:
    """Directory that relative data paths are resolved against."""
    if _config_path is not None:
        return _config_path.parent
    return get_exe_directory()


def resolve_csv_path(cfg: AppConfig | None = None) -> Path:
    """Get the configured movie CSV path, relative to the config file."""
    cfg = cfg or get_config()
    path = Path(cfg.data.csv_file).expanduser()
    if not path.is_absolute():
        path = _base_directory() / path
    return path


def resolve_id_file(cfg: AppConfig | None = None) -> Path:
    """Get the path of the ID store, relative to the config file."""
    cfg = cfg or get_config()
    if cfg.data.id_file:
        path = Path(cfg.data.id_file).expanduser()
        if not path.is_absolute():
            path = _base_directory() / path
        return path
    return _base_directory() / ID_FILE_NAME


def save_default_config(path: Path | None = None, csv_file: str = "") -> Path:
    """Save a default INI config file.

    Args:
        path: Where to save. Defaults to ./goldenrasp.ini.
        csv_file: Movie CSV path (optional, can use env var).

    Returns:
        Path to saved config file.
    """
    if path is None:
        path = Path.cwd() / INI_FILE_NAME

    csv_value = csv_file or "movielist.csv"

    default_config = f"""\
# goldenrasp configuration
# You can use environment variables with ${{VAR}} syntax

[data]
# Movie list CSV (relative paths are resolved against this file)
csv_file = {csv_value}
# Field separator used in the CSV
separator = ;
# Value of the winner column that marks a winning movie
winner_value = yes
# File remembering the last issued movie ID
# id_file = goldenrasp.ids.json

[validation]
# Earliest accepted award year
min_year = 1900
# Latest accepted award year (leave unset for the current year)
# max_year = 2030
min_text_length = 2
max_text_length = 255

[logging]
# DEBUG, INFO, WARNING or ERROR
level = WARNING
# Optional log file
# file = goldenrasp.log
"""

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)

    return path
