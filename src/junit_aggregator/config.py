"""
Configuration management for JUnit report aggregation.
"""

import logging
import os
import threading
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

import yaml

from .discovery import validate_pattern
from .exceptions import InvalidPatternError
from .reader import DEFAULT_WORKERS, ErrorPolicy
from .sorting import ReportSorting

logger = logging.getLogger(__name__)

# Module-level lock for thread-safe config loading
_config_lock = threading.Lock()

MAX_WORKERS = 64
REPORT_FORMATS = ["console", "json"]


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class ReportConfig:
    """Main configuration for report aggregation.

    Example config YAML::

        junit:
          report_dir_pattern: "**/target/**/test-reports"
          workers: 8
          on_error: skip
        report_format: json
        sort_by: time asc
    """

    # Discovery
    report_dir_pattern: str = "**/test-reports"

    # Parsing
    workers: int = DEFAULT_WORKERS
    on_error: str = ErrorPolicy.FAIL.value

    # Reporting
    report_format: str = "console"
    sort_by: Optional[str] = "time desc"
    compact_json: bool = False
    progress: Optional[bool] = None

    @property
    def error_policy(self) -> ErrorPolicy:
        return ErrorPolicy(self.on_error)

    @property
    def sorting(self) -> Optional[ReportSorting]:
        return ReportSorting.parse(self.sort_by) if self.sort_by else None


def _parse_env_int(var_name: str) -> Optional[int]:
    """
    Safely parse an integer from an environment variable.

    Args:
        var_name: Name of the environment variable

    Returns:
        Parsed integer value, or None if the variable is not set

    Raises:
        ConfigurationError: If the value cannot be parsed as an integer
    """
    value = os.environ.get(var_name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {var_name} must be a valid integer, got: '{value}'"
        )


def _flatten(file_config: Dict[str, Any]) -> Dict[str, Any]:
    """Lift the keys of an optional ``junit:`` table to the top level."""
    config_data = dict(file_config)
    junit = config_data.pop("junit", None)
    if junit is None:
        return config_data
    if not isinstance(junit, dict):
        raise ConfigurationError(f"'junit' must be a mapping, got: {junit!r}")
    config_data.update(junit)
    return config_data


def load_config(config_file: Optional[str] = None) -> ReportConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        ReportConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or env vars are invalid
    """
    with _config_lock:
        config_data: Dict[str, Any] = {}

        if config_file:
            logger.info("Loading configuration from %s", config_file)
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            except PermissionError:
                raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
            except OSError as e:
                raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")

            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file '{config_file}' must contain a mapping at the top level"
                )
            config_data.update(_flatten(file_config))

        env_overrides = _load_from_env()
        config_data.update(env_overrides)
        if env_overrides:
            logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

        known = {f.name for f in fields(ReportConfig)}
        unknown = sorted(set(config_data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        return ReportConfig(**config_data)


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - JUNIT_REPORT_DIR_PATTERN: Glob pattern locating report files
    - JUNIT_WORKERS: Number of parser threads
    - JUNIT_ON_ERROR: Policy for unreadable report files (fail, skip)
    - JUNIT_REPORT_FORMAT: Report format (console, json)
    - JUNIT_SORT_BY: Suite ordering (time, time asc, time desc)

    Returns:
        Dictionary of configuration values from environment

    Raises:
        ConfigurationError: If environment variable values are invalid
    """
    env_config: Dict[str, Any] = {}

    if "JUNIT_REPORT_DIR_PATTERN" in os.environ:
        env_config["report_dir_pattern"] = os.environ["JUNIT_REPORT_DIR_PATTERN"]

    workers = _parse_env_int("JUNIT_WORKERS")
    if workers is not None:
        if workers <= 0:
            raise ConfigurationError(
                f"Environment variable JUNIT_WORKERS must be a positive integer, got: {workers}"
            )
        env_config["workers"] = workers

    if "JUNIT_ON_ERROR" in os.environ:
        env_config["on_error"] = os.environ["JUNIT_ON_ERROR"]

    if "JUNIT_REPORT_FORMAT" in os.environ:
        env_config["report_format"] = os.environ["JUNIT_REPORT_FORMAT"]

    if "JUNIT_SORT_BY" in os.environ:
        env_config["sort_by"] = os.environ["JUNIT_SORT_BY"] or None

    return env_config


def validate_config(config: ReportConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: ReportConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if not isinstance(config.report_dir_pattern, str):
        errors.append(
            f"report_dir_pattern must be a string: {config.report_dir_pattern!r}"
        )
    else:
        try:
            validate_pattern(config.report_dir_pattern)
        except InvalidPatternError as e:
            errors.append(str(e))

    if (
        isinstance(config.workers, bool)
        or not isinstance(config.workers, int)
        or config.workers <= 0
    ):
        errors.append(f"workers must be a positive integer: {config.workers}")
    elif config.workers > MAX_WORKERS:
        errors.append(f"workers is too large (max {MAX_WORKERS}): {config.workers}")

    valid_policies = [p.value for p in ErrorPolicy]
    if config.on_error not in valid_policies:
        errors.append(f"on_error must be one of {valid_policies}: {config.on_error}")

    if config.report_format not in REPORT_FORMATS:
        errors.append(f"report_format must be one of {REPORT_FORMATS}: {config.report_format}")

    if config.sort_by is not None:
        if not isinstance(config.sort_by, str):
            errors.append(f"sort_by must be a string: {config.sort_by!r}")
        elif config.sort_by:
            try:
                ReportSorting.parse(config.sort_by)
            except ValueError as e:
                errors.append(f"sort_by is invalid: {e}")

    if not isinstance(config.compact_json, bool):
        errors.append(f"compact_json must be true or false: {config.compact_json!r}")

    if config.progress is not None and not isinstance(config.progress, bool):
        errors.append(f"progress must be true or false: {config.progress!r}")

    return errors
