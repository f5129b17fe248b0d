"""Tests for configuration management."""

import pytest
import yaml

from junit_aggregator.config import (
    ConfigurationError,
    ReportConfig,
    _parse_env_int,
    load_config,
    validate_config,
)
from junit_aggregator.reader import ErrorPolicy
from junit_aggregator.sorting import ReportSorting, SortOrder

ENV_VARS = [
    "JUNIT_REPORT_DIR_PATTERN",
    "JUNIT_WORKERS",
    "JUNIT_ON_ERROR",
    "JUNIT_REPORT_FORMAT",
    "JUNIT_SORT_BY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestReportConfig:
    """Tests for ReportConfig dataclass."""

    def test_defaults(self):
        config = ReportConfig()
        assert config.report_dir_pattern == "**/test-reports"
        assert config.workers == 5
        assert config.on_error == "fail"
        assert config.report_format == "console"
        assert config.sort_by == "time desc"
        assert config.compact_json is False
        assert config.progress is None

    def test_error_policy(self):
        assert ReportConfig().error_policy is ErrorPolicy.FAIL
        assert ReportConfig(on_error="skip").error_policy is ErrorPolicy.SKIP

    def test_sorting(self):
        assert ReportConfig(sort_by="time asc").sorting == ReportSorting(SortOrder.ASC)
        assert ReportConfig(sort_by=None).sorting is None


class TestParseEnvInt:
    """Tests for _parse_env_int helper."""

    def test_returns_none_when_not_set(self):
        assert _parse_env_int("NONEXISTENT_VAR_12345") is None

    def test_parses_valid_int(self, monkeypatch):
        monkeypatch.setenv("TEST_INT_VAR", "42")
        assert _parse_env_int("TEST_INT_VAR") == 42

    def test_raises_on_invalid_value(self, monkeypatch):
        monkeypatch.setenv("TEST_INT_VAR", "not_a_number")
        with pytest.raises(ConfigurationError, match="must be a valid integer"):
            _parse_env_int("TEST_INT_VAR")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_defaults_without_file(self):
        assert load_config() == ReportConfig()

    def test_load_from_yaml_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            yaml.dump({"report_format": "json", "sort_by": "time asc", "compact_json": True})
        )
        config = load_config(str(config_file))
        assert config.report_format == "json"
        assert config.sort_by == "time asc"
        assert config.compact_json is True

    def test_junit_table_is_flattened(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "junit:\n"
            "  report_dir_pattern: '**/target/**/test-reports'\n"
            "  workers: 8\n"
            "  on_error: skip\n"
        )
        config = load_config(str(config_file))
        assert config.report_dir_pattern == "**/target/**/test-reports"
        assert config.workers == 8
        assert config.on_error == "skip"

    def test_junit_table_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("junit: 3\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_config(str(config_file))

    def test_unknown_keys_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("publish_url: https://example.com\n")
        with pytest.raises(ConfigurationError, match="Unknown configuration keys: publish_url"):
            load_config(str(config_file))

    def test_top_level_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping at the top level"):
            load_config(str(config_file))

    def test_invalid_yaml_raises(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(":\ninvalid: [yaml: {broken")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_empty_yaml_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)) == ReportConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("junit:\n  report_dir_pattern: from-file\n  workers: 2\n")
        monkeypatch.setenv("JUNIT_REPORT_DIR_PATTERN", "**/from-env")
        monkeypatch.setenv("JUNIT_WORKERS", "12")

        config = load_config(str(config_file))
        assert config.report_dir_pattern == "**/from-env"
        assert config.workers == 12

    def test_env_on_error_and_format(self, monkeypatch):
        monkeypatch.setenv("JUNIT_ON_ERROR", "skip")
        monkeypatch.setenv("JUNIT_REPORT_FORMAT", "json")
        config = load_config()
        assert config.on_error == "skip"
        assert config.report_format == "json"

    def test_empty_env_sort_by_disables_sorting(self, monkeypatch):
        monkeypatch.setenv("JUNIT_SORT_BY", "")
        assert load_config().sort_by is None

    def test_invalid_env_workers_raises(self, monkeypatch):
        monkeypatch.setenv("JUNIT_WORKERS", "abc")
        with pytest.raises(ConfigurationError, match="must be a valid integer"):
            load_config()

    def test_non_positive_env_workers_raises(self, monkeypatch):
        monkeypatch.setenv("JUNIT_WORKERS", "0")
        with pytest.raises(ConfigurationError, match="positive integer"):
            load_config()


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config(self):
        assert validate_config(ReportConfig()) == []

    def test_sorting_disabled_is_valid(self):
        assert validate_config(ReportConfig(sort_by=None)) == []

    def test_invalid_pattern(self):
        errors = validate_config(ReportConfig(report_dir_pattern="/abs/**"))
        assert any("Invalid report pattern" in e for e in errors)

    @pytest.mark.parametrize("workers", [0, -3, "many"])
    def test_non_positive_workers(self, workers):
        errors = validate_config(ReportConfig(workers=workers))
        assert any("workers must be a positive integer" in e for e in errors)

    def test_excessive_workers(self):
        errors = validate_config(ReportConfig(workers=1000))
        assert any("too large" in e for e in errors)

    def test_invalid_on_error(self):
        errors = validate_config(ReportConfig(on_error="ignore"))
        assert any("on_error" in e for e in errors)

    def test_invalid_report_format(self):
        errors = validate_config(ReportConfig(report_format="html"))
        assert any("report_format" in e for e in errors)

    def test_invalid_sort_by(self):
        errors = validate_config(ReportConfig(sort_by="name"))
        assert any("sort_by is invalid" in e for e in errors)

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("report_dir_pattern", ["**/reports"], "report_dir_pattern must be a string"),
            ("report_dir_pattern", 7, "report_dir_pattern must be a string"),
            ("sort_by", 5, "sort_by must be a string"),
            ("sort_by", ["time", "asc"], "sort_by must be a string"),
            ("workers", True, "workers must be a positive integer"),
            ("workers", 2.5, "workers must be a positive integer"),
            ("compact_json", "yes", "compact_json must be true or false"),
            ("progress", 1, "progress must be true or false"),
        ],
    )
    def test_wrongly_typed_values_are_reported(self, field, value, message):
        errors = validate_config(ReportConfig(**{field: value}))
        assert any(message in e for e in errors)

    def test_wrongly_typed_yaml_values_are_reported(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("junit:\n  report_dir_pattern: [a, b]\nsort_by: 5\n")
        errors = validate_config(load_config(str(config_file)))
        assert len(errors) == 2

    def test_all_errors_are_collected(self):
        config = ReportConfig(report_dir_pattern="", workers=0, report_format="xml")
        assert len(validate_config(config)) == 3
