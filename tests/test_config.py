"""Tests for configuration loading and validation."""

import pytest

from resume_ats.config import (
    ENV_INDUSTRY,
    ENV_LOG_LEVEL,
    ImportConfig,
    Severity,
    apply_env_overrides,
    config_from_mapping,
    has_errors,
    load_config,
    load_raw_config,
    validate_config,
)


@pytest.fixture
def config_dir(tmp_path):
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "config.yaml").write_text(
        "history_limit: 50\nlog_level: WARNING\ndefault_industry: null\n", encoding="utf-8"
    )
    return directory


class TestLoading:
    def test_local_file_overrides_defaults(self, config_dir):
        (config_dir / "config.local.yaml").write_text("history_limit: 10\n", encoding="utf-8")
        raw = load_raw_config(str(config_dir / "config.yaml"))
        assert raw["history_limit"] == 10
        assert raw["log_level"] == "WARNING"

    def test_other_file_names_load_as_is(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("default_industry: finance\n", encoding="utf-8")
        assert load_raw_config(str(path)) == {"default_industry": "finance"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_raw_config(str(tmp_path / "missing.yaml"))
        with pytest.raises(FileNotFoundError):
            load_raw_config(str(tmp_path / "nowhere" / "config.yaml"))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_raw_config(str(path))

    def test_load_config_applies_env(self, config_dir, monkeypatch):
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
        monkeypatch.setenv(ENV_INDUSTRY, "healthcare")
        settings = load_config(str(config_dir / "config.yaml"))
        assert settings.log_level == "DEBUG"
        assert settings.default_industry == "healthcare"
        assert settings.history_limit == 50

    def test_env_overrides_leave_input_untouched(self, monkeypatch):
        monkeypatch.setenv(ENV_LOG_LEVEL, "INFO")
        raw = {"log_level": "WARNING"}
        assert apply_env_overrides(raw)["log_level"] == "INFO"
        assert raw["log_level"] == "WARNING"

    def test_defaults_from_empty_mapping(self):
        assert config_from_mapping({}) == ImportConfig()


class TestValidation:
    def test_valid_config(self, tmp_path):
        raw = {"history_limit": 20, "log_level": "info", "default_industry": "software"}
        assert validate_config(raw, workspace_dir=str(tmp_path)) == []

    @pytest.mark.parametrize("limit", [0, -3, "ten", True])
    def test_bad_history_limit(self, tmp_path, limit):
        issues = validate_config({"history_limit": limit}, workspace_dir=str(tmp_path))
        assert [i.field for i in issues] == ["history_limit"]
        assert has_errors(issues)

    def test_bad_log_level(self, tmp_path):
        issues = validate_config({"log_level": "LOUD"}, workspace_dir=str(tmp_path))
        assert issues[0].field == "log_level"
        assert issues[0].severity == Severity.ERROR

    def test_unknown_industry_is_warning(self, tmp_path):
        issues = validate_config({"default_industry": "astronomy"}, workspace_dir=str(tmp_path))
        assert [i.severity for i in issues] == [Severity.WARNING]
        assert not has_errors(issues)

    def test_industry_name_normalised(self, tmp_path):
        assert validate_config({"default_industry": "Data Science"}, workspace_dir=str(tmp_path)) == []

    def test_non_string_industry_is_error(self, tmp_path):
        issues = validate_config({"default_industry": 5}, workspace_dir=str(tmp_path))
        assert has_errors(issues)

    def test_missing_workspace_is_warning(self, tmp_path):
        issues = validate_config({"workspace_dir": str(tmp_path / "gone")})
        assert [(i.field, i.severity) for i in issues] == [("workspace_dir", Severity.WARNING)]
