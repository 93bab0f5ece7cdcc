"""
Tests for configuration loading.
"""

from datetime import time

import pytest
from pydantic import ValidationError

from worktime.config import AppConfig, WorkPatternConfig, get_default_config_path
from worktime.domain.work_periods import WorkBlock


def _write(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "Europe/Berlin"
        assert config.work_pattern.weekdays == [0, 1, 2, 3, 4]
        assert config.defaults.working_days == 5

    def test_load_from_yaml(self, tmp_path):
        path = _write(
            tmp_path,
            """
timezone: America/New_York
work_pattern:
  weekdays: [1, 3, 3]
  blocks:
    - start: "08:30"
      end: "12:00"
    - start: "13:00"
      end: "16:30"
defaults:
  working_days: 2
""",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "America/New_York"
        assert config.work_pattern.weekdays == [1, 3]
        assert config.work_pattern.blocks[0].start == time(8, 30)
        assert config.defaults.working_days == 2

    def test_to_pattern(self):
        pattern = WorkPatternConfig(weekdays=[2], blocks=[{"start": "10:00", "end": "11:00"}]).to_pattern()

        assert pattern.weekdays == (2,)
        assert pattern.blocks == (WorkBlock(time(10, 0), time(11, 0)),)

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config == AppConfig()

    def test_missing_file_names_config_keys(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="set timezone, work_pattern"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "timezone: [unclosed"))

    def test_root_must_be_mapping(self, tmp_path):
        with pytest.raises(ValueError, match="must map timezone, work_pattern and defaults"):
            AppConfig.load_from_yaml(_write(tmp_path, "- just\n- a list\n"))

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_invalid_weekday(self):
        with pytest.raises(ValidationError, match="between 0 and 6"):
            WorkPatternConfig(weekdays=[0, 7])

    def test_block_must_open_before_closing(self):
        with pytest.raises(ValidationError, match="end must be later than start"):
            WorkPatternConfig(blocks=[{"start": "12:00", "end": "09:00"}])

    def test_blocks_required(self):
        with pytest.raises(ValidationError, match="At least one"):
            WorkPatternConfig(blocks=[])

    def test_unquoted_yaml_time_is_rejected(self, tmp_path):
        path = _write(
            tmp_path,
            """
work_pattern:
  blocks:
    - start: "09:00"
      end: 13:00
""",
        )

        with pytest.raises(ValidationError, match="quoted"):
            AppConfig.load_from_yaml(path)

    def test_working_days_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            AppConfig(defaults={"working_days": 0})

    def test_comment_only_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, "# nothing configured yet\n"))

        assert config == AppConfig()


class TestDefaultConfigPath:
    """Tests for get_default_config_path."""

    def test_prefers_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("timezone: UTC\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert get_default_config_path().resolve() == (tmp_path / "config.yaml").resolve()

    def test_falls_back_to_working_directory_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        path = get_default_config_path()

        assert path.name == "config.yaml"
        assert path.resolve() == (tmp_path / "config.yaml").resolve() or path.exists()
