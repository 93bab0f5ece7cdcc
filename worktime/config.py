"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import time
from pathlib import Path
from typing import List

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.work_periods import WeeklyPattern, WorkBlock


class WorkBlockConfig(BaseModel):
    """Daily working hours block, e.g. start "09:00", end "12:00"."""
    start: time
    end: time

    @field_validator("start", "end", mode="before")
    @classmethod
    def reject_sexagesimal(cls, value):
        """YAML reads unquoted 13:00 as the integer 780."""
        if isinstance(value, int):
            raise ValueError(f"Times must be quoted 'HH:MM' strings, got {value}")
        return value

    @model_validator(mode="after")
    def validate_block_order(self) -> "WorkBlockConfig":
        """Ensure the block opens before it closes."""
        if self.end <= self.start:
            raise ValueError("end must be later than start")
        return self

    def to_block(self) -> WorkBlock:
        return WorkBlock(start=self.start, end=self.end)


def _default_block_configs() -> List[WorkBlockConfig]:
    return [
        WorkBlockConfig(start=time(9, 0), end=time(12, 0)),
        WorkBlockConfig(start=time(13, 0), end=time(17, 0)),
    ]


class WorkPatternConfig(BaseModel):
    """Weekly working pattern."""
    weekdays: List[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4])  # Monday - Friday
    blocks: List[WorkBlockConfig] = Field(default_factory=_default_block_configs)

    @field_validator("weekdays")
    @classmethod
    def validate_weekdays(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"weekdays must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @field_validator("blocks")
    @classmethod
    def validate_blocks(cls, value: List[WorkBlockConfig]) -> List[WorkBlockConfig]:
        if not value:
            raise ValueError("At least one working hours block is required")
        return value

    def to_pattern(self) -> WeeklyPattern:
        """Build the domain pattern from this configuration."""
        return WeeklyPattern(
            weekdays=tuple(self.weekdays),
            blocks=tuple(block.to_block() for block in self.blocks),
        )


class DefaultsConfig(BaseModel):
    """Default settings for the availability search."""
    working_days: int = 5

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: int) -> int:
        """Ensure the search covers at least one day."""
        if value <= 0:
            raise ValueError("working_days must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    work_pattern: WorkPatternConfig = Field(default_factory=WorkPatternConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read a worktime config file.

        Sections left out of the file keep their defaults, so an empty file
        yields the built-in Monday-Friday pattern in Europe/Berlin.

        Raises:
            FileNotFoundError: If there is no file at ``config_path``
            ValueError: If the YAML is malformed or the values are invalid
        """
        try:
            text = config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FileNotFoundError(
                f"No worktime config at {config_path}. Copy config.example.yaml there "
                f"and set timezone, work_pattern (weekdays, blocks) and defaults (working_days)."
            ) from None

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"{config_path} must map timezone, work_pattern and defaults to values, "
                f"got a {type(data).__name__}."
            )

        return cls.model_validate(data)


CONFIG_FILE_NAME = "config.yaml"


def get_default_config_path() -> Path:
    """
    Return the first existing config.yaml in the working directory or the
    project checkout; the working-directory path when neither exists.
    """
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path(__file__).resolve().parent.parent / CONFIG_FILE_NAME,
    ]
    return next((path for path in candidates if path.exists()), candidates[0])
