"""
Configuration for the assignment tracker.
"""

import json
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from .core.enums import PASS_THRESHOLD
from .core.exceptions import ConfigurationError


class TrackerSettings(BaseModel):
    """Timing and grading settings shared by every student."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    work_delay: float = Field(0.5, ge=0)
    grading_delay: float = Field(0.5, ge=0)
    pass_threshold: float = PASS_THRESHOLD
    min_grade: int = Field(0, ge=0)
    max_grade: int = Field(100, ge=0)
    random_seed: Optional[int] = None

    @model_validator(mode="after")
    def check_grade_range(self) -> "TrackerSettings":
        if self.min_grade > self.max_grade:
            raise ValueError("min_grade must not exceed max_grade")
        return self


def load_settings(config: Union[None, Dict[str, Any], TrackerSettings] = None) -> TrackerSettings:
    """Validate a config dict into settings; None gives the defaults."""
    if isinstance(config, TrackerSettings):
        return config
    try:
        return TrackerSettings(**(config or {}))
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid tracker configuration: {e.error_count()} error(s)",
            error_code="invalid_config",
            details={'errors': e.errors(include_url=False)}
        ) from e


def load_config_file(path: str) -> Dict[str, Any]:
    """Read a JSON config file into a dict."""
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}",
                                 error_code="unreadable_config") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object",
                                 error_code="invalid_config")
    return config
