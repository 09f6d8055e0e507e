"""
Configuration loading for the grading system.

Values come from defaults, then an optional JSON config file, then
environment variables. Command-line flags are applied on top by main.
"""

import json
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError as SchemaValidationError, field_validator

from .core.exceptions import ConfigurationError

ENV_OVERRIDES = {
    "GRADING_DATA_FILE": "data_file",
    "GRADING_EXPORT_DIR": "export_dir",
    "GRADING_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class GradingConfig(BaseModel):
    data_file: str = Field(default=os.path.join("data", "students.json"), min_length=1)
    export_dir: str = Field(default="exports", min_length=1)
    max_number_attempts: int = Field(default=100, ge=1)
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> GradingConfig:
    """Build the configuration from a JSON file, the environment and overrides."""
    values: Dict[str, Any] = {}

    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                file_values = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read configuration file {path}: {str(e)}")
        if not isinstance(file_values, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        values.update(file_values)

    env = os.environ if env is None else env
    for variable, key in ENV_OVERRIDES.items():
        if env.get(variable):
            values[key] = env[variable]

    values.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        return GradingConfig(**values)
    except SchemaValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
