"""
Platform configuration.

Values come from an optional JSON file and can be overridden with
COURSEBOOK_* environment variables (e.g. COURSEBOOK_REST_PORT=9000).
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .core.exceptions import ConfigurationError

ENV_PREFIX = "COURSEBOOK_"


class CoursebookConfig(BaseModel):
    course_name: str = Field("Introduction to Programming", min_length=1)
    term: str = Field("2026-1", min_length=1)
    owner: str = Field("owner", min_length=1)
    rest_host: str = "0.0.0.0"
    rest_port: int = Field(8000, ge=1, le=65535)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, level: str) -> str:
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {level!r}")
        return level


def _from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides = {}
    for field_name in CoursebookConfig.model_fields:
        key = ENV_PREFIX + field_name.upper()
        if key in environ:
            overrides[field_name] = environ[key]
    return overrides


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> CoursebookConfig:
    """Build the configuration from a JSON file and the environment."""
    data: Dict[str, Any] = {}
    if path:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must hold a JSON object")

    data.update(_from_env(os.environ if environ is None else environ))

    try:
        return CoursebookConfig(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", details={'errors': e.errors()})
