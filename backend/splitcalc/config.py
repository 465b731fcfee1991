"""
Interpreter configuration.

Settings are read from a YAML file, either given explicitly or named by
the SPLITCALC_CONFIG environment variable. Keys may sit at the top level
of the document or under an ``interpreter:`` mapping.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

CONFIG_ENV_VAR = "SPLITCALC_CONFIG"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class InterpreterConfig(BaseModel):
    """Settings for the interpreter and its read loop."""

    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(default=">>> ", description="Prompt printed before each line")
    result_prefix: str = Field(default="=> ", description="Printed before each result")
    farewell: str = Field(default="bye", description="Printed when the loop ends")
    show_tokens: bool = Field(default=False, description="Dump tokens before evaluating")
    show_tree: bool = Field(default=False, description="Dump the tree before evaluating")
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(path: Optional[Union[str, Path]] = None) -> InterpreterConfig:
    """
    Load interpreter configuration.

    Args:
        path: YAML file to read. Defaults to $SPLITCALC_CONFIG.

    Returns:
        The configuration; defaults when no file is given or it does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR)
    if not path:
        return InterpreterConfig()

    config_path = Path(path)
    if not config_path.exists():
        return InterpreterConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    section: Dict[str, Any] = data.get("interpreter", data)
    if not isinstance(section, dict):
        raise ConfigError(f"`interpreter` in {config_path} must be a mapping")

    try:
        return InterpreterConfig(**section)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {config_path}: {e}") from e
