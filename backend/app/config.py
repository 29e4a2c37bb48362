"""
Configuration management for tablecop.

Configuration priority (highest to lowest):
1. Environment variables (for CI / container deployments)
2. tablecop.json file (for local development)
3. Built-in defaults

The JSON file may use plain keys (`max_line_length`, `max_passes`,
`disabled_policies`) or the RuboCop layout the original cops were configured
with (`{"Layout/LineLength": {"Max": 80}, "Tablecop/AlignMethods": {"Enabled": false}}`).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .models.engine import COP_NAMES, PolicyKind, TablecopError

logger = logging.getLogger(__name__)

# Config file path at project root
CONFIG_FILE = Path(__file__).parent.parent.parent / "tablecop.json"

# Default values (used when neither env var nor tablecop.json specifies)
DEFAULT_MAX_LINE_LENGTH = 120
DEFAULT_MAX_PASSES = 10

LINE_LENGTH_COP = "Layout/LineLength"

_KIND_BY_COP_NAME = {name: kind for kind, name in COP_NAMES.items()}


class ConfigurationError(TablecopError, ValueError):
    """Structurally invalid configuration; raised before any pass runs."""


class TablecopSettings(BaseModel):
    """Resolved settings for one inspection/autocorrect run."""

    max_line_length: int = Field(default=DEFAULT_MAX_LINE_LENGTH, gt=0)
    max_passes: int = Field(default=DEFAULT_MAX_PASSES, gt=0)
    disabled_policies: List[PolicyKind] = Field(default_factory=list)

    @field_validator("disabled_policies", mode="before")
    @classmethod
    def _accept_cop_names(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple, set)):
            return [_KIND_BY_COP_NAME.get(item, item) if isinstance(item, str) else item for item in value]
        return value

    def is_enabled(self, kind: PolicyKind) -> bool:
        return kind not in self.disabled_policies


def build_settings(values: Optional[Dict[str, Any]] = None) -> TablecopSettings:
    """Validate raw settings, failing fast with ConfigurationError."""
    try:
        return TablecopSettings(**(values or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tablecop configuration: {e}") from e


def normalize_config(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten RuboCop-shaped keys into TablecopSettings fields."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration must be a JSON object, got {type(data).__name__}")
    values: Dict[str, Any] = {}
    for key in ("max_line_length", "max_passes", "disabled_policies"):
        if key in data:
            values[key] = data[key]

    line_length = data.get(LINE_LENGTH_COP)
    if isinstance(line_length, dict) and line_length.get("Max") is not None:
        values["max_line_length"] = line_length["Max"]

    disabled = list(values.get("disabled_policies") or [])
    for cop_name, kind in _KIND_BY_COP_NAME.items():
        cop_config = data.get(cop_name)
        if isinstance(cop_config, dict) and cop_config.get("Enabled") is False:
            disabled.append(kind.value)
    if disabled:
        values["disabled_policies"] = disabled

    unknown = [key for key in data if key.startswith("Tablecop/") and key not in _KIND_BY_COP_NAME]
    if unknown:
        raise ConfigurationError(f"Unknown cop(s) in configuration: {', '.join(sorted(unknown))}")
    return values


class Config:
    """
    Project-level configuration manager.

    Priority: ENV > tablecop.json > defaults

    Environment variables:
      - TABLECOP_CONFIG_FILE: alternative path to the JSON config file
      - TABLECOP_MAX_LINE_LENGTH: maximum rendered line width
      - TABLECOP_MAX_PASSES: iteration cap for autocorrect convergence
      - TABLECOP_DISABLED_POLICIES: comma-separated policy ids or cop names
    """

    def __init__(self, config_file: Optional[Path] = None):
        env_file = os.getenv("TABLECOP_CONFIG_FILE")
        self.config_file = Path(config_file or env_file or CONFIG_FILE)
        self.data = self.load()

    def load(self) -> Dict[str, Any]:
        """Load configuration from file; a missing file means defaults."""
        if not self.config_file.exists():
            return {}
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config from {self.config_file}: {e}")
            raise ConfigurationError(f"Unreadable configuration file {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {self.config_file} must hold a JSON object")
        return data

    def get_max_line_length(self) -> Any:
        """
        Get configured maximum line length.

        Priority: TABLECOP_MAX_LINE_LENGTH env var > tablecop.json > default
        """
        env_value = os.getenv("TABLECOP_MAX_LINE_LENGTH")
        if env_value:
            return env_value
        return normalize_config(self.data).get("max_line_length", DEFAULT_MAX_LINE_LENGTH)

    def get_max_passes(self) -> Any:
        """Get the autocorrect iteration cap (ENV > tablecop.json > default)."""
        env_value = os.getenv("TABLECOP_MAX_PASSES")
        if env_value:
            return env_value
        return normalize_config(self.data).get("max_passes", DEFAULT_MAX_PASSES)

    def get_disabled_policies(self) -> List[str]:
        """Get disabled policies (ENV > tablecop.json > none)."""
        env_value = os.getenv("TABLECOP_DISABLED_POLICIES")
        if env_value:
            return [part.strip() for part in env_value.split(",") if part.strip()]
        return list(normalize_config(self.data).get("disabled_policies", []))

    def settings(self, **overrides: Any) -> TablecopSettings:
        """Resolve and validate settings; explicit overrides win over everything."""
        values: Dict[str, Any] = {
            "max_line_length": self.get_max_line_length(),
            "max_passes": self.get_max_passes(),
            "disabled_policies": self.get_disabled_policies(),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return build_settings(values)


# Global config instance
config = Config()
