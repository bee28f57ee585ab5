"""Configuration loading for jsanalyzer.

Sources are merged in priority order:
    1. Defaults (defined in AnalyzerConfig)
    2. Project config (<root>/.jsanalyzer.toml)
    3. Explicit config file (--config)
    4. Overrides passed as keyword arguments (CLI flags)

Example:
    >>> config = load_config(large_function_threshold=80)
    >>> config.large_function_threshold
    80
"""

from __future__ import annotations

import os
import tomllib
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

PROJECT_CONFIG_NAME = ".jsanalyzer.toml"


class AnalyzerConfig(BaseModel):
	"""Thresholds and scan settings for one analysis run."""

	model_config = ConfigDict(extra="forbid")

	large_function_threshold: int = Field(default=50, ge=0)
	top_imports: int = Field(default=5, ge=0)
	ignored_directories: List[str] = [".git", "node_modules", "dist"]
	extensions: List[str] = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"]

	@field_validator("extensions")
	@classmethod
	def _dotted(cls, value: List[str]) -> List[str]:
		return [ext if ext.startswith(".") else f".{ext}" for ext in value]


def _load_toml_file(path: str) -> Dict[str, Any]:
	try:
		with open(path, "rb") as fh:
			data = tomllib.load(fh)
	except OSError as e:
		raise ConfigError(f"cannot read config file: {e.strerror or e}", source=path) from e
	except tomllib.TOMLDecodeError as e:
		raise ConfigError(str(e), source=path) from e
	# Allow the settings to live under a [jsanalyzer] table
	return data.get("jsanalyzer", data)


def load_config(
	root: Optional[str] = None,
	config_file: Optional[str] = None,
	**overrides: Any,
) -> AnalyzerConfig:
	merged: Dict[str, Any] = {}

	if root is not None:
		project_config = os.path.join(root, PROJECT_CONFIG_NAME)
		if os.path.isfile(project_config):
			merged.update(_load_toml_file(project_config))

	if config_file is not None:
		if not os.path.isfile(config_file):
			raise ConfigError("config file not found", source=config_file)
		merged.update(_load_toml_file(config_file))

	merged.update({k: v for k, v in overrides.items() if v is not None})

	try:
		return AnalyzerConfig(**merged)
	except ValidationError as e:
		errors = "; ".join(
			f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
		)
		raise ConfigError(errors, source=config_file) from e
