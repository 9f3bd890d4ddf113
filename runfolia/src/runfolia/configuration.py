from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from runfolia.contracts import RunConfig

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

DEFAULT_CONFIG_FILENAME = "runfolia.yaml"


class ConfigError(ValueError):
    pass


def load_yaml(path: str | Path) -> dict[str, Any]:
    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"YAML root must be a mapping: {path}")
    return payload


def load_run_config(
    path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> RunConfig:
    """
    Build a RunConfig from an optional YAML file plus keyword overrides.

    Overrides replace whole top-level keys. Relative paths in the file are
    taken relative to the current directory, the same way the CLI treats its
    own path flags.
    """
    payload: dict[str, Any] = load_yaml(path) if path is not None else {}
    if overrides:
        payload.update(overrides)
    return load_run_config_dict(payload)


def load_run_config_dict(payload: Mapping[str, Any]) -> RunConfig:
    try:
        return RunConfig.model_validate(resolve_env_vars(payload))
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc


def find_default_config(directory: str | Path | None = None) -> Path | None:
    candidate = Path(directory or Path.cwd()) / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def resolve_env_vars(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Expand `${VAR}` in string values and in string items of list values."""
    resolved: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, (list, tuple)):
            resolved[key] = [
                _expand(item, (key, index)) if isinstance(item, str) else item
                for index, item in enumerate(value)
            ]
        elif isinstance(value, str):
            resolved[key] = _expand(value, (key,))
        else:
            resolved[key] = value
    return resolved


def _expand(value: str, loc: tuple[Any, ...]) -> str:
    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            raise ConfigError(f"{_location(loc)}: environment variable {name} is not set")
        return os.environ[name]

    return _ENV_VAR_PATTERN.sub(lookup, value)


def _location(loc: tuple[Any, ...]) -> str:
    return ".".join(["run", *(str(part) for part in loc)])


def _format_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{_location(error['loc'])}: {error['msg']}" for error in exc.errors(include_url=False)
    )
