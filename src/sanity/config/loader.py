"""Sanity configuration loader.

``sanity.yaml`` is located through ``SANITY_CONFIG_PATH`` or the current
directory; without a file the built-in defaults apply. String values may
reference environment variables before they are mapped onto the config
dataclasses.
"""

import os
import re
from collections.abc import Callable
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, get_type_hints

import yaml

from sanity.errors import create_error

from .models import SanityConfig

CONFIG_FILENAME = "sanity.yaml"
CONFIG_ENV_VAR = "SANITY_CONFIG_PATH"

ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[?-])(?P<arg>[^}]*))?\}")


@dataclass
class ValidationIssue:
    """A single configuration problem."""

    path: str  # Dotted key, e.g. "server.port"
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)


def resolve_env_vars(value: str) -> str:
    """Expand environment references in ``value``.

    Supports ``${VAR}``, ``${VAR:-default}`` and ``${VAR:?message}``.

    Raises:
        SanityError: CONFIG_INVALID when a variable without default is unset
    """

    def expand(match: re.Match[str]) -> str:
        name, op, arg = match.group("name", "op", "arg")
        if name in os.environ:
            return os.environ[name]
        if op == "-":
            return arg
        if op == "?" and arg:
            raise create_error("CONFIG_INVALID", detail=arg)
        raise create_error("CONFIG_INVALID", detail=f"Environment variable {name} is not set")

    return ENV_REFERENCE.sub(expand, value)


def _interpolate(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    if isinstance(data, dict):
        return {key: _interpolate(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_interpolate(item) for item in data]
    return data


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        detail = f"Invalid YAML in {path}: {e}"
        raise create_error("CONFIG_INVALID", path=path, detail=detail) from e
    except OSError as e:
        raise create_error("CONFIG_INVALID", path=path, detail=f"Cannot read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise create_error("CONFIG_INVALID", path=path, detail="Top level must be a mapping")
    return _interpolate(data)


def _coerce_enum(enum_cls: type[Enum], value: Any) -> Enum:
    """Accept enum values case-insensitively ("info", "INFO", "Json")."""
    if isinstance(value, enum_cls):
        return value
    for candidate in (value, str(value).upper(), str(value).lower()):
        try:
            return enum_cls(candidate)
        except ValueError:
            continue
    raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")


def _to_dataclass(cls: type, data: dict[str, Any], prefix: str = "") -> Any:
    """Map a mapping onto ``cls``; nested dataclasses and enums are converted."""
    hints = get_type_hints(cls)
    values: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value, hint = data[f.name], hints[f.name]
        if is_dataclass(hint):
            if not isinstance(value, dict):
                raise TypeError(f"{prefix}{f.name} must be a mapping")
            value = _to_dataclass(hint, value, f"{prefix}{f.name}.")
        elif isinstance(hint, type) and issubclass(hint, Enum):
            value = _coerce_enum(hint, value)
        values[f.name] = value
    return cls(**values)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_port(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value < 65536


def _is_extension_list(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(ext, str) and ext.startswith(".") for ext in value
    )


FIELD_RULES: dict[tuple[str, str], tuple[Callable[[Any], bool], str]] = {
    ("server", "port"): (_is_port, "port must be an integer in 1-65535"),
    ("watch", "debounce_seconds"): (
        lambda v: _is_number(v) and v >= 0,
        "debounce_seconds must be a non-negative number",
    ),
    ("minify", "asset_extensions"): (
        _is_extension_list,
        "asset_extensions must be a list of '.ext' strings",
    ),
}


class ConfigLoader:
    """Load and validate sanity configuration."""

    def __init__(self) -> None:
        self._config: SanityConfig | None = None
        self._config_path: Path | None = None
        self.warnings: list[ValidationIssue] = []

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    @staticmethod
    def default_path() -> Path:
        """``$SANITY_CONFIG_PATH`` if set, else ``./sanity.yaml``."""
        return Path(os.environ.get(CONFIG_ENV_VAR) or CONFIG_FILENAME)

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> SanityConfig:
        """Load configuration from file.

        Args:
            path: Config file (default: ``default_path()``)
            use_defaults: Fall back to built-in defaults when the file is absent

        Raises:
            SanityError: CONFIG_INVALID for a missing file (without defaults),
                unreadable YAML or invalid values
        """
        config_path = Path(path) if path is not None else self.default_path()
        if not config_path.exists():
            if use_defaults:
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                path=config_path,
                detail=f"Configuration file not found: {config_path}",
            )
        return self.load_from_dict(_read_yaml(config_path), config_path)

    def load_defaults(self) -> SanityConfig:
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> SanityConfig:
        """Validate ``data`` and build the config from it.

        Raises:
            SanityError: If configuration is invalid
        """
        result = self.validate(data)
        self.warnings = result.warnings
        if not result.valid:
            lines = [f"- {issue.path}: {issue.message}" for issue in result.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(lines),
            )

        try:
            config = _to_dataclass(SanityConfig, data)
        except (TypeError, ValueError) as e:
            detail = f"Failed to parse configuration: {e}"
            raise create_error("CONFIG_INVALID", detail=detail) from e

        self._config = config
        self._config_path = config_path
        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Check raw config data without building it.

        A numeric string port is coerced to ``int`` in place. Unknown keys,
        top-level or inside a section, are warnings.
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        hints = get_type_hints(SanityConfig)

        for key, section in data.items():
            if key not in hints:
                warnings.append(
                    ValidationIssue(key, f"Unknown configuration key: {key}", "warning")
                )
                continue
            if not isinstance(section, dict):
                errors.append(ValidationIssue(key, f"{key} must be a mapping"))
                continue
            known = {f.name for f in fields(hints[key])}
            for name in section.keys() - known:
                path = f"{key}.{name}"
                warnings.append(
                    ValidationIssue(path, f"Unknown configuration key: {path}", "warning")
                )

        server = data.get("server")
        if isinstance(server, dict) and isinstance(server.get("port"), str):
            if server["port"].isdigit():
                server["port"] = int(server["port"])

        for (section_name, name), (check, message) in FIELD_RULES.items():
            section = data.get(section_name)
            if isinstance(section, dict) and name in section and not check(section[name]):
                errors.append(ValidationIssue(f"{section_name}.{name}", message))

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def get(self) -> SanityConfig:
        """Get current configuration.

        Raises:
            SanityError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config


def load_config(path: str | Path | None = None) -> SanityConfig:
    """Load configuration with a fresh loader."""
    return ConfigLoader().load(path)
