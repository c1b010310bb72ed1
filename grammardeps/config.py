"""Tool configuration for grammardeps (.grammardeps.yml and CLI overrides)."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILE_NAME = ".grammardeps.yml"
CURRENT_DIRECTORY = "."


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class ToolConfig:
    """Directory and generation switches normally supplied on the command line."""

    output_directory: Optional[str] = None
    lib_directory: str = CURRENT_DIRECTORY
    generate_listener: bool = True
    generate_visitor: bool = False
    exact_output_dir: bool = False
    language: Optional[str] = None

    def resolve_output_directory(self, file_name: str) -> str:
        """Return the directory generated files for ``file_name`` are written to.

        Without an output directory the file's own directory is used (``.`` when
        the name has no directory part). With one, a relative file directory is
        kept beneath it, so ``T.g4`` under ``-o out`` resolves to ``out/.``.
        """
        if self.exact_output_dir and self.output_directory:
            return self.output_directory

        file_directory = os.path.dirname(file_name) or CURRENT_DIRECTORY
        if not self.output_directory:
            return file_directory
        if os.path.isabs(file_directory) or file_directory.startswith("~"):
            return self.output_directory
        if os.path.normpath(self.output_directory) == CURRENT_DIRECTORY:
            return file_directory
        return os.path.join(self.output_directory, file_directory)

    def merged(self, **overrides: Any) -> "ToolConfig":
        """Return a copy with every override that is not ``None`` applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(changes) - set(self.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
        return replace(self, **changes)


def load_config(config_path: Path) -> ToolConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return ToolConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    lib_directory = _as_str(data.get("lib_dir")) or CURRENT_DIRECTORY
    listener = _as_bool(data.get("listener"))
    visitor = _as_bool(data.get("visitor"))
    exact = _as_bool(data.get("exact_output_dir"))

    return ToolConfig(
        output_directory=_as_str(data.get("output_dir")),
        lib_directory=lib_directory,
        generate_listener=True if listener is None else listener,
        generate_visitor=bool(visitor),
        exact_output_dir=bool(exact),
        language=_as_str(data.get("language")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return config_path / CONFIG_FILE_NAME
    return config_path


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
