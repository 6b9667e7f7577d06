"""Configuration management for fileproc."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml

from .exceptions import ConfigError
from .models import FileprocConfig
from .resolver import (
    ENV_PREFIX,
    flatten_settings,
    read_env_overrides,
    resolve_with_precedence,
    split_key,
)

DEFAULT_CONFIG_PATH = Path("~/.fileproc/config.yaml")
CONFIG_HEADER = (
    "# fileproc configuration file\n"
    "# Edit with `fileproc config edit` or `fileproc config set SECTION.FIELD --value VALUE`.\n"
)


class ConfigManager:
    """Read and write ``~/.fileproc/config.yaml`` and resolve effective settings.

    Args:
        config_path: Alternate file location, mostly for tests.
        env: Environment consulted for ``FILEPROC__SECTION__FIELD`` overrides;
            defaults to ``os.environ``.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        include_env: bool = True,
        cli_overrides: Mapping[str, Any] | None = None,
    ) -> FileprocConfig:
        """Return the effective configuration, creating the file when missing.

        Args:
            include_env: Apply ``FILEPROC__`` environment overrides.
            cli_overrides: Dotted ``section.field`` values that win over every other source.

        Raises:
            ConfigError: If any source is malformed or a value is invalid.
        """
        self.ensure_exists()
        return resolve_with_precedence(
            defaults=FileprocConfig(),
            file_overrides=self.load_file_overrides(),
            env_overrides=read_env_overrides(self._env) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the config file, or ``{}`` when absent."""
        if not self._config_path.exists():
            return {}
        return _parse_document(self._config_path.read_text(encoding="utf-8"))

    def set_value(self, key: str, raw_value: str) -> Tuple[Any, Any]:
        """Store one setting in the config file.

        Args:
            key: Dotted ``section.field`` name.
            raw_value: Value text, parsed as YAML (``6`` becomes an int); text that
                is not valid YAML, such as ``,``, is stored as a string.

        Returns:
            Tuple[Any, Any]: The file-level value before and after the change.

        Raises:
            ConfigError: If the key is malformed or the value fails validation.
        """
        section, name = split_key(key)
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value

        settings = flatten_settings(self.load_file_overrides())
        before = self._file_config(settings)
        settings[f"{section}.{name}"] = value
        after = self._file_config(settings)

        previous = getattr(getattr(before, section), name)
        current = getattr(getattr(after, section), name)
        if previous != current:
            self.save(after)
        return previous, current

    def replace_text(self, text: str) -> FileprocConfig:
        """Validate edited YAML text and save it as the new config file.

        Raises:
            ConfigError: If the text is not a valid configuration document.
        """
        config = self._file_config(flatten_settings(_parse_document(text)))
        self.save(config)
        return config

    def save(self, config: FileprocConfig) -> None:
        """Write ``config`` to disk below the standard header."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        body = yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False)
        self._config_path.write_text(CONFIG_HEADER + body, encoding="utf-8")

    def ensure_exists(self) -> Path:
        """Create a configuration file with defaults if one does not exist."""
        if not self._config_path.exists():
            self.save(FileprocConfig())
        return self._config_path

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    @staticmethod
    def _file_config(settings: Mapping[str, Any]) -> FileprocConfig:
        return resolve_with_precedence(defaults=FileprocConfig(), file_overrides=settings)


def _parse_document(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a mapping at the top level.")
    return data


__all__ = [
    "CONFIG_HEADER",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "FileprocConfig",
    "read_env_overrides",
    "resolve_with_precedence",
]
