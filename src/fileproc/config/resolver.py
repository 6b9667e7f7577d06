"""Layered resolution of fileproc settings.

Every setting is addressed as ``section.field`` (for example
``csv.delimiter``). Each source is flattened to those dotted keys, later
sources replace earlier ones key by key, and the merged result is validated
against :class:`FileprocConfig`.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import FileprocConfig

ENV_PREFIX = "FILEPROC__"


def split_key(key: str) -> Tuple[str, str]:
    """Split a dotted ``section.field`` key.

    Raises:
        ConfigError: If ``key`` does not name exactly one section and field.
    """
    section, _, name = key.strip().partition(".")
    if not section or not name or "." in name:
        raise ConfigError(f"Setting {key!r} must be written as section.field, e.g. csv.delimiter.")
    return section, name


def read_env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect ``FILEPROC__SECTION__FIELD`` variables as dotted keys.

    Values are parsed as YAML so ``FILEPROC__XML__PREVIEW_DEPTH=4`` yields an
    integer; text that is not valid YAML is kept as a plain string.

    Raises:
        ConfigError: If a prefixed variable does not name a section and field.
    """
    overrides: Dict[str, Any] = {}
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("__")
        if len(parts) != 2 or not all(parts):
            raise ConfigError(
                f"Environment variable {name} must look like {ENV_PREFIX}SECTION__FIELD."
            )
        try:
            overrides[".".join(parts)] = yaml.safe_load(raw)
        except yaml.YAMLError:
            overrides[".".join(parts)] = raw
    return overrides


def resolve_with_precedence(
    *,
    defaults: FileprocConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> FileprocConfig:
    """Merge configuration sources: defaults, then file, environment, and CLI.

    Each override layer may use nested sections (``{"csv": {"delimiter": ";"}}``)
    or dotted keys (``{"csv.delimiter": ";"}``).

    Raises:
        ConfigError: If a layer is malformed or the merged values fail validation.
    """
    settings = flatten_settings(defaults.model_dump(mode="python"), source="defaults")
    for source, layer in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if layer:
            settings.update(flatten_settings(layer, source=source))

    sections: Dict[str, Dict[str, Any]] = {}
    for key, value in settings.items():
        section, name = split_key(key)
        sections.setdefault(section, {})[name] = value

    try:
        return FileprocConfig.model_validate(sections)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_settings(layer: Mapping[str, Any], *, source: str = "file") -> Dict[str, Any]:
    """Return ``layer`` as a ``{"section.field": value}`` mapping.

    An empty section (``csv:`` with no fields) contributes nothing.

    Raises:
        ConfigError: If ``layer`` or one of its sections is not a mapping.
    """
    label = source.capitalize()
    if not isinstance(layer, Mapping):
        raise ConfigError(f"{label} settings must be a mapping.")

    flat: Dict[str, Any] = {}
    for key, value in layer.items():
        if not isinstance(key, str):
            raise ConfigError(f"{label} setting names must be strings, got {key!r}.")
        if "." in key:
            split_key(key)
            flat[key] = value
        elif value is None:
            continue
        elif isinstance(value, Mapping):
            for name, item in value.items():
                flat[f"{key}.{name}"] = item
        else:
            raise ConfigError(f"{label} section {key!r} must be a mapping of settings.")
    return flat


__all__ = [
    "ENV_PREFIX",
    "flatten_settings",
    "read_env_overrides",
    "resolve_with_precedence",
    "split_key",
]
