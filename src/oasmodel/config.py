"""Where oasmodel keeps its settings, and how they are layered.

Codec settings (``max_depth``, ``indent``, ``format``) can come from five
places. :func:`resolve_config` merges them, later layers winning:

1. built-in defaults (:class:`~oasmodel.models.CodecConfig`);
2. the user config, ``config.json`` in :func:`get_config_dir`;
3. ``./oasmodel.json`` in the working directory;
4. ``OASMODEL_MAX_DEPTH``, ``OASMODEL_INDENT`` and ``OASMODEL_FORMAT``;
5. command-line flags.

Directories follow the XDG base-directory layout on Linux and BSD and use a
single ``~/.oasmodel/`` tree elsewhere. :func:`atomic_write` is shared with
``oasmodel fmt --write`` so a rewritten document is never left half written.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from oasmodel.exceptions import ConfigError
from oasmodel.models import CodecConfig, GlobalConfig

_APP_NAME = "oasmodel"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "oasmodel.json"

ENV_MAX_DEPTH = "OASMODEL_MAX_DEPTH"
ENV_FORMAT = "OASMODEL_FORMAT"
ENV_INDENT = "OASMODEL_INDENT"

# kind -> (XDG variable, default under $HOME, subdirectory of ~/.oasmodel)
_DIRS = {
    "config": ("XDG_CONFIG_HOME", (".config",), ""),
    "data": ("XDG_DATA_HOME", (".local", "share"), "logs"),
}


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    env_var, default, fallback = _DIRS[kind]
    if _is_xdg_platform():
        base = os.environ.get(env_var, "")
        path = (Path(base) if base else Path.home().joinpath(*default)) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json`` (``~/.config/oasmodel`` by default), created on demand."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """Directory for crash logs (``~/.local/share/oasmodel`` by default), created on demand."""
    return _app_dir("data")


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* in one rename.

    The text goes to a hidden sibling temp file first, is synced, then moved
    over *path* with ``os.replace``. If anything fails the temp file is
    removed and *path* keeps its previous content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


# --- Config files ---


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    """Parse *path* as a JSON object; ``None`` if the file is absent."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Read the user config, or return defaults when there is none.

    Raises:
        ConfigError: If the file is not a JSON object or holds invalid values.
    """
    path = _global_config_path()
    data = _read_json_object(path, "global config")
    if data is None:
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./oasmodel.json``, whose top level holds codec settings.

    Example file::

        {"max_depth": 64, "format": "yaml"}

    Returns:
        The raw settings, validated later by :func:`resolve_config`, or
        ``None`` when the file does not exist.
    """
    return _read_json_object(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project config")


# --- Precedence resolution ---


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for env_var, key in (
        (ENV_MAX_DEPTH, "max_depth"),
        (ENV_INDENT, "indent"),
    ):
        value = os.environ.get(env_var)
        if value:
            try:
                overrides[key] = int(value)
            except ValueError as exc:
                raise ConfigError(f"{env_var} must be an integer, got {value!r}") from exc
    env_format = os.environ.get(ENV_FORMAT)
    if env_format:
        overrides["format"] = env_format.lower()
    return overrides


def resolve_config(
    cli_max_depth: Optional[int] = None,
    cli_indent: Optional[int] = None,
    cli_format: Optional[str] = None,
) -> CodecConfig:
    """Resolve codec settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_max_depth``, ``cli_indent``, ``cli_format``)
        2. Environment variables (``OASMODEL_MAX_DEPTH``, ``OASMODEL_INDENT``,
           ``OASMODEL_FORMAT``)
        3. Project config (``./oasmodel.json``)
        4. User config (``~/.config/oasmodel/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer supplies an invalid value.
    """
    # 5 + 4
    merged = load_global_config().codec.model_dump(exclude_none=True)

    # 3
    project = load_project_config()
    if project is not None:
        merged.update(project)

    # 2
    merged.update(_env_overrides())

    # 1
    cli = {"max_depth": cli_max_depth, "indent": cli_indent, "format": cli_format}
    merged.update({key: value for key, value in cli.items() if value is not None})

    try:
        return CodecConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
