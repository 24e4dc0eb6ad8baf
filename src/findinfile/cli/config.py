#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the findinfile CLI.

Config files supply defaults for the optional search flags (extensions,
ignore_case, exclude_binary, full_path, verbose, jobs, encoding,
detect_encoding) and for ``output_format``. Values given on the command line
always win.

Every loading problem is raised as :class:`argparse.ArgumentTypeError`, which
the CLI reports as a validation error.
"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

from findinfile.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

ConfigMapping = Dict[str, Any]


def _parse_toml(raw: bytes) -> Any:
    return tomllib.loads(raw.decode("utf-8"))


def _parse_yaml(raw: bytes) -> Any:
    return yaml.safe_load(raw) or {}


def _parse_json(raw: bytes) -> Any:
    return json.loads(raw.decode("utf-8"))


# suffix -> (format label, parser, errors the parser raises on bad input)
_PARSERS: Dict[str, tuple[str, Callable[[bytes], Any], tuple[type[Exception], ...]]] = {
    ".toml": ("TOML", _parse_toml, (tomllib.TOMLDecodeError, UnicodeDecodeError)),
    ".yaml": ("YAML", _parse_yaml, (yaml.YAMLError,)),
    ".yml": ("YAML", _parse_yaml, (yaml.YAMLError,)),
    ".json": ("JSON", _parse_json, (json.JSONDecodeError, UnicodeDecodeError)),
}


def _read_tool_table(pyproject_path: Path) -> ConfigMapping:
    """Return the ``[tool.findinfile]`` table of ``pyproject_path``, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read or parsed, or the table is not a table

    """
    try:
        document = _parse_toml(pyproject_path.read_bytes())
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e

    table = document.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(table, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(table).__name__}"
        )
    return table


def _has_tool_table(pyproject_path: Path) -> bool:
    try:
        return bool(_read_tool_table(pyproject_path))
    except argparse.ArgumentTypeError:
        # a broken pyproject.toml belonging to some other project
        return False


def _config_in_directory(directory: Path, include_pyproject: bool = True) -> Optional[Path]:
    """Return the config file stored directly in ``directory``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    if include_pyproject:
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Look for a config file in ``start_dir`` and each of its ancestors.

    Within one directory the dedicated files win, in
    :data:`~findinfile.constants.CONFIG_FILENAMES` order, over a
    ``pyproject.toml`` carrying a ``[tool.findinfile]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Where to start; the working directory by default

    Returns
    -------
    Path or None
        The nearest config file

    """
    directory = (start_dir or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        found = _config_in_directory(candidate_dir)
        if found is not None:
            return found
    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a config file above ``start_dir``, falling back to the home directory.

    Only the dedicated file names are looked up in the home directory.
    """
    return find_config_in_parents(start_dir) or _config_in_directory(Path.home(), include_pyproject=False)


def load_config_file(config_path: Path | str) -> ConfigMapping:
    """Read a configuration file.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``, ``.yml`` or ``.json`` file, or a
        ``pyproject.toml`` whose ``[tool.findinfile]`` table is used

    Returns
    -------
    dict
        Flag names mapped to their default values

    Raises
    ------
    argparse.ArgumentTypeError
        If the path is missing, unreadable, malformed, of an unknown type, or
        does not hold a mapping

    Examples
    --------
    >>> load_config_file(".findinfile.toml")
    {'extensions': ['py', 'txt'], 'ignore_case': True}

    """
    path = Path(config_path)

    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {path}")

    if path.name.lower() == "pyproject.toml":
        return _read_tool_table(path)

    suffix = path.suffix.lower()
    if suffix not in _PARSERS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .json, .toml, or .yaml")
    label, parse, parse_errors = _PARSERS[suffix]

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {path}: {e}") from e

    try:
        loaded = parse(raw)
    except parse_errors as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in config file {path}: {e}") from e

    if not isinstance(loaded, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {path} must contain a table/mapping at root level, got {type(loaded).__name__}"
        )
    return loaded


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> ConfigMapping:
    """Load the config file that applies to this run.

    The ``--config`` path is used when given, then the path from
    ``FINDINFILE_CONFIG``, then whatever :func:`discover_config_file` finds.
    No config file at all yields an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the selected file cannot be loaded

    """
    selected = explicit_path or env_var_path or discover_config_file()
    if not selected:
        return {}
    return load_config_file(selected)
