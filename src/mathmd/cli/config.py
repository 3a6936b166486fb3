#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mathmd CLI.

Configuration is a flat table of option names. Keys are fields of
``MarkdownParserOptions`` or ``HtmlRendererOptions`` plus ``api_base_url``::

    # .mathmd.toml
    parse_tables = false
    standalone = true
    api_base_url = "https://api.example.com/v1"

The same table can live under ``[tool.mathmd]`` in ``pyproject.toml``.
"""

import argparse
import json
import logging
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mathmd.constants import CONFIG_FILENAMES
from mathmd.options.html import HtmlRendererOptions
from mathmd.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"
DEDICATED_CONFIG_FILENAMES = [name for name in CONFIG_FILENAMES if name != PYPROJECT_FILENAME]

PARSER_CONFIG_KEYS = frozenset(f.name for f in fields(MarkdownParserOptions))
RENDERER_CONFIG_KEYS = frozenset(f.name for f in fields(HtmlRendererOptions))
EXTRA_CONFIG_KEYS = frozenset({"api_base_url"})


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mathmd]`` table from pyproject.toml.

    Returns
    -------
    dict
        Configuration from the table, or an empty dict if there is none

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("mathmd")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.mathmd] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e

    # An empty YAML document is an empty configuration
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name: ``pyproject.toml`` yields its
    ``[tool.mathmd]`` table, other ``.toml`` files, ``.yaml``/``.yml`` and
    ``.json`` files are read whole.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    ext = config_path.suffix.lower()

    try:
        if config_path.name.lower() == PYPROJECT_FILENAME:
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            config = _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            config = _load_yaml_config(config_path)
        elif ext == ".json":
            config = _load_json_config(config_path)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    logger.debug("Loaded configuration from %s", config_path)
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching the directory and its parents.

    Each directory is checked for ``.mathmd.toml``, ``.mathmd.yaml``,
    ``.mathmd.yml``, ``.mathmd.json`` and finally a ``pyproject.toml`` that
    has a ``[tool.mathmd]`` table. The first match wins.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject_path = current / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None, start_dir: Optional[Path] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MATHMD_CONFIG)
    3. Auto-discovered config file (cwd and its parents)

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from MATHMD_CONFIG environment variable
    start_dir : Path, optional
        Directory where auto-discovery starts, defaults to cwd

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = find_config_in_parents(start_dir)
    if discovered_path:
        return load_config_file(discovered_path)

    return {}


def split_config(config: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, Any], Dict[str, Any]]:
    """Split a configuration table into parser, renderer and extra settings.

    Parameters
    ----------
    config : dict
        Flat configuration table

    Returns
    -------
    tuple[dict, dict, dict]
        (parser_kwargs, renderer_kwargs, extra_settings)

    Raises
    ------
    argparse.ArgumentTypeError
        If the table contains unknown keys

    Examples
    --------
    >>> split_config({"parse_tables": False, "standalone": True, "api_base_url": "/api"})
    ({'parse_tables': False}, {'standalone': True}, {'api_base_url': '/api'})

    """
    parser_kwargs: Dict[str, Any] = {}
    renderer_kwargs: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}
    unknown = []

    for key, value in config.items():
        if key in PARSER_CONFIG_KEYS:
            parser_kwargs[key] = value
        elif key in RENDERER_CONFIG_KEYS:
            if key == "mathjax_urls" and isinstance(value, list):
                value = tuple(value)
            renderer_kwargs[key] = value
        elif key in EXTRA_CONFIG_KEYS:
            extra[key] = value
        else:
            unknown.append(key)

    if unknown:
        raise argparse.ArgumentTypeError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    return parser_kwargs, renderer_kwargs, extra
