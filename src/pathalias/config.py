#!/usr/bin/env python3
"""Configuration loading for path aliases.

Reads ``baseUrl`` and ``paths`` from the project's compiler configuration:

- ``tsconfig.json`` / ``jsconfig.json`` (comments and trailing commas allowed,
  ``extends`` chains followed)
- ``pyproject.toml`` under a ``[tool.pathalias]`` table

Example:
    >>> config = load_config("/my/project")
    >>> config.base_url, list(config.paths)
    ('src', ['@app/*', '@config'])

Expected format in pyproject.toml:
    [tool.pathalias]
    base_url = "src"
    paths = { "@app/*" = ["app/*"], "@config" = ["config/index"] }
"""

import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAMES = ("tsconfig.json", "jsconfig.json")

# Strings are matched first so that "//" or "/*" inside them survive.
_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r'("(?:\\.|[^"\\])*")|,(\s*[}\]])')


@dataclass
class PathsConfig:
    """Normalized alias configuration.

    Attributes:
        config_file_path: Absolute path of the configuration file.
        base_url: The configured base URL, or None when unset.
        paths: Alias pattern -> ordered target list, in declared order.
    """

    config_file_path: str
    base_url: Optional[str] = None
    paths: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def config_dir(self) -> str:
        return os.path.dirname(self.config_file_path)


def strip_json_comments(content: str) -> str:
    """Remove // and /* */ comments and trailing commas from JSON text."""
    content = _COMMENT_RE.sub(lambda m: m.group(1) or "", content)
    return _TRAILING_COMMA_RE.sub(lambda m: m.group(1) or m.group(2), content)


def find_config_file(
    context: str, names: Sequence[str] = DEFAULT_CONFIG_NAMES
) -> Optional[Path]:
    """Search ``context`` and its parents for a configuration file.

    Args:
        context: Directory to start searching from.
        names: File names to look for, in priority order.

    Returns:
        Absolute path of the first match, or None.
    """
    current = Path(context).resolve()
    for directory in [current, *current.parents]:
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def _read_json(config_path: Path) -> Dict[str, Any]:
    try:
        content = config_path.read_text(encoding="utf-8-sig")
        data = json.loads(strip_json_comments(content))
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")
    return data


def _find_package_config(start: Path, extends: str) -> Path:
    """Locate ``extends: "<package>/..."`` in the nearest node_modules."""
    for directory in [start, *start.parents]:
        candidate = directory / "node_modules" / extends
        if candidate.is_dir():
            return candidate / "tsconfig.json"
        if candidate.is_file() or _with_json_suffix(candidate).is_file():
            return candidate
    raise ConfigError(f"Cannot find extended configuration '{extends}' from {start}")


def _parse_tsconfig(
    config_path: Path, seen: Set[str]
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Parse one tsconfig file, following its ``extends`` chain.

    Returns:
        Tuple of (paths or None if unset, absolute baseUrl or None if unset).
    """
    config_str = str(config_path.resolve())
    if config_str in seen:
        logger.debug("Skipping circular extends: %s", config_str)
        return None, None
    seen.add(config_str)

    config = _read_json(config_path)
    compiler_options = config.get("compilerOptions") or {}
    paths = compiler_options.get("paths")
    base_url = compiler_options.get("baseUrl")
    if base_url is not None:
        base_url = os.path.normpath(os.path.join(str(config_path.parent), base_url))

    extends = config.get("extends")
    if isinstance(extends, str):
        extends = [extends]
    if extends is None:
        extends = []
    if not isinstance(extends, list) or not all(isinstance(e, str) for e in extends):
        raise ConfigError(f"'extends' must be a string or a list of strings in {config_path}")

    # Later parents override earlier ones; the child overrides them all
    inherited_paths, inherited_base = None, None
    for entry in extends:
        parent_paths, parent_base = _parse_tsconfig(
            _extends_path(config_path, entry), seen
        )
        if parent_paths is not None:
            inherited_paths = parent_paths
        if parent_base is not None:
            inherited_base = parent_base

    if paths is None:
        paths = inherited_paths
    if base_url is None:
        base_url = inherited_base

    return paths, base_url


def _with_json_suffix(path: Path) -> Path:
    if path.suffix == ".json":
        return path
    return path.with_name(path.name + ".json")


def _extends_path(config_path: Path, extends: str) -> Path:
    """Locate the file named by one ``extends`` entry."""
    parent_path = Path(extends)
    if not parent_path.is_absolute():
        if extends.startswith("."):
            parent_path = config_path.parent / extends
        else:
            parent_path = _find_package_config(config_path.parent, extends)
    if parent_path.is_file():
        return parent_path
    return _with_json_suffix(parent_path)


def _normalize_paths(paths: Any, source: Path) -> Dict[str, List[str]]:
    if paths is None:
        return {}
    if not isinstance(paths, dict):
        raise ConfigError(f"'paths' must be an object in {source}")

    normalized: Dict[str, List[str]] = {}
    for alias, targets in paths.items():
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(targets, list) or not all(isinstance(t, str) for t in targets):
            raise ConfigError(f"Targets for alias '{alias}' must be strings in {source}")
        normalized[alias] = list(targets)
    return normalized


def load_tsconfig(config_path: str) -> PathsConfig:
    """Load aliases from a tsconfig.json or jsconfig.json file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        PathsConfig with ``base_url`` made absolute when it was set.

    Raises:
        ConfigError: If the file (or an extended file) cannot be parsed.
    """
    path = Path(config_path).resolve()
    paths, base_url = _parse_tsconfig(path, set())
    config = PathsConfig(
        config_file_path=str(path),
        base_url=base_url,
        paths=_normalize_paths(paths, path),
    )
    logger.debug(
        "Loaded %d alias(es) from %s (baseUrl=%s)", len(config.paths), path, base_url
    )
    return config


def load_pyproject(config_path: str) -> PathsConfig:
    """Load aliases from the ``[tool.pathalias]`` table of a pyproject.toml.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    path = Path(config_path).resolve()
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    tool = data.get("tool", {})
    section = tool.get("pathalias", {}) if isinstance(tool, dict) else None
    if not isinstance(section, dict):
        raise ConfigError(f"[tool.pathalias] must be a table in {path}")
    return PathsConfig(
        config_file_path=str(path),
        base_url=section.get("base_url"),
        paths=_normalize_paths(section.get("paths"), path),
    )


def load_config(context: str = None, config_file: str = None) -> PathsConfig:
    """Load alias configuration from an explicit file or by discovery.

    Args:
        context: Directory to search from (defaults to the working directory).
        config_file: Explicit configuration file. Relative paths are taken
            relative to ``context``.

    Returns:
        The loaded PathsConfig.

    Raises:
        ConfigError: If no configuration is found or it cannot be parsed.
    """
    context = context or os.getcwd()

    if config_file:
        path = Path(config_file)
        if not path.is_absolute():
            path = Path(context) / path
        if not path.is_file():
            raise ConfigError(f"Configuration file does not exist: {path}")
    else:
        path = find_config_file(context)
        if path is None:
            raise ConfigError(
                f"No {' or '.join(DEFAULT_CONFIG_NAMES)} found from {Path(context).resolve()}"
            )

    if path.suffix == ".toml":
        return load_pyproject(str(path))
    return load_tsconfig(str(path))
