#!/usr/bin/env python3
"""Mapping table: compiled aliases in configuration order.

The table is built once from a ``PathsConfig`` and only read afterwards.
Each alias/target pair becomes one ``Mapping``; an alias with several
targets produces several mappings sharing the same compiled pattern.

Example:
    >>> config = PathsConfig("/proj/tsconfig.json", "src", {"@app/*": ["app/*"]})
    >>> table = build_mapping_table(config)
    >>> table.base_directory
    '/proj/src'
    >>> table.match("@app/widgets").captured
    'widgets'
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import PathsConfig
from .patterns import WILDCARD, CompiledPattern, compile_alias

logger = logging.getLogger(__name__)

# Targets containing any of these only exist for the type checker
TYPINGS_MARKERS = ("@types", ".d.ts")


def is_typing(target: str) -> bool:
    """Whether a target points at type declarations rather than runtime code."""
    return any(marker in target for marker in TYPINGS_MARKERS)


@dataclass(frozen=True)
class Mapping:
    """One alias -> target rule.

    Attributes:
        alias: The alias as configured (e.g. "@app/*").
        pattern: The compiled matcher for the alias.
        target: The target as configured (e.g. "app/*").
        only_module: True when the alias has no wildcard.
    """

    alias: str
    pattern: CompiledPattern
    target: str
    only_module: bool

    @property
    def is_typing(self) -> bool:
        return is_typing(self.target)


@dataclass(frozen=True)
class AliasMatch:
    """A mapping that matched a specifier, with the captured wildcard text."""

    mapping: Mapping
    specifier: str
    captured: str


@dataclass(frozen=True)
class MappingTable:
    """Ordered mappings plus the directory relative targets are anchored to.

    Attributes:
        mappings: Every configured mapping, in configuration order.
        base_directory: Absolute directory for relative targets.
        base_url: The configured base URL, or None when unset.
        active_mappings: ``mappings`` minus typings targets.
    """

    mappings: Tuple[Mapping, ...]
    base_directory: str
    base_url: Optional[str] = None
    active_mappings: Tuple[Mapping, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Drop typings mappings from the matcher set."""
        active = tuple(m for m in self.mappings if not m.is_typing)
        object.__setattr__(self, "active_mappings", active)

    def match(self, specifier: Optional[str]) -> Optional[AliasMatch]:
        """Find the first active mapping whose pattern matches ``specifier``.

        Args:
            specifier: The import specifier under resolution.

        Returns:
            AliasMatch for the earliest matching mapping, or None.
        """
        if not specifier:
            return None

        for mapping in self.active_mappings:
            match = match_mapping(mapping, specifier)
            if match is not None:
                return match
        return None


def match_mapping(mapping: Mapping, specifier: Optional[str]) -> Optional[AliasMatch]:
    """Test a single mapping against a specifier."""
    if not specifier:
        return None
    captured = mapping.pattern.match(specifier)
    if captured is None:
        return None
    return AliasMatch(mapping=mapping, specifier=specifier, captured=captured)


def build_mapping_table(config: PathsConfig) -> MappingTable:
    """Compile a configuration into a MappingTable.

    Args:
        config: Loaded alias configuration.

    Returns:
        The immutable mapping table.

    Raises:
        AliasPatternError: If an alias has more than one wildcard.
    """
    mappings: List[Mapping] = []
    for alias, targets in config.paths.items():
        pattern = compile_alias(alias)
        only_module = WILDCARD not in alias
        if isinstance(targets, str):
            targets = [targets]
        for target in targets:
            mappings.append(
                Mapping(alias=alias, pattern=pattern, target=target, only_module=only_module)
            )

    base_directory = os.path.abspath(os.path.join(config.config_dir, config.base_url or "."))
    table = MappingTable(
        mappings=tuple(mappings),
        base_directory=base_directory,
        base_url=config.base_url,
    )
    logger.debug(
        "Built mapping table: %d mapping(s), %d active, base directory %s",
        len(table.mappings),
        len(table.active_mappings),
        base_directory,
    )
    return table
