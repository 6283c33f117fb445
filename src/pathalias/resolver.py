#!/usr/bin/env python3
"""Alias resolution core.

``AliasResolver`` decides what to do with a specifier, without touching the
host pipeline:

- ``Passthrough``: no alias applies, let the host continue as usual
- ``Rewrite``: resolve ``specifier`` instead of the original request
- ``Suppress``: an alias claimed the request but its target did not resolve;
  stop without falling back to the original specifier

Example:
    >>> # paths: {"@app/*": ["app/*"]}
    >>> resolver = AliasResolver(build_mapping_table(config))
    >>> resolver.resolve("@app/widgets/button")
    Rewrite(specifier='app/widgets/button', ...)
    >>> resolver.resolve("react")
    Passthrough()
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .mapping import AliasMatch, Mapping, MappingTable, match_mapping
from .rewriter import describe_rewrite, rewrite_specifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Passthrough:
    """No alias applies."""


@dataclass(frozen=True)
class Rewrite:
    """Resolve ``specifier`` in place of ``inner_request``."""

    specifier: str
    description: str
    mapping: Mapping
    inner_request: str


@dataclass(frozen=True)
class Suppress:
    """A rewritten request produced nothing; do not fall back."""

    specifier: str
    description: str


Action = Union[Passthrough, Rewrite, Suppress]

PASSTHROUGH = Passthrough()


class AliasResolver:
    """Maps specifiers to actions using a MappingTable.

    Attributes:
        table: The mapping table (read only).
    """

    def __init__(self, table: MappingTable):
        self.table = table

    def resolve(self, specifier: Optional[str]) -> Action:
        """Resolve a specifier against the whole table (first match wins)."""
        return self._to_action(self.table.match(specifier))

    def resolve_mapping(self, mapping: Mapping, specifier: Optional[str]) -> Action:
        """Resolve a specifier against a single mapping."""
        return self._to_action(match_mapping(mapping, specifier))

    def _to_action(self, match: Optional[AliasMatch]) -> Action:
        if match is None:
            return PASSTHROUGH

        new_specifier = rewrite_specifier(match, self.table.base_directory)
        description = describe_rewrite(match, new_specifier)
        logger.debug(description)
        return Rewrite(
            specifier=new_specifier,
            description=description,
            mapping=match.mapping,
            inner_request=match.specifier,
        )
