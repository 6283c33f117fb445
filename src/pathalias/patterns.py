#!/usr/bin/env python3
"""Alias pattern compilation.

Turns a configured alias such as ``"@app/*"`` or ``"@app"`` into one of two
matchers:

- ``ExactMatch``: the specifier must equal the alias.
- ``PrefixCapture``: the specifier must start with the literal text before
  the wildcard; everything after it is captured.

Only a single ``*`` per alias is supported.

Example:
    >>> pattern = compile_alias("@app/*")
    >>> pattern.match("@app/widgets/button")
    'widgets/button'
    >>> compile_alias("@app").match("@app/widgets") is None
    True
"""

from dataclasses import dataclass
from typing import Optional, Union

from .errors import AliasPatternError

WILDCARD = "*"


@dataclass(frozen=True)
class ExactMatch:
    """Matches a specifier equal to ``alias``. Captures nothing."""

    alias: str

    @property
    def group_count(self) -> int:
        return 0

    def match(self, specifier: str) -> Optional[str]:
        """Return ``""`` when the specifier equals the alias, None otherwise."""
        return "" if specifier == self.alias else None


@dataclass(frozen=True)
class PrefixCapture:
    """Matches a specifier starting with ``prefix``, capturing the remainder.

    The pattern is anchored at the start only. When the alias has literal
    text after the wildcard (``suffix``), that text must appear after the
    prefix; the capture stops at its last occurrence and whatever follows
    is ignored.

    Attributes:
        prefix: Literal text before the wildcard.
        suffix: Literal text after the wildcard (usually empty).
    """

    prefix: str
    suffix: str = ""

    @property
    def group_count(self) -> int:
        return 1

    def match(self, specifier: str) -> Optional[str]:
        """Return the captured wildcard portion, or None if not matched.

        Args:
            specifier: The import specifier to test.

        Returns:
            The substring matched by the wildcard.
        """
        if not specifier.startswith(self.prefix):
            return None

        rest = specifier[len(self.prefix) :]
        if not self.suffix:
            return rest

        idx = rest.rfind(self.suffix)
        if idx == -1:
            return None
        return rest[:idx]


CompiledPattern = Union[ExactMatch, PrefixCapture]


def compile_alias(alias: str) -> CompiledPattern:
    """Compile an alias string into a matcher.

    Args:
        alias: Alias pattern (e.g. "@app/*", "~/*", "@config").

    Returns:
        ExactMatch when the alias has no wildcard, PrefixCapture otherwise.

    Raises:
        AliasPatternError: If the alias contains more than one wildcard.
    """
    count = alias.count(WILDCARD)
    if count == 0:
        return ExactMatch(alias)
    if count > 1:
        raise AliasPatternError(
            f"Alias '{alias}' contains {count} wildcards; only one '*' is supported"
        )

    prefix, suffix = alias.split(WILDCARD, 1)
    return PrefixCapture(prefix=prefix, suffix=suffix)
