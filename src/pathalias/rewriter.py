"""Rewriting a matched specifier into the request to resolve next."""

import os

from .mapping import AliasMatch
from .patterns import WILDCARD


def rewrite_specifier(match: AliasMatch, base_directory: str) -> str:
    """Compute the rewritten specifier for a match.

    Exact mappings rewrite to their target verbatim. Wildcard mappings
    substitute the captured text for the first ``*`` of the target. A result
    starting with ``.`` is anchored at ``base_directory``; bare and absolute
    specifiers are returned unchanged.

    Args:
        match: The matched mapping and captured text.
        base_directory: Absolute directory for relative targets.

    Returns:
        The specifier to hand back to the resolver.

    Example:
        >>> # "@app/*" -> "./app/*"
        >>> rewrite_specifier(table.match("@app/widgets/button"), "/proj/src")
        '/proj/src/app/widgets/button'
        >>> # "@lib/*" -> "lib/*"
        >>> rewrite_specifier(table.match("@lib/dates"), "/proj/src")
        'lib/dates'
    """
    mapping = match.mapping
    specifier = mapping.target
    if not mapping.only_module:
        specifier = specifier.replace(WILDCARD, match.captured, 1)

    if specifier.startswith("."):
        specifier = os.path.abspath(os.path.join(base_directory, specifier))

    return specifier


def describe_rewrite(match: AliasMatch, new_specifier: str) -> str:
    """Human-readable trace message for a rewrite."""
    return (
        f"aliased with mapping '{match.specifier}': "
        f"'{match.mapping.alias}' to '{new_specifier}'"
    )
