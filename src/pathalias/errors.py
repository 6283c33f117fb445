"""Exceptions raised by pathalias."""


class PathAliasError(Exception):
    """Base class for all pathalias errors."""


class AliasPatternError(PathAliasError, ValueError):
    """An alias pattern cannot be compiled (e.g. more than one wildcard)."""


class ConfigError(PathAliasError):
    """Configuration is missing, unreadable or malformed."""
