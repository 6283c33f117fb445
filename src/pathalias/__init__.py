"""pathalias - tsconfig-style path alias resolution for resolver pipelines.

This package rewrites import specifiers that use configured path aliases
(``"@app/*": ["src/app/*"]``) into the specifier a module resolver should
look up next, and plugs into a staged, callback-driven resolver host.

Components:
    - compile_alias: Compiles an alias into an exact or prefix matcher
    - MappingTable: Ordered alias mappings plus the base directory
    - AliasResolver: Decides Passthrough / Rewrite for a specifier
    - AliasPathPlugin: Installs alias handlers on a host resolver
    - load_config: Reads tsconfig.json, jsconfig.json or pyproject.toml

Quick Start:
    1. Inspect what an import would be rewritten to:
        >>> from pathalias import AliasResolver, build_mapping_table, load_config
        >>> table = build_mapping_table(load_config('/my/project'))
        >>> AliasResolver(table).resolve('@app/widgets/button')

    2. Install into a host resolver:
        >>> from pathalias import AliasPathPlugin
        >>> host_resolver.apply(AliasPathPlugin.from_context('/my/project'))
"""

from .config import PathsConfig, find_config_file, load_config, load_pyproject, load_tsconfig
from .errors import AliasPatternError, ConfigError, PathAliasError
from .host import ResolveRequest, Resolver, create_inner_callback, get_inner_request
from .mapping import AliasMatch, Mapping, MappingTable, build_mapping_table, is_typing
from .patterns import CompiledPattern, ExactMatch, PrefixCapture, compile_alias
from .plugin import AliasPathPlugin, ModulesInRootRule, ResolutionDelegator
from .resolver import Action, AliasResolver, Passthrough, Rewrite, Suppress
from .rewriter import describe_rewrite, rewrite_specifier

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Patterns
    "compile_alias",
    "CompiledPattern",
    "ExactMatch",
    "PrefixCapture",
    # Mapping table
    "Mapping",
    "MappingTable",
    "AliasMatch",
    "build_mapping_table",
    "is_typing",
    # Rewriting
    "rewrite_specifier",
    "describe_rewrite",
    # Resolution core
    "AliasResolver",
    "Action",
    "Passthrough",
    "Rewrite",
    "Suppress",
    # Host integration
    "AliasPathPlugin",
    "ModulesInRootRule",
    "ResolutionDelegator",
    "ResolveRequest",
    "Resolver",
    "create_inner_callback",
    "get_inner_request",
    # Configuration
    "PathsConfig",
    "load_config",
    "load_tsconfig",
    "load_pyproject",
    "find_config_file",
    # Errors
    "PathAliasError",
    "AliasPatternError",
    "ConfigError",
]
