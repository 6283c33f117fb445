#!/usr/bin/env python3
"""Host pipeline integration for path aliases.

``AliasPathPlugin`` installs one handler per active mapping on the
``described-resolve`` stage. A handler that matches rewrites the request and
hands it to ``ResolutionDelegator``, which re-enters the pipeline at the
``resolve`` stage and finishes the original callback exactly once:

- nested result or error: forwarded unchanged
- nested "not handled": finished with ``(None, None)`` so the host does not
  fall back to the original, unaliased specifier

When a base URL is configured, ``ModulesInRootRule`` is also installed so
bare specifiers are looked up under the base directory.

Example:
    >>> plugin = AliasPathPlugin.from_context("/my/project")
    >>> host_resolver.apply(plugin)
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from .config import PathsConfig, load_config
from .host import (
    Callback,
    Handler,
    ResolveRequest,
    Resolver,
    create_inner_callback,
    get_inner_request,
)
from .mapping import Mapping, MappingTable, build_mapping_table
from .resolver import Action, AliasResolver, Passthrough, Rewrite, Suppress

logger = logging.getLogger(__name__)

SOURCE_STAGE = "described-resolve"
TARGET_STAGE = "resolve"
MODULE_STAGE = "module"

InnerRequestFn = Callable[[Resolver, ResolveRequest], Optional[str]]
TraceFn = Callable[[ResolveRequest, Action], None]


class ResolutionDelegator:
    """Re-enters the host pipeline with a rewritten request.

    Attributes:
        resolver: The host resolver.
        target: Stage the rewritten request is sent to.
    """

    def __init__(self, resolver: Resolver, target: str = TARGET_STAGE, trace: TraceFn = None):
        self.resolver = resolver
        self.target = target
        self._trace = trace

    def delegate(self, request: ResolveRequest, rewrite: Rewrite, callback: Callback) -> None:
        """Resolve ``rewrite.specifier`` and finish ``callback`` exactly once.

        Args:
            request: The original request; it is not modified.
            rewrite: The rewrite decided for it.
            callback: The original caller's callback.
        """
        new_request = replace(request, request=rewrite.specifier)

        def done(*args):
            if args:
                return callback(*args)

            # don't allow other aliasing or the raw request
            suppressed = Suppress(specifier=rewrite.specifier, description=rewrite.description)
            logger.debug("No result for '%s', not falling back", rewrite.specifier)
            if self._trace:
                self._trace(request, suppressed)
            return callback(None, None)

        self.resolver.do_resolve(
            self.target,
            new_request,
            rewrite.description,
            create_inner_callback(done, callback),
        )


class ModulesInRootRule:
    """Looks up bare specifiers as paths under a fixed root directory."""

    def __init__(self, source: str, path: str, target: str):
        self.source = source
        self.path = path
        self.target = target

    def apply(self, resolver: Resolver) -> None:
        def handler(request: ResolveRequest, callback: Callback):
            if not request.request:
                return callback()
            new_request = replace(request, path=self.path, request="./" + request.request)
            message = f"looking for modules in {self.path}"
            return resolver.do_resolve(
                self.target,
                new_request,
                message,
                create_inner_callback(callback, callback, message, message_optional=True),
            )

        resolver.plugin(self.source, handler)


class AliasPathPlugin:
    """Resolver plugin that applies configured path aliases.

    Attributes:
        table: The mapping table built at construction time.
        source: Stage the alias handlers are attached to.
        target: Stage rewritten requests are sent to.
    """

    def __init__(
        self,
        table: MappingTable,
        inner_request: InnerRequestFn = get_inner_request,
        delegator_factory: Callable[..., ResolutionDelegator] = ResolutionDelegator,
        source: str = SOURCE_STAGE,
        target: str = TARGET_STAGE,
        trace: TraceFn = None,
    ):
        """Initialize the plugin.

        Args:
            table: Compiled alias mappings.
            inner_request: Extracts the specifier under resolution from a request.
            delegator_factory: Builds the delegator for a host resolver, called
                as ``delegator_factory(resolver, target, trace)``.
            source: Stage to attach alias handlers to.
            target: Stage to send rewritten requests to.
            trace: Called with every (request, action) decided, for diagnostics.
        """
        self.table = table
        self.core = AliasResolver(table)
        self.inner_request = inner_request
        self.delegator_factory = delegator_factory
        self.source = source
        self.target = target
        self._trace = trace

    @classmethod
    def from_config(cls, config: PathsConfig, **kwargs) -> "AliasPathPlugin":
        return cls(build_mapping_table(config), **kwargs)

    @classmethod
    def from_context(
        cls, context: str = None, config_file: str = None, **kwargs
    ) -> "AliasPathPlugin":
        """Load configuration from ``context`` (default: cwd) and build the plugin."""
        return cls.from_config(load_config(context, config_file), **kwargs)

    def apply(self, resolver: Resolver) -> None:
        """Register the module-root rule and one handler per active mapping."""
        if self.table.base_url:
            resolver.apply(ModulesInRootRule(MODULE_STAGE, self.table.base_directory, self.target))

        delegator = self.delegator_factory(resolver, self.target, self._trace)
        for mapping in self.table.active_mappings:
            resolver.plugin(self.source, self.create_handler(resolver, delegator, mapping))

        skipped = len(self.table.mappings) - len(self.table.active_mappings)
        logger.debug(
            "Installed %d alias handler(s), skipped %d typings mapping(s)",
            len(self.table.active_mappings),
            skipped,
        )

    def create_handler(
        self, resolver: Resolver, delegator: ResolutionDelegator, mapping: Mapping
    ) -> Handler:
        def handler(request: ResolveRequest, callback: Callback):
            inner = self.inner_request(resolver, request)
            action = self.core.resolve_mapping(mapping, inner)
            if self._trace:
                self._trace(request, action)
            if isinstance(action, Passthrough):
                return callback()
            return delegator.delegate(request, action, callback)

        return handler
