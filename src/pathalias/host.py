#!/usr/bin/env python3
"""Host resolution pipeline contract.

The host is a staged, callback-driven resolver: handlers are registered on
named stages, receive ``(request, callback)`` and either decline with
``callback()`` or finish the request with ``callback(error, result)``.

This module holds the pieces pathalias needs from such a host:

- ``ResolveRequest``: the immutable request object passed between stages
- ``Resolver``: the interface a host adapter implements
- ``get_inner_request``: which specifier a request is currently resolving
- ``InnerCallback``: wraps a callback for a nested resolution, carrying the
  parent's trace log, stack and missing-path set along
"""

import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

Callback = Callable[..., None]
Handler = Callable[["ResolveRequest", Callback], None]


@dataclass(frozen=True)
class ResolveRequest:
    """A request travelling through the host pipeline.

    Attributes:
        path: Directory the request is resolved from.
        request: The specifier still to be resolved, if any.
        relative_path: Path relative to the description file root.
        query: Query string carried with the request.
        description_file_root: Directory of the nearest package description.
        context: Arbitrary host data (issuer, etc.).
    """

    path: str = ""
    request: Optional[str] = None
    relative_path: Optional[str] = None
    query: str = ""
    description_file_root: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)


class Resolver(ABC):
    """Interface of the host resolver plugins are applied to."""

    @abstractmethod
    def apply(self, plugin: Any) -> None:
        """Install a plugin (calls ``plugin.apply(self)``)."""

    @abstractmethod
    def plugin(self, stage: str, handler: Handler) -> None:
        """Register a handler on a named stage."""

    @abstractmethod
    def do_resolve(
        self, stage: str, request: ResolveRequest, message: str, callback: Callback
    ) -> None:
        """Run ``request`` through the handlers of ``stage``."""

    def join(self, path: str, request: str) -> str:
        return join_path(path, request)


def join_path(path: str, request: str) -> str:
    """Join a request onto a path, keeping a leading ``./`` on relative paths."""
    joined = posixpath.normpath(posixpath.join(path, request))
    if path.startswith("./") and not joined.startswith((".", "/")):
        joined = "./" + joined
    return joined


def get_inner_request(resolver: Resolver, request: ResolveRequest) -> Optional[str]:
    """Return the specifier a request is resolving.

    A ``./`` or ``../`` request under a ``relative_path`` is joined onto it;
    without a request the relative path itself is used.
    """
    if request.request:
        inner = request.request
        if inner.startswith(("./", "../")) and request.relative_path:
            inner = resolver.join(request.relative_path, inner)
        return inner
    return request.relative_path


class InnerCallback:
    """Callback for a nested resolution.

    Forwards its arguments unchanged to ``callback``. When the parent
    callback has a ``log``, messages written during the nested resolution
    are buffered and flushed to the parent log (under ``message``) before
    forwarding.

    Attributes:
        log: Buffering log function, or None when the parent has no log.
        stack: The parent's resolution stack.
        missing: The parent's set of missing paths.
    """

    def __init__(
        self,
        callback: Callback,
        parent: Callback,
        message: str = None,
        message_optional: bool = False,
    ):
        self._callback = callback
        self._parent_log = getattr(parent, "log", None)
        self._message = message
        self._message_optional = message_optional
        self._entries: List[str] = []
        self.log = self._entries.append if self._parent_log else None
        self.stack = getattr(parent, "stack", None)
        self.missing = getattr(parent, "missing", None)

    def __call__(self, *args):
        if self._parent_log:
            self._flush()
        return self._callback(*args)

    def _flush(self):
        log = self._parent_log
        if self._message:
            if not self._message_optional or self._entries:
                log(self._message)
                for entry in self._entries:
                    log("  " + entry)
        else:
            for entry in self._entries:
                log(entry)


def create_inner_callback(
    callback: Callback, parent: Callback, message: str = None, message_optional: bool = False
) -> InnerCallback:
    return InnerCallback(callback, parent, message, message_optional)
