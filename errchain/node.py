"""Error nodes and chain construction.

Usage:
    from errchain import annotate, wrap, render

    def load_user(user_id):
        return annotate(LookupError(f"user {user_id} not found"))

    def handle(user_id):
        err = load_user(user_id)
        return wrap(err, "profile page")

    print(render(handle("u-1")))

Every call allocates a new node. Existing nodes are never modified, so an
earlier error value held elsewhere keeps describing the same trace.
"""

from __future__ import annotations

from enum import Enum

from loguru import logger

from errchain.capture import MAX_DEPTH, CallSite, capture
from errchain.chain import find, iter_chain
from errchain.errors import TraceInvariantError


class Exposure(str, Enum):
    SUPPRESSED = "suppressed"  # records a cause only
    ROOT = "root"  # first capture of the chain
    LEAF = "leaf"  # new capture window once the previous one saturated


class ErrorTrace(Exception):
    """An error annotated with the call stack at the annotation point."""

    def __init__(
        self,
        error: BaseException,
        snapshot: tuple[CallSite, ...],
        *,
        cause: str = "",
        exposure: Exposure = Exposure.ROOT,
    ) -> None:
        super().__init__(str(error))
        self._error = error
        self._snapshot = tuple(snapshot)
        self._cause = cause
        self._exposure = exposure

    @property
    def error(self) -> BaseException:
        return self._error

    @property
    def snapshot(self) -> tuple[CallSite, ...]:
        return self._snapshot

    @property
    def cause(self) -> str:
        return self._cause

    @property
    def exposure(self) -> Exposure:
        return self._exposure

    @property
    def stack_trace(self) -> tuple[CallSite, ...]:
        """Raw snapshot, exposed only by root and leaf nodes."""
        if self._exposure is Exposure.SUPPRESSED:
            return ()
        return self._snapshot

    def unwrap(self) -> BaseException:
        return self._error

    def __str__(self) -> str:
        return str(self._error)

    def __repr__(self) -> str:
        return (
            f"ErrorTrace({self._error!r}, exposure={self._exposure.value}, "
            f"cause={self._cause!r}, depth={len(self._snapshot)})"
        )


def last_exposed(err: BaseException) -> ErrorTrace:
    """Return the most recent root or leaf node in the chain of ``err``."""
    for item in iter_chain(err):
        if isinstance(item, ErrorTrace) and item.exposure is not Exposure.SUPPRESSED:
            return item
    raise TraceInvariantError(f"no root or leaf node in the chain of {err!r}")


def _next_exposure(err: BaseException) -> Exposure:
    anchor = last_exposed(err)
    if len(anchor.snapshot) >= MAX_DEPTH:
        logger.debug(
            "errchain: capture window saturated at depth {}, opening a leaf node",
            MAX_DEPTH,
        )
        return Exposure.LEAF
    return Exposure.SUPPRESSED


def annotate(err: BaseException | None) -> BaseException | None:
    """Attach the current call stack to ``err``.

    Errors that already carry a trace anywhere in their chain are returned
    unchanged.
    """
    if err is None:
        return None
    if find(err, ErrorTrace) is not None:
        return err
    # Skips [annotate]
    return ErrorTrace(err, capture(skip=1), exposure=Exposure.ROOT)


def wrap(err: BaseException | None, cause: str = "") -> BaseException | None:
    """Record ``cause`` and the current call stack on top of ``err``.

    Args:
        err: Error to wrap. ``None`` is returned as is.
        cause: Why the error is being passed on from here. An empty cause
            only adds a capture.

    Returns:
        A new ``ErrorTrace``, or ``err`` itself when it is a node that
        already carries the same cause from the same call site.

    Raises:
        TraceInvariantError: The chain holds nodes but no root or leaf.
    """
    if err is None:
        return None

    # Skips [wrap]
    snapshot = capture(skip=1)

    node = find(err, ErrorTrace)
    if node is None:
        root = ErrorTrace(err, snapshot, exposure=Exposure.ROOT)
        if not cause:
            return root
        return ErrorTrace(root, snapshot, cause=cause, exposure=_next_exposure(root))

    # Happens when a loop wraps the same error at the same line.
    if err is node and node.cause == cause and node.snapshot[:1] == snapshot[:1]:
        return node

    return ErrorTrace(err, snapshot, cause=cause, exposure=_next_exposure(err))


__all__ = [
    "ErrorTrace",
    "Exposure",
    "annotate",
    "last_exposed",
    "wrap",
]
