"""Bounded call-stack capture.

A snapshot holds code objects and line numbers only. Frame objects are never
retained, so an annotated error does not keep the locals of its call sites
alive.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from types import CodeType

from loguru import logger

MAX_DEPTH = 64


@dataclass(frozen=True)
class CallSite:
    """An unresolved program location captured from a live frame."""

    code: CodeType
    lineno: int
    module: str


def capture(skip: int = 0) -> tuple[CallSite, ...]:
    """Capture the current call stack, innermost call site first.

    Args:
        skip: Frames to omit above the caller of ``capture``. With ``skip=0``
            the first entry is the line that called ``capture``.

    Returns:
        At most ``MAX_DEPTH`` call sites. Empty when the stack is shallower
        than ``skip``.
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        logger.debug("errchain: stack shallower than skip={}, empty snapshot", skip)
        return ()

    sites: list[CallSite] = []
    while frame is not None and len(sites) < MAX_DEPTH:
        sites.append(
            CallSite(
                code=frame.f_code,
                lineno=frame.f_lineno,
                module=frame.f_globals.get("__name__") or "",
            )
        )
        frame = frame.f_back
    return tuple(sites)


__all__ = ["MAX_DEPTH", "CallSite", "capture"]
