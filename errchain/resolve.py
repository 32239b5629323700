"""Merging the overlapping snapshots of an error chain into one trace.

Each wrap captures the whole stack again, so a later node's snapshot repeats
the caller-side frames of every node beneath it. Walking the chain newest
first and cutting each node at its first already-seen frame leaves every
location exactly once, in call order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from errchain.chain import iter_chain
from errchain.config import TraceConfig
from errchain.frames import Frame, resolve_snapshot
from errchain.node import ErrorTrace


@dataclass(frozen=True)
class ResolvedTrace:
    """Deduplicated frames, origin first, with causes keyed by frame."""

    frames: tuple[Frame, ...] = ()
    causes: dict[Frame, str] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Any]:
        # Allows ``frames, causes = resolve(err)``.
        yield self.frames
        yield self.causes

    def __len__(self) -> int:
        return len(self.frames)

    def cause_at(self, index: int) -> str:
        return self.causes.get(self.frames[index], "")


def _attach(causes: dict[Frame, str], frame: Frame, cause: str) -> None:
    # Nodes are visited newest first, so an existing cause is the newer one.
    existing = causes.get(frame)
    causes[frame] = f"{cause}; {existing}" if existing else cause


def resolve(
    err: BaseException | None,
    config: TraceConfig | None = None,
) -> ResolvedTrace:
    """Resolve the chain of ``err`` into a single non-repeating trace.

    Args:
        err: Outermost error. Plain errors and ``None`` give an empty trace.
        config: Filtering configuration, ``TraceConfig.from_env()`` if omitted.

    Returns:
        ResolvedTrace whose first frame is the deepest origin call site and
        whose last frame is the outermost caller still inside the program.
    """
    if err is None:
        return ResolvedTrace()
    if config is None:
        config = TraceConfig.from_env()

    ordered: list[Frame] = []
    causes: dict[Frame, str] = {}
    seen: set[Frame] = set()
    homeless: list[str] = []

    for node in iter_chain(err):
        if not isinstance(node, ErrorTrace):
            continue

        contributed: list[Frame] = []
        for frame in resolve_snapshot(node.snapshot, config):
            if frame in seen:
                break
            seen.add(frame)
            contributed.append(frame)

        if node.cause:
            if contributed:
                _attach(causes, contributed[0], node.cause)
            elif ordered:
                logger.debug("errchain: cause {!r} added no frames, kept on its caller", node.cause)
                _attach(causes, ordered[-1], node.cause)
            else:
                homeless.append(node.cause)

        contributed.reverse()
        ordered.extend(contributed)

    ordered.reverse()

    if homeless and ordered:
        for cause in homeless:
            _attach(causes, ordered[-1], cause)

    return ResolvedTrace(frames=tuple(ordered), causes=causes)


__all__ = ["ResolvedTrace", "resolve"]
