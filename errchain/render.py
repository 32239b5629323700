"""Rendering resolved error traces.

Text format:
    Error: <message>
        Origin is: <cause of the first frame, if any>
            at <function> (in <file>:<line>)
        Caused by: <cause>
            at <function> (in <file>:<line>)
        Ends here:
            at <function> (in <file>:<line>)

Labels belong to positions in the trace, not to display order: reversing the
output moves the blocks but "Origin is:" stays on the origin frame.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from errchain.chain import iter_chain
from errchain.config import TraceConfig
from errchain.frames import format_frame, pretty_file, pretty_function
from errchain.node import ErrorTrace
from errchain.resolve import ResolvedTrace, resolve

HEAD = "Origin is:"
BODY = "Caused by:"
TAIL = "Ends here:"
INDENT = "    "


@dataclass(frozen=True)
class TraceFrame:
    """One frame of a rendered trace, numbered from 1 at the origin."""

    id: int
    cause: str
    file: str
    line: int
    function: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _label(trace: ResolvedTrace, index: int) -> str | None:
    cause = trace.cause_at(index)
    last = len(trace) - 1
    if index == 0:
        label = HEAD
    elif index == last:
        label = TAIL
    elif cause:
        label = BODY
    else:
        return None
    return f"{label} {cause}" if cause else label


def render(
    err: BaseException | None,
    reversed: bool = False,
    config: TraceConfig | None = None,
) -> str:
    """Human-readable trace of ``err``.

    Args:
        err: Error to render. ``None`` renders as an empty string.
        reversed: Show the most recent caller first.
        config: Filtering and display configuration.
    """
    if err is None:
        return ""
    if config is None:
        config = TraceConfig.from_env()

    trace = resolve(err, config)
    lines: list[str] = [f"Error: {err}"]

    indexes = range(len(trace))
    if reversed:
        indexes = indexes[::-1]

    for index in indexes:
        label = _label(trace, index)
        if label is not None:
            lines.append(f"{INDENT}{label}")
        lines.append(f"{INDENT}{INDENT}{format_frame(trace.frames[index], config.root)}")

    return "\n".join(lines)


def frames(
    err: BaseException | None,
    config: TraceConfig | None = None,
) -> list[TraceFrame]:
    """Structured form of ``render(err)`` in forward order."""
    if err is None:
        return []
    if config is None:
        config = TraceConfig.from_env()

    trace = resolve(err, config)
    return [
        TraceFrame(
            id=index + 1,
            cause=trace.cause_at(index),
            file=pretty_file(frame.file, config.root),
            line=frame.line,
            function=pretty_function(frame),
        )
        for index, frame in enumerate(trace.frames)
    ]


def to_dict(
    err: BaseException | None,
    config: TraceConfig | None = None,
) -> dict[str, Any] | None:
    """JSON-serializable payload for logging and monitoring tools.

    Schema (version 1.0):
        {
            "version": "1.0",
            "error": {"type": ..., "qualified_type": ..., "message": ...},
            "frames": [{"id", "cause", "file", "line", "function"}, ...]
        }
    """
    if err is None:
        return None

    # Report the annotated error, not the trace node around it.
    described = next((e for e in iter_chain(err) if not isinstance(e, ErrorTrace)), err)
    return {
        "version": "1.0",
        "error": {
            "type": type(described).__name__,
            "qualified_type": f"{type(described).__module__}.{type(described).__name__}",
            "message": str(err),
        },
        "frames": [frame.to_dict() for frame in frames(err, config)],
    }


__all__ = [
    "BODY",
    "HEAD",
    "TAIL",
    "TraceFrame",
    "frames",
    "render",
    "to_dict",
]
