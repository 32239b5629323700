"""Resolution of captured call sites into display frames."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from errchain.capture import CallSite
from errchain.config import TraceConfig


@dataclass(frozen=True)
class Frame:
    """A resolved source location.

    Two frames are equal when file, function and line match; ``module`` is
    carried for display only.
    """

    file: str
    function: str
    line: int
    module: str = field(default="", compare=False)

    @property
    def qualname(self) -> str:
        if self.module and self.function.startswith(self.module + "."):
            return self.function[len(self.module) + 1 :]
        return self.function


def resolve_call_site(site: CallSite) -> Frame:
    code = site.code
    qualname = getattr(code, "co_qualname", code.co_name)
    function = f"{site.module}.{qualname}" if site.module else qualname
    return Frame(
        file=code.co_filename,
        function=function,
        line=site.lineno,
        module=site.module,
    )


def _is_synthetic(filename: str) -> bool:
    return filename.startswith("<frozen")


def resolve_snapshot(
    snapshot: Iterable[CallSite],
    config: TraceConfig,
) -> Iterator[Frame]:
    """Yield the frames of a snapshot that belong to the program itself.

    Order is preserved (innermost first). Runtime plumbing is skipped frame
    by frame; the first harness frame ends the walk.
    """
    for site in snapshot:
        frame = resolve_call_site(site)
        if config.show_all:
            yield frame
            continue
        if config.is_harness(frame.module):
            return
        if config.is_skipped(frame.module) or _is_synthetic(frame.file):
            continue
        yield frame


def pretty_file(file: str, root: str | None) -> str:
    if root is None:
        return file
    try:
        return Path(file).relative_to(root).as_posix()
    except ValueError:
        return file


def pretty_function(frame: Frame) -> str:
    if not frame.module:
        return frame.function
    base = frame.module.rpartition(".")[2]
    return f"{base}.{frame.qualname}"


def format_frame(frame: Frame, root: str | None = None) -> str:
    """Format a frame as ``at <function> (in <file>:<line>)``."""
    return f"at {pretty_function(frame)} (in {pretty_file(frame.file, root)}:{frame.line})"


__all__ = [
    "Frame",
    "format_frame",
    "pretty_file",
    "pretty_function",
    "resolve_call_site",
    "resolve_snapshot",
]
