"""Walking chains of wrapped errors."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

E = TypeVar("E", bound=BaseException)


def unwrap(err: BaseException) -> BaseException | None:
    """Return the error directly wrapped by ``err``.

    Wrappers that define ``unwrap()`` are asked first; otherwise the explicit
    cause from ``raise ... from ...`` is followed. Implicit ``__context__`` is
    never followed.
    """
    method = getattr(err, "unwrap", None)
    if callable(method):
        inner = method()
        return inner if isinstance(inner, BaseException) else None
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    visited: set[int] = set()
    current = err
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        yield current
        current = unwrap(current)


def find(err: BaseException | None, cls: type[E]) -> E | None:
    """Return the first error in the chain of ``err`` that is a ``cls``."""
    for item in iter_chain(err):
        if isinstance(item, cls):
            return item
    return None


__all__ = ["find", "iter_chain", "unwrap"]
