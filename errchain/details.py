"""Structured payloads carried alongside an error."""

from __future__ import annotations

from typing import Any, TypeVar

from errchain.chain import find

T = TypeVar("T")


class ErrorDetails(Exception):
    """Wraps an error with extra values for whoever handles it."""

    def __init__(self, error: BaseException, details: tuple[Any, ...]) -> None:
        super().__init__(str(error))
        self._error = error
        self._details = tuple(details)

    @property
    def error(self) -> BaseException:
        return self._error

    @property
    def details(self) -> tuple[Any, ...]:
        return self._details

    def unwrap(self) -> BaseException:
        return self._error

    def __str__(self) -> str:
        return str(self._error)

    def __repr__(self) -> str:
        return f"ErrorDetails({self._error!r}, details={self._details!r})"


def with_details(err: BaseException, *details: Any) -> ErrorDetails:
    return ErrorDetails(err, details)


def details(err: BaseException | None) -> tuple[Any, ...]:
    """Payloads of the first ``ErrorDetails`` in the chain of ``err``."""
    found = find(err, ErrorDetails)
    if found is None:
        return ()
    return found.details


def details_as(err: BaseException | None, cls: type[T]) -> tuple[T, ...] | None:
    """Like ``details``, but only when every payload is a ``cls``.

    Returns None when the chain has no details or any payload has another type.
    """
    found = find(err, ErrorDetails)
    if found is None:
        return None
    if not all(isinstance(item, cls) for item in found.details):
        return None
    return found.details


__all__ = ["ErrorDetails", "details", "details_as", "with_details"]
