from __future__ import annotations

import threading
from collections.abc import Callable

import pytest
from conftest import line_of

from errchain import (
    ErrorTrace,
    Exposure,
    TraceInvariantError,
    annotate,
    iter_chain,
    wrap,
)
from errchain.node import last_exposed


def _nodes(err: BaseException) -> list[ErrorTrace]:
    return [item for item in iter_chain(err) if isinstance(item, ErrorTrace)]


def _origin() -> BaseException:
    return annotate(KeyError("missing"))


def _passes_on() -> BaseException:
    err = _origin()
    return wrap(err, "passed on")


def _retries_once() -> BaseException:
    return wrap(annotate(TimeoutError("flaky")), "retry")


def _retries_again() -> BaseException:
    err = _retries_once()
    return wrap(err, "retry")


def _in_thread(target: Callable[[], BaseException]) -> BaseException:
    result: list[BaseException] = []
    thread = threading.Thread(target=lambda: result.append(target()))
    thread.start()
    thread.join()
    return result[0]


def test_annotate_wraps_plain_error_in_root() -> None:
    original = ValueError("bad")
    err = annotate(original)

    assert isinstance(err, ErrorTrace)
    assert err.exposure is Exposure.ROOT
    assert err.error is original
    assert err.unwrap() is original
    assert err.cause == ""
    assert str(err) == "bad"
    assert err.snapshot[0].code is test_annotate_wraps_plain_error_in_root.__code__


def test_annotate_is_idempotent() -> None:
    once = annotate(ValueError("bad"))
    twice = annotate(once)

    assert twice is once
    assert len(_nodes(twice)) == 1


def test_annotate_sees_trace_behind_foreign_wrapper() -> None:
    inner = annotate(ValueError("bad"))
    try:
        raise RuntimeError("request failed") from inner
    except RuntimeError as outer:
        assert annotate(outer) is outer


def test_annotate_and_wrap_pass_none_through() -> None:
    assert annotate(None) is None
    assert wrap(None, "cause") is None


def test_wrap_plain_error_synthesizes_root_under_cause() -> None:
    original = ValueError("bad")
    err = wrap(original, "loading config")

    nodes = _nodes(err)
    assert [node.cause for node in nodes] == ["loading config", ""]
    assert nodes[1].exposure is Exposure.ROOT
    assert nodes[1].error is original
    assert nodes[0].snapshot == nodes[1].snapshot


def test_wrap_plain_error_without_cause_is_a_root() -> None:
    err = wrap(ValueError("bad"))

    assert isinstance(err, ErrorTrace)
    assert err.exposure is Exposure.ROOT
    assert len(_nodes(err)) == 1


def test_wrap_captures_its_own_call_site() -> None:
    err = _passes_on()

    assert isinstance(err, ErrorTrace)
    assert err.cause == "passed on"
    assert err.snapshot[0].code is _passes_on.__code__
    assert err.snapshot[0].lineno == line_of(_passes_on, 'wrap(err, "passed on")')


def test_wrap_in_shallow_stack_is_suppressed() -> None:
    err = _in_thread(_passes_on)

    nodes = _nodes(err)
    assert [node.exposure for node in nodes] == [Exposure.SUPPRESSED, Exposure.ROOT]
    assert nodes[0].stack_trace == ()
    assert nodes[1].stack_trace == nodes[1].snapshot


def test_wrap_same_cause_in_loop_does_not_grow_chain() -> None:
    err = annotate(ValueError("flaky"))
    for _ in range(5):
        err = wrap(err, "retrying")

    assert [node.cause for node in _nodes(err)] == ["retrying", ""]


def test_wrap_same_cause_from_another_call_site_adds_a_node() -> None:
    err = _retries_again()

    nodes = _nodes(err)
    assert [node.cause for node in nodes] == ["retry", "retry", ""]
    assert nodes[0].snapshot[0].code is _retries_again.__code__
    assert nodes[0].snapshot[0].lineno == line_of(_retries_again, 'return wrap(err, "retry")')
    assert nodes[1].snapshot[0].code is _retries_once.__code__


def test_wrap_without_cause_recaptures_at_a_new_call_site() -> None:
    base = _origin()
    err = wrap(base)

    assert err is not base
    assert isinstance(err, ErrorTrace)
    assert err.error is base
    assert err.cause == ""
    assert err.snapshot[0].code is test_wrap_without_cause_recaptures_at_a_new_call_site.__code__
    assert [node.cause for node in _nodes(err)] == ["", ""]


def test_wrap_without_cause_at_the_annotation_line_keeps_the_root() -> None:
    err = wrap(annotate(ValueError("bad")))

    assert isinstance(err, ErrorTrace)
    assert err.exposure is Exposure.ROOT
    assert len(_nodes(err)) == 1


def test_wrap_never_mutates_existing_nodes() -> None:
    base = annotate(ValueError("bad"))
    snapshot = base.snapshot

    first = wrap(base, "first")
    second = wrap(base, "second")

    assert first is not second
    assert first.error is base
    assert second.error is base
    assert base.cause == ""
    assert base.snapshot is snapshot
    assert [node.cause for node in _nodes(first)] == ["first", ""]


def test_node_properties_are_read_only() -> None:
    err = annotate(ValueError("bad"))

    with pytest.raises(AttributeError):
        err.cause = "changed"


def test_wrap_without_root_or_leaf_is_an_invariant_violation() -> None:
    orphan = ErrorTrace(ValueError("bad"), (), cause="x", exposure=Exposure.SUPPRESSED)

    with pytest.raises(TraceInvariantError, match="no root or leaf"):
        wrap(orphan, "y")


def test_last_exposed_skips_suppressed_nodes() -> None:
    root = annotate(ValueError("bad"))
    top = ErrorTrace(root, (), cause="x", exposure=Exposure.SUPPRESSED)

    assert last_exposed(top) is root


def test_repr_mentions_exposure_and_cause() -> None:
    err = wrap(ValueError("bad"), "why")

    assert "cause='why'" in repr(err)
    assert "exposure=" in repr(err)
