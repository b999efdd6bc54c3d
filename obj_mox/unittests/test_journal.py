"""Unit tests for :mod:`obj_mox.journal`."""

from __future__ import annotations

from obj_mox.comparators import ANY, IsA, Literal
from obj_mox.journal import Invocation, InvocationJournal


def test_record_appends_in_call_order() -> None:
    """Calls are kept in order per method and across methods."""
    journal = InvocationJournal()
    first = journal.record("bar", ("a",), {})
    other = journal.record("baz", (), {"flag": True})
    second = journal.record("bar", ("b",), {})

    assert len(journal) == 3
    assert journal.for_method("bar") == [first, second]
    assert list(journal) == [first, other, second]
    assert [inv.sequence for inv in journal] == [0, 1, 2]
    assert journal.for_method("missing") == []


def test_record_copies_arguments() -> None:
    """Recorded arguments are detached from the caller's containers."""
    journal = InvocationJournal()
    kwargs = {"key": "value"}
    inv = journal.record("bar", ["a"], kwargs)
    kwargs["key"] = "changed"
    assert inv.args == ("a",)
    assert inv.kwargs == {"key": "value"}


def test_for_method_returns_a_copy() -> None:
    """Mutating a returned list leaves the journal untouched."""
    journal = InvocationJournal()
    journal.record("bar", (), {})
    journal.for_method("bar").clear()
    assert len(journal.for_method("bar")) == 1


def test_count_matching() -> None:
    """Only calls of the method satisfying the constraints are counted."""
    journal = InvocationJournal()
    journal.record("bar", ("a",), {})
    journal.record("bar", ("b",), {})
    journal.record("bar", (1,), {})
    journal.record("baz", ("a",), {})

    assert journal.count_matching("bar", (IsA(str),), {}) == 2
    assert journal.count_matching("bar", (Literal("a"),), {}) == 1
    assert journal.count_matching("bar", (ANY,), {}) == 3
    assert journal.count_matching("bar", (), {}) == 0
    assert journal.count_matching("qux", (ANY,), {}) == 0


def test_invocation_repr_reads_like_a_call() -> None:
    """Invocations render as Python call expressions."""
    inv = Invocation("bar", ("x", 1), {"flag": True})
    assert repr(inv) == "bar('x', 1, flag=True)"
    assert repr(Invocation("bar")) == "bar()"


def test_invocations_are_hashable_by_identity() -> None:
    """Recorded calls can be collected in sets even with mutable arguments."""
    journal = InvocationJournal()
    first = journal.record("bar", ([1],), {"opts": {"a": 1}})
    second = journal.record("bar", ([1],), {"opts": {"a": 1}})
    assert len({first, second}) == 2
    assert first != second
    assert {first: "seen"}[first] == "seen"
