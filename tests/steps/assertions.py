# ruff: noqa: S101
"""pytest-bdd assertions over call outcomes and verification results."""

from __future__ import annotations

import typing as t

from pytest_bdd import parsers, then

from obj_mox import UnmatchedCallError, invocations

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from obj_mox import VerificationError

    from .call_execution import CallOutcome


@then(parsers.cfparse('the last call should return "{value}"'))
def last_call_returns(calls: list[CallOutcome], value: str) -> None:
    """Assert the most recent call returned *value*."""
    assert calls, "no call was made"
    outcome = calls[-1]
    assert outcome.error is None, f"call failed with {outcome.error!r}"
    assert outcome.value == value


@then("the last call should fail with an unmatched call error")
def last_call_unmatched(calls: list[CallOutcome]) -> None:
    """Assert the most recent call found no eligible expectation."""
    assert calls, "no call was made"
    assert isinstance(calls[-1].error, UnmatchedCallError)


@then(parsers.cfparse("{count:d} calls should have been recorded"))
def calls_recorded(proxy: t.Any, count: int) -> None:
    """Assert the proxy journal holds *count* calls."""
    assert len(invocations(proxy)) == count


@then("verification should pass")
def verification_passed(verification_error: VerificationError | None) -> None:
    """Assert the latest verification raised nothing."""
    assert verification_error is None, str(verification_error)


@then(parsers.cfparse('the verification error message should contain "{text}"'))
def verification_error_contains(
    verification_error: VerificationError | None, text: str
) -> None:
    """Assert the captured verification error contains *text*."""
    assert verification_error is not None, "verification unexpectedly passed"
    assert text in str(verification_error)


@then(parsers.cfparse('the verification error message should not contain "{text}"'))
def verification_error_excludes(
    verification_error: VerificationError | None, text: str
) -> None:
    """Assert the captured verification error omits *text*."""
    assert verification_error is not None, "verification unexpectedly passed"
    assert text not in str(verification_error)
