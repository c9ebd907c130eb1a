"""Assertion helper utilities for tests."""

from __future__ import annotations

from contextlib import contextmanager


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``."""

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_problem(resp, status: int, code: str, detail: str | None = None) -> dict:
    """Validate an RFC 7807 problem response and return its body.

    Parameters
    ----------
    resp:
        Flask test response.
    status:
        Expected HTTP status.
    code:
        Expected machine-readable ``code``.
    detail:
        When given, expected human-readable ``detail``.
    """

    assert resp.status_code == status, resp.get_data(as_text=True)
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert_json_keys(body, {"type", "title", "status", "detail", "code", "request_id"})
    assert body["status"] == status
    assert body["code"] == code
    if detail is not None:
        assert body["detail"] == detail
    return body


@contextmanager
def not_raises(exception: type[BaseException]):
    """Fail the test, instead of erroring, when ``exception`` escapes the block."""

    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc
