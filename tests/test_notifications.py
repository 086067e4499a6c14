"""Tests for error classification and repeated-toast suppression."""

from __future__ import annotations

from docsmith.runtime.notifications import (
    UNEXPECTED_ERROR,
    ErrorNotifier,
    ToastRateLimiter,
    classify_error,
    format_auth_message,
)


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class _RecordingSink:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, str | None]] = []

    def notify(self, level, message, description=None) -> None:
        self.events.append((level, message, description))


def test_opaque_and_empty_errors_become_generic() -> None:
    assert classify_error("[object Object]") == UNEXPECTED_ERROR
    assert classify_error("") == UNEXPECTED_ERROR
    assert classify_error(None) == UNEXPECTED_ERROR


def test_auth_errors_read_as_sign_in_issues() -> None:
    assert classify_error("Invalid Refresh Token: Refresh Token Not Found") == (
        "Sign-in issue: Invalid Refresh Token: Refresh Token Not Found"
    )
    assert classify_error(RuntimeError("Auth session missing")) == "Auth session missing"
    assert format_auth_message("[object Object]") == "Sign-in issue"


def test_other_errors_pass_through() -> None:
    assert classify_error(ValueError("Invoice not found")) == "Invoice not found"
    assert classify_error(KeyError()) == "KeyError"


def test_rate_limiter_suppresses_repeats_within_cooldown() -> None:
    clock = _Clock()
    limiter = ToastRateLimiter(cooldown=4.0, clock=clock)

    assert limiter.allow("Network error")
    clock.now += 3.9
    assert not limiter.allow("Network error")
    assert limiter.allow("Different error")
    assert limiter.allow("Network error")
    clock.now += 4.0
    assert limiter.allow("Network error")


def test_notifier_sends_classified_errors_once() -> None:
    clock = _Clock()
    sink = _RecordingSink()
    notifier = ErrorNotifier(sink, ToastRateLimiter(clock=clock))

    assert notifier.error("[object Object]", "while exporting")
    assert not notifier.error("[object Object]")
    notifier.success("Saved")

    assert sink.events == [
        ("error", UNEXPECTED_ERROR, "while exporting"),
        ("success", "Saved", None),
    ]


def test_separate_notifiers_do_not_share_state() -> None:
    clock = _Clock()
    first = ErrorNotifier(_RecordingSink(), ToastRateLimiter(clock=clock))
    second = ErrorNotifier(_RecordingSink(), ToastRateLimiter(clock=clock))

    assert first.error("boom")
    assert second.error("boom")
