"""User-facing notifications with duplicate suppression.

The notifier classifies errors into short human messages and hands them to
a sink (a toast surface, the log, a test recorder). Repeated identical
error messages inside a cooldown window are dropped.
"""

from __future__ import annotations

import re
import time
from collections.abc import Callable
from typing import Literal, Protocol

from docsmith.runtime.logging import get_logger

logger = get_logger(__name__)

Level = Literal["success", "info", "warning", "error"]

DEFAULT_COOLDOWN_SECONDS = 4.0
UNEXPECTED_ERROR = "An unexpected error occurred"
_OPAQUE_OBJECT = "[object object]"
_AUTH_WORDS_RE = re.compile(r"auth|authentication|signin|login", re.IGNORECASE)
_AUTH_TRIGGERS = ("auth", "authentication", "invalid refresh token")


class NotificationSink(Protocol):
    def notify(self, level: Level, message: str, description: str | None = None) -> None: ...


class LoggingSink:
    """Sink that writes notifications to the docsmith log."""

    _LEVELS = {"success": 20, "info": 20, "warning": 30, "error": 40}

    def notify(self, level: Level, message: str, description: str | None = None) -> None:
        text = f"{message}: {description}" if description else message
        logger.log(self._LEVELS[level], text)


class ToastRateLimiter:
    """Suppress a message identical to the previous one within `cooldown` seconds."""

    def __init__(self, cooldown: float = DEFAULT_COOLDOWN_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.cooldown = cooldown
        self._clock = clock
        self._last_message = ""
        self._last_time: float | None = None

    def allow(self, message: str) -> bool:
        now = self._clock()
        if (
            message == self._last_message
            and self._last_time is not None
            and now - self._last_time < self.cooldown
        ):
            return False
        self._last_message = message
        self._last_time = now
        return True


def format_auth_message(raw: str) -> str:
    """Prefix sign-in failures so they read as such; keep messages that already say so."""
    message = re.sub(re.escape("[object Object]"), "", raw, flags=re.IGNORECASE).strip()
    if len(message) < 3:
        return "Sign-in issue"
    if _AUTH_WORDS_RE.search(message):
        return message
    return f"Sign-in issue: {message}"


def error_text(error: BaseException | str | None) -> str:
    if error is None:
        return ""
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return str(error)


def classify_error(error: BaseException | str | None) -> str:
    """
    Turn an arbitrary error into the message shown to the user.

    Opaque or empty errors become a generic message; authentication
    failures are phrased as a sign-in issue.
    """
    text = error_text(error).strip()
    lower = text.lower()
    if not text or _OPAQUE_OBJECT in lower:
        return UNEXPECTED_ERROR
    if any(trigger in lower for trigger in _AUTH_TRIGGERS):
        return format_auth_message(text)
    return text


class ErrorNotifier:
    """Push classified, deduplicated messages to a sink."""

    def __init__(self, sink: NotificationSink, rate_limiter: ToastRateLimiter | None = None) -> None:
        self.sink = sink
        self.rate_limiter = rate_limiter or ToastRateLimiter()

    def error(self, error: BaseException | str | None, description: str | None = None) -> bool:
        """Notify an error. Returns False when it was suppressed as a repeat."""
        message = classify_error(error)
        if not self.rate_limiter.allow(message):
            logger.debug("Suppressed repeated notification: %s", message)
            return False
        self.sink.notify("error", message, description)
        return True

    def success(self, message: str, description: str | None = None) -> None:
        self.sink.notify("success", message, description)

    def warning(self, message: str, description: str | None = None) -> None:
        self.sink.notify("warning", message, description)
