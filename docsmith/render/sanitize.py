"""Text cleanup applied to every user-supplied string before it reaches markup.

Escaping is left to the template engine; `sanitize_text` is registered as
its ``sanitize`` filter.
"""

from __future__ import annotations

import re
from typing import Any

_TYPOGRAPHY = (
    (re.compile("[\u2018\u2019\uff07]"), "'"),
    (re.compile("[\u201c\u201d]"), '"'),
    (re.compile("[\u2013\u2014]"), "-"),
    (re.compile("\u2026"), "..."),
    (re.compile("\xa0"), " "),
    # Mis-decoded apostrophes show up as runs of replacement characters.
    (re.compile("\ufffd+"), "'"),
)


def sanitize_text(value: Any) -> str:
    """Replace typographic punctuation with plain ASCII equivalents."""
    if value is None:
        return ""
    text = str(value)
    for pattern, replacement in _TYPOGRAPHY:
        text = pattern.sub(replacement, text)
    return text
