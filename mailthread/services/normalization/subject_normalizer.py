"""Subject normalization for thread comparison."""

import re
from typing import Optional

REPLY_PREFIX_PATTERN = re.compile(r"^(re|fwd?|fw):\s*", re.IGNORECASE)
FORWARD_PREFIX_PATTERN = re.compile(r"^fwd:", re.IGNORECASE)
TAG_PATTERN = re.compile(r"^\[[^\]]*\]\s*")
_WHITESPACE = re.compile(r"\s+")


def _strip_reply_prefixes(subject: str) -> str:
    while True:
        match = REPLY_PREFIX_PATTERN.match(subject)
        if not match:
            return subject
        subject = subject[match.end():]


def normalize_subject(subject: Optional[str]) -> str:
    """
    Normalize a subject for comparison.

    Lower-cases, trims, strips leading Re:/Fwd:/Fw: tokens and a leading
    bracketed tag such as ``[EXTERNAL]``, and collapses whitespace. The
    stripping repeats until nothing changes so the result is idempotent
    (``"[EXT] Re: Hi"`` and ``"Re: [EXT] Hi"`` both become ``"hi"``).

    Examples:
        >>> normalize_subject("Re: Fwd:  Hi   there")
        'hi there'
        >>> normalize_subject("[EXTERNAL] Quarterly Report")
        'quarterly report'
    """
    if not subject:
        return ""

    s = _WHITESPACE.sub(" ", subject.lower()).strip()
    while True:
        stripped = _strip_reply_prefixes(s)
        stripped = TAG_PATTERN.sub("", stripped, count=1)
        if stripped == s:
            break
        s = stripped
    return s.strip()


def is_reply(subject: Optional[str]) -> bool:
    """True if the raw subject starts with a Re:/Fwd:/Fw: token."""
    if not subject:
        return False
    return REPLY_PREFIX_PATTERN.match(subject.strip()) is not None


def is_forward(subject: Optional[str]) -> bool:
    """True if the raw subject already carries a Fwd: prefix."""
    if not subject:
        return False
    return FORWARD_PREFIX_PATTERN.match(subject.strip()) is not None
