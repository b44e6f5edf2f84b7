"""Message-ID and References header utilities."""

import re
from typing import Optional


def normalize_message_id(message_id: str) -> str:
    """
    Normalize Message-ID to standard format with angle brackets.

    Args:
        message_id: Raw Message-ID (may or may not have brackets)

    Returns:
        Message-ID in format <id@domain>

    Raises:
        ValueError: If message_id is empty or malformed

    Examples:
        >>> normalize_message_id("abc@domain.com")
        '<abc@domain.com>'
        >>> normalize_message_id("<abc@domain.com>")
        '<abc@domain.com>'
    """
    if not message_id or not message_id.strip():
        raise ValueError("Message-ID is empty")

    clean_id = message_id.strip()

    if clean_id.startswith("<"):
        clean_id = clean_id[1:]
    if clean_id.endswith(">"):
        clean_id = clean_id[:-1]

    if "@" not in clean_id or re.search(r"[\s<>]", clean_id):
        raise ValueError(f"Invalid Message-ID format: {message_id}")

    return f"<{clean_id}>"


def build_references(references: Optional[str], message_id: Optional[str]) -> Optional[str]:
    """
    Build the References header for a reply.

    Existing references are kept in order, the replied-to Message-ID is
    appended, and duplicates or malformed ids are dropped.

    Args:
        references: Raw References header of the original message
        message_id: Message-ID of the original message

    Returns:
        Space-separated References value, or None if nothing is left

    Examples:
        >>> build_references("<a@x.com>", "b@x.com")
        '<a@x.com> <b@x.com>'
    """
    refs: list[str] = []
    candidates = re.findall(r"<[^<>]*>|[^\s<>]+", references or "")
    if message_id:
        candidates.append(message_id)

    for candidate in candidates:
        try:
            ref = normalize_message_id(candidate)
        except ValueError:
            continue
        if ref not in refs:
            refs.append(ref)

    return " ".join(refs) if refs else None
