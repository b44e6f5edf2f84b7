"""Best-effort parsing of address headers into EmailAddress lists.

Mail sources are untrusted, so nothing in this module raises on malformed
input: segments that cannot be understood are dropped.
"""

import re
from typing import Iterable, Optional

from mailthread.models.email_address import EMAIL_PATTERN, EmailAddress
from mailthread.utils.unicode_utils import decode_email_header

# "Name <email>" with anything (including nothing) before the brackets
NAME_ADDR_PATTERN = re.compile(r"^(?P<name>.*?)<\s*(?P<email>[^<>]*?)\s*>$", re.DOTALL)

_QUOTE_PAIRS = (('"', '"'), ("'", "'"))


def is_valid_email(value: Optional[str]) -> bool:
    """Basic local@domain.tld syntactic check."""
    return bool(value) and EMAIL_PATTERN.match(value) is not None


def split_address_list(raw: Optional[str]) -> list[str]:
    """
    Split a header value on top-level commas.

    Commas inside angle brackets or double quotes are not separators.
    A double quote that is never closed is treated as a literal character,
    so only angle brackets group in that case.

    Examples:
        >>> split_address_list('"Doe, Jane" <j@x.com>, b@y.com')
        ['"Doe, Jane" <j@x.com>', 'b@y.com']
        >>> split_address_list('"Doe <a@x.com>, b@y.com')
        ['"Doe <a@x.com>', 'b@y.com']
    """
    if not raw:
        return []

    segments, balanced = _split_top_level(raw, honor_quotes=True)
    if not balanced:
        segments, _ = _split_top_level(raw, honor_quotes=False)
    return [segment for segment in segments if segment]


def _split_top_level(raw: str, honor_quotes: bool) -> tuple[list[str], bool]:
    """Split on commas outside brackets (and quotes); also report whether quotes closed."""
    segments = []
    current = []
    depth = 0
    in_quotes = False

    for ch in raw:
        if ch == '"' and depth == 0 and honor_quotes:
            in_quotes = not in_quotes
        elif ch == "<" and not in_quotes:
            depth += 1
        elif ch == ">" and not in_quotes:
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0 and not in_quotes:
            segments.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    segments.append("".join(current).strip())
    return segments, not in_quotes


def _strip_quotes(name: str) -> str:
    name = name.strip()
    for opening, closing in _QUOTE_PAIRS:
        if len(name) >= 2 and name.startswith(opening) and name.endswith(closing):
            return name[1:-1].strip()
    return name


def parse_address(segment: str) -> Optional[EmailAddress]:
    """
    Parse a single address segment.

    Returns:
        EmailAddress, or None if the segment is neither ``Name <email>``
        nor a bare address, or the email fails the syntactic check
    """
    segment = (segment or "").strip()
    if not segment:
        return None

    match = NAME_ADDR_PATTERN.match(segment)
    if match:
        email_addr = match.group("email").strip()
        name = decode_email_header(_strip_quotes(match.group("name")))
    elif is_valid_email(segment):
        email_addr = segment
        name = ""
    else:
        return None

    if not is_valid_email(email_addr):
        return None

    return EmailAddress(email=email_addr, name=name or None)


def parse_addresses(raw: Optional[str]) -> list[EmailAddress]:
    """
    Parse a raw address header into a list of addresses.

    Args:
        raw: Header value such as ``'Alice <a@x.com>, b@y.com'`` (may be empty)

    Returns:
        Addresses in header order; malformed segments are dropped

    Examples:
        >>> [a.email for a in parse_addresses("Alice <a@x.com>, junk, b@y.com")]
        ['a@x.com', 'b@y.com']
    """
    addresses = []
    for segment in split_address_list(raw):
        address = parse_address(segment)
        if address is not None:
            addresses.append(address)
    return addresses


def format_addresses(addresses: Iterable[EmailAddress]) -> str:
    """Join addresses as ``Name <email>`` / bare email with ``", "``."""
    return ", ".join(address.format() for address in addresses)


def dedupe(addresses: Iterable[EmailAddress]) -> list[EmailAddress]:
    """Drop repeated emails (case-insensitive); the first occurrence wins."""
    seen = set()
    unique = []
    for address in addresses:
        if address.key in seen:
            continue
        seen.add(address.key)
        unique.append(address)
    return unique


def _target_key(target: Optional[str]) -> str:
    """Lower-cased email of an exclusion target given as bare or ``Name <email>``."""
    target = (target or "").strip()
    if not target:
        return ""
    parsed = parse_address(target)
    if parsed is not None:
        return parsed.key
    return target.lower()


def exclude_address(addresses: Iterable[EmailAddress], target: Optional[str]) -> list[EmailAddress]:
    """
    Remove every address matching ``target`` (case-insensitive).

    An empty or None target leaves the list unchanged.
    """
    key = _target_key(target)
    if not key:
        return list(addresses)
    return [address for address in addresses if address.key != key]


def extract_emails(*raw_fields: Optional[str]) -> list[str]:
    """
    Collect lower-cased, de-duplicated emails from several raw headers.

    Examples:
        >>> extract_emails("A <A@x.com>", "a@x.com, b@y.com", None)
        ['a@x.com', 'b@y.com']
    """
    emails = []
    for raw in raw_fields:
        for address in parse_addresses(raw):
            if address.key not in emails:
                emails.append(address.key)
    return emails
