"""Unicode and email header decoding utilities."""

from email.errors import HeaderParseError
from email.header import decode_header
from typing import Optional


def decode_email_header(header_value: Optional[str]) -> str:
    """
    Decode RFC 2047 encoded-word header to Unicode string.

    Args:
        header_value: Raw header value (may be encoded)

    Returns:
        Decoded Unicode string, or the raw value if it cannot be decoded

    Examples:
        >>> decode_email_header("=?UTF-8?B?5Lit5paH?=")
        '中文'
        >>> decode_email_header("Alice Smith")
        'Alice Smith'
    """
    if not header_value:
        return ""

    if "=?" not in header_value:
        return header_value

    try:
        parts = decode_header(header_value)
    except HeaderParseError:
        return header_value

    decoded_parts = []
    for content, encoding in parts:
        if isinstance(content, bytes):
            if encoding:
                try:
                    decoded_parts.append(content.decode(encoding))
                except (UnicodeDecodeError, LookupError):
                    decoded_parts.append(content.decode("utf-8", errors="replace"))
            else:
                try:
                    decoded_parts.append(content.decode("ascii"))
                except UnicodeDecodeError:
                    decoded_parts.append(content.decode("utf-8", errors="replace"))
        else:
            decoded_parts.append(str(content))

    return "".join(decoded_parts)


def truncate_text(text: Optional[str], max_length: int = 100) -> str:
    """
    Truncate text to max_length with '...' if needed.

    Args:
        text: Text to shorten (subject, snippet, ...)
        max_length: Maximum length (default 100)

    Returns:
        Truncated text with ellipsis if needed

    Examples:
        >>> truncate_text("Short subject")
        'Short subject'
        >>> truncate_text("This is a very long subject that exceeds the maximum length", 30)
        'This is a very long subject...'
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[: max_length - 3] + "..."
