"""HTML escaping and HTML/text conversion helpers."""

import html
import re
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound


def escape_html(text: Optional[str]) -> str:
    """Escape &, <, > and quotes for safe embedding in HTML."""
    return html.escape(text or "", quote=True)


def text_to_html(text: Optional[str], line_prefix: str = "") -> str:
    """
    Render plain text as HTML lines joined with <br>.

    Args:
        text: Plain text content
        line_prefix: Optional prefix for every line (e.g. "> " for quoting)

    Returns:
        Escaped HTML fragment

    Examples:
        >>> text_to_html("a\\nb <c>", "> ")
        '&gt; a<br>&gt; b &lt;c&gt;'
    """
    if text is None:
        return ""

    lines = re.sub(r"\r\n?", "\n", text).split("\n")
    return "<br>".join(escape_html(line_prefix + line) for line in lines)


def html_to_text(html_str: Optional[str]) -> str:
    """
    HTML -> text via BeautifulSoup.

    Line breaks are normalized and long runs of blank lines collapsed.
    """
    if not html_str:
        return ""

    try:
        soup = BeautifulSoup(html_str, "lxml")
    except FeatureNotFound:
        soup = BeautifulSoup(html_str, "html.parser")

    text = soup.get_text(separator="\n")
    text = re.sub(r"\r\n?", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
