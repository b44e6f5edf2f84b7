"""Attribution lines, quoting and forward header blocks for drafts."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from mailthread.config.threading_config import CorrespondenceConfig
from mailthread.models.parsed_message import ParsedMessage
from mailthread.utils.date_utils import coerce_datetime
from mailthread.utils.html_utils import escape_html, text_to_html


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AttributionFormatter:
    """Format the quoted part of reply and forward bodies."""

    def __init__(self, config: CorrespondenceConfig, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize formatter.

        Args:
            config: Correspondence settings (date format, banner, quote style)
            clock: Returns "now"; substituted for unusable message dates
        """
        self.config = config
        self.clock = clock or _utc_now

    def format_date(self, value: Any) -> str:
        """
        Format a message date for attribution lines.

        Args:
            value: datetime, or an RFC 2822 / ISO-8601 string

        Returns:
            Date rendered with the configured format; numbers, invalid
            strings and None fall back to the current time
        """
        date = coerce_datetime(value) or self.clock()
        return date.strftime(self.config.date_format)

    def select_content(self, message: ParsedMessage) -> tuple[str, bool]:
        """
        Pick the content to quote.

        Returns:
            (content, is_html): HTML body first, then plain body, then
            snippet; ("", False) when all are blank
        """
        if message.body_html and message.body_html.strip():
            return message.body_html, True
        for candidate in (message.body_text, message.snippet):
            if candidate and candidate.strip():
                return candidate, False
        return "", False

    def attribution(self, message: ParsedMessage) -> str:
        """``On <date>, <sender> wrote:``"""
        return f"On {self.format_date(message.date)}, {message.sender} wrote:"

    def reply_body(self, message: ParsedMessage) -> str:
        """
        Attribution line followed by the quoted original.

        HTML content is wrapped in a blockquote; plain text is escaped,
        prefixed with "> " per line and joined with <br>.
        """
        content, is_html = self.select_content(message)
        header = f"<br><br><p>{escape_html(self.attribution(message))}</p>"

        if not content:
            return header
        if is_html:
            return f'{header}<blockquote style="{self.config.quote_style}">{content}</blockquote>'
        return header + text_to_html(content, line_prefix="> ")

    def forward_header_lines(self, message: ParsedMessage) -> list[str]:
        """Banner, From, To, Cc (when present), Date and Subject lines."""
        lines = [
            self.config.forward_banner,
            f"From: {message.sender}",
            f"To: {message.to}",
        ]
        if message.cc and message.cc.strip():
            lines.append(f"Cc: {message.cc}")
        lines.append(f"Date: {self.format_date(message.date)}")
        lines.append(f"Subject: {message.subject}")
        return lines

    def forward_body(self, message: ParsedMessage) -> str:
        """
        Forwarded-message header block followed by the original content.

        The content is not quoted or altered. The header block is HTML
        when the content is HTML and plain text otherwise.
        """
        content, is_html = self.select_content(message)
        lines = self.forward_header_lines(message)

        if is_html:
            block = "<br>".join(escape_html(line) for line in lines)
            return f"<br><br><p>{block}</p>{content}"
        return "\n\n" + "\n".join(lines) + "\n\n" + content
