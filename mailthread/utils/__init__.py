"""Utility functions"""

from .date_utils import coerce_datetime
from .html_utils import escape_html, html_to_text, text_to_html
from .message_id_utils import build_references, normalize_message_id
from .unicode_utils import decode_email_header, truncate_text

__all__ = [
    "coerce_datetime",
    "escape_html",
    "html_to_text",
    "text_to_html",
    "build_references",
    "normalize_message_id",
    "decode_email_header",
    "truncate_text",
]
