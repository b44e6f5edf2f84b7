"""Parsed message metadata consumed by the resolvers."""

from dataclasses import dataclass
from typing import Any, Optional


class MessageContractError(ValueError):
    """Raised when a required message field is absent (not merely empty)."""

    pass


# Keys accepted by ParsedMessage.from_dict, camelCase and snake_case
_FIELD_ALIASES = {
    "id": "id",
    "subject": "subject",
    "from": "sender",
    "sender": "sender",
    "to": "to",
    "cc": "cc",
    "replyTo": "reply_to",
    "reply_to": "reply_to",
    "date": "date",
    "bodyHtml": "body_html",
    "body_html": "body_html",
    "bodyText": "body_text",
    "body_text": "body_text",
    "snippet": "snippet",
    "messageId": "message_id",
    "message_id": "message_id",
    "references": "references",
}

REQUIRED_FIELDS = ("id", "subject", "sender", "to")


@dataclass(frozen=True)
class ParsedMessage:
    """
    Read-only metadata of a single message, already stripped of MIME structure.

    Attributes:
        id: Identifier assigned by the ingestion collaborator
        subject: Subject line (may be empty)
        sender: Raw From header
        to: Raw To header
        cc: Raw Cc header
        reply_to: Raw Reply-To header
        date: Sent date (datetime preferred; strings are parsed leniently)
        body_html: HTML body
        body_text: Plain-text body
        snippet: Short preview text
        message_id: RFC 5322 Message-ID header
        references: Raw References header
    """

    id: str
    subject: str
    sender: str
    to: str
    cc: Optional[str] = None
    reply_to: Optional[str] = None
    date: Any = None
    body_html: Optional[str] = None
    body_text: Optional[str] = None
    snippet: Optional[str] = None
    message_id: Optional[str] = None
    references: Optional[str] = None

    def __post_init__(self):
        """Validate the required fields after initialization."""
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None:
                raise MessageContractError(f"{name} is required")
            if not isinstance(value, str):
                raise MessageContractError(
                    f"{name} must be a string, got {type(value).__name__}"
                )

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedMessage":
        """
        Build a message from a mapping with camelCase or snake_case keys.

        Args:
            data: Raw mapping (e.g. decoded JSON)

        Returns:
            ParsedMessage instance

        Raises:
            MessageContractError: If a required key is missing or None
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            field_name = _FIELD_ALIASES.get(key)
            if field_name is not None and field_name not in kwargs:
                kwargs[field_name] = value

        missing = [name for name in REQUIRED_FIELDS if kwargs.get(name) is None]
        if missing:
            raise MessageContractError(f"Missing required fields: {', '.join(missing)}")

        return cls(**kwargs)
