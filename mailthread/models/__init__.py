"""Data models for threading and correspondence"""

from .conversation import Conversation
from .email_address import EMAIL_PATTERN, EmailAddress
from .parsed_message import MessageContractError, ParsedMessage
from .reply_draft import DraftAction, ReplyDraft

__all__ = [
    "Conversation",
    "EMAIL_PATTERN",
    "EmailAddress",
    "MessageContractError",
    "ParsedMessage",
    "DraftAction",
    "ReplyDraft",
]
