"""Conversation (thread) data model."""

from dataclasses import dataclass, field

from .parsed_message import ParsedMessage


@dataclass
class Conversation:
    """
    Messages grouped under one thread key.

    Attributes:
        key: Thread key of the conversation
        subject: Normalized subject
        original_subject: Subject of the earliest message
        messages: Member messages, oldest first
        participants: Lower-cased participant emails in first-seen order
    """

    key: str
    subject: str
    original_subject: str
    messages: list[ParsedMessage] = field(default_factory=list)
    participants: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.messages)

    @property
    def earliest(self) -> ParsedMessage:
        return self.messages[0]

    @property
    def latest(self) -> ParsedMessage:
        return self.messages[-1]
