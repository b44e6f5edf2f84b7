"""Draft payload handed to the compose/send collaborator."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DraftAction(str, Enum):
    """User action a draft is built for."""

    REPLY = "reply"
    REPLY_ALL = "reply_all"
    FORWARD = "forward"


@dataclass
class ReplyDraft:
    """
    Recipients, subject and body for a reply, reply-all or forward.

    Attributes:
        to: Formatted To line ("" for forwards)
        subject: Subject line
        body: HTML body with attribution and original content
        cc: Formatted Cc line, None when empty
        bcc: Always None; Bcc is left to the user
        in_reply_to: Message-ID of the replied-to message
        references: References chain for the reply
        is_reply_all: True for reply-all drafts
        is_forward: True for forward drafts
    """

    to: str
    subject: str
    body: str
    cc: Optional[str] = None
    bcc: Optional[str] = None
    in_reply_to: Optional[str] = None
    references: Optional[str] = None
    is_reply_all: bool = False
    is_forward: bool = False

    def to_dict(self) -> dict:
        """Serialize with the compose surface's camelCase keys, omitting empty optionals."""
        data = {
            "to": self.to,
            "subject": self.subject,
            "body": self.body,
            "isReplyAll": self.is_reply_all,
            "isForward": self.is_forward,
        }
        optional = {
            "cc": self.cc,
            "bcc": self.bcc,
            "inReplyTo": self.in_reply_to,
            "references": self.references,
        }
        data.update({key: value for key, value in optional.items() if value})
        return data
