"""Recipient, subject and body resolution for reply, reply-all and forward."""

from datetime import datetime
from typing import Any, Callable, Optional

from mailthread.config.threading_config import CorrespondenceConfig
from mailthread.models.email_address import EmailAddress
from mailthread.models.parsed_message import ParsedMessage
from mailthread.models.reply_draft import DraftAction, ReplyDraft
from mailthread.services.correspondence.attribution import AttributionFormatter
from mailthread.services.normalization.address_parser import (
    dedupe,
    exclude_address,
    format_addresses,
    parse_addresses,
)
from mailthread.services.normalization.subject_normalizer import is_forward, is_reply
from mailthread.services.tracing import NullTraceSink, TraceSink
from mailthread.utils.message_id_utils import build_references, normalize_message_id


class CorrespondenceResolver:
    """
    Builds ReplyDraft payloads for the compose collaborator.

    Every call is independent; no state is kept between calls. Empty or
    malformed headers degrade to empty recipient lists instead of raising.
    """

    def __init__(
        self,
        config: Optional[CorrespondenceConfig] = None,
        trace: Optional[TraceSink] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize resolver.

        Args:
            config: Correspondence settings (defaults when omitted)
            trace: Optional sink for trace events
            clock: Returns "now" for messages without a usable date
        """
        self.config = config or CorrespondenceConfig()
        self.trace = trace or NullTraceSink()
        self.formatter = AttributionFormatter(self.config, clock)

    # ------------------------------------------------------------------
    # Public builders
    # ------------------------------------------------------------------
    def make_reply(self, message: ParsedMessage, current_user_email: Optional[str] = None) -> ReplyDraft:
        """
        Reply to the sender (or Reply-To) of a message.

        Args:
            message: Message being replied to
            current_user_email: Identity of the replying user

        Returns:
            ReplyDraft addressed to Reply-To when set, otherwise From
        """
        recipients = self._reply_recipients(message)

        draft = ReplyDraft(
            to=format_addresses(recipients),
            subject=self._reply_subject(message.subject),
            body=self.formatter.reply_body(message),
            in_reply_to=self._in_reply_to(message),
            references=build_references(message.references, message.message_id),
        )
        self._trace_draft(DraftAction.REPLY, message, draft, recipients, [])
        return draft

    def make_reply_all(self, message: ParsedMessage, current_user_email: Optional[str] = None) -> ReplyDraft:
        """
        Reply to the sender and every other recipient.

        Args:
            message: Message being replied to
            current_user_email: Removed from To and Cc (case-insensitive)

        Returns:
            ReplyDraft with To = (Reply-To or From) + original To and
            Cc = original Cc, both without the current user

        Notes:
            - If removing the current user empties To, From is used alone
            - Cc entries already on To are dropped as well, so no address
              appears on both lines; Cc is None when empty
        """
        union = dedupe(self._reply_recipients(message) + parse_addresses(message.to))
        to_list = exclude_address(union, current_user_email)

        if not to_list and union:
            to_list = dedupe(parse_addresses(message.sender)) or union
            self.trace(
                "draft.recipient_fallback",
                {"action": DraftAction.REPLY_ALL.value, "message": message.id, "reason": "to_empty_after_filter"},
            )

        on_to = {address.key for address in to_list}
        cc_list = [
            address
            for address in exclude_address(dedupe(parse_addresses(message.cc)), current_user_email)
            if address.key not in on_to
        ]

        draft = ReplyDraft(
            to=format_addresses(to_list),
            cc=format_addresses(cc_list) or None,
            subject=self._reply_subject(message.subject),
            body=self.formatter.reply_body(message),
            in_reply_to=self._in_reply_to(message),
            references=build_references(message.references, message.message_id),
            is_reply_all=True,
        )
        self._trace_draft(DraftAction.REPLY_ALL, message, draft, to_list, cc_list)
        return draft

    def make_forward(self, message: ParsedMessage) -> ReplyDraft:
        """
        Forward a message; recipients are always left to the user.

        Returns:
            ReplyDraft with ``to=""``, a Fwd: subject and the original
            content below a forwarded-message header block
        """
        subject = message.subject
        if not is_forward(subject):
            subject = f"{self.config.forward_prefix}{subject}"

        draft = ReplyDraft(
            to="",
            subject=subject,
            body=self.formatter.forward_body(message),
            is_forward=True,
        )
        self._trace_draft(DraftAction.FORWARD, message, draft, [], [])
        return draft

    def should_show_reply_all(self, message: ParsedMessage, current_user_email: Optional[str] = None) -> bool:
        """
        Whether offering Reply-All makes sense for a message.

        True when more than one distinct address other than the current
        user appears in To/Cc/From, or when the message has any Cc address
        at all (even if it is the current user).
        """
        cc = parse_addresses(message.cc)
        if cc:
            return True

        everyone = dedupe(parse_addresses(message.to) + cc + parse_addresses(message.sender))
        return len(exclude_address(everyone, current_user_email)) > 1

    def build(
        self,
        action: DraftAction,
        message: ParsedMessage,
        current_user_email: Optional[str] = None,
    ) -> ReplyDraft:
        """
        Dispatch to the builder for ``action``.

        Raises:
            ValueError: If action is not a known DraftAction
        """
        action = DraftAction(action)
        if action is DraftAction.REPLY:
            return self.make_reply(message, current_user_email)
        if action is DraftAction.REPLY_ALL:
            return self.make_reply_all(message, current_user_email)
        return self.make_forward(message)

    def format_date(self, value: Any) -> str:
        """Attribution date; unusable values render the current time."""
        return self.formatter.format_date(value)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _reply_subject(self, subject: str) -> str:
        if is_reply(subject):
            return subject
        return f"{self.config.reply_prefix}{subject}"

    def _reply_recipients(self, message: ParsedMessage) -> list[EmailAddress]:
        """Reply-To when it is set, otherwise From; From again if Reply-To is unusable."""
        reply_to = message.reply_to or ""
        if reply_to.strip():
            recipients = dedupe(parse_addresses(reply_to))
            if recipients:
                return recipients
            self.trace(
                "draft.recipient_fallback",
                {"message": message.id, "reason": "reply_to_unparseable"},
            )
        return dedupe(parse_addresses(message.sender))

    def _in_reply_to(self, message: ParsedMessage) -> Optional[str]:
        if not message.message_id:
            return None
        try:
            return normalize_message_id(message.message_id)
        except ValueError:
            return None

    def _trace_draft(
        self,
        action: DraftAction,
        message: ParsedMessage,
        draft: ReplyDraft,
        to_list: list[EmailAddress],
        cc_list: list[EmailAddress],
    ) -> None:
        self.trace(
            "draft.built",
            {
                "action": action.value,
                "message": message.id,
                "to": len(to_list),
                "cc": len(cc_list),
                "subject": draft.subject,
            },
        )
