"""
Group parsed messages into conversations.

Two passes over union-find:
  1) exact thread keys
  2) reconciliation: groups with the same normalized subject whose members
     pass ThreadIdentityResolver.same_thread are merged
"""

import re
from typing import Iterable, Optional

from mailthread.models.conversation import Conversation
from mailthread.models.parsed_message import ParsedMessage
from mailthread.services.normalization.address_parser import extract_emails
from mailthread.services.normalization.subject_normalizer import normalize_subject
from mailthread.services.threads.thread_resolver import ThreadIdentityResolver
from mailthread.utils.date_utils import sort_key
from mailthread.utils.html_utils import html_to_text
from mailthread.utils.unicode_utils import truncate_text


class _UnionFind:
    def __init__(self, n: int):
        self.parent = list(range(n))
        self.rank = [0] * n

    def find(self, x: int) -> int:
        while self.parent[x] != x:
            self.parent[x] = self.parent[self.parent[x]]
            x = self.parent[x]
        return x

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1


def _message_sort_key(message: ParsedMessage):
    return (sort_key(message.date), message.id)


class ConversationGrouper:
    """Builds Conversation objects from a batch of messages."""

    def __init__(self, resolver: Optional[ThreadIdentityResolver] = None, reconcile: Optional[bool] = None):
        """
        Initialize grouper.

        Args:
            resolver: Thread identity resolver (default config when omitted)
            reconcile: Run the same_thread merge pass (default from config)
        """
        self.resolver = resolver or ThreadIdentityResolver()
        if reconcile is None:
            reconcile = self.resolver.config.reconcile_conversations
        self.reconcile = reconcile

    def group(self, messages: Iterable[ParsedMessage]) -> list[Conversation]:
        """
        Group messages into conversations.

        Args:
            messages: Parsed messages in any order

        Returns:
            Conversations sorted by latest message (newest first); messages
            inside each conversation are sorted oldest first
        """
        messages = list(messages)
        if not messages:
            return []

        keys = [self.resolver.thread_key_for(message) for message in messages]

        # Pass 1: one group per thread key
        key_to_group: dict[str, int] = {}
        group_members: list[list[int]] = []
        for i, key in enumerate(keys):
            if key not in key_to_group:
                key_to_group[key] = len(group_members)
                group_members.append([])
            group_members[key_to_group[key]].append(i)

        uf = _UnionFind(len(group_members))

        # Pass 2: merge groups that share a subject and enough participants
        if self.reconcile and len(group_members) > 1:
            by_subject: dict[str, list[int]] = {}
            for g, members in enumerate(group_members):
                subject = normalize_subject(messages[members[0]].subject)
                by_subject.setdefault(subject, []).append(g)

            for groups in by_subject.values():
                for pos, g in enumerate(groups):
                    for h in groups[pos + 1:]:
                        if uf.find(g) != uf.find(h) and self._groups_match(
                            messages, group_members[g], group_members[h]
                        ):
                            uf.union(g, h)

        merged: dict[int, list[int]] = {}
        for g, members in enumerate(group_members):
            merged.setdefault(uf.find(g), []).extend(members)

        conversations = []
        for members in merged.values():
            members.sort(key=lambda i: _message_sort_key(messages[i]))
            ordered = [messages[i] for i in members]
            conversations.append(self._build(keys[members[0]], ordered))

        conversations.sort(key=lambda c: _message_sort_key(c.latest), reverse=True)

        self.resolver.trace(
            "conversation.grouped",
            {"messages": len(messages), "conversations": len(conversations)},
        )
        return conversations

    def _groups_match(self, messages: list[ParsedMessage], left: list[int], right: list[int]) -> bool:
        return any(
            self.resolver.same_thread(messages[i], messages[j]) for i in left for j in right
        )

    def _build(self, key: str, ordered: list[ParsedMessage]) -> Conversation:
        participants: list[str] = []
        for message in ordered:
            for email_addr in extract_emails(message.sender, message.to, message.cc):
                if email_addr not in participants:
                    participants.append(email_addr)

        return Conversation(
            key=key,
            subject=normalize_subject(ordered[0].subject),
            original_subject=ordered[0].subject,
            messages=ordered,
            participants=participants,
        )

    def snippet(self, message: ParsedMessage) -> str:
        """Preview text: snippet, else text of the HTML body, else the plain body."""
        text = message.snippet or html_to_text(message.body_html) or message.body_text or ""
        text = re.sub(r"\s+", " ", text).strip()
        return truncate_text(text, self.resolver.config.snippet_length)

    def summarize(self, conversation: Conversation) -> str:
        """
        One-line summary for a conversation list.

        Single message: its snippet. Otherwise ``"<n> messages - <snippet>"``
        using the latest message.
        """
        latest_snippet = self.snippet(conversation.latest)
        if conversation.count == 1:
            return latest_snippet
        return f"{conversation.count} messages - {latest_snippet}"

    def display_participants(
        self,
        conversation: Conversation,
        current_user_email: Optional[str] = None,
        max_display: int = 3,
    ) -> str:
        """
        Participant label for a conversation.

        Args:
            conversation: Conversation to label
            current_user_email: Hidden from the label unless nobody else is left
            max_display: Maximum entries before collapsing into "+N more"

        Returns:
            Raw sender for single-message conversations, otherwise a
            comma-separated participant list
        """
        if conversation.count == 1:
            return conversation.latest.sender

        user = (current_user_email or "").strip().lower()
        participants = [p for p in conversation.participants if p != user]
        if not participants:
            participants = list(conversation.participants)

        if len(participants) <= max_display:
            return ", ".join(participants)

        shown = participants[: max_display - 1]
        remaining = len(participants) - len(shown)
        return f"{', '.join(shown)} +{remaining} more"
