"""Thread identity: deterministic thread keys and co-threading checks."""

import hashlib
from typing import Optional

from mailthread.config.threading_config import ThreadingConfig
from mailthread.models.parsed_message import ParsedMessage
from mailthread.services.normalization.address_parser import extract_emails
from mailthread.services.normalization.subject_normalizer import is_reply, normalize_subject
from mailthread.services.tracing import NullTraceSink, TraceSink


class ThreadIdentityResolver:
    """
    Derives thread keys and decides whether two messages share a thread.

    ``thread_key`` is the exact, cheap grouping used at ingestion time.
    ``same_thread`` is an approximate check for reconciling messages whose
    subjects match but whose participant sets drifted (e.g. someone was
    dropped from Cc).

    The resolver holds only immutable configuration and is safe to share
    between threads.
    """

    def __init__(self, config: Optional[ThreadingConfig] = None, trace: Optional[TraceSink] = None):
        """
        Initialize resolver.

        Args:
            config: Threading settings (defaults when omitted)
            trace: Optional sink for trace events
        """
        self.config = config or ThreadingConfig()
        self.trace = trace or NullTraceSink()

    def thread_key(
        self,
        subject: Optional[str],
        sender: Optional[str],
        to: Optional[str],
        cc: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> str:
        """
        Compute the thread key for a subject and its participants.

        Args:
            subject: Raw subject
            sender: Raw From header
            to: Raw To header
            cc: Raw Cc header
            reply_to: Raw Reply-To header

        Returns:
            ``<prefix><hex>``, e.g. ``thread_3f2a9c0d1e4b5a67``

        Notes:
            - Pure function of (normalized subject, participant set)
            - Participant order and Re:/Fwd: prefixes do not change the key
        """
        normalized = normalize_subject(subject)
        participants = sorted(extract_emails(sender, to, cc, reply_to))
        combined = f"{normalized}:{','.join(participants)}"

        digest = hashlib.sha256(combined.encode("utf-8")).hexdigest()
        key = f"{self.config.key_prefix}{digest[: self.config.key_length]}"

        self.trace(
            "thread_key.derived",
            {"subject": normalized, "participants": len(participants), "key": key},
        )
        return key

    def thread_key_for(self, message: ParsedMessage) -> str:
        """Thread key of a parsed message."""
        return self.thread_key(
            message.subject, message.sender, message.to, message.cc, message.reply_to
        )

    def is_reply(self, subject: Optional[str]) -> bool:
        """True if the raw subject starts with a Re:/Fwd:/Fw: token."""
        return is_reply(subject)

    def participants(self, message: ParsedMessage) -> set[str]:
        """Lower-cased From/To/Cc emails of a message."""
        return set(extract_emails(message.sender, message.to, message.cc))

    def similarity(self, a: ParsedMessage, b: ParsedMessage) -> float:
        """
        Jaccard similarity of the participant sets of two messages.

        Returns 0.0 when both sets are empty.
        """
        pa = self.participants(a)
        pb = self.participants(b)
        union = pa | pb
        if not union:
            return 0.0
        return len(pa & pb) / len(union)

    def same_thread(self, a: ParsedMessage, b: ParsedMessage) -> bool:
        """
        Decide whether two messages belong to the same conversation.

        Args:
            a: First message
            b: Second message

        Returns:
            False if the normalized subjects differ, otherwise whether the
            participant Jaccard similarity reaches the configured threshold
            (messages without any participants never match)
        """
        if normalize_subject(a.subject) != normalize_subject(b.subject):
            return False

        score = self.similarity(a, b)
        matched = score > 0 and score >= self.config.similarity_threshold

        self.trace(
            "thread.compared",
            {"a": a.id, "b": b.id, "similarity": round(score, 4), "same_thread": matched},
        )
        return matched
