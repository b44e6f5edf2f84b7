"""Tests for ThreadIdentityResolver."""

import hashlib

import pytest

from mailthread.config.threading_config import ThreadingConfig
from mailthread.models.parsed_message import ParsedMessage
from mailthread.services.threads.thread_resolver import ThreadIdentityResolver


def make_message(msg_id="1", subject="Hi", sender="", to="", cc=None, reply_to=None):
    return ParsedMessage(id=msg_id, subject=subject, sender=sender, to=to, cc=cc, reply_to=reply_to)


class TestThreadKey:
    """Test thread key derivation."""

    @pytest.fixture
    def resolver(self):
        return ThreadIdentityResolver()

    def test_key_format(self, resolver):
        """Test prefix and 16 hex characters."""
        key = resolver.thread_key("Hi", "a@x.com", "b@y.com")
        assert key.startswith("thread_")
        suffix = key[len("thread_"):]
        assert len(suffix) == 16
        int(suffix, 16)

    def test_key_matches_digest_of_canonical_string(self, resolver):
        """Test the key is sha256 of "<subject>:<sorted participants>"."""
        expected = hashlib.sha256("hi:a@x.com,b@y.com".encode("utf-8")).hexdigest()[:16]
        assert resolver.thread_key("Re: Hi", "B@y.com", "a@x.com") == f"thread_{expected}"

    def test_key_is_deterministic(self, resolver):
        """Test repeated calls give the same key."""
        first = resolver.thread_key("Hi", "a@x.com", "b@y.com", "c@z.com", "d@w.com")
        second = ThreadIdentityResolver().thread_key("Hi", "a@x.com", "b@y.com", "c@z.com", "d@w.com")
        assert first == second

    def test_participant_order_independent(self, resolver):
        """Test To order does not change the key."""
        assert resolver.thread_key("Hi", "a@x.com", "b@y.com,c@z.com") == resolver.thread_key(
            "Hi", "a@x.com", "c@z.com,b@y.com"
        )

    def test_header_placement_independent(self, resolver):
        """Test the same participant set across different headers gives the same key."""
        assert resolver.thread_key("Hi", "a@x.com", "b@y.com", "c@z.com") == resolver.thread_key(
            "Hi", "c@z.com", "a@x.com", None, "b@y.com"
        )

    def test_subject_prefix_insensitive(self, resolver):
        """Test Re:/Fwd: prefixes do not change the key."""
        participants = ("a@x.com", "b@y.com")
        plain = resolver.thread_key("Hi", *participants)
        assert resolver.thread_key("Re: Hi", *participants) == plain
        assert resolver.thread_key("Fwd: Hi", *participants) == plain

    def test_case_and_duplicates_ignored(self, resolver):
        """Test participant case and repeats do not change the key."""
        assert resolver.thread_key("Hi", "Alice <A@X.com>", "a@x.com, b@y.com") == resolver.thread_key(
            "Hi", "a@x.com", "b@y.com"
        )

    def test_different_participants_differ(self, resolver):
        """Test a changed participant set changes the key."""
        assert resolver.thread_key("Hi", "a@x.com", "b@y.com") != resolver.thread_key("Hi", "a@x.com", "c@z.com")

    def test_different_subjects_differ(self, resolver):
        """Test a changed subject changes the key."""
        assert resolver.thread_key("Hi", "a@x.com", "b@y.com") != resolver.thread_key("Bye", "a@x.com", "b@y.com")

    def test_empty_inputs_do_not_raise(self, resolver):
        """Test empty headers still produce a key."""
        assert resolver.thread_key("", "", "", "", "").startswith("thread_")
        assert resolver.thread_key(None, None, None).startswith("thread_")

    def test_project_x_scenario(self, resolver):
        """Test "Project X" and "Re: Project X" with the same participant share a key."""
        first = make_message("1", "Project X", sender="pm@co.com")
        second = make_message("2", "Re: Project X", sender="pm@co.com")
        assert resolver.thread_key_for(first) == resolver.thread_key_for(second)

    def test_configurable_prefix_and_length(self):
        """Test key prefix and truncation length come from config."""
        resolver = ThreadIdentityResolver(ThreadingConfig(key_prefix="t-", key_length=8))
        key = resolver.thread_key("Hi", "a@x.com", "b@y.com")
        assert key.startswith("t-")
        assert len(key) == 2 + 8

    def test_trace_event(self):
        """Test a trace event is emitted for each derived key."""
        events = []
        resolver = ThreadIdentityResolver(trace=lambda name, fields: events.append((name, fields)))
        key = resolver.thread_key("Re: Hi", "a@x.com", "b@y.com")
        assert events == [("thread_key.derived", {"subject": "hi", "participants": 2, "key": key})]


class TestIsReply:
    """Test reply detection through the resolver."""

    def test_is_reply(self):
        """Test raw prefixes are detected before normalization."""
        resolver = ThreadIdentityResolver()
        assert resolver.is_reply("Re: Hi")
        assert resolver.is_reply("fwd: Hi")
        assert not resolver.is_reply("Hi")


class TestSameThread:
    """Test the Jaccard co-threading heuristic."""

    @pytest.fixture
    def resolver(self):
        return ThreadIdentityResolver()

    def test_different_subjects_never_match(self, resolver):
        """Test subject mismatch wins over identical participants."""
        a = make_message("1", "Hi", sender="a@x.com", to="b@y.com")
        b = make_message("2", "Hello", sender="a@x.com", to="b@y.com")
        assert resolver.same_thread(a, b) is False

    def test_half_overlap_matches(self, resolver):
        """Test {a,b,c} vs {a,b,d}: 2/4 = 0.5 meets the documented 0.5 threshold."""
        a = make_message("1", "Hi", sender="a@x.com", to="b@x.com", cc="c@x.com")
        b = make_message("2", "Re: Hi", sender="a@x.com", to="b@x.com", cc="d@x.com")
        assert resolver.similarity(a, b) == 0.5
        assert resolver.same_thread(a, b) is True

    def test_low_overlap_does_not_match(self, resolver):
        """Test {a,b} vs {a,c,d}: 1/4 is below the threshold."""
        a = make_message("1", "Hi", sender="a@x.com", to="b@x.com")
        b = make_message("2", "Hi", sender="a@x.com", to="c@x.com, d@x.com")
        assert resolver.same_thread(a, b) is False

    def test_dropped_cc_still_matches(self, resolver):
        """Test someone dropped from Cc keeps the messages together."""
        a = make_message("1", "Plan", sender="a@x.com", to="b@x.com", cc="c@x.com")
        b = make_message("2", "Re: Plan", sender="b@x.com", to="a@x.com")
        assert resolver.same_thread(a, b) is True

    def test_both_empty_is_not_same_thread(self, resolver):
        """Test empty participant sets never match and never raise."""
        a = make_message("1", "Hi")
        b = make_message("2", "Hi")
        assert resolver.similarity(a, b) == 0.0
        assert resolver.same_thread(a, b) is False

    def test_reply_to_not_counted(self, resolver):
        """Test participants come from From/To/Cc only."""
        message = make_message("1", "Hi", sender="a@x.com", reply_to="r@x.com")
        assert resolver.participants(message) == {"a@x.com"}

    def test_threshold_is_configurable(self):
        """Test a stricter threshold rejects a 0.5 overlap."""
        resolver = ThreadIdentityResolver(ThreadingConfig(similarity_threshold=0.75))
        a = make_message("1", "Hi", sender="a@x.com", to="b@x.com", cc="c@x.com")
        b = make_message("2", "Hi", sender="a@x.com", to="b@x.com", cc="d@x.com")
        assert resolver.same_thread(a, b) is False
