"""Tests for subject normalization."""

import pytest

from mailthread.services.normalization.subject_normalizer import (
    is_forward,
    is_reply,
    normalize_subject,
)


class TestNormalizeSubject:
    """Test subject normalization."""

    @pytest.mark.parametrize(
        "subject, expected",
        [
            ("Hi", "hi"),
            ("  Re: Hi  ", "hi"),
            ("Re: Fwd: Hi", "hi"),
            ("RE: re: FW: fwd: Hi", "hi"),
            ("Fw:Hi", "hi"),
            ("[EXTERNAL] Quarterly Report", "quarterly report"),
            ("Re: [EXTERNAL] Quarterly Report", "quarterly report"),
            ("Project   X\t update", "project x update"),
            ("Regarding the plan", "regarding the plan"),
            ("Re:", ""),
        ],
    )
    def test_normalize(self, subject, expected):
        """Test prefixes, tags and whitespace are normalized."""
        assert normalize_subject(subject) == expected

    @pytest.mark.parametrize("subject", [None, "", "   "])
    def test_empty(self, subject):
        """Test empty input returns empty string."""
        assert normalize_subject(subject) == ""

    @pytest.mark.parametrize(
        "subject",
        [
            "Re: Fwd: Hi",
            "[EXT] Re: Hi",
            "[a] [b] Re: [c] Hello   world",
            "  FWD:   re:  Status  ",
            "Plain subject",
            "Re : spaced colon",
        ],
    )
    def test_idempotent(self, subject):
        """Test normalizing twice equals normalizing once."""
        once = normalize_subject(subject)
        assert normalize_subject(once) == once

    def test_prefix_variants_normalize_equal(self):
        """Test Re:/Fwd:/bare forms of a subject normalize the same."""
        assert normalize_subject("Re: Hi") == normalize_subject("Fwd: Hi") == normalize_subject("Hi")


class TestIsReply:
    """Test reply detection on the raw subject."""

    @pytest.mark.parametrize("subject", ["Re: Hi", "re:hi", "FWD: Hi", "Fw: Hi", "  Re: padded"])
    def test_reply_prefixes(self, subject):
        """Test reply/forward prefixes are detected."""
        assert is_reply(subject) is True

    @pytest.mark.parametrize("subject", ["Hi", "[EXT] Re: Hi", "Regarding", "", None])
    def test_non_replies(self, subject):
        """Test subjects without a leading token."""
        assert is_reply(subject) is False


class TestIsForward:
    """Test forward detection."""

    def test_forward_prefix(self):
        """Test Fwd: in any case."""
        assert is_forward("Fwd: Hi")
        assert is_forward("FWD: Hi")

    def test_not_forward(self):
        """Test Re: and Fw: are not treated as Fwd:."""
        assert not is_forward("Re: Hi")
        assert not is_forward("Fw: Hi")
        assert not is_forward(None)
