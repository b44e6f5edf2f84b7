"""Conversation threading and reply/forward correspondence resolution."""

__version__ = "0.1.0"
