"""Thread identity and conversation grouping."""

from .conversation_grouper import ConversationGrouper
from .thread_resolver import ThreadIdentityResolver

__all__ = ["ConversationGrouper", "ThreadIdentityResolver"]
