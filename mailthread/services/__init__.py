"""Business logic services"""

from .correspondence import AttributionFormatter, CorrespondenceResolver
from .normalization import (
    dedupe,
    exclude_address,
    format_addresses,
    is_reply,
    normalize_subject,
    parse_addresses,
)
from .threads import ConversationGrouper, ThreadIdentityResolver
from .tracing import CompositeTraceSink, LoggingTraceSink, NullTraceSink, TraceSink

__all__ = [
    "AttributionFormatter",
    "CorrespondenceResolver",
    "dedupe",
    "exclude_address",
    "format_addresses",
    "is_reply",
    "normalize_subject",
    "parse_addresses",
    "ConversationGrouper",
    "ThreadIdentityResolver",
    "CompositeTraceSink",
    "LoggingTraceSink",
    "NullTraceSink",
    "TraceSink",
]
