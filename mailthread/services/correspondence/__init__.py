"""Reply, reply-all and forward draft construction."""

from .attribution import AttributionFormatter
from .correspondence_resolver import CorrespondenceResolver

__all__ = ["AttributionFormatter", "CorrespondenceResolver"]
