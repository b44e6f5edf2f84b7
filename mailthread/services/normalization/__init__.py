"""Address parsing and subject normalization."""

from .address_parser import (
    dedupe,
    exclude_address,
    extract_emails,
    format_addresses,
    is_valid_email,
    parse_address,
    parse_addresses,
    split_address_list,
)
from .subject_normalizer import is_forward, is_reply, normalize_subject

__all__ = [
    "dedupe",
    "exclude_address",
    "extract_emails",
    "format_addresses",
    "is_valid_email",
    "parse_address",
    "parse_addresses",
    "split_address_list",
    "is_forward",
    "is_reply",
    "normalize_subject",
]
