"""Email address value object."""

import re
from dataclasses import dataclass
from typing import Optional

# local@domain.tld, no whitespace and a single @
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_NEEDS_QUOTING = re.compile(r'[,;<>"@]')


@dataclass(frozen=True, eq=False)
class EmailAddress:
    """
    A single mailbox parsed from a header.

    Attributes:
        email: Address in local@domain.tld form
        name: Optional display name

    Equality and hashing are case-insensitive on ``email``; the display
    name does not take part in comparisons.
    """

    email: str
    name: Optional[str] = None

    def __post_init__(self):
        """Validate fields after initialization."""
        if not self.email or not EMAIL_PATTERN.match(self.email):
            raise ValueError(f"Invalid email address: {self.email!r}")

    @property
    def key(self) -> str:
        """Lower-cased email used for comparisons."""
        return self.email.lower()

    def format(self) -> str:
        """Render as ``Name <email>`` or the bare email."""
        if not self.name:
            return self.email
        name = self.name
        if _NEEDS_QUOTING.search(name):
            name = '"' + name.replace('"', "") + '"'
        return f"{name} <{self.email}>"

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other) -> bool:
        if not isinstance(other, EmailAddress):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)
