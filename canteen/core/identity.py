"""Identity & Ticket Codes — normalization of national IDs and ticket id shape.

Invariants:
    - normalize_identity_key is idempotent
    - Formatting variants of one identifier normalize to the same key
      ("12.345.678-k", "12345678-K", " 12345678k ") -> "12345678K"
    - Ticket ids are TICKET_ID_LENGTH characters from TICKET_ID_ALPHABET
"""

import re
import secrets
from typing import Callable

from canteen.core.domain_types import (
    IdentityKey, TicketId, TICKET_ID_ALPHABET, TICKET_ID_LENGTH,
)

_NON_ALNUM = re.compile(r"[^0-9A-Z]")
_TICKET_RE = re.compile(rf"^[{TICKET_ID_ALPHABET}]{{{TICKET_ID_LENGTH}}}$")


def normalize_identity_key(raw: str) -> IdentityKey:
    """Uppercase and drop every separator/punctuation character."""
    return IdentityKey(_NON_ALNUM.sub("", raw.upper()))


def generate_ticket_id(
    choice: Callable[[str], str] = secrets.choice,
) -> TicketId:
    """Random fixed-length ticket id. `choice` is injectable for tests."""
    return TicketId("".join(choice(TICKET_ID_ALPHABET) for _ in range(TICKET_ID_LENGTH)))


def is_ticket_id(value: str) -> bool:
    return bool(_TICKET_RE.match(value))
