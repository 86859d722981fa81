"""Order identifier generation.

Order ids are generated client-side from ``uuid4`` (122 random bits from
the OS CSPRNG), so two submission attempts never share an id.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

import uuid


def generate_order_id() -> uuid.UUID:
    """Return a fresh random order id."""
    return uuid.uuid4()


def parse_order_id(raw: str) -> uuid.UUID | None:
    """Parse *raw* as an order id, returning None when it is malformed."""
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        return None
