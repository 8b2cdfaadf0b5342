"""Human-readable order numbers: ``YYMMDD`` followed by a 5-digit random suffix."""

from __future__ import annotations

import random
from datetime import datetime, timezone

SUFFIX_RANGE = 99999


def generate_order_number(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Return e.g. ``25080200001``.

    Not unique by construction; callers check for collisions.
    """
    now = now or datetime.now(timezone.utc)
    suffix = (rng or random).randrange(SUFFIX_RANGE)
    return f"{now:%y%m%d}{suffix:05d}"
