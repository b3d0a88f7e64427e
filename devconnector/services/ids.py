"""Path id parsing shared by the services."""

import re

# Canonical positive integers only: no sign, no padding, no separators
_POSITIVE_ID = re.compile(r"^[1-9][0-9]*$")


def parse_positive_id(raw: str | int) -> int | None:
    """Return the id, or None when ``raw`` is not a canonical positive integer."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw if raw > 0 else None
    if not isinstance(raw, str) or not _POSITIVE_ID.match(raw):
        return None
    return int(raw)
