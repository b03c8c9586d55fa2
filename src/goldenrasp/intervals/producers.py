"""Producer credit string parsing."""

import re

# A comma or the word "and" surrounded by single spaces.
PRODUCER_SEPARATOR = re.compile(r",| and ")


def parse_producers(raw: str | None) -> list[str]:
    """Split a raw credits string into individual producer names.

    Names are separated by commas and/or " and ", in any mix
    ("A, B and C" -> ["A", "B", "C"]). Each name is trimmed and blank
    fragments are dropped. Duplicates are kept.

    Args:
        raw: The producers field of a movie, possibly None.

    Returns:
        Producer names in credit order; empty for None, blank or non-string input.
    """
    if not isinstance(raw, str) or not raw.strip():
        return []
    return [name.strip() for name in PRODUCER_SEPARATOR.split(raw) if name.strip()]
