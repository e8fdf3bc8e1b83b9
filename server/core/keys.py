"""Cache key to filename mapping.

Distinct keys can map to the same name ("a:b" and "a/b" both become "a_b"),
in which case they share one record file. This is a known limitation.
"""

import re

from constants import RECORD_SUFFIX

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def normalize_key(key: str) -> str:
    """Replace every character outside [A-Za-z0-9] with an underscore."""
    return _UNSAFE_CHARS.sub("_", str(key))


def record_filename(key: str) -> str:
    """Filename of the persisted record for a raw key."""
    return f"{normalize_key(key)}{RECORD_SUFFIX}"
