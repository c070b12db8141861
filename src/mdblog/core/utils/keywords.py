"""Keyword coercion: accept a list or a comma-separated string"""

from typing import Any


def normalize_keywords(raw: Any) -> list:
    """Return keywords as a list.

    A list (or tuple) is passed through unchanged so its items can still be
    validated as strings. A string is split on commas; segments are trimmed
    and empty ones dropped, keeping order and duplicates. Anything else
    (including None) becomes an empty list.
    """
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, str):
        return [k.strip() for k in raw.split(',') if k.strip()]
    return []
