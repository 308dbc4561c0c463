"""Scalar coercion helpers for YAML configuration values.

The same YAML option can arrive as a string or as a native scalar depending on
quoting; these helpers fold both into one shape before type checks run.
"""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Return `value` as trimmed text, or `None` for `None` and blank input."""

    if value is None:
        return None
    return str(value).strip() or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Read `true/false`, `yes/no`, `on/off`, or `1/0` as a bool; `None` when unrecognized."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        return None

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_mode_token(value: object) -> str | None:
    """Normalize a mode token to lowercase kebab-case, or `None` when blank.

    `one_paragraph` and `One-Paragraph` both normalize to `one-paragraph`.
    """

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None
    return normalized.lower().replace("_", "-")
