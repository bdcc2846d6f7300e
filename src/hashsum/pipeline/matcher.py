"""Ignore-prefix matching."""

from __future__ import annotations

_CASE_OFFSET = ord("a") - ord("A")


def _is_ascii_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def _same_letter(left: str, right: str) -> bool:
    if not (_is_ascii_letter(left) and _is_ascii_letter(right)):
        return False
    return abs(ord(left) - ord(right)) == _CASE_OFFSET


def prefix_difference(name: str, prefix: str | None) -> int | None:
    """Count the positions where ``name`` disagrees with ``prefix``.

    Letters are compared case-insensitively over the ASCII range only; any
    other character must match exactly. Positions past the end of ``name``
    count as differences.

    Args:
        name: Candidate entry name.
        prefix: Ignore prefix, or None when matching is disabled.

    Returns:
        int | None: Number of differing positions, or None when no prefix is set.
    """
    if prefix is None:
        return None

    diff = 0
    for index, expected in enumerate(prefix):
        actual = name[index] if index < len(name) else None
        if actual == expected:
            continue
        if actual is not None and _same_letter(expected, actual):
            continue
        diff += 1
    return diff


def matches_prefix(name: str, prefix: str | None) -> bool:
    """Return True when ``name`` starts with ``prefix`` and should be ignored."""
    return prefix_difference(name, prefix) == 0


__all__ = ["prefix_difference", "matches_prefix"]
