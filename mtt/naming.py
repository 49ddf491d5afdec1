"""Identifier casing rules shared by file names, import paths and members."""

from __future__ import annotations


def to_pascal_case(value: str) -> str:
    """Upper-case the first character, leaving the remainder untouched."""
    if not value or value[0].isupper():
        return value
    return value[0].upper() + value[1:]


def to_camel_case(value: str) -> str:
    """Lower-case an identifier for use as a file or member name.

    Identifiers that already start lower case are returned as-is, identifiers
    whose letters are all upper case (``ID``, ``URL2``) are lower-cased
    entirely, anything else only has its first character lowered.
    """
    if not value or value[0].islower():
        return value
    if not any(char.isalpha() and char.islower() for char in value):
        return value.lower()
    return value[0].lower() + value[1:]


def strip_suffix(value: str, suffix: str | None) -> str:
    """Remove ``suffix`` from ``value`` unless that would leave nothing."""
    if suffix and value.endswith(suffix) and len(value) > len(suffix):
        return value[: -len(suffix)]
    return value


__all__ = ["strip_suffix", "to_camel_case", "to_pascal_case"]
