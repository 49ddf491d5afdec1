"""Shared keyword sets and type tables for extraction and resolution."""

from __future__ import annotations

TYPE_DECLARATION_KEYWORDS: tuple[str, ...] = (
    "class",
    "struct",
    "interface",
    "record",
    "enum",
)

VISIBILITY_KEYWORD = "public"

MODIFIER_KEYWORDS: tuple[str, ...] = (
    "public",
    "static",
    "const",
    "readonly",
    "virtual",
    "override",
    "required",
    "new",
)

COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*", "*", "#")

INHERITANCE_SEPARATOR = ":"
ARRAY_SUFFIX = "[]"
NULLABLE_SUFFIX = "?"

NUMBER_TYPES: tuple[str, ...] = (
    "byte",
    "sbyte",
    "decimal",
    "double",
    "float",
    "int",
    "uint",
    "long",
    "ulong",
    "short",
    "ushort",
)

PRIMITIVE_TYPES: dict[str, str] = {
    **{name: "number" for name in NUMBER_TYPES},
    "bool": "boolean",
    "string": "string",
}

DATE_TYPES: dict[str, str] = {
    "DateTime": "Date",
}

UNKNOWN_TYPE = "any"

DEFAULT_BANNER = "/* Auto Generated */"

DEFAULT_COLLECTION_MARKERS: tuple[str, ...] = ("ICollection", "IEnumerable")


__all__ = [
    "ARRAY_SUFFIX",
    "COMMENT_PREFIXES",
    "DATE_TYPES",
    "DEFAULT_BANNER",
    "DEFAULT_COLLECTION_MARKERS",
    "INHERITANCE_SEPARATOR",
    "MODIFIER_KEYWORDS",
    "NULLABLE_SUFFIX",
    "NUMBER_TYPES",
    "PRIMITIVE_TYPES",
    "TYPE_DECLARATION_KEYWORDS",
    "UNKNOWN_TYPE",
    "VISIBILITY_KEYWORD",
]
