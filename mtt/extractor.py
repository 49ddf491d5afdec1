"""Line-oriented extraction of base types and public fields from model files.

Nothing here parses the source language. Each line is classified by the
predicates below and then split on whitespace, which is enough for the flat
property-bag classes this tool is pointed at.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .constants import (
    ARRAY_SUFFIX,
    COMMENT_PREFIXES,
    DEFAULT_COLLECTION_MARKERS,
    INHERITANCE_SEPARATOR,
    MODIFIER_KEYWORDS,
    NULLABLE_SUFFIX,
    TYPE_DECLARATION_KEYWORDS,
    VISIBILITY_KEYWORD,
)
from .logging import get_logger
from .models import FieldDeclaration, ModelDefinition, ModelFile

_TYPE_DECLARATION_PATTERN = re.compile(
    r"\b(?:" + "|".join(TYPE_DECLARATION_KEYWORDS) + r")\b"
)
_VISIBILITY_PATTERN = re.compile(rf"\b{VISIBILITY_KEYWORD}\b")
_MODIFIER_PATTERN = re.compile(r"\b(?:" + "|".join(MODIFIER_KEYWORDS) + r")\b")
_IDENTIFIER_PATTERN = re.compile(r"@?[A-Za-z_][A-Za-z0-9_]*")
_QUALIFIED_NAME_PATTERN = re.compile(r"@?[A-Za-z_][A-Za-z0-9_.]*")


class MalformedDeclarationError(ValueError):
    """Raised when a line looks like a field but lacks a type and a name."""

    def __init__(self, path: Path, line_number: int, line: str, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{path}:{line_number}: {reason}: {line.strip()!r}")


@dataclass
class ExtractionIssue:
    """A field line that was skipped during extraction."""

    path: Path
    line_number: int
    line: str
    message: str


@dataclass
class ExtractionResult:
    """Definitions for the whole batch plus every skipped line."""

    definitions: List[ModelDefinition] = field(default_factory=list)
    issues: List[ExtractionIssue] = field(default_factory=list)


def is_comment_line(line: str) -> bool:
    return line.lstrip().startswith(COMMENT_PREFIXES)


def is_type_declaration_line(line: str) -> bool:
    return bool(_TYPE_DECLARATION_PATTERN.search(line))


def is_inheritance_line(line: str) -> bool:
    return is_type_declaration_line(line) and INHERITANCE_SEPARATOR in line


def is_method_line(line: str) -> bool:
    return "(" in line and ")" in line


def is_field_line(line: str) -> bool:
    return (
        bool(_VISIBILITY_PATTERN.search(line))
        and not is_type_declaration_line(line)
        and not is_method_line(line)
    )


def is_array_type(type_token: str, markers: Sequence[str] = DEFAULT_COLLECTION_MARKERS) -> bool:
    """Return True for ``T[]`` and whitelisted collection wrappers such as ``ICollection<T>``."""
    if ARRAY_SUFFIX in type_token:
        return True
    return any(_marker_pattern(marker).search(type_token) for marker in markers)


def clean_type_name(type_token: str, markers: Sequence[str] = DEFAULT_COLLECTION_MARKERS) -> str:
    """Strip decorations and any namespace qualifier from a type token."""
    cleaned = type_token.replace(ARRAY_SUFFIX, "")
    for marker in markers:
        cleaned = _marker_pattern(marker).sub("", cleaned)
    cleaned = cleaned.replace("<", "").replace(">", "").strip().rstrip(NULLABLE_SUFFIX)
    return _last_segment(cleaned)


def parse_base_type(line: str) -> Optional[str]:
    """Return the type named right after the inheritance separator, if any."""
    _, _, remainder = line.partition(INHERITANCE_SEPARATOR)
    match = _QUALIFIED_NAME_PATTERN.match(remainder.strip())
    if not match:
        return None
    return _last_segment(match.group(0).lstrip("@")) or None


def split_declaration(line: str) -> List[str]:
    """Remove modifier keywords and split on whitespace, keeping generic arguments together."""
    tokens: List[str] = []
    pending: List[str] = []
    for token in _MODIFIER_PATTERN.sub(" ", line).split():
        pending.append(token)
        joined = " ".join(pending)
        if joined.count("<") <= joined.count(">"):
            tokens.append(joined)
            pending = []
    if pending:
        tokens.append(" ".join(pending))
    return tokens


def _last_segment(type_name: str) -> str:
    # Namespace-qualified names (Models.User) resolve by their last segment.
    return type_name.rsplit(".", 1)[-1]


@lru_cache(maxsize=None)
def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![A-Za-z0-9_]){re.escape(marker)}<")


class DeclarationExtractor:
    """Turns raw model lines into ordered field declarations and a base type."""

    def __init__(
        self,
        *,
        collection_markers: Sequence[str] = DEFAULT_COLLECTION_MARKERS,
        strict: bool = False,
    ) -> None:
        self.collection_markers = tuple(collection_markers)
        self.strict = strict
        self.logger = get_logger("extractor")

    def extract_all(self, models: Iterable[ModelFile]) -> ExtractionResult:
        """Extract every model; raises on the first malformed line when strict."""
        result = ExtractionResult()
        for model in models:
            definition, issues = self.extract(model)
            result.definitions.append(definition)
            result.issues.extend(issues)
        return result

    def extract(self, model: ModelFile) -> Tuple[ModelDefinition, List[ExtractionIssue]]:
        base_type_name: Optional[str] = None
        fields: List[FieldDeclaration] = []
        issues: List[ExtractionIssue] = []

        for line_number, line in enumerate(model.raw_lines, start=1):
            if not line.strip() or is_comment_line(line):
                continue

            if is_inheritance_line(line):
                if base_type_name is None:
                    base_type_name = parse_base_type(line)
                else:
                    self.logger.debug(
                        "%s:%d: ignoring additional inheritance line", model.source_path, line_number
                    )
                continue

            if not is_field_line(line):
                continue

            try:
                fields.append(self._parse_field(model.source_path, line_number, line))
            except MalformedDeclarationError as exc:
                if self.strict:
                    raise
                self.logger.warning("Skipping malformed declaration %s", exc)
                issues.append(
                    ExtractionIssue(
                        path=exc.path,
                        line_number=exc.line_number,
                        line=exc.line,
                        message=exc.reason,
                    )
                )

        definition = ModelDefinition(
            name=model.name,
            structure_group=model.structure_group,
            source_path=model.source_path,
            base_type_name=base_type_name,
            fields=tuple(fields),
        )
        return definition, issues

    def _parse_field(self, path: Path, line_number: int, line: str) -> FieldDeclaration:
        tokens = split_declaration(line)
        if len(tokens) < 2:
            raise MalformedDeclarationError(path, line_number, line, "expected a type and a name")

        declared_type = tokens[0]
        name_match = _IDENTIFIER_PATTERN.match(tokens[1])
        if not name_match:
            raise MalformedDeclarationError(path, line_number, line, "invalid member name")

        return FieldDeclaration(
            variable_name=name_match.group(0).lstrip("@"),
            declared_type_name=declared_type,
            cleaned_type_name=clean_type_name(declared_type, self.collection_markers),
            is_array=is_array_type(declared_type, self.collection_markers),
            line_number=line_number,
        )


__all__ = [
    "DeclarationExtractor",
    "ExtractionIssue",
    "ExtractionResult",
    "MalformedDeclarationError",
    "clean_type_name",
    "is_array_type",
    "is_comment_line",
    "is_field_line",
    "is_inheritance_line",
    "is_method_line",
    "is_type_declaration_line",
    "parse_base_type",
    "split_declaration",
]
