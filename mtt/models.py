"""Core data models shared across mtt components."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass
class ModelFile:
    """A source file loaded from the working tree, before extraction."""

    name: str
    structure_group: str
    raw_lines: List[str]
    source_path: Path


@dataclass(frozen=True)
class FieldDeclaration:
    """A public member found on a field declaration line."""

    variable_name: str
    declared_type_name: str
    cleaned_type_name: str
    is_array: bool
    line_number: int


@dataclass(frozen=True)
class ModelDefinition:
    """Extracted shape of one model: optional base type plus ordered fields."""

    name: str
    structure_group: str
    source_path: Path
    base_type_name: Optional[str] = None
    fields: Tuple[FieldDeclaration, ...] = ()


@dataclass(frozen=True)
class ImportEntry:
    """A named symbol imported from a relative module path."""

    symbol: str
    path: str


@dataclass(frozen=True)
class ResolvedField:
    """A field whose type has been mapped against the batch."""

    variable_name: str
    declared_type_name: str
    is_array: bool
    is_user_defined: bool
    resolved_type: str
    import_path: Optional[str] = None


@dataclass(frozen=True)
class ResolvedModel:
    """A model ready for emission."""

    name: str
    structure_group: str
    source_path: Path
    base_type_name: Optional[str] = None
    base_import_path: Optional[str] = None
    fields: Tuple[ResolvedField, ...] = ()
    imports: Tuple[ImportEntry, ...] = ()
