"""Resolves field and base types against the full batch of extracted models."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .constants import DATE_TYPES, PRIMITIVE_TYPES, UNKNOWN_TYPE
from .logging import get_logger
from .models import (
    FieldDeclaration,
    ImportEntry,
    ModelDefinition,
    ResolvedField,
    ResolvedModel,
)
from .naming import strip_suffix, to_camel_case


def build_type_map(
    *, map_dates: bool = True, overrides: Mapping[str, str] | None = None
) -> Mapping[str, str]:
    """Return the read-only primitive table used for types that name no model."""
    table: Dict[str, str] = dict(PRIMITIVE_TYPES)
    if map_dates:
        table.update(DATE_TYPES)
    if overrides:
        table.update(overrides)
    return MappingProxyType(table)


DEFAULT_TYPE_MAP = build_type_map()


def map_primitive(type_name: str, type_map: Mapping[str, str] = DEFAULT_TYPE_MAP) -> str:
    return type_map.get(type_name, UNKNOWN_TYPE)


def relative_import_path(from_group: str, to_group: str, target_name: str) -> str:
    """Compute the module path of ``target_name`` as seen from ``from_group``.

    Structure groups are at most one level deep, so the only cases are the
    same directory, root into a group, a group up to the root, and sibling
    groups.
    """
    module = to_camel_case(target_name)
    if from_group == to_group:
        return f"./{module}"
    if not from_group:
        return f"./{to_group}/{module}"
    if not to_group:
        return f"../{module}"
    return f"../{to_group}/{module}"


class ModelIndex:
    """Immutable snapshot of every extracted model, looked up by name.

    Lookups are case-sensitive and the first model loaded under a name wins.
    """

    def __init__(
        self, definitions: Iterable[ModelDefinition], *, retry_suffix: str | None = None
    ) -> None:
        self._definitions: Tuple[ModelDefinition, ...] = tuple(definitions)
        self._retry_suffix = retry_suffix

        by_name: Dict[str, ModelDefinition] = {}
        duplicates: Dict[str, List[ModelDefinition]] = {}
        for definition in self._definitions:
            first = by_name.setdefault(definition.name, definition)
            if first is not definition:
                duplicates.setdefault(definition.name, [first]).append(definition)
        self._by_name: Mapping[str, ModelDefinition] = MappingProxyType(by_name)
        self.duplicates: Mapping[str, Tuple[ModelDefinition, ...]] = MappingProxyType(
            {name: tuple(entries) for name, entries in duplicates.items()}
        )

    def find(self, query: str) -> Optional[ModelDefinition]:
        """Return the model named exactly ``query``.

        When the index was built with ``retry_suffix``, a miss is retried with
        that suffix removed from ``query``.
        """
        if not query:
            return None
        found = self._by_name.get(query)
        if found is None and self._retry_suffix:
            stripped = strip_suffix(query, self._retry_suffix)
            if stripped != query:
                found = self._by_name.get(stripped)
        return found

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[ModelDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


class ReferenceResolver:
    """Maps every field and base type to a model reference or a primitive."""

    def __init__(
        self,
        *,
        type_map: Mapping[str, str] = DEFAULT_TYPE_MAP,
        retry_suffix: str | None = None,
    ) -> None:
        self.type_map = type_map
        self.retry_suffix = retry_suffix
        self.logger = get_logger("resolver")

    def build_index(self, definitions: Iterable[ModelDefinition]) -> ModelIndex:
        index = ModelIndex(definitions, retry_suffix=self.retry_suffix)
        for name, entries in index.duplicates.items():
            locations = ", ".join(str(entry.source_path) for entry in entries)
            self.logger.warning(
                "Model name %s is defined %d times (%s); references resolve to the first",
                name,
                len(entries),
                locations,
            )
        return index

    def resolve_all(self, definitions: Iterable[ModelDefinition]) -> List[ResolvedModel]:
        """Resolve a complete batch. Callers must pass every extracted model at once."""
        index = self.build_index(definitions)
        return [self.resolve(definition, index) for definition in index]

    def resolve(self, definition: ModelDefinition, index: ModelIndex) -> ResolvedModel:
        imports: List[ImportEntry] = []

        base_type_name: Optional[str] = None
        base_import_path: Optional[str] = None
        if definition.base_type_name:
            target = index.find(definition.base_type_name)
            if target is None:
                self.logger.debug(
                    "%s: base type %s is not a known model; omitting extends",
                    definition.name,
                    definition.base_type_name,
                )
            elif _same_model(definition, target):
                self.logger.debug("%s: ignoring self inheritance", definition.name)
            else:
                base_type_name = target.name
                base_import_path = relative_import_path(
                    definition.structure_group, target.structure_group, target.name
                )
                imports.append(ImportEntry(symbol=base_type_name, path=base_import_path))

        own_path = relative_import_path(
            definition.structure_group, definition.structure_group, definition.name
        )
        fields: List[ResolvedField] = []
        for declaration in definition.fields:
            resolved = self.resolve_field(definition, declaration, index)
            fields.append(resolved)
            if resolved.import_path is None:
                continue
            if resolved.resolved_type == definition.name and resolved.import_path == own_path:
                continue
            imports.append(ImportEntry(symbol=resolved.resolved_type, path=resolved.import_path))

        return ResolvedModel(
            name=definition.name,
            structure_group=definition.structure_group,
            source_path=definition.source_path,
            base_type_name=base_type_name,
            base_import_path=base_import_path,
            fields=tuple(fields),
            imports=tuple(dict.fromkeys(imports)),
        )

    def resolve_field(
        self, owner: ModelDefinition, declaration: FieldDeclaration, index: ModelIndex
    ) -> ResolvedField:
        target = index.find(declaration.cleaned_type_name)
        if target is None:
            return ResolvedField(
                variable_name=declaration.variable_name,
                declared_type_name=declaration.declared_type_name,
                is_array=declaration.is_array,
                is_user_defined=False,
                resolved_type=map_primitive(declaration.cleaned_type_name, self.type_map),
            )
        return ResolvedField(
            variable_name=declaration.variable_name,
            declared_type_name=declaration.declared_type_name,
            is_array=declaration.is_array,
            is_user_defined=True,
            resolved_type=target.name,
            import_path=relative_import_path(
                owner.structure_group, target.structure_group, target.name
            ),
        )


def _same_model(left: ModelDefinition, right: ModelDefinition) -> bool:
    return left.name == right.name and left.structure_group == right.structure_group


__all__ = [
    "DEFAULT_TYPE_MAP",
    "ModelIndex",
    "ReferenceResolver",
    "build_type_map",
    "map_primitive",
    "relative_import_path",
]
