"""Tests for mtt.emit."""

from __future__ import annotations

from pathlib import Path

import pytest

from mtt.emit import InterfaceEmitter, OutputWriteError
from mtt.models import ImportEntry, ResolvedField, ResolvedModel


def _field(name: str, type_name: str, *, is_array: bool = False, path: str | None = None) -> ResolvedField:
    return ResolvedField(
        variable_name=name,
        declared_type_name=type_name,
        is_array=is_array,
        is_user_defined=path is not None,
        resolved_type=type_name,
        import_path=path,
    )


def _model(name: str = "User", group: str = "", *fields: ResolvedField, **kwargs) -> ResolvedModel:
    return ResolvedModel(
        name=name,
        structure_group=group,
        source_path=Path(f"{name}.cs"),
        fields=tuple(fields),
        **kwargs,
    )


def test_render_plain_interface_without_banner() -> None:
    emitter = InterfaceEmitter(banner=None)
    model = _model("User", "", _field("Age", "number"), _field("Name", "string"))

    assert emitter.render(model) == (
        "export interface User {\n"
        "\tage: number;\n"
        "\tname: string;\n"
        "}\n"
    )


def test_render_with_banner_imports_and_base() -> None:
    emitter = InterfaceEmitter()
    model = _model(
        "Child",
        "a",
        _field("Tags", "Tag", is_array=True, path="./tag"),
        base_type_name="Base",
        base_import_path="../b/base",
        imports=(
            ImportEntry(symbol="Base", path="../b/base"),
            ImportEntry(symbol="Tag", path="./tag"),
        ),
    )

    assert emitter.render(model) == (
        "/* Auto Generated */\n"
        "\n"
        'import { Base } from "../b/base";\n'
        'import { Tag } from "./tag";\n'
        "\n"
        "export interface Child extends Base {\n"
        "\ttags: Tag[];\n"
        "}\n"
    )


def test_render_empty_model_and_custom_indent() -> None:
    emitter = InterfaceEmitter(banner=None, indent="  ")

    assert emitter.render(_model("Marker")) == "export interface Marker {\n}\n"
    assert emitter.render(_model("Point", "", _field("X", "number"))) == (
        "export interface Point {\n  x: number;\n}\n"
    )


def test_render_camel_cases_member_names() -> None:
    emitter = InterfaceEmitter(banner=None)
    model = _model("Item", "", _field("ID", "number"), _field("SKUCode", "string"))

    rendered = emitter.render(model)

    assert "\tid: number;\n" in rendered
    assert "\tsKUCode: string;\n" in rendered


def test_output_path_follows_structure_group(tmp_path: Path) -> None:
    emitter = InterfaceEmitter(extension=".d.ts")

    assert emitter.output_path(_model("OrderLine", "sales"), tmp_path) == tmp_path / "sales" / "orderLine.d.ts"
    assert emitter.output_path(_model("SKU"), tmp_path) == tmp_path / "sku.d.ts"


def test_templates_dir_overrides_builtin_template(tmp_path: Path) -> None:
    (tmp_path / "interface.ts.j2").write_text(
        "export type {{ name }} = { {% for field in fields %}{{ field.member_name }}: {{ field.type_expression }}; {% endfor %}}\n",
        encoding="utf-8",
    )
    emitter = InterfaceEmitter(tmp_path)

    rendered = emitter.render(_model("User", "", _field("Age", "number")))

    assert rendered == "export type User = { age: number; }\n"


def test_write_all_creates_group_directories(tmp_path: Path) -> None:
    emitter = InterfaceEmitter(banner=None)
    models = [_model("User", "people", _field("Age", "number")), _model("Root")]

    written = emitter.write_all(models, tmp_path / "out")

    assert written == [tmp_path / "out" / "people" / "user.ts", tmp_path / "out" / "root.ts"]
    assert (tmp_path / "out" / "people" / "user.ts").read_text(encoding="utf-8").startswith(
        "export interface User {"
    )


def test_write_all_aborts_on_first_failure(tmp_path: Path) -> None:
    out = tmp_path / "out"
    out.mkdir()
    # A file where the group directory should go makes mkdir fail.
    (out / "people").write_text("not a directory", encoding="utf-8")
    emitter = InterfaceEmitter(banner=None)
    models = [_model("Root"), _model("User", "people"), _model("Later")]

    with pytest.raises(OutputWriteError) as excinfo:
        emitter.write_all(models, out)

    assert excinfo.value.path == out / "people" / "user.ts"
    assert excinfo.value.written == [out / "root.ts"]
    assert "1 file(s) written before the failure were kept" in str(excinfo.value)
    assert not (out / "later.ts").exists()
