"""Tests for mtt.loader."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mtt.config import ConfigError
from mtt.loader import ModelLoader


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_load_assigns_structure_groups_and_names(tmp_path: Path) -> None:
    _write(tmp_path / "user.cs", "public class User\n{\n    public int Age;\n}\n")
    _write(tmp_path / "people" / "PersonResource.cs", "public class PersonResource {}\n")
    _write(tmp_path / "orders" / "orderLine.cs", "public class OrderLine {}\n")

    models = ModelLoader(suffix="Resource").load(tmp_path)

    found = {(model.structure_group, model.name) for model in models}
    assert found == {("", "User"), ("people", "Person"), ("orders", "OrderLine")}

    user = next(model for model in models if model.name == "User")
    assert user.raw_lines == ["public class User", "{", "    public int Age;", "}"]
    assert user.source_path == (tmp_path / "user.cs").resolve()


def test_load_visits_groups_before_root_in_name_order(tmp_path: Path) -> None:
    _write(tmp_path / "a.cs", "")
    _write(tmp_path / "zeta" / "z.cs", "")
    _write(tmp_path / "alpha" / "b.cs", "")

    models = ModelLoader().load(tmp_path)

    assert [(model.structure_group, model.name) for model in models] == [
        ("alpha", "B"),
        ("zeta", "Z"),
        ("", "A"),
    ]


def test_load_ignores_nested_directories_hidden_files_and_other_extensions(tmp_path: Path) -> None:
    _write(tmp_path / "group" / "deeper" / "hidden.cs", "")
    _write(tmp_path / ".git" / "config.cs", "")
    _write(tmp_path / ".DS_Store", "")
    _write(tmp_path / "notes.md", "# notes\n")
    _write(tmp_path / "group" / "kept.cs", "")

    models = ModelLoader(source_extensions=[".cs"]).load(tmp_path)

    assert [(model.structure_group, model.name) for model in models] == [("group", "Kept")]


def test_load_skips_excluded_directory(tmp_path: Path) -> None:
    _write(tmp_path / "out" / "user.ts", "export interface User {}\n")
    _write(tmp_path / "user.cs", "")

    models = ModelLoader(exclude=[tmp_path / "out"]).load(tmp_path)

    assert [model.name for model in models] == ["User"]


def test_load_tolerates_byte_order_mark(tmp_path: Path) -> None:
    (tmp_path / "user.cs").write_bytes("\ufeffpublic class User\n".encode("utf-8"))

    models = ModelLoader().load(tmp_path)

    assert models[0].raw_lines == ["public class User"]


def test_load_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(ConfigError) as excinfo:
        ModelLoader().load(missing)
    assert str(missing) in str(excinfo.value)


def test_load_rejects_file_as_root(tmp_path: Path) -> None:
    file_path = tmp_path / "user.cs"
    _write(file_path, "")
    with pytest.raises(ConfigError):
        ModelLoader().load(file_path)


def test_load_replaces_undecodable_bytes_and_warns(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("mtt"), "propagate", True)
    (tmp_path / "order.cs").write_bytes(b"// caf\xe9\npublic int Id;\n")
    _write(tmp_path / "user.cs", "public int Age;\n")

    with caplog.at_level(logging.WARNING, logger="mtt"):
        models = ModelLoader().load(tmp_path)

    order = next(model for model in models if model.name == "Order")
    assert order.raw_lines == ["// caf\ufffd", "public int Id;"]
    assert [model.name for model in models] == ["Order", "User"]
    assert "order.cs is not valid UTF-8" in caplog.text


def test_load_reports_unreadable_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path / "broken.cs", "public int Id;\n")

    def failing_read_bytes(self: Path) -> bytes:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_bytes", failing_read_bytes)

    with pytest.raises(ConfigError) as excinfo:
        ModelLoader().load(tmp_path)
    assert "broken.cs" in str(excinfo.value)


def test_load_skips_ignored_extensions(tmp_path: Path) -> None:
    _write(tmp_path / "user.txt", "public int Age;\n")
    _write(tmp_path / "user.ts", "export interface User {}\n")
    _write(tmp_path / "people" / "person.TS", "")

    models = ModelLoader(ignore_extensions=[".ts"]).load(tmp_path)

    assert [model.source_path.name for model in models] == ["user.txt"]
