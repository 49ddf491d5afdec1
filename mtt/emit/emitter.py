"""Renders resolved models to TypeScript interfaces and writes them to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader

from ..constants import DEFAULT_BANNER
from ..logging import get_logger
from ..models import ResolvedField, ResolvedModel
from ..naming import to_camel_case

_TEMPLATE_NAME = "interface.ts.j2"


class OutputWriteError(RuntimeError):
    """Raised when an interface file or its directory cannot be written."""

    def __init__(self, path: Path, written: Sequence[Path], cause: OSError) -> None:
        self.path = path
        self.written = list(written)
        message = f"Failed to write {path}: {cause}"
        if self.written:
            message += f" ({len(self.written)} file(s) written before the failure were kept)"
        super().__init__(message)


class InterfaceEmitter:
    """Turns resolved models into one ``export interface`` file each."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        banner: str | None = DEFAULT_BANNER,
        indent: str = "\t",
        extension: str = ".ts",
    ) -> None:
        self.templates_dir = templates_dir
        self.banner = banner
        self.indent = indent
        self.extension = extension
        self.logger = get_logger("emitter")
        self._env = self._create_env(templates_dir)

    def file_name(self, model: ResolvedModel) -> str:
        return f"{to_camel_case(model.name)}{self.extension}"

    def output_path(self, model: ResolvedModel, convert_root: Path) -> Path:
        """Return ``<convert_root>/<structure group>/<camelName><ext>``."""
        directory = convert_root / model.structure_group if model.structure_group else convert_root
        return directory / self.file_name(model)

    def render(self, model: ResolvedModel) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        rendered = template.render(
            banner=self.banner,
            imports=model.imports,
            name=model.name,
            base_type_name=model.base_type_name,
            indent=self.indent,
            fields=[self._field_view(field) for field in model.fields],
        )
        return rendered.rstrip() + "\n"

    def write_all(self, models: Iterable[ResolvedModel], convert_root: Path) -> List[Path]:
        """Write every model, aborting the batch on the first I/O failure."""
        written: List[Path] = []
        for model in models:
            path = self.output_path(model, convert_root)
            content = self.render(model)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8", newline="\n")
            except OSError as exc:
                raise OutputWriteError(path, written, exc) from exc
            self.logger.info("Creating file %s", path)
            written.append(path)
        return written

    @staticmethod
    def _field_view(field: ResolvedField) -> Dict[str, str]:
        suffix = "[]" if field.is_array else ""
        return {
            "member_name": to_camel_case(field.variable_name),
            "type_expression": f"{field.resolved_type}{suffix}",
        }

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )


__all__ = ["InterfaceEmitter", "OutputWriteError"]
