"""Loads model source files from the working tree into memory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

from .config import ConfigError
from .logging import get_logger
from .models import ModelFile
from .naming import strip_suffix, to_pascal_case

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".vs",
    ".idea",
    "bin",
    "obj",
    "node_modules",
    "__pycache__",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


class ModelLoader:
    """Walks the working directory and one level of structure groups."""

    def __init__(
        self,
        *,
        source_extensions: Sequence[str] = (),
        suffix: str | None = None,
        exclude: Iterable[Path] = (),
        ignore_extensions: Sequence[str] = (),
    ) -> None:
        self.source_extensions = {ext.lower() for ext in source_extensions}
        self.ignore_extensions = {ext.lower() for ext in ignore_extensions if ext}
        self.suffix = suffix
        self.exclude = {Path(path).resolve() for path in exclude}
        self.logger = get_logger("loader")

    def load(self, root: Path | str) -> List[ModelFile]:
        """Return one model per source file, structure groups first."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise ConfigError(f"Working directory not found: {root}")
        if not root_path.is_dir():
            raise ConfigError(f"Working directory is not a directory: {root}")

        models: List[ModelFile] = []
        for path, group in self._iter_sources(root_path):
            models.append(self._load_file(path, group))

        self.logger.debug("Loaded %d model file(s) from %s", len(models), root_path)
        return models

    def model_name(self, path: Path) -> str:
        """Derive the interface name for a source file."""
        return to_pascal_case(strip_suffix(path.stem, self.suffix))

    def _iter_sources(self, root: Path) -> Iterator[Tuple[Path, str]]:
        try:
            entries = sorted(root.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise ConfigError(f"Working directory is not readable: {root} ({exc})") from exc

        directories = [entry for entry in entries if entry.is_dir()]
        files = [entry for entry in entries if entry.is_file()]

        for directory in directories:
            if self._skip_dir(directory):
                continue
            try:
                children = sorted(directory.iterdir(), key=lambda entry: entry.name)
            except OSError as exc:
                raise ConfigError(f"Structure directory is not readable: {directory} ({exc})") from exc
            for child in children:
                if child.is_dir():
                    self.logger.debug("Ignoring nested directory %s", child)
                    continue
                if self._accepts(child):
                    yield child, directory.name

        for path in files:
            if self._accepts(path):
                yield path, ""

    def _skip_dir(self, directory: Path) -> bool:
        if directory.name in _EXCLUDED_DIRS or directory.name.startswith("."):
            return True
        if directory.resolve() in self.exclude:
            self.logger.debug("Skipping excluded directory %s", directory)
            return True
        return False

    def _accepts(self, path: Path) -> bool:
        if path.name in _EXCLUDED_FILES or path.name.startswith("."):
            return False
        if self.source_extensions and path.suffix.lower() not in self.source_extensions:
            return False
        if self.ignore_extensions and path.name.lower().endswith(tuple(self.ignore_extensions)):
            self.logger.debug("Skipping generated file %s", path)
            return False
        return True

    def _load_file(self, path: Path, group: str) -> ModelFile:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ConfigError(f"Unable to read model file {path}: {exc}") from exc
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            self.logger.warning(
                "%s is not valid UTF-8 (%s at byte %d); undecodable bytes were replaced",
                path,
                exc.reason,
                exc.start,
            )
            text = data.decode("utf-8-sig", errors="replace")

        return ModelFile(
            name=self.model_name(path),
            structure_group=group,
            raw_lines=text.splitlines(),
            source_path=path,
        )


__all__ = ["ModelLoader"]
