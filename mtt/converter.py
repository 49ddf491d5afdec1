"""Pipeline orchestration: load, extract, resolve and emit a batch of models."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ConfigError, ConvertConfig
from .emit import InterfaceEmitter
from .extractor import DeclarationExtractor, ExtractionIssue
from .loader import ModelLoader
from .logging import get_logger
from .models import ResolvedModel
from .resolver import ReferenceResolver, build_type_map


@dataclass
class ConversionSummary:
    """Outcome of a conversion run."""

    convert_directory: Path
    models: List[ResolvedModel] = field(default_factory=list)
    paths: List[Path] = field(default_factory=list)
    issues: List[ExtractionIssue] = field(default_factory=list)
    dry_run: bool = False


class Converter:
    """Coordinates the conversion pipeline for one working directory.

    Every model is loaded and extracted before any reference is resolved,
    since a field can point at a model that is read later in the walk.
    """

    def __init__(
        self,
        config: ConvertConfig,
        *,
        loader: ModelLoader | None = None,
        extractor: DeclarationExtractor | None = None,
        resolver: ReferenceResolver | None = None,
        emitter: InterfaceEmitter | None = None,
    ) -> None:
        self.config = config
        writes_into_sources = config.convert_directory.resolve() == config.working_directory.resolve()
        self.loader = loader or ModelLoader(
            source_extensions=config.source_extensions,
            suffix=config.strip_suffix,
            exclude=[config.convert_directory],
            ignore_extensions=[config.target_extension] if writes_into_sources else (),
        )
        self.extractor = extractor or DeclarationExtractor(
            collection_markers=config.collection_markers,
            strict=config.strict,
        )
        self.resolver = resolver or ReferenceResolver(
            type_map=build_type_map(map_dates=config.map_dates, overrides=config.type_overrides),
            retry_suffix=config.strip_suffix if config.match_stripped_suffix else None,
        )
        self.emitter = emitter or InterfaceEmitter(
            config.templates_dir,
            banner=config.banner if config.auto_generated_tag else None,
            indent=config.indent,
            extension=config.target_extension,
        )
        self.logger = get_logger("converter")

    def run(self, *, dry_run: bool = False) -> ConversionSummary:
        """Convert the working directory; nothing is written when ``dry_run`` is set."""
        working = self._prepare_working_directory(dry_run=dry_run)
        convert = self.config.convert_directory

        models = self.loader.load(working)
        self.logger.info("Loaded %d model(s) from %s", len(models), working)

        extraction = self.extractor.extract_all(models)
        if extraction.issues:
            self.logger.warning("Skipped %d malformed declaration(s)", len(extraction.issues))

        resolved = self.resolver.resolve_all(extraction.definitions)
        summary = ConversionSummary(
            convert_directory=convert,
            models=resolved,
            issues=extraction.issues,
            dry_run=dry_run,
        )

        if dry_run:
            summary.paths = [self.emitter.output_path(model, convert) for model in resolved]
            return summary

        self._prepare_convert_directory()
        self.logger.info("Converting..")
        summary.paths = self.emitter.write_all(resolved, convert)
        return summary

    def _prepare_working_directory(self, *, dry_run: bool) -> Path:
        working = self.config.working_directory
        if working.exists():
            if not working.is_dir():
                raise ConfigError(f"Working directory is not a directory: {working}")
            self.logger.info("Using working directory %s", working)
            return working
        if not self.config.create_working_directory or dry_run:
            raise ConfigError(f"Working directory not found: {working}")
        self.logger.warning("Working directory %s does not exist, creating an empty one", working)
        try:
            working.mkdir(parents=True)
        except OSError as exc:
            raise ConfigError(f"Unable to create working directory {working}: {exc}") from exc
        return working

    def _prepare_convert_directory(self) -> None:
        convert = self.config.convert_directory
        if convert.exists() and not convert.is_dir():
            raise ConfigError(f"Convert directory is not a directory: {convert}")

        if convert.exists() and self.config.clean_convert_directory:
            if self._is_unsafe_to_clear(convert):
                self.logger.warning(
                    "Not clearing convert directory %s because it holds the sources or configuration",
                    convert,
                )
            else:
                self.logger.info("Clearing convert directory %s", convert)
                try:
                    shutil.rmtree(convert)
                except OSError as exc:
                    raise ConfigError(f"Unable to clear convert directory {convert}: {exc}") from exc

        try:
            convert.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"Unable to create convert directory {convert}: {exc}") from exc
        self.logger.info("Using convert directory %s", convert)

    def _is_unsafe_to_clear(self, convert: Path) -> bool:
        convert = convert.resolve()
        protected = (
            self.config.working_directory.resolve(),
            self.config.root.resolve(),
            Path.cwd().resolve(),
        )
        return any(path == convert or convert in path.parents for path in protected)


__all__ = ["ConversionSummary", "Converter"]
