"""CLI entrypoints for mtt commands."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import ConfigError, ConvertConfig, load_config
from .converter import Converter
from .emit import OutputWriteError
from .extractor import MalformedDeclarationError
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mtt",
        description="Generate TypeScript interfaces from C# model classes.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors on the console.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert every model in the working directory into an interface file.",
    )
    _add_verbose_option(convert_parser, suppress_default=True)
    convert_parser.add_argument(
        "--config",
        default=".",
        help="Path to .mtt.yml or the directory holding it (defaults to current directory).",
    )
    convert_parser.add_argument(
        "--working-dir",
        help="Directory containing the model sources (overrides working_directory).",
    )
    convert_parser.add_argument(
        "--convert-dir",
        help="Directory receiving the generated interfaces (overrides convert_directory).",
    )
    convert_parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Omit the auto-generated comment at the top of each file.",
    )
    convert_parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on malformed declarations instead of skipping them.",
    )
    convert_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be generated without writing anything.",
    )
    convert_parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log output to this file.",
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> ConvertConfig:
    config = load_config(Path(args.config))
    overrides: dict[str, object] = {}
    if args.working_dir:
        overrides["working_directory"] = Path(args.working_dir).expanduser().resolve()
    if args.convert_dir:
        overrides["convert_directory"] = Path(args.convert_dir).expanduser().resolve()
    if args.no_banner:
        overrides["auto_generated_tag"] = False
    if args.strict:
        overrides["strict"] = True
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for mtt commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=getattr(args, "log_file", None),
    )

    if args.command == "convert":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            config = _resolve_config(args)
            summary = Converter(config).run(dry_run=dry_run)
        except ConfigError as exc:
            parser.exit(1, f"mtt convert failed: {exc}\n")
        except MalformedDeclarationError as exc:
            parser.exit(1, f"mtt convert failed: malformed declaration at {exc}\n")
        except OutputWriteError as exc:
            parser.exit(1, f"mtt convert failed: {exc}\n")

        target = _relativize(summary.convert_directory)
        if dry_run:
            print(f"Would generate {len(summary.paths)} interface(s) in {target} (dry-run):")
            for path in summary.paths:
                print(f"  {_relativize(path)}")
        else:
            print(f"Generated {len(summary.paths)} interface(s) in {target}")
        if summary.issues:
            print(f"Skipped {len(summary.issues)} malformed declaration(s); see the warnings above.")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
