"""CLI entrypoints for docsite commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import ConfigError, TemplateError
from .logging import configure_logging
from .orchestrator import Orchestrator

EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


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
        prog="docsite",
        description="Publish a tree of package and global docs as a navigable HTML site.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Convert the documentation source tree into HTML.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "input_path",
        nargs="?",
        default=".",
        help="Root of the documentation sources (defaults to current directory).",
    )
    build_parser.add_argument(
        "output_path",
        nargs="?",
        default=None,
        help="Directory to write the site into (defaults to <input>_site next to the input).",
    )
    build_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip files or folders matching GLOB (repeatable; * stays in a segment, ** spans segments).",
    )
    build_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .docsite.yml file (defaults to one in the input root).",
    )
    build_parser.add_argument(
        "--template",
        default=None,
        help="Jinja2 HTML template used for every page.",
    )
    build_parser.add_argument(
        "--base-url",
        default=None,
        help="URL prefix for links in the navigation tree (defaults to /).",
    )
    build_parser.add_argument(
        "--allow-failures",
        action="store_true",
        help="Exit successfully even if some files could not be published.",
    )
    build_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsite commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(getattr(args, "quiet", False)),
        log_file=args.log_file,
    )

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            options = orchestrator.resolve_options(
                args.input_path,
                args.output_path,
                config_path=args.config,
                template_path=args.template,
                excludes=args.exclude,
                base_url=args.base_url,
            )
            report = orchestrator.run_build(options)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(EXIT_FATAL, f"{exc}\n")
        except (ConfigError, TemplateError) as exc:
            parser.exit(EXIT_FATAL, f"docsite build failed: {exc}\n")
        except Exception as exc:  # pragma: no cover
            parser.exit(
                EXIT_FATAL, f"docsite build failed: {exc}\nRun with --verbose for more details.\n"
            )

        print(
            f"Built {len(report.pages)} pages and {len(report.images)} images "
            f"into {_relativize(report.output_root)} "
            f"({len(report.skipped)} skipped, {len(report.failures)} failed)"
        )
        if report.failures:
            for failure in report.failures:
                print(f"  failed: {failure.describe()}", file=sys.stderr)
            if not args.allow_failures:
                parser.exit(EXIT_PARTIAL_FAILURE)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(EXIT_FATAL, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
