"""CLI entrypoints for docsite commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .collection import DocletCollection, DocletSourceError
from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .tutorials import load_tutorials


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands suppress their defaults so a flag given before the command survives.
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Log every page written and every link replaced.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsite",
        description="Render documentation records into a cross-linked static HTML site.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Render a doclet JSON dump into HTML pages.",
    )
    _add_verbosity_options(build_parser, suppress_default=True)
    build_parser.add_argument(
        "doclets",
        help="Path to a JSON file holding a list of doclet records.",
    )
    build_parser.add_argument(
        "-d",
        "--destination",
        default=None,
        help="Output directory (defaults to opts.destination or ./out).",
    )
    build_parser.add_argument(
        "-c",
        "--config",
        default=".",
        help="Path to .docsite.yml or the directory holding it (defaults to current directory).",
    )
    build_parser.add_argument(
        "-t",
        "--tutorials",
        default=None,
        help="Directory of tutorial pages.",
    )
    build_parser.add_argument(
        "-p",
        "--private",
        action="store_true",
        help="Include symbols marked private.",
    )
    build_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docsite commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    warnings = configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(log_file) if log_file else None,
    )

    if args.command == "build":
        try:
            config = load_config(Path(args.config))
            if args.private:
                config.options.include_private = True
            collection = DocletCollection.from_json(Path(args.doclets))
            tutorials_dir = Path(args.tutorials) if args.tutorials else config.options.tutorials
            tutorials = load_tutorials(tutorials_dir)
            destination = Path(args.destination) if args.destination else None
            result = Orchestrator(config).render(collection, tutorials, destination)
        except (ConfigError, DocletSourceError) as exc:
            parser.exit(1, f"{exc}\n")
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"docsite build failed: {exc}\nRun with --verbose for more details.\n")
        summary = f"Wrote {len(result.files)} files to {_relativize(result.destination)}"
        if warnings.count:
            summary += f" ({warnings.count} warnings)"
        print(summary)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
