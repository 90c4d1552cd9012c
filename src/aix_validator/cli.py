"""Test `.aix` source packages to see if they're ready for publishing."""

from __future__ import annotations

import argparse
import glob
import logging
import sys
from pathlib import Path
from collections.abc import Iterable

from .config import load_settings
from .core import verify_packages
from .errors import ConfigError, SchemaLoadError
from .report import ConsoleReporter

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def expand_globs(patterns: Iterable[str]) -> list[str]:
    """Expand shell-style patterns, keeping unmatched patterns as literal paths.

    Paths matched by more than one pattern are returned once, in first-seen order.

    Unmatched patterns are kept so that a missing archive is reported as a
    failure instead of being silently dropped.
    """
    paths: list[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True))
        paths.extend(matches or [pattern])
    return list(dict.fromkeys(paths))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="aix-validator", description=__doc__)
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILES",
        help="Package archives or glob patterns (e.g. 'dist/*.aix')",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON settings file (default: $AIX_VALIDATOR_CONFIG)",
    )
    parser.add_argument(
        "--strict-dimensions",
        action="store_true",
        default=None,
        help="Fail icons where either side differs from the required size",
    )
    parser.add_argument(
        "--schemas",
        dest="schema_source",
        default=None,
        help="Directory or URL holding replacement descriptor schemas",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = load_settings(args.config).with_overrides(
            strict_icon_dimensions=args.strict_dimensions,
            schema_source=args.schema_source,
        )
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = verify_packages(
            expand_globs(args.files),
            settings=settings,
            reporter=ConsoleReporter(),
        )
    except SchemaLoadError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if result.failed:
        print("ERROR: one or more packages failed validation, see above", file=sys.stderr)
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
