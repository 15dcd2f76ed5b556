from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .demo import run_demo
from .errors import SettingsError
from .registry import ErrorPolicy, ListenerRegistry
from .settings import Settings
from .utils.logging import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="event-target",
        description="Run the ListenerRegistry demonstration",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a YAML settings file overriding the packaged defaults.",
    )
    parser.add_argument(
        "--error-policy",
        choices=[p.value for p in ErrorPolicy],
        default=None,
        help="How dispatch treats a failing listener (overrides settings).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser.parse_args(argv)


def _verbosity_level(verbosity: int) -> Optional[int]:
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    return None


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cli_level = _verbosity_level(args.verbose)
    # Provisional setup so settings loading is logged under -v
    configure_logging(level=cli_level if cli_level is not None else logging.WARNING)
    try:
        settings = Settings.load(user_path=args.settings_path)
    except SettingsError as exc:
        print(f"event-target: {exc}", file=sys.stderr)
        return 2

    configure_logging(level=cli_level if cli_level is not None else settings.log_level)

    policy = ErrorPolicy(args.error_policy) if args.error_policy else settings.error_policy
    run_demo(ListenerRegistry(error_policy=policy))
    return 0


if __name__ == "__main__":
    sys.exit(main())
