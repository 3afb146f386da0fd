"""CLI entry point for kanpad."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="kanpad",
        description="Personal kanban board with quick todos and notes",
    )
    parser.add_argument(
        "--data-root",
        type=Path,
        default=None,
        help="Directory for kanpad data (default: .kanpad)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Write a default kanpad.yml into the data directory and exit",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Create default labels and the empty note, then exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge CLI flags over environment/default settings."""
    settings_kwargs: dict = {}
    if args.data_root:
        settings_kwargs["data_root"] = args.data_root
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.data_root))

    if args.seed:
        from .cli.seed import run_seed

        raise SystemExit(run_seed(settings.data_root))

    # Import here so the CLI commands don't pay for loading Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
