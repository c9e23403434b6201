"""Entry point for drupal-require-core."""

import argparse
import sys

from . import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="drupal-require-core",
        description=(
            "Update every drupal/core-* requirement in composer.json to a new "
            "version, then run Composer and Drush to apply it."
        ),
    )
    parser.add_argument(
        "core_version",
        metavar="version",
        nargs="?",
        help="Drupal core version to require, e.g. 10.4",
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        help="Project directory holding composer.json (default: current directory)",
    )
    parser.add_argument(
        "prefix",
        nargs="?",
        default="",
        help='Prefix for every command, e.g. "lando" or "ddev"',
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show log messages on the console",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the commands without asking to run them",
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Run the commands without asking for confirmation",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for drupal-require-core."""
    args = build_parser().parse_args(argv)

    from .app import DrupalRequireCoreCLI

    cli = DrupalRequireCoreCLI(
        version=args.core_version,
        project_dir=args.project_dir,
        prefix=args.prefix,
        verbose=args.verbose,
        dry_run=args.dry_run,
        assume_yes=args.yes,
    )
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
