"""
CLI — Command interface for the process reference indexer

    procindex index order.yaml shipping.yaml
    procindex impact com.acme.Order processes/*.yaml
    procindex config --set resolver.base_package=java.lang
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .core.registry import IndexRegistry
from .pipeline import BuildPipeline
from .presentation.symbols import get_symbols
from . import __version__


class IndexerCLI:
    """Resources shared by every command: configuration, symbols, pipeline."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self.symbols = get_symbols(self.config.display.symbols)
        self.pipeline = BuildPipeline(self.config, IndexRegistry())


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the procindex CLI.

    Parser definitions and dispatch logic are in individual command modules.
    """
    parser = argparse.ArgumentParser(
        prog="procindex",
        description="procindex -- process reference indexer",
    )
    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("PROCINDEX_PROJECT_PATH", "."),
        help='Project directory (default: PROCINDEX_PROJECT_PATH or current)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log debug output to stderr'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'procindex {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all, dispatch
    register_all(subparsers)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cli = IndexerCLI(Path(args.project))
    error = cli.config.validate()
    if error:
        print(f"Error: invalid configuration: {error}", file=sys.stderr)
        return 2

    configure_logging("DEBUG" if args.verbose else cli.config.logging.level)

    try:
        return dispatch(args.command, cli, args) or 0
    except KeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help()
        return 2


if __name__ == '__main__':
    sys.exit(main())
