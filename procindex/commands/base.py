"""
BaseCommand — Shared foundation for all CLI commands

Commands receive the CLI instance and access its resources through properties.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from ..core.errors import ProcIndexError
from ..core.process import ProcessDefinition
from ..documents import load_process
from ..output import OutputSpec, render

if TYPE_CHECKING:
    from ..cli import IndexerCLI


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Commands don't reinitialize resources; they access them via the CLI instance.
    """

    def __init__(self, cli: 'IndexerCLI'):
        self._cli = cli

    # -------------------------------------------------------------------------
    # Core resources (convenience properties)
    # -------------------------------------------------------------------------

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def pipeline(self):
        """Build pipeline (owns the index registry)."""
        return self._cli.pipeline

    @property
    def registry(self):
        return self._cli.pipeline.registry

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def load_processes(self, paths: List[str]) -> Optional[List[ProcessDefinition]]:
        """Load descriptors, reporting the first failure. None on error."""
        processes = []
        for path in paths:
            try:
                processes.append(load_process(Path(path)))
            except ProcIndexError as e:
                self.error(str(e))
                return None
        return processes

    def emit(self, spec: OutputSpec, format: Optional[str] = None) -> None:
        fmt = format or self.config.display.format
        print(render(spec, format=fmt, symbols=self.symbols))

    def error(self, message: str) -> None:
        print(f"{self.symbols.check_fail} Error: {message}", file=sys.stderr)
