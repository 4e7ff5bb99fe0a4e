"""
IndexCommand — Build process descriptors and show their references
"""

from typing import Any, Dict, List

from ..core.errors import ProcIndexError
from ..core.index import ProcessIndex
from ..core.model import sorted_refs
from ..output import OutputSpec, VALID_FORMATS
from .base import BaseCommand


class IndexCommand(BaseCommand):
    """Index one or more process descriptors."""

    def index(self, paths: List[str], format: str = None) -> int:
        """
        Build every descriptor and print the references it produced.

        Returns:
            Process exit code
        """
        processes = self.load_processes(paths)
        if processes is None:
            return 1

        try:
            indexes = self.pipeline.build_many(processes)
        except ProcIndexError as e:
            self.error(str(e))
            return 1

        fmt = format or self.config.display.format
        if fmt == "json":
            self.emit(OutputSpec(data=[i.to_dict() for i in indexes], shape="json"), fmt)
            return 0

        for index in indexes:
            self.emit(self.reference_table(index), fmt)
        return 0

    def reference_table(self, index: ProcessIndex) -> OutputSpec:
        rows = reference_rows(index)
        counts = ", ".join([
            self._count(len(index.parts), "part"),
            self._count(len(index.shared_references), "shared reference"),
            self._count(len(index.resource_references), "resource reference"),
        ])
        title = f"{index.process_id}"
        if index.process_name:
            title += f" ({index.process_name})"
        return OutputSpec(
            data={"rows": rows, "summary": counts},
            shape="table",
            title=title,
            columns=["Kind", "Type", "Name"],
            column_keys=["kind", "type", "name"],
        )

    def _count(self, count: int, noun: str) -> str:
        return f"{count} {noun}" + ("" if count == 1 else "s")


def reference_rows(index: ProcessIndex) -> List[Dict[str, Any]]:
    """Flatten an index into (kind, type, name) rows."""
    rows = []
    for part in sorted_refs(index.parts):
        rows.append({"kind": "part", "type": part.part_type.value, "name": part.name})
    for ref in sorted_refs(index.shared_references):
        rows.append({"kind": "shared", "type": ref.part_type.value, "name": ref.name})
    for ref in sorted_refs(index.resource_references):
        rows.append({"kind": "resource", "type": ref.resource_type.value, "name": ref.name})
    return rows


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'index'


def register_parser(subparsers):
    """Register index command parser."""
    p = subparsers.add_parser('index', help='Index process descriptors and show their references')
    p.add_argument('files', nargs='+', help='Process descriptors (.yaml, .yml, .json)')
    p.add_argument('--format', '-f', choices=VALID_FORMATS,
                   help='Output format (default: display.format)')
    return p


def handle(cli, args):
    """Handle index command dispatch."""
    fmt = None if args.format in (None, "auto") else args.format
    return IndexCommand(cli).index(args.files, format=fmt)
