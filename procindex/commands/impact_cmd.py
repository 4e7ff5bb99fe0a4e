"""
ImpactCommand — Which processes would be affected by changing a name

Builds the given descriptors into the registry, then lists every
process whose parts or references mention the name (a class, a
signal, a global, a sub-process id, ...).
"""

from typing import List

from ..core.errors import ProcIndexError
from ..output import OutputSpec, VALID_FORMATS
from .base import BaseCommand


class ImpactCommand(BaseCommand):

    def impact(self, name: str, paths: List[str], format: str = None) -> int:
        processes = self.load_processes(paths)
        if processes is None:
            return 1

        try:
            self.pipeline.build_many(processes)
        except ProcIndexError as e:
            self.error(str(e))
            return 1

        rows = []
        for index in self.registry.impact(name):
            kinds = sorted(
                {f"part:{p.part_type.value}" for p in index.parts if p.name == name}
                | {f"shared:{r.part_type.value}" for r in index.shared_references if r.name == name}
                | {f"resource:{r.resource_type.value}" for r in index.resource_references if r.name == name}
            )
            rows.append({
                "process_id": index.process_id,
                "process_name": index.process_name,
                "via": ", ".join(kinds),
            })

        self.emit(OutputSpec(
            data={"rows": rows, "summary": f"{len(rows)} of {len(self.registry)} processes reference '{name}'"},
            shape="table",
            title=f"Impact of '{name}'",
            columns=["Process", "Name", "Via"],
            column_keys=["process_id", "process_name", "via"],
            empty_message=f"No process references '{name}'.",
        ), format)
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'impact'


def register_parser(subparsers):
    """Register impact command parser."""
    p = subparsers.add_parser('impact', help='List processes referencing a name')
    p.add_argument('name', help='Class, signal, global, task or process name')
    p.add_argument('files', nargs='+', help='Process descriptors (.yaml, .yml, .json)')
    p.add_argument('--format', '-f', choices=VALID_FORMATS,
                   help='Output format (default: display.format)')
    return p


def handle(cli, args):
    """Handle impact command dispatch."""
    fmt = None if args.format in (None, "auto") else args.format
    return ImpactCommand(cli).impact(args.name, args.files, format=fmt)
