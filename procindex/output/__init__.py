"""
Output Module — View layer for the procindex CLI

Commands return OutputSpec, renderers handle display.

Usage:
    from procindex.output import OutputSpec, render

    spec = OutputSpec(data=rows, shape="table", columns=["Name", "Type"])
    print(render(spec, format="auto"))
"""

from dataclasses import dataclass
from typing import Any, Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet

from .base import BaseRenderer
from .table import TableRenderer
from .json import JsonRenderer


@dataclass
class OutputSpec:
    """
    Data envelope that commands return for rendering.

    Attributes:
        data: The actual data (list of rows, or dict with "rows")
        shape: Rendering hint - "table" | "json" | "auto"
        title: Optional section title
        columns: For tables - column headers in order
        column_keys: For tables - dict keys corresponding to columns
        empty_message: Message when data is empty
    """
    data: Any
    shape: str = "auto"
    title: Optional[str] = None
    columns: Optional[List[str]] = None
    column_keys: Optional[List[str]] = None
    empty_message: str = "No references."


# Maps format name to renderer class
RENDERERS = {
    "table": TableRenderer,
    "json": JsonRenderer,
}

# Valid format values for config/CLI
VALID_FORMATS = ("auto", "table", "json")


def get_renderer(format: str, symbols: "SymbolSet" = None, width: int = None, full: bool = False) -> BaseRenderer:
    """
    Get renderer instance for a format.

    Raises:
        ValueError: If format is invalid
    """
    if format not in RENDERERS:
        valid = ", ".join(RENDERERS.keys())
        raise ValueError(f"Unknown format '{format}'. Valid: {valid}")
    return RENDERERS[format](symbols=symbols, width=width, full=full)


def render(
    spec: OutputSpec,
    format: str = "auto",
    symbols: "SymbolSet" = None,
    width: int = None,
    full: bool = False
) -> str:
    """
    Render OutputSpec to formatted string.

    "auto" uses the OutputSpec shape hint, falling back to a table.
    """
    if format == "auto":
        format = spec.shape if spec.shape in RENDERERS else "table"
    return get_renderer(format, symbols, width, full).render(spec)


__all__ = [
    'OutputSpec', 'render', 'get_renderer', 'RENDERERS', 'VALID_FORMATS',
    'BaseRenderer', 'TableRenderer', 'JsonRenderer',
]
