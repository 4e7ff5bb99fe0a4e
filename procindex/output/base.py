"""
BaseRenderer — Abstract base class for output renderers

All renderers inherit from this class and implement render().
Provides terminal width, truncation and value formatting.
"""

import shutil
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..presentation.symbols import SymbolSet
    from . import OutputSpec


class BaseRenderer(ABC):
    """
    Abstract base class for all output renderers.

    Subclasses must implement render() method.
    """

    def __init__(
        self,
        symbols: "SymbolSet" = None,
        width: int = None,
        full: bool = False,
    ):
        """
        Initialize renderer.

        Args:
            symbols: SymbolSet for visual elements (auto-detect if None)
            width: Terminal width (auto-detect if None)
            full: If True, don't truncate content
        """
        from ..presentation.symbols import get_symbols

        self.symbols = symbols or get_symbols()
        self.width = width or shutil.get_terminal_size().columns
        self.full = full

    @abstractmethod
    def render(self, spec: "OutputSpec") -> str:
        """Render OutputSpec to formatted string."""

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def truncate(self, text: str, length: int = None) -> str:
        """Truncate text with ellipsis, respecting full mode."""
        if not text:
            return ""
        if self.full:
            return text
        if length is None:
            length = max(20, self.width - 10)
        if len(text) <= length:
            return text

        ellipsis = self.symbols.ellipsis
        if length <= len(ellipsis):
            return text[:length]
        return text[:length - len(ellipsis)] + ellipsis

    def safe_str(self, value) -> str:
        """Convert value to string, handling None and enums."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
