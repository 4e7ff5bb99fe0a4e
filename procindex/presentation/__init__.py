"""Presentation helpers shared by the CLI renderers."""

from .symbols import SymbolSet, UNICODE, ASCII, get_symbols

__all__ = ['SymbolSet', 'UNICODE', 'ASCII', 'get_symbols']
