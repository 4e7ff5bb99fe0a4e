"""
Symbols — Box-drawing vocabulary for terminal output

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via display.symbols setting.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SymbolSet:
    """Characters used by the renderers."""
    check_pass: str
    check_fail: str

    # Table borders
    box_h: str       # horizontal ─ or -
    box_v: str       # vertical │ or |
    box_tl: str      # top-left ┌ or +
    box_tr: str      # top-right ┐ or +
    box_bl: str      # bottom-left └ or +
    box_br: str      # bottom-right ┘ or +
    box_cross: str   # cross ┼ or +
    box_t_down: str  # T down ┬ or +
    box_t_up: str    # T up ┴ or +
    box_t_right: str # T right ├ or +
    box_t_left: str  # T left ┤ or +

    ellipsis: str    # … or ...


UNICODE = SymbolSet(
    check_pass='✓',
    check_fail='✗',
    box_h='─',
    box_v='│',
    box_tl='┌',
    box_tr='┐',
    box_bl='└',
    box_br='┘',
    box_cross='┼',
    box_t_down='┬',
    box_t_up='┴',
    box_t_right='├',
    box_t_left='┤',
    ellipsis='…',
)

ASCII = SymbolSet(
    check_pass='[OK]',
    check_fail='[X]',
    box_h='-',
    box_v='|',
    box_tl='+',
    box_tr='+',
    box_bl='+',
    box_br='+',
    box_cross='+',
    box_t_down='+',
    box_t_up='+',
    box_t_right='+',
    box_t_left='+',
    ellipsis='...',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    """
    if os.environ.get('PROCINDEX_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False

    stdout_encoding = getattr(sys.stdout, 'encoding', None) or ''
    if 'utf' in stdout_encoding.lower():
        return True

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()
    return any(marker in value for value in (lang, lc_all) for marker in ('utf-8', 'utf8'))


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)

    Returns:
        Appropriate SymbolSet for the environment
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
