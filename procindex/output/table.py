"""
TableRenderer — Render reference rows as bordered tables

Supports:
- Unicode and ASCII borders
- Auto-sizing columns within the terminal width
- Content truncation with ellipsis
"""

from typing import TYPE_CHECKING, List, Dict

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class TableRenderer(BaseRenderer):
    """Render a list of dicts as a table."""

    def render(self, spec: "OutputSpec") -> str:
        """
        Render OutputSpec as a table.

        Expected data formats:
        - List of dicts: [{col1: val1, col2: val2}, ...]
        - Dict with "rows" key: {"rows": [...], "summary": "..."}
        """
        if isinstance(spec.data, list):
            rows = spec.data
            summary = None
        elif isinstance(spec.data, dict):
            rows = spec.data.get("rows") or []
            summary = spec.data.get("summary")
        else:
            rows, summary = [], None

        lines = []
        if spec.title:
            lines.append(spec.title)

        if not rows:
            lines.append(spec.empty_message)
        else:
            columns = spec.columns or self._infer_columns(rows)
            column_keys = spec.column_keys or list(rows[0].keys())
            widths = self._calculate_widths(rows, columns, column_keys)

            lines.append(self._separator(widths, "top"))
            lines.append(self._row(columns, widths))
            lines.append(self._separator(widths, "middle"))
            for row in rows:
                lines.append(self._row([self.safe_str(row.get(k, "")) for k in column_keys], widths))
            lines.append(self._separator(widths, "bottom"))

        if summary:
            lines.append(summary)
        return "\n".join(lines)

    def _infer_columns(self, rows: List[Dict]) -> List[str]:
        """Infer column headers from first row's keys."""
        return [k.replace("_", " ").title() for k in rows[0].keys()]

    def _calculate_widths(
        self,
        rows: List[Dict],
        columns: List[str],
        column_keys: List[str]
    ) -> List[int]:
        """Calculate column widths, scaled down to fit the terminal."""
        widths = [len(col) for col in columns]
        for row in rows:
            for i, key in enumerate(column_keys):
                if i < len(widths):
                    widths[i] = max(widths[i], len(self.safe_str(row.get(key, ""))))

        if self.full:
            return widths

        available = self.width - (len(widths) + 1)
        total_width = sum(widths)
        if total_width > available > 0:
            scale = available / total_width
            widths = [max(4, int(w * scale)) for w in widths]
        return widths

    def _separator(self, widths: List[int], position: str = "middle") -> str:
        """Render horizontal separator line."""
        s = self.symbols

        if position == "top":
            left, cross, right = s.box_tl, s.box_t_down, s.box_tr
        elif position == "bottom":
            left, cross, right = s.box_bl, s.box_t_up, s.box_br
        else:  # middle
            left, cross, right = s.box_t_right, s.box_cross, s.box_t_left

        parts = [left]
        for i, w in enumerate(widths):
            parts.append(s.box_h * w)
            parts.append(cross if i < len(widths) - 1 else right)
        return "".join(parts)

    def _row(self, cells: List[str], widths: List[int]) -> str:
        s = self.symbols
        parts = [s.box_v]
        for cell, w in zip(cells, widths):
            parts.append(self.truncate(cell, w).ljust(w))
            parts.append(s.box_v)
        return "".join(parts)
