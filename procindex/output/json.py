"""
JsonRenderer — Render data as JSON for piping into other indexers
"""

import json
from typing import TYPE_CHECKING, Any

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class JsonRenderer(BaseRenderer):
    """
    Render data as JSON.

    Useful for piping to jq or feeding an external search index.
    """

    def render(self, spec: "OutputSpec") -> str:
        data = self._clean_data(spec.data)
        output = {"title": spec.title, "data": data} if spec.title else data

        return json.dumps(
            output,
            indent=2,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    def _clean_data(self, data: Any) -> Any:
        """Remove internal keys (starting with _)."""
        if isinstance(data, dict):
            return {
                k: self._clean_data(v)
                for k, v in data.items()
                if not k.startswith("_")
            }
        if isinstance(data, list):
            return [self._clean_data(item) for item in data]
        return data

    def _json_serializer(self, obj: Any) -> Any:
        """Custom JSON serializer for non-standard types."""
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        if hasattr(obj, "value"):  # Enum
            return obj.value
        return str(obj)
