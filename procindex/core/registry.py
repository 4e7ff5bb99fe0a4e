"""
IndexRegistry — Sink for finished process indexes

The downstream search / impact-analysis indexer reads from here.
Builds of different processes may run concurrently and publish at the
same time, so every access goes through one lock. Published
ProcessIndex objects are immutable; the registry only swaps entries.

Usage:
    registry = IndexRegistry()
    registry.publish(index)

    registry.find_shared_reference("orderShipped", PartType.SIGNAL)
    registry.impact("com.acme.Order")
"""

import threading
from typing import Any, Dict, List, Optional

from .index import ProcessIndex
from .model import PartType, ResourceType


class IndexRegistry:
    """Thread-safe store of ProcessIndex objects keyed by process id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: Dict[str, ProcessIndex] = {}

    def publish(self, index: ProcessIndex) -> bool:
        """
        Store or replace the index of a process.

        Returns:
            False when an index with the same fingerprint was already
            published for this process (nothing changed), True otherwise
        """
        with self._lock:
            existing = self._by_id.get(index.process_id)
            if existing is not None and existing.fingerprint == index.fingerprint:
                return False
            self._by_id[index.process_id] = index
            return True

    def remove(self, process_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(process_id, None) is not None

    def get(self, process_id: str) -> Optional[ProcessIndex]:
        with self._lock:
            return self._by_id.get(process_id)

    def get_by_name(self, name: str) -> List[ProcessIndex]:
        """Processes addressed by a display name (names need not be unique)."""
        return [i for i in self.all() if i.process_name == name]

    def all(self) -> List[ProcessIndex]:
        with self._lock:
            return [self._by_id[k] for k in sorted(self._by_id)]

    # =========================================================================
    # Queries
    # =========================================================================

    def find_shared_reference(self, name: str, part_type: Optional[PartType] = None) -> List[ProcessIndex]:
        """Processes exposing a shared reference called name (of part_type, if given)."""
        return [
            index for index in self.all()
            if any(
                ref.name == name and (part_type is None or ref.part_type == part_type)
                for ref in index.shared_references
            )
        ]

    def find_resource_reference(
        self,
        name: str,
        resource_type: Optional[ResourceType] = None
    ) -> List[ProcessIndex]:
        """Processes referencing the resource called name (of resource_type, if given)."""
        return [
            index for index in self.all()
            if any(
                ref.name == name and (resource_type is None or ref.resource_type == resource_type)
                for ref in index.resource_references
            )
        ]

    def impact(self, name: str) -> List[ProcessIndex]:
        """Every process whose parts or references mention name."""
        return [index for index in self.all() if index.mentions(name)]

    def stats(self) -> Dict[str, Any]:
        indexes = self.all()
        return {
            "processes": len(indexes),
            "parts": sum(len(i.parts) for i in indexes),
            "shared_references": sum(len(i.shared_references) for i in indexes),
            "resource_references": sum(len(i.resource_references) for i in indexes),
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def __contains__(self, process_id: str) -> bool:
        with self._lock:
            return process_id in self._by_id
