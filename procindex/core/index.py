"""
ProcessIndex — The finished, immutable result of one process build

Handed from the collector to the next pipeline stage explicitly
(return value of on_build_complete), then published into the process
metadata bag and the IndexRegistry. Every reader treats it as frozen.

The fingerprint is a deterministic xxhash over the sorted references,
so the registry can tell an unchanged rebuild from a real change.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Optional, Set, Tuple

import xxhash

from .decoding import decode_instance
from .model import (
    PartType,
    Resource,
    ResourceReference,
    ResourceType,
    SharedReference,
    sorted_refs,
)


@dataclass(frozen=True)
class ProcessIndex:
    """
    References produced by building one process.

    Attributes:
        process_id: Id of the built process
        process_name: Display name of the built process
        resources: Frozen resources (by id, and by name when named)
        shared_references: Cross-process references
        resource_references: References to other resources
        referenced_classes: Resolved class names
    """
    process_id: str
    process_name: str
    resources: Tuple[Resource, ...]
    shared_references: FrozenSet[SharedReference]
    resource_references: FrozenSet[ResourceReference]
    referenced_classes: FrozenSet[str]

    # Key under which the index is published in the process metadata bag
    METADATA_KEY = "BPMNProcessInfoCollector"

    def __hash__(self) -> int:
        # resources are not hashable; equal indexes share a fingerprint
        return hash((self.process_id, self.fingerprint))

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def resource(self) -> Optional[Resource]:
        """The resource addressed by process id."""
        for resource in self.resources:
            if resource.resource_type == ResourceType.PROCESS_ID:
                return resource
        return None

    @property
    def parts(self) -> FrozenSet:
        resource = self.resource
        return frozenset(resource.parts) if resource else frozenset()

    def shared(self, part_type: PartType) -> Set[str]:
        return {r.name for r in self.shared_references if r.part_type == part_type}

    def references(self, resource_type: ResourceType) -> Set[str]:
        return {r.name for r in self.resource_references if r.resource_type == resource_type}

    def mentions(self, name: str) -> bool:
        """True when any part or reference of this process is called name."""
        return (
            any(p.name == name for p in self.parts)
            or any(r.name == name for r in self.shared_references)
            or any(r.name == name for r in self.resource_references)
        )

    @property
    def fingerprint(self) -> str:
        h = xxhash.xxh64()
        h.update(f"{self.process_id}\0{self.process_name}\0".encode())
        for part in sorted_refs(self.parts):
            h.update(f"p:{part.part_type.value}:{part.name}\0".encode())
        for ref in sorted_refs(self.shared_references):
            h.update(f"s:{ref.part_type.value}:{ref.name}\0".encode())
        for ref in sorted_refs(self.resource_references):
            h.update(f"r:{ref.resource_type.value}:{ref.name}\0".encode())
        return h.hexdigest()

    # =========================================================================
    # Publication
    # =========================================================================

    def publish_to(self, metadata: Dict[str, Any]) -> None:
        """Write this index into a process metadata bag."""
        metadata[self.METADATA_KEY] = self

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> Optional['ProcessIndex']:
        """Retrieve a previously published index without rebuilding."""
        value = metadata.get(cls.METADATA_KEY)
        if value is None:
            return None
        return decode_instance(cls.METADATA_KEY, value, cls)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "process_id": self.process_id,
            "process_name": self.process_name,
            "fingerprint": self.fingerprint,
            "resources": [r.to_dict() for r in self.resources],
            "shared_references": [r.to_dict() for r in sorted_refs(self.shared_references)],
            "resource_references": [r.to_dict() for r in sorted_refs(self.resource_references)],
            "referenced_classes": sorted(self.referenced_classes),
        }
