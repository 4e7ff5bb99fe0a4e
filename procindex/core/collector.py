"""
ResourceReferenceCollector — Resource and reference bookkeeping for one build

Holds what a build contributes to the index:
- Resources (one per process address) with their Parts
- SharedReferences (names searchable across processes)
- ResourceReferences (names of other resources)

Set semantics throughout: adding the same (name, kind) twice is a no-op.
One collector serves exactly one build; nothing here is shared
between instances.
"""

from typing import Dict, FrozenSet, List, Optional

from .model import (
    PartType,
    Resource,
    ResourceReference,
    ResourceType,
    SharedReference,
)


class ResourceReferenceCollector:
    """Accumulates resources and references until frozen."""

    def __init__(self):
        self._resources: Dict[tuple, Resource] = {}
        self._shared_references = set()
        self._resource_references = set()

    # =========================================================================
    # Writes
    # =========================================================================

    def add_resource(self, resource_id: str, resource_type: ResourceType) -> Resource:
        """
        Register a resource, returning the existing one for a repeated key.

        Args:
            resource_id: Address of the resource (process id or name)
            resource_type: How the resource is addressed

        Returns:
            The Resource for (resource_id, resource_type)
        """
        key = (resource_id, resource_type)
        resource = self._resources.get(key)
        if resource is None:
            resource = Resource(resource_id, resource_type)
            self._resources[key] = resource
        return resource

    def add_shared_reference(self, name: str, part_type: PartType) -> SharedReference:
        ref = SharedReference(name, part_type)
        self._shared_references.add(ref)
        return ref

    def add_resource_reference(self, name: str, resource_type: ResourceType) -> ResourceReference:
        ref = ResourceReference(name, resource_type)
        self._resource_references.add(ref)
        return ref

    def freeze(self) -> None:
        """Make every collected resource immutable."""
        for resource in self._resources.values():
            resource.freeze()

    # =========================================================================
    # Reads
    # =========================================================================

    @property
    def resources(self) -> List[Resource]:
        return list(self._resources.values())

    def get_resource(self, resource_id: str, resource_type: ResourceType) -> Optional[Resource]:
        return self._resources.get((resource_id, resource_type))

    @property
    def shared_references(self) -> FrozenSet[SharedReference]:
        return frozenset(self._shared_references)

    @property
    def resource_references(self) -> FrozenSet[ResourceReference]:
        return frozenset(self._resource_references)
