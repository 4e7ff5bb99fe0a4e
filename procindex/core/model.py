"""
Model — Indexable units produced by a process build

Resource: one per process (addressed by id and by name), holding Parts.
Part: a named, typed reference local to one Resource (e.g. a variable).
SharedReference: a name searchable across processes (signals, globals,
    rule-flow groups, task names).
ResourceReference: a name that points at another resource
    (a sub-process, a function, a class).

All reference types are frozen dataclasses, so duplicates collapse
under set semantics by (name, kind).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Any, Dict, FrozenSet

from .errors import FrozenResourceError


class PartType(Enum):
    """Kinds of named references a process exposes."""
    VARIABLE = "variable"
    RULEFLOW_GROUP = "ruleflow_group"
    TASK_NAME = "task_name"
    GLOBAL = "global"
    SIGNAL = "signal"
    FUNCTION_REF = "function_ref"


class ResourceType(Enum):
    """Kinds of indexable resources."""
    PROCESS_ID = "bpmn2"
    PROCESS_NAME = "bpmn2_name"
    FUNCTION = "function"
    CLASS = "class"


@dataclass(frozen=True)
class Part:
    """A named sub-reference attached to exactly one Resource."""
    name: str
    part_type: PartType

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.part_type.value}


@dataclass(frozen=True)
class SharedReference:
    """A reference visible across processes."""
    name: str
    part_type: PartType

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.part_type.value}


@dataclass(frozen=True)
class ResourceReference:
    """A reference naming another resource."""
    name: str
    resource_type: ResourceType

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.resource_type.value}


@dataclass
class Resource:
    """
    The indexable unit for one process.

    Mutable while its build runs; frozen once the build completes
    and the resource is handed to the index.
    """
    resource_id: str
    resource_type: ResourceType
    parts: AbstractSet[Part] = field(default_factory=set)
    _frozen: bool = field(default=False, repr=False, compare=False)

    def add_part(self, name: str, part_type: PartType) -> Part:
        """Attach a part. Duplicates by (name, type) are idempotent."""
        if self._frozen:
            raise FrozenResourceError(
                f"Resource '{self.resource_id}' is published and cannot change"
            )
        part = Part(name, part_type)
        self.parts.add(part)
        return part

    def freeze(self) -> None:
        self.parts = frozenset(self.parts)
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def parts_of(self, part_type: PartType) -> FrozenSet[str]:
        """Names of all parts of one type."""
        return frozenset(p.name for p in self.parts if p.part_type == part_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.resource_id,
            "type": self.resource_type.value,
            "parts": [p.to_dict() for p in sorted(self.parts, key=_sort_key)],
        }


def _sort_key(ref) -> tuple:
    kind = getattr(ref, "part_type", None) or getattr(ref, "resource_type")
    return (kind.value, ref.name)


def sorted_refs(refs) -> list:
    """Deterministic ordering for any set of references."""
    return sorted(refs, key=_sort_key)
