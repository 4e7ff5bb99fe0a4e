"""
Dialect Registry — Pluggable expression-dialect type contributions

Each expression dialect the compiler supports leaves the types it saw
in the process metadata bag under its own keys. A DialectContributor
knows those keys and turns them into a uniform pair:
(referenced_types, unqualified_types).

Adding a dialect means registering a contributor, not editing the
collector.

Usage:
    registry = DialectRegistry()
    registry.register(JAVA_DIALECT)
    registry.register(DialectContributor("groovy", "GroovyReferencedTypes"))

    for name, (referenced, unqualified) in registry.contributions(metadata):
        ...
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from .decoding import decode_string_set


@dataclass(frozen=True)
class DialectContributor:
    """
    Metadata keys one dialect writes its type references under.

    Attributes:
        name: Dialect name (e.g. "java", "mvel")
        referenced_key: Key holding qualified type names
        unqualified_key: Key holding bare type names (None when the
            dialect only reports qualified names)
    """
    name: str
    referenced_key: Optional[str] = None
    unqualified_key: Optional[str] = None

    @property
    def keys(self) -> List[str]:
        return [k for k in (self.referenced_key, self.unqualified_key) if k]

    def contribute(self, metadata: Mapping[str, Any]) -> Tuple[Set[str], Set[str]]:
        """Read this dialect's (referenced, unqualified) type sets from metadata."""
        referenced: Set[str] = set()
        unqualified: Set[str] = set()
        if self.referenced_key:
            referenced = decode_string_set(self.referenced_key, metadata.get(self.referenced_key)) or set()
        if self.unqualified_key:
            unqualified = decode_string_set(self.unqualified_key, metadata.get(self.unqualified_key)) or set()
        return referenced, unqualified


JAVA_DIALECT = DialectContributor(
    name="java",
    referenced_key="JavaDialectReferencedTypes",
    unqualified_key="JavaDialectUnqualifiedTypes",
)

JAVA_RETURN_VALUE_DIALECT = DialectContributor(
    name="java-return-value",
    referenced_key="JavaReturnValueReferencedTypes",
    unqualified_key="JavaReturnValueUnqualifiedTypes",
)

MVEL_DIALECT = DialectContributor(
    name="mvel",
    referenced_key="MVELDialectReferencedTypes",
)

MVEL_RETURN_VALUE_DIALECT = DialectContributor(
    name="mvel-return-value",
    referenced_key="MVELReturnValueReferencedTypes",
)

DEFAULT_DIALECTS = (
    JAVA_DIALECT,
    JAVA_RETURN_VALUE_DIALECT,
    MVEL_DIALECT,
    MVEL_RETURN_VALUE_DIALECT,
)


class DialectRegistry:
    """
    Registry of dialect contributors.

    Keeps registration order so contributions are read deterministically.
    """

    def __init__(self, contributors: Iterable[DialectContributor] = ()):
        self._contributors: Dict[str, DialectContributor] = {}
        self._key_map: Dict[str, str] = {}  # metadata key -> dialect name
        for contributor in contributors:
            self.register(contributor)

    @classmethod
    def with_defaults(cls, enabled: Optional[Iterable[str]] = None) -> 'DialectRegistry':
        """
        Registry holding the built-in dialects.

        Args:
            enabled: Names to keep (all built-ins when None)

        Raises:
            ValueError: If an enabled name is not a built-in dialect
        """
        builtins = {d.name: d for d in DEFAULT_DIALECTS}
        if enabled is None:
            return cls(DEFAULT_DIALECTS)
        unknown = [name for name in enabled if name not in builtins]
        if unknown:
            raise ValueError(
                f"Unknown dialect(s): {', '.join(unknown)}. Valid: {', '.join(builtins)}"
            )
        return cls(builtins[name] for name in enabled)

    def register(self, contributor: DialectContributor) -> None:
        """
        Register a contributor.

        Raises:
            ValueError: If one of its keys already belongs to another dialect
        """
        for key in contributor.keys:
            owner = self._key_map.get(key)
            if owner is not None and owner != contributor.name:
                raise ValueError(
                    f"Metadata key {key} already registered to {owner}, "
                    f"cannot register to {contributor.name}"
                )

        previous = self._contributors.get(contributor.name)
        if previous is not None:
            for key in previous.keys:
                self._key_map.pop(key, None)

        self._contributors[contributor.name] = contributor
        for key in contributor.keys:
            self._key_map[key] = contributor.name

    def unregister(self, name: str) -> bool:
        """Remove a contributor by name. Returns False if it was not registered."""
        contributor = self._contributors.pop(name, None)
        if contributor is None:
            return False
        for key in contributor.keys:
            if self._key_map.get(key) == name:
                del self._key_map[key]
        return True

    def contributions(self, metadata: Mapping[str, Any]) -> Iterator[Tuple[str, Tuple[Set[str], Set[str]]]]:
        """Yield (dialect name, (referenced, unqualified)) for each contributor."""
        for name, contributor in self._contributors.items():
            yield name, contributor.contribute(metadata)

    def names(self) -> List[str]:
        return list(self._contributors.keys())

    def owner_of(self, key: str) -> Optional[str]:
        """Dialect name that reads a metadata key, if any."""
        return self._key_map.get(key)

    def __len__(self) -> int:
        return len(self._contributors)

    def __contains__(self, name: str) -> bool:
        return name in self._contributors
