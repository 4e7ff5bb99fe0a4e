"""
Class-Name Resolution — Reconciling qualified and bare type names

During a build, type names arrive from several places: item
definitions, globals, imports, variables and every expression dialect.
Names with a package separator are "referenced" (qualified); bare names
are "unqualified" and provisional until resolution.

Resolution (order matters):
1. Derive the simple names of all qualified entries.
2. Drop unqualified entries whose name is one of those simple names.
3. Promote remaining built-in names (Object, String, ...) to the
   base-runtime package.
4. Warn about anything left and add it verbatim to the referenced set.

After resolve() the unqualified set is empty. A reference is never
dropped outright: an unresolved name is kept rather than lost.

Known limitation: step 2 matches on simple name only. Two distinct
qualified classes sharing a simple name make a bare reference to
either one disappear. Downstream indexing relies on this behaviour.
"""

import logging
from typing import Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_BASE_PACKAGE = "java.lang"
DEFAULT_BUILTIN_TYPES = ("Object", "String", "Float", "Integer", "Boolean")
DEFAULT_PACKAGE_SEPARATOR = "."


class TypeReferenceSet:
    """Qualified and unqualified type names collected during one build."""

    def __init__(self, separator: str = DEFAULT_PACKAGE_SEPARATOR):
        self.separator = separator
        self.referenced_classes: Set[str] = set()
        self.unqualified_classes: Set[str] = set()

    def add(self, type_name: Optional[str]) -> None:
        """File a type name under referenced or unqualified by its shape."""
        if not type_name:
            return
        if self.separator in type_name:
            self.referenced_classes.add(type_name)
        else:
            self.unqualified_classes.add(type_name)

    def add_all(self, type_names: Iterable[Optional[str]]) -> None:
        for type_name in type_names:
            self.add(type_name)

    def merge(self, referenced: Iterable[str], unqualified: Iterable[str]) -> None:
        """Accumulate a dialect's pair as-is; the dialect already classified them."""
        self.referenced_classes.update(referenced)
        self.unqualified_classes.update(unqualified)

    @property
    def is_resolved(self) -> bool:
        return not self.unqualified_classes

    def __repr__(self) -> str:
        return (
            f"TypeReferenceSet(referenced={sorted(self.referenced_classes)}, "
            f"unqualified={sorted(self.unqualified_classes)})"
        )


class ClassNameResolver:
    """
    Resolves unqualified class names against qualified ones.

    Args:
        base_package: Package built-in names are promoted into
        builtin_types: Bare names that always denote a base-runtime class
        separator: Package separator
    """

    def __init__(
        self,
        base_package: str = DEFAULT_BASE_PACKAGE,
        builtin_types: Iterable[str] = DEFAULT_BUILTIN_TYPES,
        separator: str = DEFAULT_PACKAGE_SEPARATOR,
    ):
        self.base_package = base_package
        self.builtin_types = frozenset(builtin_types)
        self.separator = separator

    def simple_name(self, class_name: str) -> str:
        return class_name.rpartition(self.separator)[2]

    def qualify_builtin(self, name: str) -> str:
        return f"{self.base_package}{self.separator}{name}"

    def resolve(self, types: TypeReferenceSet) -> List[str]:
        """
        Empty the unqualified set into the referenced set.

        Returns:
            Names that could not be resolved and were force-promoted,
            in sorted order (empty when everything resolved)
        """
        simple_names = {self.simple_name(c) for c in types.referenced_classes}

        remaining = sorted(n for n in types.unqualified_classes if n not in simple_names)

        forced = []
        for name in remaining:
            if name in self.builtin_types:
                types.referenced_classes.add(self.qualify_builtin(name))
            else:
                logger.warning(
                    "Unable to resolve unqualified class name, adding to list of classes: '%s'",
                    name,
                )
                types.referenced_classes.add(name)
                forced.append(name)

        types.unqualified_classes.clear()
        return forced
