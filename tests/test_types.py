"""
Tests for class-name resolution

These tests validate:
- Qualified / unqualified classification
- Built-in promotion into the base package
- Forced promotion of unresolved names (with one warning each)
- The simple-name collision behaviour
"""

import logging

from procindex.core.types import ClassNameResolver, TypeReferenceSet


def resolve(referenced=(), unqualified=(), **resolver_args):
    types = TypeReferenceSet()
    types.merge(referenced, unqualified)
    forced = ClassNameResolver(**resolver_args).resolve(types)
    return types, forced


class TestTypeReferenceSet:
    """Classification by package separator."""

    def test_qualified_name_is_referenced(self):
        types = TypeReferenceSet()
        types.add("com.acme.Order")
        assert types.referenced_classes == {"com.acme.Order"}
        assert not types.unqualified_classes

    def test_bare_name_is_unqualified(self):
        types = TypeReferenceSet()
        types.add("Order")
        assert types.unqualified_classes == {"Order"}

    def test_empty_and_none_skipped(self):
        types = TypeReferenceSet()
        types.add_all([None, "", "Order"])
        assert types.unqualified_classes == {"Order"}
        assert not types.referenced_classes

    def test_custom_separator(self):
        types = TypeReferenceSet(separator="::")
        types.add_all(["acme::Order", "acme.Order"])
        assert types.referenced_classes == {"acme::Order"}
        assert types.unqualified_classes == {"acme.Order"}


class TestResolve:
    """Resolution of unqualified names."""

    def test_builtin_promoted(self):
        types, forced = resolve(unqualified={"String"})
        assert types.referenced_classes == {"java.lang.String"}
        assert forced == []

    def test_all_default_builtins(self):
        types, _ = resolve(unqualified={"Object", "String", "Float", "Integer", "Boolean"})
        assert types.referenced_classes == {
            "java.lang.Object", "java.lang.String", "java.lang.Float",
            "java.lang.Integer", "java.lang.Boolean",
        }

    def test_name_matching_qualified_entry_dropped(self):
        types, forced = resolve(referenced={"com.acme.Order"}, unqualified={"Order"})
        assert types.referenced_classes == {"com.acme.Order"}
        assert forced == []

    def test_qualified_entry_shadows_builtin(self):
        types, _ = resolve(referenced={"com.acme.String"}, unqualified={"String"})
        assert types.referenced_classes == {"com.acme.String"}

    def test_unresolved_kept_with_one_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="procindex.core.types"):
            types, forced = resolve(unqualified={"Frobnicate"})
        assert types.referenced_classes == {"Frobnicate"}
        assert forced == ["Frobnicate"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "'Frobnicate'" in warnings[0].getMessage()

    def test_unqualified_set_emptied(self):
        types, _ = resolve(referenced={"com.acme.Order"}, unqualified={"Order", "String", "Thing"})
        assert types.is_resolved
        assert types.unqualified_classes == set()

    def test_resolve_is_idempotent(self):
        types, _ = resolve(referenced={"com.acme.Order"}, unqualified={"String", "Thing"})
        before = set(types.referenced_classes)
        forced = ClassNameResolver().resolve(types)
        assert types.referenced_classes == before
        assert forced == []

    def test_forced_names_sorted(self):
        _, forced = resolve(unqualified={"Zeta", "Alpha"})
        assert forced == ["Alpha", "Zeta"]

    def test_simple_name_collision_drops_bare_reference(self):
        """A bare name matching any qualified simple name is dropped, whichever class it meant."""
        types, forced = resolve(
            referenced={"com.a.Order", "com.b.Order"},
            unqualified={"Order"},
        )
        assert types.referenced_classes == {"com.a.Order", "com.b.Order"}
        assert forced == []

    def test_custom_base_package_and_builtins(self):
        types, forced = resolve(
            unqualified={"str", "Object"},
            base_package="builtins",
            builtin_types=["str"],
        )
        assert "builtins.str" in types.referenced_classes
        assert "Object" in types.referenced_classes
        assert forced == ["Object"]


class TestClassNameResolver:

    def test_simple_name(self):
        resolver = ClassNameResolver()
        assert resolver.simple_name("com.acme.Order") == "Order"
        assert resolver.simple_name("Order") == "Order"

    def test_qualify_builtin(self):
        assert ClassNameResolver().qualify_builtin("String") == "java.lang.String"
