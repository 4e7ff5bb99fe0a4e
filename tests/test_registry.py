"""
Tests for IndexRegistry and ProcessIndex — Published results and queries
"""

import threading

import pytest

from procindex.core.errors import MetadataDecodeError
from procindex.core.index import ProcessIndex
from procindex.core.model import PartType, ResourceType
from procindex.core.registry import IndexRegistry


@pytest.fixture
def shipping(process_factory):
    return process_factory.index(
        process_factory.process("com.acme.Shipping", "Shipping")
        .signal("orderShipped")
        .variable("parcel", "com.acme.Parcel")
        .build()
    )


@pytest.fixture
def order(process_factory):
    return process_factory.index(
        process_factory.process("com.acme.Order", "Order")
        .signal("orderShipped")
        .sub_process(process_id="com.acme.Shipping")
        .global_("audit", "com.acme.AuditLog")
        .build()
    )


class TestProcessIndex:

    def test_resource_is_id_addressed(self, order):
        assert order.resource.resource_id == "com.acme.Order"
        assert order.resource.resource_type == ResourceType.PROCESS_ID

    def test_mentions(self, order):
        assert order.mentions("orderShipped")
        assert order.mentions("com.acme.AuditLog")
        assert not order.mentions("parcel")

    def test_fingerprint_stable(self, process_factory):
        """Two builds of the same content hash the same, whatever the insertion order."""
        a = process_factory.drive(process_factory.process("P").signal("x", "y").build())[1]
        b = process_factory.drive(process_factory.process("P").signal("y").signal("x").build())[1]
        assert a.fingerprint == b.fingerprint

    def test_fingerprint_changes_with_content(self, process_factory):
        a = process_factory.drive(process_factory.process("P").signal("x").build())[1]
        b = process_factory.drive(process_factory.process("P").signal("z").build())[1]
        assert a.fingerprint != b.fingerprint

    def test_metadata_round_trip(self, order):
        metadata = {}
        order.publish_to(metadata)
        assert ProcessIndex.from_metadata(metadata) is order

    def test_from_metadata_missing(self):
        assert ProcessIndex.from_metadata({}) is None

    def test_from_metadata_wrong_type(self):
        with pytest.raises(MetadataDecodeError):
            ProcessIndex.from_metadata({ProcessIndex.METADATA_KEY: "index"})

    def test_hashable(self, process_factory, order):
        rebuilt = process_factory.drive(
            process_factory.process("com.acme.Order", "Order")
            .signal("orderShipped")
            .sub_process(process_id="com.acme.Shipping")
            .global_("audit", "com.acme.AuditLog")
            .build()
        )[1]
        assert rebuilt == order
        assert hash(rebuilt) == hash(order)
        assert len({order, rebuilt}) == 1

    def test_to_dict(self, order):
        data = order.to_dict()
        assert data["process_id"] == "com.acme.Order"
        assert data["fingerprint"] == order.fingerprint
        assert {"name": "orderShipped", "type": "signal"} in data["shared_references"]
        assert data["referenced_classes"] == ["com.acme.AuditLog"]


class TestIndexRegistry:

    def test_lookup(self, process_factory, order, shipping):
        registry = process_factory.registry
        assert len(registry) == 2
        assert "com.acme.Order" in registry
        assert registry.get("com.acme.Order") is order
        assert registry.get_by_name("Shipping") == [shipping]
        assert [i.process_id for i in registry.all()] == ["com.acme.Order", "com.acme.Shipping"]

    def test_find_shared_reference(self, process_factory, order, shipping):
        registry = process_factory.registry
        assert registry.find_shared_reference("orderShipped", PartType.SIGNAL) == [order, shipping]
        assert registry.find_shared_reference("orderShipped", PartType.GLOBAL) == []
        assert registry.find_shared_reference("audit") == [order]

    def test_find_resource_reference(self, process_factory, order, shipping):
        registry = process_factory.registry
        assert registry.find_resource_reference("com.acme.Shipping", ResourceType.PROCESS_ID) == [order]
        assert registry.find_resource_reference("com.acme.Parcel", ResourceType.CLASS) == [shipping]

    def test_impact_includes_parts(self, process_factory, order, shipping):
        assert process_factory.registry.impact("parcel") == [shipping]

    def test_republish_unchanged(self, process_factory, order):
        assert process_factory.registry.publish(order) is False

    def test_republish_changed_replaces(self, process_factory, order):
        rebuilt = process_factory.drive(process_factory.process("com.acme.Order", "Order").build())[1]
        assert process_factory.registry.publish(rebuilt) is True
        assert process_factory.registry.get("com.acme.Order") is rebuilt

    def test_remove(self, process_factory, order):
        registry = process_factory.registry
        assert registry.remove("com.acme.Order") is True
        assert registry.remove("com.acme.Order") is False
        assert registry.get("com.acme.Order") is None

    def test_stats(self, process_factory, order, shipping):
        stats = process_factory.registry.stats()
        assert stats["processes"] == 2
        assert stats["parts"] == 1
        assert stats["shared_references"] == 3

    def test_concurrent_publish(self, process_factory):
        indexes = [
            process_factory.drive(process_factory.process(f"P{i}").signal(f"s{i}").build())[1]
            for i in range(40)
        ]
        registry = IndexRegistry()
        barrier = threading.Barrier(8)

        def worker(chunk):
            barrier.wait()
            for index in chunk:
                registry.publish(index)
                registry.impact(index.process_id)

        threads = [threading.Thread(target=worker, args=(indexes[i::8],)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 40
        assert registry.find_shared_reference("s17") == [registry.get("P17")]
