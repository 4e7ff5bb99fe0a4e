"""
Shared pytest fixtures for the procindex test suite.

Usage in tests:
    def test_something(process_factory):
        process = process_factory.process("P1").signal("go").build()
        index = process_factory.index(process)

    def test_with_sample(order_process, process_factory):
        index = process_factory.index(order_process)
"""

import pytest
from tests.factories import ProcessFactory


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config and PROCINDEX_* variables out of every test."""
    for key in ("PROCINDEX_BASE_PACKAGE", "PROCINDEX_DIALECTS", "PROCINDEX_WORKERS",
                "PROCINDEX_FORMAT", "PROCINDEX_LOG_LEVEL", "PROCINDEX_PROJECT_PATH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(
        "procindex.config.ConfigManager.USER_CONFIG_DIR", tmp_path / "home" / ".procindex"
    )


@pytest.fixture
def process_factory():
    """An empty ProcessFactory with default configuration."""
    return ProcessFactory()


@pytest.fixture
def order_process(process_factory):
    """
    A process touching every reference kind.

    - 2 variables (one declared through an item definition)
    - 1 global, 2 imports (one wildcard), 2 function imports (one wildcard)
    - 1 signal, 1 message
    - rule set, work item and sub-process nodes
    - java dialect types
    """
    return (
        process_factory.process("com.acme.OrderProcess", "OrderProcess")
        .item("_orderItem", "com.acme.Order")
        .variable("order", "Object", item_ref="_orderItem")
        .variable("approved", "Boolean")
        .global_("audit", "com.acme.AuditLog")
        .imports("com.acme.Customer", "com.acme.util.*")
        .function_imports("com.acme.Pricing.discount", "com.acme.Functions.*")
        .signal("orderShipped")
        .message("paymentReceived", "Payment")
        .rule_set("validation")
        .work_item("Email")
        .sub_process(process_id="com.acme.Shipping", process_name="Shipping")
        .dialect_types("JavaDialectReferencedTypes", "com.acme.Invoice")
        .dialect_types("JavaDialectUnqualifiedTypes", "Customer", "String")
        .build()
    )
