"""
Test Data Factory — Declarative process definitions for indexer tests

Builds ProcessDefinition objects the way the host compiler would
report them, and drives a collector through the callback envelope.

Usage:
    def test_something(process_factory):
        process = (process_factory.process("P1", "Order")
                   .variable("order", "com.acme.Order")
                   .signal("shipped")
                   .build())
        index = process_factory.index(process)
"""

from typing import Optional

from procindex.config import Config
from procindex.core.listener import ProcessReferenceCollector
from procindex.core.process import (
    ITEM_SUBJECT_REF_KEY,
    ItemDefinition,
    Message,
    ProcessDefinition,
    RuleSetNode,
    SubProcessNode,
    Variable,
    WorkItemNode,
)
from procindex.core.registry import IndexRegistry
from procindex.pipeline import BuildPipeline


class ProcessBuilder:
    """Fluent builder for one ProcessDefinition."""

    def __init__(self, process_id: str, name: str = ""):
        self._process = ProcessDefinition(id=process_id, name=name)

    def variable(self, name: str, type_name: str = "Object", item_ref: Optional[str] = None) -> 'ProcessBuilder':
        metadata = {ITEM_SUBJECT_REF_KEY: item_ref} if item_ref else {}
        self._process.variables.append(Variable(name, type_name, metadata))
        return self

    def item(self, item_id: str, structure_ref: Optional[str]) -> 'ProcessBuilder':
        self._process.item_definitions[item_id] = ItemDefinition(item_id, structure_ref)
        return self

    def global_(self, name: str, type_name: str) -> 'ProcessBuilder':
        self._process.globals[name] = type_name
        return self

    def imports(self, *names: str) -> 'ProcessBuilder':
        self._process.imports.update(names)
        return self

    def function_imports(self, *names: str) -> 'ProcessBuilder':
        self._process.function_imports.extend(names)
        return self

    def signal(self, *names: str) -> 'ProcessBuilder':
        self._process.signals.update(names)
        return self

    def message(self, message_id: str, name: str = "") -> 'ProcessBuilder':
        self._process.messages[message_id] = Message(message_id, name)
        return self

    def rule_set(self, group: Optional[str]) -> 'ProcessBuilder':
        self._process.nodes.append(RuleSetNode(name="rules", rule_flow_group=group))
        return self

    def work_item(self, work_name: Optional[str]) -> 'ProcessBuilder':
        self._process.nodes.append(WorkItemNode(name="task", work_name=work_name))
        return self

    def sub_process(self, process_id: str = "", process_name: str = "") -> 'ProcessBuilder':
        self._process.nodes.append(SubProcessNode(process_id=process_id, process_name=process_name))
        return self

    def dialect_types(self, key: str, *names: str) -> 'ProcessBuilder':
        self._process.metadata.setdefault(key, set()).update(names)
        return self

    def build(self) -> ProcessDefinition:
        return self._process


class ProcessFactory:
    """
    Factory for processes, collectors and pipelines used across tests.

    Every pipeline it creates publishes into the same registry.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.registry = IndexRegistry()

    def process(self, process_id: str = "P1", name: str = "Process") -> ProcessBuilder:
        return ProcessBuilder(process_id, name)

    def collector(self) -> ProcessReferenceCollector:
        return self.pipeline().create_collector()

    def pipeline(self) -> BuildPipeline:
        return BuildPipeline(self.config, self.registry)

    def index(self, process: ProcessDefinition):
        """Build a process through the pipeline and return its index."""
        return self.pipeline().build(process)

    def drive(self, process: ProcessDefinition, collector: Optional[ProcessReferenceCollector] = None):
        """Run every callback on a collector directly; returns (collector, index)."""
        collector = collector or self.collector()
        self.pipeline().replay(process, collector)
        collector.on_complete(process)
        return collector, collector.on_build_complete(process)
