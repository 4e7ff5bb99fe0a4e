"""
ProcessReferenceCollector — Build listener that indexes one process

The process compiler drives this object through a fixed callback
envelope while it builds a process definition:

    on_process_added
      (on_node_added | on_meta_data_added)*
    on_complete
    on_build_complete  -> ProcessIndex

Callbacks buffer raw observations (variables, item definitions,
signals, messages, type names). on_complete visits item definitions,
globals and imports; on_build_complete merges the dialect type sets,
resolves class names and emits the final references.

The envelope is enforced as a state machine:
    CREATED -> BUILDING -> COMPILED -> COMPLETED
Any call out of order raises LifecycleError.

One instance serves exactly one build.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from .collector import ResourceReferenceCollector
from .decoding import decode_instance, decode_mapping, decode_string_set
from .dialects import DialectRegistry
from .errors import LifecycleError
from .index import ProcessIndex
from .model import PartType, Resource, ResourceType
from .process import (
    ITEM_DEFINITIONS_KEY,
    MESSAGES_KEY,
    SIGNAL_NAMES_KEY,
    VARIABLE_KEY,
    ItemDefinition,
    Node,
    ProcessDefinition,
    RuleSetNode,
    SubProcessNode,
    Variable,
    WorkItemNode,
)
from .types import ClassNameResolver, TypeReferenceSet

logger = logging.getLogger(__name__)

DEFAULT_WILDCARD_MARKER = "*"


class BuildState(Enum):
    CREATED = "created"
    BUILDING = "building"
    COMPILED = "compiled"
    COMPLETED = "completed"


class ProcessReferenceCollector(ResourceReferenceCollector):
    """
    Collects typed references while a process is built.

    Args:
        resolver: Class-name resolver (default settings when None)
        dialects: Dialect contributors to read at build completion
            (built-in dialects when None)
        wildcard_marker: Suffix marking a wildcard function import
    """

    def __init__(
        self,
        resolver: Optional[ClassNameResolver] = None,
        dialects: Optional[DialectRegistry] = None,
        wildcard_marker: str = DEFAULT_WILDCARD_MARKER,
    ):
        super().__init__()
        self.resolver = resolver or ClassNameResolver()
        self.dialects = dialects if dialects is not None else DialectRegistry.with_defaults()
        self.wildcard_marker = wildcard_marker

        self.state = BuildState.CREATED
        self.process: Optional[ProcessDefinition] = None
        self.types = TypeReferenceSet(self.resolver.separator)
        self.unresolved: List[str] = []

        self._resource: Optional[Resource] = None
        self._variables: List[Variable] = []
        self._item_definitions: Mapping[str, ItemDefinition] = {}
        self._signals: Set[str] = set()
        self._messages: Set[str] = set()
        self._index: Optional[ProcessIndex] = None

    # =========================================================================
    # Callback contract
    # =========================================================================

    def on_process_added(self, process: ProcessDefinition) -> None:
        """Record the process and register its id- and name-addressed resources."""
        self._transition("on_process_added", BuildState.CREATED, BuildState.BUILDING)
        logger.debug("Added process with id %s and name %s", process.id, process.name)

        self.process = process
        self._resource = self.add_resource(process.id, ResourceType.PROCESS_ID)
        if process.name:
            self.add_resource(process.name, ResourceType.PROCESS_NAME)

    def on_node_added(self, node: Node) -> None:
        """Emit the references a node carries, by node kind."""
        self._require("on_node_added", BuildState.BUILDING)

        if isinstance(node, RuleSetNode):
            if node.rule_flow_group is not None:
                self.add_shared_reference(node.rule_flow_group, PartType.RULEFLOW_GROUP)
        elif isinstance(node, WorkItemNode):
            if node.work_name:
                self.add_shared_reference(node.work_name, PartType.TASK_NAME)
        elif isinstance(node, SubProcessNode):
            if node.process_name:
                self.add_resource_reference(node.process_name, ResourceType.PROCESS_NAME)
            if node.process_id:
                self.add_resource_reference(node.process_id, ResourceType.PROCESS_ID)

    def on_meta_data_added(self, name: str, data: Any) -> None:
        """
        Ingest one metadata observation.

        Unrecognized keys are ignored: not every build emits every key.

        Raises:
            MetadataDecodeError: If a recognized key carries the wrong type
        """
        self._require("on_meta_data_added", BuildState.BUILDING)

        if name == VARIABLE_KEY:
            self._variables.append(decode_instance(name, data, Variable))
        elif name == ITEM_DEFINITIONS_KEY:
            self._item_definitions = decode_mapping(name, data, ItemDefinition) or {}
        elif name == SIGNAL_NAMES_KEY:
            self._signals = decode_string_set(name, data) or set()
        elif name == MESSAGES_KEY:
            # keep a copy of the ids, not the compiler's map
            messages = decode_mapping(name, data) or {}
            self._messages = set(messages.keys())

    def on_complete(self, process: ProcessDefinition) -> None:
        """Visit item definitions, globals and imports."""
        self._transition("on_complete", BuildState.BUILDING, BuildState.COMPILED)

        self._visit_item_definitions()
        self._visit_globals(process.globals)
        self._visit_imports(process.imports)

    def on_build_complete(self, process: ProcessDefinition) -> ProcessIndex:
        """
        Resolve type names, emit the final references and freeze.

        Returns:
            The finished ProcessIndex for the next pipeline stage
        """
        self._require("on_build_complete", BuildState.COMPILED)

        for _dialect, (referenced, unqualified) in self.dialects.contributions(process.metadata):
            self.types.merge(referenced, unqualified)

        self._visit_variables()
        self.unresolved = self.resolver.resolve(self.types)
        for class_name in self.types.referenced_classes:
            self.add_resource_reference(class_name, ResourceType.CLASS)

        self._visit_signals(self._signals)
        self._visit_signals(self._messages)
        self._visit_function_imports(process.function_imports)

        self.freeze()
        self._index = ProcessIndex(
            process_id=process.id,
            process_name=process.name,
            resources=tuple(self.resources),
            shared_references=self.shared_references,
            resource_references=self.resource_references,
            referenced_classes=frozenset(self.types.referenced_classes),
        )
        self.state = BuildState.COMPLETED
        logger.debug(
            "Indexed process %s: %d parts, %d shared, %d resource references",
            process.id,
            len(self._resource.parts),
            len(self._index.shared_references),
            len(self._index.resource_references),
        )
        return self._index

    # =========================================================================
    # Visitors
    # =========================================================================

    def _visit_item_definitions(self) -> None:
        for item in self._item_definitions.values():
            self.types.add(item.structure_ref)

    def _visit_globals(self, globals_: Optional[Dict[str, str]]) -> None:
        if not globals_:
            return
        for name, type_name in globals_.items():
            self.types.add(type_name)
            self.add_shared_reference(name, PartType.GLOBAL)

    def _visit_imports(self, imports: Optional[Iterable[str]]) -> None:
        if imports:
            self.types.add_all(imports)

    def _visit_variables(self) -> None:
        for variable in self._variables:
            self._resource.add_part(variable.name, PartType.VARIABLE)
            self.types.add(self.variable_type(variable))

    def _visit_signals(self, names: Iterable[str]) -> None:
        # messages are indexed as signals
        for name in names:
            self.add_shared_reference(name, PartType.SIGNAL)

    def _visit_function_imports(self, function_imports: Optional[Iterable[str]]) -> None:
        if not function_imports:
            return
        for function_import in function_imports:
            if not function_import.endswith(self.wildcard_marker):
                self.add_resource_reference(function_import, ResourceType.FUNCTION)

    def variable_type(self, variable: Variable) -> Optional[str]:
        """
        Effective type of a variable.

        The item definition's structure reference wins when the variable
        was declared by item reference and that item is known.
        """
        item_ref = variable.item_subject_ref
        if item_ref is not None:
            item = self._item_definitions.get(item_ref)
            if item is not None and item.structure_ref:
                return item.structure_ref
        return variable.type

    # =========================================================================
    # State
    # =========================================================================

    @property
    def index(self) -> Optional[ProcessIndex]:
        """The finished index, once the build completed."""
        return self._index

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables)

    @property
    def signals(self) -> Set[str]:
        return set(self._signals)

    @property
    def messages(self) -> Set[str]:
        return set(self._messages)

    def _require(self, callback: str, state: BuildState) -> None:
        if self.state != state:
            raise LifecycleError(callback, self.state)

    def _transition(self, callback: str, expected: BuildState, target: BuildState) -> None:
        self._require(callback, expected)
        self.state = target
