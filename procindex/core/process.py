"""
Process — Types the host process compiler hands to the indexer

The compiler itself (parser, compiler, metadata model) is a black box.
These dataclasses describe only what the indexer reads from it:
the process handle with its metadata bag, the node kinds that carry
references, variables, item definitions and messages.

Well-known metadata keys are collected here as constants; the absence
of any of them is always valid.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


# Keys delivered through on_meta_data_added()
VARIABLE_KEY = "Variable"
ITEM_DEFINITIONS_KEY = "ItemDefinitions"
SIGNAL_NAMES_KEY = "signalNames"
MESSAGES_KEY = "Messages"

# Variable metadata pointing at an item definition
ITEM_SUBJECT_REF_KEY = "ItemSubjectRef"


@dataclass
class Node:
    """A process node that carries no indexable reference."""
    id: str = ""
    name: str = ""


@dataclass
class RuleSetNode(Node):
    """Business-rule task bound to a rule-flow group."""
    rule_flow_group: Optional[str] = None


@dataclass
class WorkItemNode(Node):
    """Task executed by a named work-item handler."""
    work_name: Optional[str] = None


@dataclass
class SubProcessNode(Node):
    """Call activity referencing another process by id, by name, or both."""
    process_id: str = ""
    process_name: str = ""


@dataclass
class ItemDefinition:
    """Maps a logical item id to the class that structures it."""
    id: str
    structure_ref: Optional[str] = None


@dataclass
class Message:
    id: str
    name: str = ""
    type: str = ""


@dataclass
class Variable:
    """A process variable as declared by the compiler."""
    name: str
    type: str = "Object"
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def item_subject_ref(self) -> Optional[str]:
        """Id of the item definition this variable was declared by, if any."""
        return self.metadata.get(ITEM_SUBJECT_REF_KEY)


@dataclass
class ProcessDefinition:
    """
    Handle for the process being built.

    Owned by the compiler. The indexer keeps a reference for the
    duration of one build and writes nothing into it except the
    explicit publication step of the pipeline.

    Attributes:
        id: Process id (content address)
        name: Display name (name address)
        metadata: String-keyed bag filled by the compiler (dialect type sets)
        globals: Global name -> declared type
        imports: Import statements, qualified or not
        function_imports: Rule-language function imports
        nodes: Nodes in declaration order
        variables: Declared process variables
        item_definitions: Item id -> ItemDefinition
        signals: Signal names used by the process
        messages: Message id -> Message
    """
    id: str
    name: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    globals: Dict[str, str] = field(default_factory=dict)
    imports: Set[str] = field(default_factory=set)
    function_imports: List[str] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)
    item_definitions: Dict[str, ItemDefinition] = field(default_factory=dict)
    signals: Set[str] = field(default_factory=set)
    messages: Dict[str, Message] = field(default_factory=dict)
