"""
Core — Process reference indexing

- model: Resource, Part, SharedReference, ResourceReference
- process: types read from the host process compiler
- listener: ProcessReferenceCollector (the build listener)
- types: TypeReferenceSet, ClassNameResolver
- dialects: DialectContributor, DialectRegistry
- index: ProcessIndex (result of one build)
- registry: IndexRegistry (sink across builds)
"""

from .errors import (
    ProcIndexError,
    MetadataDecodeError,
    LifecycleError,
    FrozenResourceError,
    DocumentError,
)
from .model import (
    PartType,
    ResourceType,
    Part,
    SharedReference,
    ResourceReference,
    Resource,
)
from .process import (
    ProcessDefinition,
    Node,
    RuleSetNode,
    WorkItemNode,
    SubProcessNode,
    Variable,
    ItemDefinition,
    Message,
)
from .collector import ResourceReferenceCollector
from .dialects import DialectContributor, DialectRegistry, DEFAULT_DIALECTS
from .types import TypeReferenceSet, ClassNameResolver
from .index import ProcessIndex
from .listener import ProcessReferenceCollector, BuildState
from .registry import IndexRegistry

__all__ = [
    'ProcIndexError', 'MetadataDecodeError', 'LifecycleError',
    'FrozenResourceError', 'DocumentError',
    'PartType', 'ResourceType', 'Part', 'SharedReference',
    'ResourceReference', 'Resource',
    'ProcessDefinition', 'Node', 'RuleSetNode', 'WorkItemNode',
    'SubProcessNode', 'Variable', 'ItemDefinition', 'Message',
    'ResourceReferenceCollector',
    'DialectContributor', 'DialectRegistry', 'DEFAULT_DIALECTS',
    'TypeReferenceSet', 'ClassNameResolver',
    'ProcessIndex',
    'ProcessReferenceCollector', 'BuildState',
    'IndexRegistry',
]
