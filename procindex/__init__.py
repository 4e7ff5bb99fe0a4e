"""
procindex — Process reference indexer

Listens to a process build and produces the typed references a search
and impact-analysis index needs: tasks, rule-flow groups, sub-processes,
variables, globals, signals, messages, functions and resolved class names.

Usage:
    procindex index order.yaml
    procindex impact com.acme.Order processes/*.yaml
    procindex config

Library:
    from procindex import BuildPipeline, load_process

    index = BuildPipeline().build(load_process("order.yaml"))
    index.shared(PartType.SIGNAL)
"""

__version__ = "0.1.0"

# Core layer
from .core.errors import (
    ProcIndexError,
    MetadataDecodeError,
    LifecycleError,
    FrozenResourceError,
    DocumentError,
)
from .core.model import (
    PartType,
    ResourceType,
    Part,
    SharedReference,
    ResourceReference,
    Resource,
)
from .core.process import (
    ProcessDefinition,
    Node,
    RuleSetNode,
    WorkItemNode,
    SubProcessNode,
    Variable,
    ItemDefinition,
    Message,
)
from .core.dialects import DialectContributor, DialectRegistry
from .core.types import TypeReferenceSet, ClassNameResolver
from .core.index import ProcessIndex
from .core.listener import ProcessReferenceCollector, BuildState
from .core.registry import IndexRegistry

# Pipeline layer
from .pipeline import BuildPipeline
from .documents import load_process, parse_process

# Config (stays at root)
from .config import Config, ConfigManager, get_config
