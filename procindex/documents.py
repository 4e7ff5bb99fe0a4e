"""
Process Documents — Process descriptors in YAML or JSON

A descriptor captures what the process compiler would report for one
process, so builds can be replayed outside the host toolchain:

    id: com.acme.OrderProcess
    name: OrderProcess
    imports: [com.acme.Order, com.acme.*]
    function_imports: [com.acme.Pricing.discount]
    globals: {audit: com.acme.AuditLog}
    item_definitions:
      - {id: _orderItem, structure_ref: com.acme.Order}
    variables:
      - {name: order, type: Object, item_subject_ref: _orderItem}
    signals: [orderShipped]
    messages:
      - {id: paymentReceived, name: Payment}
    nodes:
      - {kind: rule_set, name: Validate, rule_flow_group: validation}
      - {kind: work_item, name: Notify, work_name: Email}
      - {kind: sub_process, process_id: com.acme.Shipping}
    metadata:
      JavaDialectReferencedTypes: [com.acme.Customer]
      JavaDialectUnqualifiedTypes: [String]
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import yaml

from .core.errors import DocumentError
from .core.process import (
    ITEM_SUBJECT_REF_KEY,
    ItemDefinition,
    Message,
    Node,
    ProcessDefinition,
    RuleSetNode,
    SubProcessNode,
    Variable,
    WorkItemNode,
)

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def _generic_node(data: Mapping[str, Any], source: str) -> Node:
    return Node(id=str(data.get("id", "")), name=str(data.get("name", "")))


def _rule_set_node(data: Mapping[str, Any], source: str) -> Node:
    return RuleSetNode(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        rule_flow_group=_string(data, "rule_flow_group", source),
    )


def _work_item_node(data: Mapping[str, Any], source: str) -> Node:
    return WorkItemNode(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        work_name=_string(data, "work_name", source),
    )


def _sub_process_node(data: Mapping[str, Any], source: str) -> Node:
    return SubProcessNode(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        process_id=_string(data, "process_id", source) or "",
        process_name=_string(data, "process_name", source) or "",
    )


NODE_KINDS: Dict[str, Callable[[Mapping[str, Any], str], Node]] = {
    "node": _generic_node,
    "rule_set": _rule_set_node,
    "work_item": _work_item_node,
    "sub_process": _sub_process_node,
}


def load_process(path: Path) -> ProcessDefinition:
    """
    Load a process descriptor from a YAML or JSON file.

    Raises:
        DocumentError: If the file cannot be parsed or is malformed
    """
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}") from e

    try:
        if suffix in JSON_SUFFIXES:
            data = json.loads(text)
        elif suffix in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            raise DocumentError(
                f"Unsupported descriptor type '{suffix}' for {path}. "
                f"Valid: {', '.join(sorted(YAML_SUFFIXES | JSON_SUFFIXES))}"
            )
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(f"Cannot parse {path}: {e}") from e

    return parse_process(data, source=str(path))


def parse_process(data: Any, source: str = "<document>") -> ProcessDefinition:
    """Build a ProcessDefinition from descriptor data."""
    if not isinstance(data, Mapping):
        raise DocumentError(f"{source}: descriptor must be a mapping")
    if not data.get("id"):
        raise DocumentError(f"{source}: descriptor has no process 'id'")

    return ProcessDefinition(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        metadata=_parse_metadata(data.get("metadata") or {}, source),
        globals=_parse_globals(_mapping(data, "globals", source), source),
        imports=set(_strings(data, "imports", source)),
        function_imports=_strings(data, "function_imports", source),
        nodes=[_parse_node(n, source) for n in _list(data, "nodes", source)],
        variables=[_parse_variable(v, source) for v in _list(data, "variables", source)],
        item_definitions=_parse_item_definitions(_list(data, "item_definitions", source), source),
        signals=set(_strings(data, "signals", source)),
        messages=_parse_messages(_list(data, "messages", source), source),
    )


# =============================================================================
# Sections
# =============================================================================

def _parse_node(data: Any, source: str) -> Node:
    if not isinstance(data, Mapping):
        raise DocumentError(f"{source}: node entries must be mappings")
    kind = data.get("kind", "node")
    factory = NODE_KINDS.get(kind)
    if factory is None:
        raise DocumentError(
            f"{source}: unknown node kind '{kind}'. Valid: {', '.join(NODE_KINDS)}"
        )
    return factory(data, source)


def _parse_variable(data: Any, source: str) -> Variable:
    if not isinstance(data, Mapping) or not data.get("name"):
        raise DocumentError(f"{source}: variables need a 'name'")
    metadata = {}
    item_ref = _string(data, "item_subject_ref", source)
    if item_ref:
        metadata[ITEM_SUBJECT_REF_KEY] = item_ref
    return Variable(
        name=str(data["name"]),
        type=_string(data, "type", source) or "Object",
        metadata=metadata,
    )


def _parse_item_definitions(entries: List[Any], source: str) -> Dict[str, ItemDefinition]:
    items = {}
    for entry in entries:
        if not isinstance(entry, Mapping) or not entry.get("id"):
            raise DocumentError(f"{source}: item definitions need an 'id'")
        item = ItemDefinition(id=str(entry["id"]), structure_ref=_string(entry, "structure_ref", source))
        items[item.id] = item
    return items


def _parse_globals(data: Mapping[str, Any], source: str) -> Dict[str, str]:
    globals_ = {}
    for name, type_name in data.items():
        if not isinstance(type_name, str) or not type_name:
            raise DocumentError(f"{source}: global '{name}' needs a type name")
        globals_[str(name)] = type_name
    return globals_


def _parse_messages(entries: List[Any], source: str) -> Dict[str, Message]:
    messages = {}
    for entry in entries:
        if isinstance(entry, str):
            entry = {"id": entry}
        if not isinstance(entry, Mapping) or not entry.get("id"):
            raise DocumentError(f"{source}: messages need an 'id'")
        message = Message(
            id=str(entry["id"]),
            name=str(entry.get("name") or ""),
            type=str(entry.get("type") or ""),
        )
        messages[message.id] = message
    return messages


def _parse_metadata(data: Any, source: str) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise DocumentError(f"{source}: 'metadata' must be a mapping")
    # lists are the dialect type sets the compiler would have produced
    return {
        str(k): set(v) if isinstance(v, list) else v
        for k, v in data.items()
    }


def _list(data: Mapping[str, Any], key: str, source: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentError(f"{source}: '{key}' must be a list")
    return value


def _mapping(data: Mapping[str, Any], key: str, source: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DocumentError(f"{source}: '{key}' must be a mapping")
    return value


def _strings(data: Mapping[str, Any], key: str, source: str) -> List[str]:
    values = _list(data, key, source)
    for value in values:
        if not isinstance(value, str):
            raise DocumentError(f"{source}: '{key}' entries must be strings")
    return values


def _string(data: Mapping[str, Any], key: str, source: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DocumentError(f"{source}: '{key}' must be a string, got {type(value).__name__}")
    return value
