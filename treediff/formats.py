"""
treediff.formats — Convert between plain data and trees, and list patches.

Supported conversions:
    • Python objects (nested dicts / scalars) ↔ Node
    • JSON strings ↔ Node
    • PatchSet → human-readable listing
"""

import json
from typing import Any

from .core import Insert, Node, PatchSet, Remove, Update


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS ↔ TREES
# ═══════════════════════════════════════════════════════════════════

_SCALARS = (str, int, float, bool, type(None))


def from_python(obj: Any) -> Node:
    """
    Convert a Python object to a tree.

    Mapping:
        {"value": v, "key": k, "children": [...]}  → Node(v, k, children)
        str / int / float / bool / None           → leaf Node(obj)

    "key" and "children" are optional.  Children are converted recursively.
    """
    if isinstance(obj, Node):
        return obj
    if isinstance(obj, _SCALARS):
        return Node(obj)
    if isinstance(obj, dict):
        if "value" not in obj:
            raise TypeError(f"Tree mapping needs a 'value' entry, got keys {list(obj)}")
        key = obj.get("key")
        if key is not None and not isinstance(key, str):
            raise TypeError(f"Node key must be a string, got {type(key).__name__}")
        children = obj.get("children") or ()
        if not isinstance(children, (list, tuple)):
            raise TypeError(f"Node children must be a list, got {type(children).__name__}")
        return Node(obj["value"], key, tuple(from_python(c) for c in children))

    raise TypeError(f"Cannot convert {type(obj).__name__} to a tree node")


def to_python(node: Node) -> dict:
    """
    Convert a tree back to nested dicts.

    Inverse of from_python for the dict form:
        to_python(from_python(obj)) == obj
    when obj spells out "value" on every level.  "key" and "children" are
    omitted when empty.
    """
    if not isinstance(node, Node):
        raise TypeError(f"Unknown node type: {type(node)}")
    out: dict[str, Any] = {"value": node.value}
    if node.key is not None:
        out["key"] = node.key
    if node.children:
        out["children"] = [to_python(child) for child in node.children]
    return out


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ TREES
# ═══════════════════════════════════════════════════════════════════

def from_json(text: str) -> Node:
    """Parse a JSON string into a tree."""
    return from_python(json.loads(text))


def to_json(node: Node, **kwargs) -> str:
    """Convert a tree to a JSON string."""
    return json.dumps(to_python(node), **kwargs)


# ═══════════════════════════════════════════════════════════════════
#  PATCH LISTING
# ═══════════════════════════════════════════════════════════════════

def describe(patches: PatchSet) -> list[str]:
    """
    One line per patch, ordered by position:

        0 insert child5
        2 remove
        4 update child2-2

    An Insert lists each of its subtree roots on its own line.
    """
    lines: list[str] = []
    for position in sorted(patches):
        match patches[position]:
            case Update(node=node):
                lines.append(f"{position} update {node.value}")
            case Insert(nodes=nodes):
                lines.extend(f"{position} insert {node.value}" for node in nodes)
            case Remove():
                lines.append(f"{position} remove")
            case unknown:
                raise TypeError(f"Unknown patch type: {type(unknown)}")
    return lines
