"""
treediff.core — Positional Tree Diff
====================================

MODEL
═════

§1  TREES
─────────

A tree is built from immutable nodes.  Each node carries:

    value     the domain payload (compared with ==, rendered with str())
    key       an optional identity label (advisory only — never consulted)
    children  an ordered tuple of child nodes

Children are held by reference.  The same subtree instance may appear in
several trees; nothing is ever deep-copied.


§2  POSITIONS
─────────────

Every node visited by a walk of the ORIGINAL tree receives an integer
position from a single counter:

    • the root is position 0
    • the counter advances once before each child is visited
    • children are visited left to right, parent before children

    root                 0
    ├── child1           1
    │   └── child1-1     2
    └── child2           3
        ├── child2-1     4
        └── child2-2     5

A walk does not descend into a subtree that is replaced or removed, so the
nodes inside it consume no positions.  The diff and the applier skip the
same subtrees, so they always agree.  A position is meaningful only for
one (original tree, patch set) pair.


§3  PATCHES
───────────

    Update(node)     replace the node at this position (and its subtree)
    Insert(nodes)    append new subtrees after the node's existing children
    Remove()         drop the node at this position (and its subtree)

A patch set maps position → patch, at most one patch per position.


§4  THE DIFF
────────────

    visit(a, b) at the next position:
        b is missing         → Remove(), stop
        a.value != b.value   → Update(b), stop
        b has extra children → Insert(b[na:]) at this position
        queue (a[i], b[i] or missing) for each child of a, left to right

Queued pairs are taken last in, first out, so positions are handed out in
pre-order.  The walk keeps its own stack; depth is not limited by the
interpreter recursion limit.

Pairing is purely by index.  A reorder shows up as Updates, Removes and
an Insert, never as a move.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator, Optional


logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  TREE MODEL
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Node:
    """
    One vertex of a labeled, ordered tree.

    Examples:
        Node("leaf")
        Node("root", None, (Node("a"), Node("b")))
    """
    value: Any
    key: Optional[str] = None
    children: tuple["Node", ...] = ()

    def __post_init__(self):
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, Node):
                raise TypeError(
                    f"Node children must be Node instances, got {type(child).__name__}"
                )
        object.__setattr__(self, 'children', children)

    def size(self) -> int:
        """Number of nodes in this subtree."""
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count

    def walk(self) -> Iterator["Node"]:
        """Pre-order iteration: parent first, children left to right."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        if self.key is None:
            return f"Node({self.value!r}, children={len(self.children)})"
        return f"Node({self.value!r}, key={self.key!r}, children={len(self.children)})"


def make_node(value: Any, key: Optional[str] = None, children=()) -> Node:
    """
    Build a node from a value, an optional key and already-built children.

    The children are shared, not copied.
    """
    return Node(value, key, tuple(children))


# ═══════════════════════════════════════════════════════════════════
#  PATCH MODEL
# ═══════════════════════════════════════════════════════════════════

class PatchOp(Enum):
    """Types of patch operations."""
    UPDATE = auto()     # Replace the subtree at a position
    INSERT = auto()     # Append subtrees after a node's children
    REMOVE = auto()     # Drop the subtree at a position


class Patch:
    """Base class for patches.  Not instantiated directly."""
    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Update(Patch):
    """The positioned node is replaced wholesale by `node`."""
    node: Node

    @property
    def op(self) -> PatchOp:
        return PatchOp.UPDATE

    def __repr__(self) -> str:
        return f"Update({self.node.value!r})"


@dataclass(frozen=True, slots=True)
class Insert(Patch):
    """`nodes` are appended after the existing children of the positioned node."""
    nodes: tuple[Node, ...]

    def __post_init__(self):
        object.__setattr__(self, 'nodes', tuple(self.nodes))

    @property
    def op(self) -> PatchOp:
        return PatchOp.INSERT

    def __repr__(self) -> str:
        return f"Insert({[n.value for n in self.nodes]!r})"


@dataclass(frozen=True, slots=True)
class Remove(Patch):
    @property
    def op(self) -> PatchOp:
        return PatchOp.REMOVE

    def __repr__(self) -> str:
        return "Remove()"


PatchSet = dict[int, Patch]


# ═══════════════════════════════════════════════════════════════════
#  DIFF
# ═══════════════════════════════════════════════════════════════════

def diff(a: Node, b: Node) -> PatchSet:
    """
    Compute the positional patch set that turns tree `a` into tree `b`.

    Positions are pre-order indices into `a` (see §2).  Patches hold
    references into `b`; nothing is copied.

        diff(t, t) == {}    """
    patches: PatchSet = {}
    counter = itertools.count()
    # Pending pairs in reverse sibling order; b is None for a child of `a`
    # that has no counterpart in `b`.
    stack: list[tuple[Node, Optional[Node]]] = [(a, b)]

    while stack:
        old, new = stack.pop()
        position = next(counter)

        if new is None:
            # Descendants of a removed child are never numbered.
            _record(patches, position, Remove())
            continue

        if old.value != new.value:
            _record(patches, position, Update(new))
            continue

        na = len(old.children)
        nb = len(new.children)
        if nb > na:
            _record(patches, position, Insert(new.children[na:]))
        for i in reversed(range(na)):
            stack.append((old.children[i], new.children[i] if i < nb else None))

    logger.debug("diff: %d patch(es)", len(patches))
    return patches


def _record(patches: PatchSet, position: int, patch: Patch) -> None:
    logger.debug("diff: %r at position %d", patch, position)
    patches[position] = patch
