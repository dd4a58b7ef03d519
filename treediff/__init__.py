"""
Positional Tree Diff
====================

Structural difference between two versions of a labeled, ordered tree,
replayed as an annotated text projection of the new tree.

    old = make_node("root", None, [make_node("a")])
    new = make_node("root", None, [make_node("a"), make_node("b")])

    diff(old, new)        → {0: Insert(['b'])}
    patch(old, diff(old, new))
        root
          a
          b(*)

Children are paired purely by index: no keys, no move detection.  Patch
positions are pre-order indices into the ORIGINAL tree and are only valid
for that tree.  Subtrees referenced by patches are shared with the new
tree, never copied.
"""

from treediff.core import (
    # Trees
    Node,
    make_node,
    # Patches
    PatchOp,
    Patch,
    Update,
    Insert,
    Remove,
    PatchSet,
    # Diff
    diff,
)
from treediff.render import (
    CHANGE_MARKER, INDENT_UNIT,
    patch, apply_and_render, render_entries, render_lines, render_tree,
)
from treediff.formats import (
    from_python, to_python, from_json, to_json, describe,
)

__version__ = "0.1.0"
__all__ = [
    "Node", "make_node",
    "PatchOp", "Patch", "Update", "Insert", "Remove", "PatchSet",
    "diff",
    "CHANGE_MARKER", "INDENT_UNIT",
    "patch", "apply_and_render", "render_entries", "render_lines", "render_tree",
    "from_python", "to_python", "from_json", "to_json", "describe",
]
