"""
treediff.render — Apply a patch set as a textual projection.

The applier never builds a new tree.  It walks the ORIGINAL tree with the
same position counter the diff used, looks each position up in the patch
set, and emits one line per node of the resulting tree:

    root
      child1
      child2
        child2-2(*)
        child2-1(*)
          child2-1-1(*)

Two spaces of indentation per depth level; every inserted or replaced node
(including all of its descendants) carries the change marker.

PRECONDITION: the patch set must come from diff(root, ...) on the SAME
root.  Any other pairing renders something meaningless; it is not detected.
"""

import itertools
import logging
import sys
from typing import Iterator, Optional, TextIO

from .core import Insert, Node, PatchSet, Remove, Update


logger = logging.getLogger(__name__)

INDENT_UNIT = "  "
CHANGE_MARKER = "(*)"


# ═══════════════════════════════════════════════════════════════════
#  LINE FORMATTING
# ═══════════════════════════════════════════════════════════════════

def indent(depth: int, unit: str = INDENT_UNIT) -> str:
    return unit * depth


def format_line(node: Node, depth: int, changed: bool = False,
                marker: str = CHANGE_MARKER, indent_unit: str = INDENT_UNIT) -> str:
    """One rendered node: indentation, str(value), and the marker if changed."""
    line = f"{indent(depth, indent_unit)}{node.value}"
    if changed:
        line += marker
    return line


def strip_marker(line: str, marker: str = CHANGE_MARKER) -> str:
    """
    Drop a trailing change marker from a rendered line, if present.

    Text alone cannot tell a marker from a value that happens to end with
    the same characters: an unchanged node whose value is "a(*)" is
    stripped to "a" too.  Use render_entries() when the changed flag has
    to be exact.
    """
    if marker and line.endswith(marker):
        return line[:-len(marker)]
    return line


def _project(root: Node, patches: PatchSet,
             changed: bool = False) -> Iterator[tuple[Node, int, bool]]:
    """
    Yield (node, depth, changed) for every line of the projection.

    Positions are reproduced exactly as diff() assigned them: the root is
    0, and the next position goes to each original node as it is reached
    in pre-order.  Marked nodes come from the new tree and are never
    numbered.
    """
    counter = itertools.count()
    stack: list[tuple[Node, int, bool]] = [(root, 0, changed)]

    while stack:
        node, depth, marked = stack.pop()
        if marked:
            yield node, depth, True
            stack.extend((child, depth + 1, True) for child in reversed(node.children))
            continue

        match patches.get(next(counter)):
            case None:
                yield node, depth, False
                stack.extend((child, depth + 1, False) for child in reversed(node.children))
            case Update(node=new_node):
                # The old children are never numbered, same as in diff().
                stack.append((new_node, depth, True))
            case Insert(nodes=new_nodes):
                yield node, depth, False
                # Inserted subtrees come out after the existing children.
                stack.extend((new_node, depth + 1, True) for new_node in reversed(new_nodes))
                stack.extend((child, depth + 1, False) for child in reversed(node.children))
            case Remove():
                pass
            case unknown:
                raise TypeError(f"Unknown patch type: {type(unknown)}")


def render_tree(root: Node, changed: bool = False, *,
                marker: str = CHANGE_MARKER, indent_unit: str = INDENT_UNIT) -> list[str]:
    """
    Plain pre-order rendering of a whole tree.

    With changed=True every line is marked, which is how inserted and
    replaced subtrees appear in a projection.
    """
    return [format_line(node, depth, flag, marker, indent_unit)
            for node, depth, flag in _project(root, {}, changed)]


# ═══════════════════════════════════════════════════════════════════
#  APPLY
# ═══════════════════════════════════════════════════════════════════

def render_entries(root: Node, patches: PatchSet, *,
                   indent_unit: str = INDENT_UNIT) -> list[tuple[str, bool]]:
    """
    Project `patches` onto `root` as (unmarked line, changed) pairs.

    Same walk as render_lines(), with the change flag kept out of the text.
    """
    entries = [(format_line(node, depth, False, indent_unit=indent_unit), flag)
               for node, depth, flag in _project(root, patches)]
    logger.debug("render: %d line(s) from %d patch(es)", len(entries), len(patches))
    return entries


def render_lines(root: Node, patches: PatchSet, *,
                 marker: str = CHANGE_MARKER, indent_unit: str = INDENT_UNIT) -> list[str]:
    """Project `patches` onto `root` and return the rendered lines."""
    return [line + marker if changed else line
            for line, changed in render_entries(root, patches, indent_unit=indent_unit)]


def patch(root: Node, patches: PatchSet, file: Optional[TextIO] = None, *,
          marker: str = CHANGE_MARKER, indent_unit: str = INDENT_UNIT) -> None:
    """
    Apply `patches` to `root` and print the projection, one line per node.

    Output goes to `file` (default: standard output).  Neither `root` nor
    `patches` is modified.
    """
    out = file if file is not None else sys.stdout
    for line in render_lines(root, patches, marker=marker, indent_unit=indent_unit):
        print(line, file=out)


apply_and_render = patch
