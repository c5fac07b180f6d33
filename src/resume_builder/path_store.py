"""Copy-on-write mutations over a nested document tree.

A tree is plain JSON-shaped data (dicts, lists, scalars). A path is a
sequence of segments: ``str`` segments name a dict field and ``int``
segments index a list. Paths may also be written as dotted strings, where
all-digit parts become indices (``"experience.0.current"``).

Every mutating function deep-copies its input and returns the new tree, so
callers holding the previous tree never observe a half-applied update.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Sequence, Union

from resume_builder.errors import PathError

logger = logging.getLogger(__name__)

Segment = Union[str, int]
PathLike = Union[str, Sequence[Segment]]

# Record fields cleared when the sibling "current" flag is switched on.
END_FIELDS = ("end_date", "end_year")
CURRENT_FIELD = "current"

_MISSING = object()


def parse_path(path: PathLike) -> tuple[Segment, ...]:
    """Normalise a dotted string or segment sequence into a segment tuple."""
    if isinstance(path, str):
        raw: Sequence[Segment] = [p for p in path.split(".") if p != ""]
    else:
        raw = path
    segments: list[Segment] = []
    for seg in raw:
        if isinstance(seg, str) and seg.isdigit():
            segments.append(int(seg))
        elif isinstance(seg, (str, int)) and not isinstance(seg, bool):
            segments.append(seg)
        else:
            raise PathError(f"Invalid path segment {seg!r}")
    return tuple(segments)


def format_path(path: PathLike) -> str:
    return ".".join(str(s) for s in parse_path(path))


def get_in(tree: Any, path: PathLike, default: Any = None) -> Any:
    """Return the value at ``path`` or ``default`` when any step is absent."""
    node = tree
    for seg in parse_path(path):
        if isinstance(node, dict) and isinstance(seg, str):
            if seg not in node:
                return default
            node = node[seg]
        elif isinstance(node, list) and isinstance(seg, int):
            if not 0 <= seg < len(node):
                return default
            node = node[seg]
        else:
            return default
    return node


def set_in(tree: dict, path: PathLike, value: Any) -> dict:
    """Return a new tree with ``value`` stored at ``path``.

    Absent intermediate containers are created as empty dicts. Setting a
    record's ``current`` flag to True also clears its end-date field.

    Raises:
        PathError: the path is empty, descends through a scalar, or uses a
            list index past the end of the list.
    """
    segments = parse_path(path)
    if not segments:
        raise PathError("Cannot set the tree root")

    new_tree = deepcopy(tree)
    node = new_tree
    for depth, seg in enumerate(segments[:-1]):
        node = _descend_for_write(node, seg, segments[: depth + 1])

    last = segments[-1]
    if isinstance(node, dict) and isinstance(last, str):
        node[last] = deepcopy(value)
    elif isinstance(node, list) and isinstance(last, int):
        if 0 <= last < len(node):
            node[last] = deepcopy(value)
        elif last == len(node):
            node.append(deepcopy(value))
        else:
            raise PathError(f"Index {last} out of range at {format_path(segments)}")
    else:
        raise PathError(f"Cannot write {format_path(segments)}: parent is not a container")

    if last == CURRENT_FIELD and value is True and isinstance(node, dict):
        for end_field in END_FIELDS:
            if end_field in node:
                node[end_field] = ""
    return new_tree


def insert(tree: dict, array_path: PathLike, item: Any, index: int | None = None) -> dict:
    """Return a new tree with ``item`` inserted into the list at ``array_path``.

    ``index`` defaults to appending and is clamped to the list bounds. An
    absent list is created. A non-list target leaves the tree unchanged.
    """
    target = get_in(tree, array_path, _MISSING)
    if target is _MISSING or target is None:
        return set_in(tree, array_path, [item])
    if not isinstance(target, list):
        logger.warning("insert ignored: %s is not a list", format_path(array_path))
        return tree

    new_tree = deepcopy(tree)
    lst = get_in(new_tree, array_path)
    position = len(lst) if index is None else max(0, min(index, len(lst)))
    lst.insert(position, deepcopy(item))
    return new_tree


def remove_at(tree: dict, array_path: PathLike, index: int) -> dict:
    """Return a new tree without the list element at ``index``.

    Returns ``tree`` itself when the target is not a list or the index is
    out of range; indices may come from a render that is already stale.
    """
    target = get_in(tree, array_path)
    if not isinstance(target, list) or not 0 <= index < len(target):
        logger.debug("remove_at no-op: %s[%s]", format_path(array_path), index)
        return tree

    new_tree = deepcopy(tree)
    del get_in(new_tree, array_path)[index]
    return new_tree


def move(tree: dict, array_path: PathLike, from_index: int, to_index: int) -> dict:
    """Return a new tree with one list element moved from ``from_index`` to ``to_index``.

    Same no-op rules as :func:`remove_at`.
    """
    target = get_in(tree, array_path)
    if not isinstance(target, list):
        logger.debug("move no-op: %s is not a list", format_path(array_path))
        return tree
    size = len(target)
    if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
        logger.debug("move no-op: %s %s -> %s", format_path(array_path), from_index, to_index)
        return tree

    new_tree = deepcopy(tree)
    lst = get_in(new_tree, array_path)
    lst.insert(to_index, lst.pop(from_index))
    return new_tree


def _descend_for_write(node: Any, seg: Segment, walked: tuple[Segment, ...]) -> Any:
    if isinstance(node, dict) and isinstance(seg, str):
        child = node.get(seg)
        if child is None:
            child = node[seg] = {}
    elif isinstance(node, list) and isinstance(seg, int):
        if not 0 <= seg < len(node):
            raise PathError(f"Index {seg} out of range at {format_path(walked)}")
        child = node[seg]
        if child is None:
            child = node[seg] = {}
    else:
        raise PathError(f"Cannot descend into {format_path(walked)}")

    if not isinstance(child, (dict, list)):
        raise PathError(f"{format_path(walked)} holds a scalar, not a container")
    return child
