"""
Renderable content as a tree of ``Leaf`` text and ``Node`` wrappers.

``map_leaves`` is a structural transform: it builds a new tree with the same
tags, attributes, child order and child count, and only the leaf text may
differ.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from lipi.core.detection import is_eligible


@dataclass(frozen=True)
class Leaf:
    text: str


@dataclass(frozen=True)
class Node:
    tag: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    children: Tuple["Tree", ...] = ()


Tree = Union[Leaf, Node]
Forest = Union[Tree, List[Tree], Tuple[Tree, ...]]


def _fold(root: Any, children_of: Callable[[Any], Optional[Sequence[Any]]], build_leaf, build_node):
    """
    Post-order rebuild of ``root`` with an explicit stack.

    ``children_of`` returns None for a leaf and the child sequence for a
    branch; nesting depth is bounded by memory, not the interpreter stack.
    """
    kids = children_of(root)
    if kids is None:
        return build_leaf(root)
    stack = [(root, kids, [])]
    while True:
        item, kids, done = stack[-1]
        if len(done) < len(kids):
            child = kids[len(done)]
            grandkids = children_of(child)
            if grandkids is None:
                done.append(build_leaf(child))
            else:
                stack.append((child, grandkids, []))
            continue
        stack.pop()
        built = build_node(item, done)
        if not stack:
            return built
        stack[-1][2].append(built)


def _tree_children(tree: Any) -> Optional[Sequence[Tree]]:
    if isinstance(tree, Leaf):
        return None
    if isinstance(tree, Node):
        return tree.children
    raise TypeError(f"not a tree: {type(tree).__name__}")


def map_leaves(tree: Forest, fn: Callable[[str], str]) -> Forest:
    if isinstance(tree, (list, tuple)):
        mapped = [map_leaves(child, fn) for child in tree]
        return mapped if isinstance(tree, list) else tuple(mapped)
    return _fold(
        tree,
        _tree_children,
        lambda leaf: Leaf(fn(leaf.text)),
        lambda node, children: Node(node.tag, dict(node.attributes), tuple(children)),
    )


def iter_leaves(tree: Forest) -> Iterator[Leaf]:
    """Leaves in document order."""
    stack = list(reversed(tree)) if isinstance(tree, (list, tuple)) else [tree]
    while stack:
        item = stack.pop()
        if isinstance(item, Leaf):
            yield item
        elif isinstance(item, Node):
            stack.extend(reversed(item.children))


def transliterate_tree(tree: Forest, context) -> Forest:
    """Transliterate every Devanagari leaf through ``context``; leave the rest."""

    def convert(text: str) -> str:
        if context.initialized and is_eligible(text):
            return context.transliterate(text)
        return text

    return map_leaves(tree, convert)


def _data_children(data: Any) -> Optional[List[Any]]:
    if isinstance(data, str):
        return None
    if not isinstance(data, dict):
        raise ValueError(f"unsupported tree value: {type(data).__name__}")
    tag = data.get("tag")
    if not isinstance(tag, str) or not tag:
        raise ValueError("node is missing a tag")
    attributes = data.get("attributes")
    if attributes is not None and not isinstance(attributes, dict):
        raise ValueError(f"attributes of <{tag}> must be an object")
    children = data.get("children")
    if children is None:
        return []
    if isinstance(children, (str, dict)):
        return [children]
    if isinstance(children, list):
        return children
    raise ValueError(f"children of <{tag}> must be a list")


def tree_from_data(data: Any) -> Tree:
    """Build a tree from JSON data: strings become leaves, objects become nodes."""
    return _fold(
        data,
        _data_children,
        Leaf,
        lambda d, children: Node(d["tag"], dict(d.get("attributes") or {}), tuple(children)),
    )


def tree_to_data(tree: Tree) -> Any:
    return _fold(
        tree,
        _tree_children,
        lambda leaf: leaf.text,
        lambda node, children: {"tag": node.tag, "attributes": dict(node.attributes), "children": children},
    )
