"""Generic mutable SVG document: an arena of nodes addressed by integer handles.

Referenced nodes (gradients, defs children, ...) are shared by handle. Links
between nodes are attribute values of type ``Link``/``FuncIRI`` holding the
target handle, so cloning a subtree never duplicates what it references.
"""

from __future__ import annotations

import copy
import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from svgpathtools import Path as SvgPath

from svgnorm.svg.values import DecorationPaint, FuncIRI, Link


class ElementId(str, enum.Enum):
    SVG = "svg"
    G = "g"
    DEFS = "defs"
    USE = "use"
    SWITCH = "switch"
    A = "a"
    SYMBOL = "symbol"
    PATH = "path"
    RECT = "rect"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    LINE = "line"
    POLYLINE = "polyline"
    POLYGON = "polygon"
    TEXT = "text"
    TSPAN = "tspan"
    TREF = "tref"
    IMAGE = "image"
    LINEAR_GRADIENT = "linearGradient"
    RADIAL_GRADIENT = "radialGradient"
    STOP = "stop"
    CLIP_PATH = "clipPath"
    MASK = "mask"
    PATTERN = "pattern"
    FILTER = "filter"
    MARKER = "marker"
    TITLE = "title"
    DESC = "desc"
    METADATA = "metadata"
    STYLE = "style"


REFERENCED_KINDS = frozenset({
    ElementId.LINEAR_GRADIENT,
    ElementId.RADIAL_GRADIENT,
    ElementId.CLIP_PATH,
    ElementId.MASK,
    ElementId.PATTERN,
    ElementId.FILTER,
    ElementId.MARKER,
    ElementId.SYMBOL,
})

GRADIENTS = frozenset({ElementId.LINEAR_GRADIENT, ElementId.RADIAL_GRADIENT})

SHAPES = frozenset({
    ElementId.RECT,
    ElementId.CIRCLE,
    ElementId.ELLIPSE,
    ElementId.LINE,
    ElementId.POLYLINE,
    ElementId.POLYGON,
})

GRAPHICS = SHAPES | {ElementId.PATH, ElementId.TEXT, ElementId.IMAGE}


@dataclass
class Node:
    handle: int
    # None for text nodes
    tag: ElementId | str | None
    id: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[int] = field(default_factory=list)
    parent: int | None = None
    # Character data of a text node
    text: str | None = None
    # Attribute names copied from an ancestor rather than set locally
    inherited: set[str] = field(default_factory=set)

    @property
    def is_text(self) -> bool:
        return self.tag is None

    @property
    def is_element(self) -> bool:
        return self.tag is not None

    def has(self, aid: str) -> bool:
        return aid in self.attributes

    def get(self, aid: str, default: Any = None) -> Any:
        return self.attributes.get(aid, default)

    def set(self, aid: str, value: Any) -> None:
        self.attributes[aid] = value
        self.inherited.discard(aid)

    def remove_attr(self, aid: str) -> None:
        self.attributes.pop(aid, None)
        self.inherited.discard(aid)

    def label(self) -> str:
        """Short human-readable name for diagnostics."""
        if self.is_text:
            return "#text"
        tag = self.tag.value if isinstance(self.tag, ElementId) else self.tag
        return f"{tag}#{self.id}" if self.id else tag


class Document:
    """Arena of nodes. Handles are never reused."""

    def __init__(self) -> None:
        self._nodes: dict[int, Node] = {}
        self._next_handle = 0
        self.root: int | None = None

    # ── construction ─────────────────────────────────────────────────────

    def create_element(
        self,
        tag: ElementId | str,
        id: str = "",
        attributes: dict[str, Any] | None = None,
    ) -> int:
        handle = self._allocate()
        self._nodes[handle] = Node(handle=handle, tag=tag, id=id, attributes=dict(attributes or {}))
        return handle

    def create_text(self, text: str) -> int:
        handle = self._allocate()
        self._nodes[handle] = Node(handle=handle, tag=None, text=text)
        return handle

    def _allocate(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    # ── access ───────────────────────────────────────────────────────────

    def node(self, handle: int) -> Node:
        return self._nodes[handle]

    def __contains__(self, handle: int) -> bool:
        return handle in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def svg_element(self) -> int | None:
        if self.root is None or self.root not in self._nodes:
            return None
        if self._nodes[self.root].tag != ElementId.SVG:
            return None
        return self.root

    def children(self, handle: int) -> list[int]:
        return list(self._nodes[handle].children)

    def element_children(self, handle: int) -> list[int]:
        return [h for h in self._nodes[handle].children if self._nodes[h].is_element]

    def parent(self, handle: int) -> int | None:
        return self._nodes[handle].parent

    def ancestors(self, handle: int) -> Iterator[int]:
        parent = self._nodes[handle].parent
        while parent is not None:
            yield parent
            parent = self._nodes[parent].parent

    def descendants(self, handle: int, include_self: bool = True) -> Iterator[int]:
        """Preorder walk. The tree may be edited below nodes not yet visited."""
        stack = [handle] if include_self else list(reversed(self._nodes[handle].children))
        while stack:
            h = stack.pop()
            if h not in self._nodes:
                continue
            yield h
            stack.extend(reversed(self._nodes[h].children))

    def elements(self, tag: ElementId | None = None) -> list[int]:
        """Snapshot of all element handles under the root, in document order."""
        if self.root is None:
            return []
        return [
            h for h in self.descendants(self.root)
            if self._nodes[h].is_element and (tag is None or self._nodes[h].tag == tag)
        ]

    def find_by_id(self, element_id: str) -> int | None:
        if not element_id or self.root is None:
            return None
        for h in self.descendants(self.root):
            if self._nodes[h].id == element_id:
                return h
        return None

    def is_descendant(self, handle: int, ancestor: int) -> bool:
        return handle == ancestor or ancestor in self.ancestors(handle)

    def text_content(self, handle: int) -> str:
        return "".join(
            self._nodes[h].text or ""
            for h in self.descendants(handle)
            if self._nodes[h].is_text
        )

    # ── structure editing ────────────────────────────────────────────────

    def append(self, parent: int, child: int) -> None:
        self.detach(child)
        self._nodes[parent].children.append(child)
        self._nodes[child].parent = parent

    def insert_before(self, reference: int, new: int) -> None:
        self.detach(new)
        parent = self._nodes[reference].parent
        if parent is None:
            raise ValueError("cannot insert next to a detached node")
        siblings = self._nodes[parent].children
        siblings.insert(siblings.index(reference), new)
        self._nodes[new].parent = parent

    def detach(self, handle: int) -> None:
        node = self._nodes[handle]
        if node.parent is not None:
            self._nodes[node.parent].children.remove(handle)
            node.parent = None

    def remove(self, handle: int) -> None:
        """Detach ``handle`` and drop its whole subtree from the arena."""
        self.detach(handle)
        for h in list(self.descendants(handle)):
            del self._nodes[h]
        if handle == self.root:
            self.root = None

    def replace_with_children(self, handle: int) -> list[int]:
        """Splice the children of ``handle`` into its place and drop it."""
        children = self.children(handle)
        for child in children:
            self.insert_before(handle, child)
        self.remove(handle)
        return children

    def wrap(self, handle: int, tag: ElementId, attributes: dict[str, Any] | None = None) -> int:
        """Insert a new element in place of ``handle`` and move ``handle`` into it."""
        wrapper = self.create_element(tag, attributes=attributes)
        self.insert_before(handle, wrapper)
        self.append(wrapper, handle)
        return wrapper

    def deep_copy(self, handle: int) -> int:
        """Clone a subtree. Links keep pointing at the original (shared) targets."""
        src = self._nodes[handle]
        if src.is_text:
            return self.create_text(src.text or "")
        new = self.create_element(src.tag, src.id, copy.copy(src.attributes))
        new_node = self._nodes[new]
        new_node.inherited = set(src.inherited)
        for aid, value in src.attributes.items():
            if isinstance(value, SvgPath):
                new_node.attributes[aid] = copy.deepcopy(value)
            elif isinstance(value, list):
                new_node.attributes[aid] = list(value)
        for child in src.children:
            self.append(new, self.deep_copy(child))
        return new

    # ── references ───────────────────────────────────────────────────────

    def is_referenced(self, handle: int) -> bool:
        node = self._nodes[handle]
        if node.tag in REFERENCED_KINDS:
            return True
        return node.parent is not None and self._nodes[node.parent].tag == ElementId.DEFS

    def in_referenced_subtree(self, handle: int) -> bool:
        return any(self.is_referenced(h) for h in (handle, *self.ancestors(handle)))

    def links_from(self, handle: int) -> list[int]:
        values = []
        for value in self._nodes[handle].attributes.values():
            if isinstance(value, DecorationPaint):
                values.extend((value.fill, value.stroke))
            else:
                values.append(value)
        return [v.target for v in values if isinstance(v, Link) and v.target in self._nodes]

    def live_references(self) -> set[int]:
        """Handles of referenced nodes reachable from the rendered tree."""
        if self.root is None:
            return set()
        live: set[int] = set()
        stack = [
            h for h in self.descendants(self.root)
            if self._nodes[h].is_element and not self.in_referenced_subtree(h)
        ]
        visited = set(stack)
        while stack:
            h = stack.pop()
            for target in self.links_from(h):
                if target in visited:
                    continue
                live.add(target)
                for sub in self.descendants(target):
                    if sub not in visited:
                        visited.add(sub)
                        stack.append(sub)
        return live

    def prune_unused_references(self) -> list[int]:
        """Remove referenced nodes that nothing live links to. Returns removed handles."""
        live = self.live_references()
        removed = []
        for h in self.elements():
            if h not in self._nodes or not self.is_referenced(h):
                continue
            if h in live or any(a in live for a in self.ancestors(h)):
                continue
            removed.append(h)
            self.remove(h)
        return removed

    # ── debugging / comparison ───────────────────────────────────────────

    def dump(self, handle: int | None = None) -> tuple:
        """Deterministic nested-tuple view of a subtree, with links shown as ids."""
        if handle is None:
            handle = self.root
        if handle is None:
            return ()
        node = self._nodes[handle]
        if node.is_text:
            return ("#text", node.text)
        attrs = tuple(sorted((k, self._dump_value(v)) for k, v in node.attributes.items()))
        children = tuple(self.dump(c) for c in node.children)
        return (node.label(), attrs, children)

    def _dump_value(self, value: Any) -> Any:
        if isinstance(value, Link):
            target = self._nodes.get(value.target)
            name = target.label() if target is not None else "<dangling>"
            if isinstance(value, FuncIRI):
                return ("url", name, repr(value.fallback))
            return ("link", name)
        if isinstance(value, SvgPath):
            return ("path", value.d())
        if isinstance(value, list):
            return tuple(value)
        return repr(value)
