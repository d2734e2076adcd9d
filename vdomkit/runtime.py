"""Node registry, recycling and the global runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .dom import Document, Element, Event, Node
from .vnode import function_callback

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"


@dataclass
class Config:
    """Runtime options."""

    clear_memory: bool = True
    unsafe_patch: bool = False


class Recycler:
    """Keeps detached nodes for reuse, keyed by node name and namespace."""

    def __init__(self, document: Document) -> None:
        self.document = document
        self.nodes: Dict[str, List[Node]] = {}

    def _pop(self, key: str) -> Optional[Node]:
        pool = self.nodes.get(key)
        return pool.pop() if pool else None

    def create(self, name: str) -> Node:
        return self._pop(name.upper()) or self.document.create_element(name)

    def create_ns(self, name: str, namespace: str) -> Node:
        node = self._pop(name.upper() + namespace) or self.document.create_element_ns(namespace, name)
        node.dom_ns = namespace
        return node

    def create_text(self, text: str) -> Node:
        node = self._pop("#TEXT")
        if node is None:
            return self.document.create_text_node(text)
        node.node_value = text
        return node

    def create_comment(self, comment: str) -> Node:
        node = self._pop("#COMMENT")
        if node is None:
            return self.document.create_comment(comment)
        node.node_value = comment
        return node

    def collect(self, node: Node) -> None:
        """Clean ``node`` and its subtree and store them for reuse."""
        while node.last_child is not None:
            child = node.last_child
            node.remove_child(child)
            self.collect(child)
        if isinstance(node, Element):
            for name in list(node.attributes):
                node.remove_attribute(name)
        node.dom_vnode = None
        if node.dom_raws is not None:
            for raw in node.dom_raws:
                node.props.pop(raw, None)
            node.dom_raws = None
        if node.dom_events is not None and isinstance(node, Element):
            for event, listener in node.dom_events.items():
                node.remove_event_listener(event, listener)
        node.dom_events = None
        if node.node_value:
            node.node_value = ""
        node.props.clear()

        name = node.node_name.upper()
        if node.dom_ns is not None:
            name += node.namespace_uri or ""
        self.nodes.setdefault(name, []).append(node)


class Runtime:
    """Maps integer handles to DOM nodes and performs DOM operations on them."""

    def __init__(self, config: Config, document: Document) -> None:
        self.config = config
        self.document = document
        self.recycler = Recycler(document)
        self.nodes: Dict[int, Optional[Node]] = {0: None}
        self._last_ptr = 0

    def event_proxy(self, event: Event) -> bool:
        element = event.current_target
        return function_callback(element.dom_vnode, event.type, event)

    def node(self, ptr: int) -> Optional[Node]:
        return self.nodes.get(ptr)

    def _add_ptr(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        if node.dom_ptr is not None:
            return node.dom_ptr
        self._last_ptr += 1
        self.nodes[self._last_ptr] = node
        node.dom_ptr = self._last_ptr
        return self._last_ptr

    def add_node(self, node: Node) -> int:
        self._add_ptr(node.parent_node)
        self._add_ptr(node.next_sibling)
        return self._add_ptr(node)

    def create_element(self, tag_name: str) -> int:
        return self._add_ptr(self.recycler.create(tag_name))

    def create_element_ns(self, namespace: str, qualified_name: str) -> int:
        return self._add_ptr(self.recycler.create_ns(qualified_name, namespace))

    def create_text_node(self, text: str) -> int:
        return self._add_ptr(self.recycler.create_text(text))

    def create_comment(self, text: str) -> int:
        return self._add_ptr(self.recycler.create_comment(text))

    def create_document_fragment(self) -> int:
        return self._add_ptr(self.document.create_document_fragment())

    def insert_before(self, parent_ptr: int, new_ptr: int, reference_ptr: int) -> None:
        self.nodes[parent_ptr].insert_before(self.nodes[new_ptr], self.nodes.get(reference_ptr))

    def remove_child(self, child_ptr: int) -> None:
        node = self.nodes.get(child_ptr)
        if node is None:
            return
        if node.parent_node is not None:
            node.parent_node.remove_child(node)
        self.recycler.collect(node)

    def append_child(self, parent_ptr: int, child_ptr: int) -> None:
        self.nodes[parent_ptr].append_child(self.nodes[child_ptr])

    def remove_attribute(self, node_ptr: int, attr: str) -> None:
        self.nodes[node_ptr].remove_attribute(attr)

    def set_attribute(self, node_ptr: int, attr: str, value: str) -> None:
        node = self.nodes[node_ptr]
        if not attr.startswith("x"):
            node.set_attribute(attr, value)
        elif attr[3:4] == ":":
            node.set_attribute_ns(XML_NAMESPACE, attr, value)
        elif attr[5:6] == ":":
            node.set_attribute_ns(XLINK_NAMESPACE, attr, value)
        else:
            node.set_attribute(attr, value)

    def parent_node(self, node_ptr: int) -> int:
        node = self.nodes.get(node_ptr)
        if node is None or node.parent_node is None:
            return 0
        return node.parent_node.dom_ptr or 0

    def next_sibling(self, node_ptr: int) -> int:
        node = self.nodes.get(node_ptr)
        sibling = node.next_sibling if node is not None else None
        return sibling.dom_ptr or 0 if sibling is not None else 0

    def set_node_value(self, node_ptr: int, text: str) -> None:
        self.nodes[node_ptr].node_value = text


_runtime: Optional[Runtime] = None


def init(config: Optional[Config] = None, document: Optional[Document] = None) -> Runtime:
    """Create and install the global runtime."""
    global _runtime
    _runtime = Runtime(config or Config(), document or Document())
    return _runtime


def get_runtime() -> Runtime:
    """Return the installed runtime."""
    if _runtime is None:
        raise RuntimeError("runtime is not initialised; call init() first")
    return _runtime