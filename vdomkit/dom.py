"""A small in-memory document object model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

Listener = Callable[["Event"], Any]


@dataclass
class Event:
    """An event dispatched to an element."""

    type: str
    target: Optional["Node"] = None
    current_target: Optional["Node"] = None


class Node:
    """Base of every node in the tree."""

    node_type = 0
    node_name = ""

    def __init__(self) -> None:
        self.parent_node: Optional[Node] = None
        self.child_nodes: List[Node] = []
        self.node_value: Optional[str] = None
        self.props: Dict[str, Any] = {}
        self.namespace_uri: Optional[str] = None
        # bookkeeping used by the runtime
        self.dom_ptr: Optional[int] = None
        self.dom_vnode: Any = None
        self.dom_raws: Optional[List[str]] = None
        self.dom_events: Optional[Dict[str, Listener]] = None
        self.dom_ns: Optional[str] = None

    @property
    def first_child(self) -> Optional["Node"]:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def last_child(self) -> Optional["Node"]:
        return self.child_nodes[-1] if self.child_nodes else None

    @property
    def next_sibling(self) -> Optional["Node"]:
        parent = self.parent_node
        if parent is None:
            return None
        siblings = parent.child_nodes
        index = next(i for i, n in enumerate(siblings) if n is self)
        return siblings[index + 1] if index + 1 < len(siblings) else None

    @property
    def text_content(self) -> str:
        if self.node_value is not None:
            return self.node_value
        return "".join(
            child.text_content for child in self.child_nodes if not isinstance(child, Comment)
        )

    @text_content.setter
    def text_content(self, value: str) -> None:
        if isinstance(self, (Text, Comment)):
            self.node_value = value
            return
        for child in list(self.child_nodes):
            self.remove_child(child)
        if value:
            self.append_child(Text(value))

    def get_property(self, name: str) -> Any:
        return self.props.get(name)

    def set_property(self, name: str, value: Any) -> None:
        if value is None:
            self.props.pop(name, None)
        else:
            self.props[name] = value

    def _take(self, node: "Node") -> List["Node"]:
        if isinstance(node, DocumentFragment):
            moved = list(node.child_nodes)
            node.child_nodes.clear()
            return moved
        if node.parent_node is not None:
            node.parent_node.remove_child(node)
        return [node]

    def _index_of(self, child: "Node") -> int:
        for index, node in enumerate(self.child_nodes):
            if node is child:
                return index
        raise ValueError("node is not a child of this node")

    def append_child(self, child: "Node") -> "Node":
        for node in self._take(child):
            node.parent_node = self
            self.child_nodes.append(node)
        return child

    def insert_before(self, new_node: "Node", reference_node: Optional["Node"]) -> "Node":
        if reference_node is None:
            return self.append_child(new_node)
        if new_node is reference_node:
            return new_node
        self._index_of(reference_node)
        moved = self._take(new_node)
        index = self._index_of(reference_node)
        for node in moved:
            node.parent_node = self
        self.child_nodes[index:index] = moved
        return new_node

    def remove_child(self, child: "Node") -> "Node":
        del self.child_nodes[self._index_of(child)]
        child.parent_node = None
        return child


class Element(Node):
    node_type = 1

    def __init__(self, tag_name: str, namespace_uri: Optional[str] = XHTML_NAMESPACE) -> None:
        super().__init__()
        self.namespace_uri = namespace_uri
        self.local_name = tag_name
        self.tag_name = tag_name.upper() if namespace_uri == XHTML_NAMESPACE else tag_name
        self.attributes: Dict[str, str] = {}
        self.attribute_namespaces: Dict[str, str] = {}
        self.listeners: Dict[str, List[Listener]] = {}

    @property
    def node_name(self) -> str:  # type: ignore[override]
        return self.tag_name

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = str(value)
        self.attribute_namespaces.pop(name, None)

    def set_attribute_ns(self, namespace: str, name: str, value: str) -> None:
        self.attributes[name] = str(value)
        self.attribute_namespaces[name] = namespace

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)
        self.attribute_namespaces.pop(name, None)

    _REFLECTED = {"id": "id", "className": "class"}

    def get_property(self, name: str) -> Any:
        if name in self._REFLECTED:
            return self.attributes.get(self._REFLECTED[name], "")
        if name == "tagName":
            return self.tag_name
        return super().get_property(name)

    def set_property(self, name: str, value: Any) -> None:
        if name in self._REFLECTED:
            if value is None:
                self.remove_attribute(self._REFLECTED[name])
            else:
                self.set_attribute(self._REFLECTED[name], str(value))
            return
        super().set_property(name, value)

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        registered = self.listeners.setdefault(event_type, [])
        if listener not in registered:
            registered.append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        registered = self.listeners.get(event_type, [])
        if listener in registered:
            registered.remove(listener)
        if not registered:
            self.listeners.pop(event_type, None)

    def dispatch_event(self, event: Event) -> List[Any]:
        """Run the listeners for ``event.type`` and return their results."""
        if event.target is None:
            event.target = self
        event.current_target = self
        return [listener(event) for listener in list(self.listeners.get(event.type, []))]


class Text(Node):
    node_type = 3
    node_name = "#text"

    def __init__(self, data: str) -> None:
        super().__init__()
        self.node_value = data

    @property
    def whole_text(self) -> str:
        return self.node_value or ""


class Comment(Node):
    node_type = 8
    node_name = "#comment"

    def __init__(self, data: str) -> None:
        super().__init__()
        self.node_value = data


class DocumentFragment(Node):
    node_type = 11
    node_name = "#document-fragment"


class Document(Node):
    node_type = 9
    node_name = "#document"

    def __init__(self) -> None:
        super().__init__()
        self.document_element = self.create_element("html")
        self.body = self.create_element("body")
        self.document_element.append_child(self.body)
        self.append_child(self.document_element)

    def create_element(self, tag_name: str) -> Element:
        return Element(tag_name)

    def create_element_ns(self, namespace: str, qualified_name: str) -> Element:
        return Element(qualified_name, namespace)

    def create_text_node(self, text: str) -> Text:
        return Text(text)

    def create_comment(self, text: str) -> Comment:
        return Comment(text)

    def create_document_fragment(self) -> DocumentFragment:
        return DocumentFragment()