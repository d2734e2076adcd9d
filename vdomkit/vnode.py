"""Virtual nodes, their normalisation and the ``h`` family of constructors."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

Callback = Callable[[Any], bool]

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class Flags(enum.IntFlag):
    """Bits stored in :attr:`VNode.hash`."""

    IS_ELEMENT = 1
    IS_TEXT = 1 << 1
    IS_COMMENT = 1 << 2
    IS_FRAGMENT = 1 << 3
    HAS_KEY = 1 << 4
    HAS_TEXT = 1 << 5
    HAS_ATTRS = 1 << 6
    HAS_PROPS = 1 << 7
    HAS_CALLBACKS = 1 << 8
    HAS_DIRECT_CHILDREN = 1 << 9
    HAS_REF = 1 << 10
    HAS_NS = 1 << 11
    IS_NORMALIZED = 1 << 12

    HAS_CHILDREN = HAS_DIRECT_CHILDREN | HAS_TEXT
    IS_ELEMENT_OR_FRAGMENT = IS_ELEMENT | IS_FRAGMENT
    NODE_TYPE = IS_ELEMENT | IS_TEXT | IS_COMMENT | IS_FRAGMENT


REMOVE_NODE_TYPE = ~int(Flags.NODE_TYPE)
EXTRACT_SEL = ~0 << 13
ID = EXTRACT_SEL | int(Flags.HAS_KEY) | int(Flags.NODE_TYPE)

_selector_ids: Dict[str, int] = {}


def _selector_id(sel: str) -> int:
    return _selector_ids.setdefault(sel, len(_selector_ids) + 1)


@dataclass
class Data:
    """Attributes, properties and callbacks of a virtual node."""

    attrs: Dict[str, str] = field(default_factory=dict)
    props: Dict[str, Any] = field(default_factory=dict)
    callbacks: Dict[str, Callback] = field(default_factory=dict)

    def copy(self) -> "Data":
        return Data(dict(self.attrs), dict(self.props), dict(self.callbacks))


class VNode:
    """A virtual DOM node.

    ``sel`` holds the selector for elements and fragments and the text for
    comments and text nodes.
    """

    def __init__(
        self,
        sel: str = "",
        data: Optional[Data] = None,
        children: Optional[List[Optional["VNode"]]] = None,
    ) -> None:
        self.sel = sel
        self.key = ""
        self.ns = ""
        self.hash = 0
        self.data = data.copy() if data is not None else Data()
        self.elm = 0
        self.children: List[Optional[VNode]] = list(children) if children else []

    def __repr__(self) -> str:
        return f"VNode(sel={self.sel!r}, hash={int(self.hash)}, children={len(self.children)})"

    def normalize(self) -> None:
        """Compute flags, extract key and namespace, and normalise children."""
        self._normalize(False)

    def _normalize(self, inject_svg_namespace: bool) -> None:
        if self.hash & Flags.IS_NORMALIZED:
            return
        attrs = self.data.attrs
        if "key" in attrs:
            self.hash |= Flags.HAS_KEY
            self.key = attrs.pop("key")

        if self.sel.startswith("!"):
            self.hash |= Flags.IS_COMMENT
            self.sel = ""
        else:
            self.children = [child for child in self.children if child is not None]

            cleaned: Dict[str, str] = {}
            for name, value in attrs.items():
                if name == "ns":
                    self.hash |= Flags.HAS_NS
                    self.ns = value
                elif value == "false":
                    continue
                else:
                    cleaned[name] = "" if value == "true" else value
            attrs.clear()
            attrs.update(cleaned)

            add_ns = inject_svg_namespace or self.sel.startswith("svg")
            if add_ns:
                self.hash |= Flags.HAS_NS
                self.ns = SVG_NAMESPACE

            if self.data.attrs:
                self.hash |= Flags.HAS_ATTRS
            if self.data.props:
                self.hash |= Flags.HAS_PROPS
            if self.data.callbacks:
                self.hash |= Flags.HAS_CALLBACKS
            if self.children:
                self.hash |= Flags.HAS_DIRECT_CHILDREN
                inject = add_ns and self.sel != "foreignObject"
                for child in reversed(self.children):
                    child._normalize(inject)

            if not self.sel:
                self.hash |= Flags.IS_FRAGMENT
            else:
                self.hash |= (_selector_id(self.sel) << 13) | Flags.IS_ELEMENT
                if (self.hash & Flags.HAS_CALLBACKS) and "ref" in self.data.callbacks:
                    self.hash |= Flags.HAS_REF

        self.hash |= Flags.IS_NORMALIZED


def _text_node(text: str) -> VNode:
    node = VNode()
    node.normalize()
    node.sel = text
    node.hash = (node.hash & REMOVE_NODE_TYPE) | Flags.IS_TEXT
    return node


def _with_text(sel: str, data: Optional[Data], text: str) -> VNode:
    node = VNode(sel, data)
    node.normalize()
    if node.hash & Flags.IS_COMMENT:
        node.sel = text
    else:
        node.children.append(_text_node(text))
        node.hash |= Flags.HAS_TEXT
    return node


def _build(sel: str, data: Optional[Data], content: Any) -> VNode:
    if isinstance(content, str):
        return _with_text(sel, data, content)
    if isinstance(content, list):
        return VNode(sel, data, content)
    if content is None or isinstance(content, VNode):
        return VNode(sel, data, [content])
    raise TypeError(f"unsupported child content: {type(content).__name__}")


def h(sel: str, *args: Any) -> VNode:
    """Create a virtual node.

    Accepted forms: ``h(sel)``, ``h(sel, text)``, ``h(text, True/False)``,
    ``h(sel, data)``, ``h(sel, children)``, ``h(sel, child)`` and
    ``h(sel, data, text | children | child)``.
    """
    if not args:
        return VNode(sel)
    if len(args) == 1:
        (arg,) = args
        if isinstance(arg, bool):
            if arg:
                return _text_node(sel)
            node = VNode(sel)
            node.normalize()
            return node
        if isinstance(arg, Data):
            return VNode(sel, arg)
        return _build(sel, None, arg)
    if len(args) == 2 and isinstance(args[0], Data):
        return _build(sel, args[0], args[1])
    raise TypeError("invalid arguments for h()")


def t(text: str) -> VNode:
    """Create a text virtual node."""
    return h(text, True)


def div(*args: Any) -> VNode:
    return h("div", *args)


def span(*args: Any) -> VNode:
    return h("span", *args)


def a(*args: Any) -> VNode:
    return h("a", *args)


def function_callback(vnode: VNode, callback: str, event: Any) -> bool:
    """Invoke the callback registered on ``vnode`` for an event type."""
    callbacks = vnode.data.callbacks
    if callback not in callbacks:
        callback = "on" + callback
    return bool(callbacks[callback](event))