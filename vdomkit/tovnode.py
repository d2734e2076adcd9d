"""Build virtual nodes from existing document nodes."""

from __future__ import annotations

from .dom import Comment, Element, Node, Text
from .runtime import get_runtime
from .vnode import Data, VNode, h


def to_vnode(node: Node) -> VNode:
    """Return a virtual node mirroring ``node`` and register ``node`` with the runtime."""
    if isinstance(node, Element):
        attrs = {name: value for name, value in reversed(list(node.attributes.items()))}
        children = [to_vnode(child) for child in node.child_nodes]
        vnode = h(node.tag_name.lower(), Data(attrs=attrs), children)
    elif isinstance(node, Text):
        vnode = h(node.text_content, True)
    elif isinstance(node, Comment):
        vnode = h("!", node.text_content)
    else:
        vnode = h("")
    vnode.elm = get_runtime().add_node(node)
    return vnode