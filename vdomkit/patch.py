"""Reconcile virtual node trees with the document."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from .diff import diff
from .dom import Node
from .runtime import Config, get_runtime
from .vnode import ID, Flags, VNode, h

_empty_node = h("")
_current_node: Optional[VNode] = None


def same_vnode(vnode1: VNode, vnode2: VNode) -> bool:
    """Whether two nodes share selector, node type and key."""
    return (vnode1.hash & ID) == (vnode2.hash & ID) and (
        not vnode1.hash & Flags.HAS_KEY or vnode1.key == vnode2.key
    )


def create_elm(vnode: VNode) -> int:
    """Create the document node for ``vnode`` and its subtree; return its handle."""
    runtime = get_runtime()
    if vnode.hash & Flags.IS_ELEMENT:
        if vnode.hash & Flags.HAS_NS:
            vnode.elm = runtime.create_element_ns(vnode.ns, vnode.sel)
        else:
            vnode.elm = runtime.create_element(vnode.sel)
    elif vnode.hash & Flags.IS_TEXT:
        vnode.elm = runtime.create_text_node(vnode.sel)
        return vnode.elm
    elif vnode.hash & Flags.IS_FRAGMENT:
        vnode.elm = runtime.create_document_fragment()
    elif vnode.hash & Flags.IS_COMMENT:
        vnode.elm = runtime.create_comment(vnode.sel)
        return vnode.elm

    for child in vnode.children:
        runtime.append_child(vnode.elm, create_elm(child))

    diff(_empty_node, vnode)
    return vnode.elm


def _add_vnodes(parent_elm: int, before: int, vnodes: List[VNode]) -> None:
    runtime = get_runtime()
    for vnode in vnodes:
        runtime.insert_before(parent_elm, create_elm(vnode), before)


def _remove_vnodes(vnodes: List[Optional[VNode]]) -> None:
    runtime = get_runtime()
    for vnode in vnodes:
        if vnode is None:
            continue
        runtime.remove_child(vnode.elm)
        if vnode.hash & Flags.HAS_REF:
            vnode.data.callbacks["ref"](None)


def _at(seq: List[Optional[VNode]], index: int) -> Optional[VNode]:
    return seq[index] if 0 <= index < len(seq) else None


def _update_children(parent_elm: int, old_children: List[VNode], new_ch: List[VNode]) -> None:
    runtime = get_runtime()
    old_ch: List[Optional[VNode]] = list(old_children)
    old_start, new_start = 0, 0
    old_end, new_end = len(old_ch) - 1, len(new_ch) - 1
    old_start_vnode = old_ch[0]
    old_end_vnode = old_ch[old_end]
    new_start_vnode = new_ch[0]
    new_end_vnode = new_ch[new_end]
    old_key_to_idx: Optional[Dict[str, int]] = None

    while old_start <= old_end and new_start <= new_end:
        if old_start_vnode is None:
            old_start += 1
            old_start_vnode = _at(old_ch, old_start)
        elif old_end_vnode is None:
            old_end -= 1
            old_end_vnode = _at(old_ch, old_end)
        elif same_vnode(old_start_vnode, new_start_vnode):
            if old_start_vnode is not new_start_vnode:
                patch_vnode(old_start_vnode, new_start_vnode, parent_elm)
            old_start += 1
            new_start += 1
            old_start_vnode = _at(old_ch, old_start)
            new_start_vnode = _at(new_ch, new_start)
        elif same_vnode(old_end_vnode, new_end_vnode):
            if old_end_vnode is not new_end_vnode:
                patch_vnode(old_end_vnode, new_end_vnode, parent_elm)
            old_end -= 1
            new_end -= 1
            old_end_vnode = _at(old_ch, old_end)
            new_end_vnode = _at(new_ch, new_end)
        elif same_vnode(old_start_vnode, new_end_vnode):
            if old_start_vnode is not new_end_vnode:
                patch_vnode(old_start_vnode, new_end_vnode, parent_elm)
            runtime.insert_before(
                parent_elm, old_start_vnode.elm, runtime.next_sibling(old_end_vnode.elm)
            )
            old_start += 1
            new_end -= 1
            old_start_vnode = _at(old_ch, old_start)
            new_end_vnode = _at(new_ch, new_end)
        elif same_vnode(old_end_vnode, new_start_vnode):
            if old_end_vnode is not new_start_vnode:
                patch_vnode(old_end_vnode, new_start_vnode, parent_elm)
            runtime.insert_before(parent_elm, old_end_vnode.elm, old_start_vnode.elm)
            old_end -= 1
            new_start += 1
            old_end_vnode = _at(old_ch, old_end)
            new_start_vnode = _at(new_ch, new_start)
        else:
            if old_key_to_idx is None:
                old_key_to_idx = {}
                for index in range(old_start, old_end + 1):
                    candidate = old_ch[index]
                    if candidate is not None and candidate.hash & Flags.HAS_KEY:
                        old_key_to_idx.setdefault(candidate.key, index)
            index = old_key_to_idx.get(new_start_vnode.key)
            if index is None:
                elm = create_elm(new_start_vnode)
                runtime.insert_before(parent_elm, elm, old_start_vnode.elm)
            else:
                elm_to_move = old_ch[index]
                if elm_to_move is None or (elm_to_move.hash >> 13) != (new_start_vnode.hash >> 13):
                    elm = create_elm(new_start_vnode)
                    runtime.insert_before(parent_elm, elm, old_start_vnode.elm)
                else:
                    if elm_to_move is not new_start_vnode:
                        patch_vnode(elm_to_move, new_start_vnode, parent_elm)
                    old_ch[index] = None
                    runtime.insert_before(parent_elm, elm_to_move.elm, old_start_vnode.elm)
            new_start += 1
            new_start_vnode = _at(new_ch, new_start)

    if old_start > old_end and new_start <= new_end:
        following = _at(new_ch, new_end + 1)
        before = following.elm if following is not None else 0
        _add_vnodes(parent_elm, before, new_ch[new_start : new_end + 1])
    elif old_start <= old_end:
        _remove_vnodes(old_ch[old_start : old_end + 1])


def patch_vnode(old_vnode: VNode, vnode: VNode, parent_elm: int) -> None:
    """Bring the node of ``old_vnode`` in line with ``vnode``."""
    vnode.elm = old_vnode.elm
    if vnode.hash & Flags.IS_ELEMENT_OR_FRAGMENT:
        target = parent_elm if vnode.hash & Flags.IS_FRAGMENT else vnode.elm
        has_children = bool(vnode.hash & Flags.HAS_CHILDREN)
        old_has_children = bool(old_vnode.hash & Flags.HAS_CHILDREN)
        if has_children and old_has_children:
            _update_children(target, old_vnode.children, vnode.children)
        elif has_children:
            _add_vnodes(target, 0, vnode.children)
        elif old_has_children:
            _remove_vnodes(old_vnode.children)
        diff(old_vnode, vnode)
    elif vnode.sel != old_vnode.sel:
        get_runtime().set_node_value(vnode.elm, vnode.sel)


def patch(old: Union[VNode, Node], vnode: VNode) -> Optional[VNode]:
    """Patch ``old`` (a virtual node or a document node) into ``vnode``.

    Returns ``vnode``, or ``None`` when ``old`` is not the tree most recently
    patched and unsafe patching is disabled.
    """
    global _current_node
    if isinstance(old, Node):
        from .tovnode import to_vnode

        old = to_vnode(old)

    runtime = get_runtime()
    if not runtime.config.unsafe_patch and _current_node is not None and _current_node is not old:
        return None

    if old is vnode:
        return vnode

    _current_node = vnode

    old.normalize()
    vnode.normalize()

    if same_vnode(old, vnode):
        patch_vnode(old, vnode, old.elm)
    else:
        elm = create_elm(vnode)
        parent = runtime.parent_node(old.elm)
        if parent != 0:
            runtime.insert_before(parent, elm, runtime.next_sibling(old.elm))
            runtime.remove_child(old.elm)

    return vnode


def reset() -> None:
    """Forget the last patched tree and restore the default configuration."""
    global _current_node
    _current_node = None
    try:
        runtime = get_runtime()
    except RuntimeError:
        return
    runtime.config = Config()