"""Apply the differences between two virtual nodes to the node they share."""

from __future__ import annotations

from typing import Any

from .runtime import Runtime, get_runtime
from .vnode import Flags, VNode


def _strictly_equal(first: Any, second: Any) -> bool:
    return first is second or (type(first) is type(second) and first == second)


def _event_name(callback_name: str) -> str:
    return callback_name[2:] if callback_name.startswith("on") else callback_name


def _diff_attrs(runtime: Runtime, old_vnode: VNode, vnode: VNode) -> None:
    old_attrs = old_vnode.data.attrs
    attrs = vnode.data.attrs

    for name in old_attrs:
        if name not in attrs:
            runtime.remove_attribute(vnode.elm, name)

    for name, value in attrs.items():
        if name not in old_attrs or old_attrs[name] != value:
            runtime.set_attribute(vnode.elm, name, value)


def _diff_props(runtime: Runtime, old_vnode: VNode, vnode: VNode) -> None:
    old_props = old_vnode.data.props
    props = vnode.data.props
    elm = runtime.node(vnode.elm)

    elm.dom_raws = []

    for name in old_props:
        if name not in props:
            elm.set_property(name, None)

    for name, value in props.items():
        elm.dom_raws.append(name)
        if (
            name not in old_props
            or not _strictly_equal(value, old_props[name])
            or (name in ("value", "checked") and not _strictly_equal(value, elm.get_property(name)))
        ):
            elm.set_property(name, value)


def _diff_callbacks(runtime: Runtime, old_vnode: VNode, vnode: VNode) -> None:
    old_callbacks = old_vnode.data.callbacks
    callbacks = vnode.data.callbacks
    elm = runtime.node(vnode.elm)

    for name in old_callbacks:
        if name not in callbacks and name != "ref":
            event = _event_name(name)
            elm.remove_event_listener(event, runtime.event_proxy)
            if elm.dom_events is not None:
                elm.dom_events.pop(event, None)

    elm.dom_vnode = vnode
    if elm.dom_events is None:
        elm.dom_events = {}

    for name in callbacks:
        if name not in old_callbacks and name != "ref":
            event = _event_name(name)
            elm.add_event_listener(event, runtime.event_proxy)
            elm.dom_events[event] = runtime.event_proxy

    old_has_ref = bool(old_vnode.hash & Flags.HAS_REF)
    if vnode.hash & Flags.HAS_REF:
        ref = callbacks["ref"]
        old_ref = old_callbacks["ref"] if old_has_ref else None
        if old_ref is None or old_ref != ref:
            if old_has_ref:
                old_ref(None)
            ref(elm)
    elif old_has_ref:
        old_callbacks["ref"](None)


def diff(old_vnode: VNode, vnode: VNode) -> None:
    """Update attributes, properties and callbacks of ``vnode.elm``."""
    runtime = get_runtime()
    flags = vnode.hash | old_vnode.hash

    if flags & Flags.HAS_ATTRS:
        _diff_attrs(runtime, old_vnode, vnode)
    if flags & Flags.HAS_PROPS:
        _diff_props(runtime, old_vnode, vnode)
    if flags & Flags.HAS_CALLBACKS:
        _diff_callbacks(runtime, old_vnode, vnode)