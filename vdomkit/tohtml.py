"""Render virtual node trees as HTML markup."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .vnode import SVG_NAMESPACE, Flags, VNode

# SVG elements that may hold children; all other SVG elements self-close.
_CONTAINER_ELEMENTS = frozenset(
    {
        "a",
        "defs",
        "glyph",
        "g",
        "marker",
        "mask",
        "missing-glyph",
        "pattern",
        "svg",
        "switch",
        "symbol",
        "text",
        "desc",
        "metadata",
        "title",
    }
)

_VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_OMIT_PROPS = frozenset(
    {
        "attributes",
        "childElementCount",
        "children",
        "classList",
        "clientHeight",
        "clientLeft",
        "clientTop",
        "clientWidth",
        "currentStyle",
        "firstElementChild",
        "innerHTML",
        "lastElementChild",
        "nextElementSibling",
        "ongotpointercapture",
        "onlostpointercapture",
        "onwheel",
        "outerHTML",
        "previousElementSibling",
        "runtimeStyle",
        "scrollHeight",
        "scrollLeft",
        "scrollLeftMax",
        "scrollTop",
        "scrollTopMax",
        "scrollWidth",
        "tabStop",
        "tagName",
    }
)

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&apos;",
        "<": "&lt;",
        ">": "&gt;",
        "`": "&#96;",
    }
)


def encode(data: str) -> str:
    """Escape the characters that are unsafe in HTML text and attribute values."""
    return data.translate(_ESCAPES)


def _js_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _attributes(vnode: VNode) -> Iterator[str]:
    for name, value in vnode.data.attrs.items():
        yield f' {name}="{encode(value)}"'
    for name, value in vnode.data.props.items():
        if name not in _OMIT_PROPS:
            yield f' {name.lower()}="{encode(_js_string(value))}"'


def _render(vnode: Optional[VNode]) -> Iterator[str]:
    if vnode is None:
        return
    if vnode.hash & Flags.IS_TEXT and vnode.sel:
        yield encode(vnode.sel)
    elif vnode.hash & Flags.IS_COMMENT:
        yield f"<!--{vnode.sel}-->"
    elif vnode.hash & Flags.IS_FRAGMENT:
        for child in vnode.children:
            yield from _render(child)
    else:
        is_svg = bool(vnode.hash & Flags.HAS_NS) and vnode.ns == SVG_NAMESPACE
        is_svg_container = is_svg and vnode.sel in _CONTAINER_ELEMENTS

        yield "<" + vnode.sel
        yield from _attributes(vnode)
        if is_svg and not is_svg_container:
            yield " /"
        yield ">"

        if is_svg_container or (not is_svg and vnode.sel not in _VOID_ELEMENTS):
            if "innerHTML" in vnode.data.props:
                yield str(vnode.data.props["innerHTML"])
            else:
                for child in vnode.children:
                    yield from _render(child)
            yield f"</{vnode.sel}>"


def to_html(vnode: Optional[VNode]) -> str:
    """Return the HTML markup for ``vnode``; an empty string for ``None``."""
    if vnode is None:
        return ""
    vnode.normalize()
    return "".join(_render(vnode))