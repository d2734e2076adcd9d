import pytest

from vdomkit.vnode import (
    EXTRACT_SEL,
    SVG_NAMESPACE,
    Data,
    Flags,
    a,
    div,
    function_callback,
    h,
    span,
    t,
)


def test_plain_selector_not_normalized():
    node = h("div")
    assert node.sel == "div"
    assert node.hash == 0
    assert node.children == []


def test_text_child():
    node = h("div", "hello")
    assert node.hash & Flags.HAS_TEXT
    assert len(node.children) == 1
    child = node.children[0]
    assert child.sel == "hello"
    assert child.hash & Flags.IS_TEXT
    assert not child.hash & Flags.IS_FRAGMENT


def test_comment():
    node = h("!", "note")
    assert node.hash & Flags.IS_COMMENT
    assert node.sel == "note"
    assert node.children == []


def test_t_builds_text_node():
    node = t("words")
    assert node.sel == "words"
    assert node.hash & Flags.NODE_TYPE == Flags.IS_TEXT


def test_false_text_flag_normalizes_as_element():
    node = h("p", False)
    assert node.sel == "p"
    assert node.hash & Flags.NODE_TYPE == Flags.IS_ELEMENT
    assert node.hash & Flags.IS_NORMALIZED == Flags.IS_NORMALIZED
    assert node.children == []


def test_key_and_boolean_attrs():
    node = h("input", Data(attrs={"key": "k1", "checked": "true", "hidden": "false", "x": "1"}))
    node.normalize()
    assert node.key == "k1"
    assert node.hash & Flags.HAS_KEY
    assert node.data.attrs == {"checked": "", "x": "1"}
    assert node.hash & Flags.HAS_ATTRS


def test_data_is_copied():
    data = Data(attrs={"key": "k"})
    node = h("div", data)
    node.normalize()
    assert data.attrs == {"key": "k"}


def test_ns_attr():
    node = h("math", Data(attrs={"ns": "urn:x"}))
    node.normalize()
    assert node.ns == "urn:x"
    assert node.hash & Flags.HAS_NS
    assert "ns" not in node.data.attrs


def test_svg_namespace_injection():
    inner = h("rect")
    deep = h("p")
    foreign = h("foreignObject", [deep])
    root = h("svg", [inner, foreign])
    root.normalize()
    assert root.ns == SVG_NAMESPACE
    assert inner.ns == SVG_NAMESPACE
    assert foreign.ns == SVG_NAMESPACE
    assert deep.ns == ""


def test_none_children_removed():
    child = h("span")
    node = h("div", [None, child, None])
    node.normalize()
    assert node.children == [child]
    assert node.hash & Flags.HAS_DIRECT_CHILDREN


def test_selector_ids_consistent():
    first, second, other = h("section"), h("section"), h("article")
    for node in (first, second, other):
        node.normalize()
    assert first.hash & EXTRACT_SEL == second.hash & EXTRACT_SEL
    assert first.hash & EXTRACT_SEL != other.hash & EXTRACT_SEL


def test_fragment_and_ref():
    inner = h("div")
    frag = h("", [inner])
    frag.normalize()
    assert frag.hash & Flags.NODE_TYPE == Flags.IS_FRAGMENT
    assert frag.children == [inner]
    node = h("div", Data(callbacks={"ref": lambda e: True}))
    node.normalize()
    assert node.hash & Flags.HAS_REF == Flags.HAS_REF
    assert node.hash & Flags.HAS_CALLBACKS == Flags.HAS_CALLBACKS
    assert node.hash & Flags.NODE_TYPE == Flags.IS_ELEMENT


def test_normalize_idempotent():
    node = h("div", Data(attrs={"key": "a"}))
    node.normalize()
    before = node.hash
    node.normalize()
    assert node.hash == before


def test_shortcuts():
    assert div().sel == "div"
    assert span("x").children[0].sel == "x"
    child = h("b")
    assert a(child).children == [child]


def test_bad_arguments():
    with pytest.raises(TypeError):
        h("div", 3)


def test_function_callback_prefix():
    seen = []
    node = h("div", Data(callbacks={"onclick": lambda e: seen.append(e) or True}))
    assert function_callback(node, "click", "evt") is True
    assert seen == ["evt"]
    with pytest.raises(KeyError):
        function_callback(node, "keyup", None)