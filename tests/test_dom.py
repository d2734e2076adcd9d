import pytest

from vdomkit.dom import Document, Event


@pytest.fixture
def doc():
    return Document()


def test_create_element_names(doc):
    el = doc.create_element("div")
    assert el.tag_name == "DIV"
    svg = doc.create_element_ns("http://www.w3.org/2000/svg", "circle")
    assert svg.tag_name == "circle"
    assert svg.namespace_uri == "http://www.w3.org/2000/svg"


def test_node_types(doc):
    assert doc.create_text_node("x").node_name == "#text"
    assert doc.create_comment("x").node_type == 8
    assert doc.create_document_fragment().node_type == 11


def test_append_and_siblings(doc):
    parent = doc.create_element("ul")
    first = parent.append_child(doc.create_element("li"))
    second = parent.append_child(doc.create_element("li"))
    assert first.next_sibling is second
    assert second.next_sibling is None
    assert second.parent_node is parent


def test_insert_before_moves_node(doc):
    parent = doc.create_element("div")
    x, y = doc.create_text_node("x"), doc.create_text_node("y")
    parent.append_child(x)
    parent.append_child(y)
    parent.insert_before(y, x)
    assert [n.node_value for n in parent.child_nodes] == ["y", "x"]


def test_insert_fragment(doc):
    parent = doc.create_element("div")
    frag = doc.create_document_fragment()
    frag.append_child(doc.create_text_node("a"))
    frag.append_child(doc.create_text_node("b"))
    parent.append_child(frag)
    assert parent.text_content == "ab"
    assert frag.child_nodes == []


def test_remove_child_errors(doc):
    parent = doc.create_element("div")
    with pytest.raises(ValueError):
        parent.remove_child(doc.create_element("p"))
    with pytest.raises(ValueError):
        parent.insert_before(doc.create_element("p"), doc.create_element("q"))


def test_text_content_setter(doc):
    el = doc.create_element("h2")
    el.text_content = "Hello"
    assert el.child_nodes[0].node_value == "Hello"
    assert el.text_content == "Hello"


def test_attributes(doc):
    el = doc.create_element("a")
    el.set_attribute("href", "/x")
    el.set_attribute_ns("urn:ns", "p:q", "v")
    assert el.get_attribute("href") == "/x"
    assert el.attribute_namespaces["p:q"] == "urn:ns"
    el.remove_attribute("href")
    assert el.get_attribute("href") is None


def test_reflected_properties(doc):
    el = doc.create_element("div")
    el.set_property("className", "c")
    el.set_property("custom", 5)
    assert el.get_attribute("class") == "c"
    assert el.get_property("custom") == 5


def test_events(doc):
    el = doc.create_element("button")
    listener = lambda e: e.type
    el.add_event_listener("click", listener)
    el.add_event_listener("click", listener)
    assert el.dispatch_event(Event("click")) == ["click"]
    el.remove_event_listener("click", listener)
    assert el.dispatch_event(Event("click")) == []