# vdomkit

`vdomkit` describes a user interface as a tree of lightweight virtual nodes
and brings a document up to date with a small set of changes. It ships its own
in-memory document model (`vdomkit.dom`), so it runs anywhere Python does, and
it can render a virtual tree straight to an HTML string.

## Installing

```
pip install vdomkit
```

## Building virtual nodes

`h(sel, ...)` in `vdomkit.vnode` builds a `VNode`. After the selector it takes
text, a `Data` instance, a list of children or a single child, alone or as
`Data` followed by text, children or a child. `h(text, True)` and `t(text)`
build a text node; a selector starting with `!` builds a comment and an empty
selector builds a fragment. `div`, `span` and `a` are shortcuts for `h` with
that selector.

```python
from vdomkit.vnode import Data, h, t, div, span

tree = div(
    Data(attrs={"id": "app", "class": "main"}),
    [
        h("h1", "Hello"),
        span("world"),
        t("plain text"),
        h("!", "a comment"),
        h("", [h("p", "inside a fragment")]),
    ],
)
```

`Data` holds three dictionaries:

* `attrs`: string attributes. The value `"true"` becomes an empty attribute
  and `"false"` drops it. `key` sets the node's key for keyed child
  reconciliation, and `ns` sets its namespace. Elements whose selector starts
  with `svg` get the SVG namespace, and so do their descendants, except below
  `foreignObject`.
* `props`: properties set directly on the element, such as `value` or
  `checked`.
* `callbacks`: event handlers keyed by event name, with or without an `on`
  prefix. The special `ref` callback is called with the element when it is
  attached and with `None` when it is removed.

`VNode.normalize()` computes a node's flags (see `Flags`) and pulls out its
key and namespace; `patch` and `to_html` call it for you.

## Patching a document

Install a runtime with `init(config, document)` from `vdomkit.runtime`; both
arguments are optional and default to `Config()` and a fresh `Document()`.
`get_runtime()` returns the installed runtime and raises `RuntimeError` if
there is none. Then patch an existing document node, or the previous virtual
tree, into a new one:

```python
from vdomkit.dom import Document, Event
from vdomkit.patch import patch
from vdomkit.runtime import Config, get_runtime, init
from vdomkit.vnode import Data, h

document = Document()
root = document.create_element("div")
document.body.append_child(root)

init(Config(), document)

first = patch(root, h("div", [h("span", "Hi")]))
second = patch(first, h("div", [h("span", "Hello")]))
```

`patch` returns the new virtual tree, which becomes the current one. Unless
`Config(unsafe_patch=True)` is set, patching from anything other than the
current tree returns `None` and changes nothing. `reset()` in `vdomkit.patch`
forgets the current tree and puts the runtime's configuration back to the
defaults. `to_vnode(node)` in `vdomkit.tovnode` turns an existing document
node into a virtual tree and registers it with the runtime.

Handlers in `callbacks` run when an event is dispatched on the element:

```python
clicks = []
view = patch(second, h("div", Data(callbacks={"onclick": lambda e: clicks.append(e) or True})))
get_runtime().node(view.elm).dispatch_event(Event("click"))
```

The runtime refers to document nodes by integer handles (`VNode.elm`);
`Runtime.node(handle)` gives the node back. Nodes removed from the document
are cleaned and kept in the runtime's `Recycler`, to be reused by the next
node created with the same name.

## Rendering HTML

```python
from vdomkit.tohtml import to_html
from vdomkit.vnode import Data, h

html = to_html(h("p", Data(attrs={"title": "a <b>"}), "x & y"))
# '<p title="a &lt;b&gt;">x &amp; y</p>'
```

Attributes are written first, then properties with lower-cased names (a fixed
set of read-only element properties is left out). Void elements such as `br`
and `img` get no closing tag. SVG elements that are not containers close
themselves. An `innerHTML` property is written out as is, in place of the
children. `encode(text)` escapes `&`, `"`, `'`, `<`, `>` and the backtick.

## What it does not do

There is no browser behind `vdomkit`: it patches its own `vdomkit.dom`
document, which models elements, attributes, properties, text, comments,
fragments and event listeners, but has no layout, styling, selectors or HTML
parsing. The package is a library and provides no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```