"""Virtual DOM nodes, diffing and patching against an in-memory document, and HTML rendering."""

__version__ = "0.1.0"

__all__ = ["dom", "runtime", "vnode", "diff", "patch", "tovnode", "tohtml"]