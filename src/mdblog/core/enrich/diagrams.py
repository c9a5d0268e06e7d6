"""Replace mermaid code blocks with placeholders rendered on the client"""

import logging

from mdblog.core.tree import Attr, Element, Node, Root, Text, transform


logger = logging.getLogger(__name__)

DIAGRAM_CLASSES = {"language-mermaid", "mermaid"}
PLACEHOLDER_CLASS = "mermaid-placeholder"
LOADING_CLASS = "mermaid-loading"
LOADING_TEXT = "Loading diagram..."


def _diagram_source(pre: Element) -> str | None:
    """Return the diagram text of a <pre><code class="language-mermaid">, else None."""
    if not pre.children:
        return None
    code = pre.children[0]
    if not (isinstance(code, Element) and code.tag == "code"):
        return None
    if not DIAGRAM_CLASSES.intersection(code.classes):
        return None
    if not code.children or not isinstance(code.children[0], Text):
        return None
    return code.children[0].value.rstrip("\n")


def placeholder(source: str) -> Element:
    loading = Element("pre", children=[Text(LOADING_TEXT)])
    loading.set(Attr.class_, LOADING_CLASS)
    div = Element("div", children=[loading])
    div.set(Attr.class_, PLACEHOLDER_CLASS)
    div.set(Attr.data_mermaid, source)
    return div


def _visit(node: Node):
    if not (isinstance(node, Element) and node.tag == "pre"):
        return None
    try:
        source = _diagram_source(node)
    except Exception:
        logger.exception("Error inspecting code block for a diagram")
        return None
    return None if source is None else placeholder(source)


def replace_diagrams(root: Root) -> Root:
    """Swap diagram code blocks for placeholders; other code blocks stay verbatim."""
    root.children = transform(root.children, _visit)
    return root
