"""Render a document tree back to an HTML string"""

from markdown_it.common.utils import escapeHtml

from mdblog.core.tree import Element, Node, Raw, Root, Text


VOID_TAGS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
}

# newline after the closing tag, as markdown-it's renderer does
BLOCK_TAGS = {
    "blockquote", "div", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "li",
    "ol", "p", "pre", "table", "tbody", "td", "th", "thead", "tr", "ul",
}

# newline after the opening tag as well
CONTAINER_TAGS = {"blockquote", "ol", "table", "tbody", "thead", "tr", "ul"}


def _attrs(el: Element) -> str:
    pairs = [(k.value, v) for k, v in el.attrs.items()] + list(el.extra.items())
    return "".join(f' {name}="{escapeHtml(str(value))}"' for name, value in pairs)


def _render(node: Node) -> str:
    if isinstance(node, Text):
        return escapeHtml(node.value)
    if isinstance(node, Raw):
        return node.html
    open_tag = f"<{node.tag}{_attrs(node)}>"
    tail = "\n" if node.tag in BLOCK_TAGS else ""
    if node.tag in VOID_TAGS:
        return open_tag + tail
    lead = "\n" if node.tag in CONTAINER_TAGS else ""
    inner = "".join(_render(c) for c in node.children)
    return f"{open_tag}{lead}{inner}</{node.tag}>{tail}"


def to_html(root: Root) -> str:
    """Serialize a document; Raw nodes pass through untouched."""
    return "".join(_render(node) for node in root.children)
