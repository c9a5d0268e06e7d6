"""Convert the markdown-it syntax tree into a document tree"""

from markdown_it.common.utils import unescapeAll
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from mdblog.core.tree import Attr, Element, Node, Raw, Root, Text


def _plain_text(nodes: list[SyntaxTreeNode]) -> str:
    """Alt text of an image: the text of its inline children, markup dropped."""
    parts = []
    for node in nodes:
        if node.type in ("text", "code_inline"):
            parts.append(node.content)
        elif node.type in ("softbreak", "hardbreak"):
            parts.append("\n")
        else:
            parts.append(_plain_text(node.children))
    return "".join(parts)


def _element(node: SyntaxTreeNode) -> Element:
    el = Element(node.tag)
    for name, value in node.attrs.items():
        el.set(name, str(value))
    return el


def _code_block(content: str, lang: str = "") -> Element:
    code = Element("code", children=[Text(content)])
    if lang:
        code.set(Attr.class_, f"language-{lang}")
    return Element("pre", children=[code])


def _leaf(node: SyntaxTreeNode) -> list[Node]:
    kind = node.type
    if kind == "text":
        return [Text(node.content)]
    if kind == "softbreak":
        return [Text("\n")]
    if kind == "hardbreak":
        return [Element("br"), Text("\n")]
    if kind == "code_inline":
        return [Element("code", children=[Text(node.content)])]
    if kind == "fence":
        info = unescapeAll(node.info).strip()
        return [_code_block(node.content, info.split()[0] if info else "")]
    if kind == "code_block":
        return [_code_block(node.content)]
    if kind in ("html_block", "html_inline"):
        return [Raw(node.content)]
    if kind == "hr":
        return [Element("hr")]
    if kind == "image":
        img = Element("img")
        img.set(Attr.src, str(node.attrs.get("src", "")))
        img.set(Attr.alt, _plain_text(node.children))
        if "title" in node.attrs:
            img.set("title", str(node.attrs["title"]))
        return [img]
    return [Text(node.content)] if node.content else []


def _convert(node: SyntaxTreeNode) -> list[Node]:
    if node.type == "inline":
        return _children(node)
    if node.nester_tokens is None:
        return _leaf(node)
    # paragraphs of tight lists render without <p>
    if node.type == "paragraph" and node.hidden:
        return _children(node)
    el = _element(node)
    el.children = _children(node)
    return [el]


def _children(node: SyntaxTreeNode) -> list[Node]:
    out: list[Node] = []
    for child in node.children:
        out.extend(_convert(child))
    return out


def to_document(tokens: list[Token]) -> Root:
    """Build a fresh document tree from a (preprocessed) token stream."""
    return Root(children=_children(SyntaxTreeNode(tokens)))
