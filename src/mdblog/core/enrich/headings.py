"""Heading enrichment: id injection and anchor-link wrapping"""

import logging

from mdblog.core.toc import scan_headings
from mdblog.core.tree import Attr, Element, Node, Raw, Root, text_content, transform, walk
from mdblog.core.utils.slug import UniqueIds, slugify


logger = logging.getLogger(__name__)

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
ANCHOR_CLASS = "anchor-link"


def _is_heading(node: Node) -> bool:
    return isinstance(node, Element) and node.tag in HEADING_TAGS


def _claim_raw(ids: UniqueIds, raw: Raw) -> None:
    # embedded h2/h3 markup shows up in the outline, so its ids are taken too
    try:
        for _, _, base in scan_headings(raw.html):
            ids.claim(base)
    except Exception:
        logger.exception("Error reading headings in raw html %r", raw.html[:60])


def inject_heading_ids(root: Root) -> Root:
    """Give every heading without an id a unique slug of its text."""
    ids = UniqueIds()
    for node in walk(root.children):
        if isinstance(node, Raw):
            _claim_raw(ids, node)
            continue
        if not _is_heading(node):
            continue
        try:
            existing = node.get(Attr.id)
            if existing:
                ids.claim(existing)
            else:
                node.set(Attr.id, ids.claim(slugify(text_content(node))))
        except Exception:
            logger.exception("Error assigning id to <%s>", node.tag)
    return root


def _is_wrapped(heading: Element) -> bool:
    if len(heading.children) != 1:
        return False
    only = heading.children[0]
    return isinstance(only, Element) and only.tag == "a" and ANCHOR_CLASS in only.classes


def anchor(heading: Element) -> Element:
    """Self-link holding the heading's children."""
    a = Element("a", children=heading.children)
    a.set(Attr.href, f"#{heading.get(Attr.id)}")
    a.set(Attr.class_, ANCHOR_CLASS)
    return a


def _wrap(node: Node):
    if not _is_heading(node) or not node.get(Attr.id) or _is_wrapped(node):
        return None
    try:
        node.children = [anchor(node)]
    except Exception:
        logger.exception("Error wrapping <%s id=%r> in an anchor", node.tag, node.get(Attr.id))
    return node


def wrap_heading_anchors(root: Root) -> Root:
    """Make each heading with an id a self-link; must run after inject_heading_ids."""
    root.children = transform(root.children, _wrap)
    return root
