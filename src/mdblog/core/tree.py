"""Document tree: HTML-equivalent nodes with a closed attribute vocabulary.

Attributes that take part in the server/client hydration contract are named
by the ``Attr`` enum; anything else (table alignment styles, link titles,
list start numbers, ...) goes to the ``extra`` string map. Passes rewrite the
tree with ``transform``, whose visitor returns the replacement for a node.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Optional, Union


class Attr(str, Enum):
    """Known attribute names; values are the literal HTML names"""
    id = "id"
    class_ = "class"
    href = "href"
    src = "src"
    alt = "alt"
    width = "width"
    height = "height"
    loading = "loading"
    data_src = "data-src"
    data_next_image = "data-next-image"
    data_cloudinary = "data-cloudinary"
    data_error = "data-error"
    data_mermaid = "data-mermaid"
    data_cast_id = "data-cast-id"
    data_theme = "data-theme"
    data_speed = "data-speed"
    data_auto_play = "data-auto-play"
    data_loop = "data-loop"
    data_cols = "data-cols"
    data_rows = "data-rows"


def _known(name: Union[Attr, str]) -> Optional[Attr]:
    if isinstance(name, Attr):
        return name
    try:
        return Attr(name)
    except ValueError:
        return None


@dataclass
class Text:
    value: str


@dataclass
class Raw:
    """Embedded markup emitted verbatim by the serializer."""
    html: str


@dataclass
class Element:
    tag: str
    attrs: dict[Attr, str] = field(default_factory=dict)
    extra: dict[str, str] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)

    def get(self, name: Union[Attr, str], default: Optional[str] = None) -> Optional[str]:
        key = _known(name)
        if key is not None:
            return self.attrs.get(key, default)
        return self.extra.get(name, default)

    def set(self, name: Union[Attr, str], value: str) -> None:
        key = _known(name)
        if key is not None:
            self.attrs[key] = value
        else:
            self.extra[name] = value

    def pop(self, name: Union[Attr, str]) -> Optional[str]:
        key = _known(name)
        if key is not None:
            return self.attrs.pop(key, None)
        return self.extra.pop(name, None)

    @property
    def classes(self) -> list[str]:
        return (self.get(Attr.class_) or "").split()

    def add_class(self, name: str) -> None:
        if name not in self.classes:
            self.set(Attr.class_, " ".join(self.classes + [name]))


Node = Union[Element, Text, Raw]


@dataclass
class Root:
    """Owner of a single document's top-level nodes; never shared across renders."""
    children: list[Node] = field(default_factory=list)


Visitor = Callable[[Node], Union[None, Node, list[Node]]]


def transform(nodes: list[Node], visit: Visitor) -> list[Node]:
    """Rebuild a node list depth-first, pre-order.

    ``visit`` returns None to keep a node, a node to replace it, or a list of
    nodes (possibly empty) to splice in its place. Replacement nodes are
    descended into as well.
    """
    out: list[Node] = []
    for node in nodes:
        result = visit(node)
        if result is None:
            result = [node]
        elif not isinstance(result, list):
            result = [result]
        for new in result:
            if isinstance(new, Element):
                new.children = transform(new.children, visit)
            out.append(new)
    return out


def walk(nodes: list[Node]) -> Iterator[Node]:
    """Yield every node in document order."""
    for node in nodes:
        yield node
        if isinstance(node, Element):
            yield from walk(node.children)


def text_content(node: Node) -> str:
    """Concatenated text of a node; raw markup contributes nothing."""
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Element):
        return "".join(text_content(c) for c in node.children)
    return ""
