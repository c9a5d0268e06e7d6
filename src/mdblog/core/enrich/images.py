"""Image classification and rewriting for client-side hydration.

Local images (relative or root-relative paths) are handed to the client
optimizer through ``data-next-image``/``data-src``; external images keep
their ``src`` and Cloudinary-hosted ones are additionally marked.
"""

import logging

from mdblog.core.tree import Attr, Element, Node, Root, transform


logger = logging.getLogger(__name__)

PLACEHOLDER_SRC = (
    'data:image/svg+xml,%3Csvg xmlns="http://www.w3.org/2000/svg" width="400" height="300"%3E'
    '%3Crect fill="%23ddd" width="400" height="300"/%3E'
    '%3Ctext x="50%25" y="50%25" text-anchor="middle" fill="%23999"%3EImage not found%3C/text%3E%3C/svg%3E'
)
MISSING_ALT = "Missing image"
PLACEHOLDER_WIDTH = "800"
PLACEHOLDER_HEIGHT = "600"

EXTERNAL_PREFIXES = ("http://", "https://", "//")


def is_local(src: str) -> bool:
    return not src.startswith(EXTERNAL_PREFIXES)


def is_cloudinary(src: str) -> bool:
    return "cloudinary.com" in src


def _rewrite(img: Element) -> None:
    src = img.get(Attr.src)
    alt = img.get(Attr.alt)

    if not src:
        logger.warning("Image found without src attribute")
        img.set(Attr.src, PLACEHOLDER_SRC)
        img.set(Attr.alt, MISSING_ALT)
        img.set(Attr.data_error, "missing-src")
        return

    if not alt:
        logger.warning("Image missing alt text: %s", src)
    img.set(Attr.alt, alt or "")

    if is_local(src):
        img.pop(Attr.src)
        img.set(Attr.data_next_image, "true")
        img.set(Attr.data_src, src)
        img.set(Attr.loading, "lazy")
        img.set(Attr.width, PLACEHOLDER_WIDTH)
        img.set(Attr.height, PLACEHOLDER_HEIGHT)
        return

    img.set(Attr.loading, "lazy")
    if is_cloudinary(src):
        img.set(Attr.data_cloudinary, "true")


def _visit(node: Node):
    if not (isinstance(node, Element) and node.tag == "img"):
        return None
    try:
        _rewrite(node)
    except Exception:
        logger.exception("Error processing image node")
        node.set(Attr.data_error, "processing-failed")
    return node


def rewrite_images(root: Root) -> Root:
    """Classify every <img> as local, external or Cloudinary and mark it up."""
    root.children = transform(root.children, _visit)
    return root
