"""Outline extraction from rendered HTML"""

import html as htmllib
import logging
import re
from typing import Iterator, Optional

from mdblog.core.models import Heading
from mdblog.core.utils.slug import UniqueIds, slugify


logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r'<h([23])\b([^>]*)>(.*?)</h\1\s*>', re.IGNORECASE | re.DOTALL)
ID_ATTR_RE = re.compile(r'''(?:^|\s)id\s*=\s*(?:"([^"]*)"|'([^']*)')''', re.IGNORECASE)
TAG_RE = re.compile(r'</?[a-zA-Z][^>]*>')


def strip_tags(fragment: str) -> str:
    """Plain text of an html fragment: tags removed, entities decoded, trimmed."""
    return htmllib.unescape(TAG_RE.sub('', fragment)).strip()


def id_attr(attrs: str) -> Optional[str]:
    """Value of a single- or double-quoted id attribute, if any."""
    m = ID_ATTR_RE.search(attrs)
    if not m:
        return None
    value = m.group(1) if m.group(1) is not None else m.group(2)
    return htmllib.unescape(value) or None


def scan_headings(html: str) -> Iterator[tuple[int, str, str]]:
    """Yield (level, text, base id) for each non-empty h2/h3 in html."""
    for m in HEADING_RE.finditer(html):
        level, attrs, inner = int(m.group(1)), m.group(2), m.group(3)
        text = strip_tags(inner)
        if not text:
            logger.debug("TOC extraction: skipping empty <h%d>", level)
            continue
        yield level, text, id_attr(attrs) or slugify(text)


def extract_headings(html: str) -> list[Heading]:
    """Return the h2/h3 outline of html in document order.

    Existing id attributes are kept as the base id; otherwise the id is the
    slug of the heading text. Repeated ids get -2, -3, ... suffixes. Headings
    with no text are skipped. Never raises: on failure the outline is empty.
    """
    if not html:
        logger.warning("TOC extraction: empty html")
        return []
    try:
        ids = UniqueIds()
        return [
            Heading(id=ids.claim(base), text=text, level=level)
            for level, text, base in scan_headings(html)
        ]
    except Exception:
        logger.exception("Error extracting headings")
        return []
