"""Slug generation shared by heading ids, outline ids and post file names"""

import re


FALLBACK = "heading"


def slugify(text: str, fallback: str = FALLBACK) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug.

    Heading ids injected into the HTML and ids derived by the outline
    extractor both come from here, so in-page anchors and outline hrefs agree.
    """
    text = text.lower().strip()
    text = re.sub(r'[\s_]+', '-', text)
    text = re.sub(r'[^\w-]+', '', text)
    text = text.strip('-')
    return re.sub(r'-+', '-', text) or fallback


class UniqueIds:
    """Per-document id registry; repeats get -2, -3, ... and the first keeps the bare id."""

    def __init__(self):
        self._used: set[str] = set()

    def __contains__(self, candidate: str) -> bool:
        return candidate in self._used

    def claim(self, base: str) -> str:
        candidate = base
        counter = 2
        while candidate in self._used:
            candidate = f"{base}-{counter}"
            counter += 1
        self._used.add(candidate)
        return candidate
