"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt

from mdblog.core.convert import to_document


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("gfm-like", options_update={"linkify": False})


@pytest.fixture(name="document")
def document_fixture(parser):
    """Factory: markdown text -> document tree, without preprocessing."""
    def _build(md: str):
        return to_document(parser.parse(md))
    return _build
