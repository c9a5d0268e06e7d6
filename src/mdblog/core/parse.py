"""Front-matter extraction and markdown-it tokenization"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdblog.core.models import ParsedPost


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)


@lru_cache(maxsize=None)
def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build (once per preset) a MarkdownIt instance; raw html stays enabled."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": True})


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def read_post(path: Path) -> ParsedPost:
    """Read a post file and split its front-matter from the body."""
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = strip_frontmatter(raw)
    return ParsedPost(path=path, slug=path.stem, frontmatter=frontmatter, body=body)


def parse_tokens(body: str, parser_config: str = 'gfm-like') -> list[Token]:
    """Tokenize a markdown body into markdown-it's block/inline token stream."""
    return make_parser(parser_config).parse(body)
