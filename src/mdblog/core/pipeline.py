"""Render pipeline: markdown body -> enriched HTML, outline and reading time"""

import logging
from typing import Any, Callable

from markdown_it.common.utils import escapeHtml

from mdblog.core.convert import to_document
from mdblog.core.embed import transform_embeds
from mdblog.core.enrich.diagrams import replace_diagrams
from mdblog.core.enrich.headings import inject_heading_ids, wrap_heading_anchors
from mdblog.core.enrich.images import rewrite_images
from mdblog.core.models import EnhancedPost, PostMeta
from mdblog.core.parse import make_parser, parse_tokens
from mdblog.core.reading_time import WORDS_PER_MINUTE, estimate
from mdblog.core.serialize import to_html
from mdblog.core.toc import extract_headings
from mdblog.core.tree import Root


logger = logging.getLogger(__name__)

# Order matters: anchors need the ids injected before them.
ENRICHERS: list[Callable[[Root], Root]] = [
    inject_heading_ids,
    wrap_heading_anchors,
    rewrite_images,
    replace_diagrams,
]


def render_enhanced(body: str, parser_config: str = 'gfm-like') -> str:
    """Full conversion: parse, rewrite embeds, build the tree, enrich, serialize."""
    tokens = transform_embeds(parse_tokens(body, parser_config))
    root = to_document(tokens)
    for enrich in ENRICHERS:
        root = enrich(root)
    return to_html(root)


def render_basic(body: str, parser_config: str = 'gfm-like') -> str:
    """Plain markdown-it rendering without any enrichment."""
    return make_parser(parser_config).render(body)


def render_error(body: str) -> str:
    """Last resort: a visible notice carrying the escaped source."""
    return (
        '<div class="markdown-error"><p><strong>Error:</strong> '
        'This post could not be rendered.</p>'
        f'<pre>{escapeHtml(body)}</pre></div>\n'
    )


def render_content(body: str, parser_config: str = 'gfm-like') -> str:
    """Render body to HTML, degrading to basic conversion, then to an error block."""
    try:
        return render_enhanced(body, parser_config)
    except Exception:
        logger.exception("Enhanced markdown rendering failed; falling back to basic conversion")
    try:
        return render_basic(body, parser_config)
    except Exception:
        logger.exception("Basic markdown rendering failed; emitting raw source")
    return render_error(body)


def enhance(
    meta: dict[str, Any],
    body: str,
    parser_config: str = 'gfm-like',
    words_per_minute: int = WORDS_PER_MINUTE,
    ) -> EnhancedPost:
    """Combine reading time, enriched HTML and its outline into one result."""
    reading_time = estimate(body, words_per_minute)
    content_html = render_content(body, parser_config)
    return EnhancedPost(
        meta=PostMeta(**meta, reading_time=reading_time),
        content_html=content_html,
        headings=extract_headings(content_html),
    )
