"""Rewrite asciinema embed syntaxes in the token stream into player markers.

Two surface forms are recognized:

    ```asciinema
    cast-id: 123456
    theme: monokai
    speed: 1.5
    ```

and the inline shortcode ``[asciinema:123456]`` / ``[asciinema:123456:dracula:2]``.
Both become ``<div class="asciinema-embed" data-...></div>`` markers that the
client-side player hydrates. Substitution happens on fence and text tokens
only, so code spans, other code blocks and link targets are never altered.
"""

import logging
import re

from markdown_it.token import Token

from mdblog.core.models import EmbedConfig
from mdblog.core.serialize import to_html
from mdblog.core.tree import Attr, Element, Root


logger = logging.getLogger(__name__)

EMBED_LANGUAGE = "asciinema"
EMBED_CLASS = "asciinema-embed"
DEFAULT_THEME = "monokai"
DEFAULT_SPEED = 1.0

SHORTCODE_RE = re.compile(r'\[asciinema:([^\]]+)\]')

MISSING_ID_HTML = (
    '<div class="asciinema-error"><p><strong>Error:</strong> '
    'Asciinema block missing cast-id</p></div>\n'
)

_KEY_ALIASES = {
    "cast-id": "cast_id",
    "castId": "cast_id",
    "theme": "theme",
    "speed": "speed",
    "autoPlay": "auto_play",
    "auto-play": "auto_play",
    "loop": "loop",
    "cols": "cols",
    "rows": "rows",
}


def _to_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def parse_block_config(content: str) -> EmbedConfig:
    """Parse ``key: value`` lines of an asciinema fence; unknown keys are ignored."""
    config = EmbedConfig()
    for line in content.strip().splitlines():
        key, _, value = line.partition(":")
        field = _KEY_ALIASES.get(key.strip())
        value = value.strip()
        if field is None:
            continue
        if field in ("cast_id", "theme"):
            setattr(config, field, value)
        elif field == "speed":
            config.speed = _to_float(value)
        elif field in ("auto_play", "loop"):
            setattr(config, field, value == "true")
        else:
            setattr(config, field, _to_int(value))
    return config


def parse_shortcode(params: str) -> EmbedConfig:
    """Parse ``ID[:THEME[:SPEED]]``, filling the default theme and speed."""
    parts = params.split(":")
    speed = _to_float(parts[2]) if len(parts) > 2 and parts[2] else DEFAULT_SPEED
    return EmbedConfig(
        cast_id=parts[0],
        theme=(parts[1] if len(parts) > 1 else "") or DEFAULT_THEME,
        speed=speed,
    )


def _format_speed(speed: float) -> str:
    return f"{speed:g}"


def embed_element(config: EmbedConfig) -> Element:
    """Build the hydration marker; only options that are set become attributes."""
    el = Element("div")
    el.set(Attr.class_, EMBED_CLASS)
    el.set(Attr.data_cast_id, config.cast_id)
    if config.theme:
        el.set(Attr.data_theme, config.theme)
    if config.speed:
        el.set(Attr.data_speed, _format_speed(config.speed))
    if config.auto_play:
        el.set(Attr.data_auto_play, "true")
    if config.loop:
        el.set(Attr.data_loop, "true")
    if config.cols:
        el.set(Attr.data_cols, str(config.cols))
    if config.rows:
        el.set(Attr.data_rows, str(config.rows))
    return el


def embed_html(config: EmbedConfig) -> str:
    return to_html(Root([embed_element(config)])).rstrip("\n")


def _fence_language(token: Token) -> str:
    info = token.info.strip()
    return info.split()[0] if info else ""


def _replace_fence(token: Token) -> Token:
    config = parse_block_config(token.content)
    if config.cast_id:
        html = embed_html(config) + "\n"
    else:
        logger.warning("Asciinema block missing cast-id (line %s)", token.map[0] + 1 if token.map else "?")
        html = MISSING_ID_HTML
    return Token("html_block", "", 0, content=html, map=token.map, block=True, level=token.level)


def _split_text(token: Token) -> list[Token]:
    """Split one text token around shortcodes, keeping surrounding text in order."""
    text = token.content
    parts: list[Token] = []
    last = 0
    for m in SHORTCODE_RE.finditer(text):
        if m.start() > last:
            parts.append(Token("text", "", 0, content=text[last:m.start()], level=token.level))
        config = parse_shortcode(m.group(1))
        if config.cast_id:
            parts.append(Token("html_inline", "", 0, content=embed_html(config), level=token.level))
        else:
            logger.warning("Asciinema shortcode missing cast ID: %s", m.group(0))
            parts.append(Token("text", "", 0, content=m.group(0), level=token.level))
        last = m.end()
    if last < len(text):
        parts.append(Token("text", "", 0, content=text[last:], level=token.level))
    return parts


def _rewrite_inline(inline: Token) -> None:
    children: list[Token] = []
    for child in inline.children or []:
        if child.type == "text" and SHORTCODE_RE.search(child.content):
            try:
                children.extend(_split_text(child))
                continue
            except Exception:
                logger.exception("Error processing asciinema shortcode in %r", child.content)
        children.append(child)
    inline.children = children


def transform_embeds(tokens: list[Token]) -> list[Token]:
    """Return the token stream with asciinema fences and shortcodes replaced."""
    out: list[Token] = []
    for token in tokens:
        try:
            if token.type == "fence" and _fence_language(token) == EMBED_LANGUAGE:
                out.append(_replace_fence(token))
                continue
            if token.type == "inline":
                _rewrite_inline(token)
        except Exception:
            logger.exception("Error processing asciinema embed at %s", token.map)
        out.append(token)
    return out
