"""Unit tests for core/embed.py"""

from mdblog.core import embed
from mdblog.core.embed import (
    embed_html,
    parse_block_config,
    parse_shortcode,
    transform_embeds,
)
from mdblog.core.models import EmbedConfig
from mdblog.core.parse import parse_tokens


def _inline_children(md: str):
    tokens = transform_embeds(parse_tokens(md))
    inline = next(t for t in tokens if t.type == "inline")
    return inline.children


def test_parse_block_config_all_keys():
    config = parse_block_config(
        "cast-id: 123456\ntheme: dracula\nspeed: 1.5\nauto-play: true\nloop: true\ncols: 80\nrows: 24\n"
    )
    assert config == EmbedConfig(
        cast_id="123456", theme="dracula", speed=1.5, auto_play=True, loop=True, cols=80, rows=24,
    )


def test_parse_block_config_aliases_and_bad_numbers():
    config = parse_block_config("castId: abc\nautoPlay: false\ncols: wide\nunknown: x\n")
    assert config.cast_id == "abc"
    assert config.auto_play is False
    assert config.cols is None


def test_parse_shortcode_defaults():
    assert parse_shortcode("123") == EmbedConfig(cast_id="123", theme="monokai", speed=1.0)


def test_parse_shortcode_full():
    assert parse_shortcode("123:solarized:2.5") == EmbedConfig(cast_id="123", theme="solarized", speed=2.5)


def test_embed_html_only_set_attributes():
    html = embed_html(EmbedConfig(cast_id="42", theme="monokai", speed=1.0))
    assert html == '<div class="asciinema-embed" data-cast-id="42" data-theme="monokai" data-speed="1"></div>'


def test_embed_html_escapes_values():
    html = embed_html(EmbedConfig(cast_id='x"><script>'))
    assert "<script>" not in html
    assert 'data-cast-id="x&quot;&gt;&lt;script&gt;"' in html


def test_fence_becomes_embed():
    md = "```asciinema\ncast-id: 987\nspeed: 2\nloop: true\n```\n"
    tokens = transform_embeds(parse_tokens(md))
    assert [t.type for t in tokens] == ["html_block"]
    assert tokens[0].content == (
        '<div class="asciinema-embed" data-cast-id="987" data-speed="2" data-loop="true"></div>\n'
    )


def test_fence_missing_cast_id_becomes_error_notice(caplog):
    md = "Before\n\n```asciinema\ntheme: monokai\n```\n\nAfter\n"
    tokens = transform_embeds(parse_tokens(md))
    html_blocks = [t for t in tokens if t.type == "html_block"]
    assert len(html_blocks) == 1
    assert 'class="asciinema-error"' in html_blocks[0].content
    assert [t.content for t in tokens if t.type == "inline"] == ["Before", "After"]
    assert "missing cast-id" in caplog.text


def test_other_fences_untouched():
    md = "```python\n[asciinema:123]\n```\n"
    tokens = transform_embeds(parse_tokens(md))
    assert tokens[0].type == "fence"
    assert tokens[0].content == "[asciinema:123]\n"


def test_shortcode_split_preserves_text_order():
    children = _inline_children("before [asciinema:A] middle [asciinema:B:dracula:3] after")
    assert [c.type for c in children] == ["text", "html_inline", "text", "html_inline", "text"]
    assert children[0].content == "before "
    assert 'data-cast-id="A"' in children[1].content
    assert children[2].content == " middle "
    assert 'data-theme="dracula" data-speed="3"' in children[3].content
    assert children[4].content == " after"


def test_adjacent_shortcodes():
    children = _inline_children("[asciinema:1][asciinema:2]")
    assert [c.type for c in children] == ["html_inline", "html_inline"]


def test_shortcode_in_code_span_untouched():
    children = _inline_children("use `[asciinema:123]` literally")
    assert not any(c.type == "html_inline" for c in children)


def test_shortcode_with_empty_id_kept_as_text(caplog):
    children = _inline_children("x [asciinema::dracula] y")
    assert not any(c.type == "html_inline" for c in children)
    assert "".join(c.content for c in children) == "x [asciinema::dracula] y"
    assert "missing cast ID" in caplog.text


def test_per_token_failure_leaves_token(monkeypatch, caplog):
    def boom(params):
        raise RuntimeError("bad shortcode")

    monkeypatch.setattr(embed, "parse_shortcode", boom)
    children = _inline_children("see [asciinema:1] here")
    assert [c.type for c in children] == ["text"]
    assert children[0].content == "see [asciinema:1] here"
    assert "Error processing asciinema shortcode" in caplog.text

