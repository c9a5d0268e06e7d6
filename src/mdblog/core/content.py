"""Post files on disk: lookup by slug, listing, loading and creation"""

import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from mdblog.config import Settings
from mdblog.core.models import EnhancedPost, ParsedPost, PostForm, PostMeta
from mdblog.core.parse import read_post
from mdblog.core.pipeline import enhance
from mdblog.core.utils.slug import slugify


logger = logging.getLogger(__name__)

CONTENT_TYPES = ('blog', 'til')
POST_SUFFIX = '.md'


class PostNotFoundError(LookupError):
    """No post file exists for the requested slug and content type."""

    def __init__(self, slug: str, kind: str):
        super().__init__(f"No {kind} post named '{slug}'")
        self.slug = slug
        self.kind = kind


def content_root(settings: Settings, kind: str) -> Path:
    if kind not in CONTENT_TYPES:
        raise ValueError(f"Unknown content type '{kind}'; expected one of {', '.join(CONTENT_TYPES)}")
    return Path(settings.content_dir) / kind


def post_path(slug: str, kind: str, settings: Settings) -> Path:
    return content_root(settings, kind) / f"{slug}{POST_SUFFIX}"


def _as_text(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return "" if value is None else str(value)


def meta_fields(parsed: ParsedPost) -> dict[str, Any]:
    """Front-matter fields of a post, normalized for PostMeta."""
    fm = parsed.frontmatter
    return {
        "slug": parsed.slug,
        "title": _as_text(fm.get("title")),
        "date": _as_text(fm.get("date")),
        "tags": [str(t) for t in fm.get("tags") or []],
        "summary": _as_text(fm.get("summary")),
    }


def load_post(slug: str, kind: str, settings: Settings) -> ParsedPost:
    path = post_path(slug, kind, settings)
    if not path.is_file():
        raise PostNotFoundError(slug, kind)
    return read_post(path)


def get_post(slug: str, kind: str = 'blog', settings: Settings = None) -> EnhancedPost:
    """Load and render one post. Raises PostNotFoundError when the file is missing."""
    settings = settings or Settings()
    parsed = load_post(slug, kind, settings)
    return enhance(meta_fields(parsed), parsed.body, settings.parser_config, settings.words_per_minute)


def get_all_posts(kind: str = 'blog', settings: Settings = None) -> list[PostMeta]:
    """Return metadata for every post of a content type, newest first."""
    settings = settings or Settings()
    root = content_root(settings, kind)
    if not root.is_dir():
        return []
    posts = [PostMeta(**meta_fields(read_post(p))) for p in sorted(root.glob(f"*{POST_SUFFIX}"))]
    return sorted(posts, key=lambda p: p.date, reverse=True)


def unique_slug(title: str, kind: str, settings: Settings) -> str:
    """Slug of title, suffixed -1, -2, ... until no post file uses it."""
    base = slugify(title, fallback="post")
    slug = base
    counter = 1
    while post_path(slug, kind, settings).exists():
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def build_post_file(form: PostForm, created: date) -> str:
    """Return the post body with a YAML front-matter block prepended."""
    fm = {"title": form.title, "date": created.isoformat(), "tags": form.tags, "summary": form.summary}
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{form.content.lstrip()}"


def create_post(form: PostForm, kind: str = 'blog', settings: Settings = None, created: date = None) -> str:
    """Write a new post file under a unique slug and return the slug."""
    settings = settings or Settings()
    root = content_root(settings, kind)
    root.mkdir(parents=True, exist_ok=True)
    slug = unique_slug(form.title, kind, settings)
    path = post_path(slug, kind, settings)

    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(build_post_file(form, created or date.today()), encoding='utf-8')
    os.replace(tmp, path)
    logger.info("Created %s post %s", kind, path)
    return slug
