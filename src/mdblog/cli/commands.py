"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from mdblog.config import Settings, load_config
from mdblog.core.content import PostNotFoundError, create_post, get_all_posts, get_post
from mdblog.core.models import EnhancedPost, PostForm


TypeOpt = Annotated[str, typer.Option("--type", "-t", help="Content type: blog or til")]
ContentOpt = Annotated[Optional[str], typer.Option("--content-dir", help="Root directory of blog/ and til/")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(slug: str, kind: str, settings: Settings) -> EnhancedPost:
    try:
        return get_post(slug, kind, settings)
    except PostNotFoundError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"Could not load '{slug}'", e)


def render_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug (file name without .md)")],
    kind: TypeOpt = "blog",
    as_json: Annotated[bool, typer.Option("--json", help="Print the full result as JSON")] = False,
    content_dir: ContentOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Render a post to enriched HTML."""
    settings = _settings(overrides={"content_dir": content_dir})
    _setup_logging(settings, verbose)
    post = _load(slug, kind, settings)
    if as_json:
        typer.echo(post.model_dump_json(indent=2))
    else:
        typer.echo(post.content_html, nl=False)


def toc_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug (file name without .md)")],
    kind: TypeOpt = "blog",
    content_dir: ContentOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Print a post's outline and reading time."""
    settings = _settings(overrides={"content_dir": content_dir})
    _setup_logging(settings, verbose)
    post = _load(slug, kind, settings)

    typer.echo(f"{post.meta.title or slug} ({post.meta.reading_time.text})")
    for h in post.headings:
        indent = "  " * (h.level - 2)
        typer.echo(f"{indent}- {h.text}  #{h.id}")
    if len(post.headings) < settings.toc_min_headings:
        typer.echo(f"(outline hidden on the page: fewer than {settings.toc_min_headings} headings)")


def list_cmd(
    kind: TypeOpt = "blog",
    content_dir: ContentOpt = None,
    verbose: VerboseOpt = False,
    ):
    """List posts of a content type, newest first."""
    settings = _settings(overrides={"content_dir": content_dir})
    _setup_logging(settings, verbose)
    try:
        posts = get_all_posts(kind, settings)
    except ValueError as e:
        _fail("Could not list posts", e)
    if not posts:
        typer.echo(f"No {kind} posts found in {settings.content_dir}/.")
        raise typer.Exit(1)
    for p in posts:
        typer.echo(f"{p.date}  {p.slug}  {p.title}")


def new_cmd(
    title: Annotated[str, typer.Argument(help="Post title")],
    body_file: Annotated[Path, typer.Option("--body-file", exists=True, readable=True, help="Markdown body")],
    tags: Annotated[Optional[list[str]], typer.Option("--tag", help="Tag; repeat for several")] = None,
    summary: Annotated[str, typer.Option("--summary", help="One-line summary")] = "",
    kind: TypeOpt = "blog",
    content_dir: ContentOpt = None,
    verbose: VerboseOpt = False,
    ):
    """Create a new post file with front-matter under a unique slug."""
    settings = _settings(overrides={"content_dir": content_dir})
    _setup_logging(settings, verbose)
    try:
        form = PostForm(title=title, content=body_file.read_text(encoding="utf-8"),
                        tags=tags or [], summary=summary)
    except ValidationError as e:
        _fail("Invalid post", e)
    try:
        slug = create_post(form, kind, settings)
    except (OSError, ValueError) as e:
        _fail("Could not create post", e)
    typer.echo(f"Created {kind} post: {slug}")
