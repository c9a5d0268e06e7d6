"""Data models for the render pipeline and its result contract"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ReadingTime(BaseModel):
    """Reading-time estimate derived from a post's word count."""
    minutes: int = Field(..., ge=1)
    words:   int = Field(..., ge=0)
    text:    str                     # e.g. "5 min read"


class Heading(BaseModel):
    """One outline entry; ids are unique within a document."""
    id:    str
    text:  str
    level: Literal[2, 3]


class PostMeta(BaseModel):
    slug:    str
    title:   str = ""
    date:    str = ""
    tags:    list[str] = []
    summary: str = ""
    reading_time: Optional[ReadingTime] = None


class EnhancedPost(BaseModel):
    """Public render contract: metadata, enriched HTML and its outline."""
    meta:         PostMeta
    content_html: str
    headings:     list[Heading] = []


class PostForm(BaseModel):
    """Validated input for creating a new post file."""
    title:   str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    tags:    list[str] = Field(default_factory=list, max_length=10)
    summary: str = Field(default="", max_length=500)


class EmbedConfig(BaseModel):
    """Terminal-recording player options carried by an asciinema-embed marker."""
    cast_id:   str = ""
    theme:     Optional[str] = None
    speed:     Optional[float] = None
    auto_play: bool = False
    loop:      bool = False
    cols:      Optional[int] = None
    rows:      Optional[int] = None


@dataclass
class ParsedPost:
    """Source file split into front-matter and body; not persisted."""
    path:        Path
    slug:        str
    frontmatter: dict[str, Any]
    body:        str             # markdown without the front-matter block
