"""Reading-time estimate from raw markdown text"""

import math
import re

from mdblog.core.models import ReadingTime


WORDS_PER_MINUTE = 225

# Applied in order; later patterns assume the earlier ones already ran.
_STRIP_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r'<[^>]*>'), ''),                          # html tags
    (re.compile(r'!\[([^\]]*)\]\([^)]*\)'), r'\1'),       # images -> alt
    (re.compile(r'\[([^\]]*)\]\([^)]*\)'), r'\1'),        # links -> text
    (re.compile(r'^#{1,6}\s+', re.M), ''),                # heading markers
    (re.compile(r'(\*\*|__)(.*?)\1'), r'\2'),             # bold
    (re.compile(r'(\*|_)(.*?)\1'), r'\2'),                # italic
    (re.compile(r'```[\s\S]*?```'), ''),                  # fenced code
    (re.compile(r'`([^`]*)`'), r'\1'),                    # inline code
    (re.compile(r'^>\s+', re.M), ''),                     # blockquotes
    (re.compile(r'^[-*_]{3,}\s*$', re.M), ''),            # horizontal rules
    (re.compile(r'^\s*[-*+]\s+', re.M), ''),              # bullet markers
    (re.compile(r'^\s*\d+\.\s+', re.M), ''),              # ordered markers
]


def strip_markdown(content: str) -> str:
    """Return content with markdown syntax and html tags removed."""
    for pattern, repl in _STRIP_PATTERNS:
        content = pattern.sub(repl, content)
    return content


def count_words(text: str) -> int:
    return len(text.split())


def estimate(content: str, words_per_minute: int = WORDS_PER_MINUTE) -> ReadingTime:
    """Estimate reading time for a post body; empty input yields 1 minute, 0 words."""
    words = count_words(strip_markdown(content or ""))
    # half-up rounding, never below one minute
    minutes = max(1, math.floor(words / words_per_minute + 0.5))
    return ReadingTime(minutes=minutes, words=words, text=f"{minutes} min read")
