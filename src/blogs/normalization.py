"""Pre-persist normalization run by the lifecycle mutator before every write."""

import math

WORDS_PER_MINUTE = 200


def reading_time_minutes(content: str) -> int:
    """Minutes to read ``content`` at 200 words per minute, rounded up."""
    return math.ceil(len(content.split()) / WORDS_PER_MINUTE)


def normalize_tags(tags) -> list[str]:
    """Trim and lower-case tags, dropping blanks and repeats (first occurrence wins)."""
    seen: dict[str, None] = {}
    for tag in tags or []:
        cleaned = str(tag).strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def prepare_for_write(blog, changed_fields) -> None:
    """Recompute derived fields on ``blog`` for the fields being written."""
    if "content" in changed_fields:
        blog.reading_time = reading_time_minutes(blog.content)
    if "tags" in changed_fields:
        blog.tags = normalize_tags(blog.tags)


__all__ = ["WORDS_PER_MINUTE", "reading_time_minutes", "normalize_tags", "prepare_for_write"]
