"""Tag extraction from free text using the ``#word`` marker syntax."""

from __future__ import annotations

import re
from collections.abc import Iterable

# word = one or more letters, digits or underscores (unicode letters included)
TAG_PATTERN = re.compile(r"#(\w+)")


def extract_tags(text: str) -> list[str]:
    """Return the ``#word`` labels found in ``text``, first occurrence order, no repeats.

    >>> extract_tags("#api notes about #auth and #api again")
    ['api', 'auth']
    """
    return dedupe(match.group(1) for match in TAG_PATTERN.finditer(text))


def dedupe(tags: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def merge_tags(explicit: list[str] | None, content: str | None) -> list[str] | None:
    """Combine caller-supplied tags with tags derived from new content.

    Returns None when neither is given, meaning the stored tags stay as they are.
    """
    if explicit is None and content is None:
        return None
    derived = extract_tags(content) if content is not None else []
    return dedupe([*(explicit or []), *derived])
