r"""Derive unique anchor slugs the way markdown renderers do.

The table of contents links to ``#slug`` anchors that the hosting renderer
generates from each question heading, so the slugs produced here must match
that convention exactly: lowercase, punctuation dropped, whitespace runs turned
into hyphens, and numeric suffixes for repeated headings.

Example
-------
>>> from faq_index.slugs import SlugGenerator
>>> slugger = SlugGenerator()
>>> slugger.slug("What is `ngOnInit`?")
'what-is-ngoninit'
>>> slugger.slug("What is ngOnInit")
'what-is-ngoninit-1'
"""

from __future__ import annotations

import re

INLINE_CODE_PATTERN = re.compile(r"`+")
CODE_SPAN_PATTERN = re.compile(r"(`+)(.+?)\1")
LINK_PATTERN = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
HTML_TAG_PATTERN = re.compile(r"<[^>]+>")
EMPHASIS_PATTERN = re.compile(r"[*_~]+")
DISALLOWED_PATTERN = re.compile(r"[^a-z0-9\s-]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def strip_inline_markup(title: str) -> str:
    """Return ``title`` without inline code ticks, emphasis, links or tags.

    Text inside code spans is kept as written, so an inline-code
    ``<ng-template>`` keeps its tag name while a bare ``<code>`` tag is dropped.
    """
    text = LINK_PATTERN.sub(r"\1", title)
    parts: list[str] = []
    pos = 0
    for match in CODE_SPAN_PATTERN.finditer(text):
        parts.append(_strip_prose_markup(text[pos : match.start()]))
        parts.append(match.group(2))
        pos = match.end()
    parts.append(_strip_prose_markup(text[pos:]))
    return EMPHASIS_PATTERN.sub("", "".join(parts))


def _strip_prose_markup(text: str) -> str:
    text = HTML_TAG_PATTERN.sub("", text)
    return INLINE_CODE_PATTERN.sub("", text)


def slugify(title: str) -> str:
    """Return the bare anchor slug for ``title``; may be empty."""
    lowered = strip_inline_markup(title).lower()
    cleaned = DISALLOWED_PATTERN.sub("", lowered)
    return WHITESPACE_PATTERN.sub("-", cleaned.strip()).strip("-")


class SlugGenerator:
    """Hand out slugs that stay unique for the lifetime of one run."""

    def __init__(self) -> None:
        self._used: set[str] = set()
        self._occurrences: dict[str, int] = {}

    def slug(self, title: str) -> str:
        """Return a unique slug for ``title``, suffixing ``-1``, ``-2``, ... on reuse."""
        base = slugify(title)
        candidate = base
        while candidate in self._used:
            count = self._occurrences.get(base, 0) + 1
            self._occurrences[base] = count
            candidate = f"{base}-{count}"
        self._claim(candidate)
        return candidate

    def _claim(self, slug: str) -> None:
        self._used.add(slug)
        self._occurrences.setdefault(slug, 0)


__all__ = ["SlugGenerator", "slugify", "strip_inline_markup"]
