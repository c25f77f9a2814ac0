r"""Parse question fragments and extract their summary excerpt.

Each question lives in ``questions/<slug>/<locale>.mdx``: YAML frontmatter with
a ``title``, a summary section opened by a ``## TL;DR`` heading and closed by a
thematic break, then free-form detail sections. Only the title and the summary
matter to the index; the summary is returned as an exact substring of the file
so that code fences, inline code, and nested lists survive untouched.

Example
-------
>>> from faq_index.fragment import parse_fragment
>>> text = "---\ntitle: Hello\n---\n\n## TL;DR\n\nShort answer.\n\n---\n\nMore.\n"
>>> fragment = parse_fragment(text, "questions/hello/en-US.mdx")
>>> fragment.title, fragment.excerpt
('Hello', 'Short answer.')
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_SUMMARY_HEADING
from .errors import MalformedFragmentError

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONTMATTER_DELIMITER = "---"
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
THEMATIC_BREAK_PATTERN = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}(?:[ \t]|$)")
ATX_HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$")


@dc.dataclass(slots=True)
class Fragment:
    """A parsed question fragment.

    Attributes
    ----------
    path : Path or str
        Location the fragment was read from, used in error messages.
    title : str
        Frontmatter title with surrounding whitespace removed.
    frontmatter : dict
        The full frontmatter mapping.
    excerpt : str
        Summary block with surrounding blank lines removed.
    excerpt_line : int
        1-based line of the first excerpt line within the file.
    detail : str
        Everything after the thematic break that closes the summary.
    """

    path: Path | str
    title: str
    frontmatter: dict[str, typ.Any]
    excerpt: str
    excerpt_line: int
    detail: str


class FenceTracker:
    """Track whether a line sits inside a fenced code block."""

    def __init__(self) -> None:
        self._fence: str | None = None

    def feed(self, line: str) -> bool:
        """Consume ``line``; return ``True`` when it is fenced or a fence marker."""
        match = FENCE_PATTERN.match(line)
        if self._fence is None:
            if match:
                self._fence = match.group(1)
                return True
            return False
        if match:
            marker = match.group(1)
            closes = marker[0] == self._fence[0] and len(marker) >= len(self._fence)
            if closes and not line[match.end() :].strip():
                self._fence = None
        return True


def parse_fragment(
    text: str,
    path: Path | str,
    *,
    summary_heading: str = DEFAULT_SUMMARY_HEADING,
) -> Fragment:
    """Parse ``text`` into a :class:`Fragment`.

    Parameters
    ----------
    text : str
        Raw fragment contents, read without newline translation.
    path : Path or str
        Source location, used only for error reporting.
    summary_heading : str, optional
        Heading line that opens the summary; defaults to ``## TL;DR``.

    Returns
    -------
    Fragment
        Title, frontmatter, excerpt, and detail content.

    Raises
    ------
    MalformedFragmentError
        If the frontmatter is missing, unparsable, or lacks a string
        ``title``; or if the summary heading, its terminating break, or its
        content is missing; or if the summary contains a heading.
    """
    lines = text.splitlines(keepends=True)
    frontmatter, body_start = _parse_frontmatter(lines, path)
    title = frontmatter.get("title")
    if not isinstance(title, str) or not title.strip():
        msg = "frontmatter 'title' must be a non-empty string"
        raise MalformedFragmentError(path, msg, line=1)

    excerpt, excerpt_line, detail = _extract_summary(
        lines, body_start, path, summary_heading
    )
    return Fragment(
        path=path,
        title=title.strip(),
        frontmatter=frontmatter,
        excerpt=excerpt,
        excerpt_line=excerpt_line,
        detail=detail,
    )


def extract_excerpt(
    text: str, path: Path | str, *, summary_heading: str = DEFAULT_SUMMARY_HEADING
) -> str:
    """Return only the summary excerpt of a fragment."""
    return parse_fragment(text, path, summary_heading=summary_heading).excerpt


def heading_titles(text: str) -> list[str]:
    """Return the text of every ATX heading in ``text`` outside code fences."""
    titles: list[str] = []
    fences = FenceTracker()
    for line in text.splitlines():
        if fences.feed(line):
            continue
        match = ATX_HEADING_PATTERN.match(line)
        if match and match.group(1):
            titles.append(match.group(1))
    return titles


def _parse_frontmatter(
    lines: list[str], path: Path | str
) -> tuple[dict[str, typ.Any], int]:
    """Return the frontmatter mapping and the index of the first body line."""
    if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
        raise MalformedFragmentError(path, "missing frontmatter", line=1)
    closing = next(
        (
            idx
            for idx in range(1, len(lines))
            if lines[idx].rstrip() == FRONTMATTER_DELIMITER
        ),
        None,
    )
    if closing is None:
        raise MalformedFragmentError(path, "unterminated frontmatter", line=1)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        data = loader.load("".join(lines[1:closing]))
    except YAMLError as exc:
        msg = f"invalid frontmatter ({exc})"
        raise MalformedFragmentError(path, msg, line=2) from exc
    if not isinstance(data, dict):
        raise MalformedFragmentError(path, "frontmatter must be a mapping", line=2)
    return data, closing + 1


def _extract_summary(
    lines: list[str], start: int, path: Path | str, summary_heading: str
) -> tuple[str, int, str]:
    """Return ``(excerpt, excerpt_line, detail)`` from the fragment body."""
    fences = FenceTracker()
    heading_idx = None
    for idx in range(start, len(lines)):
        fenced = fences.feed(lines[idx])
        if not fenced and lines[idx].rstrip() == summary_heading:
            heading_idx = idx
            break
    if heading_idx is None:
        msg = f"no '{summary_heading}' summary heading"
        raise MalformedFragmentError(path, msg)

    fences = FenceTracker()
    break_idx = None
    for idx in range(heading_idx + 1, len(lines)):
        line = lines[idx]
        if fences.feed(line):
            continue
        if THEMATIC_BREAK_PATTERN.match(line.rstrip("\r\n")):
            break_idx = idx
            break
        if HEADING_PATTERN.match(line):
            msg = "summary must not contain headings"
            raise MalformedFragmentError(path, msg, line=idx + 1)
    if break_idx is None:
        msg = f"no thematic break ('---') closes the '{summary_heading}' summary"
        raise MalformedFragmentError(path, msg, line=heading_idx + 1)

    first, last = heading_idx + 1, break_idx
    while first < last and not lines[first].strip():
        first += 1
    while last > first and not lines[last - 1].strip():
        last -= 1
    if first == last:
        raise MalformedFragmentError(path, "summary is empty", line=heading_idx + 1)

    excerpt = "".join(lines[first:last])
    excerpt = excerpt.removesuffix("\n").removesuffix("\r")
    detail = "".join(lines[break_idx + 1 :])
    return excerpt, first + 1, detail


__all__ = [
    "FenceTracker",
    "Fragment",
    "extract_excerpt",
    "heading_titles",
    "parse_fragment",
]
