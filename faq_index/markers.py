r"""Split the index document into static text and generator-owned regions.

The index document carries two marker pairs, written as HTML comments on their
own lines::

    <!-- TABLE_OF_CONTENTS:START -->
    ...generated...
    <!-- TABLE_OF_CONTENTS:END -->

    <!-- QUESTIONS:START -->
    ...generated...
    <!-- QUESTIONS:END -->

:func:`parse_index_document` walks the document line by line with one small
state machine per pair (``seeking-start`` → ``inside-region`` → ``done``) and
reports the exact line of any malformed marker. Tokens inside fenced code
blocks are examples, not markers, and are skipped. :func:`synchronize` swaps
the region bodies and reassembles the document; bytes outside the regions,
including the marker lines themselves, are carried over unchanged.

Example
-------
>>> from faq_index.markers import synchronize
>>> doc = (
...     "# FAQ\n<!-- TABLE_OF_CONTENTS:START -->\nold\n<!-- TABLE_OF_CONTENTS:END -->\n"
...     "<!-- QUESTIONS:START -->\n<!-- QUESTIONS:END -->\n"
... )
>>> print(synchronize(doc, toc_body="new", questions_body="q"), end="")
# FAQ
<!-- TABLE_OF_CONTENTS:START -->
<BLANKLINE>
new
<BLANKLINE>
<!-- TABLE_OF_CONTENTS:END -->
<!-- QUESTIONS:START -->
<BLANKLINE>
q
<BLANKLINE>
<!-- QUESTIONS:END -->
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import QUESTIONS_END, QUESTIONS_START, TOC_END, TOC_START
from .errors import MarkerError
from .fragment import FenceTracker

if typ.TYPE_CHECKING:
    from pathlib import Path


class RegionState(enum.Enum):
    """Scanner state for a single marker pair."""

    SEEKING_START = "seeking-start"
    INSIDE_REGION = "inside-region"
    DONE = "done"


@dc.dataclass(frozen=True, slots=True)
class RegionSpec:
    """Name and tokens of one marker pair."""

    name: str
    start_token: str
    end_token: str


TOC_REGION = RegionSpec("toc", TOC_START, TOC_END)
QUESTIONS_REGION = RegionSpec("questions", QUESTIONS_START, QUESTIONS_END)
REGIONS = (TOC_REGION, QUESTIONS_REGION)


@dc.dataclass(frozen=True, slots=True)
class MarkerRegion:
    """A generator-owned span of the index document.

    Attributes
    ----------
    spec : RegionSpec
        Which marker pair bounds the region.
    start_line, end_line : str
        The raw marker lines, line endings included.
    body : str
        Raw text between the marker lines.
    start_lineno, end_lineno : int
        1-based line numbers of the marker lines in the parsed document.
    """

    spec: RegionSpec
    start_line: str
    end_line: str
    body: str
    start_lineno: int
    end_lineno: int

    @property
    def newline(self) -> str:
        """Return the line ending used by the start marker line."""
        stripped = self.start_line.rstrip("\r\n")
        return self.start_line[len(stripped) :] or "\n"

    def render(self) -> str:
        """Return the region exactly as it should appear in the document."""
        return f"{self.start_line}{self.body}{self.end_line}"

    def with_body(self, block: str) -> MarkerRegion:
        """Return a copy whose body is ``block`` padded by one blank line each side."""
        newline = self.newline
        pieces = [piece.removesuffix("\r") for piece in block.split("\n")]
        body = "".join(f"{line}{newline}" for line in ["", *pieces, ""])
        return dc.replace(self, body=body)


@dc.dataclass(frozen=True, slots=True)
class IndexDocument:
    """The index document split around its two marker regions."""

    prefix: str
    toc: MarkerRegion
    middle: str
    questions: MarkerRegion
    suffix: str

    @property
    def leading_text(self) -> str:
        """Return everything that precedes the Questions region body."""
        return f"{self.prefix}{self.toc.render()}{self.middle}"

    def render(self) -> str:
        """Reassemble the full document text."""
        return (
            f"{self.prefix}{self.toc.render()}{self.middle}"
            f"{self.questions.render()}{self.suffix}"
        )

    def with_bodies(self, *, toc_body: str, questions_body: str) -> IndexDocument:
        """Return a copy with both region bodies replaced."""
        return dc.replace(
            self,
            toc=self.toc.with_body(toc_body),
            questions=self.questions.with_body(questions_body),
        )


def _scan_regions(
    lines: list[str], path: Path | str
) -> dict[str, tuple[int, int]]:
    """Return ``{region name: (start index, end index)}`` for every marker pair."""
    tokens: dict[str, tuple[RegionSpec, bool]] = {}
    for spec in REGIONS:
        tokens[spec.start_token] = (spec, True)
        tokens[spec.end_token] = (spec, False)

    states = {spec.name: RegionState.SEEKING_START for spec in REGIONS}
    starts: dict[str, int] = {}
    ends: dict[str, int] = {}
    active: RegionSpec | None = None
    fences = FenceTracker()
    for idx, line in enumerate(lines):
        if fences.feed(line):
            continue
        found = tokens.get(line.strip())
        if found is None:
            continue
        spec, is_start = found
        token = spec.start_token if is_start else spec.end_token
        state = states[spec.name]
        match (state, is_start):
            case (RegionState.SEEKING_START, True):
                if active is not None:
                    raise MarkerError("nested", token, path=path, line=idx + 1)
                states[spec.name] = RegionState.INSIDE_REGION
                starts[spec.name] = idx
                active = spec
            case (RegionState.SEEKING_START, False):
                raise MarkerError("end-before-start", token, path=path, line=idx + 1)
            case (RegionState.INSIDE_REGION, False):
                states[spec.name] = RegionState.DONE
                ends[spec.name] = idx
                active = None
            case (_, True):
                raise MarkerError("duplicate-start", token, path=path, line=idx + 1)
            case _:
                raise MarkerError("duplicate-end", token, path=path, line=idx + 1)

    for spec in REGIONS:
        match states[spec.name]:
            case RegionState.SEEKING_START:
                raise MarkerError("missing-start", spec.start_token, path=path)
            case RegionState.INSIDE_REGION:
                line = starts[spec.name] + 1
                raise MarkerError("missing-end", spec.end_token, path=path, line=line)
    return {spec.name: (starts[spec.name], ends[spec.name]) for spec in REGIONS}


def parse_index_document(text: str, *, path: Path | str = "<document>") -> IndexDocument:
    """Split ``text`` into an :class:`IndexDocument`.

    Parameters
    ----------
    text : str
        Full index document, read without newline translation.
    path : Path or str, optional
        Document location used in error messages.

    Returns
    -------
    IndexDocument
        Static text and both marker regions.

    Raises
    ------
    MarkerError
        If a marker is missing, duplicated, appears before its start, nests
        inside the other region, or the Questions region precedes the TOC.
    """
    lines = text.splitlines(keepends=True)
    spans = _scan_regions(lines, path)
    toc_start, toc_end = spans[TOC_REGION.name]
    q_start, q_end = spans[QUESTIONS_REGION.name]
    if q_start < toc_start:
        raise MarkerError(
            "out-of-order", QUESTIONS_REGION.start_token, path=path, line=q_start + 1
        )

    def _region(spec: RegionSpec, start: int, end: int) -> MarkerRegion:
        return MarkerRegion(
            spec=spec,
            start_line=lines[start],
            end_line=lines[end],
            body="".join(lines[start + 1 : end]),
            start_lineno=start + 1,
            end_lineno=end + 1,
        )

    return IndexDocument(
        prefix="".join(lines[:toc_start]),
        toc=_region(TOC_REGION, toc_start, toc_end),
        middle="".join(lines[toc_end + 1 : q_start]),
        questions=_region(QUESTIONS_REGION, q_start, q_end),
        suffix="".join(lines[q_end + 1 :]),
    )


def synchronize(
    text: str, *, toc_body: str, questions_body: str, path: Path | str = "<document>"
) -> str:
    """Return ``text`` with both marker regions replaced by the given blocks."""
    document = parse_index_document(text, path=path)
    return document.with_bodies(toc_body=toc_body, questions_body=questions_body).render()


__all__ = [
    "QUESTIONS_REGION",
    "REGIONS",
    "TOC_REGION",
    "IndexDocument",
    "MarkerRegion",
    "RegionSpec",
    "RegionState",
    "parse_index_document",
    "synchronize",
]
