"""Shared dataclasses used by the index generation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class Entry:
    """One numbered question as it appears in the index document.

    Attributes
    ----------
    order : int
        1-based position; contiguous and strictly increasing in manifest order.
    title : str
        Display title, markup preserved.
    slug : str
        Anchor identifier, unique within the document.
    source_path : str
        Root-anchored fragment path written into ``Update here`` comments.
    excerpt : str
        Summary block copied byte for byte from the fragment.
    """

    order: int
    title: str
    slug: str
    source_path: str
    excerpt: str


@dc.dataclass(frozen=True, slots=True)
class AssembledBlocks:
    """Rendered bodies for the two marker regions."""

    toc: str
    questions: str


__all__ = ["AssembledBlocks", "Entry"]
