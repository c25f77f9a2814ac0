"""Render the Table-of-Contents and Questions blocks of the index document.

Both blocks come from Jinja templates in ``faq_index/templates`` so the fixed
markdown scaffolding (table header, ``Update here`` comments, promotional
blockquote, back-to-top links) lives in one editable place. The output is
diffed byte for byte in check mode, so spacing is fixed: TOC rows are
consecutive lines and question entries are separated by exactly one blank
line.

>>> from faq_index.assembler import IndexAssembler
>>> from faq_index.models import Entry
>>> entry = Entry(1, "What is Angular?", "what-is-angular", "/q/a.mdx", "A framework.")
>>> print(IndexAssembler().render_toc([entry]))
| No. | Questions |
| --- | --------- |
| 1 | [What is Angular?](#what-is-angular) |
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ._constants import DEFAULT_PROMO, DEFAULT_TOC_ANCHOR, UPDATE_HERE_TEMPLATE
from .models import AssembledBlocks, Entry

ENTRY_SEPARATOR = "\n\n"


class IndexAssembler:
    """Turn an ordered entry list into the two generated markdown blocks."""

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        toc_anchor: str = DEFAULT_TOC_ANCHOR,
        promo: str = DEFAULT_PROMO,
    ) -> None:
        """Initialize the assembler.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``toc.md.jinja`` and ``question.md.jinja``.
            Defaults to the ``faq_index/templates`` directory when ``None``.
        toc_anchor : str, optional
            Anchor of the index's TOC heading, targeted by "Back to top".
        promo : str, optional
            Promotional blockquote text; an empty string omits the block.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.toc_template = self.env.get_template("toc.md.jinja")
        self.question_template = self.env.get_template("question.md.jinja")
        self.toc_anchor = toc_anchor
        self.promo = promo

    def assemble(self, entries: typ.Sequence[Entry]) -> AssembledBlocks:
        """Render both region bodies for ``entries``."""
        return AssembledBlocks(
            toc=self.render_toc(entries),
            questions=self.render_questions(entries),
        )

    def render_toc(self, entries: typ.Sequence[Entry]) -> str:
        """Return the TOC table, one row per entry in manifest order."""
        return self.toc_template.render(entries=entries).rstrip("\n")

    def render_questions(self, entries: typ.Sequence[Entry]) -> str:
        """Return every question entry separated by one blank line."""
        return ENTRY_SEPARATOR.join(self.render_question(entry) for entry in entries)

    def render_question(self, entry: Entry) -> str:
        """Return the numbered heading, excerpt, and footer for one entry."""
        return self.question_template.render(
            entry=entry,
            update_here=UPDATE_HERE_TEMPLATE.format(path=entry.source_path),
            promo=self.promo.strip(),
            toc_anchor=self.toc_anchor,
        )


__all__ = ["ENTRY_SEPARATOR", "IndexAssembler"]
