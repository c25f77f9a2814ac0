"""Unit tests for rendering the TOC and Questions blocks."""

from __future__ import annotations

from faq_index._constants import DEFAULT_PROMO
from faq_index.assembler import IndexAssembler
from faq_index.models import Entry

ENTRIES = [
    Entry(1, "What is `ngOnInit`?", "what-is-ngoninit", "/questions/a/en-US.mdx", "Hook.\n\n- one"),
    Entry(2, "Foo", "foo", "/questions/b/en-US.mdx", "```ts\nconst x = 1;\n```"),
]


def test_toc_rows_follow_entry_order() -> None:
    """The TOC is the fixed header followed by one row per entry."""
    assert IndexAssembler().render_toc(ENTRIES) == (
        "| No. | Questions |\n"
        "| --- | --------- |\n"
        "| 1 | [What is `ngOnInit`?](#what-is-ngoninit) |\n"
        "| 2 | [Foo](#foo) |"
    )


def test_empty_toc_keeps_header() -> None:
    """An empty manifest still renders the table header."""
    assert IndexAssembler().render_toc([]) == "| No. | Questions |\n| --- | --------- |"


def test_question_block_layout() -> None:
    """Each entry embeds its excerpt between identical Update-here comments."""
    rendered = IndexAssembler().render_question(ENTRIES[0])
    assert rendered == (
        "1. ### What is `ngOnInit`?\n"
        "\n"
        "<!-- Update here: /questions/a/en-US.mdx -->\n"
        "\n"
        "Hook.\n"
        "\n"
        "- one\n"
        "\n"
        "<!-- Update here: /questions/a/en-US.mdx -->\n"
        "\n"
        "<br>\n"
        "\n"
        f"> {DEFAULT_PROMO}\n"
        "\n"
        "[Back to top ↑](#table-of-contents)\n"
        "<br>\n"
        "<br>"
    )


def test_empty_promo_omits_blockquote() -> None:
    """Without promotional text the <br> and blockquote pair disappears."""
    assembler = IndexAssembler(promo="", toc_anchor="contents")
    rendered = assembler.render_question(ENTRIES[1])
    assert rendered == (
        "2. ### Foo\n"
        "\n"
        "<!-- Update here: /questions/b/en-US.mdx -->\n"
        "\n"
        "```ts\n"
        "const x = 1;\n"
        "```\n"
        "\n"
        "<!-- Update here: /questions/b/en-US.mdx -->\n"
        "\n"
        "[Back to top ↑](#contents)\n"
        "<br>\n"
        "<br>"
    )


def test_questions_are_separated_by_one_blank_line() -> None:
    """Consecutive entries are joined with exactly one blank line."""
    assembler = IndexAssembler(promo="")
    blocks = assembler.assemble(ENTRIES)
    assert "<br>\n<br>\n\n2. ### Foo\n" in blocks.questions
    assert blocks.questions.startswith("1. ### ")
    assert blocks.questions.endswith("<br>\n<br>")
    assert blocks.toc == assembler.render_toc(ENTRIES)


def test_excerpt_markup_is_not_escaped() -> None:
    """Markdown and HTML in excerpts pass through without autoescaping."""
    entry = Entry(1, "A <b>bold</b> & title", "a-bold-title", "/q.mdx", "<kbd>Ctrl</kbd> & {{ x }}")
    rendered = IndexAssembler(promo="").render_question(entry)
    assert "1. ### A <b>bold</b> & title\n" in rendered
    assert "\n<kbd>Ctrl</kbd> & {{ x }}\n" in rendered
