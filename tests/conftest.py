"""Shared fixtures for building throwaway FAQ trees.

A FAQ tree is a temporary repository root holding ``README.md`` with both
marker regions and one ``questions/<slug>/en-US.mdx`` fragment per question.
Tests receive a :class:`FaqTree` helper through the ``faq_tree`` fixture and
add fragments, rewrite the index, or run the generator against it.
"""

from __future__ import annotations

import json
import typing as typ

import pytest

from faq_index.config import IndexConfig
from faq_index.pipeline import IndexGenerator

if typ.TYPE_CHECKING:
    from pathlib import Path

README_HEAD = """# Angular Interview Questions

Intro paragraph kept as-is.

## Table of Contents

<!-- TABLE_OF_CONTENTS:START -->

| No. | Questions |
| --- | --------- |

<!-- TABLE_OF_CONTENTS:END -->

## Questions

<!-- QUESTIONS:START -->

"""

README_TAIL = """
<!-- QUESTIONS:END -->

Closing words, also kept as-is.
"""


def fragment_text(title: str, excerpt: str, detail: str = "More detail.") -> str:
    """Return fragment markdown with a TL;DR summary and a detail section."""
    return (
        f"---\ntitle: {json.dumps(title)}\n---\n\n"
        f"## TL;DR\n\n{excerpt}\n\n---\n\n## Details\n\n{detail}\n"
    )


class FaqTree:
    """A temporary FAQ repository rooted at ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.readme = root / "README.md"

    def add(self, slug: str, title: str, excerpt: str | None = None) -> Path:
        """Write ``questions/<slug>/en-US.mdx`` and return its path."""
        path = self.root / "questions" / slug / "en-US.mdx"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            fragment_text(title, excerpt or f"Summary of {title}."), encoding="utf-8"
        )
        return path

    def write_metadata(self, slug: str, **payload: object) -> None:
        """Write ``questions/<slug>/metadata.json``."""
        path = self.root / "questions" / slug / "metadata.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"slug": slug, **payload}), encoding="utf-8")

    def write_readme(self, slugs: typ.Sequence[str]) -> None:
        """Write an index whose Questions region lists ``slugs`` in order."""
        comments = "\n".join(
            f"<!-- Update here: /questions/{slug}/en-US.mdx -->" for slug in slugs
        )
        self.readme.write_text(README_HEAD + comments + "\n" + README_TAIL, encoding="utf-8")

    def write_manifest(self, slugs: typ.Sequence[str]) -> None:
        """Write ``questions/manifest.yaml`` listing ``slugs``."""
        lines = ["questions:", *(f"  - {slug}" for slug in slugs)]
        path = self.root / "questions" / "manifest.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def read_readme(self) -> str:
        """Return the index document without newline translation."""
        with self.readme.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()

    def config(self, **overrides: typ.Any) -> IndexConfig:
        """Return an :class:`IndexConfig` rooted at this tree."""
        return IndexConfig(root=self.root, **overrides)

    def generator(self, **overrides: typ.Any) -> IndexGenerator:
        """Return an :class:`IndexGenerator` for this tree."""
        return IndexGenerator(self.config(**overrides))


@pytest.fixture
def faq_tree(tmp_path: Path) -> FaqTree:
    """Return a FAQ tree with three questions listed in non-alphabetical order."""
    tree = FaqTree(tmp_path)
    tree.add(
        "what-is-angular",
        "What is Angular and how is it different from AngularJS?",
        "Angular is a TypeScript framework.\n\n- Components\n  - Templates",
    )
    tree.add("components", "What are components?", "Use `@Component`:\n\n```ts\n// ---\n```")
    tree.add("data-binding", "What is data binding?", "It syncs model and view.")
    tree.write_readme(["what-is-angular", "data-binding", "components"])
    return tree
