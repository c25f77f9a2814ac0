"""Regenerate the index document from its manifest and fragments.

The heart of the pipeline is :func:`generate`, a pure function of the manifest,
the raw fragment texts, and the current index document. :class:`IndexGenerator`
wraps it with the only side effects the tool has: reading the tree and
atomically replacing the index document.

>>> from pathlib import Path
>>> from faq_index.config import load_index_config
>>> from faq_index.pipeline import IndexGenerator
>>> generator = IndexGenerator(load_index_config(Path(".")))  # doctest: +SKIP
>>> generator.run()  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import os
import shutil
import tempfile
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_SUMMARY_HEADING
from .assembler import IndexAssembler
from .drift import DriftResult, check_drift
from .errors import FaqIndexError, MalformedFragmentError, MissingFragmentError
from .fragment import heading_titles, parse_fragment
from .markers import parse_index_document
from .models import Entry
from .slugs import SlugGenerator, slugify
from .sources import collect_fragments, load_manifest

if typ.TYPE_CHECKING:
    from .config import IndexConfig
    from .sources import ManifestEntry


def build_entries(
    manifest: typ.Sequence[ManifestEntry],
    fragments: typ.Mapping[str, str],
    *,
    leading_text: str = "",
    summary_heading: str = DEFAULT_SUMMARY_HEADING,
) -> list[Entry]:
    """Parse each manifest fragment and assign order and slug.

    Parameters
    ----------
    manifest : Sequence[ManifestEntry]
        Entries in display order.
    fragments : Mapping[str, str]
        Raw fragment text keyed by ``ManifestEntry.rel_path``.
    leading_text : str, optional
        Index text preceding the Questions region; its headings claim their
        slugs first, as they do when the document is rendered.
    summary_heading : str, optional
        Heading that opens each fragment's summary.

    Raises
    ------
    MissingFragmentError
        If a manifest entry has no fragment text.
    MalformedFragmentError
        If a fragment cannot be parsed or its title yields an empty slug.
    """
    slugger = SlugGenerator()
    for title in heading_titles(leading_text):
        if slugify(title):
            slugger.slug(title)

    entries: list[Entry] = []
    for order, item in enumerate(manifest, start=1):
        try:
            text = fragments[item.rel_path]
        except KeyError as exc:
            raise MissingFragmentError(Path(item.rel_path)) from exc
        fragment = parse_fragment(text, item.rel_path, summary_heading=summary_heading)
        if not slugify(fragment.title):
            msg = f"title {fragment.title!r} produces an empty anchor slug"
            raise MalformedFragmentError(item.rel_path, msg, line=1)
        entries.append(
            Entry(
                order=order,
                title=fragment.title,
                slug=slugger.slug(fragment.title),
                source_path=item.display_path,
                excerpt=fragment.excerpt,
            )
        )
    return entries


def generate(
    manifest: typ.Sequence[ManifestEntry],
    fragments: typ.Mapping[str, str],
    current_document: str,
    *,
    assembler: IndexAssembler | None = None,
    summary_heading: str = DEFAULT_SUMMARY_HEADING,
    document_path: Path | str = "<document>",
) -> str:
    """Return ``current_document`` with both marker regions regenerated.

    The function never touches the filesystem; everything outside the two
    marker regions is returned unchanged.
    """
    document = parse_index_document(current_document, path=document_path)
    entries = build_entries(
        manifest,
        fragments,
        leading_text=document.leading_text,
        summary_heading=summary_heading,
    )
    blocks = (assembler or IndexAssembler()).assemble(entries)
    return document.with_bodies(
        toc_body=blocks.toc, questions_body=blocks.questions
    ).render()


@dc.dataclass(frozen=True, slots=True)
class GenerationResult:
    """The committed and freshly generated index text for one run."""

    path: Path
    committed: str
    generated: str

    @property
    def changed(self) -> bool:
        """Return ``True`` when writing would modify the document."""
        return self.committed != self.generated


class IndexGenerator:
    """Read the FAQ tree, regenerate the index, and write or check it."""

    def __init__(
        self, config: IndexConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        config : IndexConfig
            Resolved configuration (see :func:`faq_index.config.load_index_config`).
        templates_dir : Path, optional
            Override for the Jinja templates directory.
        """
        self.config = config
        self.assembler = IndexAssembler(
            templates_dir=templates_dir,
            toc_anchor=config.toc_anchor,
            promo=config.promo,
        )

    def render(self) -> GenerationResult:
        """Return the committed and regenerated document without writing."""
        readme_path = self.config.readme_path
        if not readme_path.is_file():
            msg = f"{readme_path}: index document not found"
            raise FaqIndexError(msg)
        committed = _read_document(readme_path)
        manifest = load_manifest(self.config, committed)
        handles = collect_fragments(manifest, self.config.root)
        fragments = {
            item.rel_path: _read_fragment(handle.path)
            for item, handle in zip(manifest, handles, strict=True)
        }
        generated = generate(
            manifest,
            fragments,
            committed,
            assembler=self.assembler,
            summary_heading=self.config.summary_heading,
            document_path=readme_path,
        )
        return GenerationResult(
            path=readme_path, committed=committed, generated=generated
        )

    def run(self) -> bool:
        """Regenerate and write the index; return ``True`` if it changed."""
        result = self.render()
        if not result.changed:
            return False
        write_atomic(result.path, result.generated)
        return True

    def check(self) -> DriftResult:
        """Compare the committed index with the regenerated one."""
        result = self.render()
        display = _display_path(result.path, self.config.root)
        return check_drift(result.generated, result.committed, display)


def _read_exact(path: Path) -> str:
    """Return the file contents without newline translation."""
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _read_document(path: Path) -> str:
    try:
        return _read_exact(path)
    except UnicodeDecodeError as exc:
        msg = f"{path}: index document is not valid UTF-8 (byte {exc.start})"
        raise FaqIndexError(msg) from exc
    except OSError as exc:
        msg = f"{path}: cannot read index document ({exc.strerror})"
        raise FaqIndexError(msg) from exc


def _read_fragment(path: Path) -> str:
    try:
        return _read_exact(path)
    except UnicodeDecodeError as exc:
        reason = f"not valid UTF-8 (byte {exc.start})"
        raise MalformedFragmentError(path, reason) from exc
    except OSError as exc:
        msg = f"{path}: cannot read fragment ({exc.strerror})"
        raise FaqIndexError(msg) from exc


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:  # pragma: no cover - readme outside the root
        return path.as_posix()


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` so readers never see a partial file.

    The text goes to a temporary file in the same directory, which is then
    moved over the target with :func:`os.replace`. The target's permission
    bits are kept.
    """
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


__all__ = [
    "GenerationResult",
    "IndexGenerator",
    "build_entries",
    "generate",
    "write_atomic",
]
