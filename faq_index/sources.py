"""Resolve the ordered list of question fragments that make up the index.

Display order is author-controlled, never alphabetical, so every run starts
from a *manifest*: an ordered list of fragment paths. Three manifest sources
are supported, selected by ``manifest_source`` in the configuration:

``document``
    The committed index itself. Order and paths come from the
    ``<!-- Update here: <path> -->`` comments inside the Questions region.
``file``
    A YAML file listing question slugs (``questions/manifest.yaml``).
``metadata``
    Per-question ``metadata.json`` files; featured questions ordered by
    ``ranking``.

:func:`collect_fragments` then resolves each manifest entry to a file on disk,
failing fast when one is missing.
"""

from __future__ import annotations

import dataclasses as dc
import json
import re
import typing as typ
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import FRAGMENT_SUFFIX, METADATA_FILENAME
from .errors import ManifestError, MissingFragmentError
from .markers import parse_index_document

if typ.TYPE_CHECKING:
    from .config import IndexConfig

UPDATE_HERE_PATTERN = re.compile(r"<!--\s*Update here:\s*(\S+?)\s*-->")


@dc.dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One manifest row: a question key and its fragment path.

    ``rel_path`` is POSIX-style and relative to the repository root, e.g.
    ``questions/what-is-angular/en-US.mdx``.
    """

    key: str
    rel_path: str

    @property
    def display_path(self) -> str:
        """Return the root-anchored path written into ``Update here`` comments."""
        return f"/{self.rel_path}"


@dc.dataclass(frozen=True, slots=True)
class FragmentHandle:
    """A manifest entry resolved to an existing file."""

    order: int
    key: str
    path: Path
    display_path: str


def fragment_rel_path(config: IndexConfig, slug: str, locale: str | None = None) -> str:
    """Return the conventional fragment path for ``slug`` in ``locale``."""
    filename = f"{locale or config.locale}{FRAGMENT_SUFFIX}"
    return PurePosixPath(config.questions_dir, slug, filename).as_posix()


def load_manifest(
    config: IndexConfig, document_text: str | None = None
) -> list[ManifestEntry]:
    """Load the manifest selected by ``config.manifest_source``.

    Parameters
    ----------
    config : IndexConfig
        Resolved configuration.
    document_text : str, optional
        Current index document contents; required for the ``document``
        source and read from ``config.readme_path`` when omitted.

    Returns
    -------
    list[ManifestEntry]
        Entries in display order.

    Raises
    ------
    ManifestError
        If the manifest cannot be read, is malformed, or names a fragment
        twice.
    MarkerError
        If the ``document`` source is used and the index markers are broken.
    """
    match config.manifest_source:
        case "document":
            if document_text is None:
                document_text = config.readme_path.read_text(encoding="utf-8")
            entries = manifest_from_document(document_text, config.readme_path)
        case "file":
            entries = manifest_from_file(config)
        case "metadata":
            entries = manifest_from_metadata(config)
        case other:
            msg = f"Unknown manifest source '{other}'."
            raise ManifestError(msg)
    _reject_duplicates(entries)
    return entries


def manifest_from_document(text: str, path: Path | str) -> list[ManifestEntry]:
    """Read manifest order from the ``Update here`` comments of the index."""
    document = parse_index_document(text, path=path)
    entries: list[ManifestEntry] = []
    seen: set[str] = set()
    for match in UPDATE_HERE_PATTERN.finditer(document.questions.body):
        rel_path = match.group(1).lstrip("/")
        if rel_path in seen:
            continue
        seen.add(rel_path)
        key = PurePosixPath(rel_path).parent.name
        entries.append(ManifestEntry(key=key, rel_path=rel_path))
    return entries


def manifest_from_file(config: IndexConfig) -> list[ManifestEntry]:
    """Read the YAML manifest named by ``config.manifest_path``.

    The file holds a ``questions`` list whose items are either a slug string
    or a mapping with ``slug`` plus an optional ``locale`` or ``path``.
    """
    manifest_file = config.manifest_file
    if not manifest_file.exists():
        msg = f"Manifest file '{manifest_file}' not found."
        raise ManifestError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with manifest_file.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"{manifest_file}: invalid YAML ({exc})"
        raise ManifestError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"{manifest_file}: cannot read manifest ({exc})"
        raise ManifestError(msg) from exc
    items = loaded.get("questions") if isinstance(loaded, dict) else None
    if not isinstance(items, list):
        msg = f"{manifest_file}: expected a top-level 'questions' list"
        raise ManifestError(msg)

    entries: list[ManifestEntry] = []
    for position, item in enumerate(items, start=1):
        match item:
            case str() as slug if slug.strip():
                entries.append(
                    ManifestEntry(key=slug, rel_path=fragment_rel_path(config, slug))
                )
            case {"slug": str() as slug, **rest} if slug.strip():
                entries.append(_entry_from_mapping(config, slug, rest))
            case _:
                msg = f"{manifest_file}: item {position} must be a slug or a mapping with 'slug'"
                raise ManifestError(msg)
    return entries


def _entry_from_mapping(
    config: IndexConfig, slug: str, payload: typ.Mapping[str, typ.Any]
) -> ManifestEntry:
    """Build a manifest entry from a ``{slug, locale?, path?}`` mapping."""
    explicit = payload.get("path")
    if explicit:
        return ManifestEntry(key=slug, rel_path=str(explicit).lstrip("/"))
    locale = payload.get("locale")
    return ManifestEntry(key=slug, rel_path=fragment_rel_path(config, slug, locale))


def manifest_from_metadata(config: IndexConfig) -> list[ManifestEntry]:
    """Order questions by the ``ranking`` recorded in each ``metadata.json``."""
    questions_path = config.questions_path
    if not questions_path.is_dir():
        msg = f"Questions directory '{questions_path}' not found."
        raise ManifestError(msg)

    ranked: list[tuple[float, str]] = []
    for directory in sorted(p for p in questions_path.iterdir() if p.is_dir()):
        metadata = _read_metadata(directory / METADATA_FILENAME)
        if metadata.get("slug") != directory.name:
            msg = (
                f"{directory / METADATA_FILENAME}: slug {metadata.get('slug')!r} "
                f"does not match directory '{directory.name}'"
            )
            raise ManifestError(msg)
        if config.featured_only and not metadata.get("featured"):
            continue
        ranking = metadata.get("ranking")
        if isinstance(ranking, bool) or not isinstance(ranking, int | float):
            msg = f"{directory / METADATA_FILENAME}: 'ranking' must be a number"
            raise ManifestError(msg)
        ranked.append((ranking, directory.name))

    ranked.sort()
    return [
        ManifestEntry(key=slug, rel_path=fragment_rel_path(config, slug))
        for _ranking, slug in ranked
    ]


def _read_metadata(path: Path) -> dict[str, typ.Any]:
    """Return the decoded ``metadata.json`` payload at ``path``."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        msg = f"{path}: metadata file not found"
        raise ManifestError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})"
        raise ManifestError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"{path}: cannot read metadata ({exc})"
        raise ManifestError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"{path}: metadata must be a JSON object"
        raise ManifestError(msg)
    return payload


def _reject_duplicates(entries: list[ManifestEntry]) -> None:
    seen: set[str] = set()
    for entry in entries:
        if entry.rel_path in seen:
            msg = f"Manifest lists '{entry.rel_path}' more than once."
            raise ManifestError(msg)
        seen.add(entry.rel_path)


def collect_fragments(
    manifest: typ.Sequence[ManifestEntry], root: Path
) -> list[FragmentHandle]:
    """Resolve every manifest entry under ``root``, preserving manifest order.

    Raises
    ------
    MissingFragmentError
        If any entry's fragment file does not exist.
    """
    handles: list[FragmentHandle] = []
    for order, entry in enumerate(manifest, start=1):
        path = root / entry.rel_path
        if not path.is_file():
            raise MissingFragmentError(path)
        handles.append(
            FragmentHandle(
                order=order,
                key=entry.key,
                path=path,
                display_path=entry.display_path,
            )
        )
    return handles


__all__ = [
    "FragmentHandle",
    "ManifestEntry",
    "collect_fragments",
    "fragment_rel_path",
    "load_manifest",
    "manifest_from_document",
    "manifest_from_file",
    "manifest_from_metadata",
]
