"""Load and validate the faq-index configuration file.

The optional ``faq-index.yaml`` at the repository root tunes where the index
document and fragments live, which manifest source drives ordering, and the
fixed text the assembler emits. Everything has a default, so a repository that
follows the conventional layout needs no configuration at all.

Examples
--------
>>> from pathlib import Path
>>> from faq_index.config import load_index_config
>>> config = load_index_config(Path("."))  # doctest: +SKIP
>>> config.readme_path  # doctest: +SKIP
PosixPath('README.md')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_LOCALE,
    DEFAULT_MANIFEST_PATH,
    DEFAULT_PROMO,
    DEFAULT_QUESTIONS_DIR,
    DEFAULT_README,
    DEFAULT_SUMMARY_HEADING,
    DEFAULT_TOC_ANCHOR,
)
from .errors import ConfigError

MANIFEST_SOURCES = ("document", "file", "metadata")


@dc.dataclass(slots=True)
class IndexConfig:
    """A fully resolved configuration for one index document.

    Attributes
    ----------
    root : Path
        Repository root; every other path is resolved against it.
    readme : str
        Index document path relative to ``root``.
    questions_dir : str
        Directory holding one sub-directory per question.
    locale : str
        Locale whose ``<locale>.mdx`` fragment is embedded.
    manifest_source : str
        ``document``, ``file`` or ``metadata``; see :mod:`faq_index.sources`.
    manifest_path : str
        YAML manifest used when ``manifest_source`` is ``file``.
    featured_only : bool
        Skip questions whose metadata is not ``featured`` (metadata source).
    summary_heading : str
        Heading line that opens the excerpt in each fragment.
    toc_anchor : str
        Anchor targeted by every "Back to top" link.
    promo : str
        Promotional blockquote text; empty to omit it.
    """

    root: Path
    readme: str = DEFAULT_README
    questions_dir: str = DEFAULT_QUESTIONS_DIR
    locale: str = DEFAULT_LOCALE
    manifest_source: str = "document"
    manifest_path: str = DEFAULT_MANIFEST_PATH
    featured_only: bool = True
    summary_heading: str = DEFAULT_SUMMARY_HEADING
    toc_anchor: str = DEFAULT_TOC_ANCHOR
    promo: str = DEFAULT_PROMO

    @property
    def readme_path(self) -> Path:
        """Return the absolute path of the index document."""
        return self.root / self.readme

    @property
    def questions_path(self) -> Path:
        """Return the absolute path of the questions directory."""
        return self.root / self.questions_dir

    @property
    def manifest_file(self) -> Path:
        """Return the absolute path of the YAML manifest."""
        return self.root / self.manifest_path


_STRING_KEYS = (
    "readme",
    "questions_dir",
    "locale",
    "manifest_source",
    "manifest_path",
    "summary_heading",
    "toc_anchor",
    "promo",
)
_BOOL_KEYS = ("featured_only",)


def load_index_config(root: Path, config_path: Path | None = None) -> IndexConfig:
    """Load ``faq-index.yaml`` for ``root`` and merge it over the defaults.

    Parameters
    ----------
    root : Path
        Repository root containing the index document.
    config_path : Path, optional
        Explicit configuration file. When ``None`` the default
        ``faq-index.yaml`` under ``root`` is used if it exists.

    Returns
    -------
    IndexConfig
        Configuration with every field resolved.

    Raises
    ------
    ConfigError
        If an explicit ``config_path`` is missing, the YAML cannot be parsed,
        or any value has the wrong type or an unknown key is present.
    """
    if config_path is None:
        candidate = root / DEFAULT_CONFIG_FILE
        if not candidate.exists():
            return IndexConfig(root=root)
        config_path = candidate
    elif not config_path.exists():
        msg = f"Configuration file '{config_path}' not found."
        raise ConfigError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"{config_path}: invalid YAML ({exc})"
        raise ConfigError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"{config_path}: cannot read configuration ({exc})"
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"{config_path}: top-level YAML structure must be a mapping."
        raise ConfigError(msg)

    section = loaded.get("index", {}) or {}
    if not isinstance(section, dict):
        msg = f"{config_path}: 'index' must be a mapping."
        raise ConfigError(msg)
    return _build_index_config(root, section, config_path)


def _build_index_config(
    root: Path, payload: typ.Mapping[str, typ.Any], source: Path
) -> IndexConfig:
    """Validate ``payload`` and build an :class:`IndexConfig` from it."""
    known = set(_STRING_KEYS) | set(_BOOL_KEYS)
    unknown = sorted(set(payload) - known)
    if unknown:
        msg = f"{source}: unknown option(s): {', '.join(unknown)}"
        raise ConfigError(msg)

    values: dict[str, typ.Any] = {}
    for key in _STRING_KEYS:
        if key in payload:
            values[key] = _expect(payload[key], str, key, source)
    for key in _BOOL_KEYS:
        if key in payload:
            values[key] = _expect(payload[key], bool, key, source)

    manifest_source = values.get("manifest_source", "document")
    if manifest_source not in MANIFEST_SOURCES:
        choices = ", ".join(MANIFEST_SOURCES)
        msg = f"{source}: manifest_source must be one of {choices}"
        raise ConfigError(msg)
    return IndexConfig(root=root, **values)


def _expect(value: object, kind: type, key: str, source: Path) -> typ.Any:
    """Return ``value`` when it is an instance of ``kind``; raise otherwise."""
    if not isinstance(value, kind):
        msg = f"{source}: '{key}' must be a {kind.__name__}"
        raise ConfigError(msg)
    return value


__all__ = ["MANIFEST_SOURCES", "IndexConfig", "load_index_config"]
