"""Exception hierarchy raised by the faq-index pipeline.

Every failure is fatal to a run: the CLI catches :class:`FaqIndexError`,
reports the message on stderr, and exits non-zero without touching the index
document. Messages always name the offending file and, where one is known,
the 1-based line number so authors can jump straight to the problem.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


def _location(path: Path | str, line: int | None) -> str:
    return f"{path}:{line}" if line is not None else str(path)


class FaqIndexError(RuntimeError):
    """Base class for every error reported by the index generator."""


class ConfigError(FaqIndexError):
    """Raised when ``faq-index.yaml`` is unreadable or holds invalid values."""


class ManifestError(FaqIndexError):
    """Raised when the entry manifest is malformed or names a file twice."""


class MissingFragmentError(FaqIndexError):
    """Raised when the manifest references a fragment that does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path}: fragment file not found")


class MalformedFragmentError(FaqIndexError):
    """Raised when a fragment lacks a usable title or summary block."""

    def __init__(self, path: Path | str, reason: str, line: int | None = None) -> None:
        self.path = path
        self.reason = reason
        self.line = line
        super().__init__(f"{_location(path, line)}: {reason}")


class MarkerError(FaqIndexError):
    """Raised when the index document's marker regions are unusable.

    Attributes
    ----------
    kind : str
        One of ``missing-start``, ``missing-end``, ``end-before-start``,
        ``duplicate-start``, ``duplicate-end``, ``nested`` or
        ``out-of-order``.
    token : str
        The marker token that triggered the error.
    line : int or None
        1-based line of the offending marker, when one exists.
    """

    def __init__(
        self,
        kind: str,
        token: str,
        *,
        path: Path | str = "<document>",
        line: int | None = None,
    ) -> None:
        self.kind = kind
        self.token = token
        self.path = path
        self.line = line
        super().__init__(f"{_location(path, line)}: {kind} for marker {token!r}")


class DriftDetectedError(FaqIndexError):
    """Raised in check mode when the committed index differs from the output."""

    def __init__(self, path: Path | str, diff: str) -> None:
        self.path = path
        self.diff = diff
        super().__init__(f"{path} is out of date; run `faq-index generate`")


__all__ = [
    "ConfigError",
    "DriftDetectedError",
    "FaqIndexError",
    "MalformedFragmentError",
    "ManifestError",
    "MarkerError",
    "MissingFragmentError",
]
