r"""Compare freshly generated output with the committed index document.

Drift checking is pure and read-only so it can gate merges in CI without
write access, and doubles as a "what would change" preview locally.

>>> from faq_index.drift import Clean, check_drift
>>> check_drift("same\n", "same\n", "README.md") == Clean()
True
"""

from __future__ import annotations

import dataclasses as dc
import difflib


@dc.dataclass(frozen=True, slots=True)
class Clean:
    """The committed document matches the generated output."""


@dc.dataclass(frozen=True, slots=True)
class Drifted:
    """The committed document differs; ``diff`` is a unified diff."""

    diff: str


DriftResult = Clean | Drifted


def check_drift(generated: str, committed: str, path: str = "README.md") -> DriftResult:
    """Return :class:`Clean` when both texts match, else :class:`Drifted`.

    Parameters
    ----------
    generated : str
        Output the pipeline would write now.
    committed : str
        Document currently on disk.
    path : str, optional
        Display path used in the ``a/`` and ``b/`` diff headers.

    Returns
    -------
    DriftResult
        ``Clean()`` or ``Drifted(diff)`` where ``diff`` turns the committed
        text into the generated text.
    """
    if generated == committed:
        return Clean()
    diff_lines = difflib.unified_diff(
        committed.splitlines(keepends=True),
        generated.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    diff = "".join(line if line.endswith("\n") else f"{line}\n" for line in diff_lines)
    return Drifted(diff=diff)


__all__ = ["Clean", "DriftResult", "Drifted", "check_drift"]
