"""Cyclopts CLI entrypoint for regenerating the FAQ index document.

The ``faq-index`` console script defined here rebuilds the Table-of-Contents
and Questions regions of ``README.md`` from the per-question fragments. Run
``faq-index generate`` after editing a fragment, and ``faq-index generate
--check`` in CI to fail the build when the committed index is stale.

Examples
--------
Regenerate the index in the current repository:

>>> from faq_index.cli import main
>>> main()  # doctest: +SKIP

Check a checkout for drift without writing:

>>> from faq_index.cli import app
>>> app(["generate", "--check", "--root", "."])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from .config import load_index_config
from .drift import Clean, Drifted
from .errors import DriftDetectedError, FaqIndexError
from .pipeline import IndexGenerator

app = App(name="faq-index", help="Keep the FAQ index in sync with its fragments.")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Regenerate the index document from the question fragments.")
def generate(
    *,
    check: typ.Annotated[
        bool,
        Parameter(help="Report drift instead of writing; exit 1 when stale"),
    ] = False,
    root: typ.Annotated[
        Path, Parameter(help="Repository root containing the index document")
    ] = Path(),
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to faq-index.yaml (defaults to <root>/faq-index.yaml)"),
    ] = None,
) -> None:
    """Regenerate or check the FAQ index document.

    Parameters
    ----------
    check : bool, optional
        When ``True`` nothing is written; a unified diff is printed and the
        process exits with status 1 if the committed document is stale.
    root : Path, optional
        Repository root; defaults to the current directory.
    config : Path or None, optional
        Explicit configuration file.

    Returns
    -------
    None
        Prints ``wrote <path>`` or ``<path> is up to date``.

    Raises
    ------
    SystemExit
        With status 1 on any pipeline error or, in check mode, on drift.
    """
    try:
        index_config = load_index_config(root, config)
        generator = IndexGenerator(index_config)
        readme = _format_path(index_config.readme_path)
        if check:
            _check(generator, readme)
        elif generator.run():
            print(f"wrote {readme}")
        else:
            print(f"{readme} is up to date")
    except DriftDetectedError as exc:
        sys.stdout.write(exc.diff)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except FaqIndexError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _check(generator: IndexGenerator, readme: str) -> None:
    """Raise :class:`DriftDetectedError` when the committed index is stale."""
    match generator.check():
        case Clean():
            print(f"{readme} is up to date")
        case Drifted(diff=diff):
            raise DriftDetectedError(readme, diff)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``faq-index`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
