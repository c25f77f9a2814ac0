"""Keep a FAQ index document in sync with its per-question fragments.

This package exposes the CLI entry points used by ``faq-index`` to rebuild the
Table-of-Contents and Questions regions of ``README.md`` and to check a
checkout for drift in CI.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``generate``: Pure function regenerating an index document from text.

Examples
--------
>>> from faq_index import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .pipeline import generate

__all__ = ["app", "generate", "main"]
