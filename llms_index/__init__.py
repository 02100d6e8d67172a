"""Generate ``llms.txt`` indexes from a site generator's route catalogue.

The package classifies routes, resolves layered configuration, arranges the
surviving documents into a section tree, and renders ``llms.txt`` and
``llms-full.txt``.

Exports
-------
- ``app``: Cyclopts application behind the ``llms-index`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from llms_index import main
>>> main()  # doctest: +SKIP
>>> from llms_index import app
>>> app(["--help"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
