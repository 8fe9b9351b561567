"""Paginated list pages for markdown collections.

This package turns per-collection item counts into list page descriptors and
renders them to static HTML. It exposes the CLI entry points used by the
``list-pages`` console script together with the paginator itself.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``generate_list_pages``: The list page paginator.
- ``PageDescriptor``/``ListPageContext``: Descriptors handed to ``create_page``.

Examples
--------
>>> from list_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

import logging

from .cli import app, main
from .pagination import ListPageContext, PageDescriptor, generate_list_pages

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ListPageContext",
    "PageDescriptor",
    "app",
    "generate_list_pages",
    "main",
]
