"""Cyclopts CLI entrypoint for generating collection list pages.

The ``list-pages`` console script defined here indexes the markdown content
of every configured collection, paginates it, and renders one HTML list page
per window of items. ``list-pages plan`` runs the same pagination without
rendering and prints the resulting page descriptors as JSON, which is handy
when checking a new ``per_page`` or path setting.

Examples
--------
Generate every list page for the default configuration:

>>> from list_pages.cli import main
>>> main()  # doctest: +SKIP

Preview the pages of a single collection:

>>> from list_pages.cli import app
>>> app(["plan", "--collection", "posts"])  # doctest: +SKIP
"""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import ListPageBuilder
from .config import SiteConfig, load_site_config
from .content import ContentItem, count_collections, index_collections
from .pagination import generate_list_pages
from .paths import PagePathBuilder
from .registry import PageRegistry

DEFAULT_CONFIG = Path("site.yaml")

app = App(
    name="list-pages",
    config=cyclopts.config.Env("LIST_PAGES_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


def _paginate(
    site_config: SiteConfig, collections: list[str] | None
) -> tuple[dict[str, list[ContentItem]], PageRegistry]:
    """Index content and register every list page for the selected collections."""
    items = index_collections(site_config, only=collections)
    registry = PageRegistry()
    generate_list_pages(
        count_collections(items),
        registry.create_page,
        resolver=site_config,
        page_path=PagePathBuilder(
            site_config.base_paths(), first_page_index=site_config.first_page_index
        ),
    )
    return items, registry


@app.command(help="Render HTML list pages for every configured collection.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="LIST_PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    collection: typ.Annotated[
        list[str] | None, Parameter(help="Only paginate these collections"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="LIST_PAGES_OUTPUT_DIR"),
    ] = None,
    templates_dir: typ.Annotated[
        Path | None, Parameter(help="Extra directory searched for templates")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Generate list pages for the requested site configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``LIST_PAGES_CONFIG``).
    collection : list[str] or None, optional
        Collection names to paginate; when ``None`` (default) every
        configured collection is processed.
    output_dir : Path or None, optional
        Override the output directory from the configuration.
    templates_dir : Path or None, optional
        Directory searched for templates before the configured ones.
    verbose : bool, optional
        Emit debug logging to stderr.

    Returns
    -------
    None
        Writes rendered list pages and prints the generated paths.

    Raises
    ------
    ConfigurationNotFoundError
        If ``collection`` names a collection that is not configured.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    items, registry = _paginate(site_config, collection)
    builder = ListPageBuilder(
        site_config, items, templates_dir=templates_dir, output_dir=output_dir
    )
    written = builder.run(registry)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the list pages that would be generated, as JSON.")
def plan(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="LIST_PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    collection: typ.Annotated[
        list[str] | None, Parameter(help="Only paginate these collections"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Paginate without rendering and print the page descriptors.

    The output is a JSON array of ``{"path", "component", "context"}``
    objects in creation order.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    _, registry = _paginate(site_config, collection)
    payload = [page.as_dict() for page in registry]
    print(json.dumps(payload, indent=2))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``list-pages`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
