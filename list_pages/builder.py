"""Render registered list pages to static HTML.

:class:`ListPageBuilder` takes the descriptors collected by a
:class:`~list_pages.registry.PageRegistry`, slices each page's window of
items out of the content index, renders the descriptor's template with
Jinja2, and writes ``<output_dir>/<path>/index.html``. A JSON manifest
listing every generated page is written alongside the HTML.

Typical usage mirrors the CLI pipeline:

>>> from pathlib import Path
>>> from list_pages.config import load_site_config
>>> from list_pages.content import count_collections, index_collections
>>> from list_pages.pagination import generate_list_pages
>>> from list_pages.paths import PagePathBuilder
>>> from list_pages.registry import PageRegistry
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> items = index_collections(site)  # doctest: +SKIP
>>> registry = PageRegistry()
>>> generate_list_pages(  # doctest: +SKIP
...     count_collections(items),
...     registry.create_page,
...     resolver=site,
...     page_path=PagePathBuilder(site.base_paths()),
... )
>>> ListPageBuilder(site, items).run(registry)  # doctest: +SKIP
[PosixPath('public/posts/index.html'), ...]

Templates are looked up in the configured ``templates_dir`` first and then
in the packaged ``list_pages/templates`` directory, so sites can override
``collection_list.jinja`` or add their own list templates.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown import markdown

from ._constants import MANIFEST_FILENAME
from .paths import output_path_for

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import CollectionConfig, SiteConfig, SiteMetadata
    from .content import ContentItem
    from .pagination import PageDescriptor

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class ListPageBuilder:
    """Render list page descriptors into themed HTML files on disk."""

    def __init__(
        self,
        site_config: SiteConfig,
        items: cabc.Mapping[str, cabc.Sequence[ContentItem]],
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site_config : SiteConfig
            Loaded site configuration providing metadata and collection
            settings.
        items : Mapping[str, Sequence[ContentItem]]
            Content index produced by
            :func:`list_pages.content.index_collections`.
        templates_dir : Path, optional
            Directory searched for templates before the site's configured
            ``templates_dir`` and the packaged defaults.
        output_dir : Path, optional
            Override for the HTML output directory; defaults to the site
            config's ``output_dir``.
        """
        self.site = site_config
        self.items = items
        self.output_dir = output_dir or site_config.output_dir
        search_path = [
            path
            for path in (templates_dir, site_config.templates_dir)
            if path is not None
        ]
        search_path.append(DEFAULT_TEMPLATES_DIR)
        self.env = Environment(
            loader=FileSystemLoader([str(path) for path in search_path]),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._markdown_extensions = ["sane_lists", "tables", "fenced_code"]

    def run(self, pages: cabc.Iterable[PageDescriptor]) -> list[Path]:
        """Render every page descriptor and write the output manifest.

        Returns
        -------
        list[Path]
            Paths to the generated HTML documents, in descriptor order.

        Raises
        ------
        ConfigurationNotFoundError
            If a descriptor names a collection missing from the site config.
        jinja2.TemplateNotFound
            If a descriptor's template cannot be located.
        """
        generated_at = dt.datetime.now(dt.UTC)
        written: list[Path] = []
        manifest: list[dict[str, str]] = []
        for page in pages:
            output_path = self.render_page(page, generated_at=generated_at)
            written.append(output_path)
            manifest.append(
                {
                    "path": page.path,
                    "collection": page.context.collection,
                    "file": output_path.relative_to(self.output_dir).as_posix(),
                }
            )
        self._write_manifest(manifest, generated_at)
        return written

    def render_page(
        self, page: PageDescriptor, *, generated_at: dt.datetime | None = None
    ) -> Path:
        """Render a single descriptor and return the written file path."""
        config = self.site.get_config(page.context.collection)
        template = self.env.get_template(page.component)
        context = self._build_context(page, config)
        context["generated_at"] = generated_at or dt.datetime.now(dt.UTC)
        html = template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path = output_path_for(page.path, self.output_dir)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.debug("Rendered %s with %s", page.path, page.component)
        return output_path

    def _build_context(
        self, page: PageDescriptor, config: CollectionConfig
    ) -> dict[str, typ.Any]:
        ctx = page.context
        collection_items = self.items.get(ctx.collection, ())
        window = collection_items[ctx.skip : ctx.skip + ctx.limit]
        site = self.site.metadata
        return {
            "site": site,
            "collection": config,
            "page": page,
            "context": ctx.as_dict(),
            "links": {
                "previous": _optional_href(site, ctx.previous_page),
                "next": _optional_href(site, ctx.next_page),
            },
            "items": [
                {
                    "title": item.title,
                    "slug": item.slug,
                    "href": site.href(_item_href(config, item)),
                }
                for item in window
            ],
            "description_html": self._render_description(config.description),
            "html_title": _format_title(config, ctx.current_page, site.title),
        }

    def _render_description(self, text: str) -> str:
        normalized = (text or "").strip()
        if not normalized:
            return ""
        return markdown(
            normalized,
            extensions=self._markdown_extensions,
            output_format="html",
        )

    def _write_manifest(
        self, pages: list[dict[str, str]], generated_at: dt.datetime
    ) -> Path:
        """Persist the JSON manifest recording every generated list page."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / MANIFEST_FILENAME
        payload = {"generated_at": generated_at.isoformat(), "pages": pages}
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return path


def _item_href(config: CollectionConfig, item: ContentItem) -> str:
    return f"{config.base_path}{item.slug}/"


def _optional_href(site: SiteMetadata, path: str | None) -> str | None:
    return site.href(path) if path else None


def _format_title(config: CollectionConfig, page: int, site_title: str) -> str:
    """Return the ``<title>`` text, e.g. ``"Posts (page 2) | My Site"``."""
    label = config.title if page == 1 else f"{config.title} (page {page})"
    if not site_title:
        return label
    return f"{label} | {site_title}"


__all__ = ["DEFAULT_TEMPLATES_DIR", "ListPageBuilder"]
