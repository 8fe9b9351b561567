"""Create paginated list pages for markdown collections.

The paginator walks a mapping of collection names to item counts, works out
how many list pages each collection needs, and hands one
:class:`PageDescriptor` per page to a ``create_page`` callback. Each
descriptor carries the slice parameters (``limit``/``skip``) the template
uses to select its window of items together with links to the neighbouring
pages.

Configuration lookup and URL policy are collaborators passed in by the
caller: ``resolver`` exposes ``get_config``/``map_config_for_context`` (a
:class:`~list_pages.config.SiteConfig` satisfies it) and ``page_path`` maps a
collection and 1-based page number to a path (see
:class:`~list_pages.paths.PagePathBuilder`).

Examples
--------
>>> from list_pages.config import CollectionConfig, SiteConfig
>>> from list_pages.paths import PagePathBuilder
>>> from pathlib import Path
>>> posts = CollectionConfig(
...     key="posts", title="Posts", per_page=10, list_template="list.jinja",
...     base_path="/posts/", content_dir=Path("content/posts"),
... )
>>> site = SiteConfig(collections={"posts": posts})
>>> created = []
>>> generate_list_pages(
...     {"posts": 25}, created.append,
...     resolver=site, page_path=PagePathBuilder(site.base_paths()),
... )
>>> [(page.path, page.context.skip) for page in created]
[('/posts/', 0), ('/posts/2/', 10), ('/posts/3/', 20)]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import CollectionConfig

logger = logging.getLogger(__name__)


class ConfigResolver(typ.Protocol):
    """Look up per-collection settings by name."""

    def get_config(self, collection: str) -> CollectionConfig: ...

    def map_config_for_context(self, collection: str) -> dict[str, typ.Any]: ...


PagePath = typ.Callable[[str, int], str]
CreatePage = typ.Callable[["PageDescriptor"], object]


@dc.dataclass(frozen=True, slots=True)
class ListPageContext:
    """Data attached to a generated list page for its template.

    Attributes
    ----------
    collection : str
        Name of the collection the page lists.
    limit : int
        Maximum number of items shown on the page.
    skip : int
        Number of collection items preceding this page's window.
    previous_page : str | None
        Path of the preceding list page, ``None`` on the first page.
    next_page : str | None
        Path of the following list page, ``None`` on the last page.
    current_page : int
        1-based index of this page.
    total_pages : int
        Number of list pages generated for the collection.
    extra : Mapping[str, Any]
        Collection-specific fields from the site configuration.
    """

    collection: str
    limit: int
    skip: int
    previous_page: str | None
    next_page: str | None
    current_page: int
    total_pages: int
    extra: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    def as_dict(self) -> dict[str, typ.Any]:
        """Flatten the context into the key-value mapping templates consume."""
        payload = dict(self.extra)
        payload.update(
            {
                "collection": self.collection,
                "limit": self.limit,
                "skip": self.skip,
                "previousPage": self.previous_page,
                "nextPage": self.next_page,
                "currentPage": self.current_page,
                "totalPages": self.total_pages,
            }
        )
        return payload


@dc.dataclass(frozen=True, slots=True)
class PageDescriptor:
    """A list page to register: where it lives, how it renders, what it shows."""

    path: str
    component: str
    context: ListPageContext

    def as_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-friendly representation of the descriptor."""
        return {
            "path": self.path,
            "component": self.component,
            "context": self.context.as_dict(),
        }


def count_pages(total: int, per_page: int) -> int:
    """Return how many list pages ``total`` items need at ``per_page`` per page.

    Raises
    ------
    ValueError
        If ``total`` is negative or ``per_page`` is not positive.
    """
    if total < 0:
        msg = f"Item count must not be negative, got {total}."
        raise ValueError(msg)
    if per_page < 1:
        msg = f"Items per page must be positive, got {per_page}."
        raise ValueError(msg)
    return -(-total // per_page)


def generate_list_pages(
    collection_count: cabc.Mapping[str, int],
    create_page: CreatePage,
    *,
    resolver: ConfigResolver,
    page_path: PagePath,
) -> None:
    """Invoke ``create_page`` once for every list page of every collection.

    Parameters
    ----------
    collection_count : Mapping[str, int]
        Total number of items per collection name.
    create_page : Callable[[PageDescriptor], object]
        Registers a page with the build. Its return value is ignored and any
        exception it raises propagates; pages created before the failure
        stay registered.
    resolver : ConfigResolver
        Source of ``per_page``/``list_template`` and the extra context.
    page_path : Callable[[str, int], str]
        Deterministic path policy for ``(collection, page)``.

    Raises
    ------
    ConfigurationNotFoundError
        If a counted collection has no configuration.
    ValueError
        If a count is negative or a collection's ``per_page`` is not positive.
    """
    for collection, total in collection_count.items():
        config = resolver.get_config(collection)
        extra = resolver.map_config_for_context(collection)
        per_page = config.per_page
        total_pages = count_pages(total, per_page)
        logger.debug(
            "Collection %r: %d items, %d per page, %d list pages",
            collection,
            total,
            per_page,
            total_pages,
        )

        for page in range(1, total_pages + 1):
            path = page_path(collection, page)
            context = ListPageContext(
                collection=collection,
                limit=per_page,
                skip=(page - 1) * per_page,
                previous_page=None if page == 1 else page_path(collection, page - 1),
                next_page=None
                if page == total_pages
                else page_path(collection, page + 1),
                current_page=page,
                total_pages=total_pages,
                extra=dict(extra),
            )
            create_page(
                PageDescriptor(
                    path=path,
                    component=config.list_template,
                    context=context,
                )
            )


__all__ = [
    "ConfigResolver",
    "CreatePage",
    "ListPageContext",
    "PageDescriptor",
    "PagePath",
    "count_pages",
    "generate_list_pages",
]
