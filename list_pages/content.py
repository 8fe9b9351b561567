"""Tally markdown content per collection.

The indexer lists the markdown files directly under each configured
collection directory and returns them as :class:`ContentItem` records. Its
counts feed :func:`list_pages.pagination.generate_list_pages`, and the item
lists let the builder slice out each page's window.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import MARKDOWN_SUFFIXES
from .config.helpers import _title_from_key

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import CollectionConfig, SiteConfig

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class ContentItem:
    """A single markdown source belonging to a collection."""

    collection: str
    slug: str
    title: str
    source_path: Path


def index_collections(
    site_config: SiteConfig, *, only: cabc.Iterable[str] | None = None
) -> dict[str, list[ContentItem]]:
    """Return the markdown items of each configured collection.

    Parameters
    ----------
    site_config : SiteConfig
        Loaded configuration naming each collection's content directory.
    only : Iterable[str], optional
        Restrict indexing to these collection names. Every name must be
        configured.

    Returns
    -------
    dict[str, list[ContentItem]]
        Items per collection ordered by filename (reversed for collections
        that set ``reverse``). Collections whose directory is missing map to
        an empty list.

    Raises
    ------
    ConfigurationNotFoundError
        If ``only`` names a collection that is not configured.
    """
    names = list(only) if only is not None else list(site_config.collections)
    index: dict[str, list[ContentItem]] = {}
    for name in names:
        index[name] = _index_collection(site_config.get_config(name))
    return index


def count_collections(
    index: cabc.Mapping[str, cabc.Sequence[ContentItem]],
) -> dict[str, int]:
    """Return the number of items per collection."""
    return {name: len(items) for name, items in index.items()}


def _index_collection(config: CollectionConfig) -> list[ContentItem]:
    directory = config.content_dir
    if not directory.is_dir():
        logger.info(
            "Collection %r has no content directory at %s", config.key, directory
        )
        return []
    files = sorted(
        (
            path
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES
        ),
        key=lambda path: path.name,
        reverse=config.reverse,
    )
    return [
        ContentItem(
            collection=config.key,
            slug=path.stem,
            title=_title_from_key(path.stem),
            source_path=path,
        )
        for path in files
    ]


__all__ = ["ContentItem", "count_collections", "index_collections"]
