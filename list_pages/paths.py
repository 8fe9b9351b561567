"""URL path policy for collection list pages.

:class:`PagePathBuilder` is the path generator handed to the paginator. It is
deterministic and yields a distinct path for every page index of a
collection. Whether the first page carries its index (``/posts/1/``) or
collapses onto the collection root (``/posts/``) is controlled by
``first_page_index``.

Examples
--------
>>> build = PagePathBuilder({"posts": "/blog/"})
>>> build("posts", 1)
'/blog/'
>>> build("posts", 3)
'/blog/3/'
>>> PagePathBuilder({}, first_page_index=True)("notes", 1)
'/notes/1/'
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .config.helpers import _normalize_base_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class PagePathBuilder:
    """Compute list page paths from per-collection base paths."""

    def __init__(
        self,
        base_paths: cabc.Mapping[str, str],
        *,
        first_page_index: bool = False,
    ) -> None:
        self.base_paths = {
            key: _normalize_base_path(value, fallback="/")
            for key, value in base_paths.items()
        }
        self.first_page_index = first_page_index

    def __call__(self, collection: str, page: int) -> str:
        """Return the path of list page ``page`` (1-based) for ``collection``."""
        if page < 1:
            msg = f"Page numbers start at 1, got {page}."
            raise ValueError(msg)
        base = self.base_paths.get(collection) or _normalize_base_path(
            collection, fallback="/"
        )
        if page == 1 and not self.first_page_index:
            return base
        return f"{base}{page}/"


def output_path_for(path: str, output_dir: Path) -> Path:
    """Map a site-relative URL path onto an ``index.html`` under ``output_dir``."""
    segments = [segment for segment in path.split("/") if segment]
    if any(segment in (".", "..") for segment in segments):
        msg = f"Refusing to write outside the output directory: {path!r}"
        raise ValueError(msg)
    return output_dir.joinpath(*segments, "index.html")


__all__ = ["PagePathBuilder", "output_path_for"]
