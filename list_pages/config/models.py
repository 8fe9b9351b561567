"""Typed dataclasses describing list_pages site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class ConfigurationNotFoundError(SiteConfigError):
    """Raised when a collection has no registered configuration."""

    def __init__(self, collection: str, known: typ.Iterable[str] = ()) -> None:
        available = ", ".join(sorted(known)) or "none"
        super().__init__(
            f"No configuration for collection '{collection}'. "
            f"Known collections: {available}"
        )
        self.collection = collection


@dc.dataclass(slots=True)
class SiteMetadata:
    """Site-wide metadata handed to list page templates."""

    title: str = "Untitled site"
    description: str = ""
    site_url: str = ""
    path_prefix: str = ""
    lang: str = "en"
    author: str | None = None

    @property
    def base_url(self) -> str:
        """Return ``site_url`` joined with ``path_prefix`` without a trailing slash."""
        prefix = "" if self.path_prefix in ("", "/") else self.path_prefix
        return self.site_url.rstrip("/") + prefix

    def absolute_url(self, path: str) -> str:
        """Return the absolute URL for a site-relative ``path``."""
        if path == "/":
            return self.base_url or "/"
        return f"{self.base_url}/{path.lstrip('/')}"

    def href(self, path: str) -> str:
        """Return ``path`` as a root-relative link that includes ``path_prefix``."""
        prefix = self.path_prefix.strip("/")
        if not prefix:
            return path
        return f"/{prefix}/{path.lstrip('/')}"


@dc.dataclass(slots=True)
class CollectionConfig:
    """A fully resolved collection definition sourced from YAML config.

    Attributes
    ----------
    key : str
        Collection name as it appears in the content index.
    title : str
        Human-friendly label used in list page headings.
    per_page : int
        Maximum number of items on a single list page.
    list_template : str
        Template identifier passed through to every page descriptor.
    base_path : str
        URL prefix under which the collection's list pages live.
    content_dir : Path
        Directory holding the collection's markdown files.
    extra_context : dict[str, typing.Any]
        Additional fields merged into each generated page's context.
    reverse : bool
        List items in reverse filename order when ``True``.
    description : str
        Optional markdown blurb rendered above the item list.
    """

    key: str
    title: str
    per_page: int
    list_template: str
    base_path: str
    content_dir: Path
    extra_context: dict[str, typ.Any] = dc.field(default_factory=dict)
    reverse: bool = False
    description: str = ""


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection configs alongside shared site settings."""

    collections: dict[str, CollectionConfig]
    metadata: SiteMetadata = dc.field(default_factory=SiteMetadata)
    content_dir: Path = Path("content")
    output_dir: Path = Path("public")
    templates_dir: Path | None = None
    first_page_index: bool = False

    def get_config(self, collection: str) -> CollectionConfig:
        """Return the configuration registered for ``collection``.

        Raises
        ------
        ConfigurationNotFoundError
            If the collection is not defined in the site configuration.
        """
        try:
            return self.collections[collection]
        except KeyError:
            raise ConfigurationNotFoundError(collection, self.collections) from None

    def map_config_for_context(self, collection: str) -> dict[str, typ.Any]:
        """Return a fresh copy of the extra context for ``collection``."""
        return dict(self.get_config(collection).extra_context)

    def base_paths(self) -> dict[str, str]:
        """Return a mapping of collection names to their URL prefixes."""
        return {key: config.base_path for key, config in self.collections.items()}


__all__ = [
    "CollectionConfig",
    "ConfigurationNotFoundError",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
]
