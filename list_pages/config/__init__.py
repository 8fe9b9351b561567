"""Load and validate site configuration YAML for list page builds.

This subpackage parses the project's ``site.yaml`` file, merges collection
defaults with per-collection overrides, resolves content and output paths,
and produces typed dataclasses (:class:`SiteConfig`, :class:`CollectionConfig`,
:class:`SiteMetadata`) that the paginator and builder consume. The
:class:`SiteConfig` doubles as the configuration resolver handed to
:func:`list_pages.pagination.generate_list_pages`.

Examples
--------
>>> from pathlib import Path
>>> from list_pages.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> site.get_config("posts").base_path  # doctest: +SKIP
'/posts/'
"""

from .loader import load_site_config
from .models import (
    CollectionConfig,
    ConfigurationNotFoundError,
    SiteConfig,
    SiteConfigError,
    SiteMetadata,
)

__all__ = [
    "CollectionConfig",
    "ConfigurationNotFoundError",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "load_site_config",
]
