"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import DEFAULT_LIST_TEMPLATE
from .helpers import (
    DEFAULT_PER_PAGE,
    _build_site_metadata,
    _normalize_base_path,
    _optional_str,
    _positive_int,
    _resolve_path,
    _title_from_key,
    _validate_extra_context,
)
from .models import CollectionConfig, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing site metadata and collections.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``site.yaml``). Relative paths inside the file are resolved against
        the file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed site configuration, including collection definitions, site
        metadata, and the content/output directories.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required sections or fields are missing or invalid in the
        configuration (for example, no collections are defined).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from list_pages.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> config.get_config("posts").per_page  # doctest: +SKIP
    10
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    root = path.parent
    defaults = raw.get("defaults", {}) or {}

    metadata = _build_site_metadata(raw.get("site", {}) or {})
    content_dir = _resolve_path(
        raw.get("content_dir"), base=root, fallback=Path("content")
    )
    output_dir = _resolve_path(raw.get("output_dir"), base=root, fallback=Path("public"))
    templates_raw = _optional_str(raw.get("templates_dir"))
    templates_dir = (
        _resolve_path(templates_raw, base=root, fallback=Path("templates"))
        if templates_raw
        else None
    )

    collections_raw = raw.get("collections") or {}
    if not collections_raw:
        msg = "No collections defined in site configuration."
        raise SiteConfigError(msg)
    if not isinstance(collections_raw, dict):
        msg = f"'collections' must be a mapping, got {collections_raw!r}."
        raise SiteConfigError(msg)

    collection_defaults = _CollectionDefaults(
        per_page=_positive_int(
            defaults.get("per_page", DEFAULT_PER_PAGE), field="defaults.per_page"
        ),
        list_template=defaults.get("list_template", DEFAULT_LIST_TEMPLATE),
        content_dir=content_dir,
        context=defaults.get("context") or {},
        reverse=bool(defaults.get("reverse", False)),
    )

    collections: dict[str, CollectionConfig] = {}
    for key, payload in collections_raw.items():
        match payload:
            case dict():
                collections[str(key)] = _build_collection_config(
                    key=str(key),
                    payload=payload,
                    defaults=collection_defaults,
                    root=root,
                )
            case None:
                collections[str(key)] = _build_collection_config(
                    key=str(key),
                    payload={},
                    defaults=collection_defaults,
                    root=root,
                )
            case _:
                msg = f"Collection '{key}' must be a mapping, got {payload!r}."
                raise SiteConfigError(msg)

    return SiteConfig(
        collections=collections,
        metadata=metadata,
        content_dir=content_dir,
        output_dir=output_dir,
        templates_dir=templates_dir,
        first_page_index=bool(raw.get("first_page_index", False)),
    )


@dc.dataclass(slots=True)
class _CollectionDefaults:
    """Internal container for collection default configuration values."""

    per_page: int
    list_template: str
    content_dir: Path
    context: typ.Mapping[str, typ.Any]
    reverse: bool


def _build_collection_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _CollectionDefaults,
    root: Path,
) -> CollectionConfig:
    """Build a CollectionConfig for a single entry using defaults and overrides."""
    per_page = _positive_int(
        payload.get("per_page", defaults.per_page), field=f"{key}.per_page"
    )
    list_template = _optional_str(payload.get("list_template")) or defaults.list_template
    base_path = _normalize_base_path(
        _optional_str(payload.get("path")), fallback=f"/{key}/"
    )
    content_dir = _resolve_path(
        payload.get("content_dir"), base=root, fallback=defaults.content_dir / key
    )
    extra_context = _validate_extra_context(key, defaults.context)
    extra_context.update(_validate_extra_context(key, payload.get("context")))

    return CollectionConfig(
        key=key,
        title=_optional_str(payload.get("title")) or _title_from_key(key),
        per_page=per_page,
        list_template=list_template,
        base_path=base_path,
        content_dir=content_dir,
        extra_context=extra_context,
        reverse=bool(payload.get("reverse", defaults.reverse)),
        description=_optional_str(payload.get("description")) or "",
    )


__all__ = ["load_site_config"]
