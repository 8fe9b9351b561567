"""Utility helpers shared by the list_pages configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from .._constants import RESERVED_CONTEXT_KEYS
from .models import SiteConfigError, SiteMetadata

DEFAULT_PER_PAGE = 10


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _positive_int(value: object, *, field: str) -> int:
    """Coerce ``value`` into a positive integer or raise SiteConfigError."""
    match value:
        case bool():
            parsed = None
        case int():
            parsed = value
        case str() as text if text.strip().isdecimal():
            parsed = int(text.strip())
        case _:
            parsed = None
    if parsed is None or parsed < 1:
        msg = f"'{field}' must be a positive integer, got {value!r}."
        raise SiteConfigError(msg)
    return parsed


def _normalize_base_path(value: str | None, *, fallback: str) -> str:
    """Return ``value`` as a URL prefix that starts and ends with ``/``."""
    text = (value or "").strip() or fallback
    segments = [segment for segment in text.split("/") if segment]
    if not segments:
        return "/"
    return "/" + "/".join(segments) + "/"


def _resolve_path(value: object | None, *, base: Path, fallback: Path) -> Path:
    """Resolve a configured path relative to the config file's directory."""
    text = _optional_str(value)
    path = Path(text) if text else fallback
    if path.is_absolute():
        return path
    return base / path


def _title_from_key(key: str) -> str:
    """Derive a display title from a collection or file key."""
    return key.replace("-", " ").replace("_", " ").title()


def _validate_extra_context(
    key: str, payload: typ.Mapping[str, typ.Any] | None
) -> dict[str, typ.Any]:
    """Return the extra context mapping after rejecting reserved keys."""
    if not payload:
        return {}
    if not isinstance(payload, cabc.Mapping):
        msg = f"Collection '{key}' has a non-mapping 'context'."
        raise SiteConfigError(msg)
    clashes = sorted(RESERVED_CONTEXT_KEYS.intersection(payload))
    if clashes:
        msg = (
            f"Collection '{key}' context uses reserved keys: {', '.join(clashes)}."
        )
        raise SiteConfigError(msg)
    return {str(name): value for name, value in payload.items()}


def _build_site_metadata(payload: typ.Mapping[str, typ.Any]) -> SiteMetadata:
    """Build a SiteMetadata instance from the provided mapping payload."""
    base = SiteMetadata()
    return SiteMetadata(
        title=payload.get("title", base.title),
        description=payload.get("description", base.description),
        site_url=payload.get("site_url", base.site_url),
        path_prefix=payload.get("path_prefix", base.path_prefix) or "",
        lang=payload.get("lang", base.lang),
        author=_optional_str(payload.get("author")),
    )


__all__ = [
    "DEFAULT_PER_PAGE",
    "_build_site_metadata",
    "_normalize_base_path",
    "_optional_str",
    "_positive_int",
    "_resolve_path",
    "_title_from_key",
    "_validate_extra_context",
]
