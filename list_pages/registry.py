"""In-memory page registry used as the paginator's ``create_page`` callback."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .pagination import PageDescriptor


class DuplicatePagePathError(ValueError):
    """Raised when two pages are registered under the same path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"A page is already registered at '{path}'.")
        self.path = path


class PageRegistry:
    """Record page descriptors in registration order."""

    def __init__(self) -> None:
        self._pages: dict[str, PageDescriptor] = {}

    def create_page(self, descriptor: PageDescriptor) -> None:
        """Register ``descriptor``; paths must be unique across the build."""
        if descriptor.path in self._pages:
            raise DuplicatePagePathError(descriptor.path)
        self._pages[descriptor.path] = descriptor

    @property
    def pages(self) -> tuple[PageDescriptor, ...]:
        """Return the registered descriptors in the order they were created."""
        return tuple(self._pages.values())

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> cabc.Iterator[PageDescriptor]:
        return iter(self.pages)


__all__ = ["DuplicatePagePathError", "PageRegistry"]
