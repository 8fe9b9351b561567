"""Common literal values used across list_pages.

These constants keep filenames and context keys centralized so templates,
builders, and tests can import the same values without drifting. Intended for
internal use within the list_pages package.

Examples
--------
>>> from list_pages import _constants
>>> _constants.MANIFEST_FILENAME
'.list-pages-manifest.json'
>>> "skip" in _constants.RESERVED_CONTEXT_KEYS
True
"""

MANIFEST_FILENAME = ".list-pages-manifest.json"
DEFAULT_LIST_TEMPLATE = "collection_list.jinja"
MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})
RESERVED_CONTEXT_KEYS = frozenset(
    {
        "collection",
        "limit",
        "skip",
        "previousPage",
        "nextPage",
        "currentPage",
        "totalPages",
    }
)
