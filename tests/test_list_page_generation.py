"""End-to-end tests for rendering collection list pages.

This module exercises the full pipeline: ``site.yaml`` is loaded, markdown
content is indexed, the paginator registers pages with a
:class:`~list_pages.registry.PageRegistry`, and
:class:`~list_pages.builder.ListPageBuilder` renders them with the packaged
``collection_list.jinja`` template. The CLI commands are called directly so
their printed output can be captured with ``capsys``.

Fixtures
--------
* ``site_root`` writes a config and a small content tree into ``tmp_path``.
* ``site_config`` loads that configuration.

Usage
-----
Run ``pytest tests/test_list_page_generation.py -v``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup
from jinja2 import TemplateNotFound

from list_pages import cli
from list_pages._constants import MANIFEST_FILENAME
from list_pages.builder import ListPageBuilder
from list_pages.config import SiteConfig, load_site_config
from list_pages.content import count_collections, index_collections
from list_pages.pagination import generate_list_pages
from list_pages.paths import PagePathBuilder
from list_pages.registry import PageRegistry


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Write a two-collection site with five posts and one talk."""
    (tmp_path / "site.yaml").write_text(
        dedent(
            """
            site:
              title: Field Notes
              description: Notes from the field
              site_url: https://example.com
              author: Sam
            defaults:
              per_page: 2
            collections:
              posts:
                title: Posts
                description: Everything we *wrote*.
                context:
                  section: blog
              talks:
                path: /speaking
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    posts = tmp_path / "content" / "posts"
    posts.mkdir(parents=True)
    for index in range(1, 6):
        (posts / f"post-{index}.md").write_text(f"# Post {index}\n", encoding="utf-8")
    talks = tmp_path / "content" / "talks"
    talks.mkdir(parents=True)
    (talks / "keynote.md").write_text("# Keynote\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def site_config(site_root: Path) -> SiteConfig:
    return load_site_config(site_root / "site.yaml")


def _build(site_config: SiteConfig) -> list[Path]:
    items = index_collections(site_config)
    registry = PageRegistry()
    generate_list_pages(
        count_collections(items),
        registry.create_page,
        resolver=site_config,
        page_path=PagePathBuilder(site_config.base_paths()),
    )
    return ListPageBuilder(site_config, items).run(registry)


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_builder_writes_one_file_per_page(site_config: SiteConfig) -> None:
    written = _build(site_config)
    public = site_config.output_dir
    assert written == [
        public / "posts" / "index.html",
        public / "posts" / "2" / "index.html",
        public / "posts" / "3" / "index.html",
        public / "speaking" / "index.html",
    ]
    assert all(path.exists() for path in written)


def test_pages_show_their_window_of_items(site_config: SiteConfig) -> None:
    written = _build(site_config)
    titles = [
        [link.get_text(strip=True) for link in _soup(path).select(".collection-item a")]
        for path in written
    ]
    assert titles == [["Post 1", "Post 2"], ["Post 3", "Post 4"], ["Post 5"], ["Keynote"]]

    middle = _soup(written[1])
    assert middle.select_one(".collection-items")["start"] == "3"
    assert middle.select_one(".collection-item a")["href"] == "/posts/post-3/"


def test_pagination_links_and_metadata(site_config: SiteConfig) -> None:
    first, middle, last, talks = (_soup(path) for path in _build(site_config))

    assert first.select_one(".pagination__prev") is None
    assert first.select_one(".pagination__next")["href"] == "/posts/2/"
    assert middle.select_one(".pagination__prev")["href"] == "/posts/"
    assert middle.select_one(".pagination__next")["href"] == "/posts/3/"
    assert last.select_one(".pagination__next") is None
    assert last.select_one(".pagination__status").get_text(strip=True) == "Page 3 of 3"

    assert first.title.get_text() == "Posts | Field Notes"
    assert middle.title.get_text() == "Posts (page 2) | Field Notes"
    assert talks.title.get_text() == "Talks | Field Notes"
    assert first.html["lang"] == "en"
    canonical = middle.select_one("link[rel=canonical]")["href"]
    assert canonical == "https://example.com/posts/2/"
    assert first.select_one(".collection-description em").get_text() == "wrote"
    assert talks.select_one(".collection-description") is None


def test_manifest_records_generated_pages(site_config: SiteConfig) -> None:
    _build(site_config)
    manifest = json.loads(
        (site_config.output_dir / MANIFEST_FILENAME).read_text(encoding="utf-8")
    )
    assert [entry["path"] for entry in manifest["pages"]] == [
        "/posts/",
        "/posts/2/",
        "/posts/3/",
        "/speaking/",
    ]
    assert manifest["pages"][1]["file"] == "posts/2/index.html"
    assert manifest["pages"][3]["collection"] == "talks"


def test_custom_template_directory_takes_precedence(
    site_config: SiteConfig, tmp_path: Path
) -> None:
    theme = tmp_path / "theme"
    theme.mkdir()
    (theme / "collection_list.jinja").write_text(
        "{{ context.collection }}:{{ context.skip }}:{{ context.section }}",
        encoding="utf-8",
    )
    items = index_collections(site_config, only=["posts"])
    registry = PageRegistry()
    generate_list_pages(
        count_collections(items),
        registry.create_page,
        resolver=site_config,
        page_path=PagePathBuilder(site_config.base_paths()),
    )
    written = ListPageBuilder(site_config, items, templates_dir=theme).run(registry)
    assert [path.read_text(encoding="utf-8") for path in written] == [
        "posts:0:blog\n",
        "posts:2:blog\n",
        "posts:4:blog\n",
    ]


def test_missing_template_raises(site_config: SiteConfig) -> None:
    site_config.get_config("posts").list_template = "absent.jinja"
    with pytest.raises(TemplateNotFound):
        _build(site_config)


def test_generate_command_prints_written_paths(
    site_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_dir = site_root / "dist"
    cli.generate(
        config=site_root / "site.yaml", collection=["talks"], output_dir=output_dir
    )
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("wrote ")
    assert lines[0].endswith("speaking/index.html")
    assert (output_dir / "speaking" / "index.html").exists()
    assert not (site_root / "public").exists()


def test_plan_command_prints_descriptors(
    site_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.plan(config=site_root / "site.yaml", collection=["posts"])
    payload = json.loads(capsys.readouterr().out)
    assert [entry["path"] for entry in payload] == ["/posts/", "/posts/2/", "/posts/3/"]
    assert payload[0]["component"] == "collection_list.jinja"
    assert payload[0]["context"] == {
        "section": "blog",
        "collection": "posts",
        "limit": 2,
        "skip": 0,
        "previousPage": None,
        "nextPage": "/posts/2/",
        "currentPage": 1,
        "totalPages": 3,
    }
    assert not (site_root / "public").exists()


def test_path_prefix_applies_to_every_link(tmp_path: Path) -> None:
    (tmp_path / "site.yaml").write_text(
        dedent(
            """
            site:
              site_url: https://example.com
              path_prefix: /docs
            collections:
              posts:
                per_page: 1
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    posts = tmp_path / "content" / "posts"
    posts.mkdir(parents=True)
    for name in ("alpha", "beta"):
        (posts / f"{name}.md").write_text(f"# {name}\n", encoding="utf-8")

    site_config = load_site_config(tmp_path / "site.yaml")
    first, second = (_soup(path) for path in _build(site_config))

    assert first.select_one(".pagination__next")["href"] == "/docs/posts/2/"
    assert first.select_one("link[rel=next]")["href"] == "/docs/posts/2/"
    assert first.select_one(".collection-item a")["href"] == "/docs/posts/alpha/"
    assert second.select_one(".pagination__prev")["href"] == "/docs/posts/"
    assert second.select_one(".collection-item a")["href"] == "/docs/posts/beta/"
    canonical = first.select_one("link[rel=canonical]")["href"]
    assert canonical == "https://example.com/docs/posts/"


def test_verbose_generate_logs_pagination_summary(
    site_root: Path,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    caplog.set_level(logging.DEBUG, logger="list_pages.pagination")

    cli.generate(
        config=site_root / "site.yaml",
        collection=["posts"],
        output_dir=site_root / "dist",
        verbose=True,
    )

    assert [call["level"] for call in calls] == [logging.DEBUG]
    messages = [
        record.getMessage()
        for record in caplog.records
        if record.name == "list_pages.pagination"
    ]
    assert messages == ["Collection 'posts': 5 items, 2 per page, 3 list pages"]


def test_generate_without_verbose_leaves_logging_alone(
    site_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    cli.generate(config=site_root / "site.yaml", output_dir=site_root / "dist")
    assert calls == []
