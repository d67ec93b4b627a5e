import re
from datetime import datetime, timedelta
from xml.etree import ElementTree as ET

from contentseo.generators.helpers import calculate_changefreq, calculate_priority, join_url
from contentseo.generators.sitemap_generator import SITEMAP_NAMESPACE, build_sitemap
from contentseo.models import Difficulty, PostMeta
from contentseo.scanner import scan_directory

from conftest import make_post

BASE = "https://example.com/contents"
NS = {"sm": SITEMAP_NAMESPACE}


def _locs(xml):
    root = ET.fromstring(xml.encode("utf-8"))
    return [el.text for el in root.findall("sm:url/sm:loc", NS)]


def _url(xml, loc):
    root = ET.fromstring(xml.encode("utf-8"))
    for url in root.findall("sm:url", NS):
        if url.find("sm:loc", NS).text == loc:
            return {child.tag.split("}")[1]: child.text for child in url}
    raise AssertionError(f"{loc} not in sitemap")


def test_featured_recent_advanced_post_is_capped_at_one(now):
    meta = PostMeta(
        published=True,
        featured=True,
        created_at=now - timedelta(days=10),
        difficulty=Difficulty.ADVANCED,
    )
    assert calculate_priority(meta, now) == "1.0"
    assert calculate_changefreq(meta, now) == "weekly"


def test_priority_bonuses(now):
    old = now - timedelta(days=200)
    recent = now - timedelta(days=40)

    assert calculate_priority(PostMeta(created_at=old), now) == "0.6"
    assert calculate_priority(PostMeta(created_at=recent), now) == "0.7"
    assert calculate_priority(PostMeta(created_at=old, featured=True), now) == "0.8"
    assert calculate_priority(PostMeta(created_at=old, difficulty=Difficulty.ADVANCED), now) == "0.7"
    assert calculate_priority(PostMeta(created_at=old, difficulty=Difficulty.INTERMEDIATE), now) == "0.6"
    assert calculate_priority(PostMeta(), now) == "0.6"


def test_priority_never_decreases_when_featured(now):
    for days in (1, 40, 200):
        for difficulty in (None, Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED):
            meta = PostMeta(created_at=now - timedelta(days=days), difficulty=difficulty)
            featured = PostMeta(created_at=meta.created_at, difficulty=difficulty, featured=True)
            plain_value = calculate_priority(meta, now)
            featured_value = calculate_priority(featured, now)
            assert float(featured_value) >= float(plain_value)
            assert float(featured_value) <= 1.0
            assert re.fullmatch(r"\d\.\d", featured_value)


def test_changefreq_follows_creation_age(now):
    assert calculate_changefreq(PostMeta(created_at=now - timedelta(days=3)), now) == "daily"
    assert calculate_changefreq(PostMeta(created_at=now - timedelta(days=10)), now) == "weekly"
    assert calculate_changefreq(PostMeta(created_at=now - timedelta(days=30)), now) == "monthly"
    assert calculate_changefreq(PostMeta(), now) == "monthly"


def test_join_url():
    assert join_url(BASE) == f"{BASE}/"
    assert join_url(BASE + "/", "boards") == f"{BASE}/boards/"
    assert join_url(BASE, "boards", "frontend/react/post") == f"{BASE}/boards/frontend/react/post/"


def test_sitemap_order_and_contents(content_tree, now):
    xml = build_sitemap(scan_directory(content_tree), BASE, now)

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    assert _locs(xml) == [
        f"{BASE}/",
        f"{BASE}/boards/",
        f"{BASE}/boards/backend/",
        f"{BASE}/boards/frontend/",
        f"{BASE}/boards/react/",
        f"{BASE}/boards/general/",
        f"{BASE}/boards/frontend/react/hooks-guide/",
        f"{BASE}/boards/backend/api-design/",
    ]


def test_unpublished_posts_are_excluded(content_tree, now):
    xml = build_sitemap(scan_directory(content_tree), BASE, now)
    assert "css-draft" not in xml


def test_fixed_pages(content_tree, now):
    xml = build_sitemap(scan_directory(content_tree), BASE, now)

    assert _url(xml, f"{BASE}/") == {
        "loc": f"{BASE}/",
        "lastmod": "2026-10-17",
        "changefreq": "daily",
        "priority": "1.0",
    }
    assert _url(xml, f"{BASE}/boards/")["priority"] == "0.8"
    assert _url(xml, f"{BASE}/boards/")["changefreq"] == "weekly"


def test_board_lastmod_is_latest_post_update(content_tree, now):
    xml = build_sitemap(scan_directory(content_tree), BASE, now)

    assert _url(xml, f"{BASE}/boards/backend/")["lastmod"] == "2026-05-01"
    assert _url(xml, f"{BASE}/boards/frontend/")["lastmod"] == "2026-10-12"
    # no published posts of its own
    assert _url(xml, f"{BASE}/boards/general/")["lastmod"] == "2026-10-17"


def test_post_entries(content_tree, now):
    xml = build_sitemap(scan_directory(content_tree), BASE, now)

    assert _url(xml, f"{BASE}/boards/frontend/react/hooks-guide/") == {
        "loc": f"{BASE}/boards/frontend/react/hooks-guide/",
        "lastmod": "2026-10-12",
        "changefreq": "weekly",
        "priority": "1.0",
    }
    assert _url(xml, f"{BASE}/boards/backend/api-design/") == {
        "loc": f"{BASE}/boards/backend/api-design/",
        "lastmod": "2026-05-01",
        "changefreq": "monthly",
        "priority": "0.6",
    }
    assert "<!-- Featured: React Hooks Guide -->" in xml


def test_post_without_updated_at_has_no_lastmod(tmp_path, now):
    make_post(tmp_path, "board/undated", {"title": "Undated", "published": True})
    xml = build_sitemap(scan_directory(tmp_path), BASE, now)

    assert "lastmod" not in _url(xml, f"{BASE}/boards/board/undated/")


def test_titles_are_escaped(tmp_path, now):
    make_post(tmp_path, "board/amp", {"title": "Tips & Tricks -- <b>", "published": True, "featured": True})
    xml = build_sitemap(scan_directory(tmp_path), BASE, now)

    ET.fromstring(xml.encode("utf-8"))
    assert "Tips &amp; Tricks" in xml


def test_build_is_deterministic(content_tree, now):
    entries = scan_directory(content_tree)
    assert build_sitemap(entries, BASE, now) == build_sitemap(scan_directory(content_tree), BASE, now)


def test_naive_created_at_is_treated_as_utc(now):
    recent = PostMeta(created_at=datetime(2026, 10, 1))
    old = PostMeta(created_at=datetime(2026, 1, 1))

    assert calculate_priority(recent, now) == "0.7"
    assert calculate_priority(old, now) == "0.6"


def test_non_ascii_paths_are_percent_encoded(tmp_path, now):
    make_post(tmp_path, "개발/첫 글", {"title": "First", "published": True})
    xml = build_sitemap(scan_directory(tmp_path), BASE, now)

    assert _locs(xml)[2:] == [
        f"{BASE}/boards/%EA%B0%9C%EB%B0%9C/",
        f"{BASE}/boards/%EA%B0%9C%EB%B0%9C/%EC%B2%AB%20%EA%B8%80/",
    ]
