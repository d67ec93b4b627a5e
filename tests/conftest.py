import json
from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def days_ago(days):
    return (NOW - timedelta(days=days)).isoformat()


def make_post(root, rel, meta=None, body=True, raw_meta=None):
    """Create a post directory under root; returns its path."""
    post_dir = root.joinpath(*rel.split("/"))
    post_dir.mkdir(parents=True, exist_ok=True)
    if raw_meta is not None:
        (post_dir / "meta.json").write_text(raw_meta, encoding="utf-8")
    elif meta is not None:
        (post_dir / "meta.json").write_text(json.dumps(meta), encoding="utf-8")
    if body:
        (post_dir / "index.html").write_text("<html></html>", encoding="utf-8")
    return post_dir


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def content_tree(tmp_path):
    """
    boards/
      backend/
        api-design/        published, old, Intermediate
      frontend/
        react/
          hooks-guide/     published, featured, 10 days old, Advanced
        css-draft/         unpublished
      general/             empty board
    """
    root = tmp_path / "boards"
    make_post(root, "backend/api-design", {
        "title": "API Design",
        "published": True,
        "featured": False,
        "createdAt": days_ago(200),
        "updatedAt": "2026-05-01T09:00:00Z",
        "difficulty": "Intermediate",
    })
    make_post(root, "frontend/react/hooks-guide", {
        "title": "React Hooks Guide",
        "published": True,
        "featured": True,
        "createdAt": days_ago(10),
        "updatedAt": "2026-10-12T08:30:00Z",
        "difficulty": "Advanced",
    })
    make_post(root, "frontend/css-draft", {
        "title": "CSS Draft",
        "published": False,
        "createdAt": days_ago(1),
        "updatedAt": days_ago(1),
    })
    (root / "general").mkdir(parents=True)
    return root
