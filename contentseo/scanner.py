"""
Content tree scanner.

Walks the boards directory depth-first and classifies every directory as a
board (category) or a post (has meta.json and index.html).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union
import json
import logging

from .config import BODY_FILENAME, META_FILENAME
from .models import Board, Entry, Post, PostMeta

logger = logging.getLogger(__name__)


@dataclass
class ScanSummary:
    """Counts reported after a scan."""

    boards: List[str] = field(default_factory=list)
    published_posts: List[Post] = field(default_factory=list)
    featured_posts: List[Post] = field(default_factory=list)


def scan_directory(root: Union[str, Path], relative_path: str = "") -> List[Entry]:
    """
    Recursively scan a content directory.

    Args:
        root: Directory to scan
        relative_path: POSIX path of `root` relative to the content root

    Returns:
        Boards and posts in depth-first order. A board is followed by
        everything found beneath it.
    """
    root = Path(root)
    items: List[Entry] = []

    if not root.exists():
        return items

    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"Failed to scan directory {root}: {e}")
        return items

    for child in children:
        name = child.name
        if name.startswith("_") or name.startswith("."):
            continue

        try:
            if not child.is_dir():
                continue
            meta_path = child / META_FILENAME
            is_post = meta_path.exists() and (child / BODY_FILENAME).exists()
        except OSError as e:
            logger.warning(f"Failed to stat {child}: {e}")
            continue

        current_path = f"{relative_path}/{name}" if relative_path else name

        if is_post:
            meta = _load_meta(meta_path)
            if meta is not None:
                items.append(Post(path=current_path, meta=meta, full_path=child))
            continue

        items.append(Board(name=name, path=current_path, full_path=child))
        items.extend(scan_directory(child, current_path))

    return items


def _load_meta(meta_path: Path) -> Optional[PostMeta]:
    """Parse meta.json, logging and returning None when it is unusable."""
    try:
        data = json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to parse {META_FILENAME} in {meta_path.parent}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Failed to parse {META_FILENAME} in {meta_path.parent}: expected a JSON object")
        return None

    return PostMeta.from_dict(data)


def unique_board_names(entries: List[Entry]) -> List[str]:
    """Distinct board names in first-seen order."""
    names: List[str] = []
    for entry in entries:
        if isinstance(entry, Board) and entry.name not in names:
            names.append(entry.name)
    return names


def published_posts(entries: List[Entry]) -> List[Post]:
    return [e for e in entries if isinstance(e, Post) and e.meta.published]


def summarize(entries: List[Entry]) -> ScanSummary:
    """Collect the board/post counts shown after each scan."""
    published = published_posts(entries)
    return ScanSummary(
        boards=unique_board_names(entries),
        published_posts=published,
        featured_posts=[p for p in published if p.meta.featured],
    )
