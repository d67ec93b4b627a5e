"""
Generate sitemap.xml for SEO.
"""

from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import quote
from xml.sax.saxutils import escape
import logging

from ..config import BASE_URL, OUTPUT_DIR, SITEMAP_FILENAME
from ..models import Entry, Post
from ..scanner import published_posts, unique_board_names
from ..utils.date_utils import format_date, utc_now
from .helpers import calculate_changefreq, calculate_priority, join_url

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _url_block(loc: str, lastmod: Optional[str], changefreq: str, priority: str) -> str:
    xml = "  <url>\n"
    xml += f"    <loc>{escape(loc)}</loc>\n"
    if lastmod:
        xml += f"    <lastmod>{lastmod}</lastmod>\n"
    xml += f"    <changefreq>{changefreq}</changefreq>\n"
    xml += f"    <priority>{priority}</priority>\n"
    xml += "  </url>\n"
    return xml


def _comment(text: str) -> str:
    # "--" is not allowed inside XML comments
    while "--" in text:
        text = text.replace("--", "- -")
    return f"  <!-- {text} -->\n"


def _post_block(post: Post, base_url: str, now: datetime) -> str:
    lastmod = format_date(post.meta.updated_at) if post.meta.updated_at else None
    return _url_block(
        join_url(base_url, "boards", quote(post.path, safe="/")),
        lastmod,
        calculate_changefreq(post.meta, now),
        calculate_priority(post.meta, now),
    )


def build_sitemap(
    entries: List[Entry],
    base_url: str = BASE_URL,
    now: Optional[datetime] = None,
) -> str:
    """
    Build sitemap.xml content from scanned entries.

    Order: home page, boards index, one URL per board, featured posts,
    then the remaining published posts. Unpublished posts are left out.

    Args:
        entries: Output of scan_directory()
        base_url: Public URL of the contents site
        now: Reference time for dates and priorities (defaults to now, UTC)

    Returns:
        The complete XML document
    """
    now = now or utc_now()
    today = format_date(now)
    posts = published_posts(entries)

    board_groups: Dict[str, List[Post]] = defaultdict(list)
    for post in posts:
        board_groups[post.board_name].append(post)

    xml = '<?xml version="1.0" encoding="UTF-8"?>\n'
    xml += f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n'

    xml += _comment("Main page")
    xml += _url_block(join_url(base_url), today, "daily", "1.0")

    xml += _comment("Boards")
    xml += _url_block(join_url(base_url, "boards"), today, "weekly", "0.8")

    for board_name in unique_board_names(entries):
        updated = [p.meta.updated_at for p in board_groups.get(board_name, []) if p.meta.updated_at]
        lastmod = format_date(max(updated)) if updated else today
        xml += _url_block(join_url(base_url, "boards", quote(board_name, safe="/")), lastmod, "weekly", "0.8")

    # Featured posts first (higher priority)
    for post in posts:
        if post.meta.featured:
            xml += _comment(f"Featured: {escape(post.meta.title or post.path)}")
            xml += _post_block(post, base_url, now)

    for post in posts:
        if not post.meta.featured:
            xml += _post_block(post, base_url, now)

    xml += "</urlset>\n"
    return xml


def write_sitemap(
    entries: List[Entry],
    output_dir=OUTPUT_DIR,
    base_url: str = BASE_URL,
    now: Optional[datetime] = None,
) -> Path:
    """Write sitemap.xml into output_dir, replacing any previous file."""
    output_path = Path(output_dir) / SITEMAP_FILENAME
    output_path.write_text(build_sitemap(entries, base_url, now), encoding="utf-8")

    logger.info(f"Generated {SITEMAP_FILENAME}: {output_path}")
    return output_path
