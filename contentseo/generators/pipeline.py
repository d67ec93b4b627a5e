"""
SEO file generation orchestrator: scan, build, write.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import logging

from ..config import BASE_URL, CONTENT_DIR, OUTPUT_DIR
from ..scanner import scan_directory, summarize
from .robots_generator import write_robots
from .sitemap_generator import write_sitemap

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """What a generation run found and wrote."""

    boards: List[str]
    published_posts: int
    featured_posts: int
    sitemap_path: Path
    robots_path: Path


def generate_seo_files(
    content_dir=CONTENT_DIR,
    output_dir=OUTPUT_DIR,
    base_url: str = BASE_URL,
    now: Optional[datetime] = None,
) -> GenerationReport:
    """
    Scan the content tree and rewrite sitemap.xml and robots.txt.

    Args:
        content_dir: Root of the boards tree
        output_dir: Directory receiving both documents
        base_url: Public URL of the contents site
        now: Reference time for sitemap dates and priorities

    Returns:
        GenerationReport with counts and written paths
    """
    logger.info(f"Scanning directory: {content_dir}")
    entries = scan_directory(content_dir)
    summary = summarize(entries)

    logger.info(f"Boards: {len(summary.boards)} ({', '.join(summary.boards)})")
    logger.info(f"Published posts: {len(summary.published_posts)}")
    logger.info(f"Featured posts: {len(summary.featured_posts)}")

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    sitemap_path = write_sitemap(entries, output_path, base_url, now)
    robots_path = write_robots(entries, output_path, base_url)

    return GenerationReport(
        boards=summary.boards,
        published_posts=len(summary.published_posts),
        featured_posts=len(summary.featured_posts),
        sitemap_path=sitemap_path,
        robots_path=robots_path,
    )
