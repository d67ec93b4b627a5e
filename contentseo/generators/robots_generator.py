"""
Generate robots.txt for SEO.
"""

import logging
from pathlib import Path
from typing import List
from urllib.parse import quote

from ..config import (
    BASE_URL, CRAWL_DELAY, OUTPUT_DIR, REDIRECT_FILENAME, ROBOTS_FILENAME,
    SITE_NAME, SITEMAP_FILENAME,
)
from ..models import Entry
from ..scanner import unique_board_names

logger = logging.getLogger(__name__)

DISALLOWED_PATHS = [
    f"/{REDIRECT_FILENAME}",
    "/templates/",
    "/_config.json",
    "/*/_config.json",
]


def build_robots(
    entries: List[Entry],
    base_url: str = BASE_URL,
    site_name: str = SITE_NAME,
    crawl_delay: int = CRAWL_DELAY,
) -> str:
    """Build robots.txt allowing every board and hiding tooling files."""
    base_url = base_url.rstrip("/")

    lines = [
        f"# {site_name} - Contents Repository",
        f"# {base_url}/",
        "",
        "User-agent: *",
        "Allow: /",
        "",
        "# Boards",
        "Allow: /boards/",
    ]
    lines += [f"Allow: /boards/{quote(name, safe='/')}/" for name in unique_board_names(entries)]

    lines += ["", "# Redirect script, templates and configuration files"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]

    lines += [
        "",
        f"Sitemap: {base_url}/{SITEMAP_FILENAME}",
        "",
        f"Crawl-delay: {crawl_delay}",
        "",
    ]
    return "\n".join(lines)


def write_robots(
    entries: List[Entry],
    output_dir=OUTPUT_DIR,
    base_url: str = BASE_URL,
    site_name: str = SITE_NAME,
) -> Path:
    """Write robots.txt into output_dir, replacing any previous file."""
    output_path = Path(output_dir) / ROBOTS_FILENAME
    output_path.write_text(build_robots(entries, base_url, site_name), encoding="utf-8")

    logger.info(f"Generated {ROBOTS_FILENAME}: {output_path}")
    return output_path
