"""
Configuration for the contentseo sitemap/robots generator.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

# Root of the contents repository (defaults to where the tool is run)
CONTENTS_ROOT = Path(os.environ.get("CONTENTSEO_ROOT") or Path.cwd()).resolve()

# Content tree: boards/<board>/[<sub-board>/...]<post>/{meta.json,index.html}
CONTENT_DIR = Path(os.environ.get("CONTENTSEO_CONTENT_DIR") or CONTENTS_ROOT / "boards")

# sitemap.xml / robots.txt land at the root of the contents site
OUTPUT_DIR = Path(os.environ.get("CONTENTSEO_OUTPUT_DIR") or CONTENTS_ROOT)

BOARDS_CONFIG_PATH = CONTENTS_ROOT / "boards-config.json"

# Files that turn a directory into a post
META_FILENAME = "meta.json"
BODY_FILENAME = "index.html"

SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"
REDIRECT_FILENAME = "redirect.js"

# Public URLs
BASE_URL = os.environ.get("CONTENTSEO_BASE_URL", "https://example.github.io/contents").rstrip("/")
BLOG_URL = os.environ.get("CONTENTSEO_BLOG_URL", "https://example.github.io/blog").rstrip("/")

# Site branding
SITE_NAME = os.environ.get("CONTENTSEO_SITE_NAME", "Dev Blog")

# robots.txt
CRAWL_DELAY = 1

# Watcher
DEBOUNCE_SECONDS = float(os.environ.get("CONTENTSEO_DEBOUNCE_SECONDS", "2.0"))
WATCH_EXTENSIONS = (".json", ".md", ".html")
