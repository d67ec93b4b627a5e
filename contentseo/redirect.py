"""
Visitor redirect helpers.

Crawlers stay on the contents pages so they get indexed; human visitors are
sent to the same post (or board) on the main blog. The browser side of this
lives in redirect.js, rendered here from the same pattern list so both sides
agree on what counts as a crawler.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional, Tuple

from .config import BLOG_URL, OUTPUT_DIR, REDIRECT_FILENAME

logger = logging.getLogger(__name__)

# Major search engine and social preview crawlers, then generic catch-alls
BOT_PATTERNS = [
    "googlebot",
    "bingbot",
    "slurp",  # Yahoo
    "duckduckbot",
    "baiduspider",
    "yandexbot",
    "facebookexternalhit",
    "twitterbot",
    "linkedinbot",
    "whatsapp",
    "telegrambot",
    "applebot",
    "bot",
    "crawler",
    "spider",
    "crawling",
]

_BOT_RE = [re.compile(pattern, re.IGNORECASE) for pattern in BOT_PATTERNS]

# /contents/boards/frontend/2024-09-13_1400_react-hooks_a1b2c3d4/
POST_PATH_RE = re.compile(r"/contents/boards/([^/]+)/([^/]+)/?$")
# /contents/boards/frontend/
BOARD_PATH_RE = re.compile(r"/contents/boards/([^/]+)/?$")


def is_bot(user_agent: Optional[str]) -> bool:
    """True for crawlers. A missing user agent (server-side render) counts as one."""
    if user_agent is None:
        return True
    return any(pattern.search(user_agent) for pattern in _BOT_RE)


def decode_post_path(pathname: str) -> Optional[Tuple[str, str]]:
    """Extract (board, post_id) from a post page path."""
    match = POST_PATH_RE.search(pathname)
    if match:
        return match.group(1), match.group(2)
    return None


def decode_board_path(pathname: str) -> Optional[str]:
    """Extract the board name from a board page path."""
    match = BOARD_PATH_RE.search(pathname)
    if match:
        return match.group(1)
    return None


def redirect_target(pathname: str, blog_url: str = BLOG_URL) -> str:
    """Main blog URL matching a contents page path."""
    blog_url = blog_url.rstrip("/")

    post = decode_post_path(pathname)
    if post:
        board_name, post_id = post
        return f"{blog_url}/boards/{board_name}/{post_id}/"

    board_name = decode_board_path(pathname)
    if board_name:
        return f"{blog_url}/boards/{board_name}/"

    return blog_url


def redirect_for(user_agent: Optional[str], pathname: str, blog_url: str = BLOG_URL) -> Optional[str]:
    """Where to send this visitor, or None to leave crawlers on the page."""
    if is_bot(user_agent):
        return None
    return redirect_target(pathname, blog_url)


REDIRECT_SCRIPT_TEMPLATE = """/**
 * Contents redirect script (generated by contentseo).
 * Crawlers stay on this page; visitors go to the main blog.
 */
(function () {
  'use strict';

  var BLOG_URL = %(blog_url)s;
  var BOT_PATTERNS = %(bot_patterns)s;
  var POST_PATH = %(post_path)s;
  var BOARD_PATH = %(board_path)s;

  function isBot() {
    if (typeof navigator === 'undefined' || typeof window === 'undefined') {
      return true;
    }
    var userAgent = navigator.userAgent || '';
    return BOT_PATTERNS.some(function (pattern) {
      return new RegExp(pattern, 'i').test(userAgent);
    });
  }

  function getTargetUrl() {
    var pathname = window.location.pathname;
    var post = pathname.match(new RegExp(POST_PATH));
    if (post) {
      return BLOG_URL + '/boards/' + post[1] + '/' + post[2] + '/';
    }
    var board = pathname.match(new RegExp(BOARD_PATH));
    if (board) {
      return BLOG_URL + '/boards/' + board[1] + '/';
    }
    return BLOG_URL;
  }

  function performRedirect() {
    if (!isBot()) {
      // replace() keeps the contents page out of the history
      window.location.replace(getTargetUrl());
    }
  }

  if (document.readyState === 'loading') {
    document.addEventListener('DOMContentLoaded', performRedirect);
  } else {
    performRedirect();
  }
})();
"""


def render_redirect_script(blog_url: str = BLOG_URL) -> str:
    """Render redirect.js with the crawler patterns and path decoders above."""
    return REDIRECT_SCRIPT_TEMPLATE % {
        "blog_url": json.dumps(blog_url.rstrip("/")),
        "bot_patterns": json.dumps(BOT_PATTERNS),
        "post_path": json.dumps(POST_PATH_RE.pattern),
        "board_path": json.dumps(BOARD_PATH_RE.pattern),
    }


def write_redirect_script(output_dir=OUTPUT_DIR, blog_url: str = BLOG_URL) -> Path:
    """Write redirect.js into output_dir."""
    output_path = Path(output_dir) / REDIRECT_FILENAME
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_redirect_script(blog_url), encoding="utf-8")

    logger.info(f"Generated {REDIRECT_FILENAME}: {output_path}")
    return output_path
