"""
Helper functions shared by the sitemap and robots generators.
"""

from datetime import datetime
from typing import Optional

from ..models import Difficulty, PostMeta
from ..utils.date_utils import days_since, months_ago, to_utc

BASE_PRIORITY = 0.6
FEATURED_BONUS = 0.2
RECENT_BONUS = 0.1
RECENT_MONTHS = 3
DIFFICULTY_BONUS = {
    Difficulty.BEGINNER: 0.05,
    Difficulty.ADVANCED: 0.1,
}


def calculate_priority(meta: PostMeta, now: Optional[datetime] = None) -> str:
    """
    Sitemap priority for a post, formatted with one decimal digit.

    Starts at 0.6 and adds bonuses for featured posts, posts created within
    the last three months and Beginner/Advanced difficulty. Capped at 1.0.
    """
    priority = BASE_PRIORITY

    if meta.featured:
        priority += FEATURED_BONUS

    if meta.created_at and to_utc(meta.created_at) > months_ago(RECENT_MONTHS, now):
        priority += RECENT_BONUS

    priority += DIFFICULTY_BONUS.get(meta.difficulty, 0.0)

    return f"{min(priority, 1.0):.1f}"


def calculate_changefreq(meta: PostMeta, now: Optional[datetime] = None) -> str:
    """Change frequency from the post's age (based on createdAt)."""
    if meta.created_at is None:
        return "monthly"

    age_days = days_since(meta.created_at, now)
    if age_days < 7:
        return "daily"
    elif age_days < 30:
        return "weekly"
    return "monthly"


def join_url(base: str, *segments: str) -> str:
    """Join a base URL and path segments, always ending with a slash."""
    url = base.rstrip("/")
    for segment in segments:
        segment = segment.strip("/")
        if segment:
            url += f"/{segment}"
    return url + "/"
