"""
Content tree entry models.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..utils.date_utils import parse_date


class Difficulty(Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def from_value(cls, value: Any) -> Optional["Difficulty"]:
        """Return the matching difficulty, or None for unknown values."""
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass
class PostMeta:
    """Parsed contents of a post's meta.json."""

    title: Optional[str] = None
    published: bool = False
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    difficulty: Optional[Difficulty] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PostMeta":
        """Create PostMeta from the raw meta.json mapping."""
        title = data.get("title")
        return cls(
            title=str(title) if title is not None else None,
            published=bool(data.get("published")),
            featured=bool(data.get("featured")),
            created_at=parse_date(data.get("createdAt")),
            updated_at=parse_date(data.get("updatedAt")),
            difficulty=Difficulty.from_value(data.get("difficulty")),
        )


@dataclass
class Board:
    """A category directory (anything that is not a post)."""

    name: str
    path: str  # POSIX, relative to the content root
    full_path: Path


@dataclass
class Post:
    """A directory holding meta.json and a rendered index.html."""

    path: str  # POSIX, relative to the content root
    meta: PostMeta
    full_path: Path

    @property
    def board_name(self) -> str:
        """Top-level board the post lives under."""
        return self.path.split("/")[0]


Entry = Union[Board, Post]
