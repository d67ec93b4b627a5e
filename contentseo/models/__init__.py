from .entry import Board, Difficulty, Entry, Post, PostMeta

__all__ = ["Board", "Difficulty", "Entry", "Post", "PostMeta"]
