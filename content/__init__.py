"""Content layer for the Swift tutor.

Provides a read-only repository interface and a JSON implementation for the
lesson days shipped in data/lessons/.
"""

from pathlib import Path

from config import DEFAULT_DATA_DIR

from .base import ContentError, LessonRepository
from .json_repo import JSONLessonRepository

__all__ = [
    "ContentError",
    "LessonRepository",
    "JSONLessonRepository",
    "DEFAULT_DATA_DIR",
    "get_lesson_repo",
]


def get_lesson_repo(data_dir: Path = DEFAULT_DATA_DIR) -> LessonRepository:
    """Get a LessonRepository instance reading from data_dir."""
    return JSONLessonRepository(data_dir)
