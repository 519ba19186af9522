"""JSON file implementation of the lesson repository."""

import logging
from pathlib import Path

from pydantic import ValidationError

from models import Lesson

from .base import ContentError, LessonRepository

logger = logging.getLogger(__name__)

LESSON_FILE_GLOB = "day*.json"


class JSONLessonRepository(LessonRepository):
    """Reads one `dayN.json` file per lesson from a directory.

    Files are parsed once, on first access.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self._lessons: dict[int, Lesson] | None = None

    def _load(self) -> dict[int, Lesson]:
        if self._lessons is not None:
            return self._lessons

        lessons: dict[int, Lesson] = {}
        if not self.data_dir.is_dir():
            logger.warning("Lesson directory %s does not exist", self.data_dir)
            self._lessons = lessons
            return lessons

        for path in sorted(self.data_dir.glob(LESSON_FILE_GLOB)):
            lesson = self._read_file(path)
            if lesson.day in lessons:
                raise ContentError(f"{path}: duplicate lesson for day {lesson.day}")
            lessons[lesson.day] = lesson

        logger.info("Loaded %d lessons from %s", len(lessons), self.data_dir)
        self._lessons = lessons
        return lessons

    @staticmethod
    def _read_file(path: Path) -> Lesson:
        try:
            return Lesson.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise ContentError(f"{path}: {e}") from e

    def get_all(self) -> list[Lesson]:
        lessons = self._load()
        return [lessons[day] for day in sorted(lessons)]

    def get_by_day(self, day: int) -> Lesson | None:
        return self._load().get(day)
