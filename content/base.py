"""Abstract repository interface for lesson content."""

from abc import ABC, abstractmethod

from models import Lesson


class ContentError(Exception):
    """Raised when a lesson file cannot be read or does not validate."""


class LessonRepository(ABC):
    """Abstract interface for read-only lesson content."""

    @abstractmethod
    def get_all(self) -> list[Lesson]:
        """Load all lessons.

        Returns:
            List of lessons ordered by day.
        """
        pass

    @abstractmethod
    def get_by_day(self, day: int) -> Lesson | None:
        """Load a single lesson by day number.

        Args:
            day: The lesson day (1-based).

        Returns:
            The lesson, or None if not found.
        """
        pass
