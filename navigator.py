"""
Navigator - linear section navigation within one lesson day.

Tracks the current section index in [0, N) and the terminal "dismissed"
state reached by advancing past the last section or closing the lesson.
"""

import logging
from enum import Enum

from models import Lesson, Section

logger = logging.getLogger(__name__)


class NavigationEvent(str, Enum):
    """Outcome of a navigation request, for the UI to react to."""
    ADVANCED = "advanced"
    RETREATED = "retreated"
    COMPLETED = "completed"  # advanced from the last section
    DISMISSED = "dismissed"  # closed before the end
    NO_OP = "no_op"


class LessonNavigator:
    """
    Walk a fixed, ordered list of sections one step at a time.

    The index always stays inside [0, N), so current_section() never fails.
    Once dismissed, further navigation requests are ignored.
    """

    def __init__(self, sections: list[Section]):
        if not sections:
            raise ValueError("LessonNavigator needs at least one section")
        self._sections = list(sections)
        self._index = 0
        self._dismissed = False

    @classmethod
    def for_lesson(cls, lesson: Lesson) -> "LessonNavigator":
        return cls(lesson.sections)

    @property
    def index(self) -> int:
        return self._index

    @property
    def total_sections(self) -> int:
        return len(self._sections)

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == len(self._sections) - 1

    @property
    def is_dismissed(self) -> bool:
        return self._dismissed

    @property
    def position_label(self) -> str:
        """Position shown between the buttons, e.g. "2 / 5"."""
        return f"{self._index + 1} / {len(self._sections)}"

    @property
    def progress(self) -> float:
        """Fraction shown by the top progress bar."""
        return (self._index + 1) / len(self._sections)

    @property
    def next_label(self) -> str:
        """Label of the forward button: "完成" on the last section."""
        return "完成" if self.is_last else "下一节"

    def current_section(self) -> Section:
        return self._sections[self._index]

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def advance(self) -> NavigationEvent:
        """Move forward one section, or complete the lesson from the last one."""
        if self._dismissed:
            return NavigationEvent.NO_OP

        if self._index < len(self._sections) - 1:
            self._index += 1
            logger.debug("Advanced to section %d", self._index)
            return NavigationEvent.ADVANCED

        self._dismissed = True
        logger.debug("Lesson completed at section %d", self._index)
        return NavigationEvent.COMPLETED

    def retreat(self) -> NavigationEvent:
        """Move back one section; no-op on the first section."""
        if self._dismissed or self._index == 0:
            return NavigationEvent.NO_OP

        self._index -= 1
        logger.debug("Retreated to section %d", self._index)
        return NavigationEvent.RETREATED

    def dismiss(self) -> NavigationEvent:
        """Close the lesson from any section."""
        if self._dismissed:
            return NavigationEvent.NO_OP
        self._dismissed = True
        logger.debug("Lesson dismissed at section %d", self._index)
        return NavigationEvent.DISMISSED
