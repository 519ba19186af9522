"""Swift Tutor UI Module - terminal interface for the Swift lessons."""

from ui.app import TutorUI, apply_widget_command
from ui.components import (
    ContentCardPanel,
    WidgetPanel,
    LessonHeader,
    DayCard,
    HomeScreen,
    WidgetTable,
)
from ui.styles import (
    SWIFT_ORANGE,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "TutorUI",
    "apply_widget_command",
    "ContentCardPanel",
    "WidgetPanel",
    "LessonHeader",
    "DayCard",
    "HomeScreen",
    "WidgetTable",
    "SWIFT_ORANGE",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
