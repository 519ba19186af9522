import logging

from pydantic import ValidationError
from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from rich.align import Align
from typing import Optional, List

from config import TutorConfig
from models import CardKind, Lesson
from navigator import LessonNavigator, NavigationEvent
from widgets import Widget, WidgetError, create_widget
from ui.components import (
    ContentCardPanel,
    WidgetPanel,
    LessonHeader,
    HomeScreen,
    WidgetTable,
)
from ui.styles import (
    DEFAULT_THEME,
    SUCCESS_GREEN,
    ERROR_RED,
    MUTED_GRAY,
    create_lesson_complete_header,
)

logger = logging.getLogger(__name__)


def apply_widget_command(widget: Widget, command: str) -> None:
    """Apply one line typed at a widget prompt.

    `field=value` sets an input field; anything else is an action name
    followed by an optional argument, e.g. `append 7`.

    Raises:
        WidgetError: Unknown field or action.
        pydantic.ValidationError: The value does not fit the field.
    """
    name, sep, value = command.partition("=")
    if sep and name.strip() in widget.editable_fields:
        widget.update_from_text(name.strip(), value.strip())
        return

    parts = command.split(maxsplit=1)
    action = parts[0]
    argument = parts[1] if len(parts) > 1 else ""
    widget.perform(action, argument)


def describe_validation_error(error: ValidationError) -> str:
    """First validation message, e.g. "height_cm: Input should be a valid number"."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


class TutorUI:
    """Main UI orchestrator for the Swift Tutor application."""

    def __init__(self, console: Optional[Console] = None, config: Optional[TutorConfig] = None):
        self.console = console or Console(theme=DEFAULT_THEME)
        self.config = config or TutorConfig()

    def show_home(self, lessons: List[Lesson], selected_day: int) -> Optional[int]:
        """Display the home screen and get the chosen day.

        Returns:
            The chosen lesson day, or None if the user quits.
        """
        available = {lesson.day for lesson in lessons}
        self.console.print(HomeScreen(lessons, selected_day, self.config.total_days))
        self.console.print()

        while True:
            user_input = self.console.input(
                Text("Day: ", style=f"bold {MUTED_GRAY}")
            ).strip()

            if user_input.lower() == "q":
                return None

            if user_input.isdigit() and int(user_input) in available:
                return int(user_input)

            days = ", ".join(str(day) for day in sorted(available))
            self.console.print(
                Text(f"Please enter one of {days} (or 'q' to quit)\n", style=ERROR_RED)
            )

    def run_lesson(self, lesson: Lesson) -> NavigationEvent:
        """Walk a lesson's sections until it is completed or closed.

        Returns:
            NavigationEvent.COMPLETED or NavigationEvent.DISMISSED.
        """
        navigator = LessonNavigator.for_lesson(lesson)
        logger.info("Opened %s", lesson.title)

        event = NavigationEvent.NO_OP
        while not navigator.is_dismissed:
            self.clear_screen()
            self.show_section(lesson, navigator)

            command = self._get_navigation_input(navigator)
            if command == "n":
                event = navigator.advance()
            elif command == "p":
                event = navigator.retreat()
            else:
                event = navigator.dismiss()

        if event == NavigationEvent.COMPLETED:
            self.show_lesson_complete(lesson)
        logger.info("Closed %s (%s)", lesson.title, event.value)
        return event

    def show_section(self, lesson: Lesson, navigator: LessonNavigator) -> None:
        """Print the current section's cards, pausing at each widget."""
        self.console.print(LessonHeader(lesson, navigator))
        self.console.print()

        for card in navigator.current_section().cards:
            if card.kind == CardKind.WIDGET:
                widget = self.create_widget(card.widget)
                try:
                    self.interact_with_widget(widget)
                finally:
                    widget.close()
            else:
                self.console.print(ContentCardPanel(card))
                self.console.print()

    def _get_navigation_input(self, navigator: LessonNavigator) -> str:
        """Get n/p/q input; 'p' is only accepted after the first section."""
        valid = ["n", "q"] if navigator.is_first else ["n", "p", "q"]
        while True:
            user_input = self.console.input(
                Text(f"[{'/'.join(valid)}]: ", style=f"bold {MUTED_GRAY}")
            ).strip().lower()

            if user_input in valid:
                return user_input

            self.console.print(
                Text(f"Please enter {', '.join(valid)}\n", style=ERROR_RED)
            )

    def create_widget(self, name: str) -> Widget:
        return create_widget(name, countdown_interval=self.config.countdown_interval)

    def interact_with_widget(self, widget: Widget) -> None:
        """Show a widget and apply commands until the user presses Enter."""
        while True:
            self.show_widget(widget)
            user_input = self.console.input(
                Text("› ", style=f"bold {MUTED_GRAY}")
            ).strip()

            if not user_input:
                return

            try:
                apply_widget_command(widget, user_input)
            except ValidationError as e:
                logger.warning("Rejected input for %s: %s", widget.name, user_input)
                self.show_error(describe_validation_error(e))
            except WidgetError as e:
                logger.warning("Widget %s: %s", widget.name, e)
                self.show_error(str(e))

    def show_widget(self, widget: Widget, show_help: bool = True) -> None:
        self.console.print(WidgetPanel(widget, show_help=show_help))
        self.console.print()

    def show_widget_list(self, widgets: List[type[Widget]]) -> None:
        self.console.print(WidgetTable(widgets))

    def show_lesson_complete(self, lesson: Lesson) -> None:
        self.console.print(
            Panel(
                Align.center(create_lesson_complete_header(lesson.title)),
                border_style=SUCCESS_GREEN,
            )
        )

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_quit_message(self) -> None:
        """Display the quit message."""
        self.console.print()
        self.console.print(Text("👋 再见！下次继续学习 Swift。", style=MUTED_GRAY))

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()
