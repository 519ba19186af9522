import argparse
import logging
import signal
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from config import TutorConfig, load_config
from content import ContentError, get_lesson_repo
from logging_config import setup_logging
from widgets import WIDGETS, WidgetError, create_widget
from ui import TutorUI
from ui.app import describe_validation_error
from ui.styles import DEFAULT_THEME

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Swift Tutor")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="JSON configuration file (default: tutor.json next to main.py)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory containing dayN.json lesson files",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    lesson_parser = subparsers.add_parser("lesson", help="Open one lesson day")
    lesson_parser.add_argument(
        "--day",
        "-d",
        type=int,
        required=True,
        help="Lesson day to open",
    )

    widget_parser = subparsers.add_parser("widget", help="Compute one widget and print it")
    widget_parser.add_argument("name", help="Widget name (see the list command)")
    widget_parser.add_argument(
        "--set",
        "-s",
        dest="assignments",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Set an input field; may be repeated",
    )
    widget_parser.add_argument(
        "--action",
        "-a",
        dest="actions",
        action="append",
        default=[],
        metavar="NAME[:ARG]",
        help="Run an action after the fields are set; may be repeated",
    )

    subparsers.add_parser("list", help="List all widgets")

    return parser


def build_config(args: argparse.Namespace) -> TutorConfig:
    """Load the configuration file and apply command-line overrides."""
    config = load_config(args.config)
    overrides = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    if args.log_file is not None:
        overrides["log_file"] = args.log_file
    return config.model_copy(update=overrides)


def parse_assignment(text: str) -> tuple[str, str]:
    """Split a `field=value` option."""
    field_name, sep, value = text.partition("=")
    if not sep or not field_name.strip():
        raise WidgetError(f"Expected FIELD=VALUE, got '{text}'")
    return field_name.strip(), value


def parse_action(text: str) -> tuple[str, str]:
    """Split a `name[:arg]` option."""
    action, _, argument = text.partition(":")
    return action.strip(), argument


def handle_quit(ui: TutorUI) -> None:
    """Print quit message and exit."""
    ui.show_quit_message()
    sys.exit(0)


def create_sigint_handler(ui: TutorUI):
    """Create a SIGINT handler that says goodbye before exiting."""

    def sigint_handler(signum, frame):
        handle_quit(ui)

    return sigint_handler


def run_list(ui: TutorUI) -> int:
    """Run the list subcommand."""
    ui.show_widget_list(list(WIDGETS.values()))
    return 0


def run_widget(ui: TutorUI, config: TutorConfig, args: argparse.Namespace) -> int:
    """Run the widget subcommand."""
    try:
        widget = create_widget(args.name, countdown_interval=config.countdown_interval)
    except KeyError as e:
        ui.show_error(e.args[0])
        return 1

    try:
        for assignment in args.assignments:
            widget.update_from_text(*parse_assignment(assignment))
        for action in args.actions:
            widget.perform(*parse_action(action))
    except ValidationError as e:
        ui.show_error(describe_validation_error(e))
        return 1
    except WidgetError as e:
        ui.show_error(str(e))
        return 1
    finally:
        widget.close()

    ui.show_widget(widget, show_help=False)
    return 0


def run_lesson(ui: TutorUI, config: TutorConfig, day: int) -> int:
    """Run the lesson subcommand."""
    lesson = get_lesson_repo(config.data_dir).get_by_day(day)
    if lesson is None:
        ui.show_error(f"No lesson for day {day}.")
        return 1

    signal.signal(signal.SIGINT, create_sigint_handler(ui))
    ui.run_lesson(lesson)
    return 0


def run_interactive(ui: TutorUI, config: TutorConfig) -> int:
    """Run the interactive home screen loop."""
    ui.clear_screen()

    repo = get_lesson_repo(config.data_dir)
    lessons = repo.get_all()
    if not lessons:
        ui.show_error(f"No lessons found. Check {config.data_dir}.")
        return 1

    signal.signal(signal.SIGINT, create_sigint_handler(ui))

    selected_day = lessons[0].day
    while True:
        day = ui.show_home(lessons, selected_day)
        if day is None:
            ui.show_quit_message()
            return 0

        selected_day = day
        ui.clear_screen()
        ui.run_lesson(repo.get_by_day(day))


def main(argv: list[str] | None = None) -> int:
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)

    config = build_config(args)
    setup_logging(config.log_level, config.log_file)
    logger.debug("Configuration: %s", config)

    ui = TutorUI(Console(theme=DEFAULT_THEME), config)

    try:
        if args.command == "list":
            return run_list(ui)
        elif args.command == "widget":
            return run_widget(ui, config, args)
        elif args.command == "lesson":
            return run_lesson(ui, config, args.day)
        else:
            # Default to interactive mode
            return run_interactive(ui, config)
    except ContentError as e:
        logger.error("Could not load lessons: %s", e)
        ui.show_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
