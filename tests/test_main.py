"""Integration tests for CLI routing in main.py.

Interactive sessions are driven by mocking Console.input().
"""

import logging

import pytest
from rich.console import Console

import main
from conftest import InputSequence
from ui import TutorUI


@pytest.fixture(autouse=True)
def cli_environment(monkeypatch):
    """Wide output, no terminal clearing, no real signal handlers.

    Patches:
    - COLUMNS so tables are not wrapped
    - Console.clear to no-op (avoid terminal issues)
    - signal.signal to no-op (avoid handler issues in tests)
    """
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setattr(Console, "clear", lambda self, home=True: None)
    monkeypatch.setattr("signal.signal", lambda *args, **kwargs: None)

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParser:
    def test_widget_options(self):
        args = main.create_parser().parse_args(
            ["--verbose", "widget", "bmi", "--set", "height_cm=160", "-a", "noop"]
        )
        assert args.command == "widget"
        assert args.assignments == ["height_cm=160"]
        assert args.actions == ["noop"]
        assert args.verbose

    def test_build_config_overrides(self, tmp_path):
        args = main.create_parser().parse_args(
            ["--data-dir", str(tmp_path), "--verbose", "list"]
        )
        config = main.build_config(args)
        assert config.data_dir == tmp_path
        assert config.log_level == "DEBUG"

    def test_parse_assignment(self):
        assert main.parse_assignment("text=a=b") == ("text", "a=b")
        with pytest.raises(main.WidgetError):
            main.parse_assignment("text")

    def test_parse_action(self):
        assert main.parse_action("append:Kotlin") == ("append", "Kotlin")
        assert main.parse_action("sort") == ("sort", "")


class TestListCommand:
    def test_lists_every_widget(self, capsys):
        assert main.main(["list"]) == 0
        out = capsys.readouterr().out
        for name in ("type_converter", "grade_statistics", "data_pipeline", "counter"):
            assert name in out


class TestWidgetCommand:
    """Tests for computing one widget from the command line."""

    def test_set_fields(self, capsys):
        code = main.main(["widget", "bmi", "--set", "height_cm=160", "--set", "weight_kg=80"])
        assert code == 0
        assert "肥胖" in capsys.readouterr().out

    def test_actions(self, capsys):
        code = main.main(
            ["widget", "array_operations", "--action", "append:Kotlin", "--action", "remove_first"]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "Kotlin" in out
        assert "数组长度：3" in out

    def test_pipeline_error_inline(self, capsys):
        assert main.main(["widget", "data_pipeline", "--set", "data=-1,-2"]) == 0
        assert "没有正数" in capsys.readouterr().out

    def test_unknown_widget(self, capsys):
        assert main.main(["widget", "student_card"]) == 1
        assert "Unknown widget" in capsys.readouterr().out

    def test_invalid_value(self, capsys):
        assert main.main(["widget", "bmi", "--set", "weight_kg=heavy"]) == 1
        assert "weight_kg" in capsys.readouterr().out

    def test_unknown_action(self, capsys):
        assert main.main(["widget", "bmi", "--action", "explode"]) == 1
        assert "has no action" in capsys.readouterr().out


class TestLessonCommand:
    def test_missing_day(self, capsys):
        assert main.main(["lesson", "--day", "9"]) == 1
        assert "No lesson for day 9" in capsys.readouterr().out

    def test_open_and_close(self, capsys, monkeypatch):
        # Day 5 opens on 类基础, which holds one widget card
        inputs = InputSequence(["", "q"])
        monkeypatch.setattr(Console, "input", inputs)
        assert main.main(["lesson", "--day", "5"]) == 0
        assert inputs.remaining == 0
        assert "我是 小明，今年 25 岁" in capsys.readouterr().out

    def test_bad_lesson_file(self, tmp_path, capsys):
        (tmp_path / "day1.json").write_text("{}", encoding="utf-8")
        assert main.main(["--data-dir", str(tmp_path), "lesson", "--day", "1"]) == 1
        assert "day1.json" in capsys.readouterr().out


class TestInteractive:
    """Tests for the default home screen loop."""

    def test_quit_from_home(self, capsys, monkeypatch):
        monkeypatch.setattr(Console, "input", InputSequence(["q"]))
        assert main.main([]) == 0
        out = capsys.readouterr().out
        assert "学习进度：Day 1 / 21" in out
        assert "再见" in out

    def test_open_day_then_quit(self, capsys, monkeypatch):
        inputs = InputSequence(["7", "5", "", "q", "q"])
        monkeypatch.setattr(Console, "input", inputs)
        assert main.main([]) == 0
        assert inputs.remaining == 0
        out = capsys.readouterr().out
        assert "类基础" in out
        assert "学习进度：Day 5 / 21" in out

    def test_no_lessons(self, tmp_path, capsys):
        assert main.main(["--data-dir", str(tmp_path)]) == 1
        assert "No lessons found" in capsys.readouterr().out


class TestSigint:
    def test_handler_exits_cleanly(self):
        console = Console(record=True)
        handler = main.create_sigint_handler(TutorUI(console))
        with pytest.raises(SystemExit) as exc_info:
            handler(2, None)
        assert exc_info.value.code == 0
        assert "再见" in console.export_text()
