"""Shared pytest fixtures for the Swift Tutor test suite."""

import json
import pytest

import sys
from pathlib import Path
from typing import Any

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import DEFAULT_DATA_DIR
from content import JSONLessonRepository
from models import CardKind, ContentCard, Lesson, Section


class InputSequence:
    """Callable providing sequential inputs for mocked Console.input().

    Tracks all prompts received for debugging failed tests.
    """

    def __init__(self, inputs: list[str]):
        self.inputs = inputs
        self.index = 0
        self.call_history: list[tuple[int, Any]] = []

    def __call__(self, prompt: Any = "", **kwargs) -> str:
        """Return next input in sequence, tracking prompts received."""
        self.call_history.append((self.index, prompt))
        if self.index >= len(self.inputs):
            history = "\n".join(f"  {i}: {p}" for i, p in self.call_history)
            raise StopIteration(
                f"Ran out of inputs at call {self.index}.\n"
                f"Prompt: {prompt}\n"
                f"History:\n{history}"
            )
        result = self.inputs[self.index]
        self.index += 1
        return result

    @property
    def remaining(self) -> int:
        """Number of unused inputs remaining."""
        return len(self.inputs) - self.index


@pytest.fixture
def sample_sections() -> list[Section]:
    """Three sections with one card each."""
    return [
        Section(
            index=i,
            title=title,
            cards=[ContentCard(kind=CardKind.CONCEPT, title=title, body=f"{title} body")],
        )
        for i, title in enumerate(["变量和常量", "基本数据类型", "实践练习"])
    ]


@pytest.fixture
def sample_lesson(sample_sections) -> Lesson:
    """A small lesson without widget cards."""
    return Lesson(
        day=1,
        title="Day 1: Swift 基础",
        headline="Swift 基础语法",
        description="变量、常量和数据类型",
        topics=["变量 vs 常量"],
        sections=sample_sections,
    )


@pytest.fixture
def lesson_repo() -> JSONLessonRepository:
    """Repository over the lesson files shipped with the project."""
    return JSONLessonRepository(DEFAULT_DATA_DIR)


@pytest.fixture
def lesson_dir(tmp_path, sample_lesson) -> Path:
    """A temporary lesson directory holding one valid lesson file."""
    directory = tmp_path / "lessons"
    directory.mkdir()
    (directory / "day1.json").write_text(
        sample_lesson.model_dump_json(indent=2), encoding="utf-8"
    )
    return directory


@pytest.fixture
def write_lesson_file():
    """Write raw lesson JSON into a directory and return the file path."""

    def writer(directory: Path, name: str, data: dict) -> Path:
        path = directory / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return writer
