"""Tests for lesson models and the JSON lesson repository."""

import pytest
from pydantic import ValidationError

from content import ContentError, JSONLessonRepository, get_lesson_repo
from models import CardKind, ContentCard, Lesson, Section
from widgets import WIDGETS

EXPECTED_SECTION_TITLES = {
    1: ["变量和常量", "基本数据类型", "类型转换", "字符串插值", "实践练习"],
    2: ["函数基础", "函数参数和返回值", "闭包语法", "集合类型：Array", "集合类型：Dictionary和Set", "实践练习"],
    3: ["if条件语句", "switch多分支语句", "for循环遍历", "while循环控制", "控制流语句", "实践练习"],
    4: ["可选类型基础", "可选绑定", "强制解包与隐式解包", "错误处理基础", "Result类型", "实践练习"],
    5: ["类基础", "结构体基础", "属性类型", "方法定义", "实践练习", "总结回顾"],
}


class TestContentCard:
    """Tests for per-kind card validation."""

    def test_concept_needs_body(self):
        with pytest.raises(ValidationError):
            ContentCard(kind=CardKind.CONCEPT, title="变量")

    def test_tip_with_tips(self):
        card = ContentCard(kind=CardKind.TIP, title="提示", tips=["一", "二"])
        assert card.tips == ["一", "二"]

    def test_tip_needs_exactly_one_of_body_or_tips(self):
        with pytest.raises(ValidationError):
            ContentCard(kind=CardKind.TIP, title="提示")
        with pytest.raises(ValidationError):
            ContentCard(kind=CardKind.TIP, title="提示", body="x", tips=["y"])

    def test_widget_needs_name(self):
        with pytest.raises(ValidationError):
            ContentCard(kind=CardKind.WIDGET)

    def test_card_is_frozen(self):
        card = ContentCard(kind=CardKind.CODE, title="代码", body="let x = 1")
        with pytest.raises(ValidationError):
            card.body = "var x = 1"


class TestLessonValidation:
    """Tests for section ordering rules."""

    def test_sections_must_be_in_order(self):
        sections = [
            Section(index=1, title="b"),
            Section(index=0, title="a"),
        ]
        with pytest.raises(ValidationError):
            Lesson(day=1, title="Day 1", headline="h", sections=sections)

    def test_sections_required(self):
        with pytest.raises(ValidationError):
            Lesson(day=1, title="Day 1", headline="h", sections=[])

    def test_widget_names(self):
        section = Section(
            index=0,
            title="a",
            cards=[
                ContentCard(kind=CardKind.CONCEPT, title="c", body="b"),
                ContentCard(kind=CardKind.WIDGET, widget="bmi"),
            ],
        )
        lesson = Lesson(day=1, title="Day 1", headline="h", sections=[section])
        assert lesson.widget_names == ["bmi"]
        assert lesson.section_titles == ["a"]


class TestShippedLessons:
    """Tests against the lesson files in data/lessons."""

    def test_five_days_sorted(self, lesson_repo):
        """All five days load, ordered by day."""
        lessons = lesson_repo.get_all()
        assert [lesson.day for lesson in lessons] == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("day", sorted(EXPECTED_SECTION_TITLES))
    def test_section_titles(self, lesson_repo, day):
        """Section titles match the navigation order exactly."""
        lesson = lesson_repo.get_by_day(day)
        assert lesson.section_titles == EXPECTED_SECTION_TITLES[day]

    def test_lesson_titles(self, lesson_repo):
        assert lesson_repo.get_by_day(1).title == "Day 1: Swift 基础"
        assert lesson_repo.get_by_day(5).title == "Day 5: 类与结构体"

    def test_every_widget_card_is_registered(self, lesson_repo):
        """Every widget card names a registered widget."""
        for lesson in lesson_repo.get_all():
            for name in lesson.widget_names:
                assert name in WIDGETS, f"Day {lesson.day} uses unknown widget {name}"

    def test_every_widget_is_used(self, lesson_repo):
        """Every registered widget appears on some lesson page."""
        used = {name for lesson in lesson_repo.get_all() for name in lesson.widget_names}
        assert used == set(WIDGETS)

    def test_widgets_appear_on_their_day(self, lesson_repo):
        for lesson in lesson_repo.get_all():
            for name in lesson.widget_names:
                assert WIDGETS[name].day == lesson.day

    def test_missing_day(self, lesson_repo):
        assert lesson_repo.get_by_day(6) is None


class TestJSONLessonRepository:
    """Tests for loading behaviour and errors."""

    def test_missing_directory_is_empty(self, tmp_path):
        repo = JSONLessonRepository(tmp_path / "nope")
        assert repo.get_all() == []

    def test_loads_lesson_file(self, lesson_dir, sample_lesson):
        repo = get_lesson_repo(lesson_dir)
        assert repo.get_all() == [sample_lesson]

    def test_invalid_json_names_file(self, lesson_dir):
        (lesson_dir / "day2.json").write_text("{not json", encoding="utf-8")
        repo = JSONLessonRepository(lesson_dir)
        with pytest.raises(ContentError, match="day2.json"):
            repo.get_all()

    def test_invalid_lesson_names_file(self, lesson_dir, write_lesson_file):
        write_lesson_file(lesson_dir, "day3.json", {"day": 3, "title": "Day 3"})
        with pytest.raises(ContentError, match="day3.json"):
            JSONLessonRepository(lesson_dir).get_by_day(3)

    def test_duplicate_day_rejected(self, lesson_dir, sample_lesson):
        (lesson_dir / "day9.json").write_text(
            sample_lesson.model_dump_json(), encoding="utf-8"
        )
        with pytest.raises(ContentError, match="duplicate"):
            JSONLessonRepository(lesson_dir).get_all()

    def test_non_lesson_files_ignored(self, lesson_dir):
        (lesson_dir / "notes.json").write_text("{}", encoding="utf-8")
        assert len(JSONLessonRepository(lesson_dir).get_all()) == 1
