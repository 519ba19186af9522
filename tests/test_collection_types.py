"""Tests for the Day 2 widgets."""

import pytest

from widgets import WidgetError
from widgets.collection_types import (
    ArrayChainWidget,
    ArrayOperationsWidget,
    ChainOperation,
    ClosureWidget,
    CollectionComparisonWidget,
    GradeManagerWidget,
    ShoppingListWidget,
    apply_chain,
    average_grade,
    completion_rate,
    top_student,
)


class TestClosure:
    def test_map_filter_reduce(self):
        result = ClosureWidget().derive()
        assert result.mapped == [2, 4, 6, 8, 10]
        assert result.filtered == [2, 4]
        assert result.total == 15

    def test_numbers_from_text(self):
        widget = ClosureWidget()
        widget.update_from_text("numbers", "3, 4")
        assert widget.derive().total == 7


class TestArrayOperations:
    """Tests for array mutation buttons."""

    def test_default_rows(self):
        rows = ArrayOperationsWidget().display_rows()
        assert rows[0] == ("数组内容", '["Swift", "iOS", "Xcode"]')
        assert rows[1][1] == "数组长度：3 | 是否为空：否"

    def test_append_argument(self):
        widget = ArrayOperationsWidget()
        widget.perform("append", "Kotlin")
        assert widget.inputs.items == ["Swift", "iOS", "Xcode", "Kotlin"]

    def test_append_new_item_field_is_cleared(self):
        widget = ArrayOperationsWidget()
        widget.update(new_item="SwiftUI")
        widget.perform("append")
        assert widget.inputs.items[-1] == "SwiftUI"
        assert widget.inputs.new_item == ""

    def test_append_empty_ignored(self):
        widget = ArrayOperationsWidget()
        widget.perform("append", "   ")
        assert len(widget.inputs.items) == 3

    def test_remove_and_empty(self):
        widget = ArrayOperationsWidget()
        widget.perform("remove_first")
        assert widget.inputs.items == ["iOS", "Xcode"]
        widget.perform("remove_last")
        widget.perform("remove_last")
        widget.perform("remove_last")
        result = widget.derive()
        assert result.items == []
        assert result.is_empty

    def test_sort_and_reset(self):
        widget = ArrayOperationsWidget()
        widget.perform("append", "App")
        widget.perform("sort")
        assert widget.inputs.items == ["App", "Swift", "Xcode", "iOS"]
        widget.perform("reset")
        assert widget.inputs.items == ["Swift", "iOS", "Xcode"]

    def test_unknown_action(self):
        with pytest.raises(WidgetError):
            ArrayOperationsWidget().perform("shuffle")


class TestCollectionComparison:
    def test_default(self):
        result = CollectionComparisonWidget().derive()
        assert result.array_text == "Apple → Banana → Apple → Orange"
        assert result.set_text == "Apple • Banana • Orange"
        assert result.dict_text == "Apple: 苹果, Banana: 香蕉, Orange: 橙子"


class TestGradeManager:
    """Tests for the grade dictionary manager."""

    def test_default_summary(self):
        result = GradeManagerWidget().derive()
        assert result.average == pytest.approx(85.0)
        assert result.top_student == "小红"
        assert result.count == 3

    def test_add_student(self):
        widget = GradeManagerWidget()
        widget.update(new_grade=96)
        widget.perform("add", "小王")
        assert widget.inputs.grades["小王"] == 96
        assert widget.inputs.new_grade == 80
        assert widget.derive().top_student == "小王"

    def test_add_requires_name(self):
        with pytest.raises(WidgetError):
            GradeManagerWidget().perform("add")

    def test_new_grade_clamped(self):
        widget = GradeManagerWidget()
        widget.update(new_grade=120)
        assert widget.inputs.new_grade == 100

    def test_grades_not_text_editable(self):
        assert "grades" not in GradeManagerWidget().editable_fields

    def test_empty_roster(self):
        assert average_grade({}) == 0.0
        assert top_student({}) is None

    def test_tie_goes_to_first_sorted_name(self):
        assert top_student({"b": 90, "a": 90}) == "a"


class TestArrayChain:
    """Tests for the fixed-order operation chain."""

    def test_no_selection_is_identity(self):
        values, total = apply_chain(list(range(1, 11)), set())
        assert values == list(range(1, 11))
        assert total is None

    def test_full_chain(self):
        values, total = apply_chain(list(range(1, 11)), set(ChainOperation))
        assert values == [16, 36, 64, 100]
        assert total == 216

    def test_selection_order_irrelevant(self):
        widget = ArrayChainWidget()
        widget.perform("toggle", "大于5")
        widget.perform("toggle", "平方映射")
        widget.perform("toggle", "偶数筛选")
        assert widget.derive().values == [16, 36, 64, 100]

    def test_toggle_off(self):
        widget = ArrayChainWidget()
        widget.perform("toggle", "求和")
        assert widget.derive().total == 55
        widget.perform("toggle", "求和")
        assert widget.derive().total is None

    def test_sum_row(self):
        widget = ArrayChainWidget()
        widget.perform("toggle", "求和")
        assert ("", "最终求和结果：55") in widget.display_rows()

    def test_unknown_operation(self):
        with pytest.raises(WidgetError):
            ArrayChainWidget().perform("toggle", "翻转")


class TestShoppingList:
    """Tests for the shopping list."""

    def test_default_completion(self):
        widget = ShoppingListWidget()
        result = widget.derive()
        assert result.completion_rate == pytest.approx(0.5)
        assert dict(widget.display_rows())["完成度"] == "50%"

    def test_add_toggle_delete(self):
        widget = ShoppingListWidget()
        widget.perform("add", "香蕉")
        assert widget.inputs.items["香蕉"] is False
        widget.perform("toggle", "香蕉")
        assert widget.inputs.items["香蕉"] is True
        widget.perform("delete", "香蕉")
        assert "香蕉" not in widget.inputs.items

    def test_duplicate_add_ignored(self):
        widget = ShoppingListWidget()
        widget.perform("add", "牛奶")
        assert widget.inputs.items["牛奶"] is True
        assert len(widget.inputs.items) == 4

    def test_missing_item(self):
        with pytest.raises(WidgetError):
            ShoppingListWidget().perform("toggle", "咖啡")

    def test_empty_list_rate(self):
        assert completion_rate({}) == 0.0
