"""Day 2 widgets: closures and the Array / Set / Dictionary exercises."""

import logging
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from widgets.base import Widget, WidgetError, clamp, format_fixed

logger = logging.getLogger(__name__)

DEFAULT_ARRAY = ["Swift", "iOS", "Xcode"]
DEFAULT_FRUITS = ["Apple", "Banana", "Apple", "Orange"]
FRUIT_NAMES = {"Apple": "苹果", "Banana": "香蕉", "Orange": "橙子"}
DEFAULT_GRADES = {"小明": 85, "小红": 92, "小李": 78}
DEFAULT_NEW_GRADE = 80
DEFAULT_SHOPPING = {"苹果": False, "牛奶": True, "面包": False, "鸡蛋": True}


# =============================================================================
# Pure derivations
# =============================================================================


def double_all(numbers: list[int]) -> list[int]:
    return [n * 2 for n in numbers]


def keep_even(numbers: list[int]) -> list[int]:
    return [n for n in numbers if n % 2 == 0]


def sum_all(numbers: list[int]) -> int:
    return sum(numbers)


def unique_sorted(items: list[str]) -> list[str]:
    return sorted(set(items))


def average_grade(grades: dict[str, int]) -> float:
    """Mean of the grades, 0.0 for an empty roster."""
    if not grades:
        return 0.0
    return sum(grades.values()) / len(grades)


def top_student(grades: dict[str, int]) -> str | None:
    """Name with the highest grade; ties go to the first name in sorted order."""
    best: str | None = None
    for name in sorted(grades):
        if best is None or grades[name] > grades[best]:
            best = name
    return best


class ChainOperation(str, Enum):
    EVEN = "偶数筛选"
    SQUARE = "平方映射"
    GREATER_THAN_FIVE = "大于5"
    SUM = "求和"


def apply_chain(
    numbers: list[int], operations: set[ChainOperation]
) -> tuple[list[int], int | None]:
    """Apply the selected operations in their fixed order.

    The order is always even filter, square map, greater-than-5 filter, sum;
    selection order does not matter.

    Returns:
        The transformed list and the sum (None when SUM is not selected).
    """
    result = list(numbers)
    if ChainOperation.EVEN in operations:
        result = [n for n in result if n % 2 == 0]
    if ChainOperation.SQUARE in operations:
        result = [n * n for n in result]
    if ChainOperation.GREATER_THAN_FIVE in operations:
        result = [n for n in result if n > 5]
    total = sum(result) if ChainOperation.SUM in operations else None
    return result, total


def completion_rate(items: dict[str, bool]) -> float:
    """Fraction of checked items, 0.0 for an empty list."""
    if not items:
        return 0.0
    return sum(1 for done in items.values() if done) / len(items)


# =============================================================================
# Closure demo
# =============================================================================


class ClosureInput(BaseModel):
    numbers: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])


class ClosureResult(BaseModel):
    mapped: list[int]
    filtered: list[int]
    total: int


class ClosureWidget(Widget[ClosureInput, ClosureResult]):
    name = "closure"
    title = "🎮 闭包操作练习"
    day = 2
    input_model = ClosureInput

    def derive(self) -> ClosureResult:
        numbers = self.inputs.numbers
        return ClosureResult(
            mapped=double_all(numbers), filtered=keep_even(numbers), total=sum_all(numbers)
        )

    def display_rows(self) -> list[tuple[str, str]]:
        numbers = self.inputs.numbers
        result = self.derive()
        return [
            ("map", "对每个元素执行相同操作，返回新数组"),
            *[("", f"({n} * 2) = {n * 2}") for n in numbers],
            ("filter", "筛选符合条件的元素，返回新数组"),
            *[("", f"{n} (偶数)") for n in result.filtered],
            ("reduce", "将所有元素合并为单个值"),
            ("", f"所有数字相加 = {result.total}"),
        ]


# =============================================================================
# Array operations
# =============================================================================


class ArrayOperationsInput(BaseModel):
    items: list[str] = Field(default_factory=lambda: list(DEFAULT_ARRAY))
    new_item: str = ""


class ArrayOperationsResult(BaseModel):
    items: list[str]
    count: int
    is_empty: bool


class ArrayOperationsWidget(Widget[ArrayOperationsInput, ArrayOperationsResult]):
    name = "array_operations"
    title = "📝 数组操作练习"
    day = 2
    input_model = ArrayOperationsInput
    actions = {
        "append": "添加元素（参数或 new_item）",
        "remove_first": "删除第一个",
        "remove_last": "删除最后一个",
        "sort": "排序",
        "reset": "重置",
    }

    def derive(self) -> ArrayOperationsResult:
        items = self.inputs.items
        return ArrayOperationsResult(items=list(items), count=len(items), is_empty=not items)

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("数组内容", "[" + ", ".join(f'"{item}"' for item in result.items) + "]"),
            ("", f"数组长度：{result.count} | 是否为空：{'是' if result.is_empty else '否'}"),
        ]

    def do_append(self, argument: str) -> None:
        item = (argument or self.inputs.new_item).strip()
        if not item:
            logger.debug("array_operations: ignoring empty append")
            return
        self.update(items=[*self.inputs.items, item], new_item="")

    def do_remove_first(self, argument: str) -> None:
        if self.inputs.items:
            self.update(items=self.inputs.items[1:])

    def do_remove_last(self, argument: str) -> None:
        if self.inputs.items:
            self.update(items=self.inputs.items[:-1])

    def do_sort(self, argument: str) -> None:
        self.update(items=sorted(self.inputs.items))

    def do_reset(self, argument: str) -> None:
        self.update(items=list(DEFAULT_ARRAY), new_item="")


# =============================================================================
# Array / Set / Dictionary comparison
# =============================================================================


class CollectionComparisonInput(BaseModel):
    fruits: list[str] = Field(default_factory=lambda: list(DEFAULT_FRUITS))


class CollectionComparisonResult(BaseModel):
    array_text: str
    set_text: str
    dict_text: str


class CollectionComparisonWidget(
    Widget[CollectionComparisonInput, CollectionComparisonResult]
):
    name = "collection_comparison"
    title = "🔍 集合类型对比"
    day = 2
    input_model = CollectionComparisonInput

    def derive(self) -> CollectionComparisonResult:
        fruits = self.inputs.fruits
        translated = {fruit: FRUIT_NAMES.get(fruit, fruit) for fruit in fruits}
        return CollectionComparisonResult(
            array_text=" → ".join(fruits),
            set_text=" • ".join(unique_sorted(fruits)),
            dict_text=", ".join(f"{key}: {translated[key]}" for key in sorted(translated)),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("Array（有序，可重复）", result.array_text),
            ("Set（无序，不重复）", result.set_text),
            ("Dictionary（键值对）", result.dict_text),
        ]


# =============================================================================
# Student grade manager
# =============================================================================


class GradeManagerInput(BaseModel):
    grades: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_GRADES))
    new_name: str = ""
    new_grade: int = DEFAULT_NEW_GRADE

    @field_validator("new_grade")
    @classmethod
    def _clamp_grade(cls, value: int) -> int:
        return int(clamp(value, 0, 100))


class GradeManagerResult(BaseModel):
    average: float
    top_student: str | None
    count: int


class GradeManagerWidget(Widget[GradeManagerInput, GradeManagerResult]):
    name = "grade_manager"
    title = "👨‍🎓 学生成绩管理器"
    day = 2
    input_model = GradeManagerInput
    actions = {"add": "添加学生（参数为姓名，成绩取 new_grade）"}

    def derive(self) -> GradeManagerResult:
        grades = self.inputs.grades
        return GradeManagerResult(
            average=average_grade(grades), top_student=top_student(grades), count=len(grades)
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        rows = [(name, f"{grade}分") for name, grade in sorted(self.inputs.grades.items())]
        rows.append(("平均分", format_fixed(result.average)))
        if result.top_student is not None:
            rows.append(("最高分", f"{result.top_student} ({self.inputs.grades[result.top_student]}分)"))
        return rows

    def do_add(self, argument: str) -> None:
        name = (argument or self.inputs.new_name).strip()
        if not name:
            raise WidgetError("学生姓名不能为空")
        grades = dict(self.inputs.grades)
        grades[name] = self.inputs.new_grade
        self.update(grades=grades, new_name="", new_grade=DEFAULT_NEW_GRADE)


# =============================================================================
# Array operation chain
# =============================================================================


class ArrayChainInput(BaseModel):
    numbers: list[int] = Field(default_factory=lambda: list(range(1, 11)))
    selected: list[ChainOperation] = Field(default_factory=list)


class ArrayChainResult(BaseModel):
    values: list[int]
    total: int | None


class ArrayChainWidget(Widget[ArrayChainInput, ArrayChainResult]):
    name = "array_chain"
    title = "🧮 数组操作链练习"
    day = 2
    input_model = ArrayChainInput
    actions = {"toggle": "选择/取消操作：" + "、".join(op.value for op in ChainOperation)}

    def derive(self) -> ArrayChainResult:
        values, total = apply_chain(self.inputs.numbers, set(self.inputs.selected))
        return ArrayChainResult(values=values, total=total)

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        chosen = [op.value for op in ChainOperation if op in self.inputs.selected]
        rows = [
            ("原始数组", str(self.inputs.numbers)),
            ("已选操作", " → ".join(chosen) if chosen else "无"),
            ("结果", str(result.values)),
        ]
        if result.total is not None:
            rows.append(("", f"最终求和结果：{result.total}"))
        return rows

    def do_toggle(self, argument: str) -> None:
        try:
            operation = ChainOperation(argument.strip())
        except ValueError:
            raise WidgetError(f"未知操作：{argument}") from None
        selected = list(self.inputs.selected)
        if operation in selected:
            selected.remove(operation)
        else:
            selected.append(operation)
        self.update(selected=selected)


# =============================================================================
# Shopping list
# =============================================================================


class ShoppingListInput(BaseModel):
    items: dict[str, bool] = Field(default_factory=lambda: dict(DEFAULT_SHOPPING))
    new_item: str = ""


class ShoppingListResult(BaseModel):
    completed: list[str]
    pending: list[str]
    completion_rate: float


class ShoppingListWidget(Widget[ShoppingListInput, ShoppingListResult]):
    name = "shopping_list"
    title = "🛒 购物清单管理器"
    day = 2
    input_model = ShoppingListInput
    actions = {
        "add": "添加商品（参数或 new_item）",
        "toggle": "切换购买状态",
        "delete": "删除商品",
    }

    def derive(self) -> ShoppingListResult:
        items = self.inputs.items
        return ShoppingListResult(
            completed=sorted(name for name, done in items.items() if done),
            pending=sorted(name for name, done in items.items() if not done),
            completion_rate=completion_rate(items),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("完成度", f"{int(result.completion_rate * 100)}%"),
            ("待购买", "、".join(result.pending) or "无"),
            ("已购买", "、".join(result.completed) or "无"),
            (
                "",
                f"待购: {len(result.pending)}  已购: {len(result.completed)}  "
                f"总计: {len(self.inputs.items)}",
            ),
        ]

    def do_add(self, argument: str) -> None:
        item = (argument or self.inputs.new_item).strip()
        if not item or item in self.inputs.items:
            logger.debug("shopping_list: ignoring item %r", item)
            return
        self.update(items={**self.inputs.items, item: False}, new_item="")

    def do_toggle(self, argument: str) -> None:
        item = self._existing(argument)
        self.update(items={**self.inputs.items, item: not self.inputs.items[item]})

    def do_delete(self, argument: str) -> None:
        item = self._existing(argument)
        self.update(items={k: v for k, v in self.inputs.items.items() if k != item})

    def _existing(self, argument: str) -> str:
        item = argument.strip()
        if item not in self.inputs.items:
            raise WidgetError(f"清单中没有“{item}”")
        return item
