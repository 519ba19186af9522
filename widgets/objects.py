"""Day 5 widgets: classes, structs, property observers and methods."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from widgets.base import Widget, WidgetError, clamp, parse_float, parse_int


# =============================================================================
# Domain types shown in the lesson
# =============================================================================


class Person:
    """Reference type: copies share the same instance."""

    def __init__(self, name: str, age: int):
        self.name = name
        self.age = age

    def introduce(self) -> str:
        return f"我是 {self.name}，今年 {self.age} 岁"


class Rectangle(BaseModel):
    """Value type: immutable, compared by value."""

    model_config = {"frozen": True}

    width: float = Field(ge=0)
    height: float = Field(ge=0)

    def area(self) -> float:
        return self.width * self.height

    def perimeter(self) -> float:
        return 2 * (self.width + self.height)


class BankAccount:
    """Balance with willSet/didSet style observers.

    Every balance change records two lines in `history`: one before the
    new value is stored and one after.
    """

    def __init__(self, balance: float = 0.0):
        self._balance = balance
        self.history: list[str] = []

    @property
    def balance(self) -> float:
        return self._balance

    @balance.setter
    def balance(self, new_value: float) -> None:
        self.history.append(f"余额即将变为 {new_value}")
        old_value = self._balance
        self._balance = new_value
        self.history.append(f"余额已更新：{old_value} → {new_value}")

    @property
    def formatted_balance(self) -> str:
        return f"¥{self._balance:.2f}"

    def deposit(self, amount: float) -> None:
        if amount <= 0:
            raise ValueError(f"deposit amount must be positive, got {amount}")
        self.balance = self._balance + amount

    def withdraw(self, amount: float) -> None:
        if amount <= 0:
            raise ValueError(f"withdraw amount must be positive, got {amount}")
        if amount > self._balance:
            raise ValueError("余额不足")
        self.balance = self._balance - amount


class Counter:
    def __init__(self, count: int = 0):
        self.count = count

    def increment(self, by: int = 1) -> None:
        self.count += by

    def reset(self) -> None:
        self.count = 0

    @staticmethod
    def description() -> str:
        return "这是一个计数器"


# =============================================================================
# Person
# =============================================================================


class PersonInput(BaseModel):
    name: str = "小明"
    age: int = 25

    @field_validator("age")
    @classmethod
    def _clamp_age(cls, value: int) -> int:
        return int(clamp(value, 0, 150))


class PersonResult(BaseModel):
    introduction: str


class PersonWidget(Widget[PersonInput, PersonResult]):
    name = "person"
    title = "👤 类实例"
    day = 5
    input_model = PersonInput

    def derive(self) -> PersonResult:
        person = Person(self.inputs.name, self.inputs.age)
        return PersonResult(introduction=person.introduce())

    def display_rows(self) -> list[tuple[str, str]]:
        return [("person.introduce()", self.derive().introduction)]


# =============================================================================
# Rectangle
# =============================================================================


class RectangleInput(BaseModel):
    width: float = 10.0
    height: float = 5.0

    @field_validator("width", "height")
    @classmethod
    def _not_negative(cls, value: float) -> float:
        return max(0.0, value)


class RectangleResult(BaseModel):
    area: float
    perimeter: float


class RectangleWidget(Widget[RectangleInput, RectangleResult]):
    name = "rectangle"
    title = "📐 结构体实例"
    day = 5
    input_model = RectangleInput

    def derive(self) -> RectangleResult:
        rect = Rectangle(width=self.inputs.width, height=self.inputs.height)
        return RectangleResult(area=rect.area(), perimeter=rect.perimeter())

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [("面积", repr(result.area)), ("周长", repr(result.perimeter))]


# =============================================================================
# Bank account
# =============================================================================


class BankAccountInput(BaseModel):
    amount: float = 100.0


class BankAccountResult(BaseModel):
    balance: float
    formatted: str
    history: list[str]


class BankAccountWidget(Widget[BankAccountInput, BankAccountResult]):
    name = "bank_account"
    title = "🏦 属性观察器"
    day = 5
    input_model = BankAccountInput
    actions = {"deposit": "存款（参数或 amount）", "withdraw": "取款（参数或 amount）"}

    def __init__(self, inputs: Optional[BankAccountInput] = None):
        super().__init__(inputs)
        self.account = BankAccount()

    def derive(self) -> BankAccountResult:
        return BankAccountResult(
            balance=self.account.balance,
            formatted=self.account.formatted_balance,
            history=list(self.account.history),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        rows = [("余额", result.formatted)]
        if result.history:
            rows.append(("属性观察器输出", "\n".join(result.history[-4:])))
        return rows

    def _amount(self, argument: str) -> float:
        if not argument:
            return self.inputs.amount
        amount = parse_float(argument.strip())
        if amount is None:
            raise WidgetError(f"无效金额：{argument}")
        return amount

    def do_deposit(self, argument: str) -> None:
        try:
            self.account.deposit(self._amount(argument))
        except ValueError as e:
            raise WidgetError(str(e)) from e

    def do_withdraw(self, argument: str) -> None:
        try:
            self.account.withdraw(self._amount(argument))
        except ValueError as e:
            raise WidgetError(str(e)) from e


# =============================================================================
# Counter
# =============================================================================


class CounterInput(BaseModel):
    step: int = 5


class CounterResult(BaseModel):
    count: int
    description: str


class CounterWidget(Widget[CounterInput, CounterResult]):
    name = "counter"
    title = "🔢 方法调用"
    day = 5
    input_model = CounterInput
    actions = {
        "increment": "count += 1",
        "increment_by": "count += 参数（或 step）",
        "reset": "归零",
    }

    def __init__(self, inputs: Optional[CounterInput] = None):
        super().__init__(inputs)
        self.counter = Counter()

    def derive(self) -> CounterResult:
        return CounterResult(count=self.counter.count, description=Counter.description())

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("count", str(result.count)),
            ("Counter.description()", result.description),
        ]

    def do_increment(self, argument: str) -> None:
        self.counter.increment()

    def do_increment_by(self, argument: str) -> None:
        if not argument:
            self.counter.increment(by=self.inputs.step)
            return
        amount = parse_int(argument.strip())
        if amount is None:
            raise WidgetError(f"无效步长：{argument}")
        self.counter.increment(by=amount)

    def do_reset(self, argument: str) -> None:
        self.counter.reset()
