"""Day 3 widgets: if/switch banding, for and while loops, and the practice
games and validators."""

import logging
import random
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from widgets.base import Widget, WidgetError, clamp, format_fixed, join_numbers, parse_int
from widgets.timer import CountdownTimer

logger = logging.getLogger(__name__)

TEMPERATURE_RANGE = (-10.0, 45.0)
SUBJECTS = ["数学", "英语", "语文", "物理", "化学"]
SEQUENCE_LIMIT = 50
STEP_RANGE = (1, 10)
COUNTDOWN_RANGE = (5, 30)
GUESS_RANGE = (1, 100)
DEFAULT_SCORES = [78, 85, 92, 67, 88, 94, 76, 89, 91, 82]
PASSING_SCORE = 60
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
FIZZBUZZ_RANGE = (10, 50)


# =============================================================================
# Temperature judgment (if / else if)
# =============================================================================

# (upper bound exclusive, message, tone, snippet); the last band has no bound
TEMPERATURE_BANDS: list[tuple[Optional[float], str, str, str]] = [
    (0.0, "天气严寒，注意保暖！", "info", "if temperature < 0 { /* 严寒 */ }"),
    (10.0, "天气寒冷，多穿衣服", "info", "else if temperature < 10 { /* 寒冷 */ }"),
    (20.0, "天气凉爽，很舒适", "success", "else if temperature < 20 { /* 凉爽 */ }"),
    (30.0, "天气温暖，刚刚好", "warning", "else if temperature < 30 { /* 温暖 */ }"),
    (35.0, "天气炎热，注意防晒", "error", "else if temperature < 35 { /* 炎热 */ }"),
    (None, "天气酷热，尽量待在室内", "error", "else { /* 酷热 */ }"),
]


def _temperature_band(celsius: float) -> tuple[Optional[float], str, str, str]:
    for band in TEMPERATURE_BANDS:
        upper = band[0]
        if upper is None or celsius < upper:
            return band
    raise AssertionError("unreachable: last band is open")


def judge_temperature(celsius: float) -> str:
    return _temperature_band(celsius)[1]


def temperature_condition_code(celsius: float) -> str:
    return _temperature_band(celsius)[3]


class TemperatureJudgeInput(BaseModel):
    temperature: float = 25.0

    @field_validator("temperature")
    @classmethod
    def _clamp_temperature(cls, value: float) -> float:
        return clamp(value, *TEMPERATURE_RANGE)


class TemperatureJudgeResult(BaseModel):
    message: str
    code: str


class TemperatureJudgeWidget(Widget[TemperatureJudgeInput, TemperatureJudgeResult]):
    name = "temperature_judge"
    title = "🌡️ 温度条件判断"
    day = 3
    input_model = TemperatureJudgeInput

    def derive(self) -> TemperatureJudgeResult:
        temperature = self.inputs.temperature
        return TemperatureJudgeResult(
            message=judge_temperature(temperature),
            code=temperature_condition_code(temperature),
        )

    def headline(self) -> tuple[str, str]:
        band = _temperature_band(self.inputs.temperature)
        return band[1], band[2]

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("当前温度", f"{format_fixed(self.inputs.temperature)}°C"),
            ("温度判断结果", result.message),
            ("if-else 逻辑", result.code),
        ]


# =============================================================================
# Grade evaluator (switch over ranges)
# =============================================================================


class GradeLevel(str, Enum):
    EXCELLENT = "优秀"
    GOOD = "良好"
    AVERAGE = "中等"
    PASS = "及格"
    FAIL = "不及格"


class GradeEvaluation(BaseModel):
    letter: str
    level: GradeLevel
    message: str
    code: str


# (lower bound inclusive, letter, level, message); 95...100 is closed
GRADE_BANDS: list[tuple[float, str, GradeLevel, str]] = [
    (95, "A+", GradeLevel.EXCELLENT, "表现卓越，继续保持！"),
    (90, "A", GradeLevel.EXCELLENT, "成绩优异，非常棒！"),
    (85, "B+", GradeLevel.GOOD, "表现不错，再接再厉！"),
    (80, "B", GradeLevel.GOOD, "基础扎实，继续努力！"),
    (75, "C+", GradeLevel.AVERAGE, "还需努力，加油！"),
    (70, "C", GradeLevel.AVERAGE, "需要更加努力学习"),
    (60, "D", GradeLevel.PASS, "刚好及格，要加强练习"),
]
FAILING_GRADE = ("F", GradeLevel.FAIL, "需要重新学习，不要放弃！")

GRADE_TONES = {
    GradeLevel.EXCELLENT: "success",
    GradeLevel.GOOD: "info",
    GradeLevel.AVERAGE: "warning",
    GradeLevel.PASS: "error",
    GradeLevel.FAIL: "error",
}


def evaluate_grade(score: float) -> GradeEvaluation:
    """Band a score; exactly one band matches each score in [0, 100].

    Scores outside [0, 100] match no case and fall through to F.
    """
    upper = None
    for lower, letter, level, message in GRADE_BANDS:
        if lower <= score <= 100:
            if upper is None:
                code = f'case {lower}...100: return "{letter}"'
            else:
                code = f'case {lower}..<{upper}: return "{letter}"'
            return GradeEvaluation(letter=letter, level=level, message=message, code=code)
        upper = lower

    letter, level, message = FAILING_GRADE
    return GradeEvaluation(
        letter=letter, level=level, message=message, code=f'default: return "{letter}"'
    )


def grade_letter(score: float) -> str:
    return evaluate_grade(score).letter


class GradeEvaluatorInput(BaseModel):
    score: float = 85.0
    subject: str = "数学"

    @field_validator("score")
    @classmethod
    def _clamp_score(cls, value: float) -> float:
        return clamp(value, 0.0, 100.0)

    @field_validator("subject")
    @classmethod
    def _check_subject(cls, value: str) -> str:
        if value not in SUBJECTS:
            raise ValueError(f"subject must be one of {', '.join(SUBJECTS)}")
        return value


class GradeEvaluatorWidget(Widget[GradeEvaluatorInput, GradeEvaluation]):
    name = "grade_evaluator"
    title = "📊 成绩等级评定"
    day = 3
    input_model = GradeEvaluatorInput

    def derive(self) -> GradeEvaluation:
        return evaluate_grade(self.inputs.score)

    def headline(self) -> tuple[str, str]:
        result = self.derive()
        return f"{result.letter} {result.level.value}", GRADE_TONES[result.level]

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("科目", self.inputs.subject),
            (f"{self.inputs.subject}成绩", f"{self.inputs.score:.0f}分"),
            ("等级评定", f"{result.letter}（{result.level.value}）"),
            ("评语", result.message),
            ("对应的 switch 代码", result.code),
        ]


# =============================================================================
# Number sequence (for-in loops)
# =============================================================================


class SequenceType(str, Enum):
    ASCENDING = "递增"
    DESCENDING = "递减"
    EVEN = "偶数"
    ODD = "奇数"
    SQUARE = "平方"


def generate_sequence(start: int, end: int, step: int, kind: SequenceType) -> list[int]:
    """Arithmetic sequence over [start, end] with the given step.

    An invalid range (start > end) or step (< 1) yields an empty list.
    """
    if step < 1 or start > end:
        return []
    ascending = list(range(start, end + 1, step))
    if kind == SequenceType.ASCENDING:
        return ascending
    elif kind == SequenceType.DESCENDING:
        return list(range(end, start - 1, -step))
    elif kind == SequenceType.EVEN:
        return [n for n in ascending if n % 2 == 0]
    elif kind == SequenceType.ODD:
        return [n for n in ascending if n % 2 == 1]
    else:
        return [n * n for n in ascending]


def sequence_code(start: int, end: int, kind: SequenceType) -> str:
    if kind == SequenceType.ASCENDING:
        return f"for i in {start}...{end} {{ print(i) }}"
    elif kind == SequenceType.DESCENDING:
        return f"for i in ({start}...{end}).reversed() {{ print(i) }}"
    elif kind == SequenceType.EVEN:
        return f"for i in {start}...{end} where i % 2 == 0 {{ print(i) }}"
    elif kind == SequenceType.ODD:
        return f"for i in {start}...{end} where i % 2 == 1 {{ print(i) }}"
    else:
        return f"for i in {start}...{end} {{ print(i * i) }}"


class NumberSequenceInput(BaseModel):
    start: int = 1
    end: int = 10
    step: int = 1
    kind: SequenceType = SequenceType.ASCENDING

    @field_validator("start", "end")
    @classmethod
    def _clamp_bounds(cls, value: int) -> int:
        return int(clamp(value, 1, SEQUENCE_LIMIT))

    @field_validator("step")
    @classmethod
    def _clamp_step(cls, value: int) -> int:
        return int(clamp(value, *STEP_RANGE))


class NumberSequenceResult(BaseModel):
    values: list[int]
    code: str


class NumberSequenceWidget(Widget[NumberSequenceInput, NumberSequenceResult]):
    name = "number_sequence"
    title = "🔢 for循环数列生成器"
    day = 3
    input_model = NumberSequenceInput

    def derive(self) -> NumberSequenceResult:
        inputs = self.inputs
        return NumberSequenceResult(
            values=generate_sequence(inputs.start, inputs.end, inputs.step, inputs.kind),
            code=sequence_code(inputs.start, inputs.end, inputs.kind),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("序列类型", self.inputs.kind.value),
            ("生成的数列", join_numbers(result.values, " → ") or "（空）"),
            ("数量", str(len(result.values))),
            ("对应的for循环代码", result.code),
        ]


# =============================================================================
# Countdown (while loop)
# =============================================================================


class CountdownInput(BaseModel):
    start_count: int = 10

    @field_validator("start_count")
    @classmethod
    def _clamp_start(cls, value: int) -> int:
        return int(clamp(value, *COUNTDOWN_RANGE))


class CountdownResult(BaseModel):
    count: int
    is_running: bool
    finished: bool


class CountdownWidget(Widget[CountdownInput, CountdownResult]):
    name = "countdown"
    title = "⏱️ while循环倒计时器"
    day = 3
    input_model = CountdownInput
    actions = {
        "start": "开始倒计时",
        "stop": "停止",
        "tick": "手动走一步",
        "reset": "重置",
    }

    def __init__(self, inputs: Optional[CountdownInput] = None, interval: float = 1.0):
        super().__init__(inputs)
        self.timer = CountdownTimer(self.inputs.start_count, interval=interval)

    def update(self, **changes) -> None:
        super().update(**changes)
        # The start count can only change while stopped
        if not self.timer.is_running:
            self.timer.reset(self.inputs.start_count)

    def derive(self) -> CountdownResult:
        count = self.timer.count
        return CountdownResult(
            count=count, is_running=self.timer.is_running, finished=count == 0
        )

    def headline(self) -> Optional[tuple[str, str]]:
        if self.derive().finished:
            return "时间到！🎉", "success"
        return None

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        status = "运行中" if result.is_running else ("时间到！🎉" if result.finished else "已停止")
        return [
            ("倒计时起始数", str(self.inputs.start_count)),
            ("当前计数", str(result.count)),
            ("状态", status),
            (
                "while循环逻辑",
                f"var count = {self.inputs.start_count}\n"
                "while count > 0 {\n    print(count)\n    count -= 1\n}",
            ),
        ]

    def do_start(self, argument: str) -> None:
        self.timer.start()

    def do_stop(self, argument: str) -> None:
        self.timer.stop()

    def do_tick(self, argument: str) -> None:
        self.timer.tick()

    def do_reset(self, argument: str) -> None:
        self.timer.reset(self.inputs.start_count)

    def close(self) -> None:
        self.timer.stop()


# =============================================================================
# Number guessing game
# =============================================================================


class GuessOutcome(str, Enum):
    TOO_LOW = "太小了"
    TOO_HIGH = "太大了"
    CORRECT = "猜中了！🎉"


def judge_guess(guess: int, secret: int) -> GuessOutcome:
    if guess == secret:
        return GuessOutcome.CORRECT
    elif guess < secret:
        return GuessOutcome.TOO_LOW
    else:
        return GuessOutcome.TOO_HIGH


class NumberGuessInput(BaseModel):
    guess: str = ""


class GuessRecord(BaseModel):
    guess: int
    outcome: GuessOutcome


class NumberGuessResult(BaseModel):
    status: str
    attempts: int
    history: list[GuessRecord]


class NumberGuessWidget(Widget[NumberGuessInput, NumberGuessResult]):
    name = "number_guess"
    title = "🎯 数字猜测游戏"
    day = 3
    input_model = NumberGuessInput
    actions = {"guess": "猜测（参数或 guess 字段）", "reset": "重新开始"}

    def __init__(
        self, inputs: Optional[NumberGuessInput] = None, rng: Optional[random.Random] = None
    ):
        super().__init__(inputs)
        self.rng = rng or random.Random()
        self._new_game()

    def _new_game(self) -> None:
        self.secret = self.rng.randint(*GUESS_RANGE)
        self.history: list[GuessRecord] = []
        self.solved = False

    def derive(self) -> NumberGuessResult:
        return NumberGuessResult(
            status="猜中了！" if self.solved else "进行中",
            attempts=len(self.history),
            history=list(self.history),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        rows = [("状态", result.status), ("尝试次数", str(result.attempts))]
        rows.extend(
            (f"{i}. {record.guess}", record.outcome.value)
            for i, record in enumerate(result.history, start=1)
        )
        return rows

    def do_guess(self, argument: str) -> None:
        if self.solved:
            logger.debug("number_guess: game already solved")
            return
        guess = parse_int(argument or self.inputs.guess)
        if guess is None:
            logger.debug("number_guess: ignoring non-numeric guess")
            return
        outcome = judge_guess(guess, self.secret)
        self.history.append(GuessRecord(guess=guess, outcome=outcome))
        self.solved = outcome == GuessOutcome.CORRECT
        self.update(guess="")

    def do_reset(self, argument: str) -> None:
        self._new_game()
        self.update(guess="")


# =============================================================================
# Grade statistics
# =============================================================================


class DistributionBucket(str, Enum):
    EXCELLENT = "优秀(90+)"
    GOOD = "良好(80-89)"
    AVERAGE = "中等(70-79)"
    PASS = "及格(60-69)"
    FAIL = "不及格(<60)"


class ScoreStatistics(BaseModel):
    average: float
    highest: int
    lowest: int
    passed: int
    failed: int
    distribution: dict[DistributionBucket, int]


def distribution_bucket(score: int) -> DistributionBucket:
    if score >= 90:
        return DistributionBucket.EXCELLENT
    elif score >= 80:
        return DistributionBucket.GOOD
    elif score >= 70:
        return DistributionBucket.AVERAGE
    elif score >= PASSING_SCORE:
        return DistributionBucket.PASS
    else:
        return DistributionBucket.FAIL


def compute_statistics(scores: list[int]) -> ScoreStatistics:
    """Aggregate a list of scores; an empty list gives all zeros.

    The distribution counts always sum to len(scores).
    """
    distribution = {bucket: 0 for bucket in DistributionBucket}
    for score in scores:
        distribution[distribution_bucket(score)] += 1

    if not scores:
        return ScoreStatistics(
            average=0.0, highest=0, lowest=0, passed=0, failed=0, distribution=distribution
        )

    passed = sum(1 for score in scores if score >= PASSING_SCORE)
    return ScoreStatistics(
        average=sum(scores) / len(scores),
        highest=max(scores),
        lowest=min(scores),
        passed=passed,
        failed=len(scores) - passed,
        distribution=distribution,
    )


class GradeStatisticsInput(BaseModel):
    scores: list[int] = Field(default_factory=lambda: list(DEFAULT_SCORES))


class GradeStatisticsWidget(Widget[GradeStatisticsInput, ScoreStatistics]):
    name = "grade_statistics"
    title = "📈 成绩统计分析器"
    day = 3
    input_model = GradeStatisticsInput
    actions = {"add": "添加新成绩(0-100)"}

    def derive(self) -> ScoreStatistics:
        return compute_statistics(self.inputs.scores)

    def display_rows(self) -> list[tuple[str, str]]:
        stats = self.derive()
        rows = [
            (f"班级成绩（共{len(self.inputs.scores)}人）", join_numbers(self.inputs.scores)),
            ("平均分", format_fixed(stats.average)),
            ("最高分", str(stats.highest)),
            ("最低分", str(stats.lowest)),
            ("及格人数", str(stats.passed)),
            ("不及格人数", str(stats.failed)),
        ]
        rows.extend((bucket.value, f"{count}人") for bucket, count in stats.distribution.items())
        return rows

    def do_add(self, argument: str) -> None:
        score = parse_int(argument.strip())
        if score is None or not 0 <= score <= 100:
            raise WidgetError("请输入0-100之间的整数成绩")
        self.update(scores=[*self.inputs.scores, score])


# =============================================================================
# Password strength
# =============================================================================


class PasswordStrength(str, Enum):
    WEAK = "弱"
    MEDIUM = "中等"
    STRONG = "强"
    VERY_STRONG = "很强"


STRENGTH_TONES = {
    PasswordStrength.WEAK: "error",
    PasswordStrength.MEDIUM: "warning",
    PasswordStrength.STRONG: "success",
    PasswordStrength.VERY_STRONG: "info",
}


def check_password_rules(password: str, confirmation: str = "") -> list[tuple[str, bool]]:
    """Evaluate each rule in display order.

    The confirmation rule is only present once a confirmation is entered.
    """
    rules = [
        ("长度至少8位", len(password) >= 8),
        ("包含数字", any(c.isdecimal() for c in password)),
        ("包含小写字母", any(c.islower() for c in password)),
        ("包含大写字母", any(c.isupper() for c in password)),
        ("包含特殊字符", any(c in SPECIAL_CHARACTERS for c in password)),
    ]
    if confirmation:
        rules.append(("确认密码匹配", password == confirmation))
    return rules


def classify_strength(passed_rules: int) -> PasswordStrength:
    if passed_rules <= 2:
        return PasswordStrength.WEAK
    elif passed_rules <= 4:
        return PasswordStrength.MEDIUM
    elif passed_rules == 5:
        return PasswordStrength.STRONG
    else:
        return PasswordStrength.VERY_STRONG


class PasswordInput(BaseModel):
    password: str = ""
    confirmation: str = ""


class PasswordResult(BaseModel):
    rules: list[tuple[str, bool]]
    strength: PasswordStrength


class PasswordWidget(Widget[PasswordInput, PasswordResult]):
    name = "password"
    title = "🔐 密码强度验证器"
    day = 3
    input_model = PasswordInput

    def derive(self) -> PasswordResult:
        rules = check_password_rules(self.inputs.password, self.inputs.confirmation)
        passed = sum(1 for _, ok in rules if ok)
        return PasswordResult(rules=rules, strength=classify_strength(passed))

    def headline(self) -> Optional[tuple[str, str]]:
        if not self.inputs.password:
            return None
        strength = self.derive().strength
        return f"密码强度：{strength.value}", STRENGTH_TONES[strength]

    def display_rows(self) -> list[tuple[str, str]]:
        return [(rule, "✅" if ok else "❌") for rule, ok in self.derive().rules]


# =============================================================================
# FizzBuzz
# =============================================================================


def fizzbuzz(max_number: int) -> list[str]:
    """FizzBuzz over 1..max_number; 15 is checked before 3 and 5."""
    results = []
    for i in range(1, max_number + 1):
        if i % 15 == 0:
            results.append("FizzBuzz")
        elif i % 3 == 0:
            results.append("Fizz")
        elif i % 5 == 0:
            results.append("Buzz")
        else:
            results.append(str(i))
    return results


class FizzBuzzInput(BaseModel):
    max_number: int = 20

    @field_validator("max_number")
    @classmethod
    def _clamp_max(cls, value: int) -> int:
        return int(clamp(value, *FIZZBUZZ_RANGE))


class FizzBuzzResult(BaseModel):
    results: list[str]


class FizzBuzzWidget(Widget[FizzBuzzInput, FizzBuzzResult]):
    name = "fizzbuzz"
    title = "🎲 FizzBuzz 编程游戏"
    day = 3
    input_model = FizzBuzzInput

    def derive(self) -> FizzBuzzResult:
        return FizzBuzzResult(results=fizzbuzz(self.inputs.max_number))

    def display_rows(self) -> list[tuple[str, str]]:
        return [
            ("游戏范围", f"1 到 {self.inputs.max_number}"),
            ("FizzBuzz 结果", ", ".join(self.derive().results)),
        ]
