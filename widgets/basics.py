"""Day 1 widgets: type conversion, string interpolation and the practice
calculators (BMI, personal info, temperature conversion)."""

import math
from enum import Enum

from pydantic import BaseModel, field_validator

from widgets.base import (
    CONVERSION_FAILED,
    Widget,
    clamp,
    format_fixed,
    parse_float,
    parse_int,
)

# Slider and stepper ranges of the input controls
HEIGHT_RANGE_CM = (140.0, 220.0)
WEIGHT_RANGE_KG = (40.0, 150.0)
CELSIUS_RANGE = (-40.0, 100.0)
AGE_RANGE = (1, 100)


# =============================================================================
# Pure derivations
# =============================================================================


class BMICategory(str, Enum):
    UNDERWEIGHT = "偏瘦"
    NORMAL = "正常"
    OVERWEIGHT = "偏胖"
    OBESE = "肥胖"


BMI_TONES = {
    BMICategory.UNDERWEIGHT: "info",
    BMICategory.NORMAL: "success",
    BMICategory.OVERWEIGHT: "warning",
    BMICategory.OBESE: "error",
}


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """BMI = weight_kg / (height_cm / 100)^2; infinite for a non-positive height."""
    if height_cm <= 0:
        return math.inf
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_bmi(bmi: float) -> BMICategory:
    """Each band includes its lower threshold: 18.5 and 25.0 start new bands."""
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    elif bmi < 25.0:
        return BMICategory.NORMAL
    elif bmi < 30.0:
        return BMICategory.OVERWEIGHT
    else:
        return BMICategory.OBESE


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + 273.15


def interpolate_intro(name: str, age: int) -> str:
    return f"我的名字是 {name}，今年 {age} 岁"


def format_personal_info(
    full_name: str, age: int, city: str, is_student: bool
) -> str:
    identity = "学生" if is_student else "职场人士"
    return (
        f"姓名：{full_name}\n"
        f"年龄：{age} 岁\n"
        f"城市：{city}\n"
        f"身份：{identity}\n"
        "状态：正在学习 Swift 🚀"
    )


# =============================================================================
# Type converter
# =============================================================================


class TypeConverterInput(BaseModel):
    text: str = "42"


class TypeConverterResult(BaseModel):
    as_int: int | None
    as_float: float | None
    as_string: str


class TypeConverterWidget(Widget[TypeConverterInput, TypeConverterResult]):
    name = "type_converter"
    title = "🧪 试试类型转换"
    day = 1
    input_model = TypeConverterInput

    def derive(self) -> TypeConverterResult:
        text = self.inputs.text
        return TypeConverterResult(
            as_int=parse_int(text),
            as_float=parse_float(text),
            as_string=text,
        )

    def display_rows(self) -> list[tuple[str, str]]:
        if not self.inputs.text:
            return []
        result = self.derive()
        return [
            ("转换为 Int", CONVERSION_FAILED if result.as_int is None else str(result.as_int)),
            (
                "转换为 Double",
                CONVERSION_FAILED if result.as_float is None else repr(result.as_float),
            ),
            ("转换为 String", f'"{result.as_string}"'),
        ]


# =============================================================================
# String interpolation
# =============================================================================


class InterpolationInput(BaseModel):
    name: str = "Swift学习者"
    age: int = 20

    @field_validator("age")
    @classmethod
    def _clamp_age(cls, value: int) -> int:
        return int(clamp(value, *AGE_RANGE))


class InterpolationResult(BaseModel):
    text: str


class StringInterpolationWidget(Widget[InterpolationInput, InterpolationResult]):
    name = "string_interpolation"
    title = "🎮 体验字符串插值"
    day = 1
    input_model = InterpolationInput

    def derive(self) -> InterpolationResult:
        return InterpolationResult(text=interpolate_intro(self.inputs.name, self.inputs.age))

    def display_rows(self) -> list[tuple[str, str]]:
        return [("字符串插值结果", self.derive().text)]


# =============================================================================
# BMI calculator
# =============================================================================


class BMIInput(BaseModel):
    height_cm: float = 175.0
    weight_kg: float = 70.0

    @field_validator("height_cm")
    @classmethod
    def _clamp_height(cls, value: float) -> float:
        return clamp(value, *HEIGHT_RANGE_CM)

    @field_validator("weight_kg")
    @classmethod
    def _clamp_weight(cls, value: float) -> float:
        return clamp(value, *WEIGHT_RANGE_KG)


class BMIResult(BaseModel):
    bmi: float
    category: BMICategory


class BMIWidget(Widget[BMIInput, BMIResult]):
    name = "bmi"
    title = "💪 BMI 健康计算器"
    day = 1
    input_model = BMIInput

    def derive(self) -> BMIResult:
        bmi = calculate_bmi(self.inputs.height_cm, self.inputs.weight_kg)
        return BMIResult(bmi=bmi, category=classify_bmi(bmi))

    def headline(self) -> tuple[str, str]:
        category = self.derive().category
        return category.value, BMI_TONES[category]

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("身高", f"{int(self.inputs.height_cm)} cm"),
            ("体重", f"{format_fixed(self.inputs.weight_kg)} kg"),
            ("BMI 指数", format_fixed(result.bmi)),
            ("健康状况", result.category.value),
        ]


# =============================================================================
# Personal info generator
# =============================================================================


class PersonalInfoInput(BaseModel):
    first_name: str = "张"
    last_name: str = "三"
    age: int = 20
    city: str = "北京"
    is_student: bool = True

    @field_validator("age")
    @classmethod
    def _clamp_age(cls, value: int) -> int:
        return int(clamp(value, *AGE_RANGE))


class PersonalInfoResult(BaseModel):
    full_name: str
    info: str


class PersonalInfoWidget(Widget[PersonalInfoInput, PersonalInfoResult]):
    name = "personal_info"
    title = "👤 个人信息生成器"
    day = 1
    input_model = PersonalInfoInput

    def derive(self) -> PersonalInfoResult:
        # Chinese order: family name first
        full_name = self.inputs.first_name + self.inputs.last_name
        return PersonalInfoResult(
            full_name=full_name,
            info=format_personal_info(
                full_name, self.inputs.age, self.inputs.city, self.inputs.is_student
            ),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        return [("生成的个人信息", self.derive().info)]


# =============================================================================
# Temperature converter
# =============================================================================


class TemperatureInput(BaseModel):
    celsius: float = 25.0

    @field_validator("celsius")
    @classmethod
    def _clamp_celsius(cls, value: float) -> float:
        return clamp(value, *CELSIUS_RANGE)


class TemperatureResult(BaseModel):
    fahrenheit: float
    kelvin: float


class TemperatureConverterWidget(Widget[TemperatureInput, TemperatureResult]):
    name = "temperature_converter"
    title = "🌡️ 温度转换器"
    day = 1
    input_model = TemperatureInput

    def derive(self) -> TemperatureResult:
        celsius = self.inputs.celsius
        return TemperatureResult(
            fahrenheit=celsius_to_fahrenheit(celsius),
            kelvin=celsius_to_kelvin(celsius),
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("摄氏度", f"{format_fixed(self.inputs.celsius)}°C"),
            ("华氏度", f"{format_fixed(result.fahrenheit)} °F"),
            ("开尔文", f"{format_fixed(result.kelvin)} K"),
            ("转换公式", "°F = °C × 9/5 + 32\nK = °C + 273.15"),
        ]
