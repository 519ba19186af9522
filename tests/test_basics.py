"""Tests for the Day 1 widgets."""

import math

import pytest
from pydantic import ValidationError

from widgets import WidgetError
from widgets.base import CONVERSION_FAILED
from widgets.basics import (
    BMICategory,
    BMIWidget,
    PersonalInfoWidget,
    StringInterpolationWidget,
    TemperatureConverterWidget,
    TypeConverterWidget,
    calculate_bmi,
    celsius_to_fahrenheit,
    celsius_to_kelvin,
    classify_bmi,
    fahrenheit_to_celsius,
)


class TestTypeConverter:
    """Tests for integer/double/string conversion of typed text."""

    def test_default_input(self):
        widget = TypeConverterWidget()
        result = widget.derive()
        assert result.as_int == 42
        assert result.as_float == 42.0
        assert widget.display_rows() == [
            ("转换为 Int", "42"),
            ("转换为 Double", "42.0"),
            ("转换为 String", '"42"'),
        ]

    def test_decimal_text(self):
        widget = TypeConverterWidget()
        widget.update_from_text("text", "3.14")
        result = widget.derive()
        assert result.as_int is None
        assert result.as_float == pytest.approx(3.14)

    def test_non_numeric_text(self):
        widget = TypeConverterWidget()
        widget.update(text="abc")
        rows = dict(widget.display_rows())
        assert rows["转换为 Int"] == CONVERSION_FAILED
        assert rows["转换为 Double"] == CONVERSION_FAILED
        assert rows["转换为 String"] == '"abc"'

    def test_surrounding_whitespace_fails_int(self):
        widget = TypeConverterWidget()
        widget.update(text=" 42")
        assert widget.derive().as_int is None

    def test_empty_text_shows_nothing(self):
        widget = TypeConverterWidget()
        widget.update(text="")
        assert widget.display_rows() == []


class TestStringInterpolation:
    def test_default(self):
        widget = StringInterpolationWidget()
        assert widget.derive().text == "我的名字是 Swift学习者，今年 20 岁"

    def test_age_clamped(self):
        widget = StringInterpolationWidget()
        widget.update(age=150)
        assert widget.inputs.age == 100
        widget.update(age=0)
        assert widget.inputs.age == 1


class TestBMI:
    """Tests for the BMI calculator and its bands."""

    def test_default_is_normal(self):
        widget = BMIWidget()
        result = widget.derive()
        assert result.bmi == pytest.approx(22.857, abs=1e-3)
        assert result.category == BMICategory.NORMAL
        assert dict(widget.display_rows())["BMI 指数"] == "22.9"
        assert widget.headline() == ("正常", "success")

    @pytest.mark.parametrize(
        "bmi,category",
        [
            (18.49, BMICategory.UNDERWEIGHT),
            (18.5, BMICategory.NORMAL),
            (24.99, BMICategory.NORMAL),
            (25.0, BMICategory.OVERWEIGHT),
            (29.99, BMICategory.OVERWEIGHT),
            (30.0, BMICategory.OBESE),
        ],
    )
    def test_band_boundaries(self, bmi, category):
        """Each band includes its lower threshold."""
        assert classify_bmi(bmi) == category

    def test_zero_height_is_obese(self):
        bmi = calculate_bmi(0, 70)
        assert math.isinf(bmi)
        assert classify_bmi(bmi) == BMICategory.OBESE

    def test_inputs_clamped_to_slider_range(self):
        widget = BMIWidget()
        widget.update(height_cm=300, weight_kg=10)
        assert widget.inputs.height_cm == 220
        assert widget.inputs.weight_kg == 40

    def test_non_numeric_height_rejected(self):
        widget = BMIWidget()
        with pytest.raises(ValidationError):
            widget.update_from_text("height_cm", "tall")
        assert widget.inputs.height_cm == 175

    def test_obese_headline(self):
        widget = BMIWidget()
        widget.update(height_cm=150, weight_kg=100)
        assert widget.headline() == ("肥胖", "error")


class TestPersonalInfo:
    def test_default_info(self):
        result = PersonalInfoWidget().derive()
        assert result.full_name == "张三"
        assert result.info.splitlines() == [
            "姓名：张三",
            "年龄：20 岁",
            "城市：北京",
            "身份：学生",
            "状态：正在学习 Swift 🚀",
        ]

    def test_not_a_student(self):
        widget = PersonalInfoWidget()
        widget.update_from_text("is_student", "false")
        assert "身份：职场人士" in widget.derive().info


class TestTemperatureConverter:
    """Tests for Celsius/Fahrenheit/Kelvin conversion."""

    def test_default_rows(self):
        rows = dict(TemperatureConverterWidget().display_rows())
        assert rows["摄氏度"] == "25.0°C"
        assert rows["华氏度"] == "77.0 °F"
        assert rows["开尔文"].startswith("298.") and rows["开尔文"].endswith(" K")

    @pytest.mark.parametrize("celsius", [-40.0, 0.0, 37.0, 100.0])
    def test_round_trip(self, celsius):
        """F -> C inverts C -> F."""
        assert fahrenheit_to_celsius(celsius_to_fahrenheit(celsius)) == pytest.approx(celsius)

    def test_fixed_points(self):
        assert celsius_to_fahrenheit(-40) == -40
        assert celsius_to_fahrenheit(100) == 212
        assert celsius_to_kelvin(0) == pytest.approx(273.15)

    def test_celsius_clamped(self):
        widget = TemperatureConverterWidget()
        widget.update(celsius=500)
        assert widget.inputs.celsius == 100


class TestUnknownField:
    def test_update_from_text_unknown_field(self):
        with pytest.raises(WidgetError):
            BMIWidget().update_from_text("mass", "70")

    def test_widget_without_actions(self):
        with pytest.raises(WidgetError):
            BMIWidget().perform("reset")
