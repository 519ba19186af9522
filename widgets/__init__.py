"""Derivation widgets for the lesson cards, grouped by lesson day."""

from widgets.base import Widget, WidgetError
from widgets.basics import (
    BMIWidget,
    PersonalInfoWidget,
    StringInterpolationWidget,
    TemperatureConverterWidget,
    TypeConverterWidget,
)
from widgets.collection_types import (
    ArrayChainWidget,
    ArrayOperationsWidget,
    ClosureWidget,
    CollectionComparisonWidget,
    GradeManagerWidget,
    ShoppingListWidget,
)
from widgets.control_flow import (
    CountdownWidget,
    FizzBuzzWidget,
    GradeEvaluatorWidget,
    GradeStatisticsWidget,
    NumberGuessWidget,
    NumberSequenceWidget,
    PasswordWidget,
    TemperatureJudgeWidget,
)
from widgets.objects import BankAccountWidget, CounterWidget, PersonWidget, RectangleWidget
from widgets.optionals import (
    ApiCallSimulatorWidget,
    DataPipelineWidget,
    ErrorSimulatorWidget,
    FileOperationsWidget,
    OptionalBindingWidget,
    OptionalExplorerWidget,
    RegistrationFormWidget,
    ResultPracticeWidget,
    SafeUnwrappingWidget,
)

_WIDGET_CLASSES: list[type[Widget]] = [
    # Day 1
    TypeConverterWidget,
    StringInterpolationWidget,
    BMIWidget,
    PersonalInfoWidget,
    TemperatureConverterWidget,
    # Day 2
    ClosureWidget,
    ArrayOperationsWidget,
    CollectionComparisonWidget,
    GradeManagerWidget,
    ArrayChainWidget,
    ShoppingListWidget,
    # Day 3
    TemperatureJudgeWidget,
    GradeEvaluatorWidget,
    NumberSequenceWidget,
    CountdownWidget,
    NumberGuessWidget,
    GradeStatisticsWidget,
    PasswordWidget,
    FizzBuzzWidget,
    # Day 4
    OptionalExplorerWidget,
    OptionalBindingWidget,
    SafeUnwrappingWidget,
    ErrorSimulatorWidget,
    ResultPracticeWidget,
    RegistrationFormWidget,
    DataPipelineWidget,
    FileOperationsWidget,
    ApiCallSimulatorWidget,
    # Day 5
    PersonWidget,
    RectangleWidget,
    BankAccountWidget,
    CounterWidget,
]

# Registry of widget classes by name
WIDGETS: dict[str, type[Widget]] = {cls.name: cls for cls in _WIDGET_CLASSES}


def get_widget(name: str) -> type[Widget]:
    """Get a widget class by name.

    Raises:
        KeyError: If no widget has that name.
    """
    if name not in WIDGETS:
        raise KeyError(f"Unknown widget '{name}'. Known widgets: {', '.join(WIDGETS)}")
    return WIDGETS[name]


def create_widget(name: str, countdown_interval: float = 1.0) -> Widget:
    """Instantiate a widget by name with its default inputs."""
    widget_cls = get_widget(name)
    if issubclass(widget_cls, CountdownWidget):
        return widget_cls(interval=countdown_interval)
    return widget_cls()


__all__ = [
    "WIDGETS",
    "Widget",
    "WidgetError",
    "create_widget",
    "get_widget",
]
