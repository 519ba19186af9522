"""Abstract base class and shared utilities for derivation widgets."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar, get_origin

from pydantic import BaseModel

logger = logging.getLogger(__name__)

I = TypeVar("I", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

CONVERSION_FAILED = "转换失败 ❌"


class WidgetError(Exception):
    """Raised for a request a widget cannot perform (unknown action or field)."""


class Widget(ABC, Generic[I, R]):
    """Abstract base class for lesson widgets.

    A widget owns a pydantic input model and recomputes its derived result
    from the current inputs on every call; nothing is cached. Subclasses
    provide:
    - derive(): the pure derivation over the current inputs
    - display_rows(): (label, value) rows for the UI panel
    - optionally `actions` plus matching `do_<action>(argument)` methods
      for widgets with buttons (add, reset, start, ...)

    To create a new widget:
    1. Define an input model (defaults = the lesson's initial values)
    2. Subclass Widget[YourInput, YourResult] and set the class attributes
    3. Register the class in WIDGETS in widgets/__init__.py
    """

    name: ClassVar[str]
    title: ClassVar[str]
    day: ClassVar[int]
    input_model: ClassVar[type[BaseModel]]
    actions: ClassVar[dict[str, str]] = {}  # action name -> description

    def __init__(self, inputs: I | None = None):
        self.inputs: I = inputs if inputs is not None else self.input_model()

    @abstractmethod
    def derive(self) -> R:
        """Compute the derived result from the current inputs."""
        ...

    @abstractmethod
    def display_rows(self) -> list[tuple[str, str]]:
        """Return (label, value) rows describing the current result."""
        ...

    def headline(self) -> tuple[str, str] | None:
        """Optional (message, tone) shown above the rows.

        Tone is one of "info", "success", "warning", "error".
        """
        return None

    def close(self) -> None:
        """Release resources held by the widget when its card leaves the screen."""

    @property
    def editable_fields(self) -> list[str]:
        """Input fields a user can set directly as text."""
        return [
            name
            for name, field in self.input_model.model_fields.items()
            if get_origin(field.annotation) is not dict
        ]

    def update(self, **changes: Any) -> None:
        """Replace some inputs and re-validate the whole input model.

        Raises:
            pydantic.ValidationError: If a value has the wrong type.
        """
        data = self.inputs.model_dump()
        data.update(changes)
        self.inputs = self.input_model.model_validate(data)
        logger.debug("%s inputs updated: %s", self.name, changes)

    def update_from_text(self, field_name: str, raw: str) -> None:
        """Set one input from user-typed text.

        List fields take comma-separated items; other fields rely on
        pydantic's coercion of the string.
        """
        field = self.input_model.model_fields.get(field_name)
        if field is None or field_name not in self.editable_fields:
            raise WidgetError(
                f"Widget '{self.name}' has no editable field '{field_name}'. "
                f"Fields: {', '.join(self.editable_fields)}"
            )

        value: Any = raw
        if get_origin(field.annotation) is list:
            value = [part.strip() for part in raw.split(",") if part.strip()]
        self.update(**{field_name: value})

    def perform(self, action: str, argument: str = "") -> None:
        """Run a named action, such as a button press."""
        handler = getattr(self, f"do_{action}", None) if action in self.actions else None
        if handler is None:
            known = ", ".join(self.actions) or "none"
            raise WidgetError(
                f"Widget '{self.name}' has no action '{action}' (actions: {known})"
            )
        logger.debug("%s action %s(%r)", self.name, action, argument)
        handler(argument)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def parse_int(text: str) -> int | None:
    """Parse a whole string as a base-10 integer, or None.

    Stricter than int(): surrounding whitespace, underscores and
    non-ASCII digits are all rejected.
    """
    if _INT_PATTERN.fullmatch(text):
        return int(text)
    return None


def parse_float(text: str) -> float | None:
    """Parse a whole string as a decimal floating point number, or None."""
    if _FLOAT_PATTERN.fullmatch(text):
        return float(text)
    return None


def format_fixed(value: float, digits: int = 1) -> str:
    """Format with a fixed number of decimals, e.g. 22.857 -> "22.9"."""
    return f"{value:.{digits}f}"


def join_numbers(values: list[int], separator: str = ", ") -> str:
    return separator.join(str(v) for v in values)
