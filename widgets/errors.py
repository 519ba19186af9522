"""Typed failures for the widgets that model explicit errors.

Each error carries the message shown inline by its widget.
"""


class CalculationError(Exception):
    """Base class for failures of the division practice widget."""

    message = "计算错误"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class DivisionByZeroError(CalculationError):
    message = "除数不能为零"


class InvalidInputError(CalculationError):
    message = "输入格式无效"


class PipelineError(Exception):
    """Base class for failures of the data transform pipeline."""

    message = "数据处理失败"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class EmptyInputError(PipelineError):
    message = "输入为空"


class NoValidNumbersError(PipelineError):
    message = "没有有效的数字"


class NoPositiveNumbersError(PipelineError):
    message = "没有正数"
