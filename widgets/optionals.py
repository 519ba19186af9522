"""Day 4 widgets: optionals, unwrapping, and error handling with typed
failures."""

import logging
import threading
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from widgets.base import Widget, clamp, format_fixed, join_numbers, parse_float, parse_int
from widgets.errors import (
    CalculationError,
    DivisionByZeroError,
    EmptyInputError,
    InvalidInputError,
    NoPositiveNumbersError,
    NoValidNumbersError,
    PipelineError,
)
from widgets.timer import RepeatingTask

logger = logging.getLogger(__name__)

NIL_DEFAULT = "默认值"
MIN_PHONE_LENGTH = 11
MIN_BOUND_FIELDS = 2


def as_optional(text: str, is_nil: bool = False) -> Optional[str]:
    """Empty text counts as nil, as does an explicit nil flag."""
    if is_nil or not text:
        return None
    return text


def describe_optional(value: Optional[str]) -> str:
    return "nil" if value is None else f'Optional("{value}")'


# =============================================================================
# Optional explorer
# =============================================================================


class OptionalOperation(str, Enum):
    CHECK = "检查值"
    FORCE_UNWRAP = "强制解包"
    BIND = "可选绑定"
    NIL_COALESCE = "nil合并"


def explore_optional(value: Optional[str], operation: OptionalOperation) -> tuple[str, bool]:
    """Message and success flag for one operation on an optional string."""
    if operation == OptionalOperation.CHECK:
        return (f'值存在: "{value}"', True) if value is not None else ("值为 nil", False)
    elif operation == OptionalOperation.FORCE_UNWRAP:
        if value is not None:
            return f'强制解包成功: "{value}"', True
        return "⚠️ 强制解包会崩溃！", False
    elif operation == OptionalOperation.BIND:
        if value is not None:
            return f'if let 绑定成功: "{value}"', True
        return "if let 绑定失败，执行 else 分支", False
    else:
        result = value if value is not None else NIL_DEFAULT
        return f'nil合并结果: "{result}"', True


class OptionalExplorerInput(BaseModel):
    text: str = "Swift"
    is_nil: bool = False
    operation: OptionalOperation = OptionalOperation.CHECK


class OptionalExplorerResult(BaseModel):
    state: str
    message: str
    success: bool


class OptionalExplorerWidget(Widget[OptionalExplorerInput, OptionalExplorerResult]):
    name = "optional_explorer"
    title = "❓ 可选类型解析器"
    day = 4
    input_model = OptionalExplorerInput

    def derive(self) -> OptionalExplorerResult:
        value = as_optional(self.inputs.text, self.inputs.is_nil)
        message, success = explore_optional(value, self.inputs.operation)
        return OptionalExplorerResult(
            state=describe_optional(value), message=message, success=success
        )

    def headline(self) -> tuple[str, str]:
        result = self.derive()
        return result.message, "success" if result.success else "error"

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("String?", result.state),
            ("操作", self.inputs.operation.value),
            ("操作结果", result.message),
        ]


# =============================================================================
# Optional binding practice
# =============================================================================


class FieldBinding(BaseModel):
    field: str
    success: bool
    value: str


def bind_profile(name: str, age: str, email: str, phone: str) -> list[FieldBinding]:
    """Attempt to bind each profile field, in display order."""
    bindings = []

    if name:
        bindings.append(FieldBinding(field="姓名", success=True, value=name))
    else:
        bindings.append(FieldBinding(field="姓名", success=False, value="绑定失败"))

    age_value = parse_int(age)
    if age_value is not None:
        bindings.append(FieldBinding(field="年龄", success=True, value=f"{age_value}岁"))
    else:
        bindings.append(FieldBinding(field="年龄", success=False, value="无效年龄"))

    if email and "@" in email:
        bindings.append(FieldBinding(field="邮箱", success=True, value=email))
    else:
        bindings.append(
            FieldBinding(field="邮箱", success=False, value="格式错误" if email else "未填写")
        )

    if len(phone) >= MIN_PHONE_LENGTH:
        bindings.append(FieldBinding(field="手机", success=True, value=phone))
    else:
        bindings.append(
            FieldBinding(field="手机", success=False, value="号码太短" if phone else "未填写")
        )

    return bindings


class OptionalBindingInput(BaseModel):
    name: str = "小明"
    age: str = "25"
    email: str = ""
    phone: str = ""


class OptionalBindingResult(BaseModel):
    bindings: list[FieldBinding]
    can_proceed: bool


class OptionalBindingWidget(Widget[OptionalBindingInput, OptionalBindingResult]):
    name = "optional_binding"
    title = "🔗 可选绑定练习器"
    day = 4
    input_model = OptionalBindingInput

    def derive(self) -> OptionalBindingResult:
        inputs = self.inputs
        bindings = bind_profile(inputs.name, inputs.age, inputs.email, inputs.phone)
        bound = sum(1 for b in bindings if b.success)
        return OptionalBindingResult(bindings=bindings, can_proceed=bound >= MIN_BOUND_FIELDS)

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        rows = [
            (b.field, f"{'✅' if b.success else '❌'} {b.value}") for b in result.bindings
        ]
        if result.can_proceed:
            bound = sum(1 for b in result.bindings if b.success)
            rows.append(("处理状态", f"✅ 可以继续（成功绑定 {bound} 个字段，满足处理条件）"))
        else:
            rows.append(("处理状态", "❌ 信息不足（至少需要2个有效字段才能继续处理）"))
        return rows


# =============================================================================
# Safe unwrapping comparison
# =============================================================================


class UnwrapMethod(str, Enum):
    BINDING = "可选绑定"
    NIL_COALESCING = "nil合并"
    FORCE_UNWRAP = "强制解包"
    OPTIONAL_CHAINING = "可选链"


UNWRAP_ADVICE = {
    UnwrapMethod.BINDING: "推荐使用！安全且灵活，可以处理nil情况",
    UnwrapMethod.NIL_COALESCING: "适合有合理默认值的场景",
    UnwrapMethod.FORCE_UNWRAP: "尽量避免！只在确定不为nil时使用",
    UnwrapMethod.OPTIONAL_CHAINING: "适合链式调用，返回可选值",
}

SAFE = "✅ 安全"


def unwrap_length(value: Optional[str], method: UnwrapMethod) -> tuple[str, str]:
    """(result, safety rating) of taking the length through each method."""
    if method == UnwrapMethod.BINDING:
        return (f"长度: {len(value)}" if value is not None else "值为空"), SAFE
    elif method == UnwrapMethod.NIL_COALESCING:
        return f"长度: {len(value if value is not None else NIL_DEFAULT)}", SAFE
    elif method == UnwrapMethod.FORCE_UNWRAP:
        if value is not None:
            return f"长度: {len(value)}", "⚠️ 危险但成功"
        return "💥 运行时崩溃", "❌ 会崩溃"
    else:
        return (f"长度: {len(value)}" if value is not None else "无法获取长度"), SAFE


class SafeUnwrappingInput(BaseModel):
    text: str = "Swift"
    make_nil: bool = False
    method: UnwrapMethod = UnwrapMethod.BINDING


class SafeUnwrappingResult(BaseModel):
    result: str
    safety: str
    advice: str


class SafeUnwrappingWidget(Widget[SafeUnwrappingInput, SafeUnwrappingResult]):
    name = "safe_unwrapping"
    title = "🛡️ 安全解包对比器"
    day = 4
    input_model = SafeUnwrappingInput

    def derive(self) -> SafeUnwrappingResult:
        value = as_optional(self.inputs.text, self.inputs.make_nil)
        result, safety = unwrap_length(value, self.inputs.method)
        return SafeUnwrappingResult(
            result=result, safety=safety, advice=UNWRAP_ADVICE[self.inputs.method]
        )

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        value = as_optional(self.inputs.text, self.inputs.make_nil)
        return [
            ("当前可选值", describe_optional(value)),
            ("解包方法", self.inputs.method.value),
            ("安全性", result.safety),
            ("执行结果", result.result),
            ("💡 最佳实践", result.advice),
        ]


# =============================================================================
# Error handling simulator
# =============================================================================


class ThrowingOperation(str, Enum):
    VALIDATE_PASSWORD = "密码验证"
    CONVERT_NUMBER = "数字转换"
    READ_FILE = "文件读取"
    NETWORK_REQUEST = "网络请求"


SIMULATED_ERRORS = {
    ThrowingOperation.VALIDATE_PASSWORD: "ValidationError.tooShort: 密码长度不足",
    ThrowingOperation.CONVERT_NUMBER: "ConversionError.invalidFormat: 无法转换为数字",
    ThrowingOperation.READ_FILE: "FileError.notFound: 文件不存在",
    ThrowingOperation.NETWORK_REQUEST: "NetworkError.connectionFailed: 网络连接失败",
}

POSSIBLE_ERRORS = {
    ThrowingOperation.VALIDATE_PASSWORD: [
        "tooShort - 密码太短",
        "tooWeak - 密码强度不够",
        "invalidCharacters - 包含无效字符",
    ],
    ThrowingOperation.CONVERT_NUMBER: [
        "invalidFormat - 格式无效",
        "overflow - 数值溢出",
        "underflow - 数值下溢",
    ],
    ThrowingOperation.READ_FILE: [
        "notFound - 文件不存在",
        "permissionDenied - 权限不足",
        "corrupted - 文件损坏",
    ],
    ThrowingOperation.NETWORK_REQUEST: [
        "connectionFailed - 连接失败",
        "timeout - 请求超时",
        "serverError - 服务器错误",
    ],
}


def simulate_operation(
    operation: ThrowingOperation, value: str, simulate_error: bool
) -> tuple[bool, str]:
    """(success, message) of running one throwing operation."""
    if simulate_error:
        return False, SIMULATED_ERRORS[operation]

    if operation == ThrowingOperation.VALIDATE_PASSWORD:
        return True, "密码验证通过，符合安全要求"
    elif operation == ThrowingOperation.CONVERT_NUMBER:
        if parse_float(value) is None:
            return False, SIMULATED_ERRORS[operation]
        return True, f"成功转换为数字: {value}"
    elif operation == ThrowingOperation.READ_FILE:
        return True, f"文件读取成功: {value}"
    else:
        return True, "网络请求成功，返回数据"


class ErrorSimulatorInput(BaseModel):
    operation: ThrowingOperation = ThrowingOperation.VALIDATE_PASSWORD
    value: str = "abc123"
    simulate_error: bool = False


class ErrorSimulatorResult(BaseModel):
    success: bool
    message: str
    possible_errors: list[str]


class ErrorSimulatorWidget(Widget[ErrorSimulatorInput, ErrorSimulatorResult]):
    name = "error_simulator"
    title = "🚨 错误处理模拟器"
    day = 4
    input_model = ErrorSimulatorInput

    def derive(self) -> ErrorSimulatorResult:
        inputs = self.inputs
        success, message = simulate_operation(
            inputs.operation, inputs.value, inputs.simulate_error
        )
        return ErrorSimulatorResult(
            success=success, message=message, possible_errors=POSSIBLE_ERRORS[inputs.operation]
        )

    def headline(self) -> tuple[str, str]:
        if self.derive().success:
            return "执行成功", "success"
        return "捕获错误", "error"

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("操作类型", self.inputs.operation.value),
            ("执行结果", result.message),
            ("可能的错误类型", "\n".join(f"• {error}" for error in result.possible_errors)),
        ]


# =============================================================================
# Result type practice
# =============================================================================


def divide(dividend: float, divisor: float) -> float:
    """Raises DivisionByZeroError for a zero divisor."""
    if divisor == 0:
        raise DivisionByZeroError()
    return dividend / divisor


def divide_text(first: str, second: str, force_error: bool = False) -> float:
    """Parse both operands and divide.

    Raises:
        InvalidInputError: If either operand is not a number.
        DivisionByZeroError: If the divisor is zero or an error is forced.
    """
    dividend = parse_float(first)
    divisor = parse_float(second)
    if dividend is None or divisor is None:
        raise InvalidInputError()
    if force_error:
        raise DivisionByZeroError()
    return divide(dividend, divisor)


class ResultPracticeInput(BaseModel):
    first: str = "10"
    second: str = "2"
    force_error: bool = False


class ResultPracticeResult(BaseModel):
    value: Optional[float] = None
    error: Optional[str] = None


class ResultPracticeWidget(Widget[ResultPracticeInput, ResultPracticeResult]):
    name = "result_practice"
    title = "📦 Result类型练习器"
    day = 4
    input_model = ResultPracticeInput

    def derive(self) -> ResultPracticeResult:
        inputs = self.inputs
        try:
            value = divide_text(inputs.first, inputs.second, inputs.force_error)
        except CalculationError as e:
            return ResultPracticeResult(error=str(e))
        return ResultPracticeResult(value=value)

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        if result.error is not None:
            return [
                ("使用switch处理", f"❌ 计算失败: {result.error}"),
                ("使用map变换", f"变换失败: {result.error}"),
            ]
        return [
            ("使用switch处理", f"✅ 计算成功: {format_fixed(result.value, 2)}"),
            ("使用map变换", f"结果的两倍: {result.value * 2}"),
        ]


# =============================================================================
# Registration form
# =============================================================================


class FieldValidation(BaseModel):
    field: str
    valid: bool
    message: str


def validate_username(username: str) -> FieldValidation:
    if not username:
        return FieldValidation(field="用户名", valid=False, message="用户名不能为空")
    if len(username) < 3:
        return FieldValidation(field="用户名", valid=False, message="用户名至少3个字符")
    return FieldValidation(field="用户名", valid=True, message="用户名格式正确")


def validate_email(email: str) -> FieldValidation:
    if not email:
        return FieldValidation(field="邮箱", valid=False, message="邮箱不能为空")
    if "@" not in email or "." not in email:
        return FieldValidation(field="邮箱", valid=False, message="邮箱格式不正确")
    return FieldValidation(field="邮箱", valid=True, message="邮箱格式正确")


def validate_password(password: str) -> FieldValidation:
    if not password:
        return FieldValidation(field="密码", valid=False, message="密码不能为空")
    if len(password) < 6:
        return FieldValidation(field="密码", valid=False, message="密码至少6位")
    return FieldValidation(field="密码", valid=True, message="密码强度合格")


def validate_confirmation(confirmation: str, password: str) -> FieldValidation:
    if not confirmation:
        return FieldValidation(field="确认密码", valid=False, message="请再次输入密码")
    if confirmation != password:
        return FieldValidation(field="确认密码", valid=False, message="两次密码不一致")
    return FieldValidation(field="确认密码", valid=True, message="密码确认正确")


def validate_age(age: str) -> FieldValidation:
    if not age:
        return FieldValidation(field="年龄", valid=False, message="年龄不能为空")
    value = parse_int(age)
    if value is None or not 18 <= value <= 100:
        return FieldValidation(field="年龄", valid=False, message="年龄必须在18-100之间")
    return FieldValidation(field="年龄", valid=True, message="年龄有效")


class RegistrationInput(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    confirmation: str = ""
    age: str = ""


class RegistrationResult(BaseModel):
    fields: list[FieldValidation]
    can_register: bool


class RegistrationFormWidget(Widget[RegistrationInput, RegistrationResult]):
    name = "registration_form"
    title = "📝 用户注册表单验证器"
    day = 4
    input_model = RegistrationInput

    def derive(self) -> RegistrationResult:
        inputs = self.inputs
        fields = [
            validate_username(inputs.username),
            validate_email(inputs.email),
            validate_password(inputs.password),
            validate_confirmation(inputs.confirmation, inputs.password),
            validate_age(inputs.age),
        ]
        return RegistrationResult(fields=fields, can_register=all(f.valid for f in fields))

    def headline(self) -> tuple[str, str]:
        result = self.derive()
        if result.can_register:
            return "✅ 所有字段验证通过，可以注册", "success"
        invalid = sum(1 for f in result.fields if not f.valid)
        return f"❌ 还有{invalid}个字段需要修正", "error"

    def display_rows(self) -> list[tuple[str, str]]:
        return [
            (f.field, f"{'✅' if f.valid else '❌'} {f.message}") for f in self.derive().fields
        ]


# =============================================================================
# Data transform pipeline
# =============================================================================


class DataSummary(BaseModel):
    count: int
    total: int
    average: float
    maximum: int
    minimum: int
    valid_numbers: list[int]


class PipelineStep(BaseModel):
    name: str
    input: str
    output: str
    success: bool


def split_tokens(text: str) -> list[str]:
    return text.split(",")


def parse_numbers(tokens: list[str]) -> list[int]:
    """Trim each token and keep those that parse as integers."""
    numbers = []
    for token in tokens:
        value = parse_int(token.strip())
        if value is not None:
            numbers.append(value)
    return numbers


def run_pipeline(text: str) -> DataSummary:
    """Split, parse, filter to positives and summarize.

    Raises:
        EmptyInputError: If the input is blank.
        NoValidNumbersError: If no token parses as an integer.
        NoPositiveNumbersError: If no parsed number is positive.
    """
    if not text.strip():
        raise EmptyInputError()
    numbers = parse_numbers(split_tokens(text))
    if not numbers:
        raise NoValidNumbersError()
    positives = [n for n in numbers if n > 0]
    if not positives:
        raise NoPositiveNumbersError()

    total = sum(positives)
    return DataSummary(
        count=len(positives),
        total=total,
        average=total / len(positives),
        maximum=max(positives),
        minimum=min(positives),
        valid_numbers=positives,
    )


def pipeline_steps(text: str) -> list[PipelineStep]:
    """The four intermediate stages shown beside the final result."""
    tokens = split_tokens(text)
    numbers = parse_numbers(tokens)
    positives = [n for n in numbers if n > 0]

    steps = [
        PipelineStep(name="1. 字符串分割", input=text, output=" | ".join(tokens), success=True),
        PipelineStep(
            name="2. 数字转换",
            input=", ".join(tokens),
            output=join_numbers(numbers),
            success=len(numbers) == len(tokens),
        ),
        PipelineStep(
            name="3. 正数过滤",
            input=join_numbers(numbers),
            output=join_numbers(positives),
            success=True,
        ),
    ]
    if positives:
        total = sum(positives)
        steps.append(
            PipelineStep(
                name="4. 统计计算",
                input=join_numbers(positives),
                output=f"总和: {total}, 平均: {format_fixed(total / len(positives))}",
                success=True,
            )
        )
    else:
        steps.append(
            PipelineStep(name="4. 统计计算", input="无有效数据", output="无法计算", success=False)
        )
    return steps


class DataPipelineInput(BaseModel):
    data: str = "1,2,3,abc,5,6,xyz,8,9,10"
    show_steps: bool = True


class DataPipelineResult(BaseModel):
    summary: Optional[DataSummary] = None
    error: Optional[str] = None
    steps: list[PipelineStep]


class DataPipelineWidget(Widget[DataPipelineInput, DataPipelineResult]):
    name = "data_pipeline"
    title = "🔄 数据转换管道"
    day = 4
    input_model = DataPipelineInput

    def derive(self) -> DataPipelineResult:
        steps = pipeline_steps(self.inputs.data)
        try:
            summary = run_pipeline(self.inputs.data)
        except PipelineError as e:
            logger.debug("data_pipeline failed: %s", e)
            return DataPipelineResult(error=str(e), steps=steps)
        return DataPipelineResult(summary=summary, steps=steps)

    def headline(self) -> tuple[str, str]:
        if self.derive().error is None:
            return "✅ 处理成功", "success"
        return "❌ 处理失败", "error"

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        rows = []
        if self.inputs.show_steps:
            for step in result.steps:
                mark = "✅" if step.success else "❌"
                rows.append((f"{mark} {step.name}", f"输入: {step.input}\n输出: {step.output}"))

        if result.summary is None:
            rows.append(("最终结果", result.error))
            return rows

        summary = result.summary
        rows.extend([
            ("有效数字", join_numbers(summary.valid_numbers)),
            ("总计", f"{summary.count} 个数字"),
            ("总和", str(summary.total)),
            ("平均值", format_fixed(summary.average, 2)),
            ("最大值", str(summary.maximum)),
            ("最小值", str(summary.minimum)),
        ])
        return rows


# =============================================================================
# File operation simulator
# =============================================================================


class FileOperation(str, Enum):
    READ = "读取文件"
    WRITE = "写入文件"
    DELETE = "删除文件"
    CREATE_DIRECTORY = "创建目录"


def simulate_file_operation(
    operation: FileOperation, filename: str, succeed: bool
) -> tuple[bool, str]:
    if succeed:
        messages = {
            FileOperation.READ: f"成功读取文件 '{filename}'，内容: Hello, Swift!",
            FileOperation.WRITE: f"成功写入文件 '{filename}'，写入了25字节",
            FileOperation.DELETE: f"成功删除文件 '{filename}'",
            FileOperation.CREATE_DIRECTORY: f"成功创建目录 '{filename}'",
        }
    else:
        messages = {
            FileOperation.READ: f"FileError.notFound: 文件 '{filename}' 不存在",
            FileOperation.WRITE: "FileError.permissionDenied: 没有写入权限",
            FileOperation.DELETE: f"FileError.notFound: 文件 '{filename}' 不存在",
            FileOperation.CREATE_DIRECTORY: "FileError.alreadyExists: 目录已存在",
        }
    return succeed, messages[operation]


class FileOperationInput(BaseModel):
    filename: str = "data.txt"
    operation: FileOperation = FileOperation.READ
    succeed: bool = True


class FileOperationResult(BaseModel):
    success: bool
    message: str


class FileOperationsWidget(Widget[FileOperationInput, FileOperationResult]):
    name = "file_operations"
    title = "📁 文件操作模拟器"
    day = 4
    input_model = FileOperationInput

    def derive(self) -> FileOperationResult:
        inputs = self.inputs
        success, message = simulate_file_operation(
            inputs.operation, inputs.filename, inputs.succeed
        )
        return FileOperationResult(success=success, message=message)

    def headline(self) -> tuple[str, str]:
        if self.derive().success:
            return "操作成功", "success"
        return "操作失败", "error"

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        return [
            ("文件名", self.inputs.filename),
            ("操作类型", self.inputs.operation.value),
            ("执行结果", result.message),
        ]


# =============================================================================
# API call simulator
# =============================================================================

RESPONSE_DELAY_RANGE = (0.5, 5.0)
RESPONSE_DELAY_STEP = 0.5

API_ERROR_KINDS = [
    "networkError - 网络连接失败",
    "timeout - 请求超时",
    "unauthorized - 未授权访问",
    "serverError - 服务器内部错误",
    "invalidResponse - 响应格式错误",
]

API_CALL_CODE = """func fetchUserData(completion: @escaping (Result<User, APIError>) -> Void) {{
    // 模拟网络延迟
    DispatchQueue.global().asyncAfter(deadline: .now() + {delay}) {{
        if simulateSuccess {{
            let user = User(id: 1, name: "用户")
            completion(.success(user))
        }} else {{
            completion(.failure(.networkError))
        }}
    }}
}}

// 使用API
fetchUserData {{ result in
    DispatchQueue.main.async {{
        switch result {{
        case .success(let user):
            print("获取用户成功: \\(user)")
        case .failure(let error):
            print("API调用失败: \\(error)")
        }}
    }}
}}"""


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def api_call_code(delay: float) -> str:
    return API_CALL_CODE.format(delay=format_fixed(delay))


def simulate_api_response(succeed: bool) -> str:
    if succeed:
        return '获取用户成功: User(id: 1, name: "用户")'
    return "API调用失败: networkError"


class ApiCallInput(BaseModel):
    endpoint: str = "/api/users"
    method: RequestMethod = RequestMethod.GET
    simulate_success: bool = True
    response_delay: float = 1.0

    @field_validator("response_delay")
    @classmethod
    def _snap_delay(cls, value: float) -> float:
        value = clamp(value, *RESPONSE_DELAY_RANGE)
        return round(value / RESPONSE_DELAY_STEP) * RESPONSE_DELAY_STEP


class ApiCallResult(BaseModel):
    is_loading: bool
    code: str
    response: Optional[str] = None
    success: Optional[bool] = None


class ApiCallSimulatorWidget(Widget[ApiCallInput, ApiCallResult]):
    """Sends a pretend request that answers after the chosen delay.

    The request runs on a RepeatingTask that completes on its first tick.
    Sending again while a request is pending does nothing.
    """

    name = "api_call_simulator"
    title = "🌐 API调用模拟器"
    day = 4
    input_model = ApiCallInput
    actions = {"send": "发送API请求"}

    def __init__(self, inputs: Optional[ApiCallInput] = None):
        super().__init__(inputs)
        self._lock = threading.Lock()
        self._request: Optional[RepeatingTask] = None
        self._pending_success = True
        self._response: Optional[tuple[bool, str]] = None

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._request is not None

    def derive(self) -> ApiCallResult:
        with self._lock:
            is_loading = self._request is not None
            response = self._response
        success, message = response if response is not None else (None, None)
        return ApiCallResult(
            is_loading=is_loading,
            code=api_call_code(self.inputs.response_delay),
            response=message,
            success=success,
        )

    def headline(self) -> Optional[tuple[str, str]]:
        result = self.derive()
        if result.is_loading:
            return "请求中...", "info"
        if result.success is None:
            return None
        return result.response, "success" if result.success else "error"

    def display_rows(self) -> list[tuple[str, str]]:
        result = self.derive()
        inputs = self.inputs
        rows = [
            ("API端点", inputs.endpoint),
            ("请求类型", inputs.method.value),
            ("响应延迟", f"{format_fixed(inputs.response_delay)}s"),
            ("模拟成功响应", "是" if inputs.simulate_success else "否"),
            ("请求状态", "请求中..." if result.is_loading else "发送API请求"),
        ]
        if result.response is not None:
            rows.append(("响应结果", result.response))
        rows.append(("Result异步处理代码", result.code))
        rows.append(("常见API错误类型", "\n".join(f"• {kind}" for kind in API_ERROR_KINDS)))
        return rows

    def do_send(self, argument: str) -> None:
        with self._lock:
            if self._request is not None:
                return
            self._pending_success = self.inputs.simulate_success
            self._request = RepeatingTask(self.inputs.response_delay, self.complete_request)
            task = self._request
        task.start()
        logger.debug(
            "%s %s sent, answering in %.1fs",
            self.inputs.method.value,
            self.inputs.endpoint,
            self.inputs.response_delay,
        )

    def complete_request(self) -> None:
        """Deliver the pending response; no-op when nothing is pending."""
        with self._lock:
            task, self._request = self._request, None
            if task is None:
                return
            succeed = self._pending_success
            self._response = (succeed, simulate_api_response(succeed))
        task.stop()

    def close(self) -> None:
        with self._lock:
            task, self._request = self._request, None
        if task is not None:
            task.stop()
