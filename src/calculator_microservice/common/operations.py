"""Registry of the arithmetic operations served by the calculator."""
from collections.abc import Callable
import math
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from calculator_microservice.common.models import ErrorKind, OperationFailure, OperationOutcome


def _add(a: float, b: float) -> OperationOutcome:
    return a + b


def _sub(a: float, b: float) -> OperationOutcome:
    return a - b


def _mul(a: float, b: float) -> OperationOutcome:
    return a * b


def _div(a: float, b: float) -> OperationOutcome:
    if b == 0:
        return OperationFailure(kind=ErrorKind.DIVISION_BY_ZERO, message="Cannot divide by zero")
    return a / b


def _exp(a: float, b: float) -> OperationOutcome:
    """
    Raise ``a`` to the power ``b`` with IEEE-754 semantics.

    ``math.pow`` raises where the floating-point power function yields a
    special value: overflow and zero to a negative power become an infinity,
    an undefined result (negative base, fractional exponent) becomes NaN.
    """
    if abs(a) == 1 and math.isinf(b):
        return math.nan
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


def _is_odd_integer(x: float) -> bool:
    return float(x).is_integer() and x % 2 == 1


def _sqrt(a: float) -> OperationOutcome:
    if a < 0:
        return OperationFailure(
            kind=ErrorKind.NEGATIVE_DOMAIN,
            message="Cannot compute square root of a negative number",
        )
    return math.sqrt(a)


def _mod(a: float, b: float) -> OperationOutcome:
    if b == 0:
        return OperationFailure(kind=ErrorKind.MODULO_BY_ZERO, message="Cannot perform modulo by zero")
    if math.isinf(a):
        return math.nan
    # fmod keeps the sign of the dividend, unlike the % operator
    return math.fmod(a, b)


def _percentage(a: float, b: float) -> OperationOutcome:
    return (a / 100) * b


def _cbrt(a: float) -> OperationOutcome:
    # Negative inputs are rejected even though the cube root is defined there
    if a < 0:
        return OperationFailure(
            kind=ErrorKind.NEGATIVE_DOMAIN,
            message="Cannot compute cube root of a negative number",
        )
    return math.cbrt(a)


class Operation(BaseModel):
    """A named pure arithmetic function with a fixed arity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name used in the operation query parameter")
    arity: int = Field(..., ge=1, le=2, description="Number of operands the function takes")
    function: Callable[..., OperationOutcome] = Field(..., description="Pure function computing the result")

    @property
    def is_unary(self) -> bool:
        return self.arity == 1

    def apply(self, num1: float, num2: Optional[float] = None) -> OperationOutcome:
        """
        Invoke the function with as many operands as its arity requires.

        :param float num1: First operand
        :param float num2: Second operand, ignored by unary operations

        :return: Computed value or a tagged failure
        :rtype: OperationOutcome
        :raises ValueError: If a binary operation is given no second operand
        """
        if self.is_unary:
            return self.function(num1)
        if num2 is None:
            raise ValueError(f"Operation {self.name!r} requires two operands")
        return self.function(num1, num2)


def _build_registry(*operations: Operation) -> Mapping[str, Operation]:
    return MappingProxyType({op.name: op for op in operations})


# Declaration order is the order used in messages listing the valid names
OPERATIONS: Mapping[str, Operation] = _build_registry(
    Operation(name="add", arity=2, function=_add),
    Operation(name="sub", arity=2, function=_sub),
    Operation(name="mul", arity=2, function=_mul),
    Operation(name="div", arity=2, function=_div),
    Operation(name="exp", arity=2, function=_exp),
    Operation(name="sqrt", arity=1, function=_sqrt),
    Operation(name="mod", arity=2, function=_mod),
    Operation(name="percentage", arity=2, function=_percentage),
    Operation(name="cbrt", arity=1, function=_cbrt),
)


def get_operation(name: Optional[str]) -> Optional[Operation]:
    """
    Look up an operation by name.

    :param str name: Operation name, possibly missing from the request

    :return: The operation, or None when the name is unknown
    :rtype: Optional[Operation]
    """
    if name is None:
        return None
    return OPERATIONS.get(name)


def operation_names() -> list[str]:
    """Return the valid operation names in registry order."""
    return list(OPERATIONS)
