"""Request handler turning raw query parameters into a calculation outcome."""
from decimal import Decimal
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from calculator_microservice.common.logger import logger
from calculator_microservice.common.models import (
    CalculationOutcome,
    CalculationSuccess,
    ErrorKind,
    OperationFailure,
)
from calculator_microservice.common.operations import get_operation, operation_names
from calculator_microservice.common.parser import NumberParser

INVALID_NUMBER_MESSAGE = "Both num1 and num2 (if applicable) must be valid numbers."


def invalid_operation_message() -> str:
    """Build the message listing every valid operation name."""
    *head, last = operation_names()
    return f"Invalid operation. Use {', '.join(head)}, or {last}."


def format_number(value: Optional[float]) -> str:
    """
    Render a number for log lines the way JavaScript prints numbers.

    The shortest round-tripping digits are written in positional notation
    when the decimal point falls within 21 places, and in ``1.5e+21`` form
    otherwise. Absent values print as null.

    :param float value: Number to render

    :return: Text representation
    :rtype: str
    """
    if value is None:
        return "null"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    # Position of the decimal point relative to the first digit
    n = exponent + k

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return sign + text


class CalculationHandler(BaseModel):
    """
    Handle a single calculation request.

    Steps:
        1. Parse num1 and, when supplied, num2.
        2. Validate the operation name against the registry.
        3. Validate the parsed numbers against the operation's arity.
        4. Dispatch to the operation and log the outcome.

    Failures are returned as :class:`OperationFailure` values, never raised.
    """

    model_config = ConfigDict(frozen=True)

    operation: Optional[str] = Field(default=None, description="Operation name from the query string")
    num1: Optional[str] = Field(default=None, description="Raw first operand")
    num2: Optional[str] = Field(default=None, description="Raw second operand, None when not supplied")

    def _fail(self, kind: ErrorKind, message: str) -> OperationFailure:
        logger.error(message)
        return OperationFailure(kind=kind, message=message)

    def run(self) -> CalculationOutcome:
        """
        Parse, validate and dispatch the request.

        :return: Success record or tagged failure
        :rtype: CalculationOutcome
        """
        n1: float = NumberParser.parse(self.num1)
        n2: Optional[float] = NumberParser.parse(self.num2) if self.num2 is not None else None

        operation = get_operation(self.operation)
        if operation is None:
            logger.error(f"Invalid operation: {self.operation}")
            return self._fail(ErrorKind.INVALID_OPERATION, invalid_operation_message())

        if not NumberParser.is_number(n1) or (n2 is not None and not NumberParser.is_number(n2)):
            logger.error("Invalid number input")
            return self._fail(ErrorKind.INVALID_NUMBER, INVALID_NUMBER_MESSAGE)

        if operation.is_unary:
            n2 = None
        elif n2 is None:
            logger.error("Invalid number input")
            return self._fail(ErrorKind.INVALID_NUMBER, INVALID_NUMBER_MESSAGE)

        result = operation.apply(n1, n2)
        if isinstance(result, OperationFailure):
            logger.error(result.message)
            return result

        logger.info(
            f"Operation: {operation.name}, Numbers: {format_number(n1)}, {format_number(n2)}, "
            f"Result: {format_number(result)}"
        )
        return CalculationSuccess(operation=operation.name, num1=n1, num2=n2, result=result)
