"""Pydantic models for calculation outcomes and HTTP payloads."""
from enum import Enum
import math
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ErrorKind(str, Enum):
    """Kinds of failure a calculation can end with."""

    INVALID_OPERATION = "InvalidOperation"
    INVALID_NUMBER = "InvalidNumber"
    DIVISION_BY_ZERO = "DivisionByZero"
    MODULO_BY_ZERO = "ModuloByZero"
    NEGATIVE_DOMAIN = "NegativeDomain"


class OperationFailure(BaseModel):
    """Tagged failure returned, never raised, by operations and the request handler."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(..., description="Kind of failure")
    message: str = Field(..., description="Human readable message sent to the caller")


class CalculationSuccess(BaseModel):
    """Outcome of a successfully dispatched calculation."""

    model_config = ConfigDict(frozen=True)

    operation: str = Field(..., description="Name of the operation that was applied")
    num1: float = Field(..., description="First parsed operand")
    num2: Optional[float] = Field(default=None, description="Second parsed operand, absent for unary operations")
    result: float = Field(..., description="Computed result, possibly non-finite")


# A value computed by an operation, or the reason it could not be
OperationOutcome = Union[float, OperationFailure]
CalculationOutcome = Union[CalculationSuccess, OperationFailure]


class CalculationResponse(BaseModel):
    """JSON body returned by ``GET /calculate`` on success."""

    statusCode: int = 200
    operation: str
    num1: Optional[float]
    num2: Optional[float] = None
    result: Optional[float]

    @field_serializer("num1", "num2", "result")
    def finite_or_null(self, v: Optional[float]) -> Optional[float]:
        """JSON has no NaN or Infinity, those are sent as ``null``."""
        if v is None or not math.isfinite(v):
            return None
        return v

    @classmethod
    def from_success(cls, success: CalculationSuccess) -> "CalculationResponse":
        """
        Build the response body for a successful calculation.

        :param CalculationSuccess success: Handler outcome

        :return: Response body
        :rtype: CalculationResponse
        """
        return cls(
            operation=success.operation,
            num1=success.num1,
            num2=success.num2,
            result=success.result,
        )


class ErrorResponse(BaseModel):
    """JSON body returned by ``GET /calculate`` on any failure."""

    statusCode: int = 500
    msg: str
