"""HTTP server exposing the calculator over a single ``/calculate`` endpoint."""
from typing import Callable, Optional, Union

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from calculator_microservice.common.config import Settings, get_settings
from calculator_microservice.common.logger import configure_logging, logger
from calculator_microservice.common.models import CalculationResponse, ErrorResponse, OperationFailure
from calculator_microservice.server.handler import CalculationHandler

# Every failure, client input errors included, is answered with this status
FAILURE_STATUS = 500


def error_response(message: str) -> JSONResponse:
    """
    Build the JSON failure response.

    :param str message: Message sent to the caller

    :return: Response with status 500 and ``{"statusCode": 500, "msg": message}``
    :rtype: JSONResponse
    """
    body = ErrorResponse(statusCode=FAILURE_STATUS, msg=message)
    return JSONResponse(status_code=FAILURE_STATUS, content=body.model_dump())


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Answer any unexpected exception with the JSON failure body and log it once."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
            return error_response(str(exc))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application and configure logging.

    :param Settings settings: Service settings, read from the environment when omitted

    :return: Configured application
    :rtype: FastAPI
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.service_name)
    app.state.settings = settings

    @app.get("/calculate", response_model=None)
    def calculate(
        operation: Optional[str] = None,
        num1: Optional[str] = None,
        num2: Optional[str] = None,
    ) -> Union[CalculationResponse, JSONResponse]:
        outcome = CalculationHandler(operation=operation, num1=num1, num2=num2).run()
        if isinstance(outcome, OperationFailure):
            return error_response(outcome.message)
        return CalculationResponse.from_success(outcome)

    app.add_middleware(ErrorHandlingMiddleware)
    return app
