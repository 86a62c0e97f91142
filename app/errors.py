from enum import StrEnum
from http import HTTPStatus

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


class ErrorCode(StrEnum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.METHOD_NOT_ALLOWED: status.HTTP_405_METHOD_NOT_ALLOWED,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.PRECONDITION_FAILED: status.HTTP_412_PRECONDITION_FAILED,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_CODE_FOR_STATUS: dict[int, ErrorCode] = {v: k for k, v in _HTTP_STATUS.items()}


def code_for_status(status_code: int) -> str:
    """Error code for a bare HTTP status, e.g. 415 -> UNSUPPORTED_MEDIA_TYPE."""
    if status_code in _CODE_FOR_STATUS:
        return _CODE_FOR_STATUS[status_code]
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return ErrorCode.BAD_REQUEST
    return phrase.upper().replace(" ", "_").replace("-", "_")


class ProcedureError(HTTPException):
    """
    Typed failure of a procedure call.
    The client gets ``{"code": ..., "detail": ...}`` with the matching HTTP status.
    """

    def __init__(self, code: ErrorCode, detail: str | None = None) -> None:
        super().__init__(
            status_code=_HTTP_STATUS[code],
            detail=detail or code.value.replace("_", " ").capitalize(),
        )
        self.code = code


class Unauthorized(ProcedureError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.UNAUTHORIZED, detail)


class Forbidden(ProcedureError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.FORBIDDEN, detail)


class NotFound(ProcedureError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.NOT_FOUND, detail)


class BadRequest(ProcedureError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.BAD_REQUEST, detail)


class Conflict(ProcedureError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.CONFLICT, detail)


class PreconditionFailed(ProcedureError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.PRECONDITION_FAILED, detail)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = getattr(exc, "code", None) or code_for_status(exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": code, "detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Rejected malformed input for {}: {}", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": ErrorCode.BAD_REQUEST,
            "detail": "Invalid input",
            "errors": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
                for e in exc.errors()
            ],
        },
    )


async def _unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.opt(exception=exc).error(
        "Unhandled error in {} {}", request.method, request.url.path
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": ErrorCode.INTERNAL_SERVER_ERROR,
            "detail": "Internal server error",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(
        StarletteHTTPException, _http_exception_handler  # type: ignore
    )
    app.add_exception_handler(
        RequestValidationError, _validation_exception_handler  # type: ignore
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)
