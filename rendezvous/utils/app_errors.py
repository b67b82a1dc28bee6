"""Application error types for the HTTP surface."""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class AppErrorCode(str, Enum):
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"
    E_INVALID_PARAMS = "E_INVALID_PARAMS"
    E_STREAM_NOT_FOUND = "E_STREAM_NOT_FOUND"

    def __str__(self) -> str:
        return self.value


class HttpStatusCode(IntEnum):
    BAD_REQUEST = 400
    NOT_FOUND = 404
    UNPROCESSABLE_ENTITY = 422
    INTERNAL_SERVER_ERROR = 500


class AppError(Exception):
    """Error raised from route handlers and rendered as an ApiFailure envelope.

    The caller location is captured at construction so that the handler log
    points at the raise site instead of the handler itself.
    """

    def __init__(
        self,
        errcode: AppErrorCode | str = AppErrorCode.E_INTERNAL_ERROR,
        errmesg: str = "We are sorry, an error occurred.",
        status_code: int = HttpStatusCode.BAD_REQUEST,
    ):
        self.errcode = str(errcode)
        self.errmesg = errmesg
        self.erresid = uuid4().hex[:10]
        self.status_code = int(status_code)

        caller_frame = inspect.stack()[1]
        module = inspect.getmodule(caller_frame.frame)
        module_name = (
            module.__name__ if module and getattr(module, "__name__", None) else caller_frame.filename
        )
        self.caller_info = f"{module_name}:{caller_frame.function}:{caller_frame.lineno}"

        super().__init__(f"{self.errcode}: {self.errmesg}")
