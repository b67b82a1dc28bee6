import time
import traceback
import uuid
from contextlib import asynccontextmanager
from os import environ

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from granian import Granian
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from rendezvous.api.errors import app_error_handler, app_validation_exception_handler
from rendezvous.api.routers import signaling, status
from rendezvous.api.utils import api_failure, init_logger
from rendezvous.app_config import get_app_environ_config
from rendezvous.domain.signaling import SignalingService
from rendezvous.utils.app_errors import AppError, AppErrorCode


class HTTPLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore
        start_time = time.time()
        request_id = str(uuid.uuid4())[:8]

        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"Status: {response.status_code} - "
                f"Duration: {process_time:.2f}ms"
            )

            return response

        except Exception as exc:
            process_time = (time.time() - start_time) * 1000

            logger.error(
                f"[{request_id}] Unhandled exception in {request.method} {request.url.path} - "
                f"Duration: {process_time:.2f}ms - "
                f"Error: {type(exc).__name__}: {exc}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )

            failure = api_failure(
                errcode=AppErrorCode.E_INTERNAL_ERROR.value,
                errmesg=f"Internal server error (request_id: {request_id})",
            )
            return ORJSONResponse(
                status_code=500,
                content=failure.model_dump(),
            )


@asynccontextmanager
async def lifespan(server: FastAPI):
    init_logger()

    logger.info("Application startup...")

    server.state.signaling_service = SignalingService()

    app_config = get_app_environ_config()
    if app_config.LOGFIRE_ENABLE:
        logger.info("Logfire initializing")

        logfire.configure(
            token=app_config.LOGFIRE_TOKEN,
            service_name="rendezvous-signaling",
            service_version=environ.get("BUILD_COMMIT") or "dev",
        )

        logger.info("Logfire instrument fastapi")
        logfire.instrument_fastapi(server, capture_headers=True)

    yield

    logger.info(
        "Application shutdown with {} clients and {} streams active",
        server.state.signaling_service.client_count,
        server.state.signaling_service.stream_count,
    )


app = FastAPI(
    version="1.0",
    title="WebRTC Signaling Server",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.add_middleware(HTTPLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,  # type: ignore
    allow_origins=get_app_environ_config().API_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, app_validation_exception_handler)  # type: ignore
app.add_exception_handler(AppError, app_error_handler)  # type: ignore

app.include_router(status.router)
app.include_router(signaling.router)


def build_granian_kwargs():
    app_config = get_app_environ_config()

    # Registries live in process memory, so there is exactly one worker
    kwargs = {
        "interface": "asgi",
        "address": app_config.API_HOST,
        "port": app_config.API_PORT,
        "workers": 1,
        "reload": app_config.DEBUG,
    }

    return kwargs


def run():
    granian_kwargs = build_granian_kwargs()
    logger.info("Signaling Server running on port {}", granian_kwargs["port"])
    Granian("rendezvous.main:app", **granian_kwargs).serve()


if __name__ == "__main__":
    run()
