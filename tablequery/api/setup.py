import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse, Response

from tablequery.core.logging import request_id_ctx


async def add_request_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    token = request_id_ctx.set(request_id)
    start = time.monotonic()
    try:
        response: Response = await call_next(request)
    finally:
        request_id_ctx.reset(token)
    response.headers["X-Request-ID"] = request_id
    duration_ms = int((time.monotonic() - start) * 1000)
    logging.getLogger("tablequery.access").info(
        "request",
        extra={
            "event": {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "request_id": request_id,
            }
        },
    )
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": "validation_error",
                "message": "Validation error",
                "details": jsonable_encoder(exc.errors()),
                "request_id": getattr(request.state, "request_id", None),
            }
        },
    )


def install_table_query(app: FastAPI) -> FastAPI:
    app.middleware("http")(add_request_id)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    return app
