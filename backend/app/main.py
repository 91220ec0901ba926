from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .api.routes import generate
from .core.config import settings

logger = logging.getLogger("markup_docx.backend")
logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")

INVALID_TEXT = 'Input "text" must be a string.'
BODY_TOO_LARGE = "Request body too large."

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class BodySizeLimitMiddleware:
    """Reject request bodies above ``max_body_bytes`` with 413.

    The declared ``Content-Length`` is checked up front; bodies sent without
    one (chunked) are counted while the application reads them.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length is not None and length.isdigit() and int(length) > self.max_body_bytes:
            logger.warning("Rejected %s body of %s bytes", scope["path"], length)
            response = JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning("Rejected %s body after %d bytes", scope["path"], received)
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)


app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": INVALID_TEXT})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


app.include_router(generate.router)


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""

    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


__all__ = ["app", "run"]
