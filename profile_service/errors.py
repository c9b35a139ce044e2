"""
Exception handlers for the profile service.

Every client-visible error body carries a ``msg`` (or ``errors`` for
validation failures). Unexpected exceptions are logged with their traceback
and answered with an opaque 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR = "Server Error"

REQUIRED_MESSAGES = {
    "status": "Status is required",
    "skills": "Skills is required",
    "title": "Title is required",
    "company": "Company is required",
    "from": "From date is required",
    "school": "School is required",
    "degree": "Degree is required",
    "fieldofstudy": "Field of study is required",
}


def _field_errors(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        location = loc[0] if loc else "body"
        param = loc[-1] if len(loc) > 1 else ""
        msg = err.get("msg", "Invalid value")

        blank = err.get("type") == "missing" or err.get("input") in ("", None)
        if blank and param in REQUIRED_MESSAGES:
            msg = REQUIRED_MESSAGES[param]

        out.append({"param": param, "msg": msg, "location": location})
    return out


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        logger.info("Validation failed on %s %s: %s", request.method, request.url.path, errors)
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"msg": SERVER_ERROR})
