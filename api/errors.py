"""Evidence Integrity - API Error Mapping
Maps integrity error kinds to HTTP status codes.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import IntegrityError
from core.logging import get_logger


STATUS_BY_KIND = {
    "validation": 422,
    "not_found": 404,
    "missing_baseline": 409,
    "insufficient_input": 422,
    "persistence": 503,
}


def error_response(kind: str, message: str, details=None, status_code: int | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code or STATUS_BY_KIND.get(kind, 500),
        content={"error": {"kind": kind, "message": message, "details": details}},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if status_code >= 500:
        get_logger().error(f"{exc.kind}: {exc.message}", path=request.url.path)
    else:
        get_logger().info(f"{exc.kind}: {exc.message}", path=request.url.path)
    body = exc.to_dict()
    return error_response(body["kind"], body["message"], body["details"], status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return error_response("validation", "Invalid request", {"errors": errors})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
