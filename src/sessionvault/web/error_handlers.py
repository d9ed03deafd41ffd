import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from sessionvault.errors import AuthenticationError, ConflictError, NotFoundError

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong! Please try again later."


def create_json_error_response(status_code: int, message: str) -> JSONResponse:
    """Create JSON error response in the ``{status, message}`` envelope."""
    return JSONResponse(status_code=status_code, content={"status": status_code, "message": message})


def status_code_for(exc: Exception) -> int:
    """Map a UserError subclass to its HTTP status code."""
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        # Duplicate names are reported as 202, which existing clients rely on
        return 202
    return 400


def describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first invalid request field as ``Invalid <field>: <reason>``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    # loc starts with the source ("body", "query", ...), the rest is the field path
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    return create_json_error_response(status_code=status_code_for(exc), message=str(exc))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """Report malformed request bodies and parameters as 400 client errors."""
    logger.debug("request_validation_failed", path=request.url.path, error_count=len(exc.errors()))
    return create_json_error_response(status_code=400, message=describe_validation_error(exc))


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500). Details are logged, never returned."""
    logger.exception("unexpected_error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})
