"""Exception handlers rendering FilesystemError as JSON responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import FilesystemError, create_error_response, get_http_status_code


async def filesystem_exception_handler(request: Request, exc: FilesystemError) -> JSONResponse:
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=create_error_response(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the FilesystemError handler on an application."""
    app.add_exception_handler(FilesystemError, filesystem_exception_handler)
