from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .errors import (
    AmbiguousInputError,
    DirectoryError,
    MissingInputError,
    RemoteRejectedError,
    TransportError,
    UnresolvedNameError,
)

ERROR_STATUS = {
    MissingInputError: 400,
    AmbiguousInputError: 400,
    UnresolvedNameError: 404,
    RemoteRejectedError: 502,
    TransportError: 504,
}


def create_app(title: str, version: str = "0.1.0") -> FastAPI:
    """Factory to build a FastAPI application with a standard /health route."""
    app = FastAPI(title=title, version=version)

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": title, "version": version}

    @app.exception_handler(DirectoryError)
    async def directory_error(request: Request, exc: DirectoryError):
        content = {"detail": str(exc), "type": type(exc).__name__}
        if isinstance(exc, RemoteRejectedError):
            content["error"] = exc.error
        return JSONResponse(status_code=ERROR_STATUS.get(type(exc), 500), content=content)

    return app
