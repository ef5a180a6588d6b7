"""
Traduction des erreurs du domaine en reponses HTTP.

Toutes les reponses d'erreur ont la forme {"msg": "..."}.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.exceptions import (
    ConflictError,
    MovieMismatchError,
    NotFoundError,
    ProviderError,
    ProviderErrorKind,
    StorageError,
    ValidationError,
)

_PROVIDER_STATUS = {
    ProviderErrorKind.RATE_LIMITED: 429,
    ProviderErrorKind.UNAUTHORIZED: 401,
    ProviderErrorKind.NOT_FOUND: 404,
    ProviderErrorKind.TRANSIENT: 500,
}


def _msg(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": message, **extra})


def _provider_message(exc: ProviderError, request: Request) -> str:
    if exc.kind == ProviderErrorKind.RATE_LIMITED:
        return "TMDB rate limit exceeded. Please try again later."
    if exc.kind == ProviderErrorKind.UNAUTHORIZED:
        return "Invalid TMDB API key."
    if exc.kind == ProviderErrorKind.NOT_FOUND:
        category = request.path_params.get("category", "")
        return f"No movies found for category {category}."
    return "Failed to fetch movies. Please try again."


def register_exception_handlers(app: FastAPI) -> None:
    """Installe les handlers d'erreurs sur l'application."""

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _msg(400, exc.message)

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return _msg(400, exc.message)

    @app.exception_handler(MovieMismatchError)
    async def mismatch_handler(request: Request, exc: MovieMismatchError):
        return _msg(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _msg(404, exc.message)

    @app.exception_handler(ProviderError)
    async def provider_handler(request: Request, exc: ProviderError):
        status_code = _PROVIDER_STATUS[exc.kind]
        message = _provider_message(exc, request)
        if exc.kind == ProviderErrorKind.TRANSIENT:
            return _msg(status_code, message, error="ProviderUnavailable")
        return _msg(status_code, message)

    @app.exception_handler(StorageError)
    async def storage_handler(request: Request, exc: StorageError):
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return _msg(500, "Server error")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"{request.method} {request.url.path}: corps invalide {exc.errors()}")
        return _msg(400, "Invalid request body")
