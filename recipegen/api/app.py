"""FastAPI application factory for the RecipeGen proxy."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipegen.api.generate import router as generate_router
from recipegen.models.models import ErrorResponse
from recipegen.utils.exceptions import RecipeGenError
from recipegen.utils.logger import logger


HTTP_ERROR_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


async def recipegen_error_handler(request: Request, exc: RecipeGenError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", extra={"status_code": exc.status_code})
    return JSONResponse(
        ErrorResponse(error=str(exc)).model_dump(),
        status_code=exc.status_code,
        headers=exc.headers,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(
        ErrorResponse(error=message).model_dump(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="RecipeGen Proxy", version="1.0")

    app.add_exception_handler(RecipeGenError, recipegen_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(generate_router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    return app
