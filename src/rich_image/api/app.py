"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rich_image.api.page import router as page_router
from rich_image.app_logging import configure_logging
from rich_image.config import cors_headers
from rich_image.containers import AppContainer
from rich_image.domain.errors import GenerationError
from rich_image.domain.generation import GenerationRequest, GenerationResult


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    headers = cors_headers(container.settings.cors_allow_headers)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.middleware("http")
    async def cors_and_errors(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Answer preflights and attach CORS headers to every response."""
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error", extra={"path": request.url.path})
            response = JSONResponse(
                {"error": str(exc) or "Internal Server Error"}, status_code=500
            )
        response.headers.update(headers)
        return response

    @app.exception_handler(GenerationError)
    async def generation_error_handler(
        request: Request, exc: GenerationError
    ) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse({"error": _describe_body_error(exc)}, status_code=400)

    app.include_router(page_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/", response_model_by_alias=True)
    async def generate_rich_image(
        payload: GenerationRequest, request: Request
    ) -> GenerationResult:
        """Transform the uploaded photo into the chosen scenario."""
        state_container: AppContainer = request.app.state.container
        return await state_container.generation_service.generate(
            payload.image, payload.scenario
        )

    return app


def _describe_body_error(exc: RequestValidationError) -> str:
    """Name the first body field that failed validation."""
    errors = exc.errors()
    if not errors or errors[0].get("type") == "json_invalid":
        return "Invalid JSON body"
    fields = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
    if not fields:
        return "Invalid JSON body"
    return f"Invalid request body: {'.'.join(fields)}"
