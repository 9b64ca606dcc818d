from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cyberguard.api.dependencies import build_extractor, build_generator
from cyberguard.api.routes import router
from cyberguard.api.schemas import ErrorResponse, ValidationErrorResponse
from cyberguard.core.config import get_settings
from cyberguard.core.errors import GenerationFailure, InputValidationError
from cyberguard.core.schemas import violation_from_error

import logging

# Basic console logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(name)-20s │ %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    settings = get_settings()

    logger.info(
        "Starting | env=%s | model=%s | ollama=%s | retries=%d",
        settings.ENVIRONMENT,
        settings.OLLAMA_MODEL.value,
        settings.OLLAMA_BASE_URL,
        settings.LLM_MAX_RETRIES,
    )

    # Shared, read-only collaborators for every flow
    app.state.generator = build_generator(settings)
    app.state.extractor = build_extractor(settings)

    try:
        yield
    finally:
        await app.state.extractor.aclose()
        logger.info("Shutting down")


# Create app with conditional docs
settings = get_settings()

app = FastAPI(
    title="CyberGuard AI",
    description="AI-assisted vulnerability scanning, script generation, article summaries and chat",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
)

app.include_router(router)


@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(violations=exc.violations).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Bodies that never reach a flow (not an object, not JSON) get the same shape
    violations = []
    for err in exc.errors():
        loc = tuple(err.get("loc") or ())
        if len(loc) > 1 and loc[0] == "body" and isinstance(loc[1], str):
            err = {**err, "loc": loc[1:]}
        violations.append(violation_from_error(err))
    logger.info("Rejected %s: %d violation(s)", request.url.path, len(violations))
    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(violations=violations).model_dump(),
    )


@app.exception_handler(GenerationFailure)
async def generation_failure_handler(request: Request, exc: GenerationFailure):
    logger.error("Generation failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=ErrorResponse(error="generation_failed", message=str(exc)).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client_ip": request.client.host if request.client else "unknown",
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


@app.get("/health", include_in_schema=False)
async def health_check():
    return {"status": "healthy"}
