# main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shamiri.core.database import get_database, reset_database
from shamiri.errors import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ShamiriError,
    UpstreamError,
    ValidationError,
)
from shamiri.llm.client_factory import close_clients
from server.routers.journal_api import router as journal_api_router
from server.routers.category_api import router as category_api_router
from server.logging_config import setup_logging, get_logger
from server.config import config

# Initialize logging
setup_logging(
    log_level=config.log_level,
    log_file=config.log_file,
    secrets=(
        config.LLM.OPENROUTER_API_KEY,
        config.LLM.OPENAI_API_KEY,
        config.LLM.ANTHROPIC_API_KEY,
        config.PIXABAY.API_KEY,
    ),
)
logger = get_logger(__name__)

_STATUS_CODES = {
    AuthenticationError: 401,
    NotFoundError: 404,
    ValidationError: 422,
    RateLimitError: 429,
    UpstreamError: 502,
}

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db = get_database()
    await app.state.db.init_schema()
    yield
    await close_clients()
    await reset_database()

app = FastAPI(
    title=config.INFO.title,
    description=config.INFO.description,
    version=config.INFO.version,
    docs_url=config.INFO.docs_url,
    redoc_url=config.INFO.redoc_url,
    lifespan=lifespan
)

@app.exception_handler(ShamiriError)
async def shamiri_error_handler(request: Request, exc: ShamiriError):
    status_code = _STATUS_CODES.get(type(exc), 500)
    if isinstance(exc, UpstreamError):
        # Provider detail is for the logs only
        content = {"detail": "Unable to answer right now. Please try again.", "code": exc.code}
    else:
        content = {"detail": exc.message, "code": exc.code}
        if exc.details:
            content["details"] = exc.details
    headers = None
    if isinstance(exc, RateLimitError) and exc.details.get("retry_after_seconds") is not None:
        headers = {"Retry-After": str(exc.details["retry_after_seconds"])}
    return JSONResponse(status_code=status_code, content=content, headers=headers)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies share the error shape of service-level validation failures
    errors = jsonable_encoder(exc.errors())
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=422,
        content={"detail": detail, "code": ValidationError.code, "details": {"errors": errors}},
    )

app.include_router(journal_api_router, prefix="/api/v1")
app.include_router(category_api_router, prefix="/api/v1")
