"""Chat Service: RAG endpoint for answering legal questions."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from eulens.api.health import check_all_dependencies, unhealthy
from eulens.core.config import get_settings
from eulens.core.dependencies import ServiceContainer, get_services, shutdown_services
from eulens.core.exceptions import ConfigurationMissing, QueryError, VectorIndexError
from eulens.models.chat import ChatRequest, ChatResponse, ErrorResponse
from eulens.monitoring.metrics import (
    chat_errors_total,
    chat_latency_seconds,
    chat_requests_total,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
SERVICE_NAME = "eu-lens"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Chat Service started")
    yield
    await shutdown_services()
    logger.info("Chat Service stopped")


app = FastAPI(title="EU-Lens Chat Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _internal_error() -> JSONResponse:
    chat_errors_total.inc()
    return JSONResponse(
        status_code=500, content=ErrorResponse(error=INTERNAL_ERROR).model_dump())


@app.exception_handler(QueryError)
async def query_error_handler(request: Request, exc: QueryError) -> JSONResponse:
    """Return the generic error body; the cause was logged by the query pipeline."""
    return _internal_error()


@app.exception_handler(ConfigurationMissing)
async def configuration_error_handler(request: Request, exc: ConfigurationMissing) -> JSONResponse:
    """Return the generic error body for requests made without required configuration."""
    logger.error(f"Request failed: {str(exc)}")
    return _internal_error()


@app.exception_handler(VectorIndexError)
async def vector_index_error_handler(request: Request, exc: VectorIndexError) -> JSONResponse:
    """Return the generic error body when the vector index is unreachable."""
    logger.error(f"Request failed: {str(exc)}")
    return _internal_error()


@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
)
async def chat(
    request: ChatRequest, services: ServiceContainer = Depends(get_services)
) -> ChatResponse:
    """
    Answer a legal question.

    Args:
        request: Chat request.
        services: Service container.

    Returns:
        Answer with the sources above the relevance threshold.
    """
    start_time = time.time()
    chat_requests_total.inc()

    result = await services.query_processor.answer(request.message)

    latency_seconds = time.time() - start_time
    chat_latency_seconds.observe(latency_seconds)
    logger.info(f"Chat request answered in {latency_seconds * 1000:.2f}ms")
    return result


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/health")
async def health() -> dict:
    """
    Health check endpoint with dependency verification.

    Missing configuration or an unreachable vector index is reported as an
    unhealthy status rather than an error response.

    Returns:
        Health status with service dependencies.
    """
    try:
        settings = get_settings()
    except ConfigurationMissing as e:
        return {"service": SERVICE_NAME, **unhealthy("configuration", str(e))}

    try:
        services = await get_services()
    except VectorIndexError as e:
        return {"service": settings.service_name, **unhealthy("qdrant", str(e))}

    result = await check_all_dependencies(services)
    return {"service": settings.service_name, **result}
