"""Health check utilities."""

from typing import Dict

from eulens.core.dependencies import ServiceContainer
from eulens.services.health import check_openai, check_qdrant


def unhealthy(dependency: str, error: str) -> Dict:
    """
    Build the report for a service that could not even be set up.

    Args:
        dependency: Name of the dependency that failed.
        error: Failure description.

    Returns:
        Unhealthy status dictionary.
    """
    return {"status": "unhealthy", "services": {dependency: {"status": "unhealthy", "error": error}}}


async def check_all_dependencies(services: ServiceContainer) -> Dict:
    """
    Check all service dependencies.

    Args:
        services: Initialized service container.

    Returns:
        Dictionary with overall status and individual service statuses.
    """
    statuses = {
        "qdrant": await check_qdrant(services.vector_db),
        "openai": await check_openai(services.embedding_service, services.llm_service),
    }
    healthy = all(status["status"] == "healthy" for status in statuses.values())
    return {"status": "healthy" if healthy else "unhealthy", "services": statuses}
