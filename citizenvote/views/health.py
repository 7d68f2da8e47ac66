import time

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET
from loguru import logger


@require_GET
def health_check(request: HttpRequest) -> JsonResponse:
    """
    Health check endpoint for deployment verification.

    Returns system status including database and cache connectivity.
    """
    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "version": "0.1.0",
        "checks": {},
    }

    # Database connectivity check
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        health_status["checks"]["database"] = "healthy"
    except DatabaseError as e:
        logger.error(f"Health check database failure: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = f"error: {str(e)}"

    # Cache connectivity check
    try:
        cache.set("health_check", "test", 1)
        if cache.get("health_check") != "test":
            raise ConnectionError("cache round trip failed")
        health_status["checks"]["cache"] = "healthy"
    except Exception as e:
        logger.error(f"Health check cache failure: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["cache"] = f"error: {str(e)}"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JsonResponse(health_status, status=status_code)
