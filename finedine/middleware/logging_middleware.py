import logging
import time

from fastapi import Request

logger = logging.getLogger("finedine.requests")


async def log_requests(request: Request, call_next):
    """Loggt Methode, Pfad, Statuscode und Dauer jedes Requests."""
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.exception(f"{request.method} {request.url.path} -> Fehler nach {duration_ms:.1f} ms")
        raise

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f} ms)")
    return response
