import logging
import time

from fastapi import Request

logger = logging.getLogger("akkuea_api.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - started) * 1000
        logger.exception('%s %s failed after %.2fms', request.method, request.url.path, duration_ms)
        raise

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info('%s %s -> %s in %.2fms', request.method, request.url.path, response.status_code, duration_ms)
    return response
