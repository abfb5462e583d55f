# paintdesk/main.py
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from paintdesk import __version__
from paintdesk.catalog.base import CatalogError
from paintdesk.config import settings
from paintdesk.core.logging_config import logger, setup_logging
from paintdesk.estimating.models import DuplicateTaskError
from paintdesk.observability.metrics import request_counter
from paintdesk.observability.metrics import router as metrics_router
from paintdesk.routers import catalog, estimates
from paintdesk.services.units import UnsupportedUnitError

# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title="paintdesk", version=__version__)

setup_logging(settings.log_level)
logger.info("startup", service=settings.service_name, env=settings.app_env)


# ----------------------------------------------------
# Health
# ----------------------------------------------------
@app.get("/health", include_in_schema=True)
def health() -> dict:
    return {"status": "ok", "version": __version__}


# ----------------------------------------------------
# Logging middleware
# ----------------------------------------------------
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    start = time.time()

    request_id = request.headers.get("X-Request-ID", "unknown")
    client_ip = request.client.host if request.client else "unknown"

    bound_logger = logger.bind(
        request_id=request_id,
        ip=client_ip,
        endpoint=str(request.url.path),
        method=request.method,
    )

    bound_logger.info("request_started")
    response = await call_next(request)
    latency_ms = round((time.time() - start) * 1000, 2)

    bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
        "request_finished"
    )
    if settings.metrics_enabled:
        route = request.scope.get("route")
        request_counter.labels(
            method=request.method,
            route=getattr(route, "path", "unmatched"),
            status_code=str(response.status_code),
        ).inc()
    return response


# ----------------------------------------------------
# Domain errors -> HTTP
# ----------------------------------------------------
@app.exception_handler(UnsupportedUnitError)
def unsupported_unit_handler(request: Request, exc: UnsupportedUnitError):
    logger.warning("unsupported_unit", unit=str(exc.unit), endpoint=str(request.url.path))
    return JSONResponse(status_code=422, content={"detail": str(exc), "unit": str(exc.unit)})


@app.exception_handler(DuplicateTaskError)
def duplicate_task_handler(request: Request, exc: DuplicateTaskError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "names": exc.names})


@app.exception_handler(CatalogError)
def catalog_error_handler(request: Request, exc: CatalogError):
    logger.error("catalog_error", error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Catalog data is invalid"})


# ----------------------------------------------------
# Routers
# ----------------------------------------------------
app.include_router(estimates.router)
app.include_router(catalog.router)
if settings.metrics_enabled:
    app.include_router(metrics_router)  # /metrics
