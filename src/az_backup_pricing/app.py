"""Azure Backup Pricing – FastAPI web application.

Answers what Azure charges for SQL Database backup storage, standard and
long-term retention, in a given region.  Prices come from the public
Azure Retail Prices API.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from az_backup_pricing import __version__
from az_backup_pricing.config import settings
from az_backup_pricing.models import ApiResponse
from az_backup_pricing.routes import router as pricing_router

app = FastAPI(
    title="az-backup-pricing API",
    version=__version__,
    description=(
        "REST API for Azure SQL Database backup storage pricing. "
        "Provides endpoints for standard and long-term-retention backup "
        "prices per region, generic backup meter lookups and the list of "
        "regions offering SQL Database."
    ),
    license_info={"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_router)


# ---------------------------------------------------------------------------
# Colored logging (reuse uvicorn's formatter)
# ---------------------------------------------------------------------------


def _setup_logging(level: int = logging.INFO) -> None:
    """Configure the root ``az_backup_pricing`` logger with uvicorn-style colours."""
    from uvicorn.logging import DefaultFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(
        DefaultFormatter(fmt="%(levelprefix)s %(name)s - %(message)s", use_colors=True)
    )
    app_logger = logging.getLogger("az_backup_pricing")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Silence noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)


_setup_logging()


@app.get("/health", tags=["Health"], summary="Health check")
async def health_check() -> JSONResponse:
    """Liveness probe."""
    return JSONResponse(ApiResponse.ok("Azure Pricing API is healthy").model_dump(mode="json"))
