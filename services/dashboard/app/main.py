from __future__ import annotations

from collections.abc import Callable

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from services.dashboard.app import observability
from services.dashboard.app.db import create_engine
from services.dashboard.app.errors import SeedFailure
from services.dashboard.app.logging import configure_logging, logger
from services.dashboard.app.schemas import ErrorDetail, ErrorResponse, SeedResponse
from services.dashboard.app.seeder import run_seed
from services.dashboard.app.settings import SETTINGS, DashboardSettings, get_settings


EngineFactory = Callable[[str], AsyncEngine]

SEED_OK_MESSAGE = "Database seeded successfully"


app = FastAPI(title="Dashboard API", version="0.1.0")
configure_logging(SETTINGS.log_level)
observability.add_metrics_middleware(app, service_name="dashboard")
if SETTINGS.tracing_enabled:
    observability.setup_tracing(app, service_name="dashboard")
    observability.instrument_sqlalchemy()


def get_engine_factory() -> EngineFactory:
    return create_engine


def _error_response(failure: SeedFailure) -> JSONResponse:
    observability.SEED_RUNS_TOTAL.labels(failure.code).inc()
    logger.warning("seed_failed", kind=failure.kind.value, code=failure.code, message=failure.message)
    body = ErrorResponse(error=ErrorDetail(message=failure.message, code=failure.code, details=failure.details))
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@app.get("/healthz")
async def healthz() -> dict:
    return {"ok": True}


@app.get("/seed", response_model=SeedResponse, responses={500: {"model": ErrorResponse}})
async def seed(
    settings: DashboardSettings = Depends(get_settings),
    engine_factory: EngineFactory = Depends(get_engine_factory),
) -> SeedResponse | JSONResponse:
    outcome = await run_seed(
        settings.postgres_url,
        engine_factory=engine_factory,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    if isinstance(outcome, SeedFailure):
        return _error_response(outcome)

    observability.SEED_RUNS_TOTAL.labels("ok").inc()
    return SeedResponse(message=SEED_OK_MESSAGE)


def serve() -> None:
    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port, log_config=None)
