from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from . import schemas
from .config import Settings, configure_logging
from .errors import DeviceError
from .simulation_service import SimulationService

settings = Settings.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Sinks are only replaced when the app actually starts serving
    configure_logging(settings.log_level)
    yield


app = FastAPI(title="Flow Network API", version="0.1.0", lifespan=lifespan)
service = SimulationService(settings)


@app.get("/healthz")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/simulate", response_model=schemas.NetworkResult)
def run_simulation(payload: schemas.NetworkPayload) -> schemas.NetworkResult:
    try:
        return service.simulate(payload)
    except (DeviceError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
