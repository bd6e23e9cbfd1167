from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from mission_control.app.routers import dashboard, relay
from mission_control.errors import MissionControlError

app = FastAPI(title="Mission Control Relay API")

app.include_router(relay.router)
app.include_router(dashboard.router)

@app.exception_handler(MissionControlError)
def mission_control_error_handler(request: Request, exc: MissionControlError):
    # Raised before a handler runs, e.g. the store is not configured
    logger.error(f"[API] {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.get("/health")
def health_check():
    return {"status": "ok"}
