"""
Blog Backend - Main FastAPI Application
Boots the MongoDB connection and reports its state
"""
import asyncio
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, APIRouter, Request
from fastapi.responses import JSONResponse

from core.config import LOG_LEVEL
from core.database import create_client, connect
from core.lifecycle import shutdown_resources

# Create the main app
app = FastAPI(title="Blog API", version="1.0.0")

# Create routers
api_router = APIRouter(prefix="/api")

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _log_connect_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"MongoDB connection failed: {exc}")


def _database_state(task) -> str:
    if task is None or not task.done():
        return "connecting"
    if task.cancelled() or task.exception() is not None:
        return "unavailable"
    return "connected"


# ============= STARTUP =============

@app.on_event("startup")
async def startup_db_client():
    """Create the client and start connecting without blocking startup."""
    client = create_client()
    app.state.db_client = client
    app.state.db_connect_task = asyncio.create_task(connect(client))
    app.state.db_connect_task.add_done_callback(_log_connect_failure)


# ============= HEALTH CHECK =============

@api_router.get("/health")
async def health_check(request: Request):
    database = _database_state(getattr(request.app.state, "db_connect_task", None))
    body = {
        "status": "unhealthy" if database == "unavailable" else "healthy",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if database == "unavailable":
        return JSONResponse(status_code=503, content=body)
    return body


app.include_router(api_router)


@app.on_event("shutdown")
async def shutdown_db_client():
    await shutdown_resources(app.state.db_client, app.state.db_connect_task)
