from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from .logging import setup_logging
from .api.routes import router as api_router
from .config import settings
from .db import get_conn, migrate

setup_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(_app: FastAPI):
    conn = get_conn(settings.db_path)
    migrate(conn)
    conn.close()
    log.info("app_started", db_path=settings.db_path, local_tz=settings.local_tz)
    yield

app = FastAPI(title="stocks-tracker", lifespan=lifespan)
app.include_router(api_router)
