import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core import db
from core.errors import register_error_handlers
from core.log import setup_logging
from papers import router as papers_router

APP_TITLE = "Publications"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # One pool per process, handed to routes through db.get_pool.
    app.state.pool = await db.create_pool()
    try:
        yield
    finally:
        await db.close_pool(app.state.pool)
        app.state.pool = None


app = FastAPI(title=APP_TITLE, lifespan=lifespan)
register_error_handlers(app)

app.include_router(papers_router.router, tags=["papers"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": f"Hello, {APP_TITLE}"}


def run() -> None:
    setup_logging()
    host = os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"
    port = int(os.environ.get("PORT", "3000").strip() or "3000")
    logger.info("%s is running on %d.", APP_TITLE, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
