"""FastAPI server entry point"""

import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api.dependencies import get_session_store, reset_clients
from app.api.routes import health, sessions
from spotcheck import __version__


def setup_logging():
    """Configure logging with file output"""
    logs_dir = settings.log_dir or Path(__file__).parent.parent.parent / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "server.log"

    handlers = [
        logging.StreamHandler(),
        RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ]

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger(__name__), log_file


logger, log_file_path = setup_logging()
logger.info(f"Logs are written to: {log_file_path}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown"""
    logger.info("Starting SpotCheck server...")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; analysis requests will fail")

    get_session_store()
    logger.info("Server started successfully")

    yield

    logger.info("Shutting down server...")
    reset_clients()
    logger.info("Server stopped")


app = FastAPI(
    title="SpotCheck API",
    description="Locate skate and snowboard spots from photos, clips or video links",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log all incoming requests"""
    logger.info(f">>> Incoming request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"<<< Response: {response.status_code}")
    return response


app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(sessions.router, prefix="/api/v1/sessions", tags=["sessions"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
        access_log=True,
    )
