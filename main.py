import argparse
import logging
import sqlite3
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db
from config import load_config
from routes import surahs, progress, notes, populate  # Import routers
from utils.importer import IMPORT_ERRORS, setup_database
from utils.jobs import ImportJob

logger = logging.getLogger("hubcoran")


def configure_logging() -> None:
    level = load_config()["logging"]["level"]
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: config, logging and schema
    configure_logging()
    init_db()
    logger.info("Hub Coran API ready")
    yield


app = FastAPI(title="Hub Coran", description="Quran memorization tracker", lifespan=lifespan)
app.state.import_job = ImportJob()


@app.exception_handler(sqlite3.Error)
async def store_error_handler(request: Request, exc: sqlite3.Error):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return JSONResponse({"error": "; ".join(messages)}, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": str(exc)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# Include routers
app.include_router(surahs.router, prefix="/api", tags=["surahs"])
app.include_router(progress.router, prefix="/api", tags=["progress"])
app.include_router(notes.router, prefix="/api", tags=["notes"])
app.include_router(populate.router, prefix="/api", tags=["import"])

# Frontend goes last so /api routes take precedence
app.mount("/", StaticFiles(directory=str(base_dir / "static"), html=True), name="static")


def run_setup() -> int:
    """Standalone --init: 0 when the store is ready (imported or already populated), 1 on failure."""
    configure_logging()
    try:
        setup_database()
    except IMPORT_ERRORS:
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Hub Coran API")
    parser.add_argument("--init", action="store_true", help="Create the schema and import the Quran if the store is empty")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    parser.add_argument("--port", type=int, default=3000, help="Port to listen on")
    args = parser.parse_args()
    if args.init:
        sys.exit(run_setup())
    # Run server
    uvicorn.run("main:app", host="127.0.0.1", port=args.port, reload=args.dev, log_level="info")
