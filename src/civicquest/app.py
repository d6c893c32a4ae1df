import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .catalog import QuizCatalog
from .config import Settings, settings as default_settings
from .globals import STATIC_DIR
from .pages import router as pages_router
from .router import router as api_router
from .session import SessionManager
from .storage import MemoryStorage

logger = logging.getLogger(__name__)


# --- Logging Setup ---
def setup_logging(settings: Settings):
    logger = logging.getLogger("civicquest")
    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    if any(getattr(h, "baseFilename", None) == os.path.abspath(log_path) for h in logger.handlers):
        return
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)
    # Also configure root logger to see logs from other libraries
    logging.basicConfig(level=logging.INFO)


# --- Error Handlers ---
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(
        {"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
        status_code=400,
    )


# --- App Factory ---
def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[MemoryStorage] = None,
    catalog: Optional[QuizCatalog] = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)

    storage = storage or MemoryStorage()
    catalog = catalog or QuizCatalog(settings.QUIZ_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not storage.list_quizzes():
            quizzes = catalog.seed(storage)
            logger.info(f"Catalog ready with {len(quizzes)} quizzes")
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
        root_path=settings.ROOT_PATH,
    )
    app.state.storage = storage
    app.state.sessions = SessionManager(settings.SESSION_TIMEOUT_MINUTES)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(api_router)
    app.include_router(pages_router)

    return app
