from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from student_records.config.settings import settings
from student_records.core.record_store import RecordStore
from student_records.utils.logging import get_logger
from student_records.routers import main_router
from student_records.services.sort_preferences import SortPreferences
from student_records.services.student_service import build_record_store
from student_records.utils.errors import setup_error_handlers
from student_records.middlewares import RequestIDMiddleware

# Initialize the logger
logger = get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info(
        f"{settings.NAME} is starting up with {len(application.state.record_store)} students..."
    )
    yield
    logger.info(f"{settings.NAME} is shutting down...")


def create_application(record_store: Optional[RecordStore] = None) -> FastAPI:
    """Initialize the FastAPI application with settings, state and lifespan events."""
    application = FastAPI(
        title=settings.NAME, version=settings.VERSION, lifespan=lifespan
    )

    # The store and the sort toggle live for the whole application
    if record_store is None:
        record_store = build_record_store()
    application.state.record_store = record_store
    application.state.sort_preferences = SortPreferences()

    # Setup error handlers
    setup_error_handlers(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    application.add_middleware(RequestIDMiddleware)

    application.include_router(main_router, prefix=settings.API_PREFIX, tags=["APIs"])

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "student_records.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=None,
        log_level=None,
    )
