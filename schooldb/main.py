from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schooldb.api.v1.academics.router import router as academics_router
from schooldb.api.v1.attendance.router import router as attendance_router
from schooldb.api.v1.fees.router import router as fees_router
from schooldb.api.v1.payments.router import router as payments_router
from schooldb.api.v1.reports.router import router as reports_router
from schooldb.api.v1.students.router import router as students_router
from schooldb.api.v1.timetable.router import router as timetable_router
from schooldb.core.config import settings
from schooldb.core.logging import get_logger, setup_logging
from schooldb.db.session import engine, init_db

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database ready; environment=%s", settings.environment)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(students_router)
    app.include_router(academics_router)
    app.include_router(attendance_router)
    app.include_router(timetable_router)
    app.include_router(fees_router)
    app.include_router(payments_router)
    app.include_router(reports_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
