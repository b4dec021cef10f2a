import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindmend.application.use_cases.reminders import ReminderScheduler
from mindmend.config import get_settings
from mindmend.infrastructure import database
from mindmend.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the reminder sweep; release them on shutdown."""

    settings = get_settings()
    database.initialize_database()
    scheduler = ReminderScheduler(
        database.SessionLocal,
        interval_seconds=settings.reminder_interval_seconds,
        window=timedelta(minutes=settings.reminder_window_minutes),
    )
    scheduler.start()
    app.state.reminder_scheduler = scheduler
    yield
    await scheduler.stop()
    database.engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the MindMend API application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="MindMend API", lifespan=lifespan)

    # Browser clients (the React SPA) call the API from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        return {"status": "MindMend backend running"}

    return app


app = create_app()
