from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from damage_claims.config import get_settings
from damage_claims.infrastructure.database import SessionLocal, engine, initialize_database
from damage_claims.infrastructure.notifications import build_notification_dispatcher
from damage_claims.interfaces.api.routes import register_routes
from damage_claims.interfaces.scheduler import ReminderScheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database, delivery pool and reminder schedule; release them on exit."""

    settings = get_settings()
    initialize_database()

    dispatcher = build_notification_dispatcher(settings)
    scheduler = ReminderScheduler(SessionLocal, dispatcher)
    app.state.notification_dispatcher = dispatcher
    app.state.reminder_scheduler = scheduler
    if settings.enable_reminder_scheduler:
        scheduler.start()

    yield

    scheduler.shutdown()
    dispatcher.shutdown(wait=False)
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Damage Claims Notifier", lifespan=lifespan)

    # The web client calls the manual reminder trigger from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[get_settings().frontend_url.rstrip("/")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
