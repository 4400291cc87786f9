from contextlib import asynccontextmanager

from fastapi import FastAPI

from ticketdesk.api.routes import metrics, ping, tickets
from ticketdesk.core.config import get_settings
from ticketdesk.core.telemetry import configure_logging, start_tracing, stop_tracing
from ticketdesk.tickets import TicketService, TicketStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger = configure_logging(settings)
    tracer_provider = start_tracing(settings)
    logger.info("Serving %s (%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        stop_tracing(tracer_provider)


def create_app(service: TicketService | None = None) -> FastAPI:
    app = FastAPI(title=get_settings().app_name, lifespan=lifespan)
    app.state.ticket_service = service or TicketService(TicketStore())
    app.include_router(ping.router)
    app.include_router(metrics.router)
    app.include_router(tickets.router)
    return app


app = create_app()
