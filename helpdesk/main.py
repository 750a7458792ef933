"""
HelpDesk - FastAPI Backend
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from helpdesk import __version__
from helpdesk.config import get_settings
from helpdesk.exceptions import HelpdeskError
from helpdesk.middleware.logging_middleware import LoggingMiddleware
from helpdesk.models.schemas import ErrorResponse
from helpdesk.repositories import (
    CommentRepository,
    ProfileRepository,
    RoleRepository,
    TicketRepository,
)
from helpdesk.routes import analytics, assist, auth, health, tickets
from helpdesk.services.ai_actions import MockAIActions
from helpdesk.services.auth import AuthService, SessionRegistry
from helpdesk.services.ticket_detail import TicketDetailService
from helpdesk.services.tickets import TicketService
from helpdesk.utils.logger import setup_logger

settings = get_settings()
logger = setup_logger("helpdesk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the Supabase-backed services once; drop sessions at shutdown."""
    from supabase import create_client

    client = create_client(
        settings.supabase_url,
        settings.supabase_service_role_key or settings.supabase_key
    )

    ticket_repo = TicketRepository(client)
    registry = SessionRegistry(ttl_seconds=settings.session_ttl_seconds)

    app.state.ticket_repo = ticket_repo
    app.state.ticket_service = TicketService(ticket_repo, settings)
    app.state.detail_service = TicketDetailService(
        ticket_repo, CommentRepository(client), ProfileRepository(client)
    )
    app.state.session_registry = registry
    app.state.auth_service = AuthService(client, RoleRepository(client), registry)
    app.state.ai_provider = MockAIActions(delay_seconds=settings.ai_mock_delay_seconds)

    logger.info("HelpDesk API %s started (%s)", __version__, settings.fastapi_env)
    try:
        yield
    finally:
        registry.clear()
        logger.info("HelpDesk API stopped")


app = FastAPI(
    title="HelpDesk",
    description="Help-desk ticketing API with SLA tracking",
    version=__version__,
    lifespan=lifespan
)

# Middleware runs bottom-up: CORS first, then logging
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(HelpdeskError)
async def helpdesk_error_handler(request: Request, exc: HelpdeskError):
    """Render application errors as ErrorResponse."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.error, request.method, request.url.path, exc.message)
    else:
        logger.warning("%s on %s %s: %s", exc.error, request.method, request.url.path, exc.message)

    body = ErrorResponse(error=exc.error, message=exc.message, detail=exc.details or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    body = ErrorResponse(
        error="internal_error",
        message=str(exc) if settings.is_development else "Internal server error"
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


app.include_router(tickets.router)
app.include_router(assist.router)
app.include_router(analytics.router)
app.include_router(auth.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {"message": "HelpDesk API", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.fastapi_host, port=settings.fastapi_port)
