"""Marketing site backend - FastAPI server for contact requests and newsletter signups."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketing_service.shared.config import get_cors_origins, get_database_url, get_port
from marketing_service.shared.contact.routes import router as contact_router
from marketing_service.shared.newsletter.routes import router as newsletter_router
from marketing_service.shared.storage.base import SubmissionStore
from marketing_service.shared.storage.database import SqlSubmissionStore
from marketing_service.shared.storage.memory import MemorySubmissionStore


def build_store_from_env() -> SubmissionStore:
    """SQL store when DATABASE_URL is configured, in-memory store otherwise."""
    database_url = get_database_url()
    if database_url:
        logging.info("Using SQL submission store")
        return SqlSubmissionStore.from_url(database_url)
    logging.info("DATABASE_URL not set, keeping submissions in memory")
    return MemorySubmissionStore()


def _format_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        msg = error.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages) or "Invalid form data"


def create_app(store: Optional[SubmissionStore] = None) -> FastAPI:
    """
    Build the application around a single submission store.

    The store is owned by the app (app.state.store) and shared by every
    request. Tests pass their own store to get an isolated instance.
    """
    if store is None:
        store = build_store_from_env()

    app = FastAPI(
        title="Marketing Service",
        description="Contact requests and newsletter signups for the school outreach website",
        version="0.1.0"
    )
    app.state.store = store

    @app.on_event("startup")
    async def startup_event():
        app.state.store.initialize()
        logging.info("Submission store initialization completed on startup")

    app.include_router(contact_router)
    app.include_router(newsletter_router)

    cors_origins = get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def cors_headers(request: Request) -> dict:
        # Error responses built here bypass CORSMiddleware's header injection
        headers = {}
        origin = request.headers.get("origin")
        if origin in cors_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Access-Control-Allow-Credentials"] = "true"
        return headers

    @app.exception_handler(HTTPException)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Return HTTP errors as JSON with CORS headers."""
        if isinstance(exc.detail, dict):
            content = exc.detail
        elif isinstance(exc.detail, str):
            content = {"detail": exc.detail}
        else:
            content = {"detail": str(exc.detail)}

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=cors_headers(request)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Form validation failures are reported as 400 with a readable message."""
        error = _format_validation_error(exc)
        logging.warning(f"Rejected {request.method} {request.url.path}: {error}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": error},
            headers=cors_headers(request)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
            headers=cors_headers(request)
        )

    @app.get("/")
    async def root():
        return {"message": "Marketing Service API is running", "status": "ok"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_port())
