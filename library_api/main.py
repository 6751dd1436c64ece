from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .api.routers import book_copies, books, loans, users
from .core.config import get_settings
from .core.logging import configure_logging, get_logger
from .db_connection import get_engine
from .errors import LibraryError, StoreError
from .tables import create_schema

logger = get_logger(__name__)


def create_app(engine=None) -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings["log_level"])
        if getattr(app.state, "engine", None) is None:
            app.state.engine = get_engine(settings["database_url"] or None)
        create_schema(app.state.engine)
        logger.info("Library API started (%s)", settings["environment"])
        yield

    app = FastAPI(
        title="Library Lending API",
        version="1.0.0",
        description="All timestamps are UTC. Datetimes sent without an offset are read as UTC.",
        lifespan=lifespan,
    )
    app.state.engine = engine

    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError):
        if isinstance(exc, StoreError):
            return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error."})
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        logger.warning("Validation failed for %s %s", request.method, request.url.path)
        return JSONResponse(status_code=400, content={"detail": errors})

    @app.get("/health")
    def healthcheck():
        try:
            with app.state.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Health check could not reach the database")
            return JSONResponse(status_code=503, content={"status": "degraded"})
        return {"status": "ok"}

    prefix = settings["api_prefix"]
    app.include_router(books.router, prefix=f"{prefix}/books", tags=["books"])
    app.include_router(book_copies.router, prefix=f"{prefix}/bookcopies", tags=["book copies"])
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(loans.router, prefix=f"{prefix}/loans", tags=["loans"])
    return app


app = create_app()
