"""Main entrypoint and application factory for the Premios de la Quincena API.

This module initializes the FastAPI application, configures logging, creates the summaries table on
startup, and exposes the Scalar API reference endpoint for interactive OpenAPI documentation. It also
includes the main entrypoint for running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from quincena.api.routes import router
from quincena.core.db import init_db
from quincena.core.settings import get_settings
from quincena.core.utils import LOGGER_NAMESPACE, ensure_dir, get_logger


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure logging to file and console for every ``premios-quincena.*`` logger."""
    settings = get_settings()
    ensure_dir(settings.log_dir)
    file_handler = logging.FileHandler(Path(settings.log_dir) / settings.log_file)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(LOGGER_NAMESPACE):
            logger = get_logger(name)
            logger.setLevel(logging.INFO)
            # Add file handler for persistent logs (not colorized)
            if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
                logger.addHandler(file_handler)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler: set up logging and create the monthly summaries table."""
    _ = app  # Silence unused argument warning
    setup_logging()
    logger = get_logger(f"{LOGGER_NAMESPACE}.app")
    settings = get_settings()
    try:
        init_db(create_engine(settings.database_url))
    except SQLAlchemyError:
        logger.exception("Failed to create monthly_summaries table")
        raise
    logger.info(f"Database ready: {settings.database_url}")
    yield


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Premios de la Quincena API",
    description="""
    Premios de la Quincena reads a bank statement and hands out awards for your least responsible spending habits.

    **Endpoints:**
    - `POST /analyze`: Analyze a JSON list of transactions.
    - `POST /analyze/csv`: Upload a CSV statement and analyze it.
    - `POST /analyze/pdf`: Upload a PDF statement; transactions are extracted by an LLM.
    - `POST /parse-pdf`: Extract transactions from PDF statement text.
    - `GET /history`: Monthly summaries and award streaks for your session.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version="1.0.0",
)
app.include_router(router)


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> HTMLResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


def run() -> None:
    """Run the API with Uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("quincena.main:app", host=settings.server_host, port=settings.server_port, reload=True)


if __name__ == "__main__":
    run()
