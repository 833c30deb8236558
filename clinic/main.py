"""Main FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from clinic import __version__
from clinic.api.endpoints import router
from clinic.config import ClinicConfig
from clinic.errors import RecordFileError
from clinic.services.ledger import ReceiptLedger
from clinic.services.loader import load_records
from clinic.services.workflow import WorkflowEngine
from clinic.utils.logging import LogConfig, get_logger, setup_logging

logger = get_logger(__name__)


def create_app(config: ClinicConfig | None = None) -> FastAPI:
    """Build the application with its own workflow engine."""
    config = config or ClinicConfig.from_env()
    setup_logging(LogConfig(level=config.log_level))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if config.load_on_startup:
            try:
                report = load_records(config.patient_file)
                app.state.engine.load(report.records)
            except FileNotFoundError:
                logger.warning(f"Starting with an empty waiting queue, no record file at {config.patient_file}")
            except RecordFileError as e:
                logger.error(f"Starting with an empty waiting queue: {e}")
        yield

    app = FastAPI(
        title="Le Clinik",
        description="Patient flow for a single clinic: waiting and attention queues with billed receipts.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Queues", "description": "View queues and pass patients to attention."},
            {"name": "Patients", "description": "Load record files and search patients by ID."},
            {"name": "Receipts", "description": "Bill patients in attention into the receipt ledger."},
            {"name": "Health", "description": "Service health monitoring and status checks."},
        ],
    )

    app.state.config = config
    app.state.engine = WorkflowEngine(ledger=ReceiptLedger(config.receipt_file))

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("clinic.main:app", host="0.0.0.0", port=8000, log_level="info")
