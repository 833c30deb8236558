"""API endpoints for the clinic workflow."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Request

from clinic import __version__
from clinic.config import ClinicConfig
from clinic.errors import QueueUnderflow, RecordFileError
from clinic.models.workflow import (
    HealthResponse,
    LoadRequest,
    LoadResult,
    PassRequest,
    PassResult,
    ProcessRequest,
    ProcessResult,
    QueueName,
    QueueView,
    SearchResult,
    WorkflowErrorKind,
)
from clinic.services.loader import load_records
from clinic.services.workflow import WorkflowEngine
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

ERROR_STATUS = {
    WorkflowErrorKind.INVALID_ARGUMENT: 400,
    WorkflowErrorKind.ATTENTION_EMPTY: 409,
    WorkflowErrorKind.LEDGER_WRITE_FAILED: 500,
}


def get_engine(request: Request) -> WorkflowEngine:
    """Workflow engine owned by the running application."""
    return request.app.state.engine


def get_config(request: Request) -> ClinicConfig:
    """Configuration the application was built with."""
    return request.app.state.config


def _raise_for_error(result: PassResult | ProcessResult) -> None:
    if result.error is not None:
        raise HTTPException(status_code=ERROR_STATUS[result.error], detail=result.message)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(engine: WorkflowEngine = Depends(get_engine)) -> HealthResponse:
    """Health check endpoint."""
    counts = engine.counts()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
        waiting=counts[QueueName.WAITING.value],
        attention=counts[QueueName.ATTENTION.value],
    )


@router.post("/patients/load", response_model=LoadResult, tags=["Patients"])
async def load_patients(
    request: LoadRequest,
    engine: WorkflowEngine = Depends(get_engine),
    config: ClinicConfig = Depends(get_config),
) -> LoadResult:
    """Load a patient record file into the waiting queue."""
    path = request.path or config.patient_file
    try:
        report = load_records(path)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except RecordFileError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    loaded = engine.load(report.records)
    return LoadResult(path=path, loaded=loaded, skipped_lines=report.skipped, waiting=engine.waiting.size())


@router.get("/queues/{which}", response_model=QueueView, tags=["Queues"])
async def view_queue(which: QueueName, engine: WorkflowEngine = Depends(get_engine)) -> QueueView:
    """List the waiting or attention queue in order."""
    try:
        return engine.view_queue(which)
    except QueueUnderflow as e:
        raise HTTPException(status_code=500, detail=f"Queue underflow: {e}") from e


@router.post("/queues/pass", response_model=PassResult, tags=["Queues"])
async def pass_patients(request: PassRequest, engine: WorkflowEngine = Depends(get_engine)) -> PassResult:
    """Move patients from the waiting queue to attention."""
    logger.info(f"Pass request for {request.count} patient(s)")
    result = engine.pass_patients(request.count)
    _raise_for_error(result)
    return result


@router.get("/patients/{patient_id}", response_model=SearchResult, tags=["Patients"])
async def search_patient(
    patient_id: str,
    include_attention: bool = True,
    engine: WorkflowEngine = Depends(get_engine),
) -> SearchResult:
    """Find every patient with an ID. Not finding one is reported in the body, not as 404."""
    try:
        return engine.search_by_id(patient_id, include_attention=include_attention)
    except QueueUnderflow as e:
        raise HTTPException(status_code=500, detail=f"Queue underflow: {e}") from e


@router.post("/receipts", response_model=ProcessResult, tags=["Receipts"])
async def process_patients(request: ProcessRequest, engine: WorkflowEngine = Depends(get_engine)) -> ProcessResult:
    """Bill patients in attention and append a receipt session to the ledger."""
    logger.info(f"Process request for {request.count} patient(s)")
    try:
        result = engine.process_patients(request.count)
    except QueueUnderflow as e:
        logger.error(f"Queue underflow while processing: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Queue underflow: {e}") from e

    _raise_for_error(result)
    return result
