from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import logger, get_settings, check_api_keys_on_startup
from db import Database, HistoryStore
from exceptions import FactCheckException, InvalidInput, AuthenticationRequired
from middleware import RequestContextMiddleware, get_request_id
from models import (
    AnalyzeRequest,
    AnalysisRecord,
    TrendingClaim,
    DeleteResponse,
    ErrorResponse,
)
from services import GeminiClient, ClaimSubmissionService, HistoryService

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    check_api_keys_on_startup(settings)

    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    database.create_all()

    app.state.settings = settings
    app.state.database = database
    app.state.store = HistoryStore(database)
    app.state.provider = GeminiClient(settings.GEMINI_API_KEY, settings.GEMINI_ENDPOINT)
    logger.info(f"FactCheck API started (model={settings.GEMINI_MODEL}, owner_scoped={settings.OWNER_SCOPED}).")

    yield

    database.dispose()
    logger.info("FactCheck API shut down.")


app = FastAPI(title="FactCheck API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(FactCheckException)
async def factcheck_exception_handler(request: Request, exc: FactCheckException):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"[{get_request_id()}] {request.method} {request.url.path} failed: {exc.to_dict()}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.user_message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    loc = errors[0].get("loc", ()) if errors else ()
    if loc and loc[0] == "body":
        error = InvalidInput("claimText", "claimText (string) is required and cannot be empty.")
    else:
        field = str(loc[-1]) if loc else "request"
        error = InvalidInput(field, f"Invalid value for {field}.")
    return await factcheck_exception_handler(request, error)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[{get_request_id()}] Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": FactCheckException.user_message})


def get_owner_id(request: Request) -> Optional[str]:
    """Caller identity in owner-scoped deployments, None otherwise."""
    settings = request.app.state.settings
    if not settings.OWNER_SCOPED:
        return None
    owner_id = (request.headers.get(settings.OWNER_HEADER) or "").strip()
    if not owner_id:
        raise AuthenticationRequired(settings.OWNER_HEADER)
    return owner_id


def get_submission_service(request: Request) -> ClaimSubmissionService:
    state = request.app.state
    return ClaimSubmissionService(state.provider, state.store, state.settings)


def get_history_service(request: Request) -> HistoryService:
    state = request.app.state
    return HistoryService(state.store, state.settings)


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "FactCheck API is running."}


@app.post("/analysis", status_code=201, response_model=AnalysisRecord, responses=ERROR_RESPONSES)
async def analyze_claim(
    req: AnalyzeRequest,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: ClaimSubmissionService = Depends(get_submission_service),
):
    """Fact-check a claim with the grounded LLM and store the result."""
    return await service.submit(req.claim_text, owner_id=owner_id)


@app.get("/analysis/history", response_model=List[AnalysisRecord], responses=ERROR_RESPONSES)
async def get_history(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: Optional[str] = Depends(get_owner_id),
    service: HistoryService = Depends(get_history_service),
):
    return await service.list_recent(owner_id=owner_id, limit=limit)


@app.get("/analysis/trending", response_model=List[TrendingClaim], responses=ERROR_RESPONSES)
async def get_trending(service: HistoryService = Depends(get_history_service)):
    return await service.trending()


@app.get("/analysis/{record_id}", response_model=AnalysisRecord, responses=ERROR_RESPONSES)
async def get_analysis(
    record_id: str,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: HistoryService = Depends(get_history_service),
):
    return await service.get(record_id, owner_id=owner_id)


@app.delete("/history/{record_id}", response_model=DeleteResponse, responses=ERROR_RESPONSES)
async def delete_history_item(
    record_id: str,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: HistoryService = Depends(get_history_service),
):
    deleted_id = await service.delete(record_id, owner_id=owner_id)
    return DeleteResponse(message="History item deleted successfully.", id=deleted_id)
