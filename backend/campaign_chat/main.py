from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core import (
    NO_MESSAGE,
    ChatError,
    ChatRequest,
    ChatResponse,
    InvalidRequestError,
    QueryExecutor,
    RowSet,
    UnexpectedFailureError,
    check_connection,
    get_connection,
    get_settings,
)
from .core.db import Connector
from .domain import CAMPAIGN_TABLE, classify_intent, template_for
from .insights import project, summarize
from .security import apply_row_limit

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Campaign Chat", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


# --- Error Responses ---

def _error_response(error: ChatError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=ChatResponse(error=error.message).model_dump(mode="json"),
    )


@app.exception_handler(ChatError)
async def _handle_chat_error(request: Request, exc: ChatError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def _handle_invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return _error_response(InvalidRequestError())


# --- Input Sanitization ---

# Maximum message length to prevent abuse
MAX_MESSAGE_LENGTH = 2000


def sanitize_user_input(message: str | None) -> str:
    """Truncate and trim the user's message."""
    if not message:
        return ""
    return message[:MAX_MESSAGE_LENGTH].strip()


# --- Dependencies ---

def get_connector() -> Connector:
    """Warehouse connection factory; overridden in tests."""
    return get_connection


# --- Pipeline ---

def answer_question(message: str, connect: Connector) -> ChatResponse:
    """Classify, query, and describe the result for one question."""
    config = get_settings().warehouse_config()

    intent = classify_intent(message)
    template = template_for(intent)
    logger.info(f"Selected query rule: {intent.rule.value} (topics={[t.value for t in intent.topics]})")

    rows = QueryExecutor(config, connect=connect).execute(template.sql)

    answer = summarize(rows, message, intent)
    chart = project(rows, message, intent)
    if chart is None:
        logger.info("No chart for this result")

    return ChatResponse(message=answer, chart=chart)


# --- API Endpoints ---

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/chat", response_model=ChatResponse)
@app.post("/api/snowflake", response_model=ChatResponse, include_in_schema=False)
def chat(request: ChatRequest, connect: Connector = Depends(get_connector)) -> ChatResponse:
    """
    Answer a question about the marketing campaigns.

    Returns a text summary and, when the rows allow it, a chart.
    """
    message = sanitize_user_input(request.message)
    if not message:
        raise InvalidRequestError(NO_MESSAGE)

    logger.info(f"Chat request: {message[:100]}... ({len(request.history)} history turns)")

    try:
        response = answer_question(message, connect)
    except ChatError as exc:
        logger.warning(f"Chat request failed: {type(exc).__name__}")
        raise
    except Exception as exc:
        logger.exception(f"Unexpected error in chat pipeline: {exc}")
        raise UnexpectedFailureError() from exc

    logger.info("Chat response complete")
    return response


@app.get("/api/campaigns")
def list_campaigns(connect: Connector = Depends(get_connector)) -> dict[str, Any]:
    """Raw campaign rows for the dashboard table."""
    current = get_settings()
    config = current.warehouse_config()
    sql = apply_row_limit(f"SELECT * FROM {CAMPAIGN_TABLE}", current.max_rows)

    try:
        rows: RowSet = QueryExecutor(config, connect=connect).execute(sql)
    except ChatError:
        raise
    except Exception as exc:
        logger.exception(f"Unexpected error listing campaigns: {exc}")
        raise UnexpectedFailureError() from exc

    return {"data": rows, "count": len(rows)}


@app.get("/api/warehouse/test")
def probe_warehouse(response: Response, connect: Connector = Depends(get_connector)) -> dict[str, Any]:
    """Test the warehouse connection."""
    config = get_settings().warehouse_config()
    result = check_connection(config, connect=connect)
    if not result["connected"]:
        response.status_code = 503
    return result
