"""Endpoint receiving debug log batches from the frontend."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from lawnmower_api.models import DebugLogRequest
from lawnmower_api.services import (
    DebugLogService,
    InvalidLogBatchError,
    LogStoreConnectionError,
    LogWriteError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["debug-logs"])

INVALID_BATCH_MESSAGE = "Invalid or empty logs array provided."


def get_debug_log_service(request: Request) -> DebugLogService:
    """Debug log service created by the app factory."""
    return request.app.state.debug_log_service


@router.post("/submit-debug-log")
async def submit_debug_log(
    request: Request,
    service: DebugLogService = Depends(get_debug_log_service),
) -> JSONResponse:
    """
    Store a batch of client log entries atomically.

    Body: {"logs": [...], "sessionId": "...", "userId": "..."}. Each entry is
    either a string or an object with "message" and optional "level".
    """
    raw_body = await request.body()

    try:
        payload = DebugLogRequest.model_validate_json(raw_body)
    except ValidationError as e:
        logger.info(f"Rejected debug log batch: {e.error_count()} validation error(s)")
        return JSONResponse(status_code=400, content={"error": INVALID_BATCH_MESSAGE})

    try:
        await run_in_threadpool(
            service.store_batch, payload.logs, payload.session_id, payload.user_id
        )
    except InvalidLogBatchError:
        return JSONResponse(status_code=400, content={"error": INVALID_BATCH_MESSAGE})
    except LogStoreConnectionError:
        logger.exception("Error connecting to the log store")
        return JSONResponse(
            status_code=500, content={"error": "Database connection error for logging."}
        )
    except LogWriteError:
        logger.exception("Error inserting debug logs")
        return JSONResponse(status_code=500, content={"error": "Failed to store logs in database."})

    return JSONResponse(
        status_code=200, content={"message": "Logs received and stored successfully."}
    )
