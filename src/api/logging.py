"""SQLite request logging for API."""

import logging
import sqlite3
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import HTTPException, status

from api.models.responses import ErrorCodes
from core.config import DB_PATH

logger = logging.getLogger(__name__)


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    events_processed: int | None = None
    violations_count: int | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog) -> None:
    """
    Write request log to SQLite database.

    Does nothing until scripts/init_db.py has created the database, so a
    missing log never leaves an empty file behind.
    """
    if not DB_PATH.exists():
        logger.debug("Request log database not found at %s; skipping", DB_PATH)
        return

    conn = sqlite3.connect(DB_PATH)
    try:
        cursor = conn.cursor()

        cursor.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip,
                status_code, error_code, error_message, processing_time_ms,
                events_processed, violations_count
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.events_processed,
                log.violations_count,
            ),
        )

        for detail_type, message in log.details:
            cursor.execute(
                """
                INSERT INTO api_request_details (request_id, detail_type, message)
                VALUES (?, ?, ?)
            """,
                (log.request_id, detail_type, message),
            )

        conn.commit()
    finally:
        conn.close()


@contextmanager
def track_request(request_log: RequestLog, validation_error: str = "Request validation failed"):
    """
    Time a request, map service errors to HTTP errors and log the outcome.

    ValueError from the services becomes a 422 with one detail per line;
    anything unexpected becomes a 500. The log is always written, and a
    logging failure never fails the request.
    """
    start_time = time.time()
    try:
        yield request_log
        if not request_log.status_code:
            request_log.status_code = 200

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        raise

    except ValueError as e:
        error_msg = str(e)
        details = [d.strip() for d in error_msg.split("\n") if d.strip()]
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = error_msg
        for detail in details:
            request_log.details.append(("validation_error", detail))

        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": validation_error,
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": details,
            },
        ) from e

    except Exception as e:
        logger.exception("Unhandled error on %s", request_log.endpoint)
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        ) from e

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        try:
            log_request(request_log)
        except sqlite3.Error as e:
            logger.warning("Failed to log request %s: %s", request_log.request_id, e)
