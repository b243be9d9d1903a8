"""HTTP API for submitting receipts and querying points.

Endpoints:
    POST /receipts/process      - score a receipt, returns {"id": ...}
    GET  /receipts/{id}/points  - returns {"points": ...}
    GET  /health                - liveness check
"""

import json
import logging

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from receipt_points import __version__
from receipt_points.config import Settings, get_settings
from receipt_points.errors import (
    InvalidReceiptError,
    ReceiptError,
    ReceiptNotFoundError,
)
from receipt_points.models import PointsResponse, ProcessReceiptResponse
from receipt_points.service import SubmissionService, create_service

logger = logging.getLogger(__name__)

PROCESS_RECEIPT_PATH = "/receipts/process"
GET_POINTS_PATH = "/receipts/{receipt_id}/points"
SUBMITTER_HEADER = "X-Submitter-Id"


async def receipt_error_handler(
    request: Request, exc: ReceiptError
) -> PlainTextResponse:
    """
    Map service errors to their fixed public message.

    Only the message is returned; the internal reason stays in the log.
    """
    status_code = 500
    if isinstance(exc, InvalidReceiptError):
        status_code = 400
    elif isinstance(exc, ReceiptNotFoundError):
        status_code = 404

    return PlainTextResponse(str(exc), status_code=status_code)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "type": "InternalError"},
    )


def get_service(request: Request) -> SubmissionService:
    return request.app.state.service


async def _read_body(request: Request) -> bytes:
    return await request.body()


def create_app(
    service: SubmissionService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        service: Submission service to serve; a fresh one is created from
            settings when omitted
        settings: Configuration (default: ``get_settings()``)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    if service is None:
        service = create_service(window=settings.afternoon_window)

    app = FastAPI(
        title="Receipt Points API",
        description="Scores purchase receipts and serves their reward points",
        version=__version__,
    )
    app.state.service = service
    app.state.settings = settings

    app.add_exception_handler(ReceiptError, receipt_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Plain def endpoints run in the threadpool, so the service sees
    # genuinely concurrent callers.
    @app.post(PROCESS_RECEIPT_PATH, response_model=ProcessReceiptResponse)
    def process_receipt(
        body: bytes = Depends(_read_body),
        submitter_id: str | None = Header(None, alias=SUBMITTER_HEADER),
        service: SubmissionService = Depends(get_service),
    ):
        """Validate a receipt, then calculate and store its points."""
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidReceiptError(f"body is not JSON: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidReceiptError("body is not a JSON object")

        submitter_key = submitter_id or settings.default_submitter
        return ProcessReceiptResponse(id=service.submit(payload, submitter_key))

    @app.get(GET_POINTS_PATH, response_model=PointsResponse)
    def get_points(
        receipt_id: str,
        service: SubmissionService = Depends(get_service),
    ):
        """Return the points stored for a receipt ID."""
        return PointsResponse(points=service.query(receipt_id))

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "receipt-points"}

    return app
