"""
Gateway Router - Runs every other request through the pipeline.

This module is the listener and response writer for the pipeline: it turns
the incoming request into an Exchange, executes the compiled pipeline and
serializes the exchange's status and body back to the client.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from ....errors import PipelineError
from ....models.exchange import Exchange
from ....services.pipeline_factory import pipeline_factory

logger = logging.getLogger("pipeline.api.gateway")

router = APIRouter(tags=["gateway"])

CORRELATION_HEADER = "X-Correlation-ID"
SERVER_ERROR_MESSAGE = "Internal Server Error"
PIPELINE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def query_from_request(request: Request) -> Dict[str, str]:
    """Flatten query parameters; repeated keys are joined with commas in arrival order."""
    return {key: ",".join(request.query_params.getlist(key)) for key in request.query_params.keys()}


def exchange_from_request(request: Request) -> Exchange:
    """Build an Exchange from a Starlette request."""
    exchange = Exchange(
        path=request.url.path,
        query=query_from_request(request),
        headers=dict(request.headers),
        remote_address=request.client.host if request.client else None,
        method=request.method,
    )
    correlation_id = request.headers.get(CORRELATION_HEADER)
    if correlation_id:
        exchange.exchange_id = correlation_id
    return exchange


def response_from_exchange(exchange: Exchange) -> Response:
    return Response(
        content=exchange.body_bytes(),
        status_code=exchange.status_code or 200,
        media_type="text/plain",
        headers={CORRELATION_HEADER: exchange.exchange_id},
    )


@router.api_route("/{full_path:path}", methods=PIPELINE_METHODS, include_in_schema=False)
async def gateway(request: Request) -> Response:
    """Execute the pipeline for the request and write the resulting response."""
    exchange = exchange_from_request(request)

    try:
        await pipeline_factory.get().execute(exchange)
    except PipelineError:
        logger.exception(f"[{exchange.exchange_id}] Pipeline failed for {exchange.path}")
        return PlainTextResponse(
            SERVER_ERROR_MESSAGE,
            status_code=500,
            headers={CORRELATION_HEADER: exchange.exchange_id},
        )

    return response_from_exchange(exchange)
