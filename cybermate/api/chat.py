"""Chat relay endpoint.

Injects the mode's system prompt and the gateway credential, forwards the
conversation as a streaming chat-completion call, and passes the upstream
event stream back to the browser unaltered. Upstream 429 and 402 keep their
status so the client can tell rate limiting and quota exhaustion apart;
every other failure becomes a 500 with the upstream status echoed.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from cybermate.agent.config import RelayConfig
from cybermate.agent.prompts import system_prompt_for
from cybermate.errors import QUOTA_MESSAGE, RATE_LIMIT_MESSAGE
from cybermate.models.schemas import ChatRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def get_config(request: Request) -> RelayConfig:
    return request.app.state.relay_config


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the app-wide upstream client, creating it on first use."""
    client = request.app.state.http_client
    if client is None:
        client = httpx.AsyncClient(timeout=request.app.state.relay_config.timeout)
        request.app.state.http_client = client
    return client


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def build_upstream_payload(payload: ChatRequest, config: RelayConfig) -> dict:
    """Build the chat-completion body with the system prompt prepended.

    Args:
        payload: The client's request.
        config: Relay configuration (model selection).

    Returns:
        JSON-serializable body requesting a streamed completion.
    """
    messages = [{"role": "system", "content": system_prompt_for(payload.mode)}]
    messages.extend(message.model_dump(mode="json") for message in payload.messages)
    return {
        "model": config.model_name,
        "messages": messages,
        "stream": True,
    }


@router.post("/chat-ai", response_model=None)
async def chat_ai(
    payload: ChatRequest,
    config: RelayConfig = Depends(get_config),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """Relay a chat turn to the LLM gateway and stream the answer back.

    Args:
        payload: Conversation history and persona mode.

    Returns:
        ``text/event-stream`` passthrough on success, otherwise a JSON
        ``ErrorResponse``.

    Raises:
        422: Malformed body (FastAPI validation). Unknown modes are not an
            error; they are answered with the assessment prompt.
    """
    logger.info(
        f"Chat request received: mode={payload.mode.value}, messages={len(payload.messages)}"
    )

    if not config.has_api_key:
        logger.error("LLM_API_KEY not configured")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "LLM_API_KEY is not configured"
        )

    upstream_request = client.build_request(
        "POST",
        config.completions_url,
        json=build_upstream_payload(payload, config),
        headers={"Authorization": f"Bearer {config.api_key}"},
    )

    try:
        upstream = await client.send(upstream_request, stream=True)
    except httpx.RequestError as e:
        logger.error(f"AI gateway unreachable: {e}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"AI gateway unreachable: {e}"
        )

    if not upstream.is_success:
        body = await upstream.aread()
        await upstream.aclose()
        error_text = body.decode("utf-8", errors="replace")
        logger.error(f"AI gateway error: {upstream.status_code} {error_text}")

        if upstream.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
            return _error_response(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMIT_MESSAGE)
        if upstream.status_code == status.HTTP_402_PAYMENT_REQUIRED:
            return _error_response(status.HTTP_402_PAYMENT_REQUIRED, QUOTA_MESSAGE)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"AI gateway error: {upstream.status_code} {error_text}",
        )

    logger.info(f"Streaming response for mode={payload.mode.value}")
    return StreamingResponse(
        upstream.aiter_bytes(),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
        background=BackgroundTask(upstream.aclose),
    )
