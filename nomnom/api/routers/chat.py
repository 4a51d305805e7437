"""Chat API endpoints.

Routes:
- POST /chat - Stream the answer as plain text fragments
- POST /chat/stream - Stream the answer using Server-Sent Events (SSE)

Both routes run the whole pipeline up to the first fragment before the
response starts, so pre-stream failures reach the exception handlers and
come back as JSON errors.

Dependencies: nomnom.application.services.chat_service
System role: Chat HTTP API with streaming support
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from nomnom.api.deps import get_chat_service
from nomnom.application.answer_stream import AnswerStream
from nomnom.application.services import ChatService
from nomnom.core.exceptions import MidStreamFailureError
from nomnom.models.chat import ChatRequest
from nomnom.models.streaming import StreamEvent, StreamEventType
from nomnom.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


class AnswerStreamingResponse(StreamingResponse):
    """StreamingResponse that always closes the answer stream.

    Runs on completion, failure and client disconnect, so upstream
    generation never outlives the response.
    """

    def __init__(self, content, answer: AnswerStream, **kwargs) -> None:
        super().__init__(content, **kwargs)
        self.answer = answer

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except MidStreamFailureError as e:
            # Re-raised so the server drops the connection without the final chunk.
            logger.error(
                f"{__name__}:AnswerStreamingResponse - aborting response: {e.message}",
                extra={
                    "fragments_sent": e.fragments_sent,
                    "cause": e.details.get("cause"),
                },
            )
            raise
        finally:
            if not self.answer.completed:
                logger.info(
                    f"{__name__}:AnswerStreamingResponse - closing unfinished stream",
                    extra={"fragments": self.answer.fragment_count},
                )
            await self.answer.aclose()


@router.post("/chat", response_class=StreamingResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Answer a recipe question as a plain-text stream.

    The body is the answer's fragments in order with no envelope. If
    generation fails after the first fragment the connection is aborted
    without the terminating chunk, so the client sees an incomplete body.

    Args:
        request: ChatRequest with query and chat history
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: text/plain fragment stream

    Raises:
        QueryValidationError: Empty query (422)
        UpstreamUnavailableError: Service failure before the first fragment (503)
        ConfigurationError: Dimension or template problem (500)
    """
    log_with_context(
        logger, logging.INFO, f"{__name__}:chat - START", history_turns=len(request.chat_history)
    )
    answer = await chat_service.answer(request.query, request.chat_history)

    return AnswerStreamingResponse(
        answer,
        answer=answer,
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )


@router.post("/chat/stream", response_class=StreamingResponse)
async def chat_stream(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Answer a recipe question using Server-Sent Events (SSE).

    SSE Format:
        event: token
        data: {"token": "...", "index": 0}

        event: complete
        data: {"full_answer": "..."}

        event: error
        data: {"code": "MID_STREAM_FAILURE", "message": "...", "fragments_sent": 3}

    Args:
        request: ChatRequest with query and chat history
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: SSE stream of chat events
    """
    log_with_context(
        logger, logging.INFO, f"{__name__}:chat_stream - START", history_turns=len(request.chat_history)
    )
    answer = await chat_service.answer(request.query, request.chat_history)

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE events from the answer stream."""
        fragments: list[str] = []
        try:
            async for fragment in answer:
                yield StreamEvent(
                    event=StreamEventType.TOKEN,
                    data={"token": fragment, "index": len(fragments)},
                ).to_sse()
                fragments.append(fragment)
        except MidStreamFailureError as e:
            logger.error(f"{__name__}:chat_stream - {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={
                    "code": "MID_STREAM_FAILURE",
                    "message": e.message,
                    "fragments_sent": e.fragments_sent,
                },
            ).to_sse()
            return

        yield StreamEvent(
            event=StreamEventType.COMPLETE,
            data={"full_answer": "".join(fragments)},
        ).to_sse()
        logger.info(f"{__name__}:chat_stream - Stream completed, fragments={len(fragments)}")

    return AnswerStreamingResponse(
        event_generator(),
        answer=answer,
        media_type="text/event-stream",
        headers={**STREAM_HEADERS, "Connection": "keep-alive"},
    )
