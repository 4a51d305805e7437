"""
Streaming generation client.

Invokes a LangChain chat model once per request and exposes its output as an
async generator of text fragments. Waiting for each fragment is bounded;
closing the generator closes the upstream stream.

Dependencies: langchain_core.language_models, nomnom.core.exceptions
System role: Generation service adapter
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from langchain_core.language_models import BaseChatModel

from nomnom.core.exceptions import UpstreamTimeoutError, UpstreamUnavailableError
from nomnom.models.prompt import ComposedPrompt

logger = logging.getLogger(__name__)

SERVICE = "generation"


def chunk_text(content: Any) -> str:
    """Normalise chunk content (string or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str)
            else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class GenerationClient:
    """Streams fragments from a chat model."""

    def __init__(
        self,
        chat_model: BaseChatModel,
        first_fragment_timeout_seconds: float = 30.0,
        idle_timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize generation client.

        Args:
            chat_model: LangChain chat model with fixed decoding parameters
            first_fragment_timeout_seconds: Bound for the first fragment
            idle_timeout_seconds: Bound between two fragments
        """
        self._chat_model = chat_model
        self._first_timeout = first_fragment_timeout_seconds
        self._idle_timeout = idle_timeout_seconds

    async def generate(self, prompt: ComposedPrompt) -> AsyncIterator[str]:
        """
        Stream the answer to a prompt.

        Finite and not restartable; consume it once.

        Args:
            prompt: Composed prompt

        Yields:
            str: Non-empty text fragments in arrival order

        Raises:
            UpstreamTimeoutError: If a fragment does not arrive in time
            UpstreamUnavailableError: If the model call fails
        """
        stream = self._chat_model.astream(prompt.to_messages())
        timeout = self._first_timeout
        fragment_index = 0
        try:
            while True:
                try:
                    async with asyncio.timeout(timeout):
                        chunk = await anext(stream)
                except StopAsyncIteration:
                    break
                except TimeoutError as e:
                    logger.warning(
                        f"{__name__}:generate - timed out",
                        extra={"timeout_seconds": timeout, "fragment_index": fragment_index},
                    )
                    raise UpstreamTimeoutError(
                        SERVICE,
                        timeout,
                        details={"fragment_index": fragment_index},
                    ) from e
                except Exception as e:
                    logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
                    raise UpstreamUnavailableError(
                        f"Generation failed: {e}",
                        service=SERVICE,
                        details={"fragment_index": fragment_index},
                    ) from e

                text = chunk_text(chunk.content)
                if not text:
                    continue
                fragment_index += 1
                timeout = self._idle_timeout
                yield text
        finally:
            await stream.aclose()
            logger.debug(
                f"{__name__}:generate - upstream stream closed",
                extra={"fragments": fragment_index},
            )
