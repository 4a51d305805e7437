"""
Answer stream.

Caller-facing iterator over the generated fragments of one request. The first
fragment is fetched before the stream is handed out, so every failure up to
that point surfaces as a normal error response. After that, failures can only
end the stream abnormally.

Dependencies: nomnom.core.exceptions
System role: Response streamer between generation and transport
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from nomnom.core.exceptions import MidStreamFailureError

logger = logging.getLogger(__name__)


class AnswerStream:
    """
    Forwards fragments in arrival order without buffering.

    Attributes:
        completed: True once the upstream stream ended cleanly
        fragment_count: Fragments handed to the caller so far
    """

    def __init__(
        self,
        first_fragment: str | None,
        fragments: AsyncGenerator[str, None],
    ) -> None:
        """
        Initialize the stream.

        Args:
            first_fragment: Already received first fragment, None if generation was empty
            fragments: Upstream generator positioned after the first fragment
        """
        self._pending = first_fragment
        self._fragments = fragments
        self._closed = False
        self.completed = first_fragment is None
        self.fragment_count = 0

        if first_fragment is None:
            self._closed = True

    def __aiter__(self) -> "AnswerStream":
        return self

    async def __anext__(self) -> str:
        if self._pending is not None:
            fragment, self._pending = self._pending, None
            self.fragment_count += 1
            return fragment
        if self._closed:
            raise StopAsyncIteration

        try:
            fragment = await anext(self._fragments)
        except StopAsyncIteration:
            self.completed = True
            self._closed = True
            logger.info(
                f"{__name__}:__anext__ - stream complete",
                extra={"fragments": self.fragment_count},
            )
            raise
        except asyncio.CancelledError:
            logger.info(
                f"{__name__}:__anext__ - stream cancelled",
                extra={"fragments": self.fragment_count},
            )
            await self.aclose()
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:__anext__ - generation failed mid-stream: {type(e).__name__}: {e}",
                extra={"fragments": self.fragment_count},
            )
            await self.aclose()
            raise MidStreamFailureError(
                "Answer stream terminated before completion",
                fragments_sent=self.fragment_count,
                details={"cause": type(e).__name__},
            ) from e

        self.fragment_count += 1
        return fragment

    async def aclose(self) -> None:
        """Stop consuming and close the upstream generation. Idempotent."""
        self._pending = None
        if self._closed and self.completed:
            return
        was_open = not self._closed
        self._closed = True
        await self._fragments.aclose()
        if was_open:
            logger.info(
                f"{__name__}:aclose - upstream generation closed",
                extra={"fragments": self.fragment_count},
            )
