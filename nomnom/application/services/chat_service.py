"""
Chat service for grounded recipe Q&A.

Orchestrates the full pipeline for one question: embed, retrieve, sanitize,
format history, compose the prompt and start generation. Returns an
AnswerStream once the first fragment has arrived.

Dependencies: nomnom.application.service_context, nomnom.core
System role: Chat service orchestration layer
"""

import logging
from collections.abc import Sequence

from nomnom.application.answer_stream import AnswerStream
from nomnom.application.service_context import ServiceContext
from nomnom.core.context_sanitizer import sanitize
from nomnom.core.exceptions import QueryValidationError
from nomnom.core.history_formatter import format_history, recent_turns
from nomnom.core.prompts.recipe_prompt import SYSTEM_TEMPLATE, compose
from nomnom.models.chat import ConversationTurn

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for recipe questions.

    Stateless across requests; every intermediate value lives for one call.
    """

    def __init__(
        self,
        context: ServiceContext,
        top_k: int = 4,
        history_window: int = 10,
        system_template: str = SYSTEM_TEMPLATE,
    ) -> None:
        """
        Initialize chat service.

        Args:
            context: Shared clients
            top_k: Recipes retrieved per question
            history_window: Most recent turns kept (0 keeps all)
            system_template: System prompt with {history} and {context} slots
        """
        self.context = context
        self.top_k = top_k
        self.history_window = history_window
        self.system_template = system_template

    async def answer(
        self,
        query: str,
        chat_history: Sequence[ConversationTurn] = (),
    ) -> AnswerStream:
        """
        Answer a question as a stream of fragments.

        Flow:
        1. Validate the query
        2. Embed the query
        3. Retrieve similar recipes (none is fine)
        4. Sanitize records into the context block
        5. Format the history block
        6. Compose the prompt
        7. Start generation and wait for the first fragment

        Args:
            query: User question
            chat_history: Prior turns, oldest first

        Returns:
            AnswerStream: Stream positioned at the first fragment

        Raises:
            QueryValidationError: If the query is blank
            UpstreamUnavailableError: If a service fails before the first fragment
            UpstreamTimeoutError: If a service exceeds its bound
            ConfigurationError: On dimension or template problems
        """
        # Step 1: Validate before any external call
        question = query.strip() if isinstance(query, str) else ""
        if not question:
            logger.warning(f"{__name__}:answer - rejected empty query")
            raise QueryValidationError("Query must not be empty", field="query")

        logger.info(
            f"{__name__}:answer - START question_len={len(question)}, history_turns={len(chat_history)}"
        )

        # Step 2: Embed
        query_vector = await self.context.embedder.embed(question)
        logger.info(f"{__name__}:answer - Step 2 OK: embedded (dim={len(query_vector)})")

        # Step 3: Retrieve
        records = await self.context.retriever.retrieve(query_vector, self.top_k)
        if not records:
            logger.warning(f"{__name__}:answer - Step 3: no grounding context, continuing")
        else:
            logger.info(f"{__name__}:answer - Step 3 OK: retrieved {len(records)} recipes")

        # Steps 4-6: Pure transforms
        context_block = sanitize(records)
        history_block = format_history(recent_turns(chat_history, self.history_window))
        prompt = compose(self.system_template, context_block, history_block, question)
        logger.info(
            f"{__name__}:answer - Steps 4-6 OK: context_len={len(context_block)}, "
            f"history_len={len(history_block)}"
        )

        # Step 7: Prime generation so failures before any output raise here
        fragments = self.context.generator.generate(prompt)
        try:
            first_fragment = await anext(fragments)
        except StopAsyncIteration:
            logger.warning(f"{__name__}:answer - generation produced no fragments")
            return AnswerStream(first_fragment=None, fragments=fragments)
        except BaseException:
            await fragments.aclose()
            raise

        logger.info(f"{__name__}:answer - Step 7 OK: first fragment received, streaming")
        return AnswerStream(first_fragment=first_fragment, fragments=fragments)

    async def answer_text(
        self,
        query: str,
        chat_history: Sequence[ConversationTurn] = (),
    ) -> str:
        """
        Answer a question and return the full text.

        Args:
            query: User question
            chat_history: Prior turns, oldest first

        Returns:
            str: Concatenation of all fragments
        """
        stream = await self.answer(query, chat_history)
        try:
            return "".join([fragment async for fragment in stream])
        finally:
            await stream.aclose()
