"""
Model boundary layer.

Wraps LangChain embedding and chat models behind the small interfaces the
pipeline needs, with timeouts and error translation.

Dependencies: langchain_core, langchain_openai, langchain_google_genai
System role: Embedding and generation service adapters
"""

from nomnom.boundary.llm.chat_model import GenerationClient
from nomnom.boundary.llm.embeddings import EmbeddingClient
from nomnom.boundary.llm.model_factory import build_chat_model, build_embeddings

__all__ = [
    "EmbeddingClient",
    "GenerationClient",
    "build_chat_model",
    "build_embeddings",
]
