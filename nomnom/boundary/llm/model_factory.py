"""
Model factory for selecting the embedding and chat model provider.

Depends on the LLM_PROVIDER setting. OpenAI matches the embedding family the
recipe index was built with; Google Gemini is the alternative provider.

Dependencies: langchain_openai, langchain_google_genai, nomnom.configs
System role: Model instantiation and provider selection
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from nomnom.configs.llm import LLMSettings
from nomnom.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def build_embeddings(settings: LLMSettings, dimension: int) -> Embeddings:
    """
    Create the embeddings model for the configured provider.

    Args:
        settings: Model settings
        dimension: Vector dimension stored in the index

    Returns:
        Embeddings: LangChain embeddings model

    Raises:
        ConfigurationError: If the provider is unknown
    """
    provider = settings.provider.lower()
    api_key = settings.api_key.get_secret_value()

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        logger.info(f"{__name__}:build_embeddings - OpenAI model={settings.embedding_model}")
        # Only text-embedding-3 models accept a custom output dimension.
        extra = {"dimensions": dimension} if settings.embedding_model.startswith("text-embedding-3") else {}
        return OpenAIEmbeddings(model=settings.embedding_model, api_key=api_key, **extra)

    if provider == "google":
        from langchain_google_genai import GoogleGenerativeAIEmbeddings

        logger.info(f"{__name__}:build_embeddings - Google model={settings.embedding_model}")
        return GoogleGenerativeAIEmbeddings(model=settings.embedding_model, google_api_key=api_key)

    raise ConfigurationError(
        f"Invalid LLM_PROVIDER: {provider}. Must be 'openai' or 'google'.",
        setting="provider",
    )


def build_chat_model(settings: LLMSettings) -> BaseChatModel:
    """
    Create the streaming chat model for the configured provider.

    Args:
        settings: Model settings

    Returns:
        BaseChatModel: LangChain chat model with fixed temperature

    Raises:
        ConfigurationError: If the provider is unknown
    """
    provider = settings.provider.lower()
    api_key = settings.api_key.get_secret_value()

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        logger.info(f"{__name__}:build_chat_model - OpenAI model={settings.chat_model}")
        return ChatOpenAI(
            model=settings.chat_model,
            temperature=settings.temperature,
            api_key=api_key,
            streaming=True,
        )

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        logger.info(f"{__name__}:build_chat_model - Google model={settings.chat_model}")
        return ChatGoogleGenerativeAI(
            model=settings.chat_model,
            temperature=settings.temperature,
            google_api_key=api_key,
        )

    raise ConfigurationError(
        f"Invalid LLM_PROVIDER: {provider}. Must be 'openai' or 'google'.",
        setting="provider",
    )
