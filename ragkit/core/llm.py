from __future__ import annotations

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from ragkit.core.config import Settings
from ragkit.core.errors import ConfigurationError


def get_chat_model(cfg: Settings | None = None) -> BaseChatModel:
    """Pre-configured ``ChatOpenAI``; fails fast when no API key is set."""
    cfg = cfg or Settings()
    if not cfg.openai_configured:
        raise ConfigurationError(
            "OPENAI_API_KEY is not set; export it or add it to .env"
        )
    return ChatOpenAI(
        model=cfg.chat_model,
        temperature=cfg.temperature,
        max_tokens=cfg.max_tokens,
        api_key=SecretStr(cfg.openai_api_key),
    )
