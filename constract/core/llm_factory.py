"""LLM factory for creating OpenAI and Claude instances."""
import logging
from typing import Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from .settings import Settings

logger = logging.getLogger(__name__)


def create_llm(config: Settings) -> Optional[BaseChatModel]:
    """
    Create the analysis LLM from explicit configuration.

    Args:
        config: Settings instance (API key, provider, model parameters)

    Returns:
        Configured LLM instance, or None when no API key is configured
        for the primary provider (rule-based analysis only)

    Raises:
        ValueError: If provider is invalid
    """
    api_key = config.llm_api_key
    if not api_key:
        logger.info(f"{config.primary_llm} API 키 미설정 - 규칙 기반 분석만 사용합니다")
        return None

    # 재시도 없이 1회 호출, 실패 시 규칙 기반으로 즉시 전환
    if config.primary_llm == "openai":
        return ChatOpenAI(
            model=config.openai_analysis_model,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
            api_key=api_key,
            max_retries=0,
            timeout=config.llm_timeout,
        )
    elif config.primary_llm == "claude":
        return ChatAnthropic(
            model=config.claude_analysis_model,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
            api_key=api_key,
            max_retries=0,
            timeout=config.llm_timeout,
        )
    else:
        raise ValueError(f"Unsupported provider: {config.primary_llm}")
