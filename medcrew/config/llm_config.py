"""LLM configuration for the hosted chat completions endpoint.

Per-role model assignments:
  Triage Router       → text model   — one-word TRIAGE / CLARIFY routing
  Clarifier           → text model   — single targeted follow-up question
  Triage Recommender  → text model   — care level + specialty line
  Document / Insight  → text model   — summaries, interactions, diary tips
  Vision Extractor    → vision model — medical reports and consultation notes
"""

from langchain_openai import ChatOpenAI
from langchain_core.language_models import BaseChatModel
from medcrew.config.settings import settings
from pydantic import SecretStr
import logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal factory
# ---------------------------------------------------------------------------
def _create_model(model_name: str, temperature: float | None = None) -> BaseChatModel:
    """Instantiate a ChatOpenAI client pointed at the configured endpoint."""
    logger.info(f"Creating chat model client: {model_name}")
    return ChatOpenAI(
        base_url=settings.llm_endpoint,
        api_key=SecretStr(settings.llm_api_key or "unset"),
        model=model_name,
        temperature=(
            settings.model_temperature if temperature is None else temperature
        ),
        max_completion_tokens=settings.model_max_tokens,
        max_retries=0,
    )


# ---------------------------------------------------------------------------
# Per-role public accessors
# ---------------------------------------------------------------------------
def get_router_model() -> BaseChatModel:
    """Triage router: deterministic one-word routing decision."""
    return _create_model(settings.model_name, temperature=0.0)


def get_clarifier_model() -> BaseChatModel:
    """Clarifier: asks the single most critical follow-up question."""
    return _create_model(settings.model_name)


def get_triage_model() -> BaseChatModel:
    """Triage recommender: care level, explanation, disclaimer, specialty."""
    return _create_model(settings.model_name)


def get_assistant_model() -> BaseChatModel:
    """General assistant: document summaries, drug interactions, health insights."""
    return _create_model(settings.model_name)


def get_vision_model() -> BaseChatModel:
    """Vision extractor: structured JSON from report and notes images."""
    return _create_model(settings.vision_model_name, temperature=0.2)
