"""Health Insight Agent: supportive tip + motivation from a diary entry."""

from medcrew.agents.prompts import HEALTH_INSIGHT_PROMPT
from medcrew.config.llm_config import get_assistant_model
from medcrew.utils.llm_helpers import generate_text

INSIGHT_FALLBACK = "Could not generate a health insight at this moment."


async def get_health_insight(diary_entry: str) -> str:
    return await generate_text(
        get_assistant_model(),
        HEALTH_INSIGHT_PROMPT.format(diary_entry=diary_entry),
        fallback_message=INSIGHT_FALLBACK,
        caller="get_health_insight",
    )
