"""Utility functions for LLM invocations with fallback handling."""

import json
import logging
from typing import Any, List, Optional, Type, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import BaseModel, ValidationError

from medcrew.models.patient import ImagePayload
from medcrew.utils.parsing import strip_md_fences

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = (
    "Sorry, I'm having trouble processing your request. Please try again later."
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def message_text(response: Any) -> str:
    """Flatten an AIMessage's content (string or content blocks) to text."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text_parts = []
        for item in content:
            if isinstance(item, str):
                text_parts.append(item)
            elif isinstance(item, dict) and "text" in item:
                text_parts.append(item["text"])
        return "".join(text_parts)
    return str(content) if content is not None else ""


async def generate_text(
    llm: BaseChatModel,
    prompt: str,
    fallback_message: str = DEFAULT_FALLBACK,
    caller: str = "generate_text",
) -> str:
    """
    Single best-effort text completion.

    Args:
        llm: The language model to invoke
        prompt: Fully rendered prompt
        fallback_message: Returned instead of raising if the call fails
        caller: Name used in the error log line

    Returns:
        Model text, or fallback_message on any failure
    """
    try:
        response = await llm.ainvoke([HumanMessage(content=prompt)])
        return message_text(response)
    except Exception as e:
        logger.error(f"❌ LLM API error in {caller}: {e}", exc_info=True)
        return fallback_message


def _schema_instruction(schema: Type[BaseModel]) -> str:
    return (
        "Respond with ONLY a single JSON object (no markdown) that conforms to this JSON schema:\n"
        f"{json.dumps(schema.model_json_schema(), indent=2)}"
    )


async def generate_structured(
    llm: BaseChatModel,
    instruction: str,
    schema: Type[ModelT],
    fallback: ModelT,
    image: Optional[ImagePayload] = None,
    caller: str = "generate_structured",
) -> ModelT:
    """
    Request a JSON response constrained to `schema`, optionally with an image.

    The schema is embedded in the prompt; the reply is parsed with pydantic.
    Call failures, JSON errors and validation errors all yield `fallback`.
    """
    parts: List[Any] = []
    if image is not None:
        parts.append({"type": "image_url", "image_url": {"url": image.data_url}})
    parts.append({"type": "text", "text": f"{instruction}\n\n{_schema_instruction(schema)}"})

    try:
        response = await llm.ainvoke([HumanMessage(content=parts)])
    except Exception as e:
        logger.error(f"❌ LLM API error in {caller}: {e}", exc_info=True)
        return fallback

    content = message_text(response)
    try:
        return schema.model_validate_json(strip_md_fences(content))
    except ValidationError as e:
        logger.error(f"Failed to parse {caller} response: {e}, content: {content[:200]}")
        return fallback
