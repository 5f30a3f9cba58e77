"""Symptom Triage Graph.

A two-step LangGraph workflow that decides whether the conversation holds
enough information to recommend a level of care:

    prepare → router ─┬─ TRIAGE  → recommend → END
                      └─ CLARIFY → clarify   → END

Each model call is a single best-effort round trip. Failures degrade to a
fixed apology string, so callers always receive a TriageDecision.
"""

import logging
from typing import Any, Dict, List, Sequence

from langgraph.graph import StateGraph, END

from medcrew.agents.state import TriageGraphState
from medcrew.agents.prompts import (
    build_clarify_prompt,
    build_router_prompt,
    build_triage_prompt,
    count_assistant_questions,
    format_transcript,
)
from medcrew.config.llm_config import (
    get_clarifier_model,
    get_router_model,
    get_triage_model,
)
from medcrew.models.messages import ConversationTurn
from medcrew.models.triage import TriageDecision, TriageRoute
from medcrew.utils.llm_helpers import DEFAULT_FALLBACK, generate_text
from medcrew.utils.parsing import extract_specialty, parse_route

logger = logging.getLogger(__name__)


# ==============================================================================
# NODES
# ==============================================================================


async def prepare_node(state: TriageGraphState) -> Dict[str, Any]:
    """Render the transcript and count questions already asked."""
    transcript = state["transcript"]
    return {
        "history_text": format_transcript(transcript),
        "assistant_turns": count_assistant_questions(transcript),
    }


async def router_node(state: TriageGraphState) -> Dict[str, Any]:
    """Ask the router model for TRIAGE or CLARIFY."""
    prompt = build_router_prompt(state["history_text"], state["assistant_turns"])
    reply = await generate_text(get_router_model(), prompt, caller="router_node")
    route = parse_route(reply)

    logger.info(f"🧭 Route: {route.value}, Turns: {state['assistant_turns']}")
    return {"route": route.value}


async def clarify_node(state: TriageGraphState) -> Dict[str, Any]:
    """Ask the single most critical clarifying question."""
    prompt = build_clarify_prompt(state["history_text"])
    question = await generate_text(get_clarifier_model(), prompt, caller="clarify_node")
    return {"response_text": question, "specialty": None}


async def recommend_node(state: TriageGraphState) -> Dict[str, Any]:
    """Produce the care-level recommendation and pull out the specialty line."""
    prompt = build_triage_prompt(state["history_text"])
    full_response = await generate_text(
        get_triage_model(), prompt, caller="recommend_node"
    )
    text, specialty = extract_specialty(full_response)
    return {"response_text": text, "specialty": specialty}


def route_after_router(state: TriageGraphState) -> str:
    if state.get("route") == TriageRoute.TRIAGE.value:
        return "recommend"
    return "clarify"


# ==============================================================================
# GRAPH
# ==============================================================================


def build_triage_graph():
    """Build and compile the triage workflow."""
    logger.info("Building symptom triage LangGraph workflow")

    workflow = StateGraph(TriageGraphState)

    workflow.add_node("prepare", prepare_node)
    workflow.add_node("router", router_node)
    workflow.add_node("clarify", clarify_node)
    workflow.add_node("recommend", recommend_node)

    workflow.set_entry_point("prepare")
    workflow.add_edge("prepare", "router")
    workflow.add_conditional_edges(
        "router",
        route_after_router,
        {"recommend": "recommend", "clarify": "clarify"},
    )
    workflow.add_edge("clarify", END)
    workflow.add_edge("recommend", END)

    graph = workflow.compile()
    logger.info("Symptom triage workflow compiled successfully")
    return graph


# Global graph instance
_triage_graph = None


def get_triage_graph():
    """Get or create the compiled triage graph."""
    global _triage_graph
    if _triage_graph is None:
        _triage_graph = build_triage_graph()
    return _triage_graph


async def run_symptom_triage_graph(
    transcript: Sequence[ConversationTurn],
) -> TriageDecision:
    """
    Run one triage step over the conversation so far.

    Args:
        transcript: Ordered patient/assistant turns, greeting first

    Returns:
        Clarify(question) or Recommend(text, specialty). Never raises.
    """
    initial_state: TriageGraphState = {
        "transcript": list(transcript),
        "history_text": "",
        "assistant_turns": 0,
        "route": None,
        "response_text": None,
        "specialty": None,
    }

    try:
        result = await get_triage_graph().ainvoke(initial_state)
    except Exception as e:
        logger.error(f"Error running triage graph: {e}", exc_info=True)
        return TriageDecision.clarify(DEFAULT_FALLBACK)

    text = result.get("response_text") or DEFAULT_FALLBACK
    if result.get("route") == TriageRoute.TRIAGE.value:
        return TriageDecision.recommend(text, result.get("specialty"))
    return TriageDecision.clarify(text)


class TriageOrchestrator:
    """Callable facade over the triage graph: decide(transcript) → TriageDecision."""

    async def decide(self, transcript: List[ConversationTurn]) -> TriageDecision:
        return await run_symptom_triage_graph(transcript)
