"""LangGraph state definition for the symptom triage graph."""

from typing import TypedDict, Optional, List

from medcrew.models.messages import ConversationTurn


class TriageGraphState(TypedDict):
    """State for one triage step (router → clarify | recommend)."""

    # Input
    transcript: List[ConversationTurn]

    # Derived by prepare node
    history_text: str
    assistant_turns: int

    # Router output: "TRIAGE" or "CLARIFY"
    route: Optional[str]

    # Final node output
    response_text: Optional[str]
    specialty: Optional[str]
