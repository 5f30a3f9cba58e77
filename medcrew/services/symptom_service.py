"""Symptom checker session service."""

from typing import TYPE_CHECKING, List, Optional

from medcrew.agents.document_agent import extract_info_from_report
from medcrew.agents.prompts import FIND_SPECIALIST_PROMPT, GREETING_MESSAGE
from medcrew.agents.triage_graph import TriageOrchestrator
from medcrew.models.messages import (
    ActionKind,
    ConversationTurn,
    MessageAction,
    Sender,
)
from medcrew.models.triage import GraphState, TriageDecision
from medcrew.services.base import BusyFlag, InvalidInputError, require
from medcrew.utils.parsing import is_image_mime, parse_data_url
import logging

if TYPE_CHECKING:
    from medcrew.services.app_state import AppState

logger = logging.getLogger(__name__)

DISMISS_ACTION = MessageAction(
    text="No, thanks", style="secondary", kind=ActionKind.DISMISS
)


def greeting_turn() -> ConversationTurn:
    return ConversationTurn(sender=Sender.ASSISTANT, text=GREETING_MESSAGE)


def decision_to_turn(decision: TriageDecision) -> ConversationTurn:
    """Assistant turn for a triage decision, with a specialist offer when possible."""
    if decision.is_recommendation and decision.specialty:
        return ConversationTurn(
            sender=Sender.ASSISTANT,
            text=f"{decision.text}\n\n{FIND_SPECIALIST_PROMPT}",
            actions=[
                MessageAction(
                    text=f"Find a {decision.specialty}",
                    style="primary",
                    kind=ActionKind.FIND_SPECIALIST,
                    specialty=decision.specialty,
                ),
                DISMISS_ACTION,
            ],
        )
    return ConversationTurn(sender=Sender.ASSISTANT, text=decision.text)


class SymptomCheckerService:
    """Sole writer of the symptom checker transcript."""

    def __init__(
        self,
        state: "AppState",
        orchestrator: Optional[TriageOrchestrator] = None,
    ):
        self._state = state
        self.orchestrator = orchestrator or TriageOrchestrator()
        self.busy = BusyFlag("symptom-checker")
        self.messages: List[ConversationTurn] = [greeting_turn()]
        self.graph_state = GraphState.IDLE
        # Routing state of the most recent step; kept until the next send or reset.
        self.last_graph_state: Optional[GraphState] = None
        self.last_decision: Optional[TriageDecision] = None

    def reset(self) -> None:
        self.messages = [greeting_turn()]
        self.graph_state = GraphState.IDLE
        self.last_graph_state = None
        self.last_decision = None

    async def send(self, text: str) -> ConversationTurn:
        """
        Append the patient's message and run one triage step.

        Returns:
            The assistant turn appended to the transcript
        """
        message = require(text, "Please describe your symptoms.")
        with self.busy.hold():
            self.messages = [
                *self.messages,
                ConversationTurn(sender=Sender.PATIENT, text=message),
            ]
            self.graph_state = GraphState.ANALYZING
            self.last_graph_state = None
            try:
                decision = await self.orchestrator.decide(self.messages)
                self.graph_state = (
                    GraphState.RECOMMENDING
                    if decision.is_recommendation
                    else GraphState.CLARIFYING
                )
                self.last_graph_state = self.graph_state
                self.last_decision = decision
                reply = decision_to_turn(decision)
                self.messages = [*self.messages, reply]
                return reply
            finally:
                self.graph_state = GraphState.IDLE

    async def upload_report(self, data_url: str, filename: str) -> ConversationTurn:
        """
        Analyze an uploaded medical report image and merge any profile details.

        Raises:
            InvalidInputError: Non-image file or malformed data URL
        """
        try:
            image = parse_data_url(data_url)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        if not is_image_mime(image.mime_type):
            raise InvalidInputError("Please upload an image file (e.g., JPG, PNG).")

        with self.busy.hold():
            self.messages = [
                *self.messages,
                ConversationTurn(
                    sender=Sender.PATIENT, text=f"Uploaded {filename}", image=data_url
                ),
            ]
            extracted = await extract_info_from_report(image)

        self._state.profile.apply_extracted(extracted.patient_profile)

        if extracted.book_appointment:
            specialty = extracted.specialty.strip()
            if specialty:
                action = MessageAction(
                    text="Yes, find a doctor",
                    style="primary",
                    kind=ActionKind.FIND_SPECIALIST,
                    specialty=specialty,
                )
            else:
                action = MessageAction(
                    text="Yes, find a doctor",
                    style="primary",
                    kind=ActionKind.OPEN_SCHEDULER,
                )
            reply = ConversationTurn(
                sender=Sender.ASSISTANT,
                text=(
                    f"{extracted.summary}\n\nWould you like to book an appointment "
                    f"with a {specialty or 'specialist'}?"
                ),
                actions=[action, DISMISS_ACTION],
            )
        else:
            reply = ConversationTurn(sender=Sender.ASSISTANT, text=extracted.summary)

        self.messages = [*self.messages, reply]
        return reply
