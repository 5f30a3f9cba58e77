"""
Prompt templates for the MedCrew AI agents.

Design principles:
- Prompts are plain templates; the builders below are pure functions of the
  transcript so they can be tested without a model call.
- The router must answer with a single word so its reply can be matched.
- The recommender's trailing SPECIALTY line is machine-read and stripped
  before display.
"""

from typing import Iterable, List

from medcrew.models.messages import ConversationTurn, Sender

TRIAGE_DISCLAIMER = (
    "Please remember, this is not a medical diagnosis. "
    "Consult with a qualified healthcare professional for any medical advice."
)

GREETING_MESSAGE = (
    "Hello! I'm your AI Medical Assistant. Please describe your symptoms, and I'll ask "
    "some questions to understand your situation better. You can also upload a medical "
    "report for a quick analysis."
)

FIND_SPECIALIST_PROMPT = "Would you like me to help you find a specialist?"

# ==============================================================================
# SYMPTOM TRIAGE GRAPH
# ==============================================================================

TRIAGE_ROUTER_PROMPT = """You are an expert medical triage router. Your job is to analyze a conversation and decide if there is enough information to provide a recommendation for a level of care.
The conversation is between a patient and an AI assistant. The assistant has already asked {assistant_turns} clarifying question(s).

Conversation:
---
{history_text}
---

Your goal is to reach a recommendation within 2-3 total questions.
- If you have enough information to make a recommendation, respond with ONLY the word 'TRIAGE'.
- If the assistant has already asked 2 or more questions, you should strongly prefer to 'TRIAGE' unless critical information is missing (e.g., duration of a severe symptom, presence of fever with a rash).
- Otherwise, if you absolutely need more information to make a safe recommendation, respond with ONLY the word 'CLARIFY'."""

CLARIFY_PROMPT = """You are a helpful medical assistant trying to reach a diagnosis recommendation quickly. Based on the conversation so far, ask the MOST CRITICAL clarifying question to help you make a decision.
Your question should be targeted to narrow down the possibilities significantly. Avoid generic questions like "anything else?". Be direct and concise. Ask only one question.

Conversation:
---
{history_text}
---

Your single, critical clarifying question:"""

TRIAGE_RECOMMENDATION_PROMPT = """You are a helpful medical assistant. Based on the detailed conversation with a patient, your task is to provide a final care recommendation.

Conversation:
---
{history_text}
---

Your response must strictly follow this structure:
1.  A clear recommendation. It MUST be one of these three options: 'Self-care', 'Telehealth Consultation', or 'Urgent Care'.
2.  A brief, easy-to-understand explanation for your recommendation based on the symptoms provided.
3.  A clear disclaimer: "{disclaimer}"

After the disclaimer, add a new line with the following exact format:
SPECIALTY: [The most relevant specialty, e.g., Cardiology, Dermatology, General Physician]

Do not provide a medical diagnosis or prescribe medication."""

# ==============================================================================
# DOCUMENTS, MEDICATIONS, INSIGHTS
# ==============================================================================

REPORT_EXTRACTION_PROMPT = (
    "Analyze the attached medical report image. Extract the key medical summary "
    "and any patient profile information you can find."
)

CONSULTATION_NOTES_PROMPT = (
    "You are an AI Scribe. Analyze the attached doctor's consultation notes image. "
    "First, provide a concise summary of the consultation. Second, extract all patient "
    "action items into a list. If there are no clear action items, return an empty list "
    "for action_items."
)

DOCUMENT_SUMMARY_PROMPT = (
    "Summarize the following medical document. Extract key information such as diagnosed "
    "conditions, major surgeries, allergies, and current medications into a clear, concise "
    'summary. Use bullet points for lists. Medical document: "{text}"'
)

DRUG_INTERACTION_PROMPT = (
    "Research and identify any potential moderate to severe drug interactions for the "
    "following list of medications: {medications}. For each potential interaction, provide "
    "a brief, easy-to-understand explanation. If no significant interactions are found, "
    "state that clearly."
)

HEALTH_INSIGHT_PROMPT = (
    "Based on the following patient diary entry, provide a short, personalized health tip "
    "and a motivational message. The tone should be supportive and encouraging. "
    'Diary entry: "{diary_entry}"'
)


# ==============================================================================
# BUILDERS
# ==============================================================================


def format_transcript(turns: Iterable[ConversationTurn]) -> str:
    """Render turns as `Patient: ...` / `Assistant: ...` lines."""
    lines: List[str] = []
    for turn in turns:
        speaker = "Patient" if turn.sender == Sender.PATIENT else "Assistant"
        lines.append(f"{speaker}: {turn.text}")
    return "\n".join(lines)


def count_assistant_questions(turns: Iterable[ConversationTurn]) -> int:
    """Assistant turns so far, not counting the opening greeting."""
    assistant_turns = sum(1 for turn in turns if turn.sender == Sender.ASSISTANT)
    return max(assistant_turns - 1, 0)


def build_router_prompt(history_text: str, assistant_turns: int) -> str:
    return TRIAGE_ROUTER_PROMPT.format(
        history_text=history_text, assistant_turns=assistant_turns
    )


def build_clarify_prompt(history_text: str) -> str:
    return CLARIFY_PROMPT.format(history_text=history_text)


def build_triage_prompt(history_text: str) -> str:
    return TRIAGE_RECOMMENDATION_PROMPT.format(
        history_text=history_text, disclaimer=TRIAGE_DISCLAIMER
    )
