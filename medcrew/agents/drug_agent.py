"""Drug Interaction Agent.

Asks the model to research moderate to severe interactions between the
patient's medications and explain them in plain language.
"""

from typing import List
from medcrew.config.llm_config import get_assistant_model
from medcrew.agents.prompts import DRUG_INTERACTION_PROMPT
from medcrew.utils.llm_helpers import generate_text
import logging

logger = logging.getLogger(__name__)

INSUFFICIENT_MEDS_MESSAGE = (
    "Please provide at least two medications to check for interactions."
)
INTERACTION_FALLBACK = "Could not check for drug interactions at this time."


def normalize_medication_names(medications: List[str]) -> List[str]:
    """Trim names and drop blanks, keeping order and repeated entries."""
    return [med.strip() for med in medications if med.strip()]


async def check_drug_interactions(medications: List[str]) -> str:
    """
    Check a medication list for potential drug-drug interactions.

    Args:
        medications: Medication names as entered by the patient

    Returns:
        Plain-language explanation, or a fixed message when fewer than
        two medications are given or the call fails
    """
    meds = normalize_medication_names(medications)
    if len(meds) < 2:
        logger.info("Less than 2 medications, skipping interaction check")
        return INSUFFICIENT_MEDS_MESSAGE

    logger.info(f"Checking interactions for {len(meds)} medications: {meds}")
    return await generate_text(
        get_assistant_model(),
        DRUG_INTERACTION_PROMPT.format(medications=", ".join(meds)),
        fallback_message=INTERACTION_FALLBACK,
        caller="check_drug_interactions",
    )
