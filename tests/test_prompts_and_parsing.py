from __future__ import annotations

import pytest

from medcrew.agents.prompts import (
    TRIAGE_DISCLAIMER,
    build_clarify_prompt,
    build_router_prompt,
    build_triage_prompt,
    count_assistant_questions,
    format_transcript,
)
from medcrew.models.triage import CareLevel, TriageRoute, detect_care_level
from medcrew.utils.parsing import (
    extract_specialty,
    parse_data_url,
    parse_route,
    strip_md_fences,
)


def test_format_transcript_labels_each_turn(transcript):
    turns = transcript(("a", "Hello!"), ("p", "I have a headache"), ("a", "Since when?"))

    assert format_transcript(turns) == (
        "Assistant: Hello!\nPatient: I have a headache\nAssistant: Since when?"
    )


def test_count_assistant_questions_excludes_greeting(transcript):
    assert count_assistant_questions(transcript(("a", "Hello!"))) == 0
    assert (
        count_assistant_questions(
            transcript(("a", "Hello!"), ("p", "cough"), ("a", "Fever?"), ("p", "no"), ("a", "How long?"))
        )
        == 2
    )


def test_count_assistant_questions_without_greeting_is_not_negative(transcript):
    assert count_assistant_questions(transcript(("p", "rash on my arm"))) == 0


def test_router_prompt_embeds_history_and_question_count():
    prompt = build_router_prompt("Patient: chest pain", 2)

    assert "already asked 2 clarifying question(s)" in prompt
    assert "Patient: chest pain" in prompt
    assert "ONLY the word 'TRIAGE'" in prompt
    assert "ONLY the word 'CLARIFY'" in prompt


def test_clarify_and_triage_prompts_are_pure_functions_of_history():
    history = "Patient: itchy rash for three days"

    assert history in build_clarify_prompt(history)
    assert "Ask only one question." in build_clarify_prompt(history)

    triage_prompt = build_triage_prompt(history)
    assert history in triage_prompt
    assert TRIAGE_DISCLAIMER in triage_prompt
    assert "SPECIALTY:" in triage_prompt
    for level in CareLevel:
        assert level.value in triage_prompt


@pytest.mark.parametrize(
    "reply, expected",
    [
        ("TRIAGE", TriageRoute.TRIAGE),
        ("triage", TriageRoute.TRIAGE),
        ("I would TRIAGE now.", TriageRoute.TRIAGE),
        ("CLARIFY", TriageRoute.CLARIFY),
        ("", TriageRoute.CLARIFY),
        ("Not sure", TriageRoute.CLARIFY),
    ],
)
def test_parse_route(reply, expected):
    assert parse_route(reply) == expected


def test_extract_specialty_strips_trailing_line():
    reply = (
        "Recommendation: Telehealth Consultation\n"
        "Your symptoms suggest palpitations worth reviewing.\n"
        f"{TRIAGE_DISCLAIMER}\n"
        "SPECIALTY: Cardiology"
    )

    text, specialty = extract_specialty(reply)

    assert specialty == "Cardiology"
    assert "SPECIALTY" not in text
    assert text.endswith(TRIAGE_DISCLAIMER)


def test_extract_specialty_missing_line_leaves_text_unchanged():
    reply = "Self-care\nRest and fluids.\n" + TRIAGE_DISCLAIMER

    assert extract_specialty(reply) == (reply, None)


def test_extract_specialty_is_case_insensitive_and_tolerates_markdown():
    assert extract_specialty("Self-care\nspecialty: dermatology")[1] == "dermatology"
    assert extract_specialty("Self-care\n**SPECIALTY:** General Physician")[1] == "General Physician"
    assert extract_specialty("Self-care\nSPECIALTY: [Dermatology]")[1] == "Dermatology"


def test_extract_specialty_first_marker_wins_and_all_are_removed():
    reply = "Urgent Care\nSPECIALTY: Cardiology\nMore text\nSPECIALTY: Neurology"

    text, specialty = extract_specialty(reply)

    assert specialty == "Cardiology"
    assert "specialty" not in text.lower()
    assert "More text" in text


@pytest.mark.parametrize(
    "reply, expected_text",
    [
        (
            "1. Urgent Care\n2. Get seen today.\n3. Not a diagnosis.\n4. SPECIALTY: Cardiology",
            "1. Urgent Care\n2. Get seen today.\n3. Not a diagnosis.",
        ),
        (
            "Urgent Care\nThis is not a medical diagnosis. SPECIALTY: Cardiology",
            "Urgent Care\nThis is not a medical diagnosis.",
        ),
        (
            "Urgent Care\n- **Specialty:** Cardiology\nRest until seen.",
            "Urgent Care\n\nRest until seen.",
        ),
    ],
)
def test_extract_specialty_finds_marker_anywhere_on_a_line(reply, expected_text):
    text, specialty = extract_specialty(reply)

    assert specialty == "Cardiology"
    assert text == expected_text
    assert "specialty" not in text.lower()


def test_extract_specialty_empty_value_is_none():
    text, specialty = extract_specialty("Self-care\nSPECIALTY:")

    assert specialty is None
    assert text == "Self-care"


def test_detect_care_level_picks_first_mentioned():
    assert detect_care_level("Urgent Care. Not Self-care.") == CareLevel.URGENT_CARE
    assert detect_care_level("1. Telehealth Consultation") == CareLevel.TELEHEALTH
    assert detect_care_level("See someone soon") is None


def test_strip_md_fences():
    assert strip_md_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_md_fences('  {"a": 1} ') == '{"a": 1}'


def test_parse_data_url(png_data_url):
    image = parse_data_url(png_data_url)

    assert image.mime_type == "image/png"
    assert image.data == "iVBORw0KGgoAAAANSUhEUg=="
    assert image.data_url == png_data_url

    with pytest.raises(ValueError):
        parse_data_url("not-a-data-url")
