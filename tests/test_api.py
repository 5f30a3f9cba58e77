from __future__ import annotations

import json

API = "/api/v1/medcrew"


def test_health_and_root(client):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"

    assert client.get("/").json()["docs"] == "/docs"


def test_symptom_conversation_flow(client, scripted_llm):
    scripted_llm(
        "CLARIFY",
        "Does the pain spread to your arm or jaw?",
        "TRIAGE",
        "Urgent Care\nPlease get checked today.\nSPECIALTY: Cardiology",
    )

    start = client.get(f"{API}/symptoms").json()
    assert len(start["messages"]) == 1
    assert start["graph_state"] == "IDLE"
    assert start["last_graph_state"] is None

    first = client.post(f"{API}/symptoms/message", json={"message": "Chest pain on stairs"})
    assert first.status_code == 200
    assert first.json()["messages"][-1]["text"] == "Does the pain spread to your arm or jaw?"
    assert first.json()["last_decision"]["decision"] == "CLARIFY"
    assert first.json()["graph_state"] == "IDLE"
    assert first.json()["last_graph_state"] == "CLARIFYING"

    second = client.post(f"{API}/symptoms/message", json={"message": "Yes, to my left arm"})
    payload = second.json()
    assert payload["last_decision"]["decision"] == "TRIAGE"
    assert payload["last_graph_state"] == "RECOMMENDING"
    assert payload["last_decision"]["specialty"] == "Cardiology"
    assert payload["last_decision"]["care_level"] == "Urgent Care"
    assert payload["messages"][-1]["actions"][0]["kind"] == "find_specialist"
    assert len(payload["messages"]) == 5


def test_blank_symptom_message_is_bad_request(client):
    response = client.post(f"{API}/symptoms/message", json={"message": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Please describe your symptoms."


def test_report_upload_rejects_non_image(client):
    response = client.post(
        f"{API}/symptoms/report",
        json={"data_url": "data:text/plain;base64,aGVsbG8=", "filename": "notes.txt"},
    )

    assert response.status_code == 400


def test_doctor_search(client):
    response = client.post(f"{API}/doctors/search", json={"specialty": "cardio", "day": "Today"})

    assert response.status_code == 200
    assert {doctor["id"] for doctor in response.json()["doctors"]} == {1, 2, 7}
    assert response.json()["filters"]["specialty"] == "cardio"

    pins = client.get(f"{API}/doctors/map").json()
    assert {pin["doctor_id"] for pin in pins} == {1, 2, 7}


def test_book_and_cancel_appointment(client):
    booked = client.post(
        f"{API}/appointments", json={"doctor_id": 1, "time": "09:00 AM", "day": "Today"}
    )
    assert booked.status_code == 201
    appointment = booked.json()
    assert appointment["patient_name"] == "Alex Doe"

    assert len(client.get(f"{API}/scheduler").json()["appointments"]) == 1

    assert client.delete(f"{API}/appointments/{appointment['id']}").status_code == 204
    assert client.get(f"{API}/scheduler").json()["appointments"] == []
    assert client.delete(f"{API}/appointments/{appointment['id']}").status_code == 404


def test_book_unavailable_slot_is_bad_request(client):
    response = client.post(
        f"{API}/appointments", json={"doctor_id": 1, "time": "11:59 PM", "day": "Today"}
    )

    assert response.status_code == 400


def test_reschedule_reseeds_search(client):
    appointment = client.post(
        f"{API}/appointments", json={"doctor_id": 3, "time": "10:30 AM", "day": "Today"}
    ).json()

    response = client.post(f"{API}/appointments/{appointment['id']}/reschedule")

    assert response.status_code == 200
    payload = response.json()
    assert payload["filters"]["specialty"] == "Dermatology"
    assert payload["filters"]["location"] == "Panjim"
    assert payload["appointments"] == []
    assert client.post(f"{API}/appointments/{appointment['id']}/reschedule").status_code == 404


def test_request_appointment_switches_view(client):
    response = client.post(f"{API}/actions/request-appointment", json={"specialty": "Dermatology"})

    assert response.status_code == 200
    assert response.json()["filters"]["specialty"] == "Dermatology"
    assert client.get(f"{API}/view").json() == {"active_view": "scheduler"}

    assert client.post(f"{API}/view/health-insights").json() == {"active_view": "health-insights"}
    assert client.post(f"{API}/view/not-a-view").status_code == 422


def test_profile_patch_and_summarize(client, scripted_llm):
    scripted_llm("- Hypertension (2020)")

    patched = client.patch(f"{API}/profile", json={"name": "Sam Patel"})
    assert patched.json()["name"] == "Sam Patel"
    assert patched.json()["dob"] == "1990-05-15"

    summarized = client.post(f"{API}/profile/summarize", json={"text": "HTN dx 2020"})
    assert summarized.json()["medical_history_summary"] == "- Hypertension (2020)"

    assert client.post(f"{API}/profile/summarize", json={"text": ""}).status_code == 400


def test_medications_and_interactions(client, scripted_llm):
    scripted_llm("Warfarin and aspirin together raise bleeding risk.")

    assert client.post(f"{API}/medications/interactions").status_code == 400
    assert client.post(f"{API}/medications", json={"name": "Warfarin"}).status_code == 400

    client.post(f"{API}/medications", json={"name": "Warfarin", "dosage": "5mg", "frequency": "daily"})
    aspirin = client.post(
        f"{API}/medications", json={"name": "Aspirin", "dosage": "75mg", "frequency": "daily"}
    ).json()

    checked = client.post(f"{API}/medications/interactions").json()
    assert checked["interaction_result"].startswith("Warfarin and aspirin")

    assert client.delete(f"{API}/medications/{aspirin['id']}").status_code == 204
    assert len(client.get(f"{API}/medications").json()["medications"]) == 1


def test_consultation_upload(client, scripted_llm, png_data_url):
    scripted_llm(json.dumps({"summary": "Knee review", "action_items": ["Physio twice a week"]}))

    missing_name = client.post(
        f"{API}/consultations", json={"data_url": png_data_url, "filename": "knee.png"}
    )
    assert missing_name.status_code == 400

    created = client.post(
        f"{API}/consultations",
        json={"doctor_name": "Dr. D'Souza", "data_url": png_data_url, "filename": "knee.png"},
    )
    assert created.status_code == 201
    consultation = created.json()
    assert consultation["action_items"] == ["Physio twice a week"]

    assert client.get(f"{API}/consultations/{consultation['id']}").json() == consultation
    assert client.get(f"{API}/consultations/1").status_code == 404


def test_insights(client, scripted_llm):
    scripted_llm("Nice job staying active!")

    assert client.post(f"{API}/insights", json={"diary_entry": ""}).status_code == 400

    payload = client.post(f"{API}/insights", json={"diary_entry": "Ran 3km"}).json()
    assert payload["insight"] == "Nice job staying active!"
    assert payload["past_insights"] == ["Nice job staying active!"]
