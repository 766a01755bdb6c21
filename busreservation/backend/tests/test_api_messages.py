import pytest

from app.services import feedback_service


def test_contact_message_flow(api_client):
    client, _ = api_client

    created = client.post(
        "/api/contact",
        json={"name": "Sara Khan", "email": "sara@example.com", "message": "Is there wifi on board?"},
    )

    assert created.status_code == 201
    assert created.json()["message"] == "Message sent successfully"
    message_id = created.json()["id"]

    reply = client.post(f"/api/contact/messages/{message_id}/reply", json={"reply": "Yes, on AC buses."})
    assert reply.status_code == 200

    messages = client.get("/api/contact/messages").json()["messages"]
    assert len(messages) == 1
    assert messages[0]["status"] == "replied"
    assert messages[0]["adminReply"] == "Yes, on AC buses."
    assert messages[0]["repliedAt"] is not None


def test_reply_to_missing_message(api_client):
    client, _ = api_client

    response = client.post("/api/contact/messages/404/reply", json={"reply": "Hello"})

    assert response.status_code == 404
    assert response.json() == {"error": "Message not found"}


def test_contact_message_requires_fields(api_client):
    client, _ = api_client

    response = client.post("/api/contact", json={"name": "Sara Khan"})

    assert response.status_code == 400


def test_feedback_flow(api_client):
    client, _ = api_client

    created = client.post(
        "/api/feedback",
        json={"name": "Ali Raza", "email": "ali@example.com", "rating": 5, "comment": "Smooth ride"},
    )

    assert created.status_code == 201
    assert created.json()["message"] == "Feedback submitted successfully"
    feedback = client.get("/api/feedback").json()["feedback"]
    assert [(entry["rating"], entry["comment"]) for entry in feedback] == [(5, "Smooth ride")]


@pytest.mark.parametrize("rating", [0, 6])
def test_feedback_rating_out_of_range(api_client, rating):
    client, _ = api_client

    response = client.post(
        "/api/feedback",
        json={"name": "Ali Raza", "email": "ali@example.com", "rating": rating, "comment": "Hmm"},
    )

    assert response.status_code == 400
    assert "rating" in response.json()["error"]


def test_feedback_service_rejects_rating(db_session):
    with pytest.raises(ValueError):
        feedback_service.submit_feedback(
            db_session, name="Ali", email="ali@example.com", rating=9, comment="!"
        )


def test_health(public_client):
    client, _ = public_client

    assert client.get("/api/health").json() == {"status": "ok"}
