"""
Integration Tests for the HTTP API

Drives the FastAPI application through its lifespan with scripted
collaborators in place of LLM providers and notifications.
"""

import pytest
from fastapi.testclient import TestClient

from zenstudent.config import Settings
from zenstudent.config.settings import SessionSettings, StorageSettings
from zenstudent.domain.enums.conversation import Language
from zenstudent.infrastructure.storage import InMemoryKeyValueStore
from zenstudent.main import create_application
from zenstudent.runtime import CompanionRuntime
from zenstudent.services.prompt.companion_templates import get_texts

pytestmark = pytest.mark.integration

EN = get_texts(Language.EN)
API = "/api/v1"


@pytest.fixture
def client(test_settings, responder, dispatcher):
    async def runtime_factory(settings):
        return await CompanionRuntime.create(
            settings,
            kv=InMemoryKeyValueStore(),
            responder=responder,
            dispatcher=dispatcher,
        )

    app = create_application(test_settings, runtime_factory=runtime_factory)
    with TestClient(app) as client:
        yield client


class TestHealth:
    def test_root(self, client: TestClient) -> None:
        assert client.get("/").json()["status"] == "operational"

    def test_health_and_probes(self, client: TestClient) -> None:
        assert client.get(f"{API}/health").json()["status"] == "healthy"
        assert client.get(f"{API}/health/live").json()["status"] == "alive"

        ready = client.get(f"{API}/health/ready").json()
        assert ready["ready"] is True
        assert ready["components"]["session"] is True

    def test_metrics_exposed(self, client: TestClient) -> None:
        client.post(f"{API}/chat/messages", json={"text": "hi"})

        response = client.get(f"{API}/metrics")

        assert response.status_code == 200
        assert "zen_messages_total" in response.text


class TestChat:
    def test_log_starts_with_greeting(self, client: TestClient) -> None:
        messages = client.get(f"{API}/chat/messages").json()

        assert [m["text"] for m in messages] == [EN.greeting]

    def test_send_returns_message_and_reply(self, client: TestClient, responder) -> None:
        response = client.post(f"{API}/chat/messages", json={"text": "  exams tomorrow  "})

        assert response.status_code == 200
        body = response.json()
        assert body["message"]["text"] == "exams tomorrow"
        assert body["message"]["role"] == "user"
        assert body["reply"]["text"] == responder.reply
        assert body["crisis_active"] is False
        assert body["alert_text"] is None

        log = client.get(f"{API}/chat/messages").json()
        assert [m["role"] for m in log] == ["assistant", "user", "assistant"]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_message_rejected(self, client: TestClient, text: str) -> None:
        response = client.post(f"{API}/chat/messages", json={"text": text})

        assert response.status_code == 422
        assert len(client.get(f"{API}/chat/messages").json()) == 1

    def test_flagged_message_raises_banner(self, client: TestClient, dispatcher) -> None:
        body = client.post(f"{API}/chat/messages", json={"text": "I want to die"}).json()

        assert body["message"]["risk_flag"] is True
        assert body["crisis_active"] is True
        assert body["alert_text"] == EN.format_alert(EN.contact_placeholder_name, "")
        assert len(dispatcher.payloads) == 1

    def test_responder_failure_gives_fallback(self, client: TestClient, responder) -> None:
        responder.error = RuntimeError("provider down")

        body = client.post(f"{API}/chat/messages", json={"text": "hello"}).json()

        assert body["reply"]["text"] == EN.fallback_reply


class TestMood:
    def test_record_and_list(self, client: TestClient) -> None:
        assert client.post(f"{API}/mood", json={"score": 2}).status_code == 201
        assert client.post(f"{API}/mood", json={"score": 5, "note": "slept well"}).status_code == 201

        body = client.get(f"{API}/mood").json()
        assert [e["score"] for e in body["entries"]] == [5, 2]
        assert body["average"] == 3.5
        assert (body["min_score"], body["max_score"], body["capacity"]) == (0, 5, 10)

    def test_mood_acknowledged_in_chat(self, client: TestClient) -> None:
        client.post(f"{API}/mood", json={"score": 3})

        log = client.get(f"{API}/chat/messages").json()
        assert log[-1]["text"] == EN.format_mood_saved(3, 5)

    @pytest.mark.parametrize("score", [6, -1])
    def test_out_of_range_rejected(self, client: TestClient, score: int) -> None:
        response = client.post(f"{API}/mood", json={"score": score})

        assert response.status_code == 422
        assert client.get(f"{API}/mood").json()["entries"] == []


class TestConfiguredMoodScale:
    """Mood settings reach the ledger the API serves."""

    @pytest.fixture
    def scaled_client(self, responder, dispatcher):
        settings = Settings(
            session=SessionSettings(
                mood_min_score=1,
                mood_max_score=5,
                mood_capacity=7,
                default_language="en",
            ),
            storage=StorageSettings(backend="memory"),
        )

        async def runtime_factory(settings):
            return await CompanionRuntime.create(
                settings,
                kv=InMemoryKeyValueStore(),
                responder=responder,
                dispatcher=dispatcher,
            )

        app = create_application(settings, runtime_factory=runtime_factory)
        with TestClient(app) as client:
            yield client

    def test_ledger_reports_configured_scale(self, scaled_client: TestClient) -> None:
        body = scaled_client.get(f"{API}/mood").json()

        assert (body["min_score"], body["max_score"], body["capacity"]) == (1, 5, 7)

    def test_score_below_configured_minimum_rejected(self, scaled_client: TestClient) -> None:
        assert scaled_client.post(f"{API}/mood", json={"score": 0}).status_code == 422
        assert scaled_client.post(f"{API}/mood", json={"score": 1}).status_code == 201

    def test_capacity_bounds_history(self, scaled_client: TestClient) -> None:
        for score in [1, 2, 3, 4, 5, 1, 2, 3]:
            scaled_client.post(f"{API}/mood", json={"score": score})

        entries = scaled_client.get(f"{API}/mood").json()["entries"]
        assert [e["score"] for e in entries] == [3, 2, 1, 5, 4, 3, 2]


class TestExercises:
    def test_start_status_stop(self, client: TestClient) -> None:
        started = client.post(f"{API}/exercises/box_breathing/start").json()
        assert started["running"] is True
        assert started["phase"] == "inhale"
        assert started["total_cycles"] is None

        assert client.get(f"{API}/exercises/status").json()["running"] is True

        stopped = client.post(f"{API}/exercises/stop").json()
        assert stopped["running"] is False
        assert stopped["last_outcome"] == "cancelled"

    def test_starting_another_replaces_the_first(self, client: TestClient) -> None:
        client.post(f"{API}/exercises/box_breathing/start")

        status = client.post(f"{API}/exercises/meditation/start").json()

        assert status["exercise_type"] == "meditation"
        assert status["phase"] == "countdown"
        assert status["remaining_seconds"] == 180

    def test_unknown_exercise(self, client: TestClient) -> None:
        assert client.post(f"{API}/exercises/yoga/start").status_code == 422


class TestCrisis:
    def test_state_and_dismiss(self, client: TestClient) -> None:
        assert client.get(f"{API}/crisis").json()["active"] is False

        client.post(f"{API}/chat/messages", json={"text": "I want to end my life"})
        state = client.get(f"{API}/crisis").json()
        assert state["active"] is True
        assert state["last_notified_at"] is not None

        dismissed = client.post(f"{API}/crisis/dismiss").json()
        assert dismissed["active"] is False
        assert dismissed["alert_text"] is None


class TestProfile:
    def test_defaults(self, client: TestClient) -> None:
        body = client.get(f"{API}/profile").json()

        assert body["language"] == "en"
        assert body["trusted_contacts"] == []

    def test_update_and_notify_contact(self, client: TestClient, dispatcher) -> None:
        profile = {
            "language": "en",
            "theme": "dark",
            "sleep_time": "22:30",
            "wake_time": "06:45",
            "trusted_contacts": [{"name": "Anna", "contact_address": "anna@example.com"}],
        }

        response = client.put(f"{API}/profile", json=profile)
        assert response.status_code == 200
        assert response.json()["theme"] == "dark"

        client.post(f"{API}/chat/messages", json={"text": "I want to die"})
        assert dispatcher.payloads[0].recipient_name == "Anna"

    def test_switch_to_russian(self, client: TestClient) -> None:
        client.put(f"{API}/profile", json={"language": "ru"})

        body = client.post(f"{API}/chat/messages", json={"text": "хочу умереть"}).json()

        assert body["message"]["risk_flag"] is True

    def test_too_many_contacts(self, client: TestClient) -> None:
        contacts = [{"name": f"Friend {i}"} for i in range(4)]

        response = client.put(f"{API}/profile", json={"trusted_contacts": contacts})

        assert response.status_code == 422

    def test_bad_time(self, client: TestClient) -> None:
        response = client.put(f"{API}/profile", json={"sleep_time": "25:00"})

        assert response.status_code == 422


class TestSchema:
    def test_send_response_example_in_openapi(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()

        example = schema["components"]["schemas"]["SendMessageResponse"]["example"]
        assert example["crisis_active"] is False
        assert example["message"]["role"] == "user"
