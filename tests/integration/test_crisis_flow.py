"""
Integration Tests for the Crisis Flow

Full path from an outgoing message to the trusted-contact
notification, through a runtime wired the way the application
wires it.
"""

import pytest

from zenstudent.domain.enums.conversation import Language, MessageRole
from zenstudent.domain.models.profile import SessionProfile, TrustedContact
from zenstudent.infrastructure.storage import InMemoryKeyValueStore
from zenstudent.runtime import CompanionRuntime
from zenstudent.services.prompt.companion_templates import get_texts

pytestmark = pytest.mark.integration

EN = get_texts(Language.EN)


@pytest.fixture
async def runtime(test_settings, responder, dispatcher, kv_store):
    runtime = await CompanionRuntime.create(
        test_settings,
        kv=kv_store,
        responder=responder,
        dispatcher=dispatcher,
    )
    yield runtime
    await runtime.shutdown()


class TestCrisisFlow:
    """End-to-end crisis escalation."""

    async def test_flagged_message_notifies_trusted_contact(self, runtime, dispatcher, responder) -> None:
        coordinator = runtime.coordinator
        await coordinator.update_profile(SessionProfile(
            language=Language.EN,
            trusted_contacts=[TrustedContact("Anna", "anna@example.com")],
        ))

        reply = await coordinator.send("I want to die")

        user_message = coordinator.messages[-2]
        assert user_message.role == MessageRole.USER
        assert user_message.risk_flag is True
        assert coordinator.messages[-1] is reply
        assert reply.text == responder.reply

        assert runtime.crisis.active
        payload = dispatcher.payloads[0]
        assert payload.recipient_name == "Anna"
        assert payload.recipient_address == "anna@example.com"
        assert payload.message_template == EN.notification_template
        assert runtime.crisis.alert_text == EN.format_alert("Anna", "anna@example.com")

        _history, context = responder.calls[-1]
        assert EN.crisis_instruction in context

    async def test_no_contact_uses_placeholders(self, runtime, dispatcher) -> None:
        await runtime.coordinator.send("I keep thinking about suicide")

        payload = dispatcher.payloads[0]
        assert payload.recipient_name == EN.contact_placeholder_name
        assert payload.recipient_address == ""
        assert not payload.has_address
        assert runtime.crisis.active

    async def test_dispatch_failure_still_enters_crisis(
        self, test_settings, responder, failing_dispatcher
    ) -> None:
        runtime = await CompanionRuntime.create(
            test_settings,
            kv=InMemoryKeyValueStore(),
            responder=responder,
            dispatcher=failing_dispatcher,
        )
        try:
            reply = await runtime.coordinator.send("I want to hurt myself")
        finally:
            await runtime.shutdown()

        assert runtime.crisis.state.active
        assert reply.text == responder.reply

    async def test_crisis_persists_until_dismissed(self, runtime) -> None:
        await runtime.coordinator.send("I want to die")
        await runtime.coordinator.send("thanks, a bit better")

        assert runtime.crisis.active

        runtime.crisis.dismiss()

        assert not runtime.crisis.active
        assert runtime.crisis.alert_text is None


class TestRestore:
    async def test_session_survives_restart(self, test_settings, responder, dispatcher, kv_store) -> None:
        first = await CompanionRuntime.create(
            test_settings, kv=kv_store, responder=responder, dispatcher=dispatcher
        )
        await first.coordinator.send("hello")
        await first.coordinator.record_mood(4)
        await first.shutdown()

        second = await CompanionRuntime.create(
            test_settings, kv=kv_store, responder=responder, dispatcher=dispatcher
        )
        try:
            texts = [m.text for m in second.coordinator.messages]
            assert texts[0] == EN.greeting
            assert texts.count(EN.greeting) == 1
            assert "hello" in texts
            assert [e.score for e in second.coordinator.session.mood.history()] == [4]
        finally:
            await second.shutdown()

    async def test_crisis_mode_is_not_persisted(self, test_settings, responder, dispatcher, kv_store) -> None:
        first = await CompanionRuntime.create(
            test_settings, kv=kv_store, responder=responder, dispatcher=dispatcher
        )
        await first.coordinator.send("I want to die")
        await first.shutdown()

        second = await CompanionRuntime.create(
            test_settings, kv=kv_store, responder=responder, dispatcher=dispatcher
        )
        try:
            assert not second.crisis.active
            assert second.coordinator.messages[1].risk_flag is True
        finally:
            await second.shutdown()
