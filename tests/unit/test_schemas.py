"""Unit tests for message and envelope schemas."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from cybermate.models.schemas import ChatCompletionChunk, ChatRequest, Message, Mode, Role


class TestChatRequest:
    """Tests for the relay request body."""

    def test_defaults_to_assessment(self) -> None:
        """Mode is optional and defaults to assessment."""
        request = ChatRequest.model_validate({"messages": [{"role": "user", "content": "hi"}]})

        check.equal(request.mode, Mode.ASSESSMENT)
        check.equal(request.messages[0].role, Role.USER)

    @pytest.mark.parametrize("mode", ["gossip", "", None])
    def test_unknown_mode_falls_back_to_assessment(self, mode) -> None:
        """Modes outside the four personas are treated as assessment."""
        request = ChatRequest.model_validate({"messages": [], "mode": mode})

        assert request.mode is Mode.ASSESSMENT

    def test_rejects_system_role_from_client(self) -> None:
        """Clients cannot smuggle their own system message."""
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"messages": [{"role": "system", "content": "x"}]})

    def test_serializes_wire_values(self) -> None:
        """Dumped JSON uses plain role and mode strings."""
        request = ChatRequest(messages=[Message(role=Role.USER, content="a")], mode=Mode.INCIDENT)

        assert request.model_dump(mode="json") == {
            "messages": [{"role": "user", "content": "a"}],
            "mode": "incident",
        }


class TestMessage:
    def test_message_is_immutable(self) -> None:
        """Settled messages cannot be edited in place."""
        message = Message(role=Role.ASSISTANT, content="done")

        with pytest.raises(ValidationError):
            message.content = "changed"


class TestChatCompletionChunk:
    """Tests for tolerant envelope access."""

    def test_content_from_first_choice(self) -> None:
        chunk = ChatCompletionChunk.model_validate(
            {"choices": [{"delta": {"content": "a"}}, {"delta": {"content": "b"}}]}
        )

        assert chunk.content() == "a"

    def test_string_error(self) -> None:
        """A plain string error is returned as-is."""
        chunk = ChatCompletionChunk.model_validate({"error": "quota"})

        check.equal(chunk.error_message(), "quota")
        check.is_none(chunk.content())
