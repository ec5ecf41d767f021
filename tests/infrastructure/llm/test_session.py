"""Tests for LiteLLMChatSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from naya.domain.entities import AttachmentPart
from naya.infrastructure.llm import LiteLLMChatSession, LLMError, to_message_content


class TestToMessageContent:
    """to_message_content tests."""

    def test_single_text_part_is_plain_string(self) -> None:
        """Test that text-only prompts use string content."""
        assert to_message_content(["hello"]) == "hello"

    def test_attachment_becomes_image_url_block(self) -> None:
        """Test that text and media become content blocks."""
        attachment = AttachmentPart(data="aGVsbG8=", mime_type="image/png")

        content = to_message_content(["what is this?", attachment])

        assert content == [
            {"type": "text", "text": "what is this?"},
            {
                "type": "image_url",
                "image_url": {"url": "data:image/png;base64,aGVsbG8="},
            },
        ]


class TestLiteLLMChatSession:
    """LiteLLMChatSession tests."""

    @pytest.fixture
    def client(self) -> MagicMock:
        """Create mock LLMClient."""
        client = MagicMock()
        client.complete = AsyncMock(return_value="I'm great, thanks!")
        return client

    @pytest.fixture
    def session(self, client: MagicMock) -> LiteLLMChatSession:
        """Create session instance."""
        return LiteLLMChatSession(client)

    async def test_send_returns_reply(
        self, session: LiteLLMChatSession, client: MagicMock
    ) -> None:
        """Test a single turn."""
        result = await session.send(["how are you"])

        assert result == "I'm great, thanks!"
        client.complete.assert_awaited_once_with(
            [{"role": "user", "content": "how are you"}]
        )

    async def test_send_resends_previous_turns(
        self, session: LiteLLMChatSession, client: MagicMock
    ) -> None:
        """Test that earlier turns are part of the next request."""
        client.complete.side_effect = ["first reply", "second reply"]

        await session.send(["first"])
        await session.send(["second"])

        messages = client.complete.call_args_list[1].args[0]
        assert messages == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "first reply"},
            {"role": "user", "content": "second"},
        ]
        assert len(session.history) == 4

    async def test_failed_turn_leaves_history_unchanged(
        self, session: LiteLLMChatSession, client: MagicMock
    ) -> None:
        """Test that a failed call is not recorded."""
        client.complete.side_effect = LLMError("boom")

        with pytest.raises(LLMError):
            await session.send(["hello"])

        assert session.history == []

    async def test_debug_logging_hides_attachment_data(
        self, client: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that debug logging shows the MIME type, not the payload."""
        session = LiteLLMChatSession(client, debug_llm_messages=True)
        attachment = AttachmentPart(data="c2VjcmV0", mime_type="image/png")

        with caplog.at_level("INFO"):
            await session.send(["look", attachment])

        assert "image/png" in caplog.text
        assert "c2VjcmV0" not in caplog.text
        assert "I'm great, thanks!" in caplog.text
