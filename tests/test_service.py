"""Unit tests for the reply service."""
import pytest

from chatdesk.chat import FALLBACK_REPLY, HISTORY_WINDOW, Message, ReplyService
from chatdesk.chat.constants import EMPTY_REPLY


class TestBuildRequest:
    """Tests for request assembly."""

    def test_system_prompt_first(self, fake_llm):
        service = ReplyService(fake_llm, system_prompt="persona")
        request = service.build_request("hi", [])

        assert [m.role for m in request] == ["system", "user"]
        assert request[0].content == "persona"

    def test_no_system_prompt(self, fake_llm):
        service = ReplyService(fake_llm)
        assert [m.role for m in service.build_request("hi", [])] == ["user"]

    def test_history_window_applied(self, fake_llm):
        """Test that at most HISTORY_WINDOW history messages precede the turn."""
        history = [Message.incoming(str(i)) for i in range(30)]
        request = ReplyService(fake_llm).build_request("now", history)

        assert len(request) == HISTORY_WINDOW + 1
        assert request[-1].content == "now"


class TestGenerateReply:
    """Tests for generate_reply."""

    @pytest.mark.asyncio
    async def test_returns_model_text(self, fake_llm):
        reply = await ReplyService(fake_llm).generate_reply("hi", [])
        assert reply == fake_llm.reply
        assert len(fake_llm.requests) == 1

    @pytest.mark.asyncio
    async def test_failure_returns_fallback(self, failing_llm):
        """Test that provider errors become the fallback reply."""
        logs = []
        service = ReplyService(failing_llm)
        service.set_debug_callback(lambda level, component, message: logs.append((level, component)))

        reply = await service.generate_reply("hi", [])

        assert reply == FALLBACK_REPLY
        assert ("error", "LLM") in logs

    @pytest.mark.asyncio
    async def test_empty_content(self, make_llm):
        """Test that an empty completion yields the empty-response notice."""
        reply = await ReplyService(make_llm(reply="")).generate_reply("hi", [])
        assert reply == EMPTY_REPLY

    @pytest.mark.asyncio
    async def test_image_sent_with_turn(self, fake_llm, png_data_url):
        """Test that the current image travels with the last message only."""
        history = [Message.outgoing("", png_data_url)]
        await ReplyService(fake_llm).generate_reply("", history, png_data_url)

        request = fake_llm.requests[0]
        assert request[0].images == ()
        assert len(request[-1].images) == 1

    @pytest.mark.asyncio
    async def test_no_callback_is_fine(self, failing_llm):
        service = ReplyService(failing_llm)
        service.set_debug_callback(None)
        assert await service.generate_reply("hi", []) == FALLBACK_REPLY
