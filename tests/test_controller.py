"""Unit tests for the send flow."""
import asyncio

import pytest

from chatdesk.chat import FALLBACK_REPLY, ChatController, ReplyService, Sender, StoreEventKind


class TestSendMessage:
    """Tests for ChatController.send_message."""

    @pytest.mark.asyncio
    async def test_one_outgoing_then_one_incoming(self, controller, store, fake_llm):
        """Test that a send appends exactly the outgoing message and one reply."""
        customer = store.add_customer("王总")
        reply = await controller.send_message(customer.id, "M6丝锥还有货吗?")

        messages = store.messages(customer.id)
        assert [m.sender for m in messages] == [Sender.OUTGOING, Sender.INCOMING]
        assert messages[0].text == "M6丝锥还有货吗?"
        assert messages[1] == reply
        assert reply.text == fake_llm.reply
        assert customer.last_message == fake_llm.reply

    @pytest.mark.asyncio
    async def test_history_excludes_current_turn(self, controller, store, fake_llm):
        """Test that the request holds prior history plus the turn, once."""
        customer = store.add_customer("王总")
        await controller.send_message(customer.id, "first")
        await controller.send_message(customer.id, "second")

        contents = [m.content for m in fake_llm.requests[-1][1:]]
        assert contents == ["first", fake_llm.reply, "second"]

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, controller, store):
        """Test that sending nothing appends nothing."""
        customer = store.add_customer("王总")
        with pytest.raises(ValueError, match="Nothing to send"):
            await controller.send_message(customer.id, "   ")
        assert store.messages(customer.id) == ()

    @pytest.mark.asyncio
    async def test_image_only_message(self, controller, store, png_data_url):
        customer = store.add_customer("王总")
        await controller.send_message(customer.id, "", png_data_url)

        outgoing = store.messages(customer.id)[0]
        assert outgoing.image_url == png_data_url
        assert outgoing.text == ""

    @pytest.mark.asyncio
    async def test_draft_cleared_and_typing_reset(self, controller, store):
        customer = store.add_customer("王总")
        store.set_draft(customer.id, "hello")
        events = []
        store.subscribe(events.append)

        await controller.send_message(customer.id, "hello")

        typing_events = [e for e in events if e.kind is StoreEventKind.TYPING_CHANGED]
        assert len(typing_events) == 2
        assert store.draft(customer.id) == ""
        assert store.is_typing(customer.id) is False

    @pytest.mark.asyncio
    async def test_failure_appends_fallback(self, store, failing_llm):
        """Test that a failed call still yields exactly one reply."""
        controller = ChatController(store, ReplyService(failing_llm))
        customer = store.add_customer("王总")

        reply = await controller.send_message(customer.id, "hi")

        assert reply.text == FALLBACK_REPLY
        assert len(store.messages(customer.id)) == 2
        assert store.is_typing(customer.id) is False


class TestConcurrentSends:
    """Tests for replies that resolve after the selection changed."""

    @pytest.mark.asyncio
    async def test_reply_bound_to_original_customer(self, store, make_llm):
        """Test that a reply lands with the customer it was sent from."""
        controller = ChatController(store, ReplyService(make_llm(delay=0.05)))
        a = store.add_customer("A")
        b = store.add_customer("B", select=False)

        pending = asyncio.create_task(controller.send_message(a.id, "to A"))
        await asyncio.sleep(0)
        store.select_customer(b.id)
        await pending

        assert len(store.messages(a.id)) == 2
        assert store.messages(b.id) == ()

    @pytest.mark.asyncio
    async def test_parallel_sends_each_get_a_reply(self, store, make_llm):
        controller = ChatController(store, ReplyService(make_llm(delay=0.01)))
        a = store.add_customer("A")
        b = store.add_customer("B")

        await asyncio.gather(
            controller.send_message(a.id, "one"),
            controller.send_message(b.id, "two"),
        )

        for customer in (a, b):
            senders = [m.sender for m in store.messages(customer.id)]
            assert senders == [Sender.OUTGOING, Sender.INCOMING]
