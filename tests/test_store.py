"""Unit tests for the conversation store."""
from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chatdesk.chat import ConversationStore, Message, Sender, StoreEventKind, create_demo_store
from chatdesk.chat.constants import IMAGE_PREVIEW, NEW_CUSTOMER_PREVIEW


class TestCustomers:
    """Tests for adding, renaming and selecting customers."""

    def test_add_customer_defaults(self, store):
        """Test that a new customer starts empty, on top and selected."""
        customer = store.add_customer("  王总  ")

        assert customer.name == "王总"
        assert customer.id.startswith("c")
        assert customer.avatar_seed
        assert customer.last_message == NEW_CUSTOMER_PREVIEW
        assert store.messages(customer.id) == ()
        assert store.active_customer_id == customer.id

    def test_added_customer_goes_to_top(self, store):
        """Test that customers are listed newest first."""
        first = store.add_customer("First")
        second = store.add_customer("Second")

        assert [c.id for c in store.customers] == [second.id, first.id]

    def test_add_without_select_keeps_active(self, store):
        """Test that select=False leaves the selection alone."""
        first = store.add_customer("First")
        store.add_customer("Second", select=False)

        assert store.active_customer_id == first.id

    @pytest.mark.parametrize("name", ["", "   ", "\n\t"])
    def test_blank_name_rejected(self, store, name):
        """Test that blank names are rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            store.add_customer(name)
        assert store.customers == ()

    def test_duplicate_id_rejected(self, store):
        """Test that explicit ids must be unique."""
        store.add_customer("A", customer_id="c1")
        with pytest.raises(ValueError, match="already exists"):
            store.add_customer("B", customer_id="c1")

    def test_generated_ids_are_unique(self, store):
        """Test that generated ids do not collide."""
        ids = {store.add_customer(f"Customer {i}").id for i in range(50)}
        assert len(ids) == 50

    def test_rename_customer(self, store):
        """Test renaming updates the name."""
        customer = store.add_customer("张工")
        store.rename_customer(customer.id, " 张工 (模具) ")
        assert store.get_customer(customer.id).name == "张工 (模具)"

    def test_blank_rename_ignored(self, store):
        """Test that a blank rename keeps the old name."""
        customer = store.add_customer("张工")
        store.rename_customer(customer.id, "   ")
        assert store.get_customer(customer.id).name == "张工"

    def test_unknown_customer_raises(self, store):
        """Test that lookups of unknown ids raise KeyError."""
        with pytest.raises(KeyError):
            store.get_customer("nope")
        with pytest.raises(KeyError):
            store.select_customer("nope")
        with pytest.raises(KeyError):
            store.messages("nope")

    def test_has_customer(self, store):
        """Test that has_customer agrees with messages()."""
        customer = store.add_customer("刘老板")
        assert store.has_customer(customer.id) is True
        assert store.messages(customer.id) == ()
        assert store.has_customer("nope") is False

    def test_active_customer_none_when_empty(self, store):
        """Test that an empty store has no active customer."""
        assert store.active_customer is None
        assert store.active_customer_id is None


class TestMessages:
    """Tests for appending messages and previews."""

    def test_append_keeps_arrival_order(self, store):
        """Test that history is append-only in arrival order."""
        customer = store.add_customer("A")
        first = store.append_message(customer.id, Message.outgoing("one"))
        second = store.append_message(customer.id, Message.incoming("two"))

        assert store.messages(customer.id) == (first, second)

    def test_preview_tracks_last_message(self, store):
        """Test that the sidebar preview follows the latest message."""
        customer = store.add_customer("A")
        message = store.append_message(customer.id, Message.incoming("收到货了"))

        assert customer.last_message == "收到货了"
        assert customer.last_message_time == message.timestamp

    def test_image_preview(self, store, png_data_url):
        """Test that image messages preview as the image marker."""
        customer = store.add_customer("A")
        store.append_message(customer.id, Message.outgoing("", png_data_url))

        assert customer.last_message == IMAGE_PREVIEW

    def test_histories_are_isolated(self, store):
        """Test that appending to one customer leaves others untouched."""
        a = store.add_customer("A")
        b = store.add_customer("B")
        store.append_message(a.id, Message.outgoing("hi"))

        assert store.messages(b.id) == ()
        assert b.last_message == NEW_CUSTOMER_PREVIEW

    def test_messages_returns_snapshot(self, store):
        """Test that a returned history does not change afterwards."""
        customer = store.add_customer("A")
        snapshot = store.messages(customer.id)
        store.append_message(customer.id, Message.outgoing("later"))

        assert snapshot == ()

    @given(st.lists(st.text(min_size=1, max_size=20), min_size=1, max_size=30))
    def test_history_length_matches_appends(self, texts):
        """Property test: every append is kept, in order."""
        store = ConversationStore()
        customer = store.add_customer("A")
        for text in texts:
            store.append_message(customer.id, Message.outgoing(text))

        assert [m.text for m in store.messages(customer.id)] == texts
        assert all(m.sender is Sender.OUTGOING for m in store.messages(customer.id))


class TestEphemeralState:
    """Tests for drafts and typing flags."""

    def test_drafts_are_per_customer(self, store):
        """Test that each customer keeps its own draft."""
        a = store.add_customer("A")
        b = store.add_customer("B")
        store.set_draft(a.id, "draft for A")

        assert store.draft(a.id) == "draft for A"
        assert store.draft(b.id) == ""

    def test_clear_draft(self, store):
        customer = store.add_customer("A")
        store.set_draft(customer.id, "text")
        store.clear_draft(customer.id)
        assert store.draft(customer.id) == ""

    def test_typing_flag(self, store):
        customer = store.add_customer("A")
        assert store.is_typing(customer.id) is False
        store.set_typing(customer.id, True)
        assert store.is_typing(customer.id) is True


class TestStoreEvents:
    """Tests for listener notifications."""

    def test_events_in_order(self, store):
        """Test the events emitted by adding and messaging a customer."""
        events = []
        store.subscribe(events.append)

        customer = store.add_customer("A")
        store.append_message(customer.id, Message.outgoing("hi"))

        assert [e.kind for e in events] == [
            StoreEventKind.CUSTOMER_ADDED,
            StoreEventKind.CUSTOMER_SELECTED,
            StoreEventKind.MESSAGE_APPENDED,
        ]
        assert events[-1].message.text == "hi"

    def test_no_event_without_change(self, store):
        """Test that no-op mutations stay silent."""
        customer = store.add_customer("A")
        events = []
        store.subscribe(events.append)

        store.select_customer(customer.id)
        store.set_draft(customer.id, "")
        store.set_typing(customer.id, False)
        store.rename_customer(customer.id, "A")

        assert events == []

    def test_unsubscribe(self, store):
        events = []
        store.subscribe(events.append)
        store.unsubscribe(events.append)
        store.add_customer("A")
        assert events == []


class TestDemoStore:
    """Tests for the demo seed data."""

    def test_demo_customers(self):
        """Test that the demo store has three customers with the first selected."""
        now = datetime(2024, 5, 1, 12, 0)
        store = create_demo_store(now=now)

        assert [c.id for c in store.customers] == ["c1", "c2", "c3"]
        assert store.active_customer_id == "c1"

        for customer in store.customers:
            messages = store.messages(customer.id)
            assert len(messages) == 1
            assert messages[0].sender is Sender.INCOMING
            assert customer.last_message == messages[0].text
            assert messages[0].timestamp < now

    def test_demo_stores_are_independent(self):
        """Test that each call builds a fresh store."""
        first = create_demo_store()
        second = create_demo_store()
        first.append_message("c1", Message.outgoing("hello"))

        assert len(second.messages("c1")) == 1
