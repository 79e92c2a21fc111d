"""In-memory conversation store.

Holds every customer, their append-only message histories and the
transient per-customer UI state (draft text, typing indicator).
Data is lost when the application exits.
"""

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import uuid4

from .constants import NEW_CUSTOMER_PREVIEW
from .models import Customer, Message


class StoreEventKind(str, Enum):
    CUSTOMER_ADDED = "customer_added"
    CUSTOMER_RENAMED = "customer_renamed"
    CUSTOMER_SELECTED = "customer_selected"
    MESSAGE_APPENDED = "message_appended"
    DRAFT_CHANGED = "draft_changed"
    TYPING_CHANGED = "typing_changed"


@dataclass(frozen=True)
class StoreEvent:
    """Notification sent to listeners after a store mutation."""

    kind: StoreEventKind
    customer_id: str | None
    message: Message | None = None


StoreListener = Callable[[StoreEvent], None]


class ConversationStore:
    """Session-only store of customers and conversations.

    Customers are kept in display order (newest first for added ones).
    Histories are append-only and keep arrival order.

    Example:
        store = ConversationStore()
        customer = store.add_customer("王总")
        store.append_message(customer.id, Message.outgoing("在吗?"))
    """

    def __init__(self) -> None:
        self._customers: list[Customer] = []
        self._history: dict[str, list[Message]] = {}
        self._drafts: dict[str, str] = {}
        self._typing: dict[str, bool] = {}
        self._active_id: str | None = None
        self._listeners: list[StoreListener] = []

    # Listeners

    def subscribe(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: StoreEventKind, customer_id: str | None, message: Message | None = None) -> None:
        event = StoreEvent(kind=kind, customer_id=customer_id, message=message)
        for listener in list(self._listeners):
            listener(event)

    # Customers

    @property
    def customers(self) -> tuple[Customer, ...]:
        return tuple(self._customers)

    @property
    def active_customer_id(self) -> str | None:
        return self._active_id

    @property
    def active_customer(self) -> Customer | None:
        if self._active_id is None:
            return None
        return self.get_customer(self._active_id)

    def get_customer(self, customer_id: str) -> Customer:
        """Look up a customer by id.

        Raises:
            KeyError: If no customer has this id
        """
        for customer in self._customers:
            if customer.id == customer_id:
                return customer
        raise KeyError(f"Unknown customer: {customer_id}")

    def has_customer(self, customer_id: str) -> bool:
        return customer_id in self._history

    def _new_customer_id(self) -> str:
        customer_id = f"c{uuid4().hex[:12]}"
        while customer_id in self._history:
            customer_id = f"c{uuid4().hex[:12]}"
        return customer_id

    def add_customer(
        self,
        name: str,
        customer_id: str | None = None,
        avatar_seed: str | None = None,
        select: bool = True,
    ) -> Customer:
        """Add a customer at the top of the list with an empty history.

        Args:
            name: Display name (surrounding whitespace is stripped)
            customer_id: Explicit id, generated when omitted
            avatar_seed: Explicit avatar seed, random when omitted
            select: Make the new customer active

        Returns:
            The created customer

        Raises:
            ValueError: If the name is blank or the id is already taken
        """
        clean_name = name.strip()
        if not clean_name:
            raise ValueError("Customer name must not be empty")
        if customer_id is not None and customer_id in self._history:
            raise ValueError(f"Customer id already exists: {customer_id}")

        customer = Customer(
            id=customer_id or self._new_customer_id(),
            name=clean_name,
            avatar_seed=avatar_seed or secrets.token_hex(4),
            last_message=NEW_CUSTOMER_PREVIEW,
            last_message_time=datetime.now(),
        )
        self._customers.insert(0, customer)
        self._history[customer.id] = []
        self._emit(StoreEventKind.CUSTOMER_ADDED, customer.id)

        if select:
            self.select_customer(customer.id)
        return customer

    def rename_customer(self, customer_id: str, name: str) -> Customer:
        """Rename a customer. Blank or unchanged names are ignored."""
        customer = self.get_customer(customer_id)
        clean_name = name.strip()
        if clean_name and clean_name != customer.name:
            customer.name = clean_name
            self._emit(StoreEventKind.CUSTOMER_RENAMED, customer_id)
        return customer

    def select_customer(self, customer_id: str) -> Customer:
        customer = self.get_customer(customer_id)
        if self._active_id != customer_id:
            self._active_id = customer_id
            self._emit(StoreEventKind.CUSTOMER_SELECTED, customer_id)
        return customer

    # Messages

    def messages(self, customer_id: str) -> tuple[Message, ...]:
        """Snapshot of a customer's history in arrival order."""
        if not self.has_customer(customer_id):
            raise KeyError(f"Unknown customer: {customer_id}")
        return tuple(self._history[customer_id])

    def append_message(self, customer_id: str, message: Message) -> Message:
        """Append a message and refresh the customer's sidebar preview.

        Raises:
            KeyError: If no customer has this id
        """
        customer = self.get_customer(customer_id)
        self._history[customer_id].append(message)
        customer.apply_preview(message)
        self._emit(StoreEventKind.MESSAGE_APPENDED, customer_id, message)
        return message

    # Ephemeral UI state

    def draft(self, customer_id: str) -> str:
        return self._drafts.get(customer_id, "")

    def set_draft(self, customer_id: str, text: str) -> None:
        self.get_customer(customer_id)
        if self._drafts.get(customer_id, "") == text:
            return
        self._drafts[customer_id] = text
        self._emit(StoreEventKind.DRAFT_CHANGED, customer_id)

    def clear_draft(self, customer_id: str) -> None:
        self.set_draft(customer_id, "")

    def is_typing(self, customer_id: str) -> bool:
        return self._typing.get(customer_id, False)

    def set_typing(self, customer_id: str, typing: bool) -> None:
        self.get_customer(customer_id)
        if self._typing.get(customer_id, False) == typing:
            return
        self._typing[customer_id] = typing
        self._emit(StoreEventKind.TYPING_CHANGED, customer_id)
