"""Send flow: one outgoing message, one generated reply.

Coordinates the store and the reply service. Runs on the UI event loop;
several sends may be in flight at once, each bound to the customer it
started from.
"""

from .models import Message
from .service import ReplyService
from .store import ConversationStore


class ChatController:
    """Applies a send action to the store and awaits the reply."""

    def __init__(self, store: ConversationStore, service: ReplyService) -> None:
        self._store = store
        self._service = service

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def service(self) -> ReplyService:
        return self._service

    def post_outgoing(
        self,
        customer_id: str,
        text: str,
        image_url: str | None = None,
    ) -> tuple[Message, tuple[Message, ...]]:
        """Append the operator's message and mark the reply as pending.

        Returns:
            The appended message and the history that preceded it

        Raises:
            ValueError: If there is neither text nor image
            KeyError: If the customer does not exist
        """
        if not text.strip() and not image_url:
            raise ValueError("Nothing to send")

        history = self._store.messages(customer_id)
        outgoing = self._store.append_message(customer_id, Message.outgoing(text, image_url))
        self._store.clear_draft(customer_id)
        self._store.set_typing(customer_id, True)
        return outgoing, history

    async def complete_reply(
        self,
        customer_id: str,
        outgoing: Message,
        history: tuple[Message, ...],
    ) -> Message:
        """Await the reply for a posted message and append it."""
        try:
            reply_text = await self._service.generate_reply(
                outgoing.text, history, outgoing.image_url
            )
        finally:
            self._store.set_typing(customer_id, False)
        return self._store.append_message(customer_id, Message.incoming(reply_text))

    async def send_message(
        self,
        customer_id: str,
        text: str,
        image_url: str | None = None,
    ) -> Message:
        """Send a message and append the generated reply.

        Args:
            customer_id: Conversation to send in, fixed for the whole call
            text: Operator text (may be empty when an image is attached)
            image_url: Optional data URL of an image

        Returns:
            The appended incoming message
        """
        outgoing, history = self.post_outgoing(customer_id, text, image_url)
        return await self.complete_reply(customer_id, outgoing, history)
