"""Reply generation through the configured completion service.

Hidden design decisions:
- What goes into a request (system prompt, history window, current turn)
- The single catch-all failure path with a static fallback reply
"""

from collections.abc import Callable, Sequence

from ..llm import ChatMessage, LLMProvider
from .constants import EMPTY_REPLY, FALLBACK_REPLY, HISTORY_WINDOW
from .history import build_turn, format_history
from .models import Message

DebugCallback = Callable[[str, str, str], None]


class ReplyService:
    """Turns one operator message plus recent history into a reply."""

    def __init__(
        self,
        llm: LLMProvider,
        system_prompt: str | None = None,
        window: int = HISTORY_WINDOW,
    ) -> None:
        self._llm = llm
        self._system_prompt = system_prompt
        self._window = window
        self._debug_callback: DebugCallback | None = None

    @property
    def llm(self) -> LLMProvider:
        return self._llm

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for request tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "LLM", message)

    def build_request(
        self,
        text: str,
        history: Sequence[Message],
        image_url: str | None = None,
    ) -> list[ChatMessage]:
        """Assemble the chat messages sent to the provider."""
        request: list[ChatMessage] = []
        if self._system_prompt:
            request.append(ChatMessage(role="system", content=self._system_prompt))
        request.extend(format_history(history, self._window))
        request.append(build_turn(text, image_url))
        return request

    async def generate_reply(
        self,
        text: str,
        history: Sequence[Message],
        image_url: str | None = None,
    ) -> str:
        """Generate the reply text for the current turn.

        Never raises for provider failures: any exception is reported to
        the debug callback and replaced with the fallback reply.

        Args:
            text: Text of the current turn (may be empty for image-only turns)
            history: Messages before the current turn, oldest first
            image_url: Optional data URL of an attached image

        Returns:
            Generated text, the empty-response notice, or the fallback reply
        """
        request = self.build_request(text, history, image_url)
        self._debug(
            "debug",
            f"Request: {len(request)} message(s), image={'yes' if image_url else 'no'}"
        )
        try:
            response = await self._llm.chat_completion(request)
        except Exception as e:
            self._debug("error", f"Completion failed: {type(e).__name__}: {e}")
            return FALLBACK_REPLY

        if response.usage is not None:
            self._debug("info", f"{response.model} usage: {response.usage}")
        return response.content or EMPTY_REPLY
