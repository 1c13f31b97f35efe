"""Streaming chat session.

Owns the transcript and runs one question/answer exchange at a time against the
streaming answer endpoint.

Exchange flow:

1. A user entry (complete) and an empty assistant placeholder (streaming) are
   appended, the draft is cleared and ``in_flight`` is raised.
2. The question is POSTed as ``{"question": ...}``. The endpoint needs no
   credentials.
3. The response body is decoded incrementally and every fragment is appended
   to the placeholder in arrival order.
4. End of stream completes the placeholder. Any failure (non-2xx status,
   transport error, timeout, malformed bytes) replaces its content with a fixed
   apology and marks it failed. The cause is logged, never shown.
5. ``in_flight`` is cleared on every exit path.
"""

import logging
from collections.abc import Callable

import httpx

from lexai.chat.decoder import StreamDecodeError, decode_stream
from lexai.chat.transcript import TranscriptInvariantError, TranscriptStore
from lexai.client.config import ClientConfig, get_client_config
from lexai.client.transport import open_client
from lexai.models.schemas import (
    ConversationEntry,
    EntryLifecycle,
    EntryRole,
    QueryRequest,
)

logger = logging.getLogger(__name__)

GREETING = (
    "Hello! I'm your legal AI assistant. I can help you with legal research, "
    "document analysis, and case preparation. How can I assist you today?"
)

APOLOGY = (
    "I apologize, but I encountered an error while processing your request. "
    "Please try again later."
)


class AnswerStatusError(Exception):
    """The answer endpoint replied with a non-success status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code


class ChatSession:
    """Manages chat state for a user session.

    Attributes:
        draft_text: Unsent input text.
        in_flight: True while an exchange is running.
        transcript: Ordered conversation entries.
        last_outcome: Terminal lifecycle of the most recent answer.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        on_change: Callable[[ConversationEntry], None] | None = None,
    ) -> None:
        """Initialize the session with a greeting entry.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            client: Optional shared AsyncClient. A client per exchange is
                    created when omitted.
            on_change: Called with the assistant entry after each fragment and
                    after finalization.
        """
        self._config = config or get_client_config()
        self._client = client
        self.on_change = on_change

        self.draft_text: str = ""
        self.in_flight: bool = False
        self.last_outcome: EntryLifecycle | None = None
        self._seed_transcript()

    def _seed_transcript(self) -> None:
        # The greeting has no user entry before it
        self.transcript = TranscriptStore()
        self.transcript.append(
            ConversationEntry(
                id=self.transcript.next_id(),
                role=EntryRole.ASSISTANT,
                content=GREETING,
            )
        )

    @property
    def messages(self) -> list[ConversationEntry]:
        return self.transcript.entries

    def _notify(self, entry: ConversationEntry) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(entry)
        except Exception:
            logger.exception(f"Change listener failed for entry {entry.id}")

    def _begin_exchange(self, text: str) -> ConversationEntry:
        self.in_flight = True
        self.transcript.append(
            ConversationEntry(
                id=self.transcript.next_id(),
                role=EntryRole.USER,
                content=text,
            )
        )
        placeholder = self.transcript.append(
            ConversationEntry(
                id=self.transcript.next_id(),
                role=EntryRole.ASSISTANT,
                lifecycle=EntryLifecycle.STREAMING,
            )
        )
        self.draft_text = ""
        return placeholder

    async def _stream_answer(self, question: str, placeholder: ConversationEntry) -> None:
        payload = QueryRequest(question=question).model_dump()

        async with (
            open_client(self._config, self._client) as client,
            client.stream("POST", self._config.query_url, json=payload) as response,
        ):
            if not response.is_success:
                raise AnswerStatusError(response.status_code)

            async for fragment in decode_stream(response.aiter_bytes()):
                self.transcript.update_content(
                    placeholder.id, placeholder.content + fragment
                )
                self._notify(placeholder)

    async def submit(self, text: str) -> bool:
        """Send a question and stream the answer into the transcript.

        Empty text or a submission while another exchange is running is
        ignored.

        Args:
            text: The user's question, sent as typed.

        Returns:
            True if the exchange ran, False if it was not admitted.
        """
        if not text.strip() or self.in_flight:
            logger.debug("Submission ignored: empty text or exchange in flight")
            return False

        placeholder = self._begin_exchange(text)
        try:
            self._notify(placeholder)
            await self._stream_answer(text, placeholder)
            self.transcript.finalize(placeholder.id, EntryLifecycle.COMPLETE)
        except (httpx.HTTPError, AnswerStatusError, StreamDecodeError) as e:
            logger.error(f"Answer stream failed: {type(e).__name__}: {e}")
            self._fail(placeholder)
        except TranscriptInvariantError:
            raise
        except Exception:
            logger.exception("Unexpected error while streaming answer")
            self._fail(placeholder)
        finally:
            # Cancellation skips the handlers above
            if placeholder.is_streaming:
                self._fail(placeholder)
            self.last_outcome = placeholder.lifecycle
            self.in_flight = False
            self._notify(placeholder)

        return True

    def _fail(self, placeholder: ConversationEntry) -> None:
        self.transcript.finalize(placeholder.id, EntryLifecycle.FAILED, content=APOLOGY)

    def reset(self) -> None:
        """Start a new conversation. Ignored while an exchange is running."""
        if self.in_flight:
            logger.debug("Reset ignored: exchange in flight")
            return
        self.draft_text = ""
        self.last_outcome = None
        self._seed_transcript()
