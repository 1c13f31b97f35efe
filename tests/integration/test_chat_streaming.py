"""Integration tests for the chat session against the fake backend.

Streams real HTTP responses from a FastAPI StreamingResponse through
httpx.ASGITransport and checks the resulting transcript.
"""

from httpx import AsyncClient

from lexai.chat.gate import InputGate
from lexai.chat.session import APOLOGY, ChatSession
from lexai.client.config import ClientConfig
from lexai.models.schemas import EntryLifecycle, EntryRole


class TestStreamingExchange:
    """Integration tests for POST /llama/query consumption."""

    async def test_answer_streams_into_transcript(
        self, config: ClientConfig, http_client: AsyncClient
    ) -> None:
        """The streamed answer lands in a complete assistant entry."""
        session = ChatSession(config=config, client=http_client)

        await session.submit("What is the answer?")

        user, answer = session.transcript.entries[-2:]
        assert user.role is EntryRole.USER
        assert user.content == "What is the answer?"
        assert answer.content == "The answer is 42."
        assert answer.lifecycle is EntryLifecycle.COMPLETE
        assert session.in_flight is False

    async def test_multibyte_answer_decodes(
        self, config: ClientConfig, http_client: AsyncClient
    ) -> None:
        """Bytes of a split character are joined before display."""
        session = ChatSession(config=config, client=http_client)

        await session.submit("Café?")

        assert session.transcript.last.content == "Café au lait."

    async def test_server_error_becomes_apology(
        self, config: ClientConfig, http_client: AsyncClient
    ) -> None:
        """A 500 from the endpoint ends in the failed apology entry."""
        session = ChatSession(config=config, client=http_client)

        await session.submit("fail")

        answer = session.transcript.last
        assert answer.role is EntryRole.ASSISTANT
        assert answer.content == APOLOGY
        assert answer.lifecycle is EntryLifecycle.FAILED
        assert session.in_flight is False

    async def test_unknown_route_becomes_apology(self, http_client: AsyncClient) -> None:
        """A misconfigured query path fails the same way."""
        config = ClientConfig(base_url="http://test", query_path="/missing")
        session = ChatSession(config=config, client=http_client)

        await session.submit("What is the answer?")

        assert session.transcript.last.content == APOLOGY

    async def test_gate_drives_a_full_conversation(
        self, config: ClientConfig, http_client: AsyncClient
    ) -> None:
        """Drafts sent through the gate alternate user and assistant entries."""
        session = ChatSession(config=config, client=http_client)
        gate = InputGate(session)

        for question in ("What is the answer?", "fail", "Café?"):
            gate.draft = question
            assert await gate.request_submit() is True

        contents = [entry.content for entry in session.transcript.entries[1:]]
        assert contents == [
            "What is the answer?",
            "The answer is 42.",
            "fail",
            APOLOGY,
            "Café?",
            "Café au lait.",
        ]
