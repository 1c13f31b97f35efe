"""Streaming chat against the LexAI answer endpoint.

Responsibilities:
    - Transcript of conversation entries with lifecycle rules
    - Incremental UTF-8 decoding of the answer stream
    - One question/answer exchange at a time
    - Input gating for the chat view
"""

from lexai.chat.decoder import StreamDecodeError, StreamDecoder, decode_stream
from lexai.chat.gate import InputGate
from lexai.chat.session import APOLOGY, GREETING, ChatSession
from lexai.chat.transcript import TranscriptInvariantError, TranscriptStore

__all__ = [
    "APOLOGY",
    "GREETING",
    "ChatSession",
    "InputGate",
    "StreamDecodeError",
    "StreamDecoder",
    "TranscriptInvariantError",
    "TranscriptStore",
    "decode_stream",
]
