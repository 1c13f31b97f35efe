"""Pydantic models shared by the chat session, the API clients and the UI.

Models:
    - ConversationEntry: One transcript entry with its lifecycle
    - QueryRequest: Body of the streaming answer request
    - Credentials / TokenResponse: Login and signup payloads
    - Document / DocumentPage / DocumentUpload: Document service payloads
"""

from lexai.models.schemas import (
    TERMINAL_LIFECYCLES,
    ConversationEntry,
    Credentials,
    DocType,
    Document,
    DocumentPage,
    DocumentStatus,
    DocumentUpload,
    EntryLifecycle,
    EntryRole,
    QueryRequest,
    TokenResponse,
)

__all__ = [
    "TERMINAL_LIFECYCLES",
    "ConversationEntry",
    "Credentials",
    "DocType",
    "Document",
    "DocumentPage",
    "DocumentStatus",
    "DocumentUpload",
    "EntryLifecycle",
    "EntryRole",
    "QueryRequest",
    "TokenResponse",
]
