from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class EntryRole(str, Enum):
    """Speaker of a conversation entry."""

    USER = "user"
    ASSISTANT = "assistant"


class EntryLifecycle(str, Enum):
    """Lifecycle values for conversation entries.

    PENDING is reserved for queued submissions and is never assigned.
    """

    PENDING = "pending"
    STREAMING = "streaming"
    COMPLETE = "complete"
    FAILED = "failed"


TERMINAL_LIFECYCLES = frozenset({EntryLifecycle.COMPLETE, EntryLifecycle.FAILED})


class ConversationEntry(BaseModel):
    """A single entry in the chat transcript.

    Attributes:
        id: Sequence number allocated by the transcript store.
        role: Who produced the entry.
        content: Entry text. Grows while the entry is streaming.
        created_at: Creation timestamp.
        lifecycle: Current lifecycle state.
    """

    id: int = Field(..., ge=1, frozen=True)
    role: EntryRole = Field(..., frozen=True)
    content: str = ""
    created_at: datetime = Field(default_factory=datetime.now, frozen=True)
    lifecycle: EntryLifecycle = EntryLifecycle.COMPLETE

    @property
    def is_streaming(self) -> bool:
        return self.lifecycle is EntryLifecycle.STREAMING

    @property
    def is_terminal(self) -> bool:
        return self.lifecycle in TERMINAL_LIFECYCLES

    @property
    def display_time(self) -> str:
        return self.created_at.strftime("%I:%M %p")


class QueryRequest(BaseModel):
    """Payload for the streaming answer endpoint."""

    question: str = Field(..., min_length=1)


class Credentials(BaseModel):
    """Username/password pair for login and signup."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Login response body. The token may be missing on a misbehaving backend."""

    access_token: str | None = None
    token_type: str | None = None


class DocType(str, Enum):
    """Document categories offered by the dashboard."""

    CONTRACT = "contract"
    LEGAL_BRIEF = "legal_brief"
    CASE_STUDY = "case_study"
    COMPLIANCE = "compliance"
    RESEARCH = "research"
    OTHER = "other"


class DocumentStatus(str, Enum):
    """Backend processing status of an uploaded document."""

    PROCESSED = "Processed"
    PROCESSING = "Processing"
    FAILED = "Failed"


class Document(BaseModel):
    """A document as returned by the listing endpoint.

    Attributes:
        id: Backend identifier.
        title: Human readable title.
        description: Free-form description.
        doc_type: Document category.
        file_name: Original uploaded filename.
        file_size: Size in bytes.
        upload_date: Upload timestamp as sent by the backend.
        status: Processing status.
    """

    id: int
    title: str
    description: str = ""
    doc_type: DocType = DocType.OTHER
    file_name: str = ""
    file_size: int = Field(default=0, ge=0)
    upload_date: str = ""
    status: DocumentStatus = DocumentStatus.PROCESSING


class DocumentPage(BaseModel):
    """One page of the server-paginated document listing."""

    documents: list[Document] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    pages: int = Field(default=0, ge=0)


class DocumentUpload(BaseModel):
    """Form fields sent alongside an uploaded file.

    Attributes:
        title: Document title.
        description: Document description.
        doc_type: Document category.
    """

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    doc_type: DocType

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip whitespace before the length check."""
        if isinstance(v, str):
            return v.strip()
        return v
