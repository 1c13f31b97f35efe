"""LexAI client - streaming legal assistant chat and document management.

Combines httpx for streaming HTTP, NiceGUI for visualization, and Pydantic for
data validation.

Components:
    - chat: Transcript, stream decoding, single-flight chat session, input gate
    - client: Configuration, authentication and document endpoints
    - ui: Web interface for chat and the document dashboard
    - models: Request/response and transcript schemas
"""

__version__ = "0.1.0"
