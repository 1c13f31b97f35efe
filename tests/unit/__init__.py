"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - chat/: Decoder, transcript store, session and input gate
    - client/: Configuration and document helpers
    - models/: Pydantic validation

HTTP is replaced with httpx.MockTransport where a test needs to control the
byte stream. Leverages pytest-check for multiple assertions per test.
"""
