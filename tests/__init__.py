"""Test package for the LexAI client.

Provides coverage for all components with unit tests for isolated logic and
integration tests for workflows against a fake backend.

Structure:
    - unit/: Individual function and class tests
    - integration/: Client workflows over HTTP

Leverages pytest with pytest-check for soft assertions.
"""
