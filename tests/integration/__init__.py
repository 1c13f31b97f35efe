"""Integration tests for components working together over HTTP.

Coverage:
    - Chat session streaming from the answer endpoint
    - Login, signup and token handling
    - Document listing, upload and delete

Requests go through httpx.ASGITransport to a FastAPI fake backend defined in
tests/conftest.py. No network access is required.
"""
