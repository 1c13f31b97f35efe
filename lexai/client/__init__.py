"""HTTP clients for the LexAI backend.

Endpoints:
    - POST /auth/login, POST /auth/signup: Account access
    - GET /llama/documents: Paginated document listing
    - POST /llama/upload: Multipart document upload
    - DELETE /deleteDocument/{id}: Document removal

The streaming answer endpoint is consumed by lexai.chat.
"""

from lexai.client.auth import AuthClient, AuthenticationError, TokenStore
from lexai.client.config import ClientConfig, get_client_config
from lexai.client.documents import (
    DocumentsClient,
    DocumentServiceError,
    DocumentValidationError,
    count_by_status,
    filter_documents,
    page_window,
)
from lexai.client.transport import LexAIClientError

__all__ = [
    "AuthClient",
    "AuthenticationError",
    "ClientConfig",
    "DocumentServiceError",
    "DocumentValidationError",
    "DocumentsClient",
    "LexAIClientError",
    "TokenStore",
    "count_by_status",
    "filter_documents",
    "get_client_config",
    "page_window",
]
