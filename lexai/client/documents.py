"""Document management client.

Wraps the authenticated document endpoints: paginated listing, multipart
upload and delete. Search and type filtering run locally over the page that was
fetched; pagination itself is server driven.
"""

import logging
from collections import Counter
from pathlib import PurePath

import httpx

from lexai.client.auth import AuthenticationError, TokenStore
from lexai.client.config import ClientConfig, get_client_config
from lexai.client.transport import LexAIClientError, open_client
from lexai.models.schemas import (
    DocType,
    Document,
    DocumentPage,
    DocumentStatus,
    DocumentUpload,
)

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".pdf", ".csv"})
ALLOWED_CONTENT_TYPES = frozenset({"application/pdf", "text/csv"})


class DocumentValidationError(LexAIClientError):
    """Raised when an upload is rejected before it is sent."""


class DocumentServiceError(LexAIClientError):
    """Raised when the document service fails a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _validate_file(filename: str | None, content: bytes, content_type: str | None) -> str:
    """Validate an upload's name, type and content.

    Args:
        filename: The selected filename.
        content: File bytes.
        content_type: MIME type reported by the picker, if any.

    Returns:
        The validated filename.

    Raises:
        DocumentValidationError: If the file is missing, empty or not PDF/CSV.
    """
    if not filename:
        raise DocumentValidationError("Filename is required")

    extension = PurePath(filename).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS and content_type not in ALLOWED_CONTENT_TYPES:
        raise DocumentValidationError("Please select only PDF or CSV files")

    if not content:
        raise DocumentValidationError("Empty file provided")

    return filename


def _guess_content_type(filename: str, content_type: str | None) -> str:
    if content_type:
        return content_type
    return "text/csv" if filename.lower().endswith(".csv") else "application/pdf"


class DocumentsClient:
    """Client for the /llama document endpoints.

    Shares its TokenStore with AuthClient. A 401 clears the token so the caller
    can send the user back to login.
    """

    def __init__(
        self,
        tokens: TokenStore,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._tokens = tokens
        self._config = config or get_client_config()
        self._client = client

    def _check_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self._tokens.clear()
            raise AuthenticationError("Session expired. Please login again.")

    async def list_documents(self, page: int = 1, page_size: int | None = None) -> DocumentPage:
        """Fetch one page of documents.

        Args:
            page: 1-based page number.
            page_size: Documents per page. Defaults to config.page_size.

        Returns:
            DocumentPage with documents and pagination totals.

        Raises:
            AuthenticationError: No token, or the backend rejected it.
            DocumentServiceError: Transport failure or other non-2xx status.
        """
        headers = self._tokens.auth_headers()
        params = {"page": page, "page_size": page_size or self._config.page_size}

        try:
            async with open_client(self._config, self._client) as client:
                response = await client.get(
                    self._config.url("/llama/documents"), params=params, headers=headers
                )
        except httpx.HTTPError as e:
            logger.error(f"Error fetching documents: {e}")
            raise DocumentServiceError("Failed to load documents. Please try again.") from e

        self._check_unauthorized(response)
        if not response.is_success:
            logger.error(f"Failed to fetch documents: {response.status_code}")
            raise DocumentServiceError(
                "Failed to load documents. Please try again.", response.status_code
            )

        return DocumentPage.model_validate(response.json())

    async def upload_document(
        self,
        filename: str | None,
        content: bytes,
        upload: DocumentUpload,
        content_type: str | None = None,
    ) -> dict:
        """Upload a PDF or CSV document with its metadata.

        Args:
            filename: Original filename.
            content: File bytes.
            upload: Title, description and document type.
            content_type: Optional MIME type.

        Returns:
            The backend's JSON response, or an empty dict if it sent none.

        Raises:
            DocumentValidationError: Invalid file.
            AuthenticationError: No token, or the backend rejected it.
            DocumentServiceError: Transport failure or other non-2xx status.
        """
        filename = _validate_file(filename, content, content_type)
        headers = self._tokens.auth_headers()
        files = {"file": (filename, content, _guess_content_type(filename, content_type))}
        data = {
            "title": upload.title,
            "description": upload.description,
            "doc_type": upload.doc_type.value,
        }

        try:
            async with open_client(self._config, self._client) as client:
                response = await client.post(
                    self._config.url("/llama/upload"), files=files, data=data, headers=headers
                )
        except httpx.HTTPError as e:
            logger.error(f"Upload error for {filename}: {e}")
            raise DocumentServiceError("Failed to upload document. Please try again.") from e

        self._check_unauthorized(response)
        if not response.is_success:
            logger.error(f"Upload failed for {filename}: {response.status_code}")
            raise DocumentServiceError(
                "Failed to upload document. Please try again.", response.status_code
            )

        logger.info(f"Uploaded document: {filename} ({len(content)} bytes)")
        if not response.content:
            return {}
        return response.json()

    async def delete_document(self, document_id: int) -> bool:
        """Delete a document by id.

        Deleting an id that no longer exists is not an error.

        Returns:
            True if the backend deleted it, False if it was already gone.

        Raises:
            AuthenticationError: No token, or the backend rejected it.
            DocumentServiceError: Transport failure or other non-2xx status.
        """
        headers = self._tokens.auth_headers()

        try:
            async with open_client(self._config, self._client) as client:
                response = await client.delete(
                    self._config.url(f"/deleteDocument/{document_id}"), headers=headers
                )
        except httpx.HTTPError as e:
            logger.error(f"Error deleting document {document_id}: {e}")
            raise DocumentServiceError("Failed to delete document. Please try again.") from e

        self._check_unauthorized(response)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(f"Document {document_id} already deleted")
            return False
        if not response.is_success:
            logger.error(f"Failed to delete document {document_id}: {response.status_code}")
            raise DocumentServiceError(
                "Failed to delete document. Please try again.", response.status_code
            )

        logger.info(f"Deleted document {document_id}")
        return True


def filter_documents(
    documents: list[Document],
    search: str = "",
    doc_type: DocType | None = None,
) -> list[Document]:
    """Filter the fetched page by search text and document type.

    Only the documents passed in are considered, so results are scoped to the
    current page.

    Args:
        documents: Documents of the current page.
        search: Case-insensitive substring matched against title and description.
        doc_type: Keep only this type. None keeps all.

    Returns:
        Matching documents in their original order.
    """
    term = search.strip().lower()
    return [
        doc
        for doc in documents
        if (not term or term in doc.title.lower() or term in doc.description.lower())
        and (doc_type is None or doc.doc_type == doc_type)
    ]


def count_by_status(documents: list[Document]) -> dict[DocumentStatus, int]:
    """Count documents per processing status, including zero counts."""
    counts = Counter(doc.status for doc in documents)
    return {status: counts.get(status, 0) for status in DocumentStatus}


def page_window(page: int, page_size: int, total: int) -> tuple[int, int]:
    """Return the 1-based (first, last) document numbers shown on a page."""
    if total <= 0:
        return (0, 0)
    first = (page - 1) * page_size + 1
    return (min(first, total), min(page * page_size, total))
