"""Pytest fixtures and shared test configuration.

Provides a fake LexAI backend and clients wired to it.

Fixtures:
    - config: ClientConfig pointing at the fake backend
    - backend: FastAPI app imitating the query, auth and document endpoints
    - http_client: HTTPX client routed to the backend through ASGITransport
    - tokens: Empty TokenStore shared by auth and document clients
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI, File, Form, Header, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse, StreamingResponse
from httpx import ASGITransport, AsyncClient

from lexai.client.auth import TokenStore
from lexai.client.config import ClientConfig
from lexai.models.schemas import Credentials, QueryRequest

VALID_USER = Credentials(username="alice", password="secret")
VALID_TOKEN = "token-abc"

ANSWERS: dict[str, list[bytes]] = {
    "What is the answer?": [b"The ", b"answer ", b"is 42."],
    # "é" split across two chunks
    "Café?": [b"Caf", b"\xc3", b"\xa9 au lait."],
}

DOC_TYPES = ["contract", "legal_brief", "case_study", "compliance", "research", "other"]


def _seed_documents(count: int) -> list[dict]:
    return [
        {
            "id": i,
            "title": f"Document {i}",
            "description": "Lease agreement" if i % 2 else "Court filing",
            "doc_type": DOC_TYPES[i % len(DOC_TYPES)],
            "file_name": f"doc-{i}.pdf",
            "file_size": 1024 * i,
            "upload_date": "2024-05-01T10:00:00",
            "status": "Processed" if i % 3 else "Processing",
        }
        for i in range(1, count + 1)
    ]


def create_fake_backend(document_count: int = 23) -> FastAPI:
    """Build a FastAPI app that behaves like the LexAI backend."""
    app = FastAPI()
    documents = _seed_documents(document_count)

    def require_token(authorization: str | None) -> None:
        if authorization != f"Bearer {VALID_TOKEN}":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    @app.post("/llama/query")
    async def query(request: QueryRequest) -> StreamingResponse:
        if request.question == "fail":
            raise HTTPException(status_code=500, detail="model crashed")

        chunks = ANSWERS.get(request.question, [b"No answer."])

        async def body() -> AsyncGenerator[bytes]:
            for chunk in chunks:
                yield chunk

        return StreamingResponse(body(), media_type="text/plain; charset=utf-8")

    @app.post("/auth/login")
    async def login(credentials: Credentials) -> dict:
        if credentials.username == "notoken":
            return {}
        if credentials != VALID_USER:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return {"access_token": VALID_TOKEN, "token_type": "bearer"}

    @app.post("/auth/signup", status_code=201)
    async def signup(credentials: Credentials) -> JSONResponse:
        if credentials.username == "taken":
            return JSONResponse({"message": "Username already exists"}, status_code=400)
        return JSONResponse({"username": credentials.username}, status_code=201)

    @app.get("/llama/documents")
    async def list_documents(
        page: int = 1,
        page_size: int = 10,
        authorization: str | None = Header(None),
    ) -> dict:
        require_token(authorization)
        start = (page - 1) * page_size
        return {
            "documents": documents[start : start + page_size],
            "total": len(documents),
            "page": page,
            "page_size": page_size,
            "pages": -(-len(documents) // page_size),
        }

    @app.post("/llama/upload")
    async def upload(
        file: UploadFile = File(...),
        title: str = Form(...),
        description: str = Form(...),
        doc_type: str = Form(...),
        authorization: str | None = Header(None),
    ) -> dict:
        require_token(authorization)
        content = await file.read()
        document = {
            "id": max((d["id"] for d in documents), default=0) + 1,
            "title": title,
            "description": description,
            "doc_type": doc_type,
            "file_name": file.filename,
            "file_size": len(content),
            "upload_date": "2024-05-02T09:30:00",
            "status": "Processing",
        }
        documents.append(document)
        return document

    @app.delete("/deleteDocument/{document_id}")
    async def delete(document_id: int, authorization: str | None = Header(None)) -> dict:
        require_token(authorization)
        for document in documents:
            if document["id"] == document_id:
                documents.remove(document)
                return {"deleted": document_id}
        raise HTTPException(status_code=404, detail="Not found")

    return app


@pytest.fixture
def config() -> ClientConfig:
    """Return configuration pointing at the fake backend."""
    return ClientConfig(base_url="http://test", stream_timeout=5.0, page_size=10)


@pytest.fixture
def backend() -> FastAPI:
    return create_fake_backend()


@pytest.fixture
async def http_client(backend: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client routed to the fake backend.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=backend)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def tokens() -> TokenStore:
    return TokenStore()
