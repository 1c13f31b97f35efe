"""Client configuration with environment variable loading.

Pydantic-based settings for talking to the LexAI backend.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the backend clients.

    Attributes:
        base_url: Backend root URL, without trailing slash.
        query_path: Path of the streaming answer endpoint.
        stream_timeout: Seconds httpx waits on connect and on each read.
            A stalled answer stream fails once this elapses.
        page_size: Documents requested per listing page.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("LEXAI_BASE_URL", "http://localhost:8000"),
        description="Backend root URL",
    )
    query_path: str = Field(
        default="/llama/query",
        description="Streaming answer endpoint path",
    )
    stream_timeout: float = Field(
        default_factory=lambda: float(os.getenv("LEXAI_STREAM_TIMEOUT", "120")),
        gt=0.0,
        description="Connect/read timeout in seconds",
    )
    page_size: int = Field(
        default_factory=lambda: int(os.getenv("LEXAI_PAGE_SIZE", "10")),
        ge=1,
        le=100,
        description="Documents per listing page",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("LEXAI_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("query_path")
    @classmethod
    def validate_query_path(cls, v: str) -> str:
        """Ensure the path is absolute."""
        v = v.strip()
        return v if v.startswith("/") else f"/{v}"

    @property
    def query_url(self) -> str:
        return f"{self.base_url}{self.query_path}"

    def url(self, path: str) -> str:
        """Join a backend path onto base_url."""
        return f"{self.base_url}/{path.lstrip('/')}"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ClientConfig()
