"""Configuration for the A2A client.

Everything is passed in explicitly by the embedding application; nothing is
read from the environment or from files.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ClientConfig(BaseModel):
    """Connection settings for one A2A endpoint."""

    url: str
    timeout: float | None = Field(default=None, gt=0)
    verify_ssl: bool = True
    follow_redirects: bool = True
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate and normalize URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")
