"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShorterArguments(BaseModel):
    """Parameters of a create request, from the query string or a form body."""

    token: Optional[str] = Field(None, description="Bearer token allowed to write")
    path: Optional[str] = Field(None, description="Requested path; random when empty")
    url: Optional[str] = Field(None, description="Percent-encoded target URL")
    seconds: Optional[int] = Field(None, description="Lifetime in seconds (alias: ttl)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "token": "validtoken",
                    "path": None,
                    "url": "http%3A%2F%2Fexample.com",
                    "seconds": None,
                },
                {
                    "token": "validtoken",
                    "path": "custom",
                    "url": "https://github.com/user/repo",
                    "seconds": 3600,
                },
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
